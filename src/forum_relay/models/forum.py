"""Forum event kinds and the normalized event record."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

UNKNOWN_AUTHOR = "未知用户"


class ForumEventType(str, Enum):
    """Kinds of forum activity the relay understands."""

    USER_POST_APPROVAL = "user_post_approval"
    ADMIN_POST_APPROVAL = "admin_post_approval"
    USER_REPLY = "user_reply"


class ForumEvent(BaseModel):
    """A forum event extracted from a webhook payload. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    kind: ForumEventType
    title: str  # Text captured between backticks in the attachment title
    author: str = UNKNOWN_AUTHOR
    link: str = ""
    content: str = ""
    is_approval: bool = False
