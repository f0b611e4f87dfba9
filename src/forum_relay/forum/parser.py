"""Classification and field extraction for forum webhook payloads.

Classification uses loose substring checks on the first attachment's title;
extraction then applies a strict, kind-specific pattern that captures the
backtick-delimited post title. A title can therefore classify successfully and
still fail extraction. Every failure is logged and returned as None.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from forum_relay.models.forum import UNKNOWN_AUTHOR, ForumEvent, ForumEventType
from forum_relay.models.webhook import SlackWebhookMessage

logger = logging.getLogger(__name__)

# Checked in order; first match wins
CLASSIFICATION_MARKERS: tuple[tuple[str, ForumEventType], ...] = (
    ("发布主题", ForumEventType.USER_POST_APPROVAL),
    ("审核通过的帖子", ForumEventType.ADMIN_POST_APPROVAL),
    ("新回复于", ForumEventType.USER_REPLY),
)

TITLE_PATTERNS: dict[ForumEventType, re.Pattern[str]] = {
    # 发布主题 `帖子标题`
    ForumEventType.USER_POST_APPROVAL: re.compile(r"发布主题\s*`([^`]+)`"),
    # 在 `帖子标题` 中审核通过的帖子
    ForumEventType.ADMIN_POST_APPROVAL: re.compile(r"在\s*`([^`]+)`\s*中审核通过的帖子"),
    # 新回复于 `帖子标题`
    ForumEventType.USER_REPLY: re.compile(r"新回复于\s*`([^`]+)`"),
}


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def validate(payload: Any) -> bool:
    """Check that a raw payload has the fields every extraction relies on.

    Requires non-empty ``username`` and ``avatar_url``, and a non-empty
    ``attachments`` list whose first item has non-empty ``title``,
    ``author_name`` and ``title_link``.
    """
    if not isinstance(payload, Mapping):
        return False

    if not (_non_empty_str(payload.get("username")) and _non_empty_str(payload.get("avatar_url"))):
        return False

    attachments = payload.get("attachments")
    if not isinstance(attachments, list) or not attachments:
        return False

    attachment = attachments[0]
    if not isinstance(attachment, Mapping):
        return False

    return all(
        _non_empty_str(attachment.get(key)) for key in ("title", "author_name", "title_link")
    )


def load_webhook(payload: Any) -> SlackWebhookMessage | None:
    """Validate a raw payload and build the webhook model, or return None.

    Only the first attachment is kept; later ones are never read.
    """
    if not validate(payload):
        logger.warning("Webhook payload failed shape validation")
        return None
    return SlackWebhookMessage.model_validate(
        {**payload, "attachments": payload["attachments"][:1]}
    )


def classify(title: str) -> ForumEventType | None:
    """Return the event kind whose marker phrase appears in the title."""
    for marker, kind in CLASSIFICATION_MARKERS:
        if marker in title:
            return kind
    return None


def extract(kind: ForumEventType, webhook: SlackWebhookMessage) -> ForumEvent | None:
    """Build a ForumEvent of the given kind from the first attachment.

    Returns None when there is no attachment or when the title does not match
    the kind's strict pattern.
    """
    if not webhook.attachments:
        logger.warning("Webhook message has no attachments", extra={"kind": kind.value})
        return None

    attachment = webhook.attachments[0]
    match = TITLE_PATTERNS[kind].search(attachment.title or "")
    if match is None:
        logger.warning(
            "Could not extract post title for %s: %r", kind.value, attachment.title
        )
        return None

    return ForumEvent(
        kind=kind,
        title=match.group(1),
        author=attachment.author_name or UNKNOWN_AUTHOR,
        link=attachment.title_link or "",
        content=attachment.text or "",
        is_approval=kind == ForumEventType.ADMIN_POST_APPROVAL,
    )


def parse(webhook: SlackWebhookMessage) -> ForumEvent | None:
    """Classify the webhook by its attachment title and extract the event."""
    if not webhook.attachments:
        logger.warning("Webhook message has no attachments")
        return None

    title = webhook.attachments[0].title or ""
    kind = classify(title)
    if kind is None:
        logger.warning("Unknown forum message type: %r", title)
        return None
    return extract(kind, webhook)


def parse_user_post_approval(webhook: SlackWebhookMessage) -> ForumEvent | None:
    """Parse a "topic published" notification."""
    return extract(ForumEventType.USER_POST_APPROVAL, webhook)


def parse_admin_post_approval(webhook: SlackWebhookMessage) -> ForumEvent | None:
    """Parse an "approved post within" notification sent with admin permissions."""
    return extract(ForumEventType.ADMIN_POST_APPROVAL, webhook)


def parse_user_reply(webhook: SlackWebhookMessage) -> ForumEvent | None:
    """Parse a "new reply to" notification."""
    return extract(ForumEventType.USER_REPLY, webhook)


KIND_PARSERS = {
    ForumEventType.USER_POST_APPROVAL: parse_user_post_approval,
    ForumEventType.ADMIN_POST_APPROVAL: parse_admin_post_approval,
    ForumEventType.USER_REPLY: parse_user_reply,
}
