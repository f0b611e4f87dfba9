"""Slack-style webhook payload models sent by the forum."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class SlackAttachment(BaseModel):
    """One attachment of a Slack webhook message. Only the first is used."""

    model_config = ConfigDict(extra="allow")

    title: str = ""  # e.g. "发布主题 `帖子标题`", used for classification
    title_link: str = ""  # Discussion or post URL, forwarded verbatim
    text: str | None = None  # Post body, null for approvals
    author_name: str = ""
    # Not consumed; accepted with whatever type the forum sends
    fallback: Any = None
    color: Any = None
    footer: Any = None
    fields: Any = None
    author_link: Any = None
    author_icon: Any = None

    @field_validator("text", mode="before")
    @classmethod
    def _body_as_text(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class SlackWebhookMessage(BaseModel):
    """Incoming webhook body in Slack incoming-webhook format."""

    model_config = ConfigDict(extra="allow")

    username: str
    avatar_url: str
    text: Any = ""
    attachments: list[SlackAttachment]
