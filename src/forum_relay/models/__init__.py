"""Data models and enums for the forum relay."""

from forum_relay.models.forum import UNKNOWN_AUTHOR, ForumEvent, ForumEventType
from forum_relay.models.napcat import NapCatMessage, NapCatResponse, NapCatSegment
from forum_relay.models.webhook import SlackAttachment, SlackWebhookMessage

__all__ = [
    "ForumEvent",
    "ForumEventType",
    "UNKNOWN_AUTHOR",
    "NapCatMessage",
    "NapCatResponse",
    "NapCatSegment",
    "SlackAttachment",
    "SlackWebhookMessage",
]
