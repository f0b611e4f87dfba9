"""NapCat egress: message rendering, the HTTP client, and group notifications."""

from forum_relay.napcat.formatter import clean_content, render
from forum_relay.napcat.notifier import (
    check_connection,
    is_configured,
    send_forum_message,
    send_to_group,
)

__all__ = [
    "check_connection",
    "clean_content",
    "is_configured",
    "render",
    "send_forum_message",
    "send_to_group",
]
