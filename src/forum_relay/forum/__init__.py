"""Forum webhook parsing: validation, classification, and field extraction."""

from forum_relay.forum.parser import (
    classify,
    extract,
    load_webhook,
    parse,
    parse_admin_post_approval,
    parse_user_post_approval,
    parse_user_reply,
    validate,
)

__all__ = [
    "classify",
    "extract",
    "load_webhook",
    "parse",
    "parse_admin_post_approval",
    "parse_user_post_approval",
    "parse_user_reply",
    "validate",
]
