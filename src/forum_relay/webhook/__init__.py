"""Forum webhook ingress: token verification, rate limiting, and routing."""

from forum_relay.webhook.handlers import handle_forum_webhook, process_forum_webhook
from forum_relay.webhook.router import router
from forum_relay.webhook.security import (
    RateLimiter,
    get_webhook_token,
    reset_webhook_token,
    secure_webhook_endpoints,
    verify_webhook_token,
)

__all__ = [
    "RateLimiter",
    "get_webhook_token",
    "handle_forum_webhook",
    "process_forum_webhook",
    "reset_webhook_token",
    "router",
    "secure_webhook_endpoints",
    "verify_webhook_token",
]
