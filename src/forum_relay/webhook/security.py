"""Webhook path-token verification and per-address rate limiting.

Both are FastAPI dependencies. The webhook token is read from settings, or
generated once per process when unset, and must appear as the ``{token}``
path segment of every webhook URL.
"""

import logging
import math
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass

from cachetools import TTLCache
from fastapi import HTTPException, Request

from forum_relay.config import get_settings

logger = logging.getLogger(__name__)

_token: str | None = None

WEBHOOK_ENDPOINTS = {
    "userPost": "forum/user",
    "adminPost": "forum/admin",
    "userReply": "forum/reply",
    "generic": "forum",
}


def get_webhook_token() -> str:
    """Return the webhook token, generating a random one on first use if unset."""
    global _token
    if _token is None:
        configured = get_settings().webhook_token
        if configured:
            _token = configured
        else:
            _token = secrets.token_hex(16)
            logger.warning(
                "WEBHOOK_TOKEN is not set, using a generated token for this process"
            )
    return _token


def reset_webhook_token() -> None:
    """Forget the cached token. Used for testing."""
    global _token
    _token = None


def secure_webhook_path(endpoint: str) -> str:
    return f"/webhook/{get_webhook_token()}/{endpoint}"


def secure_webhook_endpoints() -> dict[str, str]:
    """Return the token-bearing path of every webhook route."""
    return {name: secure_webhook_path(endpoint) for name, endpoint in WEBHOOK_ENDPOINTS.items()}


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def verify_webhook_token(token: str, request: Request) -> None:
    """Reject webhook requests whose path token does not match.

    Raises HTTPException 403 on mismatch.
    """
    ip = client_address(request)
    if not secrets.compare_digest(token.encode(), get_webhook_token().encode()):
        logger.warning("Invalid webhook token from %s", ip)
        raise HTTPException(status_code=403, detail="Invalid webhook token")

    logger.info(
        "Webhook token accepted",
        extra={
            "client_ip": ip,
            "user_agent": request.headers.get("User-Agent", "Unknown"),
            "path": request.url.path,
        },
    )


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """Fixed-window request limiter keyed by client address.

    Windows live in a TTLCache whose TTL equals the window length, so expired
    addresses are pruned lazily on access. Incrementing a stored window does
    not extend its lifetime.
    """

    def __init__(
        self,
        window_seconds: float = 60.0,
        max_requests: int = 10,
        maxsize: int = 10_000,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._timer = timer
        self._windows: TTLCache = TTLCache(maxsize=maxsize, ttl=window_seconds, timer=timer)

    def hit(self, key: str) -> float | None:
        """Count a request for ``key``.

        Returns None when allowed, or the seconds until the window resets
        when the limit has been reached.
        """
        now = self._timer()
        window = self._windows.get(key)
        if window is None:
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return None

        if window.count >= self.max_requests:
            return max(window.reset_at - now, 0.0)

        window.count += 1
        return None

    def reset(self) -> None:
        self._windows.clear()

    async def __call__(self, request: Request) -> None:
        ip = client_address(request)
        retry_after = self.hit(ip)
        if retry_after is None:
            return

        logger.warning(
            "Rate limit exceeded for %s (%d per %.0fs)", ip, self.max_requests, self.window_seconds
        )
        raise HTTPException(
            status_code=429,
            detail="Too many requests, please retry later",
            headers={"Retry-After": str(math.ceil(retry_after))},
        )
