"""Tests for webhook token handling and the fixed-window rate limiter."""

import pytest
from fastapi.testclient import TestClient

from forum_relay.config import get_settings
from forum_relay.webhook.security import (
    RateLimiter,
    get_webhook_token,
    reset_webhook_token,
    secure_webhook_endpoints,
)


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


# -- token --


def test_configured_token_is_used():
    assert get_webhook_token() == "test-webhook-token"


def test_missing_token_is_generated_once(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WEBHOOK_TOKEN", "")
    get_settings.cache_clear()
    reset_webhook_token()

    token = get_webhook_token()

    assert len(token) == 32
    int(token, 16)  # hex
    assert get_webhook_token() == token


def test_secure_endpoints_embed_token():
    assert secure_webhook_endpoints() == {
        "userPost": "/webhook/test-webhook-token/forum/user",
        "adminPost": "/webhook/test-webhook-token/forum/admin",
        "userReply": "/webhook/test-webhook-token/forum/reply",
        "generic": "/webhook/test-webhook-token/forum",
    }


def test_wrong_token_returns_403(client: TestClient):
    response = client.post("/webhook/wrong-token/forum/user", json={})
    assert response.status_code == 403
    assert response.json()["detail"] == "Invalid webhook token"


def test_wrong_token_checked_before_body(client: TestClient):
    """An invalid body does not reveal anything without the token."""
    response = client.post(
        "/webhook/wrong-token/forum",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 403


# -- RateLimiter --


def test_rate_limiter_allows_up_to_limit():
    limiter = RateLimiter(window_seconds=60, max_requests=3, timer=FakeClock())
    assert [limiter.hit("1.2.3.4") for _ in range(3)] == [None, None, None]


def test_rate_limiter_blocks_over_limit_with_retry_after():
    clock = FakeClock()
    limiter = RateLimiter(window_seconds=60, max_requests=2, timer=clock)
    limiter.hit("1.2.3.4")
    limiter.hit("1.2.3.4")

    clock.now = 15.0
    assert limiter.hit("1.2.3.4") == pytest.approx(45.0)


def test_rate_limiter_keys_are_independent():
    limiter = RateLimiter(window_seconds=60, max_requests=1, timer=FakeClock())
    assert limiter.hit("1.1.1.1") is None
    assert limiter.hit("2.2.2.2") is None
    assert limiter.hit("1.1.1.1") is not None


def test_rate_limiter_window_is_fixed():
    """Requests inside the window do not extend it."""
    clock = FakeClock()
    limiter = RateLimiter(window_seconds=60, max_requests=2, timer=clock)
    limiter.hit("ip")
    clock.now = 50.0
    limiter.hit("ip")
    assert limiter.hit("ip") is not None

    clock.now = 61.0
    assert limiter.hit("ip") is None


def test_rate_limiter_reset():
    limiter = RateLimiter(window_seconds=60, max_requests=1, timer=FakeClock())
    limiter.hit("ip")
    limiter.reset()
    assert limiter.hit("ip") is None


def test_rate_limited_route_returns_429(client: TestClient):
    """The 21st request within a minute to the user route is rejected."""
    url = f"/webhook/{get_webhook_token()}/forum/user"
    for _ in range(20):
        assert client.post(url, json={}).status_code == 400

    response = client.post(url, json={})
    assert response.status_code == 429
    assert int(response.headers["Retry-After"]) > 0


def test_rate_limits_are_per_route(client: TestClient):
    user_url = f"/webhook/{get_webhook_token()}/forum/user"
    for _ in range(20):
        client.post(user_url, json={})
    assert client.post(user_url, json={}).status_code == 429

    reply_url = f"/webhook/{get_webhook_token()}/forum/reply"
    assert client.post(reply_url, json={}).status_code == 400
