"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from forum_relay.app import app
from forum_relay.config import get_settings
from forum_relay.webhook.router import RATE_LIMITERS
from forum_relay.webhook.security import reset_webhook_token

TEST_TOKEN = "test-webhook-token"
TEST_NAPCAT_URL = "http://napcat.test"
TEST_GROUP_ID = "123456789"


@pytest.fixture(autouse=True)
def _test_settings(monkeypatch: pytest.MonkeyPatch):
    """Pin settings to a known configuration and clear cached singletons."""
    monkeypatch.setenv("NAPCAT_URL", TEST_NAPCAT_URL)
    monkeypatch.setenv("QQ_GROUP_ID", TEST_GROUP_ID)
    monkeypatch.setenv("NAPCAT_ACCESS_TOKEN", "")
    monkeypatch.setenv("WEBHOOK_TOKEN", TEST_TOKEN)
    monkeypatch.setenv("ENVIRONMENT", "development")
    get_settings.cache_clear()
    reset_webhook_token()
    for limiter in RATE_LIMITERS:
        limiter.reset()
    yield
    get_settings.cache_clear()
    reset_webhook_token()


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)
