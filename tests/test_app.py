"""Tests for app-level endpoints, lifespan, and error handling."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from forum_relay.app import app
from forum_relay.config import get_settings


@pytest.fixture
def production(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    get_settings.cache_clear()


def test_index_lists_secure_endpoints(client: TestClient):
    body = client.get("/").json()
    assert body["status"] == "running"
    assert any("/webhook/test-webhook-token/forum/user" in e for e in body["endpoints"])
    assert any(e.startswith("GET /health") for e in body["endpoints"])


def test_index_masks_token_in_production(client: TestClient, production):
    body = client.get("/").json()
    assert all("test-webhook-token" not in e for e in body["endpoints"])
    assert any("/webhook/{token}/forum/reply" in e for e in body["endpoints"])


def test_security_info(client: TestClient):
    response = client.get("/security/info")
    assert response.status_code == 200
    body = response.json()
    assert body["webhook_token"] == "test-webhook-token"
    assert body["secure_endpoints"]["generic"] == "/webhook/test-webhook-token/forum"


def test_security_info_hidden_in_production(client: TestClient, production):
    assert client.get("/security/info").status_code == 404


def test_unknown_route_returns_404(client: TestClient):
    assert client.get("/does-not-exist").status_code == 404


def test_unhandled_error_returns_json_500():
    """Unexpected exceptions become a JSON 500 with the detail in development."""
    with patch(
        "forum_relay.webhook.handlers.load_webhook", side_effect=RuntimeError("boom")
    ):
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post("/webhook/test-webhook-token/forum", json={})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "message": "boom"}


def test_unhandled_error_hides_detail_in_production(production):
    with patch(
        "forum_relay.webhook.handlers.load_webhook", side_effect=RuntimeError("boom")
    ):
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post("/webhook/test-webhook-token/forum", json={})

    assert response.status_code == 500
    assert response.json()["message"] == "Please retry later"


@patch("forum_relay.app.configure_logging")
def test_lifespan_configures_logging_and_warns_on_missing_config(
    mock_configure: MagicMock, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
):
    monkeypatch.setenv("NAPCAT_URL", "")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()

    with caplog.at_level("WARNING", logger="forum_relay.app"):
        with TestClient(app):
            pass

    mock_configure.assert_called_once_with("DEBUG")
    assert "NAPCAT_URL" in caplog.text
