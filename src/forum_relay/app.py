"""FastAPI application with lifespan, index, health and security info endpoints."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from forum_relay.config import get_settings
from forum_relay.diagnostics.router import require_non_production
from forum_relay.diagnostics.router import router as diagnostics_router
from forum_relay.logging_config import configure_logging
from forum_relay.napcat.notifier import is_configured
from forum_relay.webhook.router import router as webhook_router
from forum_relay.webhook.security import get_webhook_token, secure_webhook_endpoints

logger = logging.getLogger(__name__)

SERVICE_NAME = "forum-relay"
VERSION = "0.1.0"

_started_at = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, load config, report missing settings."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings

    get_webhook_token()
    if not settings.is_production:
        logger.info("Secure webhook endpoints", extra={"endpoints": secure_webhook_endpoints()})

    missing = settings.missing_required()
    if missing:
        logger.warning(
            "QQ bot is not configured, missing environment variables: %s",
            ", ".join(missing),
        )
    else:
        logger.info("QQ bot configured")
    yield


app = FastAPI(
    title="Forum Relay",
    lifespan=lifespan,
)
app.include_router(webhook_router)
app.include_router(diagnostics_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 for anything the routes did not handle."""
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
    detail = "Please retry later" if get_settings().is_production else str(exc)
    return JSONResponse(
        {"error": "Internal server error", "message": detail},
        status_code=500,
    )


def _endpoint_paths() -> dict[str, str]:
    """Webhook paths, with the token masked in production."""
    endpoints = secure_webhook_endpoints()
    if get_settings().is_production:
        token = get_webhook_token()
        return {name: path.replace(token, "{token}") for name, path in endpoints.items()}
    return endpoints


@app.get("/")
async def index():
    """Service banner listing the available endpoints."""
    endpoints = _endpoint_paths()
    return {
        "message": "Forum Relay QQ bot",
        "status": "running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": [
            f"POST {endpoints['userPost']} - user post approval notification",
            f"POST {endpoints['adminPost']} - admin post approval notification",
            f"POST {endpoints['userReply']} - user reply notification",
            f"POST {endpoints['generic']} - any forum notification (auto-detected)",
            "GET /health - health check",
            "GET /security/info - security configuration",
        ],
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": VERSION,
        "uptime": round(time.monotonic() - _started_at, 3),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "qq_bot": "configured" if is_configured() else "not configured",
        "security": "enabled",
    }


@app.get("/security/info", dependencies=[Depends(require_non_production)])
async def security_info():
    """Show the webhook token and secure endpoints to configure in the forum."""
    return {
        "message": "Security configuration",
        "webhook_token": get_webhook_token(),
        "secure_endpoints": secure_webhook_endpoints(),
        "note": "Configure these URLs in the forum webhook settings",
    }
