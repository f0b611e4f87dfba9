"""Manual test endpoints for checking the bot and the webhook routes."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from forum_relay.config import get_settings
from forum_relay.forum.samples import SAMPLES
from forum_relay.napcat.notifier import check_connection, send_to_group
from forum_relay.webhook.handlers import process_forum_webhook
from forum_relay.webhook.security import get_webhook_token

router = APIRouter(prefix="/test", tags=["test"])

SECURE_ENDPOINTS = {
    "user-post": "forum/user",
    "admin-approval": "forum/admin",
    "user-reply": "forum/reply",
}


class SendMessageRequest(BaseModel):
    message: str = ""


async def require_non_production() -> None:
    """Hide token-revealing endpoints in production."""
    if get_settings().is_production:
        raise HTTPException(status_code=404, detail="Not Found")


@router.get("/connection")
async def connection_test() -> JSONResponse:
    if await check_connection():
        return JSONResponse({"success": True, "message": "QQ bot connection test succeeded"})
    return JSONResponse(
        {"success": False, "message": "QQ bot connection test failed"},
        status_code=500,
    )


@router.post("/message")
async def send_test_message(body: SendMessageRequest | None = None) -> JSONResponse:
    """Send arbitrary text to the group."""
    if body is None or not body.message:
        return JSONResponse(
            {
                "error": "Please provide the test message content",
                "example": {"message": "这是一条测试消息"},
            },
            status_code=400,
        )

    if await send_to_group(body.message):
        return JSONResponse({"success": True, "message": "Test message sent"})
    return JSONResponse(
        {"success": False, "message": "Failed to send test message"},
        status_code=500,
    )


@router.post("/webhook/{sample_type}")
async def simulate_webhook(sample_type: str) -> JSONResponse:
    """Run a built-in sample payload through the matching webhook handler."""
    sample = SAMPLES.get(sample_type)
    if sample is None:
        return JSONResponse(
            {"error": "Unsupported message type", "supportedTypes": list(SAMPLES)},
            status_code=400,
        )

    kind, build_payload = sample
    payload = build_payload()
    status_code, result = await process_forum_webhook(payload, kind)

    if status_code == 200:
        return JSONResponse(
            {
                "success": True,
                "message": f"Simulated {sample_type} webhook processed",
                "result": result,
                "mockData": payload,
            }
        )
    return JSONResponse(
        {
            "success": False,
            "message": f"Simulated {sample_type} webhook failed",
            "error": result,
            "mockData": payload,
        },
        status_code=status_code,
    )


@router.get("/secure/{sample_type}", dependencies=[Depends(require_non_production)])
async def secure_webhook_info(sample_type: str, request: Request) -> JSONResponse:
    """Show the full token-bearing URL for a webhook route."""
    endpoint = SECURE_ENDPOINTS.get(sample_type)
    if endpoint is None:
        return JSONResponse(
            {"error": "Unsupported endpoint type", "supportedTypes": list(SECURE_ENDPOINTS)},
            status_code=400,
        )

    token = get_webhook_token()
    base_url = str(request.base_url).rstrip("/")
    url = f"{base_url}/webhook/{token}/{endpoint}"
    return JSONResponse(
        {
            "message": "Secure webhook endpoint",
            "type": sample_type,
            "endpoint": url,
            "token": token,
            "note": "Configure this URL in the forum webhook settings",
            "curlExample": (
                f"curl -X POST {url} -H \"Content-Type: application/json\" -d '{{\"test\": \"data\"}}'"
            ),
        }
    )
