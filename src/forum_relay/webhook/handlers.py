"""Turn forum webhook payloads into group notifications and HTTP results."""

import logging
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from forum_relay.forum.parser import KIND_PARSERS, load_webhook, parse
from forum_relay.models.forum import ForumEventType
from forum_relay.napcat.notifier import send_forum_message

logger = logging.getLogger(__name__)

SUCCESS_MESSAGES = {
    ForumEventType.USER_POST_APPROVAL: "User post approval notification sent",
    ForumEventType.ADMIN_POST_APPROVAL: "Admin post approval notification sent",
    ForumEventType.USER_REPLY: "User reply notification sent",
}
GENERIC_SUCCESS_MESSAGE = "Forum notification sent"


async def read_json_body(request: Request) -> Any:
    """Return the decoded JSON body, or raise HTTPException 400."""
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body is not valid JSON") from None


async def process_forum_webhook(
    payload: Any, kind: ForumEventType | None = None
) -> tuple[int, dict]:
    """Validate, parse and deliver one webhook payload.

    With ``kind`` set, only that kind's parser is tried; without it the kind
    is classified from the attachment title.

    Returns:
        (HTTP status code, response body). 400 for malformed or unparseable
        payloads, 500 when delivery fails, 200 otherwise.
    """
    label = kind.value if kind else "generic"
    logger.info("Received %s webhook", label, extra={"payload": payload})

    webhook = load_webhook(payload)
    if webhook is None:
        return 400, {"error": "Invalid Slack webhook payload", "received": payload}

    event = KIND_PARSERS[kind](webhook) if kind else parse(webhook)
    if event is None:
        error = "Unable to parse message content"
        if kind is None:
            error += " or unsupported message type"
        return 400, {"error": error, "webhook": payload}

    parsed = event.model_dump(mode="json")
    if not await send_forum_message(event):
        return 500, {"error": "Failed to send QQ message", "parsed": parsed}

    body: dict = {
        "success": True,
        "message": SUCCESS_MESSAGES[kind] if kind else GENERIC_SUCCESS_MESSAGE,
        "parsed": parsed,
    }
    if kind is None:
        body["type"] = event.kind.value
    return 200, body


async def handle_forum_webhook(payload: Any, kind: ForumEventType | None = None) -> JSONResponse:
    status_code, body = await process_forum_webhook(payload, kind)
    return JSONResponse(body, status_code=status_code)
