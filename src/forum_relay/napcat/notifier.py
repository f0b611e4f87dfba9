"""Deliver rendered forum notifications to the configured QQ group.

All send functions report the outcome as a bool: they catch and log transport
and protocol errors but never raise, so a failed delivery only fails the
request that triggered it. Nothing is retried.
"""

import logging
from datetime import datetime

import httpx

from forum_relay.config import get_settings
from forum_relay.models.forum import ForumEvent
from forum_relay.napcat.client import send_group_msg
from forum_relay.napcat.formatter import render

logger = logging.getLogger(__name__)


def is_configured() -> bool:
    """True when both the NapCat base URL and the target group id are non-blank."""
    settings = get_settings()
    return bool(settings.napcat_url.strip() and settings.qq_group_id.strip())


async def send_to_group(text: str) -> bool:
    """Send a plain text message to the configured group.

    Returns True only if the HTTP call succeeds and NapCat answers with
    ``status == "ok"`` and ``retcode == 0``.
    """
    if not is_configured():
        logger.error("QQ bot is not configured, message not sent")
        return False

    settings = get_settings()
    try:
        result = await send_group_msg(settings.qq_group_id, text)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        logger.error("Failed to send group message: %s", exc, exc_info=True)
        return False

    if result.ok:
        logger.info("Group message sent", extra={"message_id": result.message_id})
        return True

    logger.error(
        "NapCat rejected group message",
        extra={
            "status": result.status,
            "retcode": result.retcode,
            "wording": result.wording or result.message,
        },
    )
    return False


async def send_forum_message(event: ForumEvent) -> bool:
    """Render a forum event and send it to the configured group."""
    text = render(event)
    logger.info(
        "Sending forum notification",
        extra={"kind": event.kind.value, "title": event.title},
    )
    return await send_to_group(text)


async def check_connection() -> bool:
    """Send a timestamped self-test message to the group."""
    if not is_configured():
        logger.error("QQ bot is not configured, connection test skipped")
        return False

    now = datetime.now().strftime("%Y/%m/%d %H:%M:%S")
    return await send_to_group(f"🤖 论坛机器人连接测试 - {now}")
