"""Forum webhook routes guarded by rate limiting and the path token."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from forum_relay.models.forum import ForumEventType
from forum_relay.webhook.handlers import handle_forum_webhook, read_json_body
from forum_relay.webhook.security import RateLimiter, verify_webhook_token

router = APIRouter(prefix="/webhook/{token}", tags=["webhook"])

# One minute windows; replies arrive more often than new topics
post_limiter = RateLimiter(window_seconds=60, max_requests=20)
admin_limiter = RateLimiter(window_seconds=60, max_requests=20)
reply_limiter = RateLimiter(window_seconds=60, max_requests=50)
generic_limiter = RateLimiter(window_seconds=60, max_requests=50)

RATE_LIMITERS = (post_limiter, admin_limiter, reply_limiter, generic_limiter)


@router.post(
    "/forum/user",
    dependencies=[Depends(post_limiter), Depends(verify_webhook_token)],
)
async def user_post_approval(payload: Any = Depends(read_json_body)) -> JSONResponse:
    """Topic published by a user (forum webhook with user permissions)."""
    return await handle_forum_webhook(payload, ForumEventType.USER_POST_APPROVAL)


@router.post(
    "/forum/admin",
    dependencies=[Depends(admin_limiter), Depends(verify_webhook_token)],
)
async def admin_post_approval(payload: Any = Depends(read_json_body)) -> JSONResponse:
    """Post approved by a moderator (forum webhook with admin permissions)."""
    return await handle_forum_webhook(payload, ForumEventType.ADMIN_POST_APPROVAL)


@router.post(
    "/forum/reply",
    dependencies=[Depends(reply_limiter), Depends(verify_webhook_token)],
)
async def user_reply(payload: Any = Depends(read_json_body)) -> JSONResponse:
    """New reply to a discussion."""
    return await handle_forum_webhook(payload, ForumEventType.USER_REPLY)


@router.post(
    "/forum",
    dependencies=[Depends(generic_limiter), Depends(verify_webhook_token)],
)
async def generic_forum_event(payload: Any = Depends(read_json_body)) -> JSONResponse:
    """Any forum event; the kind is detected from the attachment title."""
    return await handle_forum_webhook(payload)
