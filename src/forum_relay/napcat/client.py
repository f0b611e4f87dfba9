"""Thin async client for the NapCat OneBot HTTP API.

Opens a short-lived httpx.AsyncClient per call. Transport and HTTP status
errors propagate as httpx.HTTPError and a malformed NAPCAT_URL as
httpx.InvalidURL. A body that is not a NapCat envelope raises ValueError or
pydantic.ValidationError.
"""

import httpx

from forum_relay.config import get_settings
from forum_relay.models.napcat import NapCatMessage, NapCatResponse


def _headers(access_token: str) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


async def send_group_msg(group_id: str, text: str) -> NapCatResponse:
    """POST a single text segment to ``{napcat_url}/send_group_msg``.

    Raises httpx.HTTPStatusError for non-2xx responses.
    """
    settings = get_settings()
    url = f"{settings.napcat_url.rstrip('/')}/send_group_msg"
    body = NapCatMessage.text(group_id, text)

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.napcat_timeout_seconds),
    ) as client:
        response = await client.post(
            url,
            json=body.model_dump(),
            headers=_headers(settings.napcat_access_token),
        )
        response.raise_for_status()
        return NapCatResponse.model_validate(response.json())
