"""NapCat (OneBot v11) request and response models for send_group_msg."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class NapCatSegment(BaseModel):
    """One segment of a OneBot message array."""

    type: Literal["text"]
    data: dict[str, Any]


class NapCatMessage(BaseModel):
    """Request body for POST /send_group_msg."""

    group_id: str
    message: list[NapCatSegment]

    @classmethod
    def text(cls, group_id: str, text: str) -> "NapCatMessage":
        """Build a single text-segment message for a group."""
        return cls(
            group_id=group_id,
            message=[NapCatSegment(type="text", data={"text": text})],
        )


class NapCatResponse(BaseModel):
    """Response envelope returned by the NapCat HTTP API."""

    model_config = ConfigDict(extra="allow")

    status: str
    retcode: int
    data: dict[str, Any] | None = None
    message: str = ""
    wording: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok" and self.retcode == 0

    @property
    def message_id(self) -> Any:
        return (self.data or {}).get("message_id")
