"""
Wire envelope shared by every inbound and outbound message.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class InboundEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    event: str = Field(min_length=1)
    action: Optional[str] = None
    context: Optional[str] = None
    device: Optional[str] = None
    payload: Optional[Any] = None


class OutboundEnvelope(BaseModel):
    event: str
    context: Optional[str] = None
    action: Optional[str] = None
    device: Optional[str] = None
    payload: Optional[Any] = None

    def to_wire(self) -> dict[str, Any]:
        """Dict ready for json.dumps. Unset top-level fields are dropped, payload contents are untouched."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class Registration(BaseModel):
    """Handshake sent once right after the socket opens."""
    event: str
    uuid: str
