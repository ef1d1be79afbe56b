"""
Stream Deck SDK error types.

Every error carries a short machine-readable code plus optional details.
"""

from typing import Any, Optional


class StreamDeckError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ConfigError(StreamDeckError):
    """Connection parameters are missing or empty."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_config", message, details)


class ConnectionError(StreamDeckError):
    """The WebSocket could not be opened or the registration message could not be sent."""

    def __init__(self, message: str):
        super().__init__("connection_error", message)


class TransportError(StreamDeckError):
    """A send or receive on an open connection failed. Fatal for that connection."""

    def __init__(self, message: str):
        super().__init__("transport_error", message)


class UnknownEventKind(StreamDeckError):
    """The inbound `event` field names no registered event."""

    def __init__(self, event: str, raw: dict[str, Any]):
        super().__init__("unknown_event", f"Unknown event kind: {event!r}", {"raw": raw})
        self.event = event
        self.raw = raw


class MalformedPayload(StreamDeckError):
    """An inbound envelope does not match the shape of its event."""

    def __init__(self, event: Optional[str], raw: Any, errors: Optional[list[Any]] = None):
        super().__init__(
            "malformed_payload",
            f"Malformed payload for event {event!r}",
            {"raw": raw, "errors": errors or []},
        )
        self.event = event
        self.raw = raw


class EncodingFailure(StreamDeckError):
    """A command could not be turned into an envelope. Indicates a bad command value."""

    def __init__(self, message: str, command: Any = None):
        super().__init__("encoding_failure", message)
        self.command = command
