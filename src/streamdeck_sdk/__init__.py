"""
streamdeck-plugin-sdk — Stream Deck plugin SDK for Python.

WebSocket client for the Stream Deck host: typed events in, typed commands out.
"""

from streamdeck_sdk.client import StreamDeckPlugin, AsyncStreamDeckPlugin
from streamdeck_sdk.config import ConnectionParams, parse_argv
from streamdeck_sdk.errors import (
    StreamDeckError,
    ConfigError,
    ConnectionError,
    TransportError,
    UnknownEventKind,
    MalformedPayload,
    EncodingFailure,
)
from streamdeck_sdk.models.commands import CommandName
from streamdeck_sdk.models.events import EventName
from streamdeck_sdk.transport.envelope import build_envelope, parse_event

__version__ = "0.1.0"
__all__ = [
    "StreamDeckPlugin",
    "AsyncStreamDeckPlugin",
    "ConnectionParams",
    "parse_argv",
    "StreamDeckError",
    "ConfigError",
    "ConnectionError",
    "TransportError",
    "UnknownEventKind",
    "MalformedPayload",
    "EncodingFailure",
    "CommandName",
    "EventName",
    "build_envelope",
    "parse_event",
]
