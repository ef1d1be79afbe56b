"""
WebSocket session transport.

Connection: ws://localhost:{port}. The registration message
{"event": <registerEvent>, "uuid": <pluginUUID>} is sent right after the socket
opens; after that the transport only moves JSON values and knows nothing about
events or commands.

Sends are serialized by one lock and receives by another, so a send and a
receive may run concurrently. Failures are never retried.
"""

import asyncio
import json
import logging
from typing import Any, Optional

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from streamdeck_sdk.errors import ConnectionError, TransportError
from streamdeck_sdk.models.envelope import Registration

DEFAULT_HOST = "localhost"

logger = logging.getLogger(__name__)


def build_url(port: str, host: str = DEFAULT_HOST) -> str:
    return f"ws://{host}:{port}"


class WebSocketTransport:
    def __init__(self, ws: Any, url: str = ""):
        self._ws = ws
        self._url = url
        self._send_lock = asyncio.Lock()
        self._recv_lock = asyncio.Lock()
        self._closed = False

    @classmethod
    async def open(
        cls,
        plugin_uuid: str,
        register_event: str,
        url: str,
        open_timeout: Optional[float] = 10.0,
    ) -> "WebSocketTransport":
        """Connect and register. Raises ConnectionError if either step fails."""
        try:
            ws = await websockets.connect(url, max_size=None, open_timeout=open_timeout)
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            raise ConnectionError(f"Failed to connect to {url}: {e}") from e

        registration = Registration(event=register_event, uuid=plugin_uuid)
        try:
            await ws.send(json.dumps(registration.model_dump()))
        except (OSError, WebSocketException) as e:
            await ws.close()
            raise ConnectionError(f"Registration with {register_event!r} failed: {e}") from e

        logger.info("Registered plugin %s at %s", plugin_uuid, url)
        return cls(ws, url)

    @property
    def connected(self) -> bool:
        return not self._closed

    async def receive(self) -> Any:
        """Wait for the next message and return it as a decoded JSON value."""
        if self._closed:
            raise TransportError("Transport is closed")
        async with self._recv_lock:
            try:
                message = await self._ws.recv()
            except ConnectionClosed as e:
                self._closed = True
                raise TransportError(f"Connection to {self._url} closed: {e}") from e
            except OSError as e:
                raise TransportError(f"Receive failed: {e}") from e
        try:
            return json.loads(message)
        except ValueError as e:
            raise TransportError(f"Malformed frame: {e}") from e

    async def send(self, value: Any) -> None:
        """Send one JSON value as a text frame."""
        if self._closed:
            raise TransportError("Transport is closed")
        try:
            data = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise TransportError(f"Value is not JSON serializable: {e}") from e
        async with self._send_lock:
            try:
                await self._ws.send(data)
            except ConnectionClosed as e:
                self._closed = True
                raise TransportError(f"Connection to {self._url} closed: {e}") from e
            except OSError as e:
                raise TransportError(f"Send failed: {e}") from e
        logger.debug("Sent %s", data)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._ws.close()
