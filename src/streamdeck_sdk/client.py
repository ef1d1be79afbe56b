"""
AsyncStreamDeckPlugin / StreamDeckPlugin — main SDK clients.
"""

import asyncio
import logging
from typing import Any, AsyncGenerator, Generator, Optional

from streamdeck_sdk.config import ConnectionParams, parse_argv
from streamdeck_sdk.errors import TransportError, UnknownEventKind
from streamdeck_sdk.models.commands import (
    Command,
    GetGlobalSettings,
    GetSettings,
    LogMessage,
    OpenUrl,
    SendToPropertyInspector,
    SetGlobalSettings,
    SetImage,
    SetSettings,
    SetState,
    SetTitle,
    ShowAlert,
    ShowOk,
    SwitchToProfile,
)
from streamdeck_sdk.models.common import Target
from streamdeck_sdk.models.events import Event
from streamdeck_sdk.transport.envelope import build_envelope, parse_event
from streamdeck_sdk.transport.websocket import DEFAULT_HOST, WebSocketTransport

logger = logging.getLogger(__name__)


class AsyncStreamDeckPlugin:
    """Async Stream Deck plugin client (primary)."""

    def __init__(
        self,
        params: ConnectionParams,
        host: str = DEFAULT_HOST,
        open_timeout: Optional[float] = 10.0,
    ):
        self._params = params
        self._host = host
        self._open_timeout = open_timeout
        self._transport: Optional[WebSocketTransport] = None

    @classmethod
    def from_argv(cls, argv: Optional[list[str]] = None, **kwargs: Any) -> "AsyncStreamDeckPlugin":
        """Build a client from the arguments the host launched this process with."""
        return cls(parse_argv(argv), **kwargs)

    @property
    def params(self) -> ConnectionParams:
        return self._params

    @property
    def plugin_uuid(self) -> str:
        return self._params.plugin_uuid

    @property
    def connected(self) -> bool:
        return self._transport is not None and self._transport.connected

    async def connect(self) -> None:
        if self.connected:
            return
        self._transport = await WebSocketTransport.open(
            self._params.plugin_uuid,
            self._params.register_event,
            self._params.url(self._host),
            open_timeout=self._open_timeout,
        )

    async def disconnect(self) -> None:
        if self._transport:
            await self._transport.close()
            self._transport = None

    async def __aenter__(self) -> "AsyncStreamDeckPlugin":
        await self.connect()
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        await self.disconnect()

    async def receive(self) -> Event:
        """Wait for the next event from the host.

        Raises TransportError when the connection fails, UnknownEventKind or
        MalformedPayload when the message cannot be decoded.
        """
        transport = self._ensure_connected()
        raw = await transport.receive()
        event = parse_event(raw)
        logger.debug("Received %s", event.event)
        return event

    async def next_event(self, skip_unknown: bool = False) -> Event:
        """Like receive(), optionally skipping events this SDK does not know."""
        while True:
            try:
                return await self.receive()
            except UnknownEventKind as e:
                if not skip_unknown:
                    raise
                logger.warning("Skipping unknown event %r", e.event)

    async def events(self, skip_unknown: bool = False) -> AsyncGenerator[Event, None]:
        """Yield events until the connection fails. Transport errors propagate."""
        while True:
            yield await self.next_event(skip_unknown)

    async def send(self, command: Command) -> None:
        transport = self._ensure_connected()
        await transport.send(build_envelope(command, self._params.plugin_uuid))

    async def open_url(self, url: str) -> None:
        """Open a URL in the default browser."""
        await self.send(OpenUrl(url=url))

    async def log_message(self, message: str) -> None:
        """Write a line to the host's plugin log."""
        await self.send(LogMessage(message=message))

    async def set_title(
        self, context: str, title: str, target: Target = Target.BOTH, state: Optional[int] = None,
    ) -> None:
        await self.send(SetTitle(context=context, title=title, target=target, state=state))

    async def set_image(
        self, context: str, image: Optional[str], target: Target = Target.BOTH, state: Optional[int] = None,
    ) -> None:
        await self.send(SetImage(context=context, image=image, target=target, state=state))

    async def set_state(self, context: str, state: int) -> None:
        await self.send(SetState(context=context, state=state))

    async def show_alert(self, context: str) -> None:
        """Flash the alert icon on the key."""
        await self.send(ShowAlert(context=context))

    async def show_ok(self, context: str) -> None:
        """Flash the OK checkmark on the key."""
        await self.send(ShowOk(context=context))

    async def set_settings(self, context: str, settings: dict[str, Any]) -> None:
        await self.send(SetSettings(context=context, settings=settings))

    async def get_settings(self, context: str) -> None:
        """Ask the host for settings; they arrive later as a DidReceiveSettings event."""
        await self.send(GetSettings(context=context))

    async def set_global_settings(self, settings: dict[str, Any]) -> None:
        await self.send(SetGlobalSettings(settings=settings))

    async def get_global_settings(self) -> None:
        """Ask the host for global settings; they arrive as a DidReceiveGlobalSettings event."""
        await self.send(GetGlobalSettings())

    async def switch_to_profile(self, device: str, profile: str) -> None:
        await self.send(SwitchToProfile(device=device, profile=profile))

    async def send_to_property_inspector(self, context: str, action: str, payload: dict[str, Any]) -> None:
        await self.send(SendToPropertyInspector(context=context, action=action, payload=payload))

    def _ensure_connected(self) -> WebSocketTransport:
        if not self._transport or not self._transport.connected:
            raise TransportError("Not connected. Call connect() first.")
        return self._transport


class StreamDeckPlugin:
    """Sync wrapper around AsyncStreamDeckPlugin. Runs the event loop internally."""

    def __init__(self, params: ConnectionParams, **kwargs: Any):
        self._async = AsyncStreamDeckPlugin(params, **kwargs)
        self._loop = asyncio.new_event_loop()

    @classmethod
    def from_argv(cls, argv: Optional[list[str]] = None, **kwargs: Any) -> "StreamDeckPlugin":
        return cls(parse_argv(argv), **kwargs)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def params(self) -> ConnectionParams:
        return self._async.params

    @property
    def plugin_uuid(self) -> str:
        return self._async.plugin_uuid

    @property
    def connected(self) -> bool:
        return self._async.connected

    def connect(self) -> None:
        self._run(self._async.connect())

    def disconnect(self) -> None:
        self._run(self._async.disconnect())

    def close(self) -> None:
        """Disconnect and release the private event loop."""
        self.disconnect()
        self._loop.close()

    def __enter__(self) -> "StreamDeckPlugin":
        self.connect()
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.close()

    def receive(self) -> Event:
        return self._run(self._async.receive())

    def events(self, skip_unknown: bool = False) -> Generator[Event, None, None]:
        while True:
            yield self._run(self._async.next_event(skip_unknown))

    def send(self, command: Command) -> None:
        self._run(self._async.send(command))

    def open_url(self, url: str) -> None:
        self._run(self._async.open_url(url))

    def log_message(self, message: str) -> None:
        self._run(self._async.log_message(message))

    def set_title(self, context: str, title: str, target: Target = Target.BOTH, state: Optional[int] = None) -> None:
        self._run(self._async.set_title(context, title, target, state))

    def set_image(
        self, context: str, image: Optional[str], target: Target = Target.BOTH, state: Optional[int] = None,
    ) -> None:
        self._run(self._async.set_image(context, image, target, state))

    def set_state(self, context: str, state: int) -> None:
        self._run(self._async.set_state(context, state))

    def show_alert(self, context: str) -> None:
        self._run(self._async.show_alert(context))

    def show_ok(self, context: str) -> None:
        self._run(self._async.show_ok(context))

    def set_settings(self, context: str, settings: dict[str, Any]) -> None:
        self._run(self._async.set_settings(context, settings))

    def get_settings(self, context: str) -> None:
        self._run(self._async.get_settings(context))

    def set_global_settings(self, settings: dict[str, Any]) -> None:
        self._run(self._async.set_global_settings(settings))

    def get_global_settings(self) -> None:
        self._run(self._async.get_global_settings())

    def switch_to_profile(self, device: str, profile: str) -> None:
        self._run(self._async.switch_to_profile(device, profile))

    def send_to_property_inspector(self, context: str, action: str, payload: dict[str, Any]) -> None:
        self._run(self._async.send_to_property_inspector(context, action, payload))
