"""CLI: streamdeck-plugin echo

A minimal working plugin: counts key presses per action instance, shows the
count as the key title, persists it in the action settings, and acknowledges
every press with the OK checkmark.
"""

import logging

import click
from rich.console import Console

from streamdeck_sdk.client import AsyncStreamDeckPlugin
from streamdeck_sdk.config import ConnectionParams, connection_options
from streamdeck_sdk.errors import StreamDeckError, TransportError
from streamdeck_sdk.models.events import DeviceDidConnect, Event, KeyDown, WillAppear, WillDisappear

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _run(coro):
    from streamdeck_sdk.cli.main import _run
    return _run(coro)


class CounterHandler:
    """Event handler behind `echo`; separated from the read loop so it can be driven directly."""

    def __init__(self, plugin: AsyncStreamDeckPlugin):
        self._plugin = plugin
        self.counts: dict[str, int] = {}

    async def handle(self, event: Event) -> None:
        if isinstance(event, WillAppear) and event.context:
            count = event.settings.get("count", 0)
            if not isinstance(count, int) or isinstance(count, bool):
                count = 0  # non-integer counts restart at zero
            self.counts[event.context] = count
            await self._plugin.set_title(event.context, str(count))
        elif isinstance(event, WillDisappear) and event.context:
            self.counts.pop(event.context, None)
        elif isinstance(event, KeyDown) and event.context:
            count = self.counts.get(event.context, 0) + 1
            self.counts[event.context] = count
            await self._plugin.set_title(event.context, str(count))
            await self._plugin.set_settings(event.context, {"count": count})
            await self._plugin.show_ok(event.context)
        elif isinstance(event, DeviceDidConnect) and event.device_info:
            await self._plugin.log_message(f"Device connected: {event.device_info.name} ({event.device})")


@click.command("echo")
@connection_options
def echo_cmd(port: str, plugin_uuid: str, register_event: str, info: str):
    """Run the key-press counter plugin."""
    try:
        params = ConnectionParams.create(port=port, plugin_uuid=plugin_uuid, register_event=register_event, info=info)
    except StreamDeckError as e:
        raise click.ClickException(str(e))

    async def _echo():
        async with AsyncStreamDeckPlugin(params) as plugin:
            handler = CounterHandler(plugin)
            await plugin.log_message(f"echo plugin {plugin.plugin_uuid} connected")
            async for event in plugin.events(skip_unknown=True):
                logger.info("%s %s", event.event, getattr(event, "context", None) or "")
                await handler.handle(event)

    try:
        _run(_echo())
    except TransportError as e:
        console.print(f"[yellow]Connection ended:[/yellow] {e}")
    except StreamDeckError as e:
        raise click.ClickException(f"{e.code}: {e}")
