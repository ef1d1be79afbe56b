"""AsyncStreamDeckPlugin / StreamDeckPlugin against the fake host."""

import asyncio

import pytest

from conftest import ENVELOPES

from streamdeck_sdk import AsyncStreamDeckPlugin, ConnectionParams, StreamDeckPlugin
from streamdeck_sdk.errors import MalformedPayload, TransportError, UnknownEventKind
from streamdeck_sdk.models.common import Target
from streamdeck_sdk.models.events import KeyDown, SystemDidWakeUp


def make_params(port: int) -> ConnectionParams:
    return ConnectionParams(port=str(port), plugin_uuid="plugin-uuid", register_event="registerPlugin", info="{}")


async def next_message(host):
    return await asyncio.wait_for(host.received.get(), timeout=5)


class TestConnection:
    @pytest.mark.asyncio
    async def test_connect_registers(self, host):
        async with AsyncStreamDeckPlugin(make_params(host.port), host="127.0.0.1") as plugin:
            assert plugin.connected
            assert await next_message(host) == {"event": "registerPlugin", "uuid": "plugin-uuid"}
        assert not plugin.connected

    @pytest.mark.asyncio
    async def test_requires_connect(self):
        plugin = AsyncStreamDeckPlugin(make_params(1))
        with pytest.raises(TransportError):
            await plugin.receive()
        with pytest.raises(TransportError):
            await plugin.show_ok("ctx")

    def test_from_argv(self):
        plugin = AsyncStreamDeckPlugin.from_argv(
            ["-port", "28196", "-pluginUUID", "abc", "-registerEvent", "registerPlugin", "-info", "{}"],
        )
        assert plugin.plugin_uuid == "abc"
        assert plugin.params.url() == "ws://localhost:28196"


class TestEvents:
    @pytest.mark.asyncio
    async def test_receive_typed_event(self, host):
        async with AsyncStreamDeckPlugin(make_params(host.port), host="127.0.0.1") as plugin:
            await host.push(ENVELOPES["keyDown"])
            event = await asyncio.wait_for(plugin.receive(), timeout=5)
            assert isinstance(event, KeyDown)
            assert event.context == "context"

    @pytest.mark.asyncio
    async def test_unknown_event_surfaces_by_default(self, host):
        async with AsyncStreamDeckPlugin(make_params(host.port), host="127.0.0.1") as plugin:
            await host.push({"event": "dialRotate", "context": "c"})
            with pytest.raises(UnknownEventKind):
                await asyncio.wait_for(plugin.next_event(), timeout=5)
            await host.push({"event": "systemDidWakeUp"})
            assert await asyncio.wait_for(plugin.receive(), timeout=5) == SystemDidWakeUp()

    @pytest.mark.asyncio
    async def test_skip_unknown(self, host):
        async with AsyncStreamDeckPlugin(make_params(host.port), host="127.0.0.1") as plugin:
            await host.push({"event": "dialRotate", "context": "c"})
            await host.push({"event": "systemDidWakeUp"})
            event = await asyncio.wait_for(plugin.next_event(skip_unknown=True), timeout=5)
            assert isinstance(event, SystemDidWakeUp)

    @pytest.mark.asyncio
    async def test_malformed_is_not_skipped(self, host):
        async with AsyncStreamDeckPlugin(make_params(host.port), host="127.0.0.1") as plugin:
            await host.push({"event": "keyDown", "payload": []})
            with pytest.raises(MalformedPayload):
                await asyncio.wait_for(plugin.next_event(skip_unknown=True), timeout=5)

    @pytest.mark.asyncio
    async def test_event_stream_ends_with_transport_error(self, host):
        async with AsyncStreamDeckPlugin(make_params(host.port), host="127.0.0.1") as plugin:
            await host.push({"event": "systemDidWakeUp"})
            await host.push({"event": "deviceDidDisconnect", "device": "d"})
            seen = []
            with pytest.raises(TransportError):
                async for event in plugin.events():
                    seen.append(event.event)
                    if len(seen) == 2:
                        await host.ws.close()
            assert seen == ["systemDidWakeUp", "deviceDidDisconnect"]


class TestCommands:
    @pytest.mark.asyncio
    async def test_convenience_methods(self, host):
        async with AsyncStreamDeckPlugin(make_params(host.port), host="127.0.0.1") as plugin:
            await next_message(host)

            await plugin.open_url("https://example.com")
            assert await next_message(host) == {
                "event": "openUrl", "context": "plugin-uuid", "payload": {"url": "https://example.com"},
            }

            await plugin.show_ok("ctx123")
            assert await next_message(host) == {"event": "showOk", "context": "ctx123"}

            await plugin.show_alert("ctx123")
            assert await next_message(host) == {"event": "showAlert", "context": "ctx123"}

            await plugin.set_title("ctx123", "7", target=Target.SOFTWARE)
            assert await next_message(host) == {
                "event": "setTitle", "context": "ctx123", "payload": {"title": "7", "target": 2},
            }

            await plugin.log_message("hi")
            assert await next_message(host) == {"event": "logMessage", "context": "plugin-uuid", "payload": {"message": "hi"}}

            await plugin.set_settings("ctx123", {"count": 7})
            assert await next_message(host) == {"event": "setSettings", "context": "ctx123", "payload": {"count": 7}}

            await plugin.get_global_settings()
            assert await next_message(host) == {"event": "getGlobalSettings", "context": "plugin-uuid"}

            await plugin.switch_to_profile("dev1", "Gaming")
            assert await next_message(host) == {
                "event": "switchToProfile", "context": "plugin-uuid", "device": "dev1", "payload": {"profile": "Gaming"},
            }

            await plugin.send_to_property_inspector("ctx123", "com.example.counter", {"count": 7})
            assert await next_message(host) == {
                "event": "sendToPropertyInspector",
                "context": "ctx123",
                "action": "com.example.counter",
                "payload": {"count": 7},
            }


class TestSyncWrapper:
    def test_requires_connect(self):
        plugin = StreamDeckPlugin(make_params(1))
        try:
            assert not plugin.connected
            assert plugin.plugin_uuid == "plugin-uuid"
            with pytest.raises(TransportError):
                plugin.receive()
            with pytest.raises(TransportError):
                plugin.open_url("https://example.com")
        finally:
            plugin.close()

    def test_from_argv(self):
        plugin = StreamDeckPlugin.from_argv(
            ["-port", "28196", "-pluginUUID", "abc", "-registerEvent", "registerPlugin", "-info", "{}"],
        )
        try:
            assert plugin.params.port == "28196"
        finally:
            plugin.close()
