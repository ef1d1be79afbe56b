"""Shared fixtures: host envelopes and an in-process fake Stream Deck host."""

import asyncio
import json
from typing import Any, Optional

import pytest
import pytest_asyncio
import websockets

KEY_PAYLOAD = {
    "settings": {},
    "coordinates": {"column": 3, "row": 1},
    "state": 1,
    "userDesiredState": 1,
    "isInMultiAction": True,
}

SETTINGS_PAYLOAD = {
    "settings": {},
    "coordinates": {"column": 3, "row": 1},
    "state": 1,
    "isInMultiAction": True,
}


def action_envelope(event: str, payload: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "action": "com.elgato.example.action1",
        "event": event,
        "context": "context",
        "device": "device",
    }
    if payload is not None:
        raw["payload"] = payload
    return raw


ENVELOPES: dict[str, dict[str, Any]] = {
    "didReceiveSettings": action_envelope("didReceiveSettings", SETTINGS_PAYLOAD),
    "didReceiveGlobalSettings": {"event": "didReceiveGlobalSettings", "payload": {}},
    "keyDown": action_envelope("keyDown", KEY_PAYLOAD),
    "keyUp": action_envelope("keyUp", KEY_PAYLOAD),
    "willAppear": action_envelope("willAppear", SETTINGS_PAYLOAD),
    "willDisappear": action_envelope("willDisappear", SETTINGS_PAYLOAD),
    "titleParametersDidChange": action_envelope("titleParametersDidChange", {
        "coordinates": {"column": 3, "row": 1},
        "settings": {},
        "state": 1,
        "title": "title",
        "titleParameters": {
            "fontFamily": "fontFamily",
            "fontSize": 12,
            "fontStyle": "fontStyle",
            "fontUnderline": True,
            "showTitle": True,
            "titleAlignment": "bottom",
            "titleColor": "#ffffff",
        },
    }),
    "deviceDidConnect": {
        "event": "deviceDidConnect",
        "device": "device",
        "deviceInfo": {"name": "Device Name", "type": 1, "size": {"rows": 3, "columns": 5}},
    },
    "deviceDidDisconnect": {"event": "deviceDidDisconnect", "device": "device"},
    "applicationDidLaunch": {"event": "applicationDidLaunch", "payload": {"application": "com.apple.mail"}},
    "applicationDidTerminate": {"event": "applicationDidTerminate", "payload": {"application": "com.apple.mail"}},
    "systemDidWakeUp": {"event": "systemDidWakeUp"},
    "propertyInspectorDidAppear": action_envelope("propertyInspectorDidAppear"),
    "propertyInspectorDidDisappear": action_envelope("propertyInspectorDidDisappear"),
    "sendToPlugin": {
        "action": "com.elgato.example.action1",
        "event": "sendToPlugin",
        "context": "context",
        "payload": {},
    },
}


class FakeHost:
    """WebSocket server standing in for the Stream Deck application."""

    def __init__(self) -> None:
        self.received: asyncio.Queue[Any] = asyncio.Queue()
        self.client_connected = asyncio.Event()
        self.ws: Any = None
        self.port: int = 0

    async def handler(self, ws: Any) -> None:
        self.ws = ws
        self.client_connected.set()
        try:
            async for message in ws:
                await self.received.put(json.loads(message))
        except websockets.ConnectionClosed:
            pass

    async def push(self, value: Any) -> None:
        await self.client_connected.wait()
        await self.ws.send(value if isinstance(value, str) else json.dumps(value))

    @property
    def url(self) -> str:
        return f"ws://127.0.0.1:{self.port}"


@pytest_asyncio.fixture
async def host():
    fake = FakeHost()
    server = await websockets.serve(fake.handler, "127.0.0.1", 0)
    fake.port = server.sockets[0].getsockname()[1]
    try:
        yield fake
    finally:
        server.close()
        await server.wait_closed()


@pytest.fixture
def envelopes() -> dict[str, dict[str, Any]]:
    return json.loads(json.dumps(ENVELOPES))
