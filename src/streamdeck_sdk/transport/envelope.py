"""
Envelope decoding and encoding for the host protocol.

Inbound: `parse_event` picks a decoder by the `event` discriminator. Every
decoder knows its event's field layout:

- nested: action/context/device at the top level, everything else in `payload`
- flat:   everything at the top level, `payload` is not consulted
- opaque: action/context at the top level, `payload` kept as an untyped dict

Outbound: `build_envelope` looks the command up in `COMMAND_SPECS`, which
states per command which envelope fields it fills in.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from streamdeck_sdk.errors import EncodingFailure, MalformedPayload, UnknownEventKind
from streamdeck_sdk.models.commands import (
    Command,
    CommandName,
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
from streamdeck_sdk.models.envelope import InboundEnvelope, OutboundEnvelope
from streamdeck_sdk.models.events import (
    ApplicationDidLaunch,
    ApplicationDidTerminate,
    DeviceDidConnect,
    DeviceDidDisconnect,
    DidReceiveGlobalSettings,
    DidReceiveSettings,
    Event,
    EventName,
    KeyDown,
    KeyUp,
    PropertyInspectorDidAppear,
    PropertyInspectorDidDisappear,
    SendToPlugin,
    SystemDidWakeUp,
    TitleParametersDidChange,
    WillAppear,
    WillDisappear,
)

IDENTITY_FIELDS = ("action", "context", "device")

Decoder = Callable[[dict[str, Any]], Event]


def _validate(model: type[Event], data: dict[str, Any], raw: Any) -> Event:
    # Strict JSON mode: no "1" -> 1 or 1 -> True coercion, enums still accept their wire values.
    try:
        text = json.dumps(data)
    except (TypeError, ValueError) as e:
        raise MalformedPayload(model.event, raw, [f"not a JSON value: {e}"]) from e
    try:
        return model.model_validate_json(text, strict=True)
    except ValidationError as e:
        raise MalformedPayload(model.event, raw, e.errors(include_url=False, include_context=False)) from e


def _nested(model: type[Event]) -> Decoder:
    def decode(raw: dict[str, Any]) -> Event:
        payload = raw.get("payload")
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise MalformedPayload(model.event, payload, ["payload is not an object"])
        data = {k: v for k, v in payload.items() if k not in IDENTITY_FIELDS}
        for key in IDENTITY_FIELDS:
            if key in raw:
                data[key] = raw[key]
        return _validate(model, data, payload)
    return decode


def _flat(model: type[Event]) -> Decoder:
    def decode(raw: dict[str, Any]) -> Event:
        data = {k: v for k, v in raw.items() if k != "payload"}
        return _validate(model, data, raw)
    return decode


def _opaque(model: type[Event]) -> Decoder:
    def decode(raw: dict[str, Any]) -> Event:
        data = {key: raw[key] for key in IDENTITY_FIELDS if key in raw}
        if raw.get("payload") is not None:
            data["payload"] = raw["payload"]
        return _validate(model, data, raw)
    return decode


EVENT_DECODERS: dict[str, Decoder] = {
    EventName.DID_RECEIVE_SETTINGS: _nested(DidReceiveSettings),
    EventName.DID_RECEIVE_GLOBAL_SETTINGS: _opaque(DidReceiveGlobalSettings),
    EventName.KEY_DOWN: _nested(KeyDown),
    EventName.KEY_UP: _nested(KeyUp),
    EventName.WILL_APPEAR: _nested(WillAppear),
    EventName.WILL_DISAPPEAR: _nested(WillDisappear),
    EventName.TITLE_PARAMETERS_DID_CHANGE: _nested(TitleParametersDidChange),
    EventName.DEVICE_DID_CONNECT: _flat(DeviceDidConnect),
    EventName.DEVICE_DID_DISCONNECT: _flat(DeviceDidDisconnect),
    EventName.APPLICATION_DID_LAUNCH: _nested(ApplicationDidLaunch),
    EventName.APPLICATION_DID_TERMINATE: _nested(ApplicationDidTerminate),
    EventName.SYSTEM_DID_WAKE_UP: _flat(SystemDidWakeUp),
    EventName.PROPERTY_INSPECTOR_DID_APPEAR: _flat(PropertyInspectorDidAppear),
    EventName.PROPERTY_INSPECTOR_DID_DISAPPEAR: _flat(PropertyInspectorDidDisappear),
    EventName.SEND_TO_PLUGIN: _opaque(SendToPlugin),
}

EVENT_TYPES: dict[str, type[Event]] = {
    cls.event: cls
    for cls in (
        DidReceiveSettings, DidReceiveGlobalSettings, KeyDown, KeyUp, WillAppear, WillDisappear,
        TitleParametersDidChange, DeviceDidConnect, DeviceDidDisconnect, ApplicationDidLaunch,
        ApplicationDidTerminate, SystemDidWakeUp, PropertyInspectorDidAppear,
        PropertyInspectorDidDisappear, SendToPlugin,
    )
}


def parse_event(raw: Any) -> Event:
    """Decode one inbound envelope into its typed event.

    Raises UnknownEventKind for an unregistered `event`, MalformedPayload when
    the envelope or its fields do not have the event's shape.
    """
    if not isinstance(raw, dict):
        raise MalformedPayload(None, raw, ["envelope is not an object"])
    try:
        envelope = InboundEnvelope.model_validate(raw)
    except ValidationError as e:
        event = raw.get("event") if isinstance(raw.get("event"), str) else None
        raise MalformedPayload(event, raw, e.errors(include_url=False, include_context=False)) from e

    decoder = EVENT_DECODERS.get(envelope.event)
    if decoder is None:
        raise UnknownEventKind(envelope.event, raw)
    return decoder(raw)


@dataclass(frozen=True)
class CommandSpec:
    """Which envelope fields a command fills in.

    `payload_field` names a field whose value is sent as the payload object
    itself instead of the command's fields being wrapped into one.
    """
    event: str
    payload: bool = False
    context: bool = False
    action: bool = False
    device: bool = False
    payload_field: Optional[str] = None


COMMAND_SPECS: dict[type[Command], CommandSpec] = {
    OpenUrl: CommandSpec(CommandName.OPEN_URL, payload=True),
    LogMessage: CommandSpec(CommandName.LOG_MESSAGE, payload=True),
    SetTitle: CommandSpec(CommandName.SET_TITLE, payload=True, context=True),
    ShowAlert: CommandSpec(CommandName.SHOW_ALERT, context=True),
    ShowOk: CommandSpec(CommandName.SHOW_OK, context=True),
    SetSettings: CommandSpec(CommandName.SET_SETTINGS, payload=True, context=True, payload_field="settings"),
    GetSettings: CommandSpec(CommandName.GET_SETTINGS, context=True),
    SetGlobalSettings: CommandSpec(CommandName.SET_GLOBAL_SETTINGS, payload=True, payload_field="settings"),
    GetGlobalSettings: CommandSpec(CommandName.GET_GLOBAL_SETTINGS),
    SetImage: CommandSpec(CommandName.SET_IMAGE, payload=True, context=True),
    SetState: CommandSpec(CommandName.SET_STATE, payload=True, context=True),
    SwitchToProfile: CommandSpec(CommandName.SWITCH_TO_PROFILE, payload=True, device=True),
    SendToPropertyInspector: CommandSpec(
        CommandName.SEND_TO_PROPERTY_INSPECTOR, payload=True, context=True, action=True, payload_field="payload",
    ),
}


def _encode_payload(command: Command, spec: CommandSpec) -> Any:
    try:
        if spec.payload_field:
            return command.model_dump(mode="json", include={spec.payload_field})[spec.payload_field]
        return command.model_dump(mode="json", by_alias=True, exclude=set(IDENTITY_FIELDS), exclude_none=True)
    except (PydanticSerializationError, ValueError, TypeError) as e:
        raise EncodingFailure(f"Failed to encode payload of {type(command).__name__}: {e}", command) from e


def build_envelope(command: Command, plugin_uuid: str) -> dict[str, Any]:
    """Build the outbound envelope for a command as a dict ready for json.dumps."""
    spec = COMMAND_SPECS.get(type(command))
    if spec is None:
        raise EncodingFailure(f"Unregistered command type: {type(command).__name__}", command)

    envelope = OutboundEnvelope(
        event=spec.event,
        context=command.context if spec.context else plugin_uuid,  # type: ignore[attr-defined]
        action=command.action if spec.action else None,  # type: ignore[attr-defined]
        device=command.device if spec.device else None,  # type: ignore[attr-defined]
        payload=_encode_payload(command, spec) if spec.payload else None,
    )
    return envelope.to_wire()


def _check_command_specs() -> None:
    missing = [cls.__name__ for cls in Command.__subclasses__() if cls not in COMMAND_SPECS]
    if missing:
        raise RuntimeError(f"Commands without an envelope spec: {', '.join(missing)}")


_check_command_specs()
