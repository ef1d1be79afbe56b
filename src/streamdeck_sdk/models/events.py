"""
Inbound (host → plugin) events.

Each class maps to exactly one `event` discriminator. Where a field lives on
the wire (top level vs. inside `payload`) is decided by the decoder registry
in `streamdeck_sdk.transport.envelope`, not here.
"""

from typing import Any, ClassVar, Optional, Union

from pydantic import Field

from streamdeck_sdk.models.common import Coordinates, DeviceInfo, TitleParameters, WireModel


class EventName:
    DID_RECEIVE_SETTINGS = "didReceiveSettings"
    DID_RECEIVE_GLOBAL_SETTINGS = "didReceiveGlobalSettings"
    KEY_DOWN = "keyDown"
    KEY_UP = "keyUp"
    WILL_APPEAR = "willAppear"
    WILL_DISAPPEAR = "willDisappear"
    TITLE_PARAMETERS_DID_CHANGE = "titleParametersDidChange"
    DEVICE_DID_CONNECT = "deviceDidConnect"
    DEVICE_DID_DISCONNECT = "deviceDidDisconnect"
    APPLICATION_DID_LAUNCH = "applicationDidLaunch"
    APPLICATION_DID_TERMINATE = "applicationDidTerminate"
    SYSTEM_DID_WAKE_UP = "systemDidWakeUp"
    PROPERTY_INSPECTOR_DID_APPEAR = "propertyInspectorDidAppear"
    PROPERTY_INSPECTOR_DID_DISAPPEAR = "propertyInspectorDidDisappear"
    SEND_TO_PLUGIN = "sendToPlugin"


class Event(WireModel):
    event: ClassVar[str]


class ActionEvent(Event):
    """Event addressed to one action instance."""
    action: Optional[str] = None
    context: Optional[str] = None
    device: Optional[str] = None


class SettingsEvent(ActionEvent):
    settings: dict[str, Any]
    coordinates: Optional[Coordinates] = None  # absent inside a multi-action
    state: int = 0
    is_in_multi_action: bool


class DidReceiveSettings(SettingsEvent):
    event: ClassVar[str] = EventName.DID_RECEIVE_SETTINGS


class DidReceiveGlobalSettings(Event):
    event: ClassVar[str] = EventName.DID_RECEIVE_GLOBAL_SETTINGS

    payload: dict[str, Any] = Field(default_factory=dict)

    @property
    def settings(self) -> dict[str, Any]:
        return self.payload.get("settings", {})


class KeyEvent(SettingsEvent):
    user_desired_state: Optional[int] = None


class KeyDown(KeyEvent):
    event: ClassVar[str] = EventName.KEY_DOWN


class KeyUp(KeyEvent):
    event: ClassVar[str] = EventName.KEY_UP


class WillAppear(SettingsEvent):
    event: ClassVar[str] = EventName.WILL_APPEAR


class WillDisappear(SettingsEvent):
    event: ClassVar[str] = EventName.WILL_DISAPPEAR


class TitleParametersDidChange(ActionEvent):
    event: ClassVar[str] = EventName.TITLE_PARAMETERS_DID_CHANGE

    settings: dict[str, Any]
    coordinates: Optional[Coordinates] = None
    state: int = 0
    title: str
    title_parameters: TitleParameters


class DeviceDidConnect(Event):
    event: ClassVar[str] = EventName.DEVICE_DID_CONNECT

    device: str
    device_info: Optional[DeviceInfo] = None


class DeviceDidDisconnect(Event):
    event: ClassVar[str] = EventName.DEVICE_DID_DISCONNECT

    device: str


class ApplicationDidLaunch(Event):
    event: ClassVar[str] = EventName.APPLICATION_DID_LAUNCH

    application: str


class ApplicationDidTerminate(Event):
    event: ClassVar[str] = EventName.APPLICATION_DID_TERMINATE

    application: str


class SystemDidWakeUp(Event):
    event: ClassVar[str] = EventName.SYSTEM_DID_WAKE_UP


class PropertyInspectorDidAppear(ActionEvent):
    event: ClassVar[str] = EventName.PROPERTY_INSPECTOR_DID_APPEAR


class PropertyInspectorDidDisappear(ActionEvent):
    event: ClassVar[str] = EventName.PROPERTY_INSPECTOR_DID_DISAPPEAR


class SendToPlugin(Event):
    """Arbitrary message from the property inspector; payload is left untyped."""
    event: ClassVar[str] = EventName.SEND_TO_PLUGIN

    action: Optional[str] = None
    context: Optional[str] = None
    payload: dict[str, Any] = Field(default_factory=dict)


AnyEvent = Union[
    DidReceiveSettings,
    DidReceiveGlobalSettings,
    KeyDown,
    KeyUp,
    WillAppear,
    WillDisappear,
    TitleParametersDidChange,
    DeviceDidConnect,
    DeviceDidDisconnect,
    ApplicationDidLaunch,
    ApplicationDidTerminate,
    SystemDidWakeUp,
    PropertyInspectorDidAppear,
    PropertyInspectorDidDisappear,
    SendToPlugin,
]
