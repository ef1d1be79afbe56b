"""
Outbound (plugin → host) commands.

Addressing fields (`context`, `action`, `device`) live on the command value
next to the payload fields; the encoder moves them into the envelope.
"""

from typing import Any, Optional

from pydantic import Field

from streamdeck_sdk.models.common import Target, WireModel


class CommandName:
    OPEN_URL = "openUrl"
    LOG_MESSAGE = "logMessage"
    SET_TITLE = "setTitle"
    SHOW_ALERT = "showAlert"
    SHOW_OK = "showOk"
    SET_SETTINGS = "setSettings"
    GET_SETTINGS = "getSettings"
    SET_GLOBAL_SETTINGS = "setGlobalSettings"
    GET_GLOBAL_SETTINGS = "getGlobalSettings"
    SET_IMAGE = "setImage"
    SET_STATE = "setState"
    SWITCH_TO_PROFILE = "switchToProfile"
    SEND_TO_PROPERTY_INSPECTOR = "sendToPropertyInspector"


class Command(WireModel):
    pass


class OpenUrl(Command):
    url: str


class LogMessage(Command):
    message: str


class SetTitle(Command):
    context: str
    title: str
    target: Target = Target.BOTH
    state: Optional[int] = None


class ShowAlert(Command):
    context: str


class ShowOk(Command):
    context: str


class SetSettings(Command):
    """Persist settings for one action instance. The settings object is sent as the payload itself."""
    context: str
    settings: dict[str, Any] = Field(default_factory=dict)


class GetSettings(Command):
    context: str


class SetGlobalSettings(Command):
    settings: dict[str, Any] = Field(default_factory=dict)


class GetGlobalSettings(Command):
    pass


class SetImage(Command):
    context: str
    image: Optional[str] = None  # base64 data URL or SVG; None restores the default
    target: Target = Target.BOTH
    state: Optional[int] = None


class SetState(Command):
    context: str
    state: int


class SwitchToProfile(Command):
    device: str
    profile: str


class SendToPropertyInspector(Command):
    context: str
    action: str
    payload: dict[str, Any] = Field(default_factory=dict)
