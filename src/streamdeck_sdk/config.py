"""
Connection parameters.

The host starts a plugin as:

    <plugin> -port 28196 -pluginUUID <uuid> -registerEvent registerPlugin -info '<json>'

All four values are required and must be non-empty before a connection is attempted.
"""

import json
import sys
from typing import Any, Callable, Optional

import click
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from streamdeck_sdk.errors import ConfigError
from streamdeck_sdk.transport.websocket import DEFAULT_HOST, build_url


class ConnectionParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    port: str = Field(min_length=1)
    plugin_uuid: str = Field(min_length=1)
    register_event: str = Field(min_length=1)
    info: str = Field(min_length=1)

    @classmethod
    def create(cls, **kwargs: Any) -> "ConnectionParams":
        """Validate and build. Raises ConfigError naming the empty or missing values."""
        try:
            return cls(**kwargs)
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ConfigError(
                f"Missing or empty connection parameters: {', '.join(fields)}",
                {"fields": fields},
            ) from e

    def url(self, host: str = DEFAULT_HOST) -> str:
        return build_url(self.port, host)

    def info_data(self) -> dict[str, Any]:
        """The -info blob decoded (application, plugin and device descriptions)."""
        try:
            data = json.loads(self.info)
        except ValueError as e:
            raise ConfigError(f"-info is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("-info is not a JSON object")
        return data


def connection_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Add the four host-supplied options to a click command."""
    f = click.option("-info", "info", required=True, help="JSON blob describing the host and devices.")(f)
    f = click.option("-registerEvent", "register_event", required=True, help="Event name used to register.")(f)
    f = click.option("-pluginUUID", "plugin_uuid", required=True, help="Identity of this plugin instance.")(f)
    f = click.option("-port", "port", required=True, help="Port of the host WebSocket server.")(f)
    return f


@click.command(context_settings={"ignore_unknown_options": True, "allow_extra_args": True})
@connection_options
def _argv_command(**_kwargs: Any) -> None:
    pass


def parse_argv(argv: Optional[list[str]] = None) -> ConnectionParams:
    """Read connection parameters from process arguments (sys.argv[1:] by default)."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        ctx = _argv_command.make_context("plugin", args)
    except click.ClickException as e:
        raise ConfigError(f"Invalid plugin arguments: {e.format_message()}") from e
    return ConnectionParams.create(**ctx.params)
