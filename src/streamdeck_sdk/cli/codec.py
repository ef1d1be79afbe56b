"""CLI: streamdeck-plugin decode, streamdeck-plugin encode"""

import json
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console

from streamdeck_sdk.errors import MalformedPayload, UnknownEventKind
from streamdeck_sdk.transport.envelope import COMMAND_SPECS, build_envelope, parse_event

console = Console()

COMMAND_TYPES = {spec.event: cls for cls, spec in COMMAND_SPECS.items()}


def _read_envelopes(text: str) -> list[Any]:
    """Accept one JSON document (object or list of objects) or one object per line."""
    try:
        doc = json.loads(text)
    except ValueError:
        return [json.loads(line) for line in text.splitlines() if line.strip()]
    return doc if isinstance(doc, list) else [doc]


def _parse_field(value: str) -> tuple[str, Any]:
    key, sep, raw = value.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected key=value, got {value!r}", param_hint="--field")
    try:
        return key, json.loads(raw)
    except ValueError:
        return key, raw


@click.command("decode")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--json-output", "--json", is_flag=True)
def decode_cmd(source, json_output: bool):
    """Decode inbound envelopes read from SOURCE (stdin by default)."""
    try:
        envelopes = _read_envelopes(source.read())
    except ValueError as e:
        raise click.ClickException(f"Input is not JSON: {e}")

    failed = 0
    for raw in envelopes:
        try:
            event = parse_event(raw)
        except (UnknownEventKind, MalformedPayload) as e:
            failed += 1
            if json_output:
                click.echo(json.dumps({"error": e.code, "message": str(e), "event": e.event}))
            else:
                console.print(f"[red]{e.code}:[/red] {e}")
            continue
        if json_output:
            click.echo(json.dumps({
                "event": event.event,
                "type": type(event).__name__,
                "fields": event.model_dump(mode="json"),
            }))
        else:
            console.print(f"[green]{event.event}[/green]", event)

    if failed:
        raise SystemExit(1)


@click.command("encode")
@click.argument("name", type=click.Choice(sorted(COMMAND_TYPES)))
@click.option("-f", "--field", "fields", multiple=True, help="Command field as key=value; values are JSON when they parse.")
@click.option("--uuid", "plugin_uuid", default="plugin-uuid", show_default=True, help="Session identity used as default context.")
def encode_cmd(name: str, fields: tuple[str, ...], plugin_uuid: str):
    """Print the outbound envelope for command NAME."""
    data = dict(_parse_field(f) for f in fields)
    try:
        command = COMMAND_TYPES[name].model_validate(data)
    except ValidationError as e:
        raise click.UsageError(f"Invalid fields for {name}:\n{e}")
    click.echo(json.dumps(build_envelope(command, plugin_uuid)))
