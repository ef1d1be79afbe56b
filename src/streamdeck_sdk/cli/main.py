"""
Stream Deck SDK CLI — `streamdeck-plugin` command.

Commands:
  streamdeck-plugin decode [FILE]        Decode host envelopes into typed events
  streamdeck-plugin encode NAME -f k=v   Build the envelope for a command
  streamdeck-plugin echo -port ...       Run a demo plugin against the host
"""

import asyncio
import logging

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install streamdeck-plugin-sdk[cli]")

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG level.")
def main(verbose: bool):
    """Stream Deck plugin SDK CLI."""
    _setup_logging(verbose)


# Register subcommands from separate modules
from streamdeck_sdk.cli.codec import decode_cmd, encode_cmd
from streamdeck_sdk.cli.echo import echo_cmd

main.add_command(decode_cmd)
main.add_command(encode_cmd)
main.add_command(echo_cmd)


if __name__ == "__main__":
    main()
