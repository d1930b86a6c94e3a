#!/usr/bin/env python3

from __future__ import annotations
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from shared.errors import ExitCode, PingError
from shared.log import get_logger
from shared.wire import SOCKET_PATH
from .config import PingConfig
from .ping_client import Connector, PingClient, open_unix_socket

app = typer.Typer(help="Send one ping to the frameforge socket and print the reply.")
console = Console()
logger = get_logger(__name__)


def run_ping(config: PingConfig, connector: Connector = open_unix_socket) -> ExitCode:
    """Run one exchange, print its one-line report and return the matching exit code."""
    client = PingClient(config, connector)
    try:
        result = client.ping()
    except PingError as e:
        console.print(f"[red]{escape(str(e))}[/]", highlight=False, soft_wrap=True)
        return e.exit_code

    # Peer bytes are shown verbatim; color=True keeps click from stripping escape sequences
    typer.echo(f"received: {result.text}", color=True)
    return ExitCode.OK


@app.command()
def ping(
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.0, help="Seconds each of connect/write/read may block; unbounded if omitted"
    ),
    exit_codes: bool = typer.Option(
        False, "--exit-codes", help="Exit 3/4/5 on connect/write/read failure instead of always 0"
    ),
):
    """Ping the frameforge socket once."""
    config = PingConfig(socket_path=SOCKET_PATH, timeout=timeout)
    code = run_ping(config)
    logger.debug("Exchange finished with %s", code.name)
    if exit_codes and code != ExitCode.OK:
        raise typer.Exit(code=int(code))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
