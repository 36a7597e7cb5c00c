# src/statsd_transport/cli.py
"""statsd-transport command line interface.

Pushes raw, already-formatted lines at a local agent through the same
connection layer applications use. Useful for checking that an agent is
listening where the environment says it is.
"""

from __future__ import annotations

import typer

from statsd_transport import __version__
from statsd_transport.connection import Connection
from statsd_transport.errors import TransportConfigurationError
from statsd_transport.telemetry import CounterTelemetry
from statsd_transport.transports import UDPConnection, UDSConnection

__all__ = ["app"]

app = typer.Typer(
    name="statsd-transport",
    help="Send raw statsd lines to a local agent.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"statsd-transport version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every sent message (debug level).",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Send raw statsd lines to a local agent."""
    from statsd_transport.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")


@app.command()
def send(
    messages: list[str] = typer.Argument(
        ...,
        help="Pre-formatted lines; each one is a single write.",
    ),
    host: str | None = typer.Option(
        None,
        "--host",
        help="Agent host (default: $DD_AGENT_HOST or 127.0.0.1).",
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        help="Agent UDP port (default: $DD_DOGSTATSD_PORT or 8125).",
    ),
    socket_path: str | None = typer.Option(
        None,
        "--socket",
        help="Send over this Unix stream socket instead of UDP.",
    ),
) -> None:
    """Write each message once and report what was sent or dropped."""
    telemetry = CounterTelemetry()

    if socket_path is not None and (host is not None or port is not None):
        typer.secho(
            "Warning: --host/--port ignored because --socket is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )

    connection: Connection
    try:
        if socket_path is not None:
            connection = UDSConnection(socket_path, telemetry=telemetry)
        else:
            connection = UDPConnection(host, port, telemetry=telemetry)
    except TransportConfigurationError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2) from None

    with connection:
        for message in messages:
            connection.write(message)

    stats = telemetry.snapshot()
    typer.echo(
        f"sent {stats.packets_sent} message(s) ({stats.bytes_sent} bytes), "
        f"dropped {stats.packets_dropped} ({stats.bytes_dropped} bytes)"
    )
    if stats.packets_dropped:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
