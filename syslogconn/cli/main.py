#!/usr/bin/env python3
"""
Main CLI entry point for syslogconn.

Sends raw payloads to a syslog sink over UDP, TCP or TLS, and probes whether
a sink accepts connections with a given TLS setup.
"""

import sys
from pathlib import Path
from typing import Any

import click
from loguru import logger
from rich.console import Console

from ..config import SyslogSettings
from ..core.logging import SCOPE_ALIASES, configure_logging
from ..core.transport import SyslogConnection, TransportError, connect

console = Console()


def _read_pem(path: str | None) -> str | None:
    if path is None:
        return None
    try:
        return Path(path).read_text(encoding="ascii")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read PEM file {path}: {e}[/red]")
        sys.exit(1)


def _build_config(
    transport: str,
    timeout: int,
    ca: str | None,
    cert: str | None,
    key: str | None,
    server_name: str | None,
    insecure_skip_verify: bool,
) -> dict[str, Any]:
    config: dict[str, Any] = {"transport": transport, "timeout": timeout}
    if transport == "tls":
        config["tls"] = {
            "ca": _read_pem(ca),
            "cert": _read_pem(cert),
            "key": _read_pem(key),
            "serverName": server_name,
            "insecureSkipVerify": insecure_skip_verify,
        }
    return config


def connection_options(func):
    """Attach the shared connection options to a command.

    Defaults are read from ``SyslogSettings`` when the command runs.
    """
    options = [
        click.option(
            "--address",
            "-a",
            default=lambda: SyslogSettings().address,
            show_default="SYSLOGCONN_ADDRESS or localhost:514",
            help="Sink address (host:port)",
        ),
        click.option(
            "--transport",
            "-t",
            default=lambda: SyslogSettings().transport,
            show_default="SYSLOGCONN_TRANSPORT or udp",
            help="Transport: udp, tcp or tls (anything else means udp)",
        ),
        click.option(
            "--timeout",
            type=click.IntRange(min=0),
            default=lambda: SyslogSettings().timeout,
            show_default="SYSLOGCONN_TIMEOUT or 0",
            help="Connection deadline in seconds (0 disables it)",
        ),
        click.option(
            "--ca", type=click.Path(exists=True, dir_okay=False), help="CA bundle (PEM)"
        ),
        click.option(
            "--cert",
            type=click.Path(exists=True, dir_okay=False),
            help="Client certificate (PEM)",
        ),
        click.option(
            "--key",
            type=click.Path(exists=True, dir_okay=False),
            help="Client private key (PEM)",
        ),
        click.option("--server-name", help="Override TLS server name"),
        click.option(
            "--insecure-skip-verify",
            is_flag=True,
            help="Skip TLS certificate verification",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _open(address: str, **options: Any) -> SyslogConnection:
    try:
        return connect(address, _build_config(**options))
    except TransportError as e:
        console.print(f"[red]Connection to {address} failed: {e}[/red]")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--debug-scope",
    "debug_scopes",
    multiple=True,
    help=(
        "Log this module at DEBUG; repeatable. Accepts "
        f"{', '.join(SCOPE_ALIASES)} or a dotted module path"
    ),
)
@click.pass_context
def cli(ctx, verbose: bool, debug_scopes: tuple[str, ...]):
    """
    syslogconn command line.

    Send raw messages to syslog sinks over UDP, TCP or TLS.
    """
    settings = SyslogSettings()
    configure_logging(
        "DEBUG" if verbose else settings.log_level,
        debug_scopes=debug_scopes or settings.debug_scopes,
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("messages", nargs=-1)
@connection_options
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Send the messages N times",
)
@click.option(
    "--newline/--no-newline", default=False, help="Append a newline to each message"
)
def send(
    messages: tuple[str, ...],
    address: str,
    count: int,
    newline: bool,
    **options: Any,
):
    """Send MESSAGES verbatim to the sink (stdin lines when none are given)."""
    if not messages:
        messages = tuple(line.rstrip("\n") for line in click.get_text_stream("stdin"))

    suffix = "\n" if newline else ""
    sent = 0
    with _open(address, **options) as conn:
        try:
            for _ in range(count):
                for message in messages:
                    conn.send(f"{message}{suffix}")
                    sent += 1
        except TransportError as e:
            console.print(
                f"[red]Send to {address} failed after {sent} message(s): {e}[/red]"
            )
            sys.exit(1)

        logger.info(f"Sent {sent} message(s) to {address}")
        console.print(
            f"[green]Sent {sent} message(s) to {address} "
            f"over {conn.transport.value}[/green]"
        )


@cli.command()
@connection_options
def probe(address: str, **options: Any):
    """Connect to the sink, report the established transport and disconnect."""
    with _open(address, **options) as conn:
        secure = " (TLS)" if conn.is_secure else ""
        console.print(
            f"[green]Connected to {conn.address} "
            f"over {conn.transport.value}{secure}[/green]"
        )


def main():
    """Main CLI entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
