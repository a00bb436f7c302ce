"""
Command Line Interface for FRPulse Manager.

Provides commands for managing tunnel client configurations, their
tunneled ports, and the services running them.

Built with Typer for automatic tab completion.
"""

from typing import Annotated, Optional

import typer

from . import __version__
from .commands import (
    register_client_commands,
    register_proxy_commands,
    register_service_commands,
)
from .core.config import get_settings
from .core.logging import setup_logging


app = typer.Typer(
    name="frpulse",
    help="FRPulse Manager - reverse tunnel client configuration",
    add_completion=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    if value:
        typer.echo(f"frpulse-manager version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[bool, typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit.")] = False,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")] = None,
    log_format: Annotated[Optional[str], typer.Option("--log-format", help="Log format (console, json)")] = None,
):
    """
    FRPulse Manager - reverse tunnel client configuration

    Edits the tunneled ports of a client's configuration file and keeps
    the running client service in sync.
    """
    log = get_settings().log
    setup_logging(
        level=log_level or log.level,
        format=log_format or log.format,
        log_file=log.file,
    )


register_client_commands(app)
register_proxy_commands(app)
register_service_commands(app)


def cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
