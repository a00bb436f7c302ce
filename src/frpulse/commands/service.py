"""
Service commands for FRPulse CLI.

Restarts and inspects the systemd unit of a client or server.
"""

from typing import Annotated

import typer
from rich.panel import Panel

from .. import ui
from ..errors import ProcessError
from ..paths import FrpulsePaths, sanitize_name
from .deps import check_linux, get_supervisor


def _unit(name: str, server: bool) -> str:
    name = sanitize_name(name)
    return FrpulsePaths.server_unit(name) if server else FrpulsePaths.client_unit(name)


def register_service_commands(app: typer.Typer):
    """Register service commands with the main app."""

    service_app = typer.Typer(
        help="Restart and inspect tunnel services (Linux only).",
        invoke_without_command=True,
        no_args_is_help=True,
    )
    app.add_typer(service_app, name="service")

    @service_app.command("restart")
    def service_restart(
        name: Annotated[str, typer.Argument(help="Client (or server) name")],
        server: Annotated[bool, typer.Option("--server", help="Target a server instead of a client")] = False,
    ):
        """Restart a tunnel service."""
        check_linux()
        unit = _unit(name, server)

        try:
            get_supervisor().restart(unit)
        except ProcessError as e:
            ui.error(e.message)
            raise typer.Exit(1)

        ui.success(f"Service {unit} restarted")

    @service_app.command("status")
    def service_status(
        name: Annotated[str, typer.Argument(help="Client (or server) name")],
        server: Annotated[bool, typer.Option("--server", help="Target a server instead of a client")] = False,
    ):
        """Show tunnel service status."""
        check_linux()
        unit = _unit(name, server)

        try:
            status = get_supervisor().status(unit)
        except ProcessError as e:
            ui.error(e.message)
            raise typer.Exit(1)

        status_color = "green" if status.active else "red"
        status_text = "Running" if status.active else "Stopped"
        boot_text = "Enabled" if status.enabled else "Disabled"

        ui.console.print(Panel(
            f"[bold]Status:[/bold] [{status_color}]{status_text}[/{status_color}]\n"
            f"[bold]Boot:[/bold]   {boot_text}\n\n"
            f"[dim]{status.detail}[/dim]",
            title=f"{unit} Status",
            border_style=status_color
        ))

    @service_app.command("logs")
    def service_logs(
        name: Annotated[str, typer.Argument(help="Client (or server) name")],
        server: Annotated[bool, typer.Option("--server", help="Target a server instead of a client")] = False,
        follow: Annotated[bool, typer.Option("--follow", "-f", help="Follow log output")] = False,
        lines: Annotated[int, typer.Option("--lines", "-n", help="Number of lines to show")] = 50,
    ):
        """View tunnel service logs."""
        check_linux()
        unit = _unit(name, server)
        supervisor = get_supervisor()

        try:
            if follow:
                ui.muted("Following logs (Ctrl+C to exit)...")
                supervisor.follow_logs(unit, lines=lines)
            else:
                ui.console.print(supervisor.logs(unit, lines=lines), markup=False)
        except ProcessError as e:
            ui.error(e.message)
            raise typer.Exit(1)
