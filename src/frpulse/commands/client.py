"""
Client commands for FRPulse CLI.

Contains init and list. ``init`` only writes the client artifact; the
systemd unit is installed separately.
"""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from .. import ui
from ..core.config import get_settings
from ..errors import ArtifactIOError, ProxyValidationError
from ..schemas.client import ClientCreate
from ..services.client_service import create_client_artifact
from ..services.lifecycle import load_document
from .deps import get_paths, get_store


def register_client_commands(app: typer.Typer):
    """Register client subcommands with the app."""

    client_app = typer.Typer(
        help="Manage tunnel client configurations.",
        invoke_without_command=True,
        no_args_is_help=True,
    )
    app.add_typer(client_app, name="client")

    @client_app.command("init")
    def client_init(
        name: Annotated[str, typer.Argument(help="Client name (alphanumeric, '_' and '-')")],
        server_addr: Annotated[str, typer.Option("--server-addr", "-s", help="Server address (IPv4/IPv6 or domain)")],
        token: Annotated[str, typer.Option("--token", help="Authentication token", prompt=True, hide_input=True)],
        server_port: Annotated[int, typer.Option("--server-port", "-p", help="Server port")] = 7000,
        tls: Annotated[bool, typer.Option("--tls/--no-tls", help="Server uses TLS")] = True,
        force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing configuration")] = False,
    ):
        """Create the configuration file of a new client."""
        try:
            data = ClientCreate(
                name=name,
                server_addr=server_addr,
                server_port=server_port,
                token=token,
                tls_enable=tls,
            )
        except ValidationError as e:
            for err in e.errors():
                field = ".".join(str(part) for part in err["loc"])
                ui.error(f"{field}: {err['msg']}")
            raise typer.Exit(1)

        paths = get_paths()
        artifact = paths.client_artifact(data.name)

        try:
            create_client_artifact(
                get_store(),
                artifact,
                data,
                log_dir=get_settings().paths.client_log_dir,
                overwrite=force,
            )
        except (ArtifactIOError, ProxyValidationError) as e:
            ui.error(e.message)
            raise typer.Exit(1)

        ui.success(f"Client '{data.name}' configuration created: {artifact}")
        ui.muted(f"Add ports with: frpulse proxy add {data.name} --local-port <port> --remote-port <port>")

    @client_app.command("list")
    def client_list():
        """List configured clients."""
        paths = get_paths()
        clients = paths.list_clients()

        if not clients:
            ui.info(f"No clients configured in {paths.config_dir}")
            return

        store = get_store()
        table = Table(title="FRPulse Clients")
        table.add_column("Client", style="cyan")
        table.add_column("Server")
        table.add_column("Ports", justify="right")
        table.add_column("Unit", style="dim")

        for client in clients:
            try:
                document, _ = load_document(store, paths.client_artifact(client))
            except ArtifactIOError as e:
                table.add_row(client, f"[red]{e.message}[/red]", "-", paths.client_unit(client))
                continue
            server = document.common.get("server_addr", "-").strip('"')
            port = document.common.get("server_port")
            if port:
                server = f"{server}:{port}"
            table.add_row(client, server, str(len(document.proxies)), paths.client_unit(client))

        ui.console.print(table)
