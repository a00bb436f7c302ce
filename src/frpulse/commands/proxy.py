"""
Proxy management commands for FRPulse CLI.

Contains the proxy subcommands: list, add, edit, delete. Every change
goes through the lifecycle coordinator, which rewrites the client
artifact and restarts the client unit.
"""

from typing import Annotated, List, Optional

import typer
from rich.markup import escape

from .. import ui
from ..errors import ArtifactIOError
from ..models.proxy import ProtocolType
from ..paths import FrpulsePaths
from ..schemas.operations import AddProxy, DeleteProxy, EditProxy
from ..schemas.proxy import ProxyChanges, ProxyCreate
from ..services.lifecycle import load_document
from .deps import get_coordinator, get_store, require_client


def _finish(result, client: str) -> None:
    ui.report_change(result, restart_hint=f"frpulse service restart {client}")
    if not result.success:
        raise typer.Exit(1)


def register_proxy_commands(app: typer.Typer):
    """Register proxy subcommands with the app."""

    proxy_app = typer.Typer(
        help="Manage the tunneled ports of a client.",
        invoke_without_command=True,
        no_args_is_help=True,
    )
    app.add_typer(proxy_app, name="proxy")

    @proxy_app.command("list")
    def proxy_list(
        client: Annotated[str, typer.Argument(help="Client name")],
    ):
        """List the tunneled ports of a client."""
        name, artifact = require_client(client)

        try:
            document, warnings = load_document(get_store(), artifact)
        except ArtifactIOError as e:
            ui.error(e.message)
            raise typer.Exit(1)

        for w in warnings:
            ui.warning(f"Parse warning: {escape(str(w))}")

        if not document.proxies:
            ui.info(f"No tunneled ports configured for client '{name}'")
            return

        ui.console.print(ui.proxy_table(document, title=f"Tunneled Ports - {name}"))

    @proxy_app.command("add")
    def proxy_add(
        client: Annotated[str, typer.Argument(help="Client name")],
        local_port: Annotated[int, typer.Option("--local-port", "-l", help="Local port")],
        remote_port: Annotated[int, typer.Option("--remote-port", "-r", help="Remote port")],
        protocol: Annotated[ProtocolType, typer.Option("--type", "-t", help="Proxy type")] = ProtocolType.TCP,
        name: Annotated[Optional[str], typer.Option("--name", "-n", help="Proxy name (generated if omitted)")] = None,
        local_ip: Annotated[Optional[str], typer.Option("--local-ip", help="Local address (tcp/udp, default 127.0.0.1)")] = None,
        domains: Annotated[Optional[List[str]], typer.Option("--domain", "-d", help="Custom domain (http/https, repeatable)")] = None,
        no_restart: Annotated[bool, typer.Option("--no-restart", help="Do not restart the client service")] = False,
    ):
        """Add a new tunneled port."""
        client_name, artifact = require_client(client)

        operation = AddProxy(
            proxy=ProxyCreate(
                name=name,
                protocol_type=protocol,
                local_address=local_ip,
                local_port=local_port,
                remote_port=remote_port,
                custom_domains=domains or [],
            ),
            client_name=client_name,
        )
        result = get_coordinator(no_restart).apply_change(
            artifact, operation, FrpulsePaths.client_unit(client_name)
        )
        _finish(result, client_name)

    @proxy_app.command("edit")
    def proxy_edit(
        client: Annotated[str, typer.Argument(help="Client name")],
        name: Annotated[str, typer.Argument(help="Proxy name")],
        local_port: Annotated[Optional[int], typer.Option("--local-port", "-l", help="New local port")] = None,
        remote_port: Annotated[Optional[int], typer.Option("--remote-port", "-r", help="New remote port")] = None,
        protocol: Annotated[Optional[ProtocolType], typer.Option("--type", "-t", help="New proxy type")] = None,
        local_ip: Annotated[Optional[str], typer.Option("--local-ip", help="New local address (tcp/udp)")] = None,
        domains: Annotated[Optional[List[str]], typer.Option("--domain", "-d", help="Replacement custom domain (repeatable)")] = None,
        clear_domains: Annotated[bool, typer.Option("--clear-domains", help="Remove all custom domains")] = False,
        no_restart: Annotated[bool, typer.Option("--no-restart", help="Do not restart the client service")] = False,
    ):
        """Edit a tunneled port; options left out keep their current value."""
        client_name, artifact = require_client(client)

        if domains and clear_domains:
            ui.error("Use either --domain or --clear-domains, not both")
            raise typer.Exit(1)

        changes = {}
        if local_port is not None:
            changes["local_port"] = local_port
        if remote_port is not None:
            changes["remote_port"] = remote_port
        if protocol is not None:
            changes["protocol_type"] = protocol
        if local_ip is not None:
            changes["local_address"] = local_ip
        if domains:
            changes["custom_domains"] = domains
        elif clear_domains:
            changes["custom_domains"] = []

        if not changes:
            ui.warning("Nothing to change")
            raise typer.Exit(0)

        operation = EditProxy(name=name, changes=ProxyChanges(**changes))
        result = get_coordinator(no_restart).apply_change(
            artifact, operation, FrpulsePaths.client_unit(client_name)
        )
        _finish(result, client_name)

    @proxy_app.command("delete")
    def proxy_delete(
        client: Annotated[str, typer.Argument(help="Client name")],
        name: Annotated[str, typer.Argument(help="Proxy name")],
        yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
        no_restart: Annotated[bool, typer.Option("--no-restart", help="Do not restart the client service")] = False,
    ):
        """Delete a tunneled port."""
        client_name, artifact = require_client(client)

        if not yes:
            if not typer.confirm(f"Delete tunneled port '{name}' from client '{client_name}'?"):
                raise typer.Abort()

        result = get_coordinator(no_restart).apply_change(
            artifact, DeleteProxy(name=name), FrpulsePaths.client_unit(client_name)
        )
        _finish(result, client_name)
