"""
Shared dependencies for CLI commands.
"""

import sys
from pathlib import Path
from typing import Optional

import typer

from .. import ui
from ..core.config import get_settings
from ..paths import FrpulsePaths, sanitize_name
from ..repositories.file_store import LocalFileStore
from ..services.lifecycle import LifecycleCoordinator
from ..supervisor import SystemdSupervisor


def get_paths() -> FrpulsePaths:
    """Path manager for the configured artifact directory."""
    return FrpulsePaths.from_settings(get_settings())


def get_store() -> LocalFileStore:
    return LocalFileStore()


def get_supervisor() -> SystemdSupervisor:
    """Systemd supervisor built from settings."""
    service = get_settings().service
    return SystemdSupervisor(
        systemctl=service.systemctl,
        journalctl=service.journalctl,
        timeout=service.timeout,
    )


def get_coordinator(no_restart: bool = False) -> LifecycleCoordinator:
    """Lifecycle coordinator; restarts are skipped when disabled."""
    supervisor: Optional[SystemdSupervisor] = None
    if not no_restart and get_settings().service.restart_after_change:
        supervisor = get_supervisor()
    return LifecycleCoordinator(get_store(), supervisor)


def require_client(client: str) -> tuple[str, Path]:
    """
    Resolve a client name to its artifact, exiting if it does not exist.

    Returns:
        Tuple of (sanitised client name, artifact path)
    """
    name = sanitize_name(client)
    artifact = get_paths().client_artifact(name)
    if not name or not artifact.is_file():
        ui.error(f"Configuration file not found for client '{client}': {artifact}")
        ui.muted("Create one with: frpulse client init <name>")
        raise typer.Exit(1)
    return name, artifact


def check_linux() -> None:
    """Check if running on Linux."""
    if sys.platform != "linux":
        ui.error("Service management is only available on Linux")
        raise typer.Exit(1)
