"""
Unified UI components for FRPulse.

Provides consistent Rich-based styling across all CLI commands.
"""

import sys

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models.document import Document
from .schemas.result import ChangeResult


console = Console(highlight=False)


# Status icons - use ASCII fallbacks on Windows to avoid encoding issues
class Icons:
    """Icons for status indicators (ASCII on Windows, Unicode elsewhere)."""
    if sys.platform == "win32":
        SUCCESS = "[OK]"
        ERROR = "[X]"
        WARNING = "[!]"
        INFO = ">"
    else:
        SUCCESS = "\u2713"  # ✓
        ERROR = "\u2717"    # ✗
        WARNING = "\u26a0"  # ⚠
        INFO = "\u2192"     # →


class Colors:
    """Consistent color scheme."""
    PRIMARY = "cyan"
    SUCCESS = "green"
    ERROR = "red"
    WARNING = "yellow"
    MUTED = "dim"


def status_line(
    message: str,
    status: str = "info",
    indent: int = 2,
) -> None:
    """
    Print a status line with appropriate icon and color.

    Args:
        message: Status message
        status: One of 'success', 'error', 'warning', 'info'
        indent: Number of spaces to indent
    """
    icons = {
        "success": (Icons.SUCCESS, Colors.SUCCESS),
        "error": (Icons.ERROR, Colors.ERROR),
        "warning": (Icons.WARNING, Colors.WARNING),
        "info": (Icons.INFO, Colors.PRIMARY),
    }

    icon, color = icons.get(status, (Icons.INFO, Colors.PRIMARY))
    prefix = " " * indent
    console.print(f"{prefix}[{color}]{icon}[/{color}] {message}")


def success(message: str, indent: int = 2) -> None:
    """Print a success status line."""
    status_line(message, "success", indent)


def error(message: str, indent: int = 2) -> None:
    """Print an error status line."""
    status_line(message, "error", indent)


def warning(message: str, indent: int = 2) -> None:
    """Print a warning status line."""
    status_line(message, "warning", indent)


def info(message: str, indent: int = 2) -> None:
    """Print an info status line."""
    status_line(message, "info", indent)


def muted(message: str, indent: int = 2) -> None:
    """Print a muted/dim message."""
    prefix = " " * indent
    console.print(f"{prefix}[dim]{message}[/dim]")


def proxy_table(document: Document, title: str = "Tunneled Ports") -> Table:
    """Create a table listing the proxies of a document."""
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Local")
    table.add_column("Remote", justify="right")
    table.add_column("Custom Domains")

    for index, proxy in enumerate(document.proxies, start=1):
        local = str(proxy.local_port)
        if proxy.local_address:
            local = f"{proxy.local_address}:{proxy.local_port}"
        table.add_row(
            str(index),
            escape(proxy.name),
            proxy.protocol_type.value,
            escape(local),
            str(proxy.remote_port),
            escape(", ".join(proxy.custom_domains)) or "-",
        )

    return table


def report_change(result: ChangeResult, restart_hint: str) -> None:
    """Print the outcome of a lifecycle operation."""
    for text in result.warnings:
        warning(f"Parse warning: {escape(text)}")

    if not result.success:
        error(f"{escape(result.message)} [dim]({result.error})[/dim]")
        return

    success(escape(result.message))
    if result.restart_error:
        warning(f"Configuration saved, but the restart failed: {escape(result.restart_error)}")
        muted(f"Retry with: {restart_hint}")
    elif result.restarted:
        muted("Tunnel service restarted")
    else:
        muted("Tunnel service not restarted")
