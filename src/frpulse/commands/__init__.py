"""
Command modules for FRPulse CLI.

Split into logical groupings:
- client: client configuration files (init, list)
- proxy: tunneled port management (list, add, edit, delete)
- service: systemd service restart, status and logs (Linux)
"""

from .client import register_client_commands
from .proxy import register_proxy_commands
from .service import register_service_commands

__all__ = [
    "register_client_commands",
    "register_proxy_commands",
    "register_service_commands",
]
