"""
FRPulse Services

Proxy mutations, the change lifecycle and client artifact creation.
"""

from .proxy_service import (
    add_proxy,
    apply_operation,
    delete_proxy,
    edit_proxy,
    next_proxy_name,
    validate_entry,
)
from .lifecycle import LifecycleCoordinator, load_document
from .client_service import build_client_document, create_client_artifact

__all__ = [
    "add_proxy",
    "apply_operation",
    "delete_proxy",
    "edit_proxy",
    "next_proxy_name",
    "validate_entry",
    "LifecycleCoordinator",
    "load_document",
    "build_client_document",
    "create_client_artifact",
]
