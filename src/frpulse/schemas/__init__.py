"""
FRPulse Schemas

Request and result schemas exchanged between the CLI and the services.
These are separate from domain models to control what callers supply.
"""

from .proxy import ProxyCreate, ProxyChanges
from .client import ClientCreate, is_valid_host
from .operations import AddProxy, EditProxy, DeleteProxy, ProxyOperation
from .result import ChangeResult, LifecycleState

__all__ = [
    # Proxy schemas
    "ProxyCreate",
    "ProxyChanges",
    # Client schemas
    "ClientCreate",
    "is_valid_host",
    # Operations
    "AddProxy",
    "EditProxy",
    "DeleteProxy",
    "ProxyOperation",
    # Results
    "ChangeResult",
    "LifecycleState",
]
