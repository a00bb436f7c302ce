"""
FRPulse Domain Models

Strongly typed Pydantic models for tunnel client configuration.
"""

from .proxy import (
    DEFAULT_LOCAL_ADDRESS,
    MAX_PORT,
    MIN_PORT,
    ProtocolType,
    ProxyEntry,
)
from .document import Document

__all__ = [
    "DEFAULT_LOCAL_ADDRESS",
    "MAX_PORT",
    "MIN_PORT",
    "ProtocolType",
    "ProxyEntry",
    "Document",
]
