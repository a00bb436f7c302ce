"""
FRPulse Manager - reverse tunnel client configuration

Parses a tunnel client's configuration file into a document model,
applies proxy additions, edits and deletions, writes the file back
atomically and restarts the client service.
"""

__version__ = "1.0.0"
__author__ = "FRPulse Team"

from .models import Document, ProtocolType, ProxyEntry
from .document import DocumentParser, ParseWarning, parse_document, serialize_document
from .services import (
    LifecycleCoordinator,
    add_proxy,
    delete_proxy,
    edit_proxy,
)

__all__ = [
    "Document",
    "ProtocolType",
    "ProxyEntry",
    "DocumentParser",
    "ParseWarning",
    "parse_document",
    "serialize_document",
    "LifecycleCoordinator",
    "add_proxy",
    "delete_proxy",
    "edit_proxy",
]
