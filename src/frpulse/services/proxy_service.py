"""
Proxy service implementing add, edit and delete on a Document.

Every function is pure: it takes a Document and returns a new one,
leaving the input untouched. Disk writes and restarts belong to the
lifecycle coordinator.

Invariants enforced on every mutated entry:
- proxy names are unique within the document
- local and remote ports are within 1-65535
- ``local_address`` is set exactly for tcp/udp
- ``custom_domains`` is only non-empty for http/https
- the common block is never modified
"""

import re
from typing import Optional

from ..core.logging import get_logger
from ..document.parser import COMMON_SECTION
from ..errors import (
    DuplicateNameError,
    InvalidPortError,
    InvalidProxyError,
    NotFoundError,
)
from ..models.document import Document
from ..models.proxy import (
    DEFAULT_LOCAL_ADDRESS,
    MAX_PORT,
    MIN_PORT,
    ProtocolType,
    ProxyEntry,
)
from ..schemas.operations import AddProxy, DeleteProxy, EditProxy
from ..schemas.proxy import ProxyChanges


logger = get_logger(__name__)

PROXY_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


# VALIDATION

def validate_port(field: str, value: int) -> None:
    """Raise ``InvalidPortError`` unless 1 <= value <= 65535."""
    if value < MIN_PORT or value > MAX_PORT:
        raise InvalidPortError(field, value)


def validate_entry(entry: ProxyEntry) -> None:
    """
    Check a proxy entry against the per-entry invariants.

    Raises:
        InvalidProxyError: Bad name or fields inconsistent with the protocol
        InvalidPortError: A port is out of range
    """
    if not PROXY_NAME_PATTERN.match(entry.name):
        raise InvalidProxyError(
            f"Invalid proxy name: {entry.name!r}. Use letters, digits, '_' and '-'"
        )
    if entry.name == COMMON_SECTION:
        raise InvalidProxyError(f"Invalid proxy name: {entry.name!r} is reserved for the common block")

    validate_port("local_port", entry.local_port)
    validate_port("remote_port", entry.remote_port)

    protocol = entry.protocol_type
    if protocol.uses_local_address and not entry.local_address:
        raise InvalidProxyError(f"{protocol.value} proxy {entry.name} requires a local address")
    if not protocol.uses_local_address and entry.local_address:
        raise InvalidProxyError(f"{protocol.value} proxy {entry.name} cannot have a local address")
    if entry.custom_domains and not protocol.supports_custom_domains:
        raise InvalidProxyError(f"{protocol.value} proxy {entry.name} cannot have custom domains")


def _clean_domains(domains: list[str]) -> list[str]:
    """Strip blanks and repeats, keeping first-seen order."""
    cleaned = []
    for domain in domains:
        domain = domain.strip()
        if domain and domain not in cleaned:
            cleaned.append(domain)
    return cleaned


# CREATE

def next_proxy_name(document: Document, protocol: ProtocolType, client_name: str) -> str:
    """
    Generate a default name ``{protocol}_{client}_{n}``.

    ``n`` starts at the current proxy count plus one and is bumped past
    names that are already taken.
    """
    taken = set(document.proxy_names())
    sequence = len(document.proxies) + 1
    while True:
        name = f"{protocol.value}_{client_name}_{sequence}"
        if name not in taken:
            return name
        sequence += 1


def add_proxy(document: Document, entry: ProxyEntry) -> Document:
    """
    Append a proxy entry.

    A tcp/udp entry without a local address gets the loopback default.

    Raises:
        DuplicateNameError: The name is already used
        InvalidPortError: A port is out of range
        InvalidProxyError: Fields are inconsistent with the protocol
    """
    if document.get_proxy(entry.name) is not None:
        raise DuplicateNameError(entry.name)

    entry = entry.model_copy(deep=True)
    entry.custom_domains = _clean_domains(entry.custom_domains)
    if entry.protocol_type.uses_local_address and not entry.local_address:
        entry.local_address = DEFAULT_LOCAL_ADDRESS
    validate_entry(entry)

    updated = document.model_copy(deep=True)
    updated.proxies.append(entry)

    logger.debug("Added proxy", name=entry.name, type=entry.protocol_type.value)
    return updated


# UPDATE

def edit_proxy(document: Document, name: str, changes: ProxyChanges) -> Document:
    """
    Apply field-level changes to a proxy.

    On a protocol change, fields the new protocol does not allow are
    dropped (custom domains for tcp/udp, local address for http/https)
    unless the caller set them explicitly, and tcp/udp get the loopback
    default address. The result is validated before it is returned.

    Raises:
        NotFoundError: No proxy has this name
        InvalidPortError: A port is out of range
        InvalidProxyError: Fields are inconsistent with the protocol
    """
    index = document.index_of(name)
    if index is None:
        raise NotFoundError(name)

    current = document.proxies[index]
    updates = changes.changed_fields()
    entry = current.model_copy(update=updates, deep=True)

    if entry.protocol_type != current.protocol_type:
        if entry.protocol_type.uses_local_address:
            if "custom_domains" not in updates:
                entry.custom_domains = []
        elif "local_address" not in updates:
            entry.local_address = None

    if entry.protocol_type.uses_local_address and not entry.local_address:
        entry.local_address = DEFAULT_LOCAL_ADDRESS
    entry.custom_domains = _clean_domains(entry.custom_domains)
    validate_entry(entry)

    updated = document.model_copy(deep=True)
    updated.proxies[index] = entry

    logger.debug("Edited proxy", name=name, fields=sorted(updates))
    return updated


# DELETE

def delete_proxy(document: Document, name: str) -> Document:
    """
    Remove a proxy; the others keep their names and relative order.

    Raises:
        NotFoundError: No proxy has this name
    """
    index = document.index_of(name)
    if index is None:
        raise NotFoundError(name)

    updated = document.model_copy(deep=True)
    del updated.proxies[index]

    logger.debug("Deleted proxy", name=name)
    return updated


# DISPATCH

def apply_operation(document: Document, operation) -> Document:
    """Run one add/edit/delete operation against a document."""
    if isinstance(operation, AddProxy):
        name = _resolve_name(document, operation)
        return add_proxy(document, operation.proxy.to_entry(name))
    if isinstance(operation, EditProxy):
        return edit_proxy(document, operation.name, operation.changes)
    if isinstance(operation, DeleteProxy):
        return delete_proxy(document, operation.name)
    raise TypeError(f"Unsupported operation: {type(operation).__name__}")


def _resolve_name(document: Document, operation: AddProxy) -> str:
    name: Optional[str] = operation.proxy.name
    if name:
        return name
    if not operation.client_name:
        raise InvalidProxyError("A proxy name or a client name is required")
    return next_proxy_name(document, operation.proxy.protocol_type, operation.client_name)
