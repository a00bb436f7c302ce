"""
Serializer for tunnel client artifacts.

The common block is written first in stored order, then every proxy as
its own named section with fields in canonical order. Pass-through keys
follow the canonical fields in the order they were read.

A name that cannot be written as a bare section header goes under a
``[[proxies]]`` header instead and is carried by its ``name`` key.
"""

import re
from typing import Optional

from ..models.document import Document
from ..models.proxy import ProxyEntry
from .parser import COMMON_SECTION, LEGACY_PROXY_ARRAY
from .values import encode_string, encode_string_list


_BARE_SECTION = re.compile(r"^[A-Za-z0-9_-]+$")


def section_header(proxy: ProxyEntry) -> str:
    if _BARE_SECTION.match(proxy.name) and proxy.name != COMMON_SECTION:
        return f"[{proxy.name}]"
    return f"[[{LEGACY_PROXY_ARRAY}]]"


def serialize_proxy(proxy: ProxyEntry) -> list[str]:
    """Render one proxy section as lines."""
    lines = [
        section_header(proxy),
        f"name = {encode_string(proxy.name)}",
        f"type = {encode_string(proxy.protocol_type.value)}",
    ]
    if proxy.local_address:
        lines.append(f"local_ip = {encode_string(proxy.local_address)}")
    lines.append(f"local_port = {proxy.local_port}")
    lines.append(f"remote_port = {proxy.remote_port}")
    if proxy.custom_domains:
        lines.append(f"custom_domains = {encode_string_list(proxy.custom_domains)}")
    for key, raw in proxy.extra.items():
        lines.append(f"{key} = {raw}")
    return lines


def serialize_document(document: Document, header_comment: Optional[str] = None) -> str:
    """
    Render a Document as artifact text.

    Args:
        document: The document to render
        header_comment: Optional banner written as a leading ``#`` line

    Returns:
        Artifact text ending with a newline
    """
    lines = []
    if header_comment:
        lines.append(f"# {header_comment}")
        lines.append("")

    lines.append(f"[{COMMON_SECTION}]")
    for key, raw in document.common.items():
        lines.append(f"{key} = {raw}")

    for proxy in document.proxies:
        lines.append("")
        lines.extend(serialize_proxy(proxy))

    return "\n".join(lines) + "\n"
