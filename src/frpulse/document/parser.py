"""
Line-oriented parser for tunnel client artifacts.

The parser is a small state machine over lines:

- ``IN_COMMON``: key/value lines go to the common block. This is also the
  initial state, so keys written before any header are kept as common.
- ``IN_PROXY``: key/value lines go to the proxy block being accumulated.
- ``NONE``: inside a section we do not model; lines are skipped.

Headers and values may carry a trailing ``# comment``. Parsing never fails
on content. Anything that cannot be understood is
skipped and recorded as a ``ParseWarning``.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..core.logging import get_logger
from ..models.document import Document
from ..models.proxy import ProtocolType, ProxyEntry
from .values import decode_int, decode_string, decode_string_list, strip_comment


logger = get_logger(__name__)

COMMON_SECTION = "common"
LEGACY_PROXY_ARRAY = "proxies"

PROXY_KEYS = ("name", "type", "local_ip", "local_port", "remote_port", "custom_domains")

_ARRAY_HEADER = re.compile(r"^\[\[\s*([^\[\]]+?)\s*\]\]$")
_HEADER = re.compile(r"^\[\s*([^\[\]]+?)\s*\]$")
_KEY_VALUE = re.compile(r"^([A-Za-z0-9_.\-]+)\s*=\s*(.*)$")


class ParserState(str, Enum):
    """Where the parser currently is in the document."""
    NONE = "none"
    IN_COMMON = "in_common"
    IN_PROXY = "in_proxy"


@dataclass
class ParseWarning:
    """A line the parser skipped or had to reinterpret."""
    line_number: int
    line: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.reason} ({self.line!r})"


@dataclass
class _ProxyBlock:
    """Raw key/value lines of one proxy section."""
    header: Optional[str]
    line_number: int
    fields: dict[str, str] = field(default_factory=dict)


class DocumentParser:
    """
    Convert artifact text into a ``Document``.

    A parser instance is single-use per call to ``parse``; the warnings of
    the last parse are available on ``warnings``.
    """

    def __init__(self) -> None:
        self.warnings: list[ParseWarning] = []
        self._state = ParserState.IN_COMMON
        self._common: dict[str, str] = {}
        self._proxies: list[ProxyEntry] = []
        self._block: Optional[_ProxyBlock] = None

    def parse(self, text: str) -> Document:
        self.warnings = []
        self._state = ParserState.IN_COMMON
        self._common = {}
        self._proxies = []
        self._block = None

        for line_number, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            if stripped.startswith("["):
                self._enter_section(strip_comment(stripped), line_number)
                continue

            match = _KEY_VALUE.match(stripped)
            if match is None:
                self._warn(line_number, stripped, "not a key/value line")
                continue

            key, raw = match.group(1), strip_comment(match.group(2))
            if self._state is ParserState.IN_COMMON:
                if key in self._common:
                    self._warn(line_number, stripped, f"duplicate common key '{key}', last value kept")
                self._common[key] = raw
            elif self._state is ParserState.IN_PROXY:
                if key in self._block.fields:
                    self._warn(line_number, stripped, f"duplicate key '{key}', last value kept")
                self._block.fields[key] = raw

        self._close_block()
        self._check_duplicate_names()

        return Document(common=self._common, proxies=self._proxies)

    def _enter_section(self, stripped: str, line_number: int) -> None:
        self._close_block()

        array_match = _ARRAY_HEADER.match(stripped)
        if array_match:
            if array_match.group(1) == LEGACY_PROXY_ARRAY:
                self._state = ParserState.IN_PROXY
                self._block = _ProxyBlock(header=None, line_number=line_number)
            else:
                self._warn(line_number, stripped, "unsupported array section, skipped")
                self._state = ParserState.NONE
            return

        match = _HEADER.match(stripped)
        if match is None:
            self._warn(line_number, stripped, "malformed section header, section skipped")
            self._state = ParserState.NONE
            return

        name = match.group(1)
        if name == COMMON_SECTION:
            self._state = ParserState.IN_COMMON
        else:
            self._state = ParserState.IN_PROXY
            self._block = _ProxyBlock(header=name, line_number=line_number)

    def _close_block(self) -> None:
        block, self._block = self._block, None
        if block is None:
            return

        fields = block.fields
        header_line = f"[{block.header}]" if block.header else f"[[{LEGACY_PROXY_ARRAY}]]"

        name = decode_string(fields["name"]) if "name" in fields else block.header
        if not name:
            self._warn(block.line_number, header_line, "proxy without a name, dropped")
            return
        if name == COMMON_SECTION:
            self._warn(block.line_number, header_line, f"proxy named '{COMMON_SECTION}', dropped")
            return

        protocol = ProtocolType.TCP
        if "type" in fields:
            raw_type = decode_string(fields["type"]).lower()
            try:
                protocol = ProtocolType(raw_type)
            except ValueError:
                self._warn(block.line_number, header_line, f"unsupported type '{raw_type}', using tcp")
        else:
            self._warn(block.line_number, header_line, "missing type, using tcp")

        ports = {}
        for key in ("local_port", "remote_port"):
            value = decode_int(fields[key]) if key in fields else None
            if value is None:
                self._warn(block.line_number, header_line, f"missing or non-integer {key}, proxy dropped")
                return
            ports[key] = value

        self._proxies.append(ProxyEntry(
            name=name,
            protocol_type=protocol,
            local_address=decode_string(fields["local_ip"]) if "local_ip" in fields else None,
            local_port=ports["local_port"],
            remote_port=ports["remote_port"],
            custom_domains=decode_string_list(fields["custom_domains"]) if "custom_domains" in fields else [],
            extra={k: v for k, v in fields.items() if k not in PROXY_KEYS},
        ))

    def _check_duplicate_names(self) -> None:
        seen = set()
        for proxy in self._proxies:
            if proxy.name in seen:
                self._warn(0, f"[{proxy.name}]", f"duplicate proxy name '{proxy.name}'")
            seen.add(proxy.name)

    def _warn(self, line_number: int, line: str, reason: str) -> None:
        warning = ParseWarning(line_number=line_number, line=line, reason=reason)
        self.warnings.append(warning)
        logger.warning("Artifact parse warning", line=line_number, reason=reason)


def parse_document(text: str) -> Document:
    """Parse artifact text into a Document, discarding warnings."""
    return DocumentParser().parse(text)
