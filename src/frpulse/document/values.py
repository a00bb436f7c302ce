"""
Scalar value helpers for the flat TOML subset.

Only what the generator emits is understood: basic and literal strings,
integers, booleans and one-line arrays of strings.
"""

import json
import re
from typing import Optional


_ARRAY_ITEM = re.compile(r'"((?:[^"\\]|\\.)*)"|\'([^\']*)\'|([^,\s]+)')


def decode_string(raw: str) -> str:
    """Decode a quoted string value; bare text is returned stripped."""
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        try:
            return json.loads(raw)
        except ValueError:
            return raw[1:-1]
    if len(raw) >= 2 and raw[0] == raw[-1] == "'":
        return raw[1:-1]
    return raw


def decode_int(raw: str) -> Optional[int]:
    """Decode an integer value, ``None`` if it is not one."""
    text = decode_string(raw).replace("_", "")
    try:
        return int(text)
    except ValueError:
        return None


def decode_string_list(raw: str) -> list[str]:
    """Decode ``["a", "b"]``; a lone string becomes a one element list."""
    raw = raw.strip()
    if raw.startswith("[") and raw.endswith("]"):
        inner = raw[1:-1]
        items = []
        for match in _ARRAY_ITEM.finditer(inner):
            basic, literal, bare = match.groups()
            if basic is not None:
                items.append(decode_string(f'"{basic}"'))
            elif literal is not None:
                items.append(literal)
            elif bare:
                items.append(bare)
        return [item for item in items if item]
    value = decode_string(raw)
    return [value] if value else []


def encode_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def encode_string_list(values: list[str]) -> str:
    return "[" + ", ".join(encode_string(v) for v in values) + "]"


def strip_comment(raw: str) -> str:
    """Remove a trailing ``# comment`` that is not inside a string."""
    quote = None
    escaped = False
    for index, char in enumerate(raw):
        if escaped:
            escaped = False
            continue
        if quote == '"' and char == "\\":
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif char in ('"', "'"):
            quote = char
        elif char == "#":
            return raw[:index].rstrip()
    return raw.strip()
