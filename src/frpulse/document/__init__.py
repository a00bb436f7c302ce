"""
Artifact codec: text <-> Document.
"""

from .parser import DocumentParser, ParserState, ParseWarning, parse_document
from .serializer import serialize_document, serialize_proxy

__all__ = [
    "DocumentParser",
    "ParserState",
    "ParseWarning",
    "parse_document",
    "serialize_document",
    "serialize_proxy",
]
