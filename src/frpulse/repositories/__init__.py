"""
FRPulse Repositories

Storage layer for configuration artifacts.
"""

from .base import FileStore
from .file_store import LocalFileStore

__all__ = [
    "FileStore",
    "LocalFileStore",
]
