"""
FRPulse Core Module

Core configuration, settings, and utilities.
"""

from .config import (
    Settings,
    PathSettings,
    ServiceSettings,
    LogSettings,
    get_project_root,
    get_settings,
)
from .logging import setup_logging, get_logger

__all__ = [
    # Settings
    "Settings",
    "PathSettings",
    "ServiceSettings",
    "LogSettings",
    "get_project_root",
    "get_settings",
    # Logging
    "setup_logging",
    "get_logger",
]
