"""
Utility modules

This package provides error types, logging, settings
and platform helpers shared by the launcher.
"""

from applauncher.utils.errors import (
    LauncherError,
    PersistenceError,
    NotFoundError,
    LaunchError,
    NotRunningError,
    StopError,
    UnsupportedOperationError,
    ValidationError,
)
from applauncher.utils.logging import get_logger, configure_logging
from applauncher.utils.config import LauncherSettings
from applauncher.utils.platform import detect_platform_family, get_config_directory

__all__ = [
    # Exceptions
    "LauncherError",
    "PersistenceError",
    "NotFoundError",
    "LaunchError",
    "NotRunningError",
    "StopError",
    "UnsupportedOperationError",
    "ValidationError",
    
    # Utilities
    "get_logger",
    "configure_logging",
    "LauncherSettings",
    "detect_platform_family",
    "get_config_directory",
]
