"""
applauncher - a tray utility that launches and stops a user-curated set
of local applications

It keeps an ordered list of application definitions, starts the enabled
ones at boot with per-app delays, tracks which ones are running and stops
them again, by process id or by process name.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Core imports for easy access
from applauncher.core.app import LauncherApp
from applauncher.core.models import ApplicationConfig, ApplicationDefinition
from applauncher.core.process import ProcessController, default_controller
from applauncher.core.registry import ProcessRegistry

# State
from applauncher.state.store import ConfigStore

# Utility imports
from applauncher.utils.config import LauncherSettings
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
from applauncher.utils.platform import get_platform_info as _get_platform_info

# Version info
VERSION_INFO = tuple(int(part) for part in __version__.split('.') if part.isdigit())

__all__ = [
    # Core classes
    "LauncherApp",
    "ApplicationConfig",
    "ApplicationDefinition",
    "ProcessController",
    "ProcessRegistry",
    "default_controller",
    
    # State
    "ConfigStore",
    "LauncherSettings",
    
    # Exceptions
    "LauncherError",
    "PersistenceError",
    "NotFoundError",
    "LaunchError",
    "NotRunningError",
    "StopError",
    "UnsupportedOperationError",
    "ValidationError",
    
    # Version info
    "__version__",
    "VERSION_INFO",
]

import sys


def _validate_python_version():
    """Validate Python version compatibility"""
    if sys.version_info < (3, 8):
        raise RuntimeError(
            f"applauncher requires Python 3.8 or higher. "
            f"Current version: {sys.version}"
        )


_validate_python_version()
PLATFORM_INFO = _get_platform_info()
PLATFORM_INFO['name_termination_supported'] = default_controller().supports_name_termination


def get_platform_info():
    """Get platform information including the process-controller family"""
    return PLATFORM_INFO.copy()


def create_app(config_file=None, **kwargs) -> "LauncherApp":
    """
    Create a launcher with default settings.
    
    Args:
        config_file: Definitions file, defaults to the per-user location
        **kwargs: Passed through to LauncherApp
        
    Example:
        >>> app = applauncher.create_app()
        >>> asyncio.run(app.start())
    """
    if config_file is None:
        config_file = LauncherSettings.from_env().config_file
    return LauncherApp(store=ConfigStore(config_file), **kwargs)
