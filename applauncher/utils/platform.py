"""
Launcher Platform Utilities

This module provides platform-family detection and the per-user
directories the launcher stores its configuration in.
"""

import os
import platform
import sys
from typing import Any, Dict

from applauncher.utils.logging import get_logger

logger = get_logger(__name__)

# Process-controller families
FAMILY_WINDOWS = "windows"
FAMILY_POSIX = "posix"


def detect_platform_family() -> str:
    """
    Detect which process-controller family fits the host.
    
    Returns:
        'windows' where PowerShell Start-Process is available, else 'posix'
    """
    if platform.system() == 'Windows':
        return FAMILY_WINDOWS
    return FAMILY_POSIX


def get_platform_info() -> Dict[str, Any]:
    """Describe the current platform for diagnostics."""
    return {
        'system': platform.system(),
        'release': platform.release(),
        'machine': platform.machine(),
        'python_version': sys.version,
        'python_implementation': platform.python_implementation(),
        'family': detect_platform_family(),
    }


def get_config_directory(app_name: str) -> str:
    """Get platform-appropriate config directory."""
    system = platform.system()
    
    if system == 'Windows':
        base = os.getenv('APPDATA', os.path.expanduser('~/AppData/Roaming'))
    elif system == 'Darwin':
        base = os.path.expanduser('~/Library/Preferences')
    else:  # Linux and others
        base = os.getenv('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
    
    return os.path.join(base, app_name)
