"""
Core launcher modules

This package contains the process lifecycle components:
- Application definitions and the process registry
- Platform process controllers, launcher and stopper
- Startup orchestration and the command surface
"""

from applauncher.core.app import LauncherApp
from applauncher.core.launcher import Launcher
from applauncher.core.models import ApplicationConfig, ApplicationDefinition
from applauncher.core.process import (
    PowerShellController,
    ProcessController,
    SpawnController,
    default_controller,
)
from applauncher.core.registry import ProcessRegistry
from applauncher.core.startup import StartupOrchestrator, StartupResult, StartupState
from applauncher.core.stopper import Stopper

__all__ = [
    "LauncherApp",
    "Launcher",
    "ApplicationConfig",
    "ApplicationDefinition",
    "PowerShellController",
    "ProcessController",
    "SpawnController",
    "default_controller",
    "ProcessRegistry",
    "StartupOrchestrator",
    "StartupResult",
    "StartupState",
    "Stopper",
]
