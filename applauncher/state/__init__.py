"""
State management modules

This package persists the launcher's application definitions
as JSON in the per-user configuration directory.
"""

from applauncher.state.store import ConfigStore

__all__ = [
    "ConfigStore",
]
