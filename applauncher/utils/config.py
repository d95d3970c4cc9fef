"""
Launcher Settings

Runtime settings for the launcher process, resolved from environment
variables with per-user platform defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from applauncher.utils.errors import ConfigError
from applauncher.utils.platform import get_config_directory

DEFAULT_APP_NAME = "applauncher"
CONFIG_FILE_NAME = "config.json"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LauncherSettings:
    """Settings for one launcher process."""
    
    app_name: str = DEFAULT_APP_NAME
    config_dir: Optional[Path] = None
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    run_startup_apps: bool = True
    
    def __post_init__(self):
        if self.config_dir is None:
            self.config_dir = Path(get_config_directory(self.app_name))
        else:
            self.config_dir = Path(self.config_dir)
        
        if self.log_file is not None:
            self.log_file = Path(self.log_file)
        
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level: {self.log_level}",
                details={'allowed': list(_LOG_LEVELS)}
            )
    
    @property
    def config_file(self) -> Path:
        """Location of the persisted application definitions."""
        return self.config_dir / CONFIG_FILE_NAME
    
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LauncherSettings":
        """
        Build settings from environment variables.
        
        Recognised variables: APPLAUNCHER_CONFIG_DIR, APPLAUNCHER_LOG_LEVEL,
        APPLAUNCHER_LOG_FILE and APPLAUNCHER_NO_STARTUP.
        """
        env = os.environ if environ is None else environ
        
        config_dir = env.get("APPLAUNCHER_CONFIG_DIR") or None
        log_file = env.get("APPLAUNCHER_LOG_FILE") or None
        
        return cls(
            config_dir=Path(config_dir) if config_dir else None,
            log_level=env.get("APPLAUNCHER_LOG_LEVEL", "INFO") or "INFO",
            log_file=Path(log_file) if log_file else None,
            run_startup_apps=env.get("APPLAUNCHER_NO_STARTUP", "") != "1",
        )
