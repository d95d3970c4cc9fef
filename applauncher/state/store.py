"""
Launcher Config Store

This module persists the ordered list of application definitions as a
single JSON document in the per-user configuration directory.
"""

import json
from pathlib import Path
from typing import Union

import aiofiles

from applauncher.core.models import ApplicationConfig
from applauncher.utils.errors import PersistenceError, ValidationError
from applauncher.utils.logging import get_logger

logger = get_logger(__name__)


class ConfigStore:
    """
    JSON persistence for application definitions.
    
    A missing file loads as an empty config, and so does a malformed
    one: the launcher starts with nothing registered rather than failing.
    Writes go to a temporary file first and are renamed into place.
    """
    
    def __init__(self, config_file: Union[str, Path]):
        self.config_file = Path(config_file)
        logger.debug(f"ConfigStore using {self.config_file}")
    
    async def load(self) -> ApplicationConfig:
        """Load the definitions from disk."""
        if not self.config_file.exists():
            logger.info(f"Config file not found, starting empty: {self.config_file}")
            return ApplicationConfig()
        
        try:
            async with aiofiles.open(self.config_file, 'r', encoding='utf-8') as f:
                data = await f.read()
            config = ApplicationConfig.from_dict(json.loads(data))
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError,
                ValidationError, IOError) as e:
            logger.warning(f"Ignoring malformed config {self.config_file}: {e}")
            return ApplicationConfig()
        
        logger.debug(f"Loaded configuration from {self.config_file}")
        return config
    
    def save(self, config: ApplicationConfig):
        """
        Write the definitions to disk.
        
        Synchronous, since the registry calls it while holding its definitions lock.
        
        Raises:
            PersistenceError: If the file cannot be written
        """
        temp_file = self.config_file.with_suffix('.tmp')
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
            
            # Atomic rename
            temp_file.replace(self.config_file)
            logger.debug(f"Saved configuration to {self.config_file}")
            
        except (IOError, OSError, TypeError, ValueError) as e:
            if temp_file.exists():
                temp_file.unlink()
            raise PersistenceError(
                f"Failed to save configuration to {self.config_file}: {str(e)}",
                details={'config_file': str(self.config_file), 'error': str(e)}
            ) from e
