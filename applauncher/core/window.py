"""
Launcher Window and File Picker Interfaces

The launcher core only needs to show or hide its window and to ask for
an executable path. Toolkit-specific implementations plug in here; the
headless variants are used by the console entry point and in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from applauncher.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FileFilter:
    """A named set of file extensions offered by a file dialog."""
    
    name: str
    extensions: Tuple[str, ...]


EXECUTABLE_FILTERS = (
    FileFilter("Executables", ("exe",)),
    FileFilter("Shortcuts", ("lnk",)),
    FileFilter("All files", ("*",)),
)


class WindowController(ABC):
    """Show or hide the launcher's main window."""
    
    @abstractmethod
    def show(self):
        """Make the window visible."""
    
    @abstractmethod
    def hide(self):
        """Hide the window without exiting."""
    
    @property
    @abstractmethod
    def visible(self) -> bool:
        """Whether the window is currently shown."""


class HeadlessWindowController(WindowController):
    """Window controller without a UI; only tracks visibility."""
    
    def __init__(self, visible: bool = True):
        self._visible = visible
    
    def show(self):
        self._visible = True
        logger.debug("Window shown")
    
    def hide(self):
        self._visible = False
        logger.debug("Window hidden")
    
    @property
    def visible(self) -> bool:
        return self._visible


class FilePicker(ABC):
    """Resolve a filesystem path chosen interactively."""
    
    @abstractmethod
    def pick_file(self, filters: Sequence[FileFilter]) -> Optional[str]:
        """
        Ask the user for a file.
        
        Returns:
            The chosen path, or None if the dialog was cancelled
        """


class StaticFilePicker(FilePicker):
    """File picker that answers with a preset path."""
    
    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.last_filters: Tuple[FileFilter, ...] = ()
    
    def pick_file(self, filters: Sequence[FileFilter]) -> Optional[str]:
        self.last_filters = tuple(filters)
        return self.path
