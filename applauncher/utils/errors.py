"""
Launcher exception classes

This module defines all custom exceptions used throughout the launcher,
providing clear error messages and a single exception hierarchy that the
command surface can hand back to the UI layer.
"""

from typing import Optional


class LauncherError(Exception):
    """Base exception for all launcher errors"""
    
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PersistenceError(LauncherError):
    """The configuration store could not be read or written"""
    pass


class NotFoundError(LauncherError):
    """A referenced application definition does not exist"""
    pass


class LaunchError(LauncherError):
    """The OS refused or failed to start a process"""
    pass


class NotRunningError(LauncherError):
    """Stop requested for an application with no tracked process"""
    pass


class StopError(LauncherError):
    """The OS refused or failed to terminate a tracked process"""
    pass


class UnsupportedOperationError(LauncherError):
    """The current platform cannot perform the requested operation"""
    pass


class ValidationError(LauncherError):
    """Errors related to input validation"""
    pass


class ConfigError(LauncherError):
    """Errors related to launcher settings"""
    pass


def handle_async_exception(func):
    """
    Async decorator to handle exceptions and convert them to launcher exceptions
    """
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except LauncherError:
            raise
        except Exception as e:
            raise LauncherError(
                f"Unexpected error in {func.__name__}: {str(e)}",
                details={'original_exception': type(e).__name__}
            ) from e
    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    return wrapper
