"""
Stopper

Terminates tracked processes, by PID or by process name depending on
how the app was launched.
"""

from applauncher.core.models import name_tracking_key
from applauncher.core.process import ProcessController
from applauncher.core.registry import ProcessRegistry
from applauncher.utils.errors import NotRunningError, UnsupportedOperationError
from applauncher.utils.logging import get_logger

logger = get_logger(__name__)


class Stopper:
    """Stop tracked processes and drop their registry entries."""

    def __init__(self, registry: ProcessRegistry, controller: ProcessController):
        self.registry = registry
        self.controller = controller

    def stop(self, app_id: str):
        """
        Stop the process tracked for an app.

        The registry entry is removed before termination is attempted, so
        the app reads as not running even when termination fails.

        Raises:
            NotRunningError: If nothing is tracked for the app
            StopError: If the OS fails to terminate the process
            UnsupportedOperationError: If name termination is unavailable
        """
        app = self.registry.get(app_id)
        by_name = app is not None and app.prevent_duplicate
        key = name_tracking_key(app_id) if by_name else app_id

        handle = self.registry.untrack(key)
        if handle is None:
            raise NotRunningError(
                "Application not found or not running",
                details={'app_id': app_id}
            )

        if by_name:
            if not self.controller.supports_name_termination:
                raise UnsupportedOperationError(
                    "Process name based termination not supported on this platform",
                    details={'app_id': app_id, 'name': app.name}
                )
            logger.info(f"Stopping process by name: {app.name} for app: {app_id}")
            self.controller.stop_name(app.name)
            logger.info(f"Successfully stopped process by name: {app.name}")
        else:
            logger.info(f"Stopping process ID: {handle} for app: {app_id}")
            self.controller.stop_pid(handle)
            logger.info(f"Successfully stopped process {handle}")
