"""
Launcher

Turns an application definition (or an ad-hoc tool path) plus its
runtime arguments into a started OS process and records it in the
registry.
"""

import asyncio
import functools
from typing import Optional

from applauncher.core.models import name_tracking_key, split_arguments
from applauncher.core.process import ProcessController
from applauncher.core.registry import NAME_TRACKED, ProcessRegistry
from applauncher.utils.errors import LaunchError
from applauncher.utils.logging import get_logger

logger = get_logger(__name__)


class Launcher:
    """
    Start processes and record them in the registry.

    Registered apps with duplicate prevention are started without asking
    for their process id and tracked by name; everything else, including
    ids that are not registered at all, is tracked by PID.
    """

    def __init__(self, registry: ProcessRegistry, controller: ProcessController):
        self.registry = registry
        self.controller = controller

    async def launch(self, app_id: str, path: str, arguments: str = "") -> Optional[int]:
        """
        Launch a process for an app id.

        Args:
            app_id: Registered application id, or any id for a one-off tool
            path: Executable to start
            arguments: Whitespace-delimited argument string

        Returns:
            The tracked PID, or None for name-tracked apps

        Raises:
            LaunchError: If the process could not be started
        """
        app = self.registry.get(app_id)
        argv = split_arguments(arguments)
        loop = asyncio.get_running_loop()

        if app is None:
            logger.info(f"Launching tool {path} for {app_id}")
        else:
            logger.info(f"Launching {app.name} ({app_id})")

        if app is not None and app.prevent_duplicate:
            await loop.run_in_executor(
                None, functools.partial(self.controller.start, path, argv, False)
            )
            self.registry.track(name_tracking_key(app_id), NAME_TRACKED)
            logger.info(f"Launched {app.name} without PID tracking, tracking by name")
            return None

        pid = await loop.run_in_executor(
            None, functools.partial(self.controller.start, path, argv, True)
        )
        if pid is None:
            raise LaunchError(
                "Process started but no process ID was reported",
                details={'app_id': app_id, 'path': path}
            )

        self.registry.track(app_id, pid)
        logger.info(f"Started {app_id} with PID {pid}")
        return pid
