"""
Launcher Application Class

This module provides the LauncherApp class that owns the registry and its
collaborators and exposes the commands the UI layer calls.
"""

import asyncio
from typing import Dict, List, Optional

from applauncher.core.launcher import Launcher
from applauncher.core.models import ApplicationDefinition
from applauncher.core.process import ProcessController, default_controller
from applauncher.core.registry import ProcessRegistry
from applauncher.core.startup import StartupOrchestrator, StartupResult
from applauncher.core.stopper import Stopper
from applauncher.core.window import (
    EXECUTABLE_FILTERS,
    FilePicker,
    HeadlessWindowController,
    WindowController,
)
from applauncher.state.store import ConfigStore
from applauncher.utils.config import LauncherSettings
from applauncher.utils.errors import handle_async_exception
from applauncher.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

# Tray menu command ids
MENU_SHOW = "show"
MENU_HIDE = "hide"
MENU_QUIT = "quit"


class LauncherApp:
    """
    Owner of the launcher's state and the command surface for the UI.

    All commands are methods on one explicitly constructed object; the
    registry inside it is the only shared state.
    """

    def __init__(
        self,
        store: ConfigStore,
        controller: Optional[ProcessController] = None,
        window: Optional[WindowController] = None,
        file_picker: Optional[FilePicker] = None,
        orchestrator_sleep=None,
    ):
        """
        Initialize the launcher.

        Args:
            store: Config store holding the definitions
            controller: Process controller, defaults to the host platform's
            window: Window controller for show/hide commands
            file_picker: File picker for the "browse" command
            orchestrator_sleep: Awaitable sleep used between startup launches
        """
        self.store = store
        self.controller = controller or default_controller()
        self.window = window
        self.file_picker = file_picker

        self.registry = ProcessRegistry(store=store)
        self.launcher = Launcher(self.registry, self.controller)
        self.stopper = Stopper(self.registry, self.controller)

        orchestrator_kwargs = {}
        if orchestrator_sleep is not None:
            orchestrator_kwargs['sleep'] = orchestrator_sleep
        self.orchestrator = StartupOrchestrator(
            self.registry, self.launcher, self.controller, **orchestrator_kwargs
        )

        self.is_initialized = False
        self._startup_task: Optional[asyncio.Task] = None
        self._exit_event: Optional[asyncio.Event] = None

        logger.info(f"LauncherApp initialized ({self.controller.family} controller)")

    @classmethod
    def from_settings(cls, settings: LauncherSettings, **kwargs) -> "LauncherApp":
        """Build a launcher storing its definitions where settings say."""
        return cls(store=ConfigStore(settings.config_file), **kwargs)

    # Lifecycle

    @handle_async_exception
    async def initialize(self):
        """Load the persisted definitions into the registry."""
        if self.is_initialized:
            logger.warning("Launcher already initialized")
            return

        config = await self.store.load()
        self.registry.load(config)
        self.is_initialized = True

    async def start(self, run_startup_apps: bool = True):
        """
        Initialize and schedule the one-shot startup orchestration.

        The orchestration runs as a background task owned by the app.
        """
        await self.initialize()
        self._exit_event = asyncio.Event()

        if run_startup_apps:
            self._startup_task = asyncio.create_task(self.launch_startup_apps())
            self._startup_task.add_done_callback(self._on_startup_done)

    def _on_startup_done(self, task: asyncio.Task):
        if task.cancelled():
            logger.info("Startup orchestration cancelled")
            return

        error = task.exception()
        if error is not None:
            logger.error(f"Failed to launch startup apps: {error}", exc_info=error)

    async def wait_for_exit(self):
        """Block until a quit command is received."""
        if self._exit_event is None:
            self._exit_event = asyncio.Event()
        await self._exit_event.wait()

    async def shutdown(self):
        """Stop the startup task if it is still running."""
        if self._startup_task and not self._startup_task.done():
            self._startup_task.cancel()
            try:
                await self._startup_task
            except asyncio.CancelledError:
                pass
        logger.info("Launcher shut down")

    # Definition commands

    def list_apps(self) -> List[ApplicationDefinition]:
        return self.registry.list()

    def add_app(
        self,
        name: str,
        path: str,
        arguments: str = "",
        description: str = "",
        enabled: bool = True,
        delay: int = 0,
        prevent_duplicate: bool = False,
        auto_start: bool = False,
    ) -> ApplicationDefinition:
        return self.registry.add(
            name=name,
            path=path,
            arguments=arguments,
            description=description,
            enabled=enabled,
            delay=delay,
            prevent_duplicate=prevent_duplicate,
            auto_start=auto_start,
        )

    def update_app(
        self,
        id: str,
        name: str,
        path: str,
        arguments: str,
        description: str,
        enabled: bool,
        delay: int,
        prevent_duplicate: bool,
        auto_start: bool,
    ) -> ApplicationDefinition:
        return self.registry.update(
            id,
            name=name,
            path=path,
            arguments=arguments,
            description=description,
            enabled=enabled,
            delay=delay,
            prevent_duplicate=prevent_duplicate,
            auto_start=auto_start,
        )

    def remove_app(self, id: str):
        self.registry.remove(id)

    def reset_config(self):
        """Clear all definitions (development/debug helper)."""
        self.registry.reset()

    # Process commands

    async def launch_app(self, app_id: str, path: str, arguments: str = "") -> Optional[int]:
        """
        Launch a registered app or an ad-hoc tool.

        Raises:
            LaunchError: If the process could not be started
        """
        return await self.launcher.launch(app_id, path, arguments)

    def stop_app(self, app_id: str):
        """
        Stop a tracked app.

        Raises:
            NotRunningError, StopError, UnsupportedOperationError
        """
        self.stopper.stop(app_id)

    async def async_stop_app(self, app_id: str):
        """Stop a tracked app on the default executor, keeping the event loop free."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.stop_app, app_id)

    def is_running(self, app_id: str) -> bool:
        return self.registry.is_running(app_id)

    async def launch_startup_apps(self) -> List[StartupResult]:
        """Launch every enabled app once; per-app failures are only logged."""
        return await self.orchestrator.run()

    def refresh_running(self) -> List[str]:
        """Forget PID-tracked apps whose process has exited."""
        return self.registry.prune(self.controller.is_alive)

    # Window, tray and dialog commands

    def show_window(self):
        if self.window is not None:
            self.window.show()

    def hide_window(self):
        if self.window is not None:
            self.window.hide()

    def on_close_requested(self):
        """Closing the window hides it; the launcher keeps running."""
        self.hide_window()

    def handle_menu_command(self, command: str):
        """Dispatch a tray menu command."""
        if command == MENU_SHOW:
            self.show_window()
        elif command == MENU_HIDE:
            self.hide_window()
        elif command == MENU_QUIT:
            logger.info("Quit requested")
            if self._exit_event is None:
                self._exit_event = asyncio.Event()
            self._exit_event.set()
        else:
            logger.debug(f"Ignoring unknown menu command: {command}")

    def open_file_dialog(self) -> Optional[str]:
        """Ask for an executable path; None when cancelled or unavailable."""
        if self.file_picker is None:
            logger.debug("No file picker configured")
            return None
        return self.file_picker.pick_file(EXECUTABLE_FILTERS)

    def get_status(self) -> Dict[str, bool]:
        """Running state for every registered app, keyed by id."""
        return {app.id: self.registry.is_running(app.id) for app in self.registry.list()}


async def _run(settings: LauncherSettings):
    app = LauncherApp.from_settings(settings, window=HeadlessWindowController())
    await app.start(run_startup_apps=settings.run_startup_apps)
    try:
        await app.wait_for_exit()
    finally:
        await app.shutdown()


def main():
    """Console entry point: load definitions, run startup apps, wait for quit."""
    settings = LauncherSettings.from_env()
    configure_logging(settings.log_level, settings.log_file)
    logger.info(f"Using configuration at {settings.config_file}")

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")


if __name__ == "__main__":
    main()
