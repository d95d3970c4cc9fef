"""
Startup Orchestrator

Launches every enabled definition once at boot, one after another,
honouring each app's delay and duplicate-prevention setting.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from applauncher.core.launcher import Launcher
from applauncher.core.models import ApplicationDefinition
from applauncher.core.process import ProcessController
from applauncher.core.registry import ProcessRegistry
from applauncher.utils.errors import LauncherError
from applauncher.utils.logging import get_logger

logger = get_logger(__name__)


class StartupState(Enum):
    """Per-app progress through startup orchestration."""

    PENDING = "pending"
    PREEMPTING = "preempting"
    DELAYING = "delaying"
    LAUNCHING = "launching"
    LAUNCHED = "launched"
    LAUNCH_FAILED = "launch_failed"


@dataclass
class StartupResult:
    """Outcome of orchestrating one definition."""

    app_id: str
    name: str
    state: StartupState = StartupState.PENDING
    error: Optional[str] = None


class StartupOrchestrator:
    """
    One-shot, strictly sequential launch of enabled definitions.

    Delays suspend only this sequence; other launch/stop commands keep
    being served while it waits.
    """

    def __init__(
        self,
        registry: ProcessRegistry,
        launcher: Launcher,
        controller: ProcessController,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.registry = registry
        self.launcher = launcher
        self.controller = controller
        self._sleep = sleep

    async def run(self) -> List[StartupResult]:
        """
        Launch all enabled definitions in list order.

        Per-app failures are logged and recorded, never raised.
        """
        apps = self.registry.snapshot()
        enabled = [app for app in apps if app.enabled]
        logger.info(f"Launching {len(enabled)} startup applications")

        results = []
        for app in enabled:
            results.append(await self._run_one(app))

        launched = sum(1 for r in results if r.state == StartupState.LAUNCHED)
        logger.info(f"Startup complete: {launched}/{len(results)} launched")
        return results

    async def _run_one(self, app: ApplicationDefinition) -> StartupResult:
        result = StartupResult(app_id=app.id, name=app.name)

        if app.prevent_duplicate:
            result.state = StartupState.PREEMPTING
            logger.info(f"Preventing duplicate launch for: {app.name}")
            await self._preempt(app.name)

        if app.delay > 0:
            result.state = StartupState.DELAYING
            logger.debug(f"Waiting {app.delay}s before launching {app.name}")
            await self._sleep(app.delay)

        result.state = StartupState.LAUNCHING
        try:
            await self.launcher.launch(app.id, app.path, app.arguments)
            result.state = StartupState.LAUNCHED
        except LauncherError as e:
            result.state = StartupState.LAUNCH_FAILED
            result.error = str(e)
            logger.error(f"Failed to launch {app.name}: {e}")
        except Exception as e:
            result.state = StartupState.LAUNCH_FAILED
            result.error = str(e)
            logger.error(f"Unexpected error launching {app.name}: {e}", exc_info=True)

        return result

    async def _preempt(self, name: str):
        if not self.controller.supports_name_termination:
            logger.debug(f"Name-based preemption unavailable on {self.controller.family}, skipping {name}")
            return

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.controller.preempt_name, name)
        except LauncherError as e:
            # Target may simply not be running
            logger.debug(f"Duplicate preemption for {name} failed: {e}")
