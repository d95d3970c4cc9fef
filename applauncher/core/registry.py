"""
Launcher Process Registry

This module owns the two pieces of shared state in the launcher: the
ordered list of application definitions and the map of running processes.
Every read and write goes through the registry under mutual exclusion.
"""

import threading
from typing import Callable, Dict, List, Optional, Tuple

from applauncher.core.models import (
    ApplicationConfig,
    ApplicationDefinition,
    name_tracking_key,
)
from applauncher.utils.errors import NotFoundError, PersistenceError
from applauncher.utils.logging import get_logger

logger = get_logger(__name__)

# Handle stored for name-tracked apps, which keep no PID
NAME_TRACKED = 0


class ProcessRegistry:
    """
    Definitions plus running-process bookkeeping.

    The definition list and the process map each have their own lock and
    neither is held while a process is being started or stopped. Mutations
    of the definition list are persisted through the optional store; if
    the write fails the in-memory change is rolled back and
    PersistenceError propagates.
    """

    def __init__(self, store=None, config: Optional[ApplicationConfig] = None):
        self.store = store
        self._apps: List[ApplicationDefinition] = list(config.registered_apps) if config else []
        self._processes: Dict[str, int] = {}
        self._apps_lock = threading.Lock()
        self._processes_lock = threading.Lock()

    # Definitions

    def load(self, config: ApplicationConfig):
        """Replace the in-memory definitions without persisting."""
        with self._apps_lock:
            self._apps = list(config.registered_apps)
        logger.info(f"Loaded {len(config.registered_apps)} application definitions")

    def list(self) -> List[ApplicationDefinition]:
        """Ordered copy of all definitions."""
        with self._apps_lock:
            return list(self._apps)

    def snapshot(self) -> Tuple[ApplicationDefinition, ...]:
        """Immutable view of the definitions at this instant."""
        with self._apps_lock:
            return tuple(self._apps)

    def get(self, app_id: str) -> Optional[ApplicationDefinition]:
        with self._apps_lock:
            return self._find(app_id)

    def add(
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
        """
        Register a new application with a freshly generated id.

        Returns:
            ApplicationDefinition: The stored definition

        Raises:
            PersistenceError: If the store write fails
        """
        app = ApplicationDefinition.create(
            name=name,
            path=path,
            arguments=arguments,
            description=description,
            enabled=enabled,
            delay=delay,
            prevent_duplicate=prevent_duplicate,
            auto_start=auto_start,
        )

        with self._apps_lock:
            previous = list(self._apps)
            self._apps.append(app)
            self._persist(previous)

        logger.info(f"Registered application {app.name} ({app.id})")
        return app

    def update(self, app_id: str, **changes) -> ApplicationDefinition:
        """
        Replace the mutable fields of an existing definition.

        Raises:
            NotFoundError: If no definition has this id
            PersistenceError: If the store write fails
        """
        with self._apps_lock:
            for index, app in enumerate(self._apps):
                if app.id == app_id:
                    break
            else:
                raise NotFoundError("Application not found", details={'app_id': app_id})

            updated = app.with_fields(**changes)
            previous = list(self._apps)
            self._apps[index] = updated
            self._persist(previous)

        logger.info(f"Updated application {updated.name} ({app_id})")
        return updated

    def remove(self, app_id: str):
        """Delete a definition; unknown ids are a no-op but still persist."""
        with self._apps_lock:
            previous = list(self._apps)
            self._apps = [app for app in self._apps if app.id != app_id]
            removed = len(previous) != len(self._apps)
            self._persist(previous)

        if removed:
            logger.info(f"Removed application {app_id}")

    def reset(self):
        """Clear all definitions."""
        with self._apps_lock:
            previous = list(self._apps)
            self._apps = []
            self._persist(previous)

        logger.info("Configuration has been reset")

    def _find(self, app_id: str) -> Optional[ApplicationDefinition]:
        for app in self._apps:
            if app.id == app_id:
                return app
        return None

    def _persist(self, previous: List[ApplicationDefinition]):
        """Write the definitions; caller holds the definitions lock."""
        if self.store is None:
            return

        try:
            self.store.save(ApplicationConfig(registered_apps=list(self._apps)))
        except PersistenceError:
            self._apps = previous
            logger.error("Persisting definitions failed, in-memory change rolled back")
            raise

    # Running processes

    def track(self, key: str, handle: int):
        """Record a started process under its registry key."""
        with self._processes_lock:
            self._processes[key] = handle
        logger.debug(f"Tracking {key} -> {handle}")

    def untrack(self, key: str) -> Optional[int]:
        """Remove and return the handle for a key, if any."""
        with self._processes_lock:
            return self._processes.pop(key, None)

    def is_running(self, app_id: str) -> bool:
        """True if the app is tracked under its PID key or its name key."""
        with self._processes_lock:
            return app_id in self._processes or name_tracking_key(app_id) in self._processes

    def running(self) -> Dict[str, int]:
        """Copy of the process map."""
        with self._processes_lock:
            return dict(self._processes)

    def prune(self, is_alive: Callable[[int], bool]) -> List[str]:
        """
        Drop PID-tracked entries whose process has exited.

        Name-tracked entries carry no PID and are left alone.

        Returns:
            List of registry keys that were removed
        """
        candidates = {
            key: pid for key, pid in self.running().items()
            if not key.endswith(":name") and not is_alive(pid)
        }

        stale = []
        with self._processes_lock:
            for key, pid in candidates.items():
                # Skip entries relaunched while we were checking
                if self._processes.get(key) == pid:
                    del self._processes[key]
                    stale.append(key)

        if stale:
            logger.info(f"Pruned {len(stale)} exited processes")
        return stale
