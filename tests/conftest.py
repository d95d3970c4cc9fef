"""
applauncher test configuration and fixtures

This module provides shared test fixtures, a fake process controller
and utilities for the entire test suite.
"""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Generator, List, Optional, Sequence

import pytest

from applauncher.core.app import LauncherApp
from applauncher.core.launcher import Launcher
from applauncher.core.process import ProcessController
from applauncher.core.registry import ProcessRegistry
from applauncher.core.stopper import Stopper
from applauncher.core.window import HeadlessWindowController, StaticFilePicker
from applauncher.state.store import ConfigStore
from applauncher.utils.errors import StopError


class FakeController(ProcessController):
    """Process controller that records calls instead of touching the OS."""
    
    family = "fake"
    
    def __init__(self, supports_name_termination: bool = True, first_pid: int = 1000):
        self.supports_name_termination = supports_name_termination
        self.calls: List[tuple] = []
        self.alive = set()
        self.start_error: Optional[Exception] = None
        self.stop_error: Optional[Exception] = None
        self.report_pid = True
        self._next_pid = first_pid
    
    def start(self, path: str, argv: Sequence[str], capture_pid: bool = True):
        self.calls.append(("start", path, tuple(argv), capture_pid))
        if self.start_error is not None:
            raise self.start_error
        if not capture_pid or not self.report_pid:
            return None
        self._next_pid += 1
        self.alive.add(self._next_pid)
        return self._next_pid
    
    def stop_pid(self, pid: int):
        self.calls.append(("stop_pid", pid))
        if self.stop_error is not None:
            raise self.stop_error
        self.alive.discard(pid)
    
    def stop_name(self, name: str):
        self.calls.append(("stop_name", name))
        if self.stop_error is not None:
            raise self.stop_error
    
    def preempt_name(self, name: str):
        self.calls.append(("preempt", name))
    
    def is_alive(self, pid: int) -> bool:
        return pid in self.alive
    
    def started_paths(self) -> List[str]:
        return [call[1] for call in self.calls if call[0] == "start"]


class RecordingSleep:
    """Awaitable sleep that records the delay into the controller's call log."""
    
    def __init__(self, controller: FakeController):
        self.controller = controller
        self.delays: List[float] = []
    
    async def __call__(self, seconds: float):
        self.delays.append(seconds)
        self.controller.calls.append(("sleep", seconds))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_dir = Path(tempfile.mkdtemp(prefix="applauncher_test_"))
    try:
        yield temp_dir
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    return temp_dir / "config" / "config.json"


@pytest.fixture
def store(config_file: Path) -> ConfigStore:
    return ConfigStore(config_file)


@pytest.fixture
def controller() -> FakeController:
    return FakeController()


@pytest.fixture
def spawn_only_controller() -> FakeController:
    """Fake controller for a platform without name termination."""
    return FakeController(supports_name_termination=False)


@pytest.fixture
def registry(store: ConfigStore) -> ProcessRegistry:
    return ProcessRegistry(store=store)


@pytest.fixture
def launcher(registry: ProcessRegistry, controller: FakeController) -> Launcher:
    return Launcher(registry, controller)


@pytest.fixture
def stopper(registry: ProcessRegistry, controller: FakeController) -> Stopper:
    return Stopper(registry, controller)


@pytest.fixture
def recording_sleep(controller: FakeController) -> RecordingSleep:
    return RecordingSleep(controller)


@pytest.fixture
def launcher_app(store, controller, recording_sleep) -> LauncherApp:
    """A launcher wired to the fake controller and a headless window."""
    return LauncherApp(
        store=store,
        controller=controller,
        window=HeadlessWindowController(visible=False),
        file_picker=StaticFilePicker("C:/Tools/notepad.exe"),
        orchestrator_sleep=recording_sleep,
    )


@pytest.fixture
def stop_failure() -> StopError:
    return StopError("Failed to stop process: access denied")


class TestHelper:
    """Helper class for common test operations."""
    
    @staticmethod
    def create_test_file(path: Path, content: str = "test content") -> Path:
        """Create a test file with given content."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    
    @staticmethod
    def create_test_json_file(path: Path, data) -> Path:
        """Create a test JSON file with given data."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path
    
    @staticmethod
    def read_json(path: Path):
        return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def test_helper():
    """Get test helper instance."""
    return TestHelper()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "platform: mark test as platform-specific")
