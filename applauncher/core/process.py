"""
Launcher Process Controllers

This module provides the platform strategy family that actually starts
and stops OS processes. The rest of the launcher only talks to the
ProcessController interface, so platform branching stays here.
"""

import os
import subprocess
import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence

import psutil

from applauncher.utils.errors import LaunchError, StopError
from applauncher.utils.logging import get_logger
from applauncher.utils.platform import (
    FAMILY_POSIX,
    FAMILY_WINDOWS,
    detect_platform_family,
)

logger = get_logger(__name__)


class ProcessController(ABC):
    """Start and stop OS processes for one platform family."""

    family = "generic"
    supports_name_termination = False

    @abstractmethod
    def start(self, path: str, argv: Sequence[str], capture_pid: bool = True) -> Optional[int]:
        """
        Start a process.

        Args:
            path: Executable (or shortcut) to start
            argv: Argument tokens
            capture_pid: Whether the new process id must be returned

        Returns:
            The process id, or None when it was not requested

        Raises:
            LaunchError: If the OS refuses or fails to start the process
        """

    @abstractmethod
    def stop_pid(self, pid: int):
        """
        Terminate a process by id.

        Raises:
            StopError: If termination fails
        """

    @abstractmethod
    def stop_name(self, name: str):
        """
        Terminate every process with this name.

        Only called when supports_name_termination is set.

        Raises:
            StopError: If no such process exists or termination fails
        """

    @abstractmethod
    def preempt_name(self, name: str):
        """Best-effort termination by name; never raises."""

    def is_alive(self, pid: int) -> bool:
        """Check whether a process id still refers to a live process."""
        try:
            return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
        except psutil.Error:
            return False


class PowerShellController(ProcessController):
    """
    Windows controller built on PowerShell Start-Process / Stop-Process.

    Start-Process can either hand back the new process (-PassThru) or
    return without it; apps tracked by name use the latter.
    """

    family = FAMILY_WINDOWS
    supports_name_termination = True

    def __init__(self, executable: str = "powershell", timeout: float = 30.0):
        self.executable = executable
        self.timeout = timeout

    @staticmethod
    def quote(value: str) -> str:
        """Single-quote a value for PowerShell."""
        return "'" + value.replace("'", "''") + "'"

    def build_start_command(self, path: str, argv: Sequence[str], capture_pid: bool) -> str:
        command = f"Start-Process -FilePath {self.quote(path)}"
        if argv:
            command += " -ArgumentList " + ",".join(self.quote(arg) for arg in argv)
        if capture_pid:
            command = f"$process = {command} -PassThru; Write-Output $process.Id"
        return command

    def _run(self, command: str) -> subprocess.CompletedProcess:
        logger.debug(f"Executing: {command}")
        return subprocess.run(
            [self.executable, "-WindowStyle", "Hidden", "-Command", command],
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )

    def start(self, path: str, argv: Sequence[str], capture_pid: bool = True) -> Optional[int]:
        command = self.build_start_command(path, argv, capture_pid)

        try:
            result = self._run(command)
        except (OSError, subprocess.SubprocessError) as e:
            raise LaunchError(
                f"Failed to launch application with Start-Process: {e}",
                details={'path': path}
            ) from e

        if result.returncode != 0:
            raise LaunchError(
                f"Start-Process failed: {result.stderr.strip()}",
                details={'path': path, 'returncode': result.returncode}
            )

        if not capture_pid:
            return None

        output = result.stdout.strip()
        try:
            return int(output)
        except ValueError as e:
            raise LaunchError(
                f"Failed to parse process ID: {output}",
                details={'path': path}
            ) from e

    def _stop(self, command: str, target: str, details: Dict[str, object]):
        try:
            result = self._run(command)
        except (OSError, subprocess.SubprocessError) as e:
            raise StopError(
                f"Failed to stop application with Stop-Process: {e}",
                details=details
            ) from e

        if result.returncode != 0:
            raise StopError(
                f"Failed to stop process {target}: {result.stderr.strip()}",
                details=details
            )

    def stop_pid(self, pid: int):
        self._stop(f"Stop-Process -Id {int(pid)} -Force", str(pid), {'pid': pid})

    def stop_name(self, name: str):
        self._stop(
            f"Stop-Process -Name {self.quote(name)} -Force",
            f"'{name}'",
            {'name': name},
        )

    def preempt_name(self, name: str):
        command = f"Stop-Process -Name {self.quote(name)} -Force -ErrorAction SilentlyContinue"
        try:
            self._run(command)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Could not run duplicate preemption for {name}: {e}")


def _matches_name(process_name: Optional[str], name: str) -> bool:
    """Compare a process name the way Stop-Process -Name does, extension optional."""
    if not process_name:
        return False
    return process_name == name or os.path.splitext(process_name)[0] == name


class SpawnController(ProcessController):
    """
    Fallback controller that spawns processes directly.

    The process id is always captured. Termination goes through psutil:
    terminate, then kill if the process outlives the grace period. Name
    termination matches the executable name of the user's processes.
    """

    family = FAMILY_POSIX
    supports_name_termination = True

    def __init__(self, grace_period: float = 5.0):
        self.grace_period = grace_period
        # Popen objects kept so exited children get reaped
        self._children: Dict[int, subprocess.Popen] = {}
        self._lock = threading.Lock()

    def start(self, path: str, argv: Sequence[str], capture_pid: bool = True) -> Optional[int]:
        command: List[str] = [path, *argv]
        logger.debug(f"Spawning: {command}")

        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
                close_fds=True,
            )
        except (OSError, ValueError) as e:
            raise LaunchError(
                f"Failed to launch application: {e}",
                details={'path': path}
            ) from e

        with self._lock:
            self._children[process.pid] = process

        return process.pid

    def _release(self, pids: Iterable[int]) -> List[subprocess.Popen]:
        with self._lock:
            return [child for child in (self._children.pop(pid, None) for pid in pids) if child]

    def _terminate(self, processes: List[psutil.Process]):
        """Terminate processes, killing any that outlive the grace period."""
        released = self._release(p.pid for p in processes)

        for p in processes:
            try:
                p.terminate()
            except psutil.NoSuchProcess:
                logger.info(f"Process {p.pid} already terminated")

        gone, alive = psutil.wait_procs(processes, timeout=self.grace_period)

        for p in alive:
            logger.warning(f"Force killing process {p.pid}")
            try:
                p.kill()
            except psutil.NoSuchProcess:
                logger.debug(f"Process {p.pid} exited before kill")
        if alive:
            psutil.wait_procs(alive, timeout=2.0)

        for child in released:
            child.poll()

    def _find_by_name(self, name: str) -> List[psutil.Process]:
        current = psutil.Process()
        own_pid, own_user = current.pid, current.username()
        return [
            p for p in psutil.process_iter(['name', 'username'])
            if p.pid != own_pid
            and p.info['username'] == own_user
            and _matches_name(p.info['name'], name)
        ]

    def stop_pid(self, pid: int):
        try:
            self._terminate([psutil.Process(pid)])
        except psutil.NoSuchProcess:
            self._release([pid])
            logger.info(f"Process {pid} already terminated")
        except psutil.Error as e:
            raise StopError(
                f"Failed to stop process {pid}: {e}",
                details={'pid': pid}
            ) from e

    def stop_name(self, name: str):
        try:
            processes = self._find_by_name(name)
            if not processes:
                raise StopError(
                    f"Failed to stop process '{name}': no running process with that name",
                    details={'name': name}
                )
            logger.debug(f"Terminating {len(processes)} processes named {name}")
            self._terminate(processes)
        except psutil.Error as e:
            raise StopError(
                f"Failed to stop process '{name}': {e}",
                details={'name': name}
            ) from e

    def preempt_name(self, name: str):
        try:
            processes = self._find_by_name(name)
            if processes:
                logger.info(f"Terminating {len(processes)} running copies of {name}")
                self._terminate(processes)
        except psutil.Error as e:
            logger.warning(f"Could not run duplicate preemption for {name}: {e}")

    def is_alive(self, pid: int) -> bool:
        with self._lock:
            process = self._children.get(pid)

        if process is not None:
            if process.poll() is None:
                return True
            self._release([pid])
            return False

        return super().is_alive(pid)


def default_controller() -> ProcessController:
    """Pick the controller for the host platform."""
    family = detect_platform_family()
    if family == FAMILY_WINDOWS:
        return PowerShellController()
    return SpawnController()
