"""
================================================================================
Process Control Manager
================================================================================

Tracks the application process a GUI test session drives and tears it down.

Features:
    - Launch or adopt a managed process (pid, Popen or psutil.Process)
    - Liveness and exit-code queries
    - Bounded termination of the process tree and its process group
      (SIGTERM, then SIGKILL), even after a launcher process has exited

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import signal
import subprocess
from typing import Dict, List, Optional, Sequence, Union

import psutil
from loguru import logger

from guitest_tools.common import get_config


ProcessLike = Union[int, subprocess.Popen, psutil.Process]


class ProcessControlError(Exception):
    """Raised when the managed process cannot be controlled."""
    pass


class ProcessControlManager:
    """
    Owns the handle of one managed process (typically the app under test).

    Suites never touch the handle directly; they only ask the manager to
    ``terminate()`` whatever it currently tracks.

    Usage:
        manager = ProcessControlManager.from_config()
        manager.launch(["my-app", "--test-mode"])

        # ... run GUI tests ...

        manager.terminate()
    """

    def __init__(
        self,
        terminate_timeout: float = 10.0,
        kill_timeout: float = 5.0,
    ) -> None:
        """
        Initialize process control manager.

        Args:
            terminate_timeout: Seconds to wait after SIGTERM before SIGKILL
            kill_timeout: Seconds to wait after SIGKILL before giving up
        """
        self.terminate_timeout = terminate_timeout
        self.kill_timeout = kill_timeout
        self._process: Optional[psutil.Process] = None
        self._pgid: Optional[int] = None
        self._known_children: List[psutil.Process] = []

    @classmethod
    def from_config(cls) -> "ProcessControlManager":
        """Build a manager from the ``process_control`` config section."""
        return cls(
            terminate_timeout=float(get_config("process_control.terminate_timeout", 10.0)),
            kill_timeout=float(get_config("process_control.kill_timeout", 5.0)),
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def launch(
        self,
        cmd: Sequence[str],
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> psutil.Popen:
        """
        Start a process in its own session and register it.

        Args:
            cmd: Command line to execute
            cwd: Working directory
            env: Environment for the child process

        Returns:
            The started psutil.Popen handle
        """
        process = psutil.Popen(
            list(cmd),
            cwd=cwd,
            env=env,
            stdin=subprocess.DEVNULL,
            start_new_session=True,
        )
        logger.info(f"Launched managed process {process.pid}: {' '.join(cmd)}")
        self.submit_process(process)
        # start_new_session makes the child the leader of its own group
        self._pgid = process.pid
        return process

    def submit_process(self, process: ProcessLike) -> None:
        """
        Register an already running process as the managed one.

        Its current children are recorded too, so they are still terminated
        if the process itself exits first and they get reparented.

        Args:
            process: pid, subprocess.Popen or psutil.Process
        """
        handle = self._as_psutil(process)

        if self._process is not None and self._process.pid != handle.pid and self.is_process_alive():
            logger.warning(
                f"Replacing managed process {self._process.pid} with {handle.pid}; "
                f"the previous process is still running"
            )

        self._process = handle
        self._pgid = None
        self._known_children = self._snapshot_children(handle)
        logger.debug(
            f"Managed process registered: {handle.pid} "
            f"({len(self._known_children)} children)"
        )

    @staticmethod
    def _snapshot_children(process: psutil.Process) -> List[psutil.Process]:
        try:
            return process.children(recursive=True)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return []

    @staticmethod
    def _as_psutil(process: ProcessLike) -> psutil.Process:
        if isinstance(process, psutil.Process):
            return process
        pid = process if isinstance(process, int) else process.pid
        try:
            return psutil.Process(pid)
        except psutil.NoSuchProcess as e:
            raise ProcessControlError(f"Process {pid} does not exist") from e

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def current_pid(self) -> Optional[int]:
        """Pid of the managed process, or None when nothing is registered."""
        return self._process.pid if self._process is not None else None

    def is_process_alive(self) -> bool:
        """Return True if the managed process is running (zombies are dead)."""
        if self._process is None:
            return False
        return self._is_alive(self._process)

    @staticmethod
    def _is_alive(process: psutil.Process) -> bool:
        try:
            return process.is_running() and process.status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False

    def wait_for_current_process(self, timeout: Optional[float] = None) -> Optional[int]:
        """
        Block until the managed process exits.

        Args:
            timeout: Seconds to wait (None waits forever)

        Returns:
            Exit code, or None when nothing is registered or the code is unknown
        """
        if self._process is None:
            return None
        try:
            return self._process.wait(timeout=timeout)
        except psutil.TimeoutExpired as e:
            raise ProcessControlError(
                f"Managed process {self._process.pid} still running after {timeout}s"
            ) from e

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------

    def kill_process(self) -> None:
        """
        Terminate the managed process and all of its descendants.

        Descendants are whatever is still reachable from the managed process,
        the children snapshot taken at registration and, for launched
        processes, every member of the launched process group. The last two
        still find the application when a launcher process has already exited.

        Sends SIGTERM, waits ``terminate_timeout``, then SIGKILLs survivors and
        waits ``kill_timeout``. Nothing registered or nothing left alive is a
        no-op.

        Raises:
            ProcessControlError: Access denied or processes survived SIGKILL
        """
        process = self._process
        if process is None:
            logger.debug("No managed process registered, nothing to kill")
            return

        pgid, known_children = self._pgid, self._known_children
        # Cleared first so a second request never targets a recycled pid
        self._process = None
        self._pgid = None
        self._known_children = []

        roots = [process] + known_children
        if pgid is not None:
            roots += self._group_members(pgid)
        targets = self._collect_alive(roots)

        if not targets:
            logger.info(f"Managed process {process.pid} already exited, no descendants left")
            return

        logger.info(
            f"Terminating managed process {process.pid} "
            f"({len(targets)} processes, group={pgid})"
        )

        self._signal_group(pgid, signal.SIGTERM)
        self._signal_all(targets, kill=False)
        alive = self._wait_gone(targets, self.terminate_timeout)
        if not alive:
            return

        logger.warning(
            f"Processes {[p.pid for p in alive]} ignored SIGTERM "
            f"after {self.terminate_timeout}s, sending SIGKILL"
        )
        self._signal_group(pgid, signal.SIGKILL)
        self._signal_all(alive, kill=True)
        alive = self._wait_gone(alive, self.kill_timeout)
        if alive:
            raise ProcessControlError(
                f"Processes still alive after SIGKILL: {[p.pid for p in alive]}"
            )

    def terminate(self) -> None:
        """ProcessTerminator entry point used by suite lifecycle guards."""
        self.kill_process()

    def _collect_alive(self, roots: List[psutil.Process]) -> List[psutil.Process]:
        """Expand roots with their descendants, keeping live processes once."""
        found: Dict[int, psutil.Process] = {}
        for root in roots:
            try:
                tree = [root] + root.children(recursive=True)
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied as e:
                raise ProcessControlError(f"Access denied to process {root.pid}") from e
            for p in tree:
                if p.pid not in found and self._is_alive(p):
                    found[p.pid] = p
        return list(found.values())

    @staticmethod
    def _group_members(pgid: int) -> List[psutil.Process]:
        members = []
        for p in psutil.process_iter():
            try:
                if os.getpgid(p.pid) == pgid:
                    members.append(p)
            except OSError:
                continue
        return members

    @staticmethod
    def _signal_group(pgid: Optional[int], sig: signal.Signals) -> None:
        if pgid is None:
            return
        try:
            os.killpg(pgid, sig)
        except ProcessLookupError:
            pass
        except PermissionError as e:
            raise ProcessControlError(f"Access denied to process group {pgid}") from e

    @staticmethod
    def _signal_all(processes: List[psutil.Process], kill: bool) -> None:
        for p in processes:
            try:
                if kill:
                    p.kill()
                else:
                    p.terminate()
            except psutil.NoSuchProcess:
                pass
            except psutil.AccessDenied as e:
                raise ProcessControlError(f"Access denied to process {p.pid}") from e

    def _wait_gone(self, processes: List[psutil.Process], timeout: float) -> List[psutil.Process]:
        """Wait for processes to exit; return the ones still alive."""
        _, alive = psutil.wait_procs(processes, timeout=timeout)
        # Zombies reparented to an init that does not reap still count as gone
        return [p for p in alive if self._is_alive(p)]


__all__ = [
    "ProcessControlError",
    "ProcessControlManager",
]
