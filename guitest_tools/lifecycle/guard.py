"""
================================================================================
Suite Lifecycle Guard
================================================================================

Binds two callbacks to the boundaries of a test suite run:

    on_suite_start()   before the first test (reserved, does nothing)
    on_suite_finish()  after the last test, pass or fail

The finish hook asks an injected terminator to kill the managed process.
Termination failures are logged and kept on the guard; they never reach the
test framework, so recorded test results stay exactly as the tests left them.

Usage:
    guard = SuiteLifecycleGuard(ProcessControlManager(), suite_name="TestEditor")
    guard.on_suite_start()
    ...  # tests run
    guard.on_suite_finish()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Protocol

from loguru import logger

from .errors import CleanupError


class ProcessTerminator(Protocol):
    """Anything that can terminate the process associated with a suite."""

    def terminate(self) -> Any:
        ...


class SuiteLifecycleGuard:
    """
    One guard per suite run.

    Attributes:
        suite_name: Name used in log lines and report attachments
        cleanup_error: CleanupError from the finish hook, if any
    """

    def __init__(self, terminator: ProcessTerminator, suite_name: str = "suite") -> None:
        """
        Initialize guard.

        Args:
            terminator: Collaborator exposing ``terminate()``
            suite_name: Human readable suite identifier
        """
        self.suite_name = suite_name
        self.cleanup_error: Optional[CleanupError] = None

        self._terminator = terminator
        self._started = False
        self._finished = False
        self._termination_requested = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def termination_requested(self) -> bool:
        return self._termination_requested

    def on_suite_start(self) -> None:
        """
        Run once before the first test of the suite.

        Intentionally does nothing: it is the registered counterpart of
        ``on_suite_finish`` and the place for future per-suite setup.
        """
        self._started = True
        logger.debug(f"Suite started: {self.suite_name}")

    def on_suite_finish(self) -> None:
        """
        Run once after every test of the suite has finished.

        Requests termination of the managed process. Any failure is wrapped
        in CleanupError, logged and stored on ``cleanup_error``; nothing is
        raised.
        """
        if self._finished:
            logger.warning(
                f"Suite '{self.suite_name}' already finished, "
                f"skipping repeated termination request"
            )
            return
        self._finished = True

        logger.info(f"Suite finished: {self.suite_name}, terminating managed process")
        self._termination_requested = True
        try:
            self._request_termination()
        except Exception as e:
            self.cleanup_error = CleanupError(self.suite_name, f"{type(e).__name__}: {e}")
            self.cleanup_error.__cause__ = e
            logger.warning(f"{self.cleanup_error} (test results are unaffected)")

    def _request_termination(self) -> None:
        result = self._terminator.terminate()
        if asyncio.iscoroutine(result):
            try:
                asyncio.run(result)
            except RuntimeError:
                # asyncio.run refuses to start inside a running loop
                result.close()
                raise


__all__ = [
    "ProcessTerminator",
    "SuiteLifecycleGuard",
]
