"""
================================================================================
Suite Lifecycle Pytest Plugin
================================================================================

Fixtures that bind SuiteLifecycleGuard to pytest's suite boundaries.

Enable it from the root conftest.py:

    pytest_plugins = ["guitest_tools.lifecycle.plugin"]

Fixtures:
    - process_control_manager: session-wide ProcessControlManager
    - process_terminator: what guards call on suite finish (override freely)
    - module_lifecycle_guard: lifecycle for module-level suites

Class based suites inherit from GuiTestSuite instead.

================================================================================
"""

from __future__ import annotations

from typing import Generator

import allure
import pytest
from loguru import logger

from guitest_tools.common import init_logger
from guitest_tools.lifecycle.guard import ProcessTerminator, SuiteLifecycleGuard
from guitest_tools.process_control import ProcessControlError, ProcessControlManager
from guitest_tools.report_tools import attach_cleanup_failure


def run_guarded_suite(guard: SuiteLifecycleGuard) -> Generator[SuiteLifecycleGuard, None, None]:
    """
    Fixture body shared by every suite-scoped lifecycle fixture.

    pytest resumes the generator after the last test of the scope, whatever
    the outcome of the tests was. Report failures are logged, never raised.
    """
    guard.on_suite_start()
    yield guard

    try:
        with allure.step(f"Suite teardown: {guard.suite_name}"):
            guard.on_suite_finish()
    except Exception as e:
        logger.warning(f"Could not report teardown step for suite '{guard.suite_name}': {e}")
    if not guard.finished:
        guard.on_suite_finish()

    if guard.cleanup_error is not None:
        try:
            attach_cleanup_failure(guard.suite_name, guard.cleanup_error)
        except Exception as e:
            logger.warning(f"Could not attach cleanup failure for suite '{guard.suite_name}': {e}")


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def process_control_manager() -> Generator[ProcessControlManager, None, None]:
    """
    Session-scoped process control manager.

    Anything still running when the session ends is terminated as a last
    resort.
    """
    init_logger()
    manager = ProcessControlManager.from_config()
    yield manager

    if manager.is_process_alive():
        logger.warning(
            f"Managed process {manager.current_pid} survived all suites, terminating"
        )
        try:
            manager.terminate()
        except ProcessControlError as e:
            logger.error(f"Session teardown could not stop managed process: {e}")


@pytest.fixture(scope="session")
def process_terminator(process_control_manager: ProcessControlManager) -> ProcessTerminator:
    """
    Terminator used by suite guards.

    Override in a conftest.py to plug in a different collaborator.
    """
    return process_control_manager


@pytest.fixture(scope="module")
def module_lifecycle_guard(
    request: pytest.FixtureRequest,
    process_terminator: ProcessTerminator,
) -> Generator[SuiteLifecycleGuard, None, None]:
    """
    Module-scoped lifecycle guard.

    Usage:
        pytestmark = pytest.mark.usefixtures("module_lifecycle_guard")
    """
    guard = SuiteLifecycleGuard(process_terminator, suite_name=request.module.__name__)
    yield from run_guarded_suite(guard)
