"""
================================================================================
GUI Test Suite Base Class
================================================================================

Base class for GUI test classes that drive an external application.

Every subclass gets its own SuiteLifecycleGuard: nothing happens before the
first test, and the managed application is terminated after the last test of
the class, whether the tests passed or failed.

Usage:
    class TestProjectWizard(GuiTestSuite):

        def test_create_project(self, process_control_manager):
            process_control_manager.launch(["my-ide", "--test"])
            ...

================================================================================
"""

from __future__ import annotations

from typing import Generator

import pytest

from guitest_tools.lifecycle.guard import ProcessTerminator, SuiteLifecycleGuard
from guitest_tools.lifecycle.plugin import run_guarded_suite


class GuiTestSuite:
    """Class-level setup/teardown pair for GUI test classes."""

    @pytest.fixture(scope="class", autouse=True)
    def suite_lifecycle_guard(
        self,
        request: pytest.FixtureRequest,
        process_terminator: ProcessTerminator,
    ) -> Generator[SuiteLifecycleGuard, None, None]:
        guard = SuiteLifecycleGuard(process_terminator, suite_name=request.cls.__qualname__)
        yield from run_guarded_suite(guard)
