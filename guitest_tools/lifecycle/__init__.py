"""
================================================================================
Suite Lifecycle
================================================================================

Components:
    - guard: SuiteLifecycleGuard and the ProcessTerminator protocol
    - errors: StartupError / CleanupError taxonomy
    - gui_test_suite: GuiTestSuite base class for pytest test classes
    - plugin: pytest fixtures (enable via pytest_plugins)

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import CleanupError, StartupError, SuiteLifecycleError
from .guard import ProcessTerminator, SuiteLifecycleGuard

__all__ = [
    "CleanupError",
    "ProcessTerminator",
    "StartupError",
    "SuiteLifecycleError",
    "SuiteLifecycleGuard",
]
