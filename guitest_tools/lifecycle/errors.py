"""Exceptions raised around suite lifecycle hooks."""


class SuiteLifecycleError(Exception):
    """Base class for suite lifecycle failures."""
    pass


class StartupError(SuiteLifecycleError):
    """Raised when the suite start hook fails."""
    pass


class CleanupError(SuiteLifecycleError):
    """
    Raised when the managed process could not be terminated after a suite.

    Never reaches the test framework: the guard records and logs it.
    """

    def __init__(self, suite_name: str, message: str) -> None:
        super().__init__(f"Suite '{suite_name}' cleanup failed: {message}")
        self.suite_name = suite_name


__all__ = [
    "CleanupError",
    "StartupError",
    "SuiteLifecycleError",
]
