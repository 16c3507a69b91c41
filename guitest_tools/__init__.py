"""
================================================================================
GUI Test Tools
================================================================================

Suite lifecycle tooling for GUI test runs that drive an external application.

Modules:
    - common: Shared configuration and logging utilities
    - lifecycle: Suite lifecycle guard, GuiTestSuite base class, pytest plugin
    - process_control: Launch, track and terminate the application under test
    - report_tools: Allure attachment helpers

Example:
    from guitest_tools.lifecycle.gui_test_suite import GuiTestSuite

    class TestEditor(GuiTestSuite):
        def test_open_file(self, process_control_manager):
            process_control_manager.launch(["my-ide", "--test"])
            ...

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "lifecycle",
    "process_control",
    "report_tools",
]
