"""
Process control for the application under test.

Example:
    from guitest_tools.process_control import ProcessControlManager

    manager = ProcessControlManager.from_config()
    manager.launch(["my-app"])
    manager.terminate()
"""

from .manager import ProcessControlError, ProcessControlManager

__all__ = [
    "ProcessControlError",
    "ProcessControlManager",
]
