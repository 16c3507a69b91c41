"""
================================================================================
GUI Test Tools Common Utilities
================================================================================

Shared configuration management and logging setup.

Exports:
    - get_config: Convenience function to get configuration values
    - set_config: Override a configuration value at runtime
    - init_logger: Function to initialize loguru logger with standard settings

Usage:
    from guitest_tools.common import get_config, init_logger

    init_logger()
    timeout = get_config("process_control.terminate_timeout", 10.0)

================================================================================
"""

from .global_config import (
    get_config,
    get_logger,
    init_logger,
    reload_config,
    set_config,
)

__all__ = [
    "get_config",
    "get_logger",
    "init_logger",
    "reload_config",
    "set_config",
]
