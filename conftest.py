"""
Repository-level pytest configuration.

Why this exists:
  - Enable the suite lifecycle plugin and pytester for the whole tree
  - Keep the project root importable for programmatic runners (run_tests.py)
  - Pin the configuration environment so local runs are predictable
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

pytest_plugins = [
    "pytester",
    "guitest_tools.lifecycle.plugin",
]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _test_env_defaults() -> Generator[None, None, None]:
    """
    Default to the "test" configuration overlay unless CI sets one.
    """
    os.environ.setdefault("ENVIRONMENT", "test")
    yield
