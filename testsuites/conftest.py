"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers project markers and provides shared fixtures.

================================================================================
"""

from typing import Generator, List

import pytest
from loguru import logger


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "unit: Fast tests without external processes"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that spawn real processes or pytest runs"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "lifecycle: Suite lifecycle guard behaviour"
    )
    config.addinivalue_line(
        "markers", "process: Process control behaviour"
    )
    config.addinivalue_line(
        "markers", "config: Configuration loading"
    )


def pytest_collection_modifyitems(config, items):
    """
    Auto-add the 'unit' marker to tests in the unit directory unless they
    are explicitly marked as integration tests.
    """
    for item in items:
        if "unit" in item.path.parts and item.get_closest_marker("integration") is None:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "GUI Test Tools - Suite Lifecycle",
        "=" * 60,
        "",
    ]


@pytest.fixture
def loguru_messages() -> Generator[List[str], None, None]:
    """
    Capture loguru output as "LEVEL|message" strings.
    """
    messages: List[str] = []
    handler_id = logger.add(
        lambda m: messages.append(f"{m.record['level'].name}|{m.record['message']}"),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
