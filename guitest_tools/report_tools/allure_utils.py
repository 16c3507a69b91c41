"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used to surface suite lifecycle diagnostics in Allure
reports. Cleanup problems only ever appear here and in the logs; they never
change a test's status.

================================================================================
"""

import json
import traceback
from typing import Any

import allure

from guitest_tools.lifecycle.errors import CleanupError


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_cleanup_failure(suite_name: str, error: CleanupError):
    """
    Attach a suite cleanup failure as secondary diagnostics.

    Args:
        suite_name: Suite whose teardown failed
        error: The recorded cleanup error
    """
    cause = error.__cause__ or error
    attach_json(
        {
            "suite": suite_name,
            "error": str(error),
            "cause_type": type(cause).__name__,
        },
        name="Suite Cleanup Failure",
    )
    attach_text(
        "".join(traceback.format_exception(type(cause), cause, cause.__traceback__)),
        name="Suite Cleanup Traceback",
    )
