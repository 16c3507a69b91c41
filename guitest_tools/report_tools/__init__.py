from .allure_utils import attach_cleanup_failure, attach_json, attach_text

__all__ = [
    "attach_cleanup_failure",
    "attach_json",
    "attach_text",
]
