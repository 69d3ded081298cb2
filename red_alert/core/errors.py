"""
Exception hierarchy for the alert service.

Upstream "no data" is never an error; only transport failures, bad tool
arguments and unknown tool names are raised. The tool dispatcher turns all of
them into structured error records.
"""
from typing import Optional


class RedAlertError(Exception):
    """Base exception for all service errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
        self.message = message


class FetchError(RedAlertError):
    """An upstream request failed (network error, timeout or non-2xx status)."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ToolArgumentError(RedAlertError):
    """Tool arguments failed validation."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UnknownToolError(RedAlertError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown operation: {name}")
        self.name = name
