"""
Base class for dispatch domain exceptions.
"""

from typing import Any, Dict, Optional


class DispatchError(Exception):
    """Base exception carrying a public error code and HTTP status."""

    code: str = "INTERNAL_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)
