"""
Validation-related domain exceptions.
"""

from .dispatch_error import DispatchError


class ValidationError(DispatchError):
    """Base exception for validation errors."""

    code = "VALIDATION_ERROR"
    status_code = 400


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a well-formed UUID."""

    code = "INVALID_ID"

    def __init__(self, resource: str, value: str):
        self.resource = resource
        self.value = value
        super().__init__(f"Invalid {resource} ID format")

