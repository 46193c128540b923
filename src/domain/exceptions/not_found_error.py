"""
Not-found domain exceptions.
"""

from .dispatch_error import DispatchError


class NotFoundError(DispatchError):
    """Raised when a requested record does not exist."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")
