"""
Authentication and authorization domain exceptions.
"""

from .dispatch_error import DispatchError


class AuthError(DispatchError):
    """Base exception for session and permission failures."""

    code = "UNAUTHORIZED"
    status_code = 401


class UnauthorizedError(AuthError):
    """Raised when no valid session accompanies the request."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(AuthError):
    """Raised when the actor may not perform the action or touch the tenant."""

    code = "FORBIDDEN"
    status_code = 403


class PermissionDeniedError(ForbiddenError):
    """Raised when the actor's role does not grant an action."""

    def __init__(self, role: str, permission: str):
        self.role = role
        self.permission = permission
        super().__init__(f"Role '{role}' does not have permission '{permission}'")
