"""
Domain Errors

Every error carries the single user-facing message the browser shows as a
toast. The HTTP layer renders them through one exception handler.
"""

from __future__ import annotations

from typing import Any


class TeachAssistError(Exception):
    """Base class for errors surfaced to the user."""

    status_code: int = 500
    code: str = "error"

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Response body for this error."""
        return {"detail": self.message, "error": self.code}


class AuthenticationRequired(TeachAssistError):
    """A mutation was attempted without an authenticated user."""

    status_code = 401
    code = "authentication_required"

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class NotFoundError(TeachAssistError):
    """Row missing, or owned by a different user."""

    status_code = 404
    code = "not_found"


class StoreError(TeachAssistError):
    """Remote table-store failure (network, permission, constraint)."""

    status_code = 502
    code = "store_error"


class StorageError(TeachAssistError):
    """Object-storage failure."""

    status_code = 502
    code = "storage_error"


class IdentityError(TeachAssistError):
    """Identity-service failure."""

    status_code = 502
    code = "identity_error"
