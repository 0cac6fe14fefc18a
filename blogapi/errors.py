"""Exception types raised by services and translated to HTTP responses."""
from __future__ import annotations


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400


class ContentBlockError(ValidationError):
    """A content block failed structural validation.

    ``position`` is the 1-based index of the offending block after sorting by
    ``order``.
    """

    def __init__(self, position: int, reason: str) -> None:
        super().__init__(f"Block {position}: {reason}")
        self.position = position
        self.reason = reason


class AuthenticationError(ApiError):
    status_code = 401


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class DuplicateAssociationError(ApiError):
    status_code = 400


class ReferentialGuardError(ApiError):
    """Deleting an entity that is still referenced by posts."""

    status_code = 400

    def __init__(self, message: str, blocking_count: int) -> None:
        super().__init__(message)
        self.blocking_count = blocking_count


class SlugExhaustedError(ConflictError):
    def __init__(self, base: str, attempts: int) -> None:
        super().__init__(f"Could not find a free slug for '{base}' after {attempts} attempts")
        self.base = base
        self.attempts = attempts
