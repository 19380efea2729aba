"""Domain exceptions mapped onto HTTP responses.

Services raise these; the handlers registered in ``campus_commons.main``
render them as ``{"status": "error", "message": ..., "errors": [...]}``.
"""

from __future__ import annotations

from typing import Any


class AppError(RuntimeError):
    """Base class for errors that carry an HTTP status and a client message."""

    status_code = 500

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationFailed(AppError):
    """Malformed input that passed schema parsing but not business validation."""

    status_code = 400


class NotFoundError(AppError):
    """A referenced entity, report or queue item does not exist."""

    status_code = 404


class InvalidStateError(AppError):
    """The operation is not permitted in the target's current lifecycle state."""

    status_code = 400


class ConflictError(AppError):
    """A duplicate pending report for an item still under review."""

    # Clients treat conflicting reports as a plain bad request.
    status_code = 400


class UnauthorizedError(AppError):
    """Missing or unusable credentials."""

    status_code = 401


class ForbiddenError(AppError):
    """Authenticated principal lacks the required role or ownership."""

    status_code = 403
