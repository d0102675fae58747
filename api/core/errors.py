"""
Application error types.

Each error knows the HTTP status it maps to; `core/handlers.py` turns them
into the error envelope. Store errors are raised by `core/db.py` when
asyncpg reports a constraint failure.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, *, errors: list[dict[str, Any]] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation error"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


class StoreError(AppError):
    """Store-level failure. The message is never shown to clients."""


class UniqueConstraintViolation(StoreError):
    status_code = 409
    default_message = "Duplicate entry"


class ForeignKeyViolation(StoreError):
    status_code = 409
    default_message = "Referenced record is missing or still in use"


class CheckConstraintViolation(StoreError):
    status_code = 400
    default_message = "Value violates a data constraint"
