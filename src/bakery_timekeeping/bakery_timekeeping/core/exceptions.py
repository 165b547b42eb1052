from __future__ import annotations

from typing import Iterable, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ValidationErrors(ValidationError):
    """Several validation failures reported together."""

    def __init__(self, errors: Iterable[ValidationError]):
        self.errors = list(errors)
        super().__init__("; ".join(e.message for e in self.errors) or "invalid input")


class NotFoundError(DomainError):
    """Referenced employee, shift or leave record does not exist."""


class TransientIOError(DomainError):
    """A single write failed; the caller may continue with other records."""


class FatalIOError(DomainError):
    """Persistence layer is unreachable."""
