"""Domain errors — rule and invariant violations on query input."""

from __future__ import annotations

from typing import Any

from kuhi_query.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """A value object invariant was violated."""

    default_code = "invariant_violation"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def public_dict(self) -> dict[str, Any]:
        payload = super().public_dict()
        payload["errors"] = self.errors
        return payload


__all__ = [
    "DomainError",
    "InvariantViolationError",
    "ValidationError",
]
