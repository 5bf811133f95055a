"""Infrastructure errors — the store round-trip and outgoing serialisation."""

from __future__ import annotations

from typing import Any

from kuhi_query.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """A failure outside the query rules themselves."""

    default_code = "infrastructure_error"


class QueryExecutionError(InfrastructureError):
    """The store rejected or failed a composed list query.

    The driver exception travels as ``cause``; ``entity`` names the registry
    the plan was built for.
    """

    default_code = "query_execution_error"

    def __init__(self, entity: str, message: str | None = None, **kwargs: Any) -> None:
        detail = {"entity": entity, **kwargs.pop("detail", {})}
        super().__init__(message or f"Query against '{entity}' failed", detail=detail, **kwargs)
        self.entity = entity


class SerializationError(InfrastructureError):
    """A stored value could not be rendered for a response."""

    default_code = "serialization_error"

    def __init__(self, message: str, *, payload_type: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type
        if payload_type is not None:
            self.detail.setdefault("payload_type", payload_type)


__all__ = [
    "InfrastructureError",
    "QueryExecutionError",
    "SerializationError",
]
