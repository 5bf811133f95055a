"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi.responses import JSONResponse

from kuhi_query.kernel.errors import (
    BaseError,
    ConfigError,
    DomainError,
    InfrastructureError,
    QueryExecutionError,
    ValidationError,
)
from kuhi_query.observability.logging import get_logger

_log = get_logger(__name__)


class FastAPIExceptionMapper:
    """Register kuhi_query error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "query_execution_error", "message": "...", "detail": {...}}

    Mappings
    --------
    ``ValidationError``     → 400
    ``DomainError``         → 422
    ``ConfigError``         → 500
    ``QueryExecutionError`` → 500
    ``InfrastructureError`` → 503
    """

    def __init__(self) -> None:
        # ORDER MATTERS: more-specific subtypes first
        self._map: list[tuple[type[BaseError], int]] = [
            (ValidationError, 400),
            (DomainError, 422),
            (ConfigError, 500),
            (QueryExecutionError, 500),
            (InfrastructureError, 503),
        ]

    def status_for(self, exc: BaseException) -> int | None:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return None

    def register(self, app: Any) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""

        def make_handler(code: int) -> Callable[[Any, Any], Any]:
            def handler(request: Any, exc: Any) -> JSONResponse:
                if code >= 500:
                    _log.error("request_failed", path=request.url.path, status=code, error=exc.to_dict())
                return JSONResponse(status_code=code, content=exc.public_dict())

            return handler

        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, make_handler(status))


__all__ = ["FastAPIExceptionMapper"]
