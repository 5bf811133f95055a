"""BaseError – root of every error raised by kuhi_query."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Carries a stable ``code`` alongside the human-readable message.

    ``detail`` holds structured context (entity, offending fields…) and
    ``cause`` the lower-level exception, which is also chained as
    ``__cause__``.  Two renderings exist: :meth:`to_dict` for logs, which
    includes the cause, and :meth:`public_dict` for HTTP bodies, which does
    not.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def public_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "detail": self.detail}

    def to_dict(self) -> dict[str, Any]:
        payload = self.public_dict()
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def __str__(self) -> str:
        # One JSON line, so structlog renders it intact.
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


__all__ = ["BaseError"]
