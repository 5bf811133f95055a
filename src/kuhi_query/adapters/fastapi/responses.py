"""FastAPI adapter – CasedJSONResponse."""
from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from kuhi_query.kernel.casing import to_external


class CasedJSONResponse(JSONResponse):
    """JSON response whose object keys are rewritten to snake_case on the way out."""

    def render(self, content: Any) -> bytes:
        return super().render(to_external(content))


__all__ = ["CasedJSONResponse"]
