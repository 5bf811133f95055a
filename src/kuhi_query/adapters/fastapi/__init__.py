"""FastAPI adapter – query dependencies, cased JSON responses, exception mapper.

Requires the ``fastapi`` extra: ``pip install 'kuhi-query[fastapi]'``.
"""
from kuhi_query.adapters.fastapi.deps import (
    FilterRequestDep,
    QueryPlanDep,
    filter_request_dependency,
    query_plan_dependency,
)
from kuhi_query.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from kuhi_query.adapters.fastapi.responses import CasedJSONResponse

__all__ = [
    "CasedJSONResponse",
    "FastAPIExceptionMapper",
    "FilterRequestDep",
    "QueryPlanDep",
    "filter_request_dependency",
    "query_plan_dependency",
]
