"""Kernel – 100% framework-agnostic building blocks."""

from kuhi_query.kernel.casing import CaseConverter, to_external, to_internal
from kuhi_query.kernel.errors import (
    ApplicationError,
    BaseError,
    ConfigError,
    DomainError,
    InfrastructureError,
    InvariantViolationError,
    QueryExecutionError,
    RegistryError,
    SerializationError,
    ValidationError,
)
from kuhi_query.kernel.types import Err, Ok, Result

__all__ = [
    "ApplicationError",
    "BaseError",
    "CaseConverter",
    "ConfigError",
    "DomainError",
    "Err",
    "InfrastructureError",
    "InvariantViolationError",
    "Ok",
    "QueryExecutionError",
    "RegistryError",
    "Result",
    "SerializationError",
    "ValidationError",
    "to_external",
    "to_internal",
]
