"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── InvariantViolationError
    │   └── ValidationError
    ├── ApplicationError     (application.py)
    │   └── ConfigError
    │       ├── MissingRequiredSettingError
    │       ├── InvalidSettingValueError
    │       └── RegistryError
    └── InfrastructureError  (infrastructure.py)
        ├── QueryExecutionError
        └── SerializationError
"""

from kuhi_query.kernel.errors.application import (
    ApplicationError,
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    RegistryError,
)
from kuhi_query.kernel.errors.base import BaseError
from kuhi_query.kernel.errors.domain import (
    DomainError,
    InvariantViolationError,
    ValidationError,
)
from kuhi_query.kernel.errors.infrastructure import (
    InfrastructureError,
    QueryExecutionError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConfigError",
    "DomainError",
    "InfrastructureError",
    "InvalidSettingValueError",
    "InvariantViolationError",
    "MissingRequiredSettingError",
    "QueryExecutionError",
    "RegistryError",
    "SerializationError",
    "ValidationError",
]
