"""Kernel casing – snake_case (wire) ↔ camelCase (internal) key conversion."""
from kuhi_query.kernel.casing.converter import (
    CaseConverter,
    to_camel_key,
    to_external,
    to_internal,
    to_snake_key,
)

__all__ = ["CaseConverter", "to_camel_key", "to_external", "to_internal", "to_snake_key"]
