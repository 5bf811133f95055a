"""Kernel casing – recursive key rewriting for JSON-like structures.

The wire format uses ``snake_case`` keys, the internal model ``camelCase``::

    to_external({"createdAt": "…", "poet": {"nameKana": "…"}})
    # {"created_at": "…", "poet": {"name_kana": "…"}}

Containers are rebuilt, never mutated in place.  Lists and tuples map
element-wise (the result is always a ``list``), mappings map key-wise, and
every other value (``None`` included) passes through unchanged.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Callable

_UPPER = re.compile(r"([A-Z])")
_UNDERSCORE_LOWER = re.compile(r"_([a-z])")


def to_snake_key(key: str) -> str:
    """``createdAt`` → ``created_at``; ``model3dUrl`` → ``model3d_url``."""
    return _UPPER.sub(lambda m: "_" + m.group(1).lower(), key)


def to_camel_key(key: str) -> str:
    """``created_at`` → ``createdAt``.

    Only an underscore followed by a lowercase letter is folded, so
    ``version_2`` is left as is.
    """
    return _UNDERSCORE_LOWER.sub(lambda m: m.group(1).upper(), key)


def _convert(obj: Any, key_fn: Callable[[str], str]) -> Any:
    if isinstance(obj, Mapping):
        return {
            (key_fn(k) if isinstance(k, str) else k): _convert(v, key_fn)
            for k, v in obj.items()
        }
    if isinstance(obj, (list, tuple)):
        return [_convert(item, key_fn) for item in obj]
    return obj


def to_internal(obj: Any) -> Any:
    """Rewrite every mapping key in *obj* from snake_case to camelCase."""
    return _convert(obj, to_camel_key)


def to_external(obj: Any) -> Any:
    """Rewrite every mapping key in *obj* from camelCase to snake_case."""
    return _convert(obj, to_snake_key)


class CaseConverter:
    """Object façade over the module functions, for injection at the HTTP edge."""

    @staticmethod
    def to_internal(obj: Any) -> Any:
        return to_internal(obj)

    @staticmethod
    def to_external(obj: Any) -> Any:
        return to_external(obj)


__all__ = ["CaseConverter", "to_camel_key", "to_external", "to_internal", "to_snake_key"]
