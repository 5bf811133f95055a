"""Config settings – SettingsValidator."""
from __future__ import annotations

import dataclasses
import typing
from typing import Any

from kuhi_query.config.settings.base import Settings

_SCALARS: tuple[type, ...] = (bool, int, float, str)


def _type_mismatch(value: Any, hint: Any) -> bool:
    if hint not in _SCALARS or value is None:
        return False
    # bool is an int subclass; keep the two apart.
    if hint is int:
        return isinstance(value, bool) or not isinstance(value, int)
    if hint is float:
        return isinstance(value, bool) or not isinstance(value, (int, float))
    return not isinstance(value, hint)


class SettingsValidator:
    """Report problems in a populated settings instance without raising.

    Checks that required fields are neither ``None`` nor blank and that
    scalar fields hold a value of their annotated type (settings built by
    hand bypass the loader's coercion).
    """

    def validate(self, settings: Settings) -> list[str]:
        errors: list[str] = []
        hints = typing.get_type_hints(type(settings))
        for field in dataclasses.fields(settings):
            value = getattr(settings, field.name)
            required = field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING
            if required and value is None:
                errors.append(f"{field.name} is required but None")
            elif required and isinstance(value, str) and not value.strip():
                errors.append(f"{field.name} is required but blank")
            elif _type_mismatch(value, hints.get(field.name)):
                errors.append(
                    f"{field.name} should be {hints[field.name].__name__}, got {type(value).__name__}"
                )
        return errors


__all__ = ["SettingsValidator"]
