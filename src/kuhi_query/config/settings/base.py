"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass
class Settings:
    """Dataclass settings read from ``<PREFIX>_<FIELD>`` environment variables.

    Subclasses set ``_prefix`` and may override :meth:`_validate`, which runs
    after construction and should raise
    :class:`~kuhi_query.kernel.errors.InvalidSettingValueError`.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    #: Field names whose values are masked by :meth:`describe`.
    _redacted: dataclasses.ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        pass

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """``QuerySettings.env_key("max_limit")`` → ``"KUHI_QUERY_MAX_LIMIT"``."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def describe(self) -> dict[str, Any]:
        """Field values safe to log."""
        return {
            field.name: "***" if field.name in self._redacted else getattr(self, field.name)
            for field in dataclasses.fields(self)
        }


__all__ = ["Settings"]
