"""Config settings – QuerySettings for the query resolution engine."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from kuhi_query.config.settings.base import Settings
from kuhi_query.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from kuhi_query.kernel.errors import InvalidSettingValueError
from kuhi_query.observability.logging import get_logger

_log = get_logger(__name__)


@dataclasses.dataclass
class QuerySettings(Settings):
    """Pagination bounds and store location.

    Environment variables: ``KUHI_QUERY_DEFAULT_LIMIT``,
    ``KUHI_QUERY_MAX_LIMIT``, ``KUHI_QUERY_DATABASE_URL``.
    """

    _prefix: ClassVar[str] = "KUHI_QUERY"
    _redacted: ClassVar[frozenset[str]] = frozenset({"database_url"})

    default_limit: int = 50
    max_limit: int = 1000
    database_url: str = "sqlite+aiosqlite:///:memory:"

    def _validate(self) -> None:
        if self.default_limit < 0:
            raise InvalidSettingValueError("default_limit", self.default_limit, "must be >= 0")
        if self.max_limit < self.default_limit:
            raise InvalidSettingValueError(
                "max_limit", self.max_limit, f"must be >= default_limit ({self.default_limit})"
            )


def load_query_settings(loader: SettingsLoader | None = None) -> QuerySettings:
    """Load :class:`QuerySettings` from the environment (or *loader*)."""
    settings = (loader or EnvSettingsLoader()).load(QuerySettings)
    _log.debug("query_settings_loaded", **settings.describe())
    return settings


__all__ = ["QuerySettings", "load_query_settings"]
