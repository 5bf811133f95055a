"""Config – 12-factor settings and loaders."""

from kuhi_query.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    QuerySettings,
    Settings,
    SettingsLoader,
    SettingsValidator,
    load_query_settings,
)

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "QuerySettings",
    "Settings",
    "SettingsLoader",
    "SettingsValidator",
    "load_query_settings",
]
