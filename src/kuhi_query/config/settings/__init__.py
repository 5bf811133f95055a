"""Config settings – 12-factor env-based configuration."""
from kuhi_query.config.settings.base import Settings
from kuhi_query.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from kuhi_query.config.settings.query import QuerySettings, load_query_settings
from kuhi_query.config.settings.validator import SettingsValidator

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "QuerySettings",
    "Settings",
    "SettingsLoader",
    "SettingsValidator",
    "load_query_settings",
]
