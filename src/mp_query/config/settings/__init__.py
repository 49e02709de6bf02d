"""Config settings – 12-factor env-based configuration."""
from mp_query.config.settings.base import Settings
from mp_query.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mp_query.config.settings.query import (
    PatternMatch,
    QuerySettings,
    get_default_settings,
    set_default_settings,
)

__all__ = [
    "EnvSettingsLoader",
    "PatternMatch",
    "QuerySettings",
    "Settings",
    "SettingsLoader",
    "get_default_settings",
    "set_default_settings",
]
