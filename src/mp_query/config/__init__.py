"""Config – query settings, env loader and validation errors."""

from mp_query.config.settings import (
    EnvSettingsLoader,
    QuerySettings,
    Settings,
    SettingsLoader,
    get_default_settings,
    set_default_settings,
)
from mp_query.config.validation import ConfigError, InvalidSettingValueError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "QuerySettings",
    "Settings",
    "SettingsLoader",
    "get_default_settings",
    "set_default_settings",
]
