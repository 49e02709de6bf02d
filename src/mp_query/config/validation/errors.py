"""Config validation errors."""
from __future__ import annotations

from typing import Iterable

from mp_query.kernel.errors import BaseError


class ConfigError(BaseError):
    """Settings could not be built, from code or from the environment."""
    default_code = "config_error"


class InvalidSettingValueError(ConfigError):
    """A setting holds a value outside its domain.

    Raised by ``QuerySettings`` for an unknown naming policy name and by
    :class:`~mp_query.config.settings.loaders.EnvSettingsLoader` when an
    environment variable cannot be converted; ``setting_name`` is then the
    variable name.  ``detail`` carries the setting and the accepted values.
    """
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, *, allowed: Iterable[str] = ()) -> None:
        self.setting_name = setting_name
        self.value = value
        self.allowed = sorted(allowed)
        message = f"Invalid value {value!r} for setting {setting_name!r}"
        if self.allowed:
            message += f"; expected one of {', '.join(self.allowed)}"
        super().__init__(
            message,
            setting=setting_name,
            value=str(value),
            allowed=self.allowed or None,
        )


__all__ = ["ConfigError", "InvalidSettingValueError"]
