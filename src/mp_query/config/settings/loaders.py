"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import os
from collections.abc import Mapping
from typing import Any, TypeVar

from mp_query.config.settings.base import Settings
from mp_query.config.validation import ConfigError, InvalidSettingValueError

T = TypeVar("T", bound=Settings)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    ``QuerySettings.use_field_aliases`` is read from ``MP_QUERY_USE_FIELD_ALIASES``.
    Unset variables keep the field default.  A value that cannot be converted
    raises :class:`InvalidSettingValueError` naming the variable; any other
    construction failure (a required field left unset) becomes a
    :class:`ConfigError`.
    """

    _TRUE = ("1", "true", "yes", "on")
    _FALSE = ("0", "false", "no", "off")

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        kwargs: dict[str, Any] = {}

        for field in settings_class.env_fields():
            env_key = settings_class.env_key(field.name)
            raw = environ.get(env_key)
            if raw is None:
                continue
            try:
                kwargs[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                allowed = self._TRUE + self._FALSE if field.type in (bool, "bool") else ()
                raise InvalidSettingValueError(env_key, raw, allowed=allowed) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(
                f"Cannot build {settings_class.__name__} from the environment: {exc}",
                cause=exc,
                prefix=settings_class._prefix or None,
            ) from exc

    def _coerce(self, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        origin = getattr(type_hint, "__origin__", None)
        if type_hint is bool or type_hint == "bool":
            folded = value.strip().lower()
            if folded in self._TRUE:
                return True
            if folded in self._FALSE:
                return False
            raise ValueError(f"not a boolean: {value!r}")
        if type_hint is int or type_hint == "int":
            return int(value)
        if type_hint is float or type_hint == "float":
            return float(value)
        if origin is list or (isinstance(type_hint, str) and type_hint.startswith("list[")):
            return [v.strip() for v in value.split(",") if v.strip()]
        if value == "" and isinstance(type_hint, str) and "None" in type_hint:
            return None
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
