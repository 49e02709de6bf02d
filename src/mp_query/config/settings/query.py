"""Config settings – QuerySettings and the process-wide default instance."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, ClassVar

from mp_query.config.settings.base import Settings
from mp_query.config.validation import InvalidSettingValueError
from mp_query.kernel.naming import POLICIES, NamingPolicy, get_policy

PatternMatch = Callable[[Any, str, bool], Any]
"""Backend-native substring matcher: ``(expression, value, case_sensitive) -> condition``."""


@dataclasses.dataclass
class QuerySettings(Settings):
    """Resolution and comparison settings shared by filters and sortings.

    Configure once at startup; instances are treated as read-only afterwards.

    Attributes:
        naming_policy: Registered policy name (``camel``, ``pascal``, ``snake``,
            ``kebab``) or a ``str -> str`` callable mapping property names to
            wire names.
        use_field_aliases: Match declared field aliases before property names.
        case_sensitive: Default case sensitivity of string comparisons; a
            filter's own ``case_sensitive`` flag can only tighten it.
        use_pattern_match: Let backends with a native pattern matcher use it
            for ``contains`` / ``ncontains``.
        pattern_match: Override of the backend's native pattern matcher.
    """

    _prefix: ClassVar[str] = "MP_QUERY"

    naming_policy: str | NamingPolicy | None = None
    use_field_aliases: bool = True
    case_sensitive: bool = False
    use_pattern_match: bool = True
    pattern_match: PatternMatch | None = dataclasses.field(default=None, metadata={"env": False})

    def _validate(self) -> None:
        if isinstance(self.naming_policy, str) and self.naming_policy.strip().lower() not in POLICIES:
            raise InvalidSettingValueError("naming_policy", self.naming_policy, allowed=POLICIES)

    @property
    def policy(self) -> NamingPolicy | None:
        """The naming policy as a callable (``None`` when unset)."""
        return get_policy(self.naming_policy)

    def clone(self, **changes: Any) -> "QuerySettings":
        """Return a copy, optionally with *changes* applied."""
        return dataclasses.replace(self, **changes)


_default_settings = QuerySettings()


def get_default_settings() -> QuerySettings:
    """Return the process-wide default settings."""
    return _default_settings


def set_default_settings(settings: QuerySettings) -> None:
    """Replace the process-wide default settings (startup only; not synchronised)."""
    global _default_settings
    _default_settings = settings


__all__ = ["PatternMatch", "QuerySettings", "get_default_settings", "set_default_settings"]
