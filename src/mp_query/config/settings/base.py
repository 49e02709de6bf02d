"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar


@dataclasses.dataclass
class Settings:
    """Dataclass settings that can also be read from the environment.

    Each field ``name`` maps to the variable ``<_prefix>_<NAME>``.  Fields
    declared with ``metadata={"env": False}`` (callables such as
    ``QuerySettings.pattern_match``) can only be set from code.  ``_validate``
    runs after every construction, ``dataclasses.replace`` included.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        return None

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """Environment variable holding *field_name*, e.g. ``MP_QUERY_CASE_SENSITIVE``."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    @classmethod
    def env_fields(cls) -> list[dataclasses.Field[Any]]:
        """Fields that may be read from the environment, in declaration order."""
        return [f for f in dataclasses.fields(cls) if f.metadata.get("env", True)]


__all__ = ["Settings"]
