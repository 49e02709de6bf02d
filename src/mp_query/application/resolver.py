"""Application resolver – map incoming wire field names to canonical property paths."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from mp_query.config import QuerySettings, get_default_settings
from mp_query.kernel.fields import FieldInfo, fields_of, property_exists
from mp_query.kernel.types import Nothing, Option, Some


@runtime_checkable
class FieldResolution(Protocol):
    """Anything that can turn an untrusted field name into a canonical path."""

    def resolve_field(self, target_type: Any, name: str) -> Option[str]: ...


class DefaultFieldNameResolver:
    """Resolve dotted names level by level against the field registry.

    At each level the fragment is matched, in order, against:

    1. a declared field alias (when ``settings.use_field_aliases``);
    2. the property name, case-insensitively;
    3. ``policy(property_name)`` for every property, when a naming policy is set.

    An unmatched fragment is kept verbatim together with everything after it,
    so a later existence check flags the path. Never raises on unknown input.
    """

    def __init__(self, settings: QuerySettings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> QuerySettings:
        return self._settings if self._settings is not None else get_default_settings()

    def _match(self, target_type: Any, fragment: str) -> FieldInfo | None:
        fields = fields_of(target_type)
        settings = self.settings
        if settings.use_field_aliases:
            info = fields.find_by_alias(fragment)
            if info is not None:
                return info
        info = fields.find(fragment)
        if info is not None:
            return info
        policy = settings.policy
        if policy is not None:
            folded = fragment.casefold()
            for candidate in fields:
                if policy(candidate.name).casefold() == folded:
                    return candidate
        return None

    def resolve_property_name(self, target_type: Any, name: str) -> str:
        if not name:
            return name
        fragments = name.split(".")
        resolved: list[str] = []
        current = target_type
        for index, fragment in enumerate(fragments):
            info = self._match(current, fragment.strip()) if current is not None else None
            if info is None:
                resolved.extend(fragments[index:])
                break
            resolved.append(info.name)
            current = info.type
        return ".".join(resolved)

    def resolve_field(self, target_type: Any, name: str) -> Option[str]:
        """Resolve *name* and confirm it names a scalar field of *target_type*."""
        path = self.resolve_property_name(target_type, name)
        return Some(path) if property_exists(target_type, path, leaf_only=True) else Nothing()


class PassThroughFieldNameResolver:
    """Keep names verbatim; only an exact-name check for a scalar field applies."""

    def resolve_property_name(self, target_type: Any, name: str) -> str:  # noqa: ARG002
        return name

    def resolve_field(self, target_type: Any, name: str) -> Option[str]:
        if not name:
            return Nothing()
        current = target_type
        for fragment in name.split("."):
            info = fields_of(current).find(fragment) if current is not None else None
            if info is None or info.name != fragment:
                return Nothing()
            current = info.type
        return Some(name) if current is None else Nothing()


__all__ = ["DefaultFieldNameResolver", "FieldResolution", "PassThroughFieldNameResolver"]
