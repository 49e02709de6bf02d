"""Application mapping – translate DTO-facing field names and values to entity ones.

A :class:`FieldMapper` lets an API expose a request model (DTO) whose field
names differ from the persisted entity.  Resolution of an incoming name runs:

1. custom mapping on the raw name;
2. resolution of the name against the DTO;
3. custom mapping on the resolved DTO name;
4. resolution against the entity plus an existence check.

Any failure yields ``Nothing()``; the field is then dropped by the caller.

Example::

    mapper = (
        FieldMapper(ProductDto, Product)
        .map("title", "name")
        .map_with_transform("cents", "price", lambda raw: int(raw) / 100)
    )
    mapper.resolve_to_entity_field("title")   # Some("name")
"""
from __future__ import annotations

from typing import Any, Callable

from mp_query.application.resolver import DefaultFieldNameResolver
from mp_query.config import QuerySettings, get_default_settings
from mp_query.kernel.errors import InvalidArgumentError
from mp_query.kernel.fields import fields_of, property_exists
from mp_query.kernel.types import Nothing, Option, Some
from mp_query.observability.logging import get_logger

ValueTransformer = Callable[[Any], Any]

_log = get_logger(__name__)


class MappingModel:
    """Optional base class for request models used with :class:`FieldMapper`.

    Subclasses may override the lifecycle hooks; the defaults accept everything.
    """

    def on_before_map(self) -> bool:
        """Return ``False`` to veto mapping of this instance."""
        return True

    def on_after_map(self) -> None:
        return None

    def validate(self) -> bool:
        return True


class FieldMapper:
    """Resolve DTO field names to entity field paths, with optional value transforms.

    Configure once at startup through the fluent ``map*`` / ``with_transform``
    methods; lookups are read-only afterwards.
    """

    def __init__(
        self,
        dto_type: type,
        entity_type: type,
        settings: QuerySettings | None = None,
    ) -> None:
        self.dto_type = dto_type
        self.entity_type = entity_type
        self._settings = settings
        self._resolver = DefaultFieldNameResolver(settings)
        self._custom: dict[str, tuple[str, str]] = {}
        self._transformers: dict[str, ValueTransformer] = {}

    @property
    def settings(self) -> QuerySettings:
        return self._settings if self._settings is not None else get_default_settings()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def map(self, dto_field: str, entity_field: str) -> "FieldMapper":
        """Map *dto_field* to *entity_field*, which must be a scalar field of the entity."""
        if not dto_field:
            raise InvalidArgumentError("DTO field name cannot be empty", argument="dto_field")
        if not entity_field:
            raise InvalidArgumentError("Entity field name cannot be empty", argument="entity_field")
        canonical = self._resolver.resolve_property_name(self.entity_type, entity_field)
        if not property_exists(self.entity_type, canonical, leaf_only=True):
            raise InvalidArgumentError(
                f"Entity field {entity_field!r} does not exist on {self.entity_type.__name__}",
                argument="entity_field",
            )
        self._custom[dto_field.casefold()] = (dto_field, canonical)
        return self

    def map_with_transform(
        self,
        dto_field: str,
        entity_field: str,
        transformer: ValueTransformer,
    ) -> "FieldMapper":
        """Map *dto_field* to *entity_field* and convert incoming values with *transformer*."""
        self.map(dto_field, entity_field)
        return self.with_transform(dto_field, transformer)

    def with_transform(self, dto_field: str, transformer: ValueTransformer) -> "FieldMapper":
        """Register a value transformer without changing the field mapping."""
        if not dto_field:
            raise InvalidArgumentError("DTO field name cannot be empty", argument="dto_field")
        self._transformers[dto_field.casefold()] = transformer
        return self

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _custom_target(self, name: str) -> str | None:
        entry = self._custom.get(name.casefold())
        return entry[1] if entry is not None else None

    def resolve_to_entity_field(self, name: str) -> Option[str]:
        if not name:
            return Nothing()
        target = self._custom_target(name)
        if target is not None:
            return Some(target)
        dto_name = self._resolver.resolve_property_name(self.dto_type, name)
        target = self._custom_target(dto_name)
        if target is not None:
            return Some(target)
        entity_name = self._resolver.resolve_property_name(self.entity_type, dto_name)
        if property_exists(self.entity_type, entity_name, leaf_only=True):
            return Some(entity_name)
        _log.debug("mapper.field_unresolved", dto=self.dto_type.__name__, field=name)
        return Nothing()

    def resolve_field(self, target_type: Any, name: str) -> Option[str]:  # noqa: ARG002
        """:class:`~mp_query.application.resolver.FieldResolution` entry point.

        The mapper always resolves against its own entity type.
        """
        return self.resolve_to_entity_field(name)

    def _transformer_for(self, name: str) -> ValueTransformer | None:
        if not name:
            return None
        transformer = self._transformers.get(name.casefold())
        if transformer is None:
            dto_name = self._resolver.resolve_property_name(self.dto_type, name)
            transformer = self._transformers.get(dto_name.casefold())
        return transformer

    def has_transform(self, name: str) -> bool:
        return self._transformer_for(name) is not None

    def try_transform(self, name: str, raw: Any) -> Option[Any]:
        """Return ``Some(converted)``, ``Some(raw)`` without a transformer, ``Nothing()`` on failure."""
        transformer = self._transformer_for(name)
        if transformer is None:
            return Some(raw)
        try:
            return Some(transformer(raw))
        except Exception as exc:  # noqa: BLE001 - untrusted input degrades to no value
            _log.debug("mapper.transform_failed", field=name, error=type(exc).__name__)
            return Nothing()

    def transform_value(self, name: str, raw: Any) -> Any:
        """Apply the transformer registered for *name*; ``None`` when it raises."""
        return self.try_transform(name, raw).unwrap_or(None)

    def get_mapped_fields(self) -> list[str]:
        """DTO fields plus custom-mapped names, deduplicated case-insensitively."""
        seen: set[str] = set()
        out: list[str] = []
        names = fields_of(self.dto_type).names + [raw for raw, _ in self._custom.values()]
        for name in names:
            folded = name.casefold()
            if folded not in seen:
                seen.add(folded)
                out.append(name)
        return out

    def __repr__(self) -> str:
        return f"FieldMapper({self.dto_type.__name__} -> {self.entity_type.__name__})"


__all__ = ["FieldMapper", "MappingModel", "ValueTransformer"]
