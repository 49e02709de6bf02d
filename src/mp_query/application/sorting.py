"""Application sorting – one ordering key and its compilation."""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Mapping

from mp_query.application.operators import SortOrder
from mp_query.application.predicates import OrderKey
from mp_query.application.resolver import DefaultFieldNameResolver, FieldResolution
from mp_query.config import QuerySettings, get_default_settings
from mp_query.kernel.errors import InvalidArgumentError, ParseError
from mp_query.kernel.types import Nothing, Option, Some
from mp_query.observability.logging import get_logger

if TYPE_CHECKING:
    from mp_query.application.mapping import FieldMapper
    from mp_query.application.restrictions import FieldRestrictions

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class Sorting:
    """Order by ``property_name`` in ``order`` direction."""

    property_name: str
    order: SortOrder = SortOrder.ASCENDING
    mapper: "FieldMapper | None" = dataclasses.field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        name = (self.property_name or "").strip()
        if not name:
            raise InvalidArgumentError("A sorting needs a property name", argument="property_name")
        object.__setattr__(self, "property_name", name)
        if not isinstance(self.order, SortOrder):
            object.__setattr__(self, "order", SortOrder.parse(self.order))

    @property
    def descending(self) -> bool:
        return self.order is SortOrder.DESCENDING

    def with_mapper(self, mapper: "FieldMapper | None") -> "Sorting":
        return dataclasses.replace(self, mapper=mapper)

    def to_dict(self) -> dict[str, str]:
        return {"prop": self.property_name, "ord": self.order.code}

    @classmethod
    def from_dict(cls, data: Mapping[str, str], mapper: "FieldMapper | None" = None) -> "Sorting":
        """Parse ``{"prop", "ord"}``; missing keys raise :class:`ParseError`."""
        for key in ("prop", "ord"):
            if key not in data:
                raise ParseError(f"Sorting is missing required key {key!r}", key=key)
        if not str(data["prop"]).strip():
            raise ParseError("Sorting has an empty property name", key="prop")
        return cls(str(data["prop"]), SortOrder.parse(data["ord"]), mapper=mapper)

    def compile(
        self,
        target_type: Any,
        resolver: FieldResolution | None = None,
        restrictions: "FieldRestrictions | None" = None,
        settings: QuerySettings | None = None,
    ) -> Option[OrderKey]:
        """Compile to an :class:`OrderKey`; ``Nothing()`` when restricted or unresolved."""
        settings = settings or get_default_settings()
        resolution: FieldResolution = self.mapper or resolver or DefaultFieldNameResolver(settings)
        raw = self.property_name
        if restrictions is not None and not restrictions.is_sort_field_allowed(raw):
            _log.debug("sorting.field_restricted", field=raw)
            return Nothing()
        resolved = resolution.resolve_field(target_type, raw)
        if resolved.is_none():
            _log.debug("sorting.field_unresolved", field=raw)
            return Nothing()
        path = resolved.unwrap()
        if restrictions is not None and not restrictions.is_sort_field_allowed(raw, path):
            _log.debug("sorting.field_restricted", field=raw, path=path)
            return Nothing()
        return Some(OrderKey(path, self.descending))

    def __str__(self) -> str:
        return f"{self.property_name} {self.order.code}"


__all__ = ["Sorting"]
