"""Application filter – one filter condition and its compilation into a predicate.

A :class:`Filter` names one or more fields (combined with OR), an operator
and an optional raw value.  :meth:`Filter.compile` resolves each field
against a target type, drops the ones that are restricted or unknown and
OR-combines one :class:`~mp_query.application.predicates.Comparison` per
surviving field.  When nothing survives the filter compiles to ``Nothing()``
and contributes no condition at all.
"""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from mp_query.application.operators import FilterOperator
from mp_query.application.predicates import Comparison, Predicate, Unsatisfiable, any_of
from mp_query.application.resolver import DefaultFieldNameResolver, FieldResolution
from mp_query.config import QuerySettings, get_default_settings
from mp_query.kernel.errors import InvalidArgumentError, ParseError
from mp_query.kernel.types import Nothing, Option, Some
from mp_query.observability.logging import get_logger

if TYPE_CHECKING:
    from mp_query.application.mapping import FieldMapper
    from mp_query.application.restrictions import FieldRestrictions

_log = get_logger(__name__)


def _normalise_fields(fields: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(fields, str):
        fields = (fields,)
    return tuple(f.strip() for f in fields if f and f.strip())


@dataclasses.dataclass(frozen=True)
class Filter:
    """One filter condition: ``field_1 OR field_2 ... <operator> value``.

    Equality covers ``fields``, ``operator``, ``value`` and ``case_sensitive``;
    the attached mapper is configuration and does not take part.
    """

    fields: tuple[str, ...]
    operator: FilterOperator
    value: str | None = None
    case_sensitive: bool = False
    mapper: "FieldMapper | None" = dataclasses.field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        fields = _normalise_fields(self.fields)
        if not fields:
            raise InvalidArgumentError("A filter needs at least one field", argument="fields")
        object.__setattr__(self, "fields", fields)
        if not isinstance(self.operator, FilterOperator):
            object.__setattr__(self, "operator", FilterOperator.parse(self.operator))

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def with_mapper(self, mapper: "FieldMapper | None") -> "Filter":
        return dataclasses.replace(self, mapper=mapper)

    def or_(self, field: str) -> "Filter":
        """Return a copy that also matches on *field*."""
        return dataclasses.replace(self, fields=(*self.fields, field))

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, str]:
        out = {"fields": ",".join(self.fields), "op": self.operator.code}
        if self.value is not None:
            out["val"] = self.value
        if self.case_sensitive:
            out["case"] = "true"
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, str], mapper: "FieldMapper | None" = None) -> "Filter":
        """Parse ``{"fields", "op", "val"?, "case"?}``; missing keys raise :class:`ParseError`."""
        for key in ("fields", "op"):
            if key not in data:
                raise ParseError(f"Filter is missing required key {key!r}", key=key)
        fields = _normalise_fields(str(data["fields"]).split(","))
        if not fields:
            raise ParseError("Filter has no fields", key="fields")
        return cls(
            fields=fields,
            operator=FilterOperator.parse(data["op"]),
            value=data.get("val"),
            case_sensitive=str(data.get("case", "")).strip().lower() == "true",
            mapper=mapper,
        )

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def _effective_operator(self) -> FilterOperator:
        if self.value is None:
            if self.operator is FilterOperator.EQUALS:
                return FilterOperator.IS_NULL
            if self.operator is FilterOperator.NOT_EQUALS:
                return FilterOperator.IS_NOT_NULL
        return self.operator

    def _leaf(self, raw: str, path: str, case_sensitive: bool) -> Predicate:
        operator = self._effective_operator()
        if not operator.needs_value:
            return Comparison(path, operator)
        if self.mapper is not None and self.mapper.has_transform(raw):
            converted = self.mapper.try_transform(raw, self.value)
            if converted.is_none():
                return Unsatisfiable()
            return Comparison(path, operator, converted.unwrap(), case_sensitive, typed=True)
        return Comparison(path, operator, self.value, case_sensitive)

    def compile(
        self,
        target_type: Any,
        resolver: FieldResolution | None = None,
        restrictions: "FieldRestrictions | None" = None,
        settings: QuerySettings | None = None,
    ) -> Option[Predicate]:
        """Compile against *target_type*; ``Nothing()`` when no field survives.

        The filter's own mapper takes priority over *resolver*.  A field is
        kept only if both its raw and resolved names pass *restrictions*.
        """
        settings = settings or get_default_settings()
        resolution: FieldResolution = self.mapper or resolver or DefaultFieldNameResolver(settings)
        case_sensitive = self.case_sensitive or settings.case_sensitive
        leaves: list[Predicate] = []
        for raw in self.fields:
            if restrictions is not None and not restrictions.is_filter_field_allowed(raw):
                _log.debug("filter.field_restricted", field=raw)
                continue
            resolved = resolution.resolve_field(target_type, raw)
            if resolved.is_none():
                _log.debug("filter.field_unresolved", field=raw)
                continue
            path = resolved.unwrap()
            if restrictions is not None and not restrictions.is_filter_field_allowed(raw, path):
                _log.debug("filter.field_restricted", field=raw, path=path)
                continue
            leaves.append(self._leaf(raw, path, case_sensitive))
        if not leaves:
            return Nothing()
        return Some(any_of(leaves))

    def __str__(self) -> str:
        value = "" if self.value is None else f" {self.value}"
        return "(" + " OR ".join(f"{f} {self.operator.symbol}{value}" for f in self.fields) + ")"


__all__ = ["Filter"]
