"""Application search – SearchParameters, the per-request filter/sort/paging aggregate.

:meth:`SearchParameters.apply` runs the fixed pipeline:

1. compile every filter and AND it onto the query (declaration order;
   filters that compile to nothing are skipped);
2. deduplicate sortings by raw property name (first occurrence wins),
   compile them and apply the first surviving key as primary order and the
   rest as tie-breakers;
3. snapshot the result as the *count query*;
4. apply paging, if any, to obtain the *paged query*.

Neither query is executed here.

Wire format (flat string mapping)::

    filters[0][fields]=name,description  filters[0][op]=contains  filters[0][val]=lap
    sortings[0][prop]=price              sortings[0][ord]=desc
    skip=0                               take=20
"""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Mapping, TypeVar

from mp_query.application.filter import Filter
from mp_query.application.paged import PagedQuery
from mp_query.application.paging import Paging
from mp_query.application.querystring import merge_list, split_list
from mp_query.application.queryable import Queryable
from mp_query.application.resolver import FieldResolution
from mp_query.application.sorting import Sorting
from mp_query.config import QuerySettings, get_default_settings
from mp_query.observability.logging import get_logger

if TYPE_CHECKING:
    from mp_query.application.mapping import FieldMapper
    from mp_query.application.restrictions import FieldRestrictions

Q = TypeVar("Q", bound=Queryable)

_log = get_logger(__name__)


def distinct_sortings(sortings: list[Sorting]) -> list[Sorting]:
    """Keep the first sorting per raw property name, in declaration order."""
    seen: set[str] = set()
    out: list[Sorting] = []
    for sorting in sortings:
        if sorting.property_name not in seen:
            seen.add(sorting.property_name)
            out.append(sorting)
    return out


@dataclasses.dataclass
class SearchParameters:
    """Optional paging plus ordered filters (AND) and sortings (tie-break order)."""

    paging: Paging | None = None
    filters: list[Filter] = dataclasses.field(default_factory=list)
    sortings: list[Sorting] = dataclasses.field(default_factory=list)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def add_filters(self, *filters: Filter) -> "SearchParameters":
        self.filters.extend(filters)
        return self

    def add_sortings(self, *sortings: Sorting) -> "SearchParameters":
        self.sortings.extend(sortings)
        return self

    def __add__(self, other: "SearchParameters") -> "SearchParameters":
        if not isinstance(other, SearchParameters):
            return NotImplemented
        return SearchParameters(
            paging=self.paging if self.paging is not None else other.paging,
            filters=[*self.filters, *other.filters],
            sortings=[*self.sortings, *other.sortings],
        )

    def with_mapper(self, mapper: "FieldMapper | None") -> "SearchParameters":
        """Return a copy whose filters and sortings resolve through *mapper*."""
        return SearchParameters(
            paging=self.paging,
            filters=[f.with_mapper(mapper) for f in self.filters],
            sortings=[s.with_mapper(mapper) for s in self.sortings],
        )

    # ------------------------------------------------------------------
    # Applying
    # ------------------------------------------------------------------

    def apply(
        self,
        query: Q,
        restrictions: "FieldRestrictions | None" = None,
        settings: QuerySettings | None = None,
        resolver: FieldResolution | None = None,
    ) -> tuple[Q, Q]:
        """Return ``(count_query, paged_query)`` for *query*."""
        settings = settings or get_default_settings()
        target = query.element_type

        applied_filters = 0
        for filter in self.filters:
            for predicate in filter.compile(target, resolver, restrictions, settings):
                query = query.where(predicate)
                applied_filters += 1

        keys = [
            key
            for sorting in distinct_sortings(self.sortings)
            for key in sorting.compile(target, resolver, restrictions, settings)
        ]
        if keys:
            query = query.order_by(keys[0])
            for key in keys[1:]:
                query = query.then_by(key)

        _log.debug(
            "search.applied",
            filters=applied_filters,
            filters_declared=len(self.filters),
            sort_keys=len(keys),
            paged=self.paging is not None,
        )
        count_query = query
        paged_query = self.paging.apply(query) if self.paging is not None else query
        return count_query, paged_query

    def to_paged_query(
        self,
        query: Queryable[Any],
        restrictions: "FieldRestrictions | None" = None,
        settings: QuerySettings | None = None,
        resolver: FieldResolution | None = None,
    ) -> PagedQuery[Any]:
        count_query, paged_query = self.apply(query, restrictions, settings, resolver)
        return PagedQuery(count_query, paged_query, self.paging)

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, str]:
        out: dict[str, str] = {}
        out.update(merge_list("sortings", (s.to_dict() for s in distinct_sortings(self.sortings))))
        out.update(merge_list("filters", (f.to_dict() for f in self.filters)))
        if self.paging is not None:
            out.update(self.paging.to_dict())
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, str], mapper: "FieldMapper | None" = None) -> "SearchParameters":
        """Parse the flat bracket notation; malformed items raise :class:`ParseError`."""
        lists = split_list(data)
        return cls(
            paging=Paging.from_dict(data),
            filters=[Filter.from_dict(item, mapper) for item in lists.get("filters", [])],
            sortings=[Sorting.from_dict(item, mapper) for item in lists.get("sortings", [])],
        )

    def __str__(self) -> str:
        paging = str(self.paging) if self.paging is not None else "---"
        sortings = " -> ".join(str(s) for s in self.sortings)
        filters = " AND ".join(str(f) for f in self.filters)
        return f"Paging: {paging}; Sortings: {sortings}; Filters: {filters}"


__all__ = ["SearchParameters", "distinct_sortings"]
