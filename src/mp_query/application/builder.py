"""Application builder – assemble SearchParameters from raw request parameters."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from mp_query.application.filter import Filter
from mp_query.application.paged import PagedQuery
from mp_query.application.paging import Paging
from mp_query.application.querystring import split_list
from mp_query.application.queryable import Queryable
from mp_query.application.search import SearchParameters
from mp_query.application.sorting import Sorting
from mp_query.config import QuerySettings, get_default_settings

if TYPE_CHECKING:
    from mp_query.application.mapping import FieldMapper
    from mp_query.application.restrictions import FieldRestrictions


class SearchOptionsBuilder:
    """Fluent, per-request builder over a flat parameter mapping.

    Each ``with_filtering`` / ``with_sorting`` call registers one mapper;
    every filter (sorting) item on the wire is parsed once per registered
    mapper and carries that mapper, so the item resolves through it.

    Example::

        page = (
            SearchOptionsBuilder(request.query_params)
            .with_paging()
            .with_filtering(product_mapper)
            .with_sorting(product_mapper)
            .build(SqlAlchemyQueryable(select(Product)))
            .to_paged_list()
        )
    """

    def __init__(self, params: Mapping[str, str], settings: QuerySettings | None = None) -> None:
        self._params = dict(params)
        self._settings = settings or get_default_settings()
        self._paging = False
        self._filter_mappers: list["FieldMapper | None"] = []
        self._sorting_mappers: list["FieldMapper | None"] = []

    def with_paging(self) -> "SearchOptionsBuilder":
        self._paging = True
        return self

    def with_filtering(self, mapper: "FieldMapper | None" = None) -> "SearchOptionsBuilder":
        self._filter_mappers.append(mapper)
        return self

    def with_sorting(self, mapper: "FieldMapper | None" = None) -> "SearchOptionsBuilder":
        self._sorting_mappers.append(mapper)
        return self

    def build_parameters(self) -> SearchParameters:
        lists = split_list(self._params)
        filters = [
            Filter.from_dict(item, mapper)
            for mapper in self._filter_mappers
            for item in lists.get("filters", [])
        ]
        sortings = [
            Sorting.from_dict(item, mapper)
            for mapper in self._sorting_mappers
            for item in lists.get("sortings", [])
        ]
        paging = Paging.from_dict(self._params) if self._paging else None
        return SearchParameters(paging=paging, filters=filters, sortings=sortings)

    def build(
        self,
        query: Queryable[Any],
        restrictions: "FieldRestrictions | None" = None,
    ) -> PagedQuery[Any]:
        return self.build_parameters().to_paged_query(query, restrictions, self._settings)


__all__ = ["SearchOptionsBuilder"]
