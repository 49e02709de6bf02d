"""Unit tests for SearchOptionsBuilder."""

from __future__ import annotations

import dataclasses

import pytest

from mp_query.adapters.memory import InMemoryQueryable
from mp_query.application.builder import SearchOptionsBuilder
from mp_query.application.mapping import FieldMapper
from mp_query.application.paging import Paging
from mp_query.application.restrictions import FieldRestrictions
from mp_query.kernel.errors import ParseError


@dataclasses.dataclass
class Book:
    title: str
    author: str
    year: int


@dataclasses.dataclass
class BookDto:
    name: str = ""
    writer: str = ""


_BOOKS = [
    Book("Dune", "Herbert", 1965),
    Book("Neuromancer", "Gibson", 1984),
    Book("Foundation", "Asimov", 1951),
    Book("Hyperion", "Simmons", 1989),
]

_PARAMS = {
    "filters[0][fields]": "year",
    "filters[0][op]": "gt",
    "filters[0][val]": "1960",
    "sortings[0][prop]": "year",
    "sortings[0][ord]": "desc",
    "skip": "0",
    "take": "2",
}


class TestBuildParameters:
    def test_nothing_enabled(self) -> None:
        params = SearchOptionsBuilder(_PARAMS).build_parameters()
        assert params.paging is None
        assert params.filters == []
        assert params.sortings == []

    def test_everything_enabled(self) -> None:
        params = SearchOptionsBuilder(_PARAMS).with_paging().with_filtering().with_sorting().build_parameters()
        assert params.paging == Paging(0, 2)
        assert len(params.filters) == 1
        assert len(params.sortings) == 1

    def test_paging_absent_from_params(self) -> None:
        params = SearchOptionsBuilder({}).with_paging().build_parameters()
        assert params.paging is None

    def test_one_item_per_mapper(self) -> None:
        first = FieldMapper(BookDto, Book).map("name", "title")
        second = FieldMapper(BookDto, Book).map("writer", "author")
        params = SearchOptionsBuilder(_PARAMS).with_filtering(first).with_filtering(second).build_parameters()
        assert [f.mapper for f in params.filters] == [first, second]

    def test_malformed_items_raise(self) -> None:
        with pytest.raises(ParseError):
            SearchOptionsBuilder({"sortings[0][prop]": "year"}).with_sorting().build_parameters()


class TestBuild:
    def test_paged_query(self) -> None:
        result = (
            SearchOptionsBuilder(_PARAMS)
            .with_paging()
            .with_filtering()
            .with_sorting()
            .build(InMemoryQueryable(_BOOKS))
            .to_paged_list()
        )
        assert [b.title for b in result] == ["Hyperion", "Neuromancer"]
        assert result.total_count == 3
        assert result.has_next

    def test_mapped_names(self) -> None:
        mapper = FieldMapper(BookDto, Book).map("name", "title").map("writer", "author")
        params = {
            "filters[0][fields]": "writer",
            "filters[0][op]": "eq",
            "filters[0][val]": "gibson",
            "sortings[0][prop]": "name",
            "sortings[0][ord]": "asc",
        }
        result = SearchOptionsBuilder(params).with_filtering(mapper).with_sorting(mapper).build(InMemoryQueryable(_BOOKS))
        assert [b.title for b in result] == ["Neuromancer"]

    def test_restrictions(self) -> None:
        restrictions = FieldRestrictions().block_filtering("year")
        result = SearchOptionsBuilder(_PARAMS).with_filtering().build(InMemoryQueryable(_BOOKS), restrictions)
        assert len(list(result)) == 4
