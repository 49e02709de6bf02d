"""Unit tests for Sorting."""

from __future__ import annotations

import dataclasses
from typing import Optional

import pytest
from structlog.testing import capture_logs

from mp_query.application.mapping import FieldMapper
from mp_query.application.operators import SortOrder
from mp_query.application.predicates import OrderKey
from mp_query.application.restrictions import FieldRestrictions
from mp_query.application.sorting import Sorting
from mp_query.kernel.errors import InvalidArgumentError, ParseError
from mp_query.kernel.types import Nothing, Some


@dataclasses.dataclass
class Maker:
    name: str


@dataclasses.dataclass
class Product:
    name: str
    price: float = 0.0
    internal_rank: int = 0
    maker: Optional[Maker] = None


@dataclasses.dataclass
class ProductDto:
    title: str = ""
    rank: int = 0


class TestSortingConstruction:
    def test_defaults_to_ascending(self) -> None:
        s = Sorting("name")
        assert s.order is SortOrder.ASCENDING
        assert not s.descending

    def test_order_parsed_from_string(self) -> None:
        assert Sorting("name", "desc").descending

    def test_empty_property_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Sorting("  ")

    def test_str(self) -> None:
        assert str(Sorting("price", SortOrder.DESCENDING)) == "price desc"


class TestSortingWireFormat:
    def test_to_dict(self) -> None:
        assert Sorting("price", "desc").to_dict() == {"prop": "price", "ord": "desc"}

    def test_from_dict(self) -> None:
        assert Sorting.from_dict({"prop": "price", "ord": "Descending"}) == Sorting("price", "desc")

    @pytest.mark.parametrize("missing", ["prop", "ord"])
    def test_missing_key(self, missing: str) -> None:
        data = {"prop": "price", "ord": "asc"}
        del data[missing]
        with pytest.raises(ParseError) as exc_info:
            Sorting.from_dict(data)
        assert exc_info.value.key == missing

    def test_empty_prop(self) -> None:
        with pytest.raises(ParseError):
            Sorting.from_dict({"prop": "", "ord": "asc"})

    def test_bad_order(self) -> None:
        with pytest.raises(ParseError):
            Sorting.from_dict({"prop": "name", "ord": "sideways"})

    def test_round_trip(self) -> None:
        s = Sorting("name", SortOrder.DESCENDING)
        assert Sorting.from_dict(s.to_dict()) == s


class TestSortingCompile:
    def test_resolved_key(self) -> None:
        assert Sorting("PRICE", "desc").compile(Product) == Some(OrderKey("price", True))

    def test_unknown_property(self) -> None:
        with capture_logs() as logs:
            assert Sorting("nope").compile(Product) == Nothing()
        assert logs[0]["event"] == "sorting.field_unresolved"

    def test_nested_model_is_not_a_sort_key(self) -> None:
        assert Sorting("maker").compile(Product) == Nothing()
        assert Sorting("Maker.Name").compile(Product) == Some(OrderKey("maker.name"))

    def test_restricted(self) -> None:
        restrictions = FieldRestrictions().allow_sorting("name")
        assert Sorting("price").compile(Product, restrictions=restrictions) == Nothing()
        assert Sorting("name").compile(Product, restrictions=restrictions) == Some(OrderKey("name"))

    def test_mapper(self) -> None:
        mapper = FieldMapper(ProductDto, Product).map("rank", "internal_rank")
        assert Sorting("Rank", mapper=mapper).compile(Product) == Some(OrderKey("internal_rank"))

    def test_mapper_target_blocked(self) -> None:
        mapper = FieldMapper(ProductDto, Product).map("rank", "internal_rank")
        restrictions = FieldRestrictions().block_sorting("internal_rank")
        assert Sorting("rank", mapper=mapper).compile(Product, restrictions=restrictions) == Nothing()
