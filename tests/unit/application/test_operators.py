"""Unit tests for filter operators and sort orders."""

from __future__ import annotations

import pytest

from mp_query.application.operators import FilterOperator, SortOrder
from mp_query.kernel.errors import ParseError


class TestFilterOperator:
    @pytest.mark.parametrize(
        ("code", "op"),
        [
            ("eq", FilterOperator.EQUALS),
            ("neq", FilterOperator.NOT_EQUALS),
            ("gt", FilterOperator.GREATER_THAN),
            ("lt", FilterOperator.LESS_THAN),
            ("gte", FilterOperator.GREATER_THAN_OR_EQUALS),
            ("lte", FilterOperator.LESS_THAN_OR_EQUALS),
            ("contains", FilterOperator.CONTAINS),
            ("ncontains", FilterOperator.NOT_CONTAINS),
            ("null", FilterOperator.IS_NULL),
            ("notnull", FilterOperator.IS_NOT_NULL),
        ],
    )
    def test_parse_wire_code(self, code: str, op: FilterOperator) -> None:
        assert FilterOperator.parse(code) is op
        assert op.code == code
        assert str(op) == code

    @pytest.mark.parametrize(
        ("name", "op"),
        [
            ("Equals", FilterOperator.EQUALS),
            ("GreaterThanOrEquals", FilterOperator.GREATER_THAN_OR_EQUALS),
            ("not_contains", FilterOperator.NOT_CONTAINS),
            ("IS_NULL", FilterOperator.IS_NULL),
            ("  EQ ", FilterOperator.EQUALS),
        ],
    )
    def test_parse_member_names(self, name: str, op: FilterOperator) -> None:
        assert FilterOperator.parse(name) is op

    def test_unknown_raises_parse_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            FilterOperator.parse("like")
        assert exc_info.value.key == "op"

    def test_symbols(self) -> None:
        assert FilterOperator.EQUALS.symbol == "=="
        assert FilterOperator.LESS_THAN_OR_EQUALS.symbol == "<="
        assert FilterOperator.IS_NOT_NULL.symbol == "is not null"

    def test_is_ordering(self) -> None:
        assert FilterOperator.GREATER_THAN.is_ordering
        assert not FilterOperator.CONTAINS.is_ordering

    def test_needs_value(self) -> None:
        assert FilterOperator.EQUALS.needs_value
        assert not FilterOperator.IS_NULL.needs_value
        assert not FilterOperator.IS_NOT_NULL.needs_value


class TestSortOrder:
    @pytest.mark.parametrize("raw", ["asc", "ASC", "Ascending"])
    def test_parse_ascending(self, raw: str) -> None:
        assert SortOrder.parse(raw) is SortOrder.ASCENDING

    @pytest.mark.parametrize("raw", ["desc", "Descending", " DESC "])
    def test_parse_descending(self, raw: str) -> None:
        assert SortOrder.parse(raw) is SortOrder.DESCENDING

    def test_unknown_raises(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            SortOrder.parse("up")
        assert exc_info.value.key == "ord"

    def test_code(self) -> None:
        assert SortOrder.DESCENDING.code == "desc"
