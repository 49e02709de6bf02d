"""Unit tests for FieldMapper and MappingModel."""

from __future__ import annotations

import dataclasses
from typing import Optional

import pytest
from structlog.testing import capture_logs

from mp_query.application.mapping import FieldMapper, MappingModel
from mp_query.application.resolver import FieldResolution
from mp_query.config import QuerySettings
from mp_query.kernel.errors import InvalidArgumentError
from mp_query.kernel.types import Nothing, Some

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@dataclasses.dataclass
class Supplier:
    name: str
    country: str = ""


@dataclasses.dataclass
class Product:
    name: str
    price: float
    category: str = ""
    internal_code: str = ""
    supplier: Optional[Supplier] = None


@dataclasses.dataclass
class ProductDto(MappingModel):
    title: str = ""
    price: float = 0.0
    category: str = ""
    cents: int = 0


def _mapper(settings: QuerySettings | None = None) -> FieldMapper:
    return FieldMapper(ProductDto, Product, settings)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolveToEntityField:
    def test_one_to_one_by_name(self) -> None:
        assert _mapper().resolve_to_entity_field("price") == Some("price")

    def test_case_insensitive(self) -> None:
        assert _mapper().resolve_to_entity_field("CATEGORY") == Some("category")

    def test_custom_mapping_takes_priority(self) -> None:
        mapper = _mapper().map("title", "name")
        assert mapper.resolve_to_entity_field("title") == Some("name")
        assert mapper.resolve_to_entity_field("TITLE") == Some("name")

    def test_custom_mapping_to_nested_field(self) -> None:
        mapper = _mapper().map("supplierName", "supplier.name")
        assert mapper.resolve_to_entity_field("suppliername") == Some("supplier.name")

    def test_custom_mapping_on_resolved_dto_name(self) -> None:
        mapper = _mapper(QuerySettings(naming_policy="camel")).map("cents", "price")
        assert mapper.resolve_to_entity_field("Cents") == Some("price")

    def test_unmapped_dto_field_without_entity_counterpart(self) -> None:
        assert _mapper().resolve_to_entity_field("title") == Nothing()

    def test_entity_only_field_passes_existence_check(self) -> None:
        assert _mapper().resolve_to_entity_field("internal_code") == Some("internal_code")

    def test_nested_entity_path(self) -> None:
        assert _mapper().resolve_to_entity_field("Supplier.Country") == Some("supplier.country")

    def test_nested_model_itself_is_unresolved(self) -> None:
        assert _mapper().resolve_to_entity_field("supplier") == Nothing()

    def test_unknown_and_empty(self) -> None:
        assert _mapper().resolve_to_entity_field("nope") == Nothing()
        assert _mapper().resolve_to_entity_field("") == Nothing()

    def test_unresolved_logged_at_debug(self) -> None:
        with capture_logs() as logs:
            _mapper().resolve_to_entity_field("nope")
        assert logs[0]["event"] == "mapper.field_unresolved"
        assert logs[0]["log_level"] == "debug"

    def test_resolve_field_protocol(self) -> None:
        mapper = _mapper().map("title", "name")
        assert isinstance(mapper, FieldResolution)
        assert mapper.resolve_field(object, "title") == Some("name")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestMapConfiguration:
    def test_empty_dto_field_raises(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            _mapper().map("", "name")
        assert exc_info.value.argument == "dto_field"

    def test_empty_entity_field_raises(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            _mapper().map("title", "")
        assert exc_info.value.argument == "entity_field"

    def test_nonexistent_entity_field_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            _mapper().map("title", "does_not_exist")

    def test_mapping_to_nested_model_raises(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            _mapper().map("vendor", "supplier")
        assert exc_info.value.argument == "entity_field"

    def test_entity_field_is_canonicalised(self) -> None:
        mapper = _mapper().map("title", "NAME")
        assert mapper.resolve_to_entity_field("title") == Some("name")

    def test_fluent(self) -> None:
        mapper = _mapper()
        assert mapper.map("title", "name") is mapper
        assert mapper.with_transform("cents", int) is mapper


# ---------------------------------------------------------------------------
# Value transformation
# ---------------------------------------------------------------------------


class TestTransformValue:
    def test_without_transformer_returns_raw(self) -> None:
        assert _mapper().transform_value("price", "12.5") == "12.5"

    def test_map_with_transform(self) -> None:
        mapper = _mapper().map_with_transform("cents", "price", lambda raw: int(raw) / 100)
        assert mapper.resolve_to_entity_field("cents") == Some("price")
        assert mapper.transform_value("cents", "1250") == 12.5

    def test_with_transform_keeps_mapping(self) -> None:
        mapper = _mapper().with_transform("price", float)
        assert mapper.resolve_to_entity_field("price") == Some("price")
        assert mapper.transform_value("PRICE", "3") == 3.0

    def test_failure_degrades_to_none(self) -> None:
        mapper = _mapper().with_transform("price", float)
        with capture_logs() as logs:
            assert mapper.transform_value("price", "abc") is None
        assert logs[0]["event"] == "mapper.transform_failed"

    def test_try_transform(self) -> None:
        mapper = _mapper().with_transform("price", float)
        assert mapper.try_transform("price", "2") == Some(2.0)
        assert mapper.try_transform("price", "x") == Nothing()
        assert mapper.try_transform("category", "x") == Some("x")

    def test_has_transform(self) -> None:
        mapper = _mapper().with_transform("price", float)
        assert mapper.has_transform("Price")
        assert not mapper.has_transform("category")


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------


class TestGetMappedFields:
    def test_dto_fields_plus_custom_keys(self) -> None:
        mapper = _mapper().map("supplierName", "supplier.name").map("TITLE", "name")
        assert mapper.get_mapped_fields() == ["title", "price", "category", "cents", "supplierName"]


class TestMappingModel:
    def test_default_hooks(self) -> None:
        model = ProductDto()
        assert model.on_before_map() is True
        assert model.validate() is True
        assert model.on_after_map() is None

    def test_hooks_can_be_overridden(self) -> None:
        class Guarded(MappingModel):
            def on_before_map(self) -> bool:
                return False

            def validate(self) -> bool:
                return False

        assert Guarded().on_before_map() is False
        assert Guarded().validate() is False

    def test_hooks_are_not_fields(self) -> None:
        assert "validate" not in _mapper().get_mapped_fields()
