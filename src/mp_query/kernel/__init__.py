"""Kernel – errors, Option type, naming policies and the per-type field registry."""

from mp_query.kernel.errors import BaseError, InvalidArgumentError, ParseError
from mp_query.kernel.fields import (
    MISSING,
    FieldInfo,
    FieldSet,
    describe_mappings,
    fields_of,
    property_exists,
    read_path,
)
from mp_query.kernel.types import Nothing, Option, Some

__all__ = [
    "BaseError",
    "FieldInfo",
    "FieldSet",
    "InvalidArgumentError",
    "MISSING",
    "Nothing",
    "Option",
    "ParseError",
    "Some",
    "describe_mappings",
    "fields_of",
    "property_exists",
    "read_path",
]
