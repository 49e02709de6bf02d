"""Field registry – per-type, prebuilt description of filterable/sortable fields.

Every model type is described once (and cached) as a :class:`FieldSet`.
Sources, in order of precedence:

1. an explicit ``__query_fields__`` declaration on the class (a sequence of
   :class:`FieldInfo` or plain names);
2. a SQLAlchemy mapper (column attributes and relationships);
3. pydantic-style ``model_fields`` (``alias`` honoured);
4. dataclass fields (``field(metadata={"alias": "..."})`` honoured);
5. class annotations and read-only ``property`` objects.

Nested models are reachable through ``FieldInfo.type``; collections are not
navigable.
"""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import functools
import inspect
import types
import typing
import uuid
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from sqlalchemy import inspect as sa_inspect

_SCALAR_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bool,
    int,
    float,
    complex,
    decimal.Decimal,
    datetime.date,
    datetime.datetime,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
)

MISSING: Any = object()
"""Sentinel returned by :func:`read_path` when a path cannot be followed."""


@dataclasses.dataclass(frozen=True, slots=True)
class FieldInfo:
    """One field of a model: canonical name, optional external alias, nested model description."""

    name: str
    alias: str | None = None
    type: "type | FieldSet | None" = None


class FieldSet:
    """Ordered, case-insensitively searchable set of :class:`FieldInfo`."""

    def __init__(self, owner: Any, fields: Iterable[FieldInfo] = ()) -> None:
        self.owner = owner
        self._fields: dict[str, FieldInfo] = {}
        self._folded: dict[str, FieldInfo] = {}
        self._aliases: dict[str, FieldInfo] = {}
        for info in fields:
            if info.name in self._fields:
                continue
            self._fields[info.name] = info
            self._folded.setdefault(info.name.casefold(), info)
            if info.alias:
                self._aliases.setdefault(info.alias.casefold(), info)

    def __iter__(self) -> Iterator[FieldInfo]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._folded

    @property
    def names(self) -> list[str]:
        return list(self._fields)

    def find(self, name: str) -> FieldInfo | None:
        """Case-insensitive lookup by canonical name."""
        return self._folded.get(name.casefold())

    def find_by_alias(self, alias: str) -> FieldInfo | None:
        """Case-insensitive lookup by declared external name."""
        return self._aliases.get(alias.casefold())

    def __repr__(self) -> str:
        owner = getattr(self.owner, "__name__", repr(self.owner))
        return f"FieldSet({owner}, {self.names!r})"


def _model_type(annotation: Any) -> type | None:
    """Return the nested model class behind *annotation*, or ``None`` for scalars/collections."""
    if annotation is None or isinstance(annotation, str):
        return None
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _model_type(typing.get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        return _model_type(args[0]) if len(args) == 1 else None
    if origin is not None:
        return None
    if not isinstance(annotation, type):
        return None
    if issubclass(annotation, _SCALAR_TYPES) or issubclass(annotation, enum.Enum):
        return None
    if annotation in (object, list, dict, set, tuple, frozenset):
        return None
    return annotation


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj)
    except Exception:  # noqa: BLE001 - unresolvable forward references
        hints: dict[str, Any] = {}
        for klass in reversed(getattr(obj, "__mro__", (obj,))):
            hints.update(getattr(klass, "__annotations__", {}))
        return hints


def _explicit_fields(tp: type) -> list[FieldInfo] | None:
    declared = getattr(tp, "__query_fields__", None)
    if declared is None:
        return None
    return [d if isinstance(d, FieldInfo) else FieldInfo(str(d)) for d in declared]


def _sqlalchemy_fields(tp: type) -> list[FieldInfo] | None:
    mapper = sa_inspect(tp, raiseerr=False)
    if mapper is None or not hasattr(mapper, "column_attrs"):
        return None
    out = [FieldInfo(attr.key) for attr in mapper.column_attrs]
    for rel in mapper.relationships:
        nested = None if rel.uselist else rel.mapper.class_
        out.append(FieldInfo(rel.key, type=nested))
    return out


def _pydantic_fields(tp: type) -> list[FieldInfo] | None:
    model_fields = getattr(tp, "model_fields", None)
    if not isinstance(model_fields, Mapping):
        return None
    return [
        FieldInfo(name, alias=getattr(info, "alias", None), type=_model_type(getattr(info, "annotation", None)))
        for name, info in model_fields.items()
    ]


def _dataclass_fields(tp: type) -> list[FieldInfo] | None:
    if not dataclasses.is_dataclass(tp):
        return None
    hints = _type_hints(tp)
    return [
        FieldInfo(f.name, alias=f.metadata.get("alias"), type=_model_type(hints.get(f.name, f.type)))
        for f in dataclasses.fields(tp)
    ]


def _annotated_fields(tp: type) -> list[FieldInfo]:
    out: list[FieldInfo] = []
    for name, hint in _type_hints(tp).items():
        if name.startswith("_") or typing.get_origin(hint) is typing.ClassVar:
            continue
        out.append(FieldInfo(name, type=_model_type(hint)))
    for name, member in inspect.getmembers(tp, lambda m: isinstance(m, property)):
        if name.startswith("_"):
            continue
        returns = _type_hints(member.fget).get("return") if member.fget else None
        out.append(FieldInfo(name, type=_model_type(returns)))
    return out


@functools.cache
def _describe_type(tp: type) -> FieldSet:
    for source in (_explicit_fields, _sqlalchemy_fields, _pydantic_fields, _dataclass_fields):
        found = source(tp)
        if found is not None:
            return FieldSet(tp, found)
    return FieldSet(tp, _annotated_fields(tp))


def fields_of(tp: Any) -> FieldSet:
    """Return the :class:`FieldSet` describing *tp* (cached per class).

    A :class:`FieldSet` is returned as-is; other non-class arguments describe
    as an empty set.
    """
    if isinstance(tp, FieldSet):
        return tp
    if not isinstance(tp, type):
        return FieldSet(tp)
    return _describe_type(tp)


def describe_mappings(records: Iterable[Mapping[str, Any]], owner: Any = dict) -> FieldSet:
    """Build a :class:`FieldSet` from the keys of plain mapping records.

    Keys are taken in first-seen order; nested mappings become nested sets.
    """
    keys: dict[str, list[Mapping[str, Any]]] = {}
    for record in records:
        for key, value in record.items():
            nested = keys.setdefault(str(key), [])
            if isinstance(value, Mapping):
                nested.append(value)
    return FieldSet(
        owner,
        [FieldInfo(key, type=describe_mappings(nested) if nested else None) for key, nested in keys.items()],
    )


def property_exists(tp: Any, path: str, leaf_only: bool = False) -> bool:
    """Return whether dotted *path* names an existing (possibly nested) field of *tp*.

    With *leaf_only*, a path ending on a nested model or relationship does not
    count: only scalar fields can be compared or ordered.
    """
    if not path:
        return False
    current: Any = tp
    for part in path.split("."):
        if current is None:
            return False
        info = fields_of(current).find(part)
        if info is None:
            return False
        current = info.type
    return not (leaf_only and current is not None)


def read_path(obj: Any, path: str) -> Any:
    """Read dotted *path* from *obj* (attributes or mapping keys).

    Returns :data:`MISSING` when an intermediate segment is absent or ``None``;
    the final segment may legitimately be ``None``.
    """
    current = obj
    parts = path.split(".")
    for index, part in enumerate(parts):
        if current is None or current is MISSING:
            return MISSING
        if isinstance(current, Mapping):
            current = current.get(part, MISSING)
        else:
            current = getattr(current, part, MISSING)
        if current is MISSING:
            return MISSING
        if current is None and index < len(parts) - 1:
            return MISSING
    return current


__all__ = [
    "FieldInfo",
    "FieldSet",
    "MISSING",
    "describe_mappings",
    "fields_of",
    "property_exists",
    "read_path",
]
