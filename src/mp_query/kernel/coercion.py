"""Coercion of raw wire strings to the Python type of the field they are compared with."""

from __future__ import annotations

import datetime
import decimal
import enum
import uuid
from typing import Any

from mp_query.kernel.types import Nothing, Option, Some

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def _to_bool(raw: str) -> bool:
    folded = raw.strip().lower()
    if folded in _TRUE:
        return True
    if folded in _FALSE:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _to_int(raw: str) -> int | float:
    try:
        return int(raw)
    except ValueError:
        return float(raw)


def _to_enum(raw: str, target: type[enum.Enum]) -> enum.Enum:
    for member in target:
        if str(member.value) == raw or member.name.casefold() == raw.casefold():
            return member
    raise ValueError(f"not a {target.__name__}: {raw!r}")


def coerce(raw: Any, target: Any) -> Option[Any]:
    """Convert *raw* to *target*; ``Nothing()`` when it does not parse.

    Non-string input and unknown targets are passed through unchanged.
    """
    if not isinstance(raw, str) or not isinstance(target, type) or issubclass(target, str):
        return Some(raw)
    try:
        if issubclass(target, bool):
            return Some(_to_bool(raw))
        if issubclass(target, enum.Enum):
            return Some(_to_enum(raw.strip(), target))
        if issubclass(target, int):
            return Some(_to_int(raw.strip()))
        if issubclass(target, float):
            return Some(float(raw))
        if issubclass(target, decimal.Decimal):
            return Some(decimal.Decimal(raw.strip()))
        if issubclass(target, datetime.datetime):
            return Some(datetime.datetime.fromisoformat(raw.strip()))
        if issubclass(target, datetime.date):
            return Some(datetime.date.fromisoformat(raw.strip()))
        if issubclass(target, datetime.time):
            return Some(datetime.time.fromisoformat(raw.strip()))
        if issubclass(target, uuid.UUID):
            return Some(uuid.UUID(raw.strip()))
    except (ValueError, ArithmeticError):
        return Nothing()
    return Some(raw)


__all__ = ["coerce"]
