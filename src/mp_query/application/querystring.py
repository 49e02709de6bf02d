"""Application query string – indexed bracket notation for lists of dictionaries.

``merge_list("filters", [{"op": "eq"}, {"op": "gt"}])`` gives
``{"filters[0][op]": "eq", "filters[1][op]": "gt"}``; :func:`split_list`
reverses it for every list name found in a flat mapping.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

_BRACKET_KEY = re.compile(r"^(.+)\[(\d+)\]\[(.+)\]$")


def merge_list(name: str, items: Iterable[Mapping[str, str]]) -> dict[str, str]:
    out: dict[str, str] = {}
    for index, item in enumerate(items):
        for key, value in item.items():
            out[f"{name}[{index}][{key}]"] = value
    return out


def split_list(query: Mapping[str, str]) -> dict[str, list[dict[str, str]]]:
    """Group ``name[i][key]`` entries into ``{name: [item_0, item_1, ...]}``, ordered by index.

    Keys that do not follow the bracket notation are ignored; gaps in the
    indices are closed up.
    """
    grouped: dict[str, dict[int, dict[str, str]]] = {}
    for key, value in query.items():
        match = _BRACKET_KEY.match(key)
        if match is None:
            continue
        name, index, item_key = match.group(1), int(match.group(2)), match.group(3)
        grouped.setdefault(name, {}).setdefault(index, {})[item_key] = value
    return {name: [items[i] for i in sorted(items)] for name, items in grouped.items()}


__all__ = ["merge_list", "split_list"]
