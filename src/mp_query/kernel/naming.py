"""Naming policies – map canonical property names to wire-format names.

A naming policy is a pure ``str -> str`` function applied to the *property*
side; incoming wire names are matched against ``policy(prop)``
case-insensitively by the field-name resolver.
"""

from __future__ import annotations

import re
from typing import Callable

NamingPolicy = Callable[[str], str]

_word_boundary = re.compile(r"[_\-\s]+|(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(name: str) -> list[str]:
    """Split ``user_name``, ``userName``, ``UserName`` or ``user-name`` into words."""
    if not name:
        return []
    return [w for w in _word_boundary.split(str(name)) if w]


def camel_case(name: str) -> str:
    """``user_name`` / ``UserName`` -> ``userName``."""
    words = split_words(name)
    if not words:
        return name
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def pascal_case(name: str) -> str:
    """``user_name`` / ``userName`` -> ``UserName``."""
    words = split_words(name)
    if not words:
        return name
    return "".join(w.capitalize() for w in words)


def snake_case(name: str) -> str:
    """``UserName`` / ``userName`` -> ``user_name``."""
    words = split_words(name)
    if not words:
        return name
    return "_".join(w.lower() for w in words)


def kebab_case(name: str) -> str:
    """``UserName`` / ``user_name`` -> ``user-name``."""
    words = split_words(name)
    if not words:
        return name
    return "-".join(w.lower() for w in words)


POLICIES: dict[str, NamingPolicy] = {
    "camel": camel_case,
    "pascal": pascal_case,
    "snake": snake_case,
    "kebab": kebab_case,
}


def get_policy(policy: str | NamingPolicy | None) -> NamingPolicy | None:
    """Return the callable for *policy* (a registered name, a callable or ``None``).

    Raises ``KeyError`` for an unknown policy name.
    """
    if policy is None or callable(policy):
        return policy
    return POLICIES[policy.strip().lower()]


__all__ = [
    "NamingPolicy",
    "POLICIES",
    "camel_case",
    "get_policy",
    "kebab_case",
    "pascal_case",
    "snake_case",
    "split_words",
]
