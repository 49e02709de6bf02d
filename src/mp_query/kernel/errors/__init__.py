"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── InvalidArgumentError   (argument.py)       also a ValueError
    ├── ParseError             (serialization.py)  also a ValueError
    └── ConfigError            (mp_query.config.validation)
        └── InvalidSettingValueError
"""

from mp_query.kernel.errors.argument import InvalidArgumentError
from mp_query.kernel.errors.base import BaseError
from mp_query.kernel.errors.serialization import ParseError

__all__ = [
    "BaseError",
    "InvalidArgumentError",
    "ParseError",
]
