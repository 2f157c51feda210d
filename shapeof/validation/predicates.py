"""Primitive Predicates

Stateless checks for the JSON-ish runtime types. Each returns the value
unchanged when it matches, ABSENT otherwise.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .sentinel import ABSENT


def string(value: Any) -> Any:
    return value if isinstance(value, str) else ABSENT


def number(value: Any) -> Any:
    if isinstance(value, bool):
        return ABSENT
    return value if isinstance(value, (int, float)) else ABSENT


def integer(value: Any) -> Any:
    """Accept ints and integral finite floats (``42.0``); never bools."""
    if isinstance(value, bool):
        return ABSENT
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return value
    return ABSENT


def boolean(value: Any) -> Any:
    return value if isinstance(value, bool) else ABSENT


def array(value: Any) -> Any:
    return value if isinstance(value, (list, tuple)) else ABSENT


def object_(value: Any) -> Any:
    """Accept mappings. Arrays and None are not objects."""
    return value if isinstance(value, Mapping) else ABSENT


def null(value: Any) -> Any:
    return None if value is None else ABSENT


def primitive(value: Any) -> Any:
    """String, boolean, number or null."""
    for check in (string, boolean, number, null):
        if check(value) is not ABSENT:
            return value
    return ABSENT
