"""Refinement callbacks for the built-in sub-validators.

Each runs after its parent's checks, so it can rely on the parent's type:
``size`` under ``string`` only ever sees strings.
"""
from __future__ import annotations

import re
from ipaddress import IPv4Address, IPv6Address
from typing import Any

from shapeof.errors import invalid_argument, raise_error

from .patterns import compile_pattern
from .sentinel import ABSENT

# RFC 5322 simplified pattern
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def _within(amount: float, bound: float, other: float | None = None) -> bool:
    """Exact match with one bound, inclusive range in either order with two."""
    if other is None:
        return amount == bound
    low, high = sorted((bound, other))
    return low <= amount <= high


# ============================================================================
# Numeric
# ============================================================================

def number_range(value: Any, bound: float, other: float) -> Any:
    return value if _within(value, bound, other) else ABSENT


def number_min(value: Any, floor: float) -> Any:
    return value if value >= floor else ABSENT


def number_max(value: Any, ceiling: float) -> Any:
    return value if value <= ceiling else ABSENT


# ============================================================================
# Sizes (strings and arrays)
# ============================================================================

def size(value: Any, bound: int, other: int | None = None) -> Any:
    return value if _within(len(value), bound, other) else ABSENT


# ============================================================================
# String formats
# ============================================================================

def pattern(value: Any, expression: str | re.Pattern, flags: str | int | None = None) -> Any:
    try:
        compiled = compile_pattern(expression, flags)
    except (ValueError, re.error) as e:
        raise_error(invalid_argument("string.pattern", str(e)).error)
    return value if compiled.search(value) else ABSENT


def email(value: Any) -> Any:
    return value if EMAIL_PATTERN.fullmatch(value) else ABSENT


def ipv4(value: Any) -> Any:
    try:
        IPv4Address(value)
    except ValueError:
        return ABSENT
    return value


def ipv6(value: Any) -> Any:
    try:
        IPv6Address(value)
    except ValueError:
        return ABSENT
    return value
