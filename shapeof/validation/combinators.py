"""Composite Combinators

Callbacks behind ``arrayOf``, ``objectOf``, ``oneOf``, ``oneOfType`` and
``eachOf``. Each recurses through the evaluation engine, so element schemas
may be any schema node.

Types are tried in declaration order and the first type that accepts an
element decides its (possibly transformed) value.
"""
from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from shapeof.errors import invalid_argument, raise_error

from .engine import differs, evaluate, record, strict_equal
from .sentinel import ABSENT


def _spread(name: str, types: tuple) -> tuple:
    """``f([a, b])`` is shorthand for ``f(a, b)``."""
    if len(types) == 1 and isinstance(types[0], (list, tuple)):
        types = tuple(types[0])
    if not types:
        raise_error(invalid_argument(name, "at least one type is required").error)
    return types


def check_types(name: str, types: tuple) -> None:
    """Reject a call that leaves no types once a single list argument is spread."""
    _spread(name, types)


def _first_match(value: Any, types: tuple) -> Any:
    for schema in types:
        result = evaluate(value, schema)
        if result is not ABSENT:
            return result
    return ABSENT


def array_of(value: Any, *types: Any) -> Any:
    """Every element matches at least one of *types*."""
    types = _spread("arrayOf", types)
    if not isinstance(value, (list, tuple)):
        return ABSENT

    items = value if isinstance(value, list) else list(value)
    changed = False
    for index, item in enumerate(value):
        result = _first_match(item, types)
        if result is ABSENT:
            record(f"Failed: element [{index}] matches none of {len(types)} type(s)", item)
            return ABSENT
        if differs(item, result):
            items[index] = result
            changed = True
            record(f"Mutation: element [{index}] replaced", result)
    return tuple(items) if changed and items is not value else value


def object_of(value: Any, *types: Any) -> Any:
    """Every value of a mapping matches at least one of *types*."""
    types = _spread("objectOf", types)
    if not isinstance(value, Mapping):
        return ABSENT

    target = value if isinstance(value, MutableMapping) else dict(value)
    changed = False
    for key, item in value.items():
        result = _first_match(item, types)
        if result is ABSENT:
            record(f"Failed: field '{key}' matches none of {len(types)} type(s)", item)
            return ABSENT
        if differs(item, result):
            target[key] = result
            changed = True
            record(f"Mutation: field '{key}' replaced", result)
    return target if changed else value


def one_of(value: Any, *options: Any) -> Any:
    """The value strictly equals one of *options*."""
    options = _spread("oneOf", options)
    for option in options:
        if strict_equal(value, option):
            return value
    return ABSENT


def one_of_type(value: Any, *types: Any) -> Any:
    """The value exactly matches at least one of *types*; the first match wins."""
    types = _spread("oneOfType", types)
    for schema in types:
        result = evaluate(value, schema, exact=True)
        if result is not ABSENT:
            return result
    return ABSENT


def each_of(value: Any, *types: Any) -> Any:
    """The value exactly matches every one of *types*, applied in turn."""
    types = _spread("eachOf", types)
    for index, schema in enumerate(types):
        result = evaluate(value, schema, exact=True)
        if result is ABSENT:
            record(f"Failed: eachOf schema #{index} does not match", value)
            return ABSENT
        value = result
    return value
