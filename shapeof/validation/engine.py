"""Evaluation Engine

Recursively matches a value against a schema node and returns the accepted
(possibly transformed) value, or ABSENT.

Schema nodes, in dispatch order:
- Validator: executed link by link
- plain callable: called with the value
- list/tuple: fixed-length positional array
- Mapping: object whose declared fields must match
- compiled regex: searched against string values
- anything else: strict equality

Accepted values that differ from the input are written back into their
containers, so transformations made by validators are visible to the caller
at every depth.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any, Iterator

from .chain import Validator
from .sentinel import ABSENT, accepted


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One pass/fail/mutation event of a detailed evaluation."""
    message: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "value": self.value}


@dataclass(frozen=True, slots=True)
class Evaluation:
    """Settings and log shared by every layer of one top-level evaluation."""
    exact: bool = False
    log: list[LogEntry] | None = None

    def record(self, message: str, value: Any = None) -> None:
        if self.log is not None:
            self.log.append(LogEntry(message, value))


_current: ContextVar[Evaluation] = ContextVar("shapeof_evaluation", default=Evaluation())


def current_evaluation() -> Evaluation:
    return _current.get()


@contextmanager
def evaluating(evaluation: Evaluation) -> Iterator[Evaluation]:
    token = _current.set(evaluation)
    try:
        yield evaluation
    finally:
        _current.reset(token)


def record(message: str, value: Any = None) -> None:
    current_evaluation().record(message, value)


class ExactSchema(dict):
    """An object map that rejects undeclared keys in any evaluation mode."""

    def __repr__(self) -> str:
        return f"exactly({dict.__repr__(self)})"


def exactly(fields: Mapping[str, Any] | None = None, /, **more: Any) -> ExactSchema:
    return ExactSchema({**(fields or {}), **more})


# ============================================================================
# Equality
# ============================================================================

_CONTAINERS = (Mapping, list, tuple, set)


def strict_equal(left: Any, right: Any) -> bool:
    """Equality without coercion: ``True != 1``, ``"1" != 1``, ``1 == 1.0``."""
    if left is right:
        return True
    if isinstance(left, _CONTAINERS) or isinstance(right, _CONTAINERS):
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return False
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    return type(left) is type(right) and left == right


def differs(original: Any, result: Any) -> bool:
    """Whether an accepted *result* should replace *original* in its container."""
    if original is result:
        return False
    return not strict_equal(original, result)


# ============================================================================
# Dispatch
# ============================================================================

def evaluate(value: Any, schema: Any, *, exact: bool | None = None) -> Any:
    """Match *value* against *schema* within the current evaluation.

    Args:
        exact: Override the evaluation's exact mode for this subtree.
    """
    evaluation = current_evaluation()
    if exact is None or exact == evaluation.exact:
        return _dispatch(value, schema)
    with evaluating(replace(evaluation, exact=exact)):
        return _dispatch(value, schema)


def _dispatch(value: Any, schema: Any) -> Any:
    match schema:
        case Validator():
            return schema.execute(value)
        case _ if callable(schema) and not isinstance(schema, type):
            result = schema(value)
            return result if accepted(result, value) else ABSENT
        case list() | tuple():
            return _match_array(value, schema)
        case Mapping():
            return _match_object(value, schema)
        case re.Pattern():
            return value if isinstance(value, type(schema.pattern)) and schema.search(value) else ABSENT
        case _:
            return value if strict_equal(value, schema) else ABSENT


def _match_array(value: Any, schema: list | tuple) -> Any:
    if not isinstance(value, (list, tuple)) or len(value) != len(schema):
        record(f"Failed: expected an array of length {len(schema)}", value)
        return ABSENT

    items = value if isinstance(value, list) else list(value)
    changed = False
    for index, (item, node) in enumerate(zip(value, schema)):
        result = evaluate(item, node)
        if result is ABSENT:
            record(f"Failed: element [{index}] does not match its schema", item)
            return ABSENT
        if differs(item, result):
            items[index] = result
            changed = True
            record(f"Mutation: element [{index}] replaced", result)
    return tuple(items) if changed and items is not value else value


def _is_optional(node: Any) -> bool:
    return isinstance(node, Validator) and node.optional


def _match_object(value: Any, schema: Mapping) -> Any:
    exact = current_evaluation().exact or isinstance(schema, ExactSchema)
    result = _match_fields(value, schema, exact)
    if result is ABSENT:
        record("Failed: object does not match schema", value)
    else:
        record("Passed: object matches schema", result)
    return result


def _match_fields(value: Any, schema: Mapping, exact: bool) -> Any:
    if not isinstance(value, Mapping):
        return ABSENT

    target = value if isinstance(value, MutableMapping) else dict(value)
    changed = False
    for key, node in schema.items():
        if key not in value:
            if _is_optional(node):
                continue
            record(f"Failed: missing required field '{key}'", value)
            return ABSENT

        original = value[key]
        result = evaluate(original, node)
        if result is ABSENT:
            record(f"Failed: field '{key}' does not match its schema", original)
            return ABSENT
        if differs(original, result):
            target[key] = result
            changed = True
            record(f"Mutation: field '{key}' replaced", result)

    if exact:
        extra = [key for key in value if key not in schema]
        if extra:
            record(f"Failed: unexpected field(s) {', '.join(map(repr, extra))}", value)
            return ABSENT
    return target if changed else value
