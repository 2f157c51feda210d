"""Composable Shape Validation

Schemas are plain Python data: literals, lists, dicts, compiled regexes,
one-argument functions and named validator chains, nested freely.

Key Features:
- Primitive predicates (string, number, integer, bool, array, object, null)
- Chainable refinements (``shapes.string.size(3, 25)``)
- Combinators (arrayOf, objectOf, oneOf, oneOfType, eachOf)
- Optional twin namespace (``shapes.optional.*``)
- Mutation propagation from transforming validators
- Detailed pass/fail/mutation logs
- Callback, exception and Result-based outcomes

Usage:
    from shapeof.validation import shapes, validate

    person = {
        "name": shapes.string.size(1, 64),
        "age": shapes.optional.integer.range(0, 150),
        "tags": shapes.arrayOf(shapes.string),
    }

    if not validate(payload).matches(person):
        ...
"""

# Absent signal
from .sentinel import ABSENT, is_absent

# Chains and registry
from .chain import Link, Validator
from .registry import (
    NAMESPACE,
    Namespace,
    ValidatorRegistry,
    default_registry,
    define_validator,
)

# Evaluation engine
from .engine import (
    Evaluation,
    ExactSchema,
    LogEntry,
    evaluate,
    evaluating,
    exactly,
    strict_equal,
)

# Built-in catalog
from .catalog import install, shapes

# Pipeline
from .pipeline import (
    ValidationBuilder,
    ValidationOptions,
    ValidationReport,
    validate,
)

__all__ = [
    "ABSENT",
    "is_absent",
    "Link",
    "Validator",
    "NAMESPACE",
    "Namespace",
    "ValidatorRegistry",
    "default_registry",
    "define_validator",
    "Evaluation",
    "ExactSchema",
    "LogEntry",
    "evaluate",
    "evaluating",
    "exactly",
    "strict_equal",
    "install",
    "shapes",
    "ValidationBuilder",
    "ValidationOptions",
    "ValidationReport",
    "validate",
]
