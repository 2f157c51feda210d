"""shapeof: declarative shape validation for Python data.

Usage:
    from shapeof import shapes, validate

    schema = {
        "first_name": shapes.string.size(3, 25),
        "title": shapes.optional.string.size(2, 15),
        "sex": shapes.oneOf("Male", "Female", "Other"),
        "favorites": shapes.arrayOf(shapes.string, shapes.number).size(3),
    }

    validate(person).matches(schema)                            # bool
    validate(person).returning_detailed_result().matches(schema)  # ValidationReport
    validate(person).match_result(schema)                       # Ok | Err
"""
from shapeof import errors
from shapeof.codec import deserialize_schema, serialize_schema
from shapeof.logging import configure_logging
from shapeof.validation import (
    ABSENT,
    LogEntry,
    ValidationBuilder,
    ValidationReport,
    Validator,
    ValidatorRegistry,
    default_registry,
    define_validator,
    evaluate,
    exactly,
    is_absent,
    shapes,
    validate,
)
from shapeof.version import COMPATIBLE_SCHEMA_VERSION, __version__

__all__ = [
    "ABSENT",
    "COMPATIBLE_SCHEMA_VERSION",
    "LogEntry",
    "ValidationBuilder",
    "ValidationReport",
    "Validator",
    "ValidatorRegistry",
    "__version__",
    "configure_logging",
    "default_registry",
    "define_validator",
    "deserialize_schema",
    "errors",
    "evaluate",
    "exactly",
    "is_absent",
    "serialize_schema",
    "shapes",
    "validate",
]
