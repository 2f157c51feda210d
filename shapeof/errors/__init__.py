"""Monadic Error Handling System

Type-safe error handling inspired by Haskell's Either monad and Rust's
Result type, with an exception bridge for configuration errors.

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Hierarchical error code taxonomy
- Builder functions: Ergonomic error construction
- ShapeOfError and subclasses: Exceptions carrying an AppError

Usage:
    from shapeof.errors import Ok, Err, ConfigurationError, unknown_validator

    match validate(payload).match_result(schema):
        case Ok(value):
            store(value)
        case Err(error):
            log.warning("rejected", error=str(error))
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    ok,
    err,
)

from .builders import (
    # Configuration (E1xxx)
    configuration_error,
    missing_arguments,
    unknown_parent,
    unknown_validator,
    duplicate_validator,
    invalid_argument,
    # Serialization (E2xxx)
    serialization_error,
    unserializable_node,
    malformed_descriptor,
    incompatible_schema_version,
    # Shape (E3xxx)
    invalid_shape,
)

from .exceptions import (
    ShapeOfError,
    ConfigurationError,
    SerializationError,
    InvalidShapeError,
    raise_error,
    raise_result,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "ok",
    "err",
    # Configuration (E1xxx)
    "configuration_error",
    "missing_arguments",
    "unknown_parent",
    "unknown_validator",
    "duplicate_validator",
    "invalid_argument",
    # Serialization (E2xxx)
    "serialization_error",
    "unserializable_node",
    "malformed_descriptor",
    "incompatible_schema_version",
    # Shape (E3xxx)
    "invalid_shape",
    # Exceptions
    "ShapeOfError",
    "ConfigurationError",
    "SerializationError",
    "InvalidShapeError",
    "raise_error",
    "raise_result",
]
