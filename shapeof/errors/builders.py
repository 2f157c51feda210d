"""Domain-Specific Error Builders

Ergonomic constructors for typed errors. Each builder creates an AppError
with the appropriate code and context, wrapped in Err.
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Configuration Errors (E1xxx)
# =============================================================================

def configuration_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E1000_CONFIGURATION_GENERIC,
    validator: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create a configuration error."""
    meta = {"validator": validator, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def missing_arguments(validator: str, required: int, given: int, origin: str = "") -> Err[AppError]:
    return configuration_error(
        f"Validator '{validator}' requires at least {required} argument(s), got {given}",
        code=ErrorCode.E1001_MISSING_ARGUMENTS,
        validator=validator,
        origin=origin,
        required=required,
        given=given,
    )


def unknown_parent(validator: str, parent: str, origin: str = "") -> Err[AppError]:
    return configuration_error(
        f"Cannot attach '{validator}': parent validator '{parent}' is not registered",
        code=ErrorCode.E1002_UNKNOWN_PARENT,
        validator=validator,
        origin=origin,
        parent=parent,
    )


def unknown_validator(name: str, origin: str = "") -> Err[AppError]:
    return configuration_error(
        f"Validator '{name}' is not registered",
        code=ErrorCode.E1003_UNKNOWN_VALIDATOR,
        validator=name,
        origin=origin,
    )


def duplicate_validator(name: str, origin: str = "") -> Err[AppError]:
    return configuration_error(
        f"Validator '{name}' is already registered",
        code=ErrorCode.E1004_DUPLICATE_VALIDATOR,
        validator=name,
        origin=origin,
    )


def invalid_argument(validator: str, reason: str, origin: str = "") -> Err[AppError]:
    return configuration_error(
        f"Invalid arguments for '{validator}': {reason}",
        code=ErrorCode.E1005_INVALID_ARGUMENT,
        validator=validator,
        origin=origin,
    )


# =============================================================================
# Serialization Errors (E2xxx)
# =============================================================================

def serialization_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_SERIALIZATION_GENERIC,
    path: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create a serialization error."""
    meta = {"path": path, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def unserializable_node(node: Any, path: str = "$", origin: str = "") -> Err[AppError]:
    return serialization_error(
        f"Cannot serialize schema node of type '{type(node).__name__}' at {path}",
        code=ErrorCode.E2001_UNSERIALIZABLE_NODE,
        path=path,
        origin=origin,
        node_type=type(node).__name__,
    )


def malformed_descriptor(
    reason: str,
    *,
    path: str | None = None,
    errors: list[dict] | None = None,
    origin: str = "",
    cause: Exception | None = None,
) -> Err[AppError]:
    return serialization_error(
        f"Malformed schema descriptor: {reason}",
        code=ErrorCode.E2002_MALFORMED_DESCRIPTOR,
        path=path,
        origin=origin,
        cause=cause,
        errors=errors,
    )


def incompatible_schema_version(found: str, supported: str, origin: str = "") -> Err[AppError]:
    return serialization_error(
        f"Schema version {found} is newer than the supported schema version {supported}",
        code=ErrorCode.E2003_INCOMPATIBLE_SCHEMA_VERSION,
        origin=origin,
        found=found,
        supported=supported,
    )


# =============================================================================
# Shape Errors (E3xxx)
# =============================================================================

def invalid_shape(value: Any = None, origin: str = "") -> Err[AppError]:
    """Create the generic shape-mismatch error."""
    return Err(AppError(
        code=ErrorCode.E3000_INVALID_SHAPE,
        message="Invalid shape detected",
        context=ErrorContext(origin=origin),
        metadata={"value_type": type(value).__name__},
    ))
