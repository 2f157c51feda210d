"""Exception Wrappers

Bridges the Result-based error system with exception-based control flow.
Configuration and serialization errors always propagate as exceptions; shape
mismatches only do when the caller opts into throwing.
"""
from __future__ import annotations

from .types import AppError


class ShapeOfError(Exception):
    """Exception wrapper for AppError.

    Use this when an AppError must leave code that doesn't use the
    Result monad.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self):
        return self.error.code


class ConfigurationError(ShapeOfError):
    """A validator or schema was misused at authoring time."""


class SerializationError(ConfigurationError):
    """A schema could not be serialized, or a descriptor could not be read."""


class InvalidShapeError(ShapeOfError):
    """A value did not match its schema and throwing was requested."""


_CATEGORY_EXCEPTIONS: dict[str, type[ShapeOfError]] = {
    "configuration": ConfigurationError,
    "serialization": SerializationError,
    "shape": InvalidShapeError,
}


def raise_error(error: AppError) -> None:
    """Raise AppError as the exception matching its category.

    Usage:
        if name not in registry:
            raise_error(unknown_validator(name).error)
    """
    raise _CATEGORY_EXCEPTIONS.get(error.code.category, ShapeOfError)(error)


def raise_result(result) -> None:
    """Raise error if Result is Err, otherwise return."""
    if result.is_err():
        raise_error(result.unwrap_err())
