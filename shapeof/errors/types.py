"""Monadic Error Handling Types

Result/Either types for deterministic, composable error propagation, plus the
error code taxonomy shared by every shapeof module.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Generic, Iterator, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E1xxx: Configuration errors (validator misuse at schema-authoring time)
    E2xxx: Serialization errors (descriptor encode/decode)
    E3xxx: Shape mismatches (only raised when explicitly requested)
    """
    # Configuration (E1xxx)
    E1000_CONFIGURATION_GENERIC = 1000
    E1001_MISSING_ARGUMENTS = 1001
    E1002_UNKNOWN_PARENT = 1002
    E1003_UNKNOWN_VALIDATOR = 1003
    E1004_DUPLICATE_VALIDATOR = 1004
    E1005_INVALID_ARGUMENT = 1005

    # Serialization (E2xxx)
    E2000_SERIALIZATION_GENERIC = 2000
    E2001_UNSERIALIZABLE_NODE = 2001
    E2002_MALFORMED_DESCRIPTOR = 2002
    E2003_INCOMPATIBLE_SCHEMA_VERSION = 2003

    # Shape (E3xxx)
    E3000_INVALID_SHAPE = 3000

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 1000 <= code < 2000:
            return "configuration"
        if 2000 <= code < 3000:
            return "serialization"
        return "shape"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing and debugging."""
    correlation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""


@dataclass(frozen=True, slots=True)
class AppError:
    """Base error with full context.

    All errors carry:
    - Typed error code from taxonomy
    - Human-readable message
    - Structured metadata for debugging
    - Tracing context
    - Optional cause for error chaining
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    @property
    def error_id(self) -> str:
        """Unique identifier for this error instance."""
        return f"{self.code.name}:{self.context.correlation_id}"

    def with_metadata(self, **kwargs) -> AppError:
        """Create new error with additional metadata."""
        return AppError(
            code=self.code,
            message=self.message,
            context=self.context,
            metadata={**self.metadata, **kwargs},
            cause=self.cause,
        )

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "message": self.message,
                "category": self.code.category,
                "correlation_id": self.context.correlation_id,
                "timestamp": self.context.timestamp.isoformat(),
                "metadata": self.metadata,
            }
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the success value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable) -> Ok[T]:
        """No-op for Ok variant."""
        return self

    def flat_map(self, f: Callable[[T], Result]) -> Result:
        """Chain operations that may fail."""
        return f(self.value)

    def match(self, ok: Callable[[T], U], err: Callable[..., U]) -> U:
        """Pattern match on Result. Forces exhaustive handling."""
        return ok(self.value)

    def __iter__(self) -> Iterator[T]:
        yield self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result.

    Usually wraps an AppError; the validation pipeline also uses it to carry a
    caller-supplied failure payload untouched.
    """
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable) -> Err[E]:
        """No-op for Err variant."""
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the error."""
        return Err(f(self.error))

    def flat_map(self, f: Callable) -> Err[E]:
        """No-op for Err variant."""
        return self

    def match(self, ok: Callable[..., U], err: Callable[[E], U]) -> U:
        """Pattern match on Result. Forces exhaustive handling."""
        return err(self.error)

    def __iter__(self) -> Iterator:
        return iter([])


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    """Construct Ok variant."""
    return Ok(value)


def err(error: E) -> Err[E]:
    """Construct Err variant."""
    return Err(error)
