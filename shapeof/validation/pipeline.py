"""Result & Side-Effect Pipeline

Wraps the evaluation engine with the caller's requested behaviour:

    validate(payload).matches(schema)                              # bool
    validate(payload).returning_mutated_value().matches(schema)    # value or ABSENT
    validate(payload).returning_detailed_result().matches(schema)  # ValidationReport
    validate(payload).throwing_on_failure().matches(schema)        # raises InvalidShapeError
    validate(payload).match_result(schema)                         # Ok(value) | Err(error)

Builders are immutable: every toggle returns a new builder, so a partially
configured builder can be shared and reused.

After evaluation, side effects run in a fixed order: failure callbacks,
success callbacks, the raise (if requested and the match failed), then
completion callbacks. A raise therefore skips completion callbacks.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable
from uuid import uuid4

from shapeof.config import settings
from shapeof.errors import Err, InvalidShapeError, Ok, Result, invalid_shape
from shapeof.logging import bind_context, engine_logger, unbind_context

from .engine import Evaluation, LogEntry, evaluate, evaluating
from .sentinel import ABSENT

log = engine_logger()

Callback = Callable[[Any, Any], Any]


@dataclass(frozen=True, slots=True)
class ValidationOptions:
    """Accumulated toggles for one top-level validation call."""
    mutated: bool = False
    detailed: bool = False
    throwing: bool = False
    error: BaseException | None = None
    success_callbacks: tuple[Callback, ...] = ()
    failure_callbacks: tuple[Callback, ...] = ()
    completion_callbacks: tuple[Callback, ...] = ()


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Detailed outcome: success flag, ordered event log and accepted value."""
    success: bool
    log: list[LogEntry] = field(default_factory=list)
    value: Any = ABSENT

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "log": [entry.to_dict() for entry in self.log],
            "value": None if self.value is ABSENT else self.value,
        }


@dataclass(frozen=True, slots=True)
class _Outcome:
    success: bool
    value: Any
    log: list[LogEntry] | None


class ValidationBuilder:
    """Fluent entry point returned by ``validate(value)``."""

    __slots__ = ("_value", "_options")

    def __init__(self, value: Any, options: ValidationOptions | None = None):
        self._value = value
        self._options = options or ValidationOptions()

    @property
    def value(self) -> Any:
        return self._value

    @property
    def options(self) -> ValidationOptions:
        return self._options

    def _with(self, **changes: Any) -> ValidationBuilder:
        return ValidationBuilder(self._value, replace(self._options, **changes))

    # ------------------------------------------------------------------
    # Toggles
    # ------------------------------------------------------------------

    def returning_mutated_value(self) -> ValidationBuilder:
        return self._with(mutated=True)

    def returning_detailed_result(self) -> ValidationBuilder:
        return self._with(detailed=True)

    def throwing_on_failure(self, error: BaseException | None = None) -> ValidationBuilder:
        """Raise on mismatch: *error* itself if given, else InvalidShapeError."""
        if error is not None and not isinstance(error, BaseException):
            raise TypeError(f"throwing_on_failure expects an exception instance, got {type(error).__name__}")
        return self._with(throwing=True, error=error)

    def on_success(self, callback: Callback) -> ValidationBuilder:
        return self._with(success_callbacks=(*self._options.success_callbacks, callback))

    def on_failure(self, callback: Callback) -> ValidationBuilder:
        return self._with(failure_callbacks=(*self._options.failure_callbacks, callback))

    def on_completion(self, callback: Callback) -> ValidationBuilder:
        return self._with(completion_callbacks=(*self._options.completion_callbacks, callback))

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------

    def matches(self, schema: Any) -> Any:
        """Match loosely: objects may carry fields the schema doesn't declare."""
        return self._finish(schema, self._run(schema, exact=False))

    def matches_exactly(self, schema: Any) -> Any:
        """Match exactly: undeclared object fields fail at every depth."""
        return self._finish(schema, self._run(schema, exact=True))

    def does_not_match(self, schema: Any) -> Any:
        """Negated ``matches``; callbacks and throwing still refer to the match."""
        outcome = self._run(schema, exact=False)
        result = self._finish(schema, outcome)
        if isinstance(result, ValidationReport):
            return replace(result, success=not result.success)
        return not outcome.success

    def does_not_match_exactly(self, schema: Any) -> Any:
        outcome = self._run(schema, exact=True)
        result = self._finish(schema, outcome)
        if isinstance(result, ValidationReport):
            return replace(result, success=not result.success)
        return not outcome.success

    def match_result(self, schema: Any, exact: bool = False) -> Result[Any, Any]:
        """Match without raising on mismatch.

        Returns:
            Ok(accepted value), or Err(payload) where payload is the error given
            to ``throwing_on_failure`` or an ``E3000_INVALID_SHAPE`` AppError.
        """
        outcome = self._run(schema, exact=exact)
        self._fire(schema, outcome.success)
        if outcome.success:
            result: Result[Any, Any] = Ok(outcome.value)
        else:
            result = Err(self._options.error or invalid_shape(self._value, origin="match_result").error)
        self._complete(schema)
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, schema: Any, exact: bool) -> _Outcome:
        if not settings.TRACE_EVALUATION:
            return self._evaluate(schema, exact)
        # Events logged by validators during this run carry the id.
        bind_context(validation_id=str(uuid4())[:8])
        try:
            outcome = self._evaluate(schema, exact)
            log.debug(
                "validation_completed",
                success=outcome.success,
                exact=exact,
                value_type=type(self._value).__name__,
                entries=len(outcome.log) if outcome.log is not None else None,
            )
            return outcome
        finally:
            unbind_context("validation_id")

    def _evaluate(self, schema: Any, exact: bool) -> _Outcome:
        entries: list[LogEntry] | None = [] if self._options.detailed else None
        evaluation = Evaluation(exact=exact, log=entries)
        with evaluating(evaluation):
            result = evaluate(self._value, schema)
            success = result is not ABSENT
            evaluation.record(
                "Passed: value matches schema" if success else "Failed: value does not match schema",
                result if success else self._value,
            )
        return _Outcome(success, result, entries)

    def _fire(self, schema: Any, success: bool) -> None:
        if not success:
            for callback in self._options.failure_callbacks:
                callback(self._value, schema)
        else:
            for callback in self._options.success_callbacks:
                callback(self._value, schema)

    def _complete(self, schema: Any) -> None:
        for callback in self._options.completion_callbacks:
            callback(self._value, schema)

    def _raise(self) -> None:
        if self._options.error is not None:
            raise self._options.error
        raise InvalidShapeError(invalid_shape(self._value, origin="validate").error)

    def _finish(self, schema: Any, outcome: _Outcome) -> Any:
        self._fire(schema, outcome.success)
        if not outcome.success and self._options.throwing:
            self._raise()
        self._complete(schema)

        if self._options.detailed:
            return ValidationReport(outcome.success, outcome.log or [], outcome.value)
        if self._options.mutated:
            return outcome.value
        return outcome.success


def validate(value: Any) -> ValidationBuilder:
    """Start a validation of *value*."""
    return ValidationBuilder(value)

