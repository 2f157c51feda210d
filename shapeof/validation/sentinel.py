"""The absent signal.

``None`` is JSON ``null`` and a legal value, so rejection is signalled with a
dedicated falsy singleton instead.
"""
from __future__ import annotations

from typing import Any, Final


class _Absent:
    __slots__ = ()
    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()


def is_absent(result: Any) -> bool:
    return result is ABSENT


def accepted(result: Any, value: Any) -> bool:
    """Whether *result*, returned by a callback given *value*, is an acceptance.

    A bare ``None`` for a non-``None`` input counts as a rejection: a Python
    callback that falls off its end returns ``None``.
    """
    if result is ABSENT:
        return False
    return result is not None or value is None
