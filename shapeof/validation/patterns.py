"""Regular expression helpers.

Descriptors carry pattern flags as JavaScript-style letters so schemas stay
portable; these helpers translate between letters and ``re`` flags.
"""
from __future__ import annotations

import re
from functools import lru_cache

_LETTER_FLAGS: dict[str, int] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "a": re.ASCII,
    # No Python counterpart; accepted and dropped.
    "g": 0,
    "u": 0,
    "y": 0,
    "d": 0,
}

_FLAG_LETTERS: tuple[tuple[int, str], ...] = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
    (re.ASCII, "a"),
)

# Implied for every str pattern
_IMPLICIT = re.UNICODE


def letters_to_flags(letters: str) -> int:
    """``"gi"`` -> ``re.IGNORECASE``. Raises ValueError on unknown letters."""
    flags = 0
    for letter in letters:
        if letter not in _LETTER_FLAGS:
            raise ValueError(f"unknown regular expression flag '{letter}'")
        flags |= _LETTER_FLAGS[letter]
    return flags


def flags_to_letters(flags: int) -> str:
    """``re.IGNORECASE | re.MULTILINE`` -> ``"im"``.

    Raises:
        ValueError: If *flags* holds a flag with no letter (``re.LOCALE``, ``re.DEBUG``).
    """
    known = int(_IMPLICIT)
    for flag, _ in _FLAG_LETTERS:
        known |= int(flag)
    unknown = int(flags) & ~known
    if unknown:
        raise ValueError(f"regular expression flags {unknown:#x} have no descriptor letter")
    return "".join(letter for flag, letter in _FLAG_LETTERS if flags & flag)


@lru_cache(maxsize=256)
def _compile(source: str, flags: int) -> re.Pattern:
    return re.compile(source, flags)


def compile_pattern(pattern: str | re.Pattern, flags: str | int | None = None) -> re.Pattern:
    """Compile *pattern*; explicit *flags* replace a compiled pattern's own flags.

    Raises:
        ValueError: On unknown flag letters.
        re.error: On an invalid expression.
    """
    if isinstance(pattern, re.Pattern):
        if flags is None:
            return pattern
        source = pattern.pattern
    else:
        source = pattern
    if isinstance(flags, str):
        flags = letters_to_flags(flags)
    return _compile(source, flags or 0)
