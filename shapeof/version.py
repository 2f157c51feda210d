"""Library and schema version handling.

Serialized schemas carry two tags: the producing library's version and the
schema version it writes. A descriptor can be read when its schema version
is not newer than ``COMPATIBLE_SCHEMA_VERSION``, compared as
``(major, minor, patch)`` tuples.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

__version__ = "1.1.0"  # core version
COMPATIBLE_SCHEMA_VERSION = "1.0.0"  # compatible schema version

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """A parsed semantic version (major, minor, patch)."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(raw: str) -> SemanticVersion:
    """Parse a version string like ``1.0.0`` (with or without 'v' prefix).

    Raises:
        SerializationError: If the string cannot be parsed.
    """
    from shapeof.errors import malformed_descriptor, raise_error

    if not isinstance(raw, str):
        raise_error(malformed_descriptor(
            f"version must be a string, got {type(raw).__name__}: {raw!r}"
        ).error)

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise_error(malformed_descriptor(
            f"invalid version string '{raw}', expected 'MAJOR.MINOR.PATCH' (e.g. '1.0.0')"
        ).error)
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def is_compatible(raw: str, supported: str = COMPATIBLE_SCHEMA_VERSION) -> bool:
    """Whether a descriptor written with schema version *raw* can be read."""
    return parse_version(raw) <= parse_version(supported)
