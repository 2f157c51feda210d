"""Shared fixtures."""

import pytest

from shapeof.validation import Namespace, ValidatorRegistry, install


@pytest.fixture
def registry() -> ValidatorRegistry:
    """An empty registry, isolated from the process-wide one."""
    return ValidatorRegistry()


@pytest.fixture
def catalog(registry: ValidatorRegistry) -> Namespace:
    """The built-in catalog installed into a throwaway registry."""
    install(registry)
    return Namespace(registry, "shapeOf")
