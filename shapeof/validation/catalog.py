"""Built-in validator catalog.

Installed twice into a registry: once under ``shapeOf`` and once under the
``shapeOf.optional`` twin namespace, whose validators never require their
field to be present. The two installs build separate chain objects, so
nothing configured on one side leaks into the other.
"""
from __future__ import annotations

from typing import Any, Callable

from . import combinators, predicates, refinements
from .chain import Validator
from .registry import NAMESPACE, Namespace, ValidatorRegistry, default_registry, define_validator


def install(registry: ValidatorRegistry, namespace: str = NAMESPACE) -> None:
    _install(registry, namespace, optional=False)
    _install(registry, f"{namespace}.optional", optional=True)


def _install(registry: ValidatorRegistry, prefix: str, optional: bool) -> None:
    def define(name: str, callback: Callable[..., Any], **config: Any) -> Validator:
        return define_validator(f"{prefix}.{name}", callback, optional=optional, registry=registry, **config)

    def refine(parent: Validator, name: str, callback: Callable[..., Any], **config: Any) -> Validator:
        return define_validator(f"{parent.name}.{name}", callback, parent=parent, registry=registry, **config)

    # Primitives
    string = define("string", predicates.string)
    array = define("array", predicates.array)
    define("bool", predicates.boolean, aliases=("boolean",))
    number = define("number", predicates.number)
    integer = define("integer", predicates.integer)
    define("object", predicates.object_)
    define("null", predicates.null)
    define("primitive", predicates.primitive)

    # Numeric refinements
    for numeric in (number, integer):
        refine(numeric, "range", refinements.number_range)
        refine(numeric, "min", refinements.number_min,
               aliases=("greaterThanOrEqualTo", "greater_than_or_equal_to"))
        refine(numeric, "max", refinements.number_max,
               aliases=("lessThanOrEqualTo", "less_than_or_equal_to"))

    # String refinements
    refine(string, "size", refinements.size, aliases=("ofSize", "of_size"))
    refine(string, "pattern", refinements.pattern, aliases=("matching",))
    refine(string, "email", refinements.email, aliases=("ofEmail", "of_email"))
    refine(string, "IPv4", refinements.ipv4, aliases=("ofIPv4", "ipv4", "of_ipv4"))
    refine(string, "IPv6", refinements.ipv6, aliases=("ofIPv6", "ipv6", "of_ipv6"))

    # Array refinements
    refine(array, "size", refinements.size, aliases=("ofSize", "of_size"))

    # Combinators
    combinator = dict(required_args=1, check=combinators.check_types)
    array_of = define("arrayOf", combinators.array_of, aliases=("array_of",), **combinator)
    refine(array_of, "size", refinements.size, aliases=("ofSize", "of_size"))
    define("objectOf", combinators.object_of, aliases=("object_of",), **combinator)
    define("oneOf", combinators.one_of, aliases=("one_of",), **combinator)
    define("oneOfType", combinators.one_of_type, aliases=("one_of_type",), **combinator)
    define("eachOf", combinators.each_of, aliases=("each", "each_of"), **combinator)


install(default_registry)

shapes = Namespace(default_registry, NAMESPACE)
