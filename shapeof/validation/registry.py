"""Validator registry and factory.

Every named validator, built-in or custom, lives in a registry keyed by its
dotted name. Deserialization resolves call chains through it and
``define_validator`` uses it to find parents for sub-validators.
"""
from __future__ import annotations

import inspect
import threading
from typing import Any, Callable, Iterable, Iterator

from shapeof.errors import duplicate_validator, raise_error, unknown_parent, unknown_validator
from shapeof.logging import registry_logger

from .chain import ArgsCheck, ArgsDeserializer, ArgsSerializer, Link, Validator

log = registry_logger()

NAMESPACE = "shapeOf"


class ValidatorRegistry:
    """Name -> Validator mapping shared by a process (or a test)."""

    def __init__(self) -> None:
        self._validators: dict[str, Validator] = {}
        self._lock = threading.RLock()

    def register(self, validator: Validator, *, aliases: Iterable[str] = (), replace: bool = False) -> Validator:
        names = [validator.name, *aliases]
        with self._lock:
            if not replace:
                for name in names:
                    if name in self._validators:
                        raise_error(duplicate_validator(name, origin="registry").error)
            for name in names:
                self._validators[name] = validator
        return validator

    def attach(self, parent: Validator, child: Validator, keys: Iterable[str]) -> None:
        """Hang *child* off *parent* under each of *keys*."""
        with self._lock:
            for key in keys:
                parent._attach(key, child)

    def get(self, name: str) -> Validator:
        with self._lock:
            validator = self._validators.get(name)
        if validator is None:
            raise_error(unknown_validator(name, origin="registry").error)
        return validator

    def find(self, name: str) -> Validator | None:
        with self._lock:
            return self._validators.get(name)

    def has_namespace(self, prefix: str) -> bool:
        prefix = f"{prefix}."
        with self._lock:
            return any(name.startswith(prefix) for name in self._validators)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._validators)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._validators

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        with self._lock:
            return len(self._validators)


default_registry = ValidatorRegistry()


def child_key(name: str, parent_name: str) -> str:
    """Key under which *name* hangs off *parent_name*: the last segment after the parent prefix."""
    if name.startswith(f"{parent_name}."):
        name = name[len(parent_name) + 1:]
    return name.rsplit(".", 1)[-1]


def _sibling(name: str, alias: str) -> str:
    head, _, _ = name.rpartition(".")
    return f"{head}.{alias}" if head else alias


def _default_required(callback: Callable[..., Any]) -> int:
    """Positional parameters without defaults, minus the value parameter."""
    try:
        params = inspect.signature(callback).parameters.values()
    except (TypeError, ValueError):
        return 0
    positional = [
        p for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    return max(len(positional) - 1, 0)


def define_validator(
    name: str,
    callback: Callable[..., Any],
    *,
    parent: str | Validator | None = None,
    aliases: Iterable[str] = (),
    optional: bool = False,
    required_args: int | None = None,
    serialize: ArgsSerializer | None = None,
    deserialize: ArgsDeserializer | None = None,
    check: ArgsCheck | None = None,
    registry: ValidatorRegistry | None = None,
) -> Validator:
    """Create and register a named validator.

    Args:
        name: Dotted name, e.g. ``"shapeOf.string.slug"``.
        callback: ``callback(value, *args)`` returning the accepted (possibly
            transformed) value, or ABSENT to reject.
        parent: Name or instance of the validator this one refines. The
            child becomes reachable as ``parent.<last segment of name>``.
        aliases: Extra names: sibling registry names for top-level
            validators, extra attribute keys for sub-validators.
        optional: The field may be missing from its object. Sub-validators
            inherit their parent's flag.
        required_args: Minimum number of arguments when the validator is
            called. Defaults to the callback's positional arity minus one.
        serialize: Hook turning bound args into descriptor ``args``.
        deserialize: Hook turning descriptor ``args`` back into call args.
        check: ``check(name, args)`` run whenever the validator is called;
            raises ConfigurationError for arguments it cannot accept.
        registry: Target registry, the default one if omitted.

    Raises:
        ConfigurationError: If the parent is unknown or the name is taken.
    """
    if registry is None:
        registry = default_registry
    aliases = tuple(aliases)
    if required_args is None:
        required_args = _default_required(callback)
    link = Link(name, callback, (), required_args, serialize, deserialize, check)

    if parent is None:
        validator = Validator(name, (link,), optional=optional, aliases=aliases)
        registry.register(validator, aliases=[_sibling(name, a) for a in aliases])
        log.debug("validator_registered", name=name, aliases=aliases, optional=optional)
        return validator

    if isinstance(parent, str):
        parent_name = parent
        parent = registry.find(parent_name)
        if parent is None:
            raise_error(unknown_parent(name, parent_name, origin="registry").error)

    validator = Validator(
        name,
        parent.links + (link,),
        optional=optional or parent.optional,
        aliases=aliases,
    )
    registry.register(validator, aliases=[f"{parent.name}.{a}" for a in aliases])
    registry.attach(parent, validator, (child_key(name, parent.name), *aliases))
    log.debug("validator_registered", name=name, parent=parent.name, aliases=aliases, optional=validator.optional)
    return validator


class Namespace:
    """Attribute access over a registry prefix.

        shapes = Namespace(default_registry, "shapeOf")
        shapes.string              # registry["shapeOf.string"]
        shapes.optional.number     # registry["shapeOf.optional.number"]
    """

    __slots__ = ("_registry", "_prefix")

    def __init__(self, registry: ValidatorRegistry, prefix: str):
        self._registry = registry
        self._prefix = prefix

    def __getattr__(self, item: str) -> Validator | Namespace:
        if item.startswith("_"):
            raise AttributeError(item)
        full = f"{self._prefix}.{item}"
        validator = self._registry.find(full)
        if validator is not None:
            return validator
        if self._registry.has_namespace(full):
            return Namespace(self._registry, full)
        raise AttributeError(f"No validator or namespace '{full}'")

    def __getitem__(self, item: str) -> Validator | Namespace:
        try:
            return getattr(self, item)
        except AttributeError:
            raise KeyError(item) from None

    def __dir__(self) -> list[str]:
        prefix = f"{self._prefix}."
        return sorted({
            name[len(prefix):].split(".", 1)[0]
            for name in self._registry.names()
            if name.startswith(prefix)
        })

    def __repr__(self) -> str:
        return f"<Namespace {self._prefix}>"
