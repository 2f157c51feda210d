"""Validator Chains

A Validator is an immutable, named chain of links. Each link is one check
(a primitive predicate or a refinement) together with the arguments bound to
it so far. Calling a validator binds arguments to its last link and returns a
new validator; attribute access reaches attached sub-validators.

    shapes.string                       # links: [string]
    shapes.string.size                  # links: [string, size]
    shapes.string.size(3, 25)           # links: [string, size(3, 25)]
    shapes.arrayOf(shapes.number).size  # links: [arrayOf(number), size]

Executing a chain threads the value through every link in order and stops at
the first rejection. Links only ever see values accepted by the links before
them, so a refinement may assume its parent's type.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable

from shapeof.errors import missing_arguments, raise_error

from .sentinel import ABSENT, accepted

LinkCallback = Callable[..., Any]
ArgsSerializer = Callable[[tuple], list]
ArgsDeserializer = Callable[[list], list]
ArgsCheck = Callable[[str, tuple], None]


@dataclass(frozen=True, slots=True)
class Link:
    """One step of a chain: ``callback(value, *args)``."""
    name: str
    callback: LinkCallback = field(compare=False)
    args: tuple[Any, ...] = ()
    required: int = 0
    serializer: ArgsSerializer | None = field(default=None, compare=False, repr=False)
    deserializer: ArgsDeserializer | None = field(default=None, compare=False, repr=False)
    check: ArgsCheck | None = field(default=None, compare=False, repr=False)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def bind(self, args: tuple[Any, ...]) -> Link:
        return replace(self, args=tuple(args))

    def apply(self, value: Any) -> Any:
        if len(self.args) < self.required:
            raise_error(missing_arguments(self.name, self.required, len(self.args)).error)
        return self.callback(value, *self.args)

    def describe(self, qualified: bool = True) -> str:
        label = self.name if qualified else self.simple_name
        if not self.args:
            return label
        return f"{label}({', '.join(_describe_arg(a) for a in self.args)})"


def _describe_arg(arg: Any) -> str:
    if isinstance(arg, Validator):
        return arg.describe()
    return repr(arg)


@dataclass(frozen=True, slots=True, eq=False)
class Validator:
    """An immutable validator chain.

    ``children`` maps sub-validator keys (aliases included) to validators
    whose links extend this chain's links. The map is only written while the
    owning registry is being populated.
    """
    name: str
    links: tuple[Link, ...]
    optional: bool = False
    aliases: tuple[str, ...] = ()
    children: dict[str, Validator] = field(default_factory=dict, repr=False)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def required_args(self) -> int:
        return self.links[-1].required

    @property
    def args(self) -> tuple[Any, ...]:
        """Arguments bound to the last link."""
        return self.links[-1].args

    def __call__(self, *args: Any) -> Validator:
        if len(args) < self.required_args:
            raise_error(missing_arguments(self.name, self.required_args, len(args)).error)
        last = self.links[-1]
        if last.check is not None:
            last.check(last.name, args)
        return self._derive(self.links[:-1] + (self.links[-1].bind(args),))

    def __getattr__(self, item: str) -> Validator:
        # Only reached when regular lookup fails; slots may still be unset here.
        if item.startswith("_") or item == "children":
            raise AttributeError(item)
        return self.child(item)

    def child(self, key: str) -> Validator:
        try:
            return self.children[key]
        except KeyError:
            raise AttributeError(f"Validator '{self.name}' has no sub-validator '{key}'") from None

    def execute(self, value: Any) -> Any:
        """Thread *value* through every link; ABSENT on the first rejection."""
        for link in self.links:
            result = link.apply(value)
            if not accepted(result, value):
                return ABSENT
            value = result
        return value

    def describe(self) -> str:
        head, *rest = self.links
        return "".join([head.describe(), *(f".{link.describe(qualified=False)}" for link in rest)])

    def _attach(self, key: str, child: Validator) -> None:
        self.children[key] = child

    def _derive(self, links: tuple[Link, ...]) -> Validator:
        offset = len(self.links)
        rebased: dict[int, Validator] = {}
        children = {}
        for key, child in list(self.children.items()):
            if id(child) not in rebased:
                rebased[id(child)] = child._rebase(offset, links)
            children[key] = rebased[id(child)]
        return replace(self, links=links, children=children)

    def _rebase(self, offset: int, prefix: tuple[Link, ...]) -> Validator:
        """Re-derive this child on top of a re-bound parent chain."""
        return self._derive(prefix + self.links[offset:])

    def __repr__(self) -> str:
        flag = " optional" if self.optional else ""
        return f"<Validator{flag} {self.describe()}>"
