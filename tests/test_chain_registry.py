"""Tests for validator chains, the registry and define_validator."""

import pytest

from shapeof import shapes
from shapeof.errors import ConfigurationError, ErrorCode
from shapeof.validation import ABSENT, Namespace, Validator, default_registry, define_validator


def starts_with(value, prefix):
    return value if value.startswith(prefix) else ABSENT


def ends_with(value, suffix):
    return value if value.endswith(suffix) else ABSENT


class TestChains:
    def test_calling_returns_a_new_chain(self):
        base = shapes.string.size
        bound = base(3, 25)

        assert bound is not base
        assert base.args == ()
        assert bound.args == (3, 25)
        assert [link.name for link in bound.links] == ["shapeOf.string", "shapeOf.string.size"]

    def test_execute_threads_every_link(self):
        sized = shapes.string.size(3, 25)

        assert sized.execute("Bob") == "Bob"
        assert sized.execute("Al") is ABSENT
        assert sized.execute(12345) is ABSENT

    def test_sub_validator_keeps_parent_arguments(self):
        sized = shapes.arrayOf(shapes.number).size(2)

        assert sized.links[0].args == (shapes.number,)
        assert sized.execute([1, 2]) == [1, 2]
        assert sized.execute([1, "a"]) is ABSENT
        assert sized.execute([1, 2, 3]) is ABSENT

    def test_missing_arguments_name_the_validator(self):
        with pytest.raises(ConfigurationError) as exc:
            shapes.number.range(1)

        assert exc.value.code is ErrorCode.E1001_MISSING_ARGUMENTS
        assert exc.value.error.metadata["validator"] == "shapeOf.number.range"

    def test_unbound_parent_fails_when_executed(self):
        with pytest.raises(ConfigurationError) as exc:
            shapes.arrayOf.size(2).execute([1, 2])

        assert exc.value.error.metadata["validator"] == "shapeOf.arrayOf"

    def test_aliases_reach_the_same_sub_validator(self):
        assert shapes.string.ofSize is shapes.string.size
        assert shapes.number.greaterThanOrEqualTo is shapes.number.min
        assert shapes.boolean is shapes.bool
        assert shapes.each is shapes.eachOf

    def test_unknown_sub_validator(self):
        with pytest.raises(AttributeError):
            shapes.string.nope

    def test_describe(self):
        assert shapes.string.size(3, 25).describe() == "shapeOf.string.size(3, 25)"
        assert "optional" in repr(shapes.optional.number)


class TestOptionalTwin:
    def test_optional_namespace_is_independent(self):
        assert shapes.optional.string is not shapes.string
        assert shapes.optional.string.optional
        assert not shapes.string.optional
        assert shapes.optional.string.size is not shapes.string.size

    def test_sub_validators_inherit_optional(self):
        assert shapes.optional.string.size(2, 15).optional
        assert shapes.optional.string.size.name == "shapeOf.optional.string.size"


class TestDefineValidator:
    def test_explicit_empty_registry_is_used(self, registry):
        define_validator("app.isolated", starts_with, registry=registry)

        assert "app.isolated" in registry
        assert "app.isolated" not in default_registry

    def test_registers_top_level_with_aliases(self, registry):
        prefixed = define_validator("app.prefixed", starts_with, aliases=("startsWith",), registry=registry)

        assert registry.get("app.prefixed") is prefixed
        assert registry.get("app.startsWith") is prefixed
        assert prefixed.required_args == 1

    def test_child_name_is_last_segment(self, registry):
        parent = define_validator("app.text", lambda value: value if isinstance(value, str) else ABSENT,
                                  registry=registry)
        child = define_validator("app.text.rules.ending", ends_with, parent="app.text", registry=registry)

        assert parent.ending is child
        assert [link.name for link in child.links] == ["app.text", "app.text.rules.ending"]
        assert child("!").execute("hi!") == "hi!"
        assert child("!").execute("hi") is ABSENT

    def test_attach_adds_extra_keys(self, registry):
        parent = define_validator("app.word", starts_with, registry=registry)
        child = define_validator("app.word.end", ends_with, parent=parent, registry=registry)

        registry.attach(parent, child, ("suffix",))

        bound = parent("a")
        assert parent.suffix is child
        assert bound.suffix is bound.end

    def test_unknown_parent(self, registry):
        with pytest.raises(ConfigurationError) as exc:
            define_validator("app.orphan", starts_with, parent="app.missing", registry=registry)

        assert exc.value.code is ErrorCode.E1002_UNKNOWN_PARENT

    def test_duplicate_name(self, registry):
        define_validator("app.dup", starts_with, registry=registry)

        with pytest.raises(ConfigurationError) as exc:
            define_validator("app.dup", starts_with, registry=registry)

        assert exc.value.code is ErrorCode.E1004_DUPLICATE_VALIDATOR

    def test_unknown_name(self, registry):
        with pytest.raises(ConfigurationError) as exc:
            registry.get("app.nothing")

        assert exc.value.code is ErrorCode.E1003_UNKNOWN_VALIDATOR

    def test_required_args_override_and_default_arity(self, registry):
        def between(value, low, high=100):
            return value if low <= value <= high else ABSENT

        assert define_validator("app.between", between, registry=registry).required_args == 1
        assert define_validator("app.strict", between, required_args=2, registry=registry).required_args == 2

    def test_optional_flag(self, registry):
        maybe = define_validator("app.maybe", starts_with, optional=True, registry=registry)
        nested = define_validator("app.maybe.end", ends_with, parent=maybe, registry=registry)

        assert maybe.optional
        assert nested.optional


class TestNamespace:
    def test_attribute_access(self, catalog):
        assert isinstance(catalog.string, Validator)
        assert isinstance(catalog.optional, Namespace)
        assert catalog.optional.number.name == "shapeOf.optional.number"
        assert catalog["integer"].name == "shapeOf.integer"

    def test_unknown_member(self, catalog):
        with pytest.raises(AttributeError):
            catalog.nothing
        with pytest.raises(KeyError):
            catalog["nothing"]

    def test_dir_lists_first_segments(self, catalog):
        members = dir(catalog)

        assert "string" in members
        assert "optional" in members
        assert "arrayOf" in members

    def test_registries_are_isolated(self, catalog):
        assert catalog.string is not shapes.string
