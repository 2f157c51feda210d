"""Tests for schema serialization and deserialization."""

import json
import re

import pytest

from shapeof import COMPATIBLE_SCHEMA_VERSION, __version__, exactly, shapes, validate
from shapeof.codec import deserialize_schema, serialize_schema
from shapeof.errors import ConfigurationError, ErrorCode, SerializationError
from shapeof.validation import ABSENT, ExactSchema, define_validator
from shapeof.validation.patterns import flags_to_letters


def primitive(value):
    return {"type": "primitive", "value": value}


def validator(name, *links, optional=False):
    node = {"type": "validator", "name": name}
    if optional:
        node["optional"] = True
    node["callChain"] = [{"name": link_name, "args": list(args)} for link_name, args in links]
    return node


def field(name, value):
    return {"type": "field", "name": name, "value": value}


PERSON_SCHEMA = {
    "first_name": shapes.string.ofSize(3, 25),
    "last_name": "Bar",
    "title": shapes.optional.string.ofSize(2, 15),
    "sex": shapes.oneOf("Male", "Female", "Other"),
    "three_favorite_things": shapes.arrayOf(shapes.string, shapes.number).ofSize(3),
}

PERSON = {
    "first_name": "Foo",
    "last_name": "Bar",
    "title": "Dr.",
    "sex": "Other",
    "three_favorite_things": ["Pizza", "Ice Cream", "Sandwiches"],
}

PERSON_DESCRIPTOR = {
    "_shapeOfVersion": __version__,
    "_shapeOfSchemaVersion": COMPATIBLE_SCHEMA_VERSION,
    "schema": {
        "type": "object",
        "value": [
            field("first_name", validator(
                "shapeOf.string.size",
                ("shapeOf.string", []),
                ("shapeOf.string.size", [primitive(3), primitive(25)]),
            )),
            field("last_name", primitive("Bar")),
            field("title", validator(
                "shapeOf.optional.string.size",
                ("shapeOf.optional.string", []),
                ("shapeOf.optional.string.size", [primitive(2), primitive(15)]),
                optional=True,
            )),
            field("sex", validator(
                "shapeOf.oneOf",
                ("shapeOf.oneOf", [primitive("Male"), primitive("Female"), primitive("Other")]),
            )),
            field("three_favorite_things", validator(
                "shapeOf.arrayOf.size",
                ("shapeOf.arrayOf", [
                    validator("shapeOf.string", ("shapeOf.string", [])),
                    validator("shapeOf.number", ("shapeOf.number", [])),
                ]),
                ("shapeOf.arrayOf.size", [primitive(3)]),
            )),
        ],
    },
}


class TestSerialize:
    def test_descriptor_layout(self):
        assert serialize_schema(PERSON_SCHEMA, as_object=True) == PERSON_DESCRIPTOR

    def test_validator_key_order(self):
        node = serialize_schema(shapes.optional.string, as_object=True)["schema"]

        assert list(node) == ["type", "name", "optional", "callChain"]

    def test_json_output(self):
        assert json.loads(serialize_schema(PERSON_SCHEMA)) == PERSON_DESCRIPTOR

    def test_arrays_regexps_and_exact_objects(self):
        node = serialize_schema([re.compile("^a+$", re.I | re.M), exactly(n=None)], as_object=True)["schema"]

        assert node == {
            "type": "array",
            "value": [
                {"type": "regexp", "value": "^a+$", "flags": "im"},
                {"type": "object", "value": [field("n", primitive(None))], "exact": True},
            ],
        }

    def test_ascii_flag_round_trips(self):
        schema = {"n": re.compile(r"^\w+$", re.ASCII)}

        descriptor = serialize_schema(schema, as_object=True)
        rebuilt = deserialize_schema(descriptor)

        assert descriptor["schema"]["value"][0]["value"]["flags"] == "a"
        assert validate({"n": "abc"}).matches(rebuilt)
        assert not validate({"n": "\u00e9"}).matches(schema)
        assert not validate({"n": "\u00e9"}).matches(rebuilt)

    def test_flags_without_a_letter_are_rejected(self):
        with pytest.raises(ValueError):
            flags_to_letters(re.IGNORECASE | re.DEBUG)

    @pytest.mark.parametrize("schema", [lambda v: v, {"f": print}, float("nan"), {1: "int key"}, object()])
    def test_unserializable(self, schema):
        with pytest.raises(SerializationError) as exc:
            serialize_schema(schema)

        assert exc.value.code is ErrorCode.E2001_UNSERIALIZABLE_NODE


class TestDeserialize:
    def test_round_trip_is_idempotent(self):
        first = serialize_schema(PERSON_SCHEMA)

        assert serialize_schema(deserialize_schema(first)) == first

    def test_round_trip_accepts_the_same_values(self):
        schema = deserialize_schema(serialize_schema(PERSON_SCHEMA))

        assert validate(PERSON).matches_exactly(schema)
        assert validate({**PERSON, "title": None}).does_not_match(schema)
        assert validate({**PERSON, "three_favorite_things": ["Pizza"]}).does_not_match(schema)

    def test_sized_string(self):
        schema = deserialize_schema(serialize_schema({"name": shapes.string.ofSize(3, 25)}))

        assert validate({"name": "Bob"}).matches(schema)
        assert not validate({"name": "Al"}).matches(schema)

    def test_rebuilds_regexps_and_exact_objects(self):
        schema = deserialize_schema(serialize_schema({"code": re.compile("^ab", re.I), "inner": exactly(a=1)}))

        assert schema["code"].flags & re.IGNORECASE
        assert isinstance(schema["inner"], ExactSchema)
        assert validate({"code": "ABc", "inner": {"a": 1}}).matches(schema)

    def test_accepts_dicts(self):
        assert deserialize_schema(PERSON_DESCRIPTOR)["last_name"] == "Bar"

    def test_optional_validator_is_rebuilt_optional(self):
        schema = deserialize_schema(serialize_schema({"title": shapes.optional.string}))

        assert schema["title"].optional
        assert validate({}).matches(schema)


class TestDescriptorErrors:
    def descriptor(self, **changes):
        return {**PERSON_DESCRIPTOR, **changes}

    def test_invalid_json(self):
        with pytest.raises(SerializationError) as exc:
            deserialize_schema("{not json")

        assert exc.value.code is ErrorCode.E2002_MALFORMED_DESCRIPTOR

    def test_missing_envelope_keys(self):
        with pytest.raises(SerializationError) as exc:
            deserialize_schema({"schema": primitive(1)})

        assert exc.value.code is ErrorCode.E2002_MALFORMED_DESCRIPTOR
        assert exc.value.error.metadata["errors"]

    def test_unknown_node_type(self):
        with pytest.raises(SerializationError) as exc:
            deserialize_schema(self.descriptor(schema={"type": "function", "value": "x"}))

        assert exc.value.code is ErrorCode.E2002_MALFORMED_DESCRIPTOR

    def test_error_path_points_at_the_node(self):
        bad = {"type": "object", "value": [{"type": "field", "name": "a"}]}

        with pytest.raises(SerializationError) as exc:
            deserialize_schema(self.descriptor(schema=bad))

        assert exc.value.error.metadata["path"].startswith("$.schema.object.value[0]")

    def test_newer_schema_version(self):
        with pytest.raises(SerializationError) as exc:
            deserialize_schema(self.descriptor(_shapeOfSchemaVersion="99.0.0"))

        assert exc.value.code is ErrorCode.E2003_INCOMPATIBLE_SCHEMA_VERSION

    def test_malformed_version(self):
        with pytest.raises(SerializationError) as exc:
            deserialize_schema(self.descriptor(_shapeOfSchemaVersion="one"))

        assert exc.value.code is ErrorCode.E2002_MALFORMED_DESCRIPTOR

    def test_unknown_validator(self):
        node = validator("shapeOf.nothing", ("shapeOf.nothing", []))

        with pytest.raises(ConfigurationError) as exc:
            deserialize_schema(self.descriptor(schema=node))

        assert exc.value.code is ErrorCode.E1003_UNKNOWN_VALIDATOR

    def test_unknown_sub_validator(self):
        node = validator("shapeOf.string.nothing", ("shapeOf.string", []), ("shapeOf.string.nothing", []))

        with pytest.raises(ConfigurationError) as exc:
            deserialize_schema(self.descriptor(schema=node))

        assert exc.value.code is ErrorCode.E1003_UNKNOWN_VALIDATOR

    def test_name_mismatch(self):
        node = validator("shapeOf.number", ("shapeOf.string", []))

        with pytest.raises(SerializationError) as exc:
            deserialize_schema(self.descriptor(schema=node))

        assert exc.value.code is ErrorCode.E2002_MALFORMED_DESCRIPTOR


class TestCustomValidators:
    def test_argument_hooks(self, registry):
        def within(value, bounds):
            return value if bounds.start <= value < bounds.stop else ABSENT

        define_validator(
            "app.within",
            within,
            serialize=lambda args: [args[0].start, args[0].stop],
            deserialize=lambda args: [range(*args)],
            registry=registry,
        )
        schema = {"n": registry.get("app.within")(range(1, 10))}

        descriptor = serialize_schema(schema, as_object=True)
        assert descriptor["schema"]["value"][0]["value"]["callChain"] == [{"name": "app.within", "args": [1, 10]}]

        rebuilt = deserialize_schema(descriptor, registry=registry)
        assert validate({"n": 5}).matches(rebuilt)
        assert not validate({"n": 10}).matches(rebuilt)

    def test_custom_validators_need_their_registry(self, registry):
        define_validator("app.anything", lambda value: value, registry=registry)
        text = serialize_schema(registry.get("app.anything"))

        with pytest.raises(ConfigurationError):
            deserialize_schema(text)
        assert deserialize_schema(text, registry=registry) is registry.get("app.anything")

    def test_explicit_empty_registry_is_used(self, registry):
        with pytest.raises(ConfigurationError) as exc:
            deserialize_schema(serialize_schema(shapes.string), registry=registry)

        assert exc.value.code is ErrorCode.E1003_UNKNOWN_VALIDATOR
