"""Schema Serialization

Schemas built from literals, regexes, nested objects/arrays and named
validators serialize to a versioned JSON descriptor and back:

    text = serialize_schema({"name": shapes.string.size(1, 64)})
    schema = deserialize_schema(text)

Plain functions have no descriptor form; custom validators with
non-JSON arguments supply ``serialize``/``deserialize`` hooks when they are
defined.
"""
from .descriptors import (
    ArrayNode,
    CallLink,
    FieldNode,
    ObjectNode,
    PrimitiveNode,
    RegexpNode,
    SchemaEnvelope,
    ValidatorNode,
)
from .deserializer import deserialize_node, deserialize_schema
from .serializer import serialize_node, serialize_schema

__all__ = [
    "ArrayNode",
    "CallLink",
    "FieldNode",
    "ObjectNode",
    "PrimitiveNode",
    "RegexpNode",
    "SchemaEnvelope",
    "ValidatorNode",
    "deserialize_node",
    "deserialize_schema",
    "serialize_node",
    "serialize_schema",
]
