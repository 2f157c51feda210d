"""Schema -> descriptor."""
from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import Any

from shapeof.config import settings
from shapeof.errors import raise_error, unserializable_node
from shapeof.logging import codec_logger
from shapeof.validation.chain import Link, Validator
from shapeof.validation.engine import ExactSchema
from shapeof.validation.patterns import flags_to_letters
from shapeof.version import COMPATIBLE_SCHEMA_VERSION, __version__

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

log = codec_logger()


def serialize_schema(schema: Any, *, as_object: bool = False) -> str | dict[str, Any]:
    """Serialize *schema* into a versioned descriptor.

    Args:
        as_object: Return the envelope dict instead of a JSON string.

    Raises:
        SerializationError: If the schema holds a plain function or any other
            value without a descriptor form.
    """
    envelope = SchemaEnvelope(
        library_version=__version__,
        schema_version=COMPATIBLE_SCHEMA_VERSION,
        schema_root=serialize_node(schema),
    ).dump()
    log.debug("schema_serialized", root=envelope["schema"]["type"])
    if as_object:
        return envelope
    return json.dumps(envelope, indent=settings.SERIALIZE_INDENT)


def serialize_node(node: Any, path: str = "$") -> PrimitiveNode | RegexpNode | ArrayNode | ObjectNode | ValidatorNode:
    match node:
        case Validator():
            return ValidatorNode(
                type="validator",
                name=node.name,
                optional=node.optional,
                call_chain=[_serialize_link(link, f"{path}.callChain[{i}]") for i, link in enumerate(node.links)],
            )
        case None | bool() | int() | str():
            return PrimitiveNode(type="primitive", value=node)
        case float() if math.isfinite(node):
            return PrimitiveNode(type="primitive", value=node)
        case re.Pattern() if isinstance(node.pattern, str):
            return _serialize_regexp(node, path)
        case list() | tuple():
            return ArrayNode(
                type="array",
                value=[serialize_node(item, f"{path}[{i}]") for i, item in enumerate(node)],
            )
        case Mapping():
            return ObjectNode(
                type="object",
                value=[_serialize_field(key, value, path) for key, value in node.items()],
                exact=isinstance(node, ExactSchema),
            )
    raise_error(unserializable_node(node, path, origin="codec").error)


def _serialize_regexp(node: re.Pattern, path: str) -> RegexpNode:
    try:
        letters = flags_to_letters(node.flags)
    except ValueError as e:
        raise_error(unserializable_node(node, path, origin="codec").error.with_metadata(reason=str(e)))
    return RegexpNode(type="regexp", value=node.pattern, flags=letters)


def _serialize_field(key: Any, value: Any, path: str) -> FieldNode:
    if not isinstance(key, str):
        raise_error(unserializable_node(key, path, origin="codec").error)
    return FieldNode(type="field", name=key, value=serialize_node(value, f"{path}.{key}"))


def _serialize_link(link: Link, path: str) -> CallLink:
    if link.serializer is not None:
        args = list(link.serializer(link.args))
    else:
        args = [serialize_node(arg, f"{path}.args[{i}]").dump() for i, arg in enumerate(link.args)]
    return CallLink(name=link.name, args=args)
