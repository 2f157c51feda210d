"""Descriptor -> schema.

Validator nodes are rebuilt by replaying their call chain against a
registry: the first link is looked up by name, every later link is reached
as a sub-validator of the chain so far, and links that carried (or require)
arguments are called with them.
"""
from __future__ import annotations

import json
import re
from typing import Any

from shapeof.errors import (
    incompatible_schema_version,
    malformed_descriptor,
    raise_error,
    unknown_validator,
)
from shapeof.logging import codec_logger
from shapeof.validation.chain import Validator
from shapeof.validation.engine import ExactSchema
from shapeof.validation.patterns import compile_pattern
from shapeof.validation.registry import ValidatorRegistry, child_key, default_registry
from shapeof.version import COMPATIBLE_SCHEMA_VERSION, is_compatible

from .descriptors import (
    ArrayNode,
    CallLink,
    ObjectNode,
    PrimitiveNode,
    RegexpNode,
    ValidatorNode,
    parse_envelope,
    parse_node,
)

log = codec_logger()


def deserialize_schema(descriptor: str | bytes | dict[str, Any], *, registry: ValidatorRegistry | None = None) -> Any:
    """Rebuild a schema from ``serialize_schema`` output.

    Raises:
        SerializationError: On malformed JSON or descriptors (E2002), or a
            schema version newer than this library supports (E2003).
        ConfigurationError: If a validator named in the descriptor is not
            registered (E1003).
    """
    if isinstance(descriptor, (str, bytes)):
        try:
            descriptor = json.loads(descriptor)
        except json.JSONDecodeError as e:
            raise_error(malformed_descriptor(f"invalid JSON: {e}", origin="codec", cause=e).error)

    envelope = parse_envelope(descriptor)
    if not is_compatible(envelope.schema_version):
        raise_error(incompatible_schema_version(
            envelope.schema_version, COMPATIBLE_SCHEMA_VERSION, origin="codec"
        ).error)

    schema = deserialize_node(envelope.schema_root, registry=registry, path="$.schema")
    log.debug(
        "schema_deserialized",
        library_version=envelope.library_version,
        schema_version=envelope.schema_version,
    )
    return schema


def deserialize_node(node: Any, *, registry: ValidatorRegistry | None = None, path: str = "$") -> Any:
    """Rebuild one node; accepts a descriptor model or its raw dict."""
    if registry is None:
        registry = default_registry
    if isinstance(node, dict):
        node = parse_node(node, path)

    match node:
        case PrimitiveNode():
            return node.value
        case RegexpNode():
            try:
                return compile_pattern(node.value, node.flags)
            except (ValueError, re.error) as e:
                raise_error(malformed_descriptor(str(e), path=path, origin="codec", cause=e).error)
        case ArrayNode():
            return [deserialize_node(item, registry=registry, path=f"{path}.value[{i}]")
                    for i, item in enumerate(node.value)]
        case ObjectNode():
            fields = {
                field.name: deserialize_node(field.value, registry=registry, path=f"{path}.{field.name}")
                for field in node.value
            }
            return ExactSchema(fields) if node.exact else fields
        case ValidatorNode():
            return _replay(node, registry, path)
    raise_error(malformed_descriptor(f"unsupported node {type(node).__name__}", path=path, origin="codec").error)


def _replay(node: ValidatorNode, registry: ValidatorRegistry, path: str) -> Validator:
    head, *rest = node.call_chain
    validator = _invoke(registry.get(head.name), head, registry, f"{path}.callChain[0]")

    for i, link in enumerate(rest, start=1):
        try:
            child = validator.child(child_key(link.name, validator.name))
        except AttributeError:
            raise_error(unknown_validator(link.name, origin="codec").error)
        validator = _invoke(child, link, registry, f"{path}.callChain[{i}]")

    if validator.name != node.name or validator.optional != node.optional:
        raise_error(malformed_descriptor(
            f"call chain rebuilds '{validator.name}' (optional={validator.optional}), "
            f"descriptor names '{node.name}' (optional={node.optional})",
            path=path,
            origin="codec",
        ).error)
    return validator


def _invoke(validator: Validator, link: CallLink, registry: ValidatorRegistry, path: str) -> Validator:
    if not link.args and not validator.required_args:
        return validator

    deserializer = validator.links[-1].deserializer
    if deserializer is not None:
        args = list(deserializer(list(link.args)))
    else:
        args = [deserialize_node(arg, registry=registry, path=f"{path}.args[{i}]")
                for i, arg in enumerate(link.args)]
    return validator(*args)
