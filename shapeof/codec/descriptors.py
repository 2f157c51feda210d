"""Schema descriptor models.

The wire format of a serialized schema, checked with pydantic on the way in
and used to build descriptors on the way out. Nodes are discriminated on
their ``type`` key:

    {"type": "primitive", "value": 3}
    {"type": "regexp", "value": "^a+$", "flags": "i"}
    {"type": "array", "value": [<node>, ...]}
    {"type": "object", "value": [<field>, ...], "exact": true}
    {"type": "field", "name": "age", "value": <node>}
    {"type": "validator", "name": "shapeOf.string.size", "optional": true,
     "callChain": [{"name": "shapeOf.string", "args": []},
                   {"name": "shapeOf.string.size", "args": [<node>, <node>]}]}

``optional`` and ``exact`` are only written when true.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Sequence, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from shapeof.errors import malformed_descriptor, raise_error


class DescriptorModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_defaults=True, mode="json")


class PrimitiveNode(DescriptorModel):
    type: Literal["primitive"]
    value: StrictBool | StrictInt | StrictFloat | StrictStr | None


class RegexpNode(DescriptorModel):
    type: Literal["regexp"]
    value: StrictStr
    flags: StrictStr


class ArrayNode(DescriptorModel):
    type: Literal["array"]
    value: list[Node]


class FieldNode(DescriptorModel):
    type: Literal["field"]
    name: StrictStr
    value: Node


class ObjectNode(DescriptorModel):
    type: Literal["object"]
    value: list[FieldNode]
    exact: StrictBool = False


class CallLink(DescriptorModel):
    """One link of a call chain. ``args`` stay raw until the link is replayed."""
    name: StrictStr
    args: list[Any]


class ValidatorNode(DescriptorModel):
    type: Literal["validator"]
    name: StrictStr
    optional: StrictBool = False
    call_chain: list[CallLink] = Field(alias="callChain", min_length=1)


Node = Annotated[
    Union[PrimitiveNode, RegexpNode, ArrayNode, ObjectNode, ValidatorNode],
    Field(discriminator="type"),
]


class SchemaEnvelope(DescriptorModel):
    library_version: StrictStr = Field(alias="_shapeOfVersion")
    schema_version: StrictStr = Field(alias="_shapeOfSchemaVersion")
    schema_root: Node = Field(alias="schema")


for _model in (ArrayNode, FieldNode, ObjectNode, SchemaEnvelope):
    _model.model_rebuild()

NODE_ADAPTER: TypeAdapter = TypeAdapter(Node)


def format_path(loc: Sequence[str | int], base: str = "$") -> str:
    """Format a pydantic location tuple as a JSON path below *base*."""
    parts = [base]
    for segment in loc:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        else:
            parts.append(f".{segment}")
    return "".join(parts)


def _raise_malformed(exc: ValidationError, base: str) -> None:
    errors = [
        {"path": format_path(e.get("loc", ()), base), "message": e.get("msg", "invalid"), "type": e.get("type")}
        for e in exc.errors()
    ]
    first = errors[0] if errors else {"path": base, "message": "invalid descriptor"}
    raise_error(malformed_descriptor(
        f"{first['message']} at {first['path']}",
        path=first["path"],
        errors=errors,
        origin="codec",
        cause=exc,
    ).error)


def parse_envelope(data: Any) -> SchemaEnvelope:
    """Check the envelope and every node below it.

    Raises:
        SerializationError: E2002 with the failing paths in ``metadata["errors"]``.
    """
    try:
        return SchemaEnvelope.model_validate(data)
    except ValidationError as exc:
        _raise_malformed(exc, "$")


def parse_node(data: Any, path: str = "$") -> PrimitiveNode | RegexpNode | ArrayNode | ObjectNode | ValidatorNode:
    try:
        return NODE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        _raise_malformed(exc, path)
