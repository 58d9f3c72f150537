# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decoding and encoding of JSON Schema nodes.

The ``type`` keyword has no discriminant: it may be a bare string, a one- or
two-element list, optionally paired with a ``format``. Nodes are decoded by
trying a fixed, ranked table of shapes from most to least specific. The first
shape whose structure and vocabulary both fit wins; no later shape is tried.
Format-qualified shapes rank above their unqualified look-alikes so that
``{"type": ["null", "string"], "format": "date"}`` is never read as a plain
primitive pair.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from singerschema.codec.errors import ROOT_PATH, StructuralDecodeError, UnrecognizedSchemaShape, child_path
from singerschema.codec.fields import dump_json, json_type_name, optional_string, parse_json, string_list
from singerschema.model.types import (
    ArrayType,
    EmptyType,
    Format,
    FormattedType,
    FormatToken,
    JsonSchema,
    ObjectType,
    Primitive,
    PrimitiveSetType,
    PrimitiveType,
    SchemaNode,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def decode_schema_node(obj: Any, path: str = ROOT_PATH) -> SchemaNode:
    """Decode one schema node by ranked shape matching.

    Args:
        obj: A decoded JSON value (normally a dict).
        path: JSON path of *obj*, used in error messages.

    Returns:
        The first :data:`SchemaNode` shape that matches *obj*.

    Raises:
        UnrecognizedSchemaShape: If *obj* is not a JSON object or no shape matches.
        StructuralDecodeError: If a matched compound shape has a malformed child,
            or if the nesting is deeper than the interpreter can recurse.
    """
    try:
        return _decode_node(obj, path)
    except RecursionError:
        raise StructuralDecodeError("schema nesting too deep", path) from None


def encode_schema_node(node: SchemaNode) -> dict[str, Any]:
    """Encode a schema node back into its JSON object form."""
    if isinstance(node, PrimitiveType):
        return {"type": node.primitive.value}
    if isinstance(node, PrimitiveSetType):
        return {"type": [p.value for p in node.types]}
    if isinstance(node, FormattedType):
        return {"type": [t.value for t in node.types], "format": node.format.value}
    if isinstance(node, ArrayType):
        return {"type": "array", "items": encode_schema_node(node.items)}
    if isinstance(node, ObjectType):
        d: dict[str, Any] = {
            "type": "object",
            "properties": {name: encode_schema_node(child) for name, child in node.properties.items()},
        }
        if node.required is not None:
            d["required"] = list(node.required)
        if node.additional_properties is not None:
            d["additionalProperties"] = node.additional_properties
        return d
    # EmptyType is the only remaining variant.
    assert isinstance(node, EmptyType)
    return {}


def decode_json_schema(obj: Any, path: str = ROOT_PATH) -> JsonSchema:
    """Decode a schema node together with its optional ``title`` and ``description``."""
    node = decode_schema_node(obj, path)
    return JsonSchema(
        node=node,
        title=optional_string(obj, "title", path),
        description=optional_string(obj, "description", path),
    )


def encode_json_schema(schema: JsonSchema) -> dict[str, Any]:
    """Encode a JsonSchema, omitting absent ``title`` and ``description``."""
    d: dict[str, Any] = {}
    if schema.title is not None:
        d["title"] = schema.title
    if schema.description is not None:
        d["description"] = schema.description
    d.update(encode_schema_node(schema.node))
    return d


def loads_schema(text: str | bytes) -> JsonSchema:
    """Decode a JsonSchema from JSON text."""
    return decode_json_schema(parse_json(text))


def dumps_schema(schema: JsonSchema, indent: int | None = None, sort_keys: bool = False) -> str:
    """Encode a JsonSchema as JSON text."""
    return dump_json(encode_json_schema(schema), indent=indent, sort_keys=sort_keys)


# ################
# Implementation
# ################

_E = TypeVar("_E", bound=Enum)


@dataclass(frozen=True)
class _ShapeRule:
    """One candidate shape: a guard over the node's own fields and its builder."""

    name: str
    matches: Callable[[dict[str, Any]], bool]
    build: Callable[[dict[str, Any], str], SchemaNode]


def _member(value: Any, vocabulary: type[_E]) -> _E | None:
    """Return the vocabulary member named by *value*, or None."""
    if not isinstance(value, str):
        return None
    try:
        return vocabulary(value)
    except ValueError:
        return None


def _members(value: Any, vocabulary: type[_E], length: int) -> tuple[_E, ...] | None:
    """Return the members of a list of exactly *length* vocabulary names, or None."""
    if not isinstance(value, list) or len(value) != length:
        return None
    members = tuple(_member(item, vocabulary) for item in value)
    if any(m is None for m in members):
        return None
    return members  # type: ignore[return-value]


def _decode_node(obj: Any, path: str) -> SchemaNode:
    if not isinstance(obj, dict):
        raise UnrecognizedSchemaShape(f"schema node must be a JSON object, got {json_type_name(obj)}", path)
    for rule in _SHAPE_RULES:
        if rule.matches(obj):
            if rule.name == "empty" and "type" in obj:
                logger.debug("%s: type %r is not modeled, decoding as empty schema", path, obj["type"])
            else:
                logger.debug("%s: matched shape %r", path, rule.name)
            return rule.build(obj, path)
    raise UnrecognizedSchemaShape("no supported schema shape matches", path)


def _format_of(obj: dict[str, Any]) -> Format | None:
    return _member(obj.get("format"), Format)


def _formatted_list(length: int) -> _ShapeRule:
    def matches(obj: dict[str, Any]) -> bool:
        return _format_of(obj) is not None and _members(obj.get("type"), FormatToken, length) is not None

    def build(obj: dict[str, Any], path: str) -> SchemaNode:
        return FormattedType(types=_members(obj["type"], FormatToken, length), format=_format_of(obj))

    return _ShapeRule("formatted_pair" if length == 2 else "formatted_single", matches, build)


def _formatted_bare() -> _ShapeRule:
    def matches(obj: dict[str, Any]) -> bool:
        return _format_of(obj) is not None and _member(obj.get("type"), FormatToken) is not None

    def build(obj: dict[str, Any], path: str) -> SchemaNode:
        return FormattedType(types=(_member(obj["type"], FormatToken),), format=_format_of(obj))

    return _ShapeRule("formatted_bare", matches, build)


def _primitive_list(length: int) -> _ShapeRule:
    def matches(obj: dict[str, Any]) -> bool:
        return _members(obj.get("type"), Primitive, length) is not None

    def build(obj: dict[str, Any], path: str) -> SchemaNode:
        return PrimitiveSetType(types=_members(obj["type"], Primitive, length))

    return _ShapeRule("primitive_pair" if length == 2 else "primitive_single", matches, build)


def _primitive_bare() -> _ShapeRule:
    def matches(obj: dict[str, Any]) -> bool:
        return _member(obj.get("type"), Primitive) is not None

    def build(obj: dict[str, Any], path: str) -> SchemaNode:
        return PrimitiveType(primitive=_member(obj["type"], Primitive))

    return _ShapeRule("primitive", matches, build)


def _build_array(obj: dict[str, Any], path: str) -> SchemaNode:
    return ArrayType(items=_decode_node(obj["items"], child_path(path, "items")))


def _build_object(obj: dict[str, Any], path: str) -> SchemaNode:
    properties_path = child_path(path, "properties")
    raw_properties = obj["properties"]
    if not isinstance(raw_properties, dict):
        raise StructuralDecodeError(
            f"'properties' must be a JSON object, got {json_type_name(raw_properties)}", properties_path
        )
    properties = {
        name: _decode_node(child, child_path(properties_path, name)) for name, child in raw_properties.items()
    }

    required = None
    if obj.get("required") is not None:
        required = string_list(obj["required"], "required", path)

    additional = obj.get("additionalProperties")
    if additional is not None and not isinstance(additional, bool):
        raise StructuralDecodeError(
            f"'additionalProperties' must be a boolean, got {json_type_name(additional)}",
            child_path(path, "additionalProperties"),
        )

    return ObjectType(properties=properties, required=required, additional_properties=additional)


# Ranked most to least specific. The order is part of the decoding contract.
_SHAPE_RULES: tuple[_ShapeRule, ...] = (
    _formatted_list(2),
    _formatted_list(1),
    _formatted_bare(),
    _primitive_list(2),
    _primitive_list(1),
    _primitive_bare(),
    _ShapeRule("array", lambda obj: obj.get("type") == "array" and "items" in obj, _build_array),
    _ShapeRule("object", lambda obj: obj.get("type") == "object" and "properties" in obj, _build_object),
    _ShapeRule("empty", lambda obj: True, lambda obj, path: EmptyType()),
)
