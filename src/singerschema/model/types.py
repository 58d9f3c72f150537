# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema node representations for the supported JSON Schema subset."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Primitive(Enum):
    """Primitive type names accepted in the ``type`` keyword."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"


class FormatToken(Enum):
    """Primitive names that may carry a ``format`` annotation."""

    NULL = "null"
    STRING = "string"


class Format(Enum):
    """Date and time formats recognised alongside a :class:`FormatToken`."""

    DATE = "date"
    TIME = "time"
    DATE_TIME = "date-time"


class PrimitiveType(BaseModel):
    """A bare scalar type, e.g. ``{"type": "integer"}``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    primitive: Primitive


class PrimitiveSetType(BaseModel):
    """A list-valued type, e.g. ``{"type": ["integer", "null"]}``.

    The order of ``types`` is significant and preserved through encoding.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive_set"] = "primitive_set"
    types: tuple[Primitive] | tuple[Primitive, Primitive]


class FormattedType(BaseModel):
    """A date/time annotated type, e.g. ``{"type": ["null", "string"], "format": "date"}``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["formatted"] = "formatted"
    types: tuple[FormatToken] | tuple[FormatToken, FormatToken]
    format: Format


class ArrayType(BaseModel):
    """An array whose elements all share one item schema."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    items: SchemaNode


class PropertyMap(Mapping[str, "SchemaNode"]):
    """Read-only mapping of property names to schema nodes.

    Keeps the insertion order for iteration, compares equal to any mapping
    with the same items regardless of order, and is hashable so the models
    holding it stay hashable.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, SchemaNode] | None = None) -> None:
        self._items: dict[str, SchemaNode] = dict(items or {})

    def __getitem__(self, name: str) -> SchemaNode:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(frozenset(self._items.items()))

    def __repr__(self) -> str:
        return f"PropertyMap({self._items!r})"


class ObjectType(BaseModel):
    """An object with named properties.

    ``properties`` accepts any mapping and is stored as a :class:`PropertyMap`.
    ``required`` is stored as written; it is not checked against ``properties``.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["object"] = "object"
    properties: Annotated[Mapping[str, SchemaNode], AfterValidator(PropertyMap)] = _Field(default_factory=PropertyMap)
    required: tuple[str, ...] | None = None
    additional_properties: bool | None = None


class EmptyType(BaseModel):
    """A node without recognised constraints, e.g. ``{}``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"


# A schema node: one of the scalar, annotated, container, or empty shapes.
# The `kind` discriminator exists only in memory; the wire format has no tag.
SchemaNode = Annotated[
    PrimitiveType | PrimitiveSetType | FormattedType | ArrayType | ObjectType | EmptyType,
    _Field(discriminator="kind"),
]


class JsonSchema(BaseModel):
    """A schema node together with its optional title and description."""

    model_config = ConfigDict(frozen=True)

    node: SchemaNode
    title: str | None = None
    description: str | None = None


# Resolve forward references for models that use SchemaNode.
ArrayType.model_rebuild()
ObjectType.model_rebuild()
JsonSchema.model_rebuild()
