# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value model for schemas, messages, and catalogs."""

from singerschema.model.catalog import Catalog, MetadataEntry, Stream
from singerschema.model.messages import (
    MESSAGE_TYPES,
    ActivateVersionMessage,
    Message,
    RecordMessage,
    SchemaMessage,
    StateMessage,
)
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
    PropertyMap,
    SchemaNode,
)

__all__ = [
    # Schema nodes
    "Primitive",
    "FormatToken",
    "Format",
    "PrimitiveType",
    "PrimitiveSetType",
    "FormattedType",
    "ArrayType",
    "ObjectType",
    "PropertyMap",
    "EmptyType",
    "SchemaNode",
    "JsonSchema",
    # Messages
    "MESSAGE_TYPES",
    "SchemaMessage",
    "RecordMessage",
    "StateMessage",
    "ActivateVersionMessage",
    "Message",
    # Catalog
    "MetadataEntry",
    "Stream",
    "Catalog",
]
