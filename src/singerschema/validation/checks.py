# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for decoded catalogs and schema messages.

Decoding never depends on these checks. They report relationships the codec
deliberately accepts, such as ``required`` names without a matching property
or metadata breadcrumbs pointing outside the stream schema.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from singerschema.model.catalog import Catalog, Stream
from singerschema.model.messages import SchemaMessage
from singerschema.model.types import ArrayType, ObjectType, SchemaNode

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A suspicious but structurally valid construct.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running consistency checks.

    Attributes:
        warnings: Issues found during validation.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """Return True if no warnings were found."""
        return len(self.warnings) == 0


def validate_catalog(catalog: Catalog) -> ValidationResult:
    """Run all consistency checks on a decoded catalog.

    Checks performed:

    1. **Duplicate stream ids**: more than one stream shares a ``tap_stream_id``.

    2. **Dangling required names**: an object schema lists a ``required`` name
       that is not one of its ``properties``.

    3. **Unresolved breadcrumbs**: a metadata breadcrumb does not address a
       location inside the stream's schema. Breadcrumbs are read as
       ``["properties", name, ...]`` steps, with ``"items"`` descending into
       arrays; the empty breadcrumb addresses the stream itself.

    Args:
        catalog: The catalog to check.

    Returns:
        A :class:`ValidationResult`; an empty result means no issues were found.
    """
    warnings: list[ValidationWarning] = []

    warnings.extend(_check_duplicate_stream_ids(catalog))
    for stream in catalog.streams:
        warnings.extend(_check_required_names(stream.json_schema.node, f"stream '{stream.tap_stream_id}'"))
        warnings.extend(_check_breadcrumbs(stream))

    return ValidationResult(warnings=warnings)


def validate_schema_message(message: SchemaMessage) -> ValidationResult:
    """Check that key and bookmark properties name top-level schema properties."""
    warnings: list[ValidationWarning] = []
    label = f"SCHEMA message for stream '{message.stream}'"
    node = message.json_schema.node

    warnings.extend(_check_required_names(node, label))
    warnings.extend(_check_property_names(node, message.key_properties, "key property", label))
    warnings.extend(_check_property_names(node, message.bookmark_properties or (), "bookmark property", label))

    return ValidationResult(warnings=warnings)


def resolve_breadcrumb(node: SchemaNode, breadcrumb: Sequence[str]) -> SchemaNode | None:
    """Return the schema node addressed by *breadcrumb*, or None if it does not resolve."""
    index = 0
    while index < len(breadcrumb):
        segment = breadcrumb[index]
        if segment == "properties" and isinstance(node, ObjectType) and index + 1 < len(breadcrumb):
            child = node.properties.get(breadcrumb[index + 1])
            if child is None:
                return None
            node = child
            index += 2
        elif segment == "items" and isinstance(node, ArrayType):
            node = node.items
            index += 1
        else:
            return None
    return node


# ################
# Implementation
# ################


def _check_duplicate_stream_ids(catalog: Catalog) -> list[ValidationWarning]:
    counts = Counter(stream.tap_stream_id for stream in catalog.streams)
    return [
        ValidationWarning(f"tap_stream_id '{stream_id}' is used by {count} streams")
        for stream_id, count in counts.items()
        if count > 1
    ]


def _walk_objects(node: SchemaNode, location: str) -> Iterator[tuple[ObjectType, str]]:
    """Yield every object node below (and including) *node* with a readable location."""
    if isinstance(node, ObjectType):
        yield node, location
        for name, child in node.properties.items():
            yield from _walk_objects(child, f"{location}.{name}")
    elif isinstance(node, ArrayType):
        yield from _walk_objects(node.items, f"{location}[]")


def _check_required_names(node: SchemaNode, label: str) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    for obj, location in _walk_objects(node, "$"):
        for name in obj.required or ():
            if name not in obj.properties:
                warnings.append(ValidationWarning(f"{label}: required name '{name}' at {location} has no property"))
    return warnings


def _check_breadcrumbs(stream: Stream) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    for entry in stream.metadata or ():
        if resolve_breadcrumb(stream.json_schema.node, entry.breadcrumb) is None:
            warnings.append(
                ValidationWarning(
                    f"stream '{stream.tap_stream_id}': breadcrumb {list(entry.breadcrumb)} "
                    "does not resolve in the stream schema"
                )
            )
    return warnings


def _check_property_names(
    node: SchemaNode, names: Sequence[str], role: str, label: str
) -> list[ValidationWarning]:
    if not names:
        return []
    if not isinstance(node, ObjectType):
        return [ValidationWarning(f"{label}: {role} names are declared but the schema is not an object")]
    return [
        ValidationWarning(f"{label}: {role} '{name}' is not a top-level property")
        for name in names
        if name not in node.properties
    ]
