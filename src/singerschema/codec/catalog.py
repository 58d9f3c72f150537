# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decoding and encoding of stream catalogs.

A catalog is read as-is: duplicate stream ids or breadcrumbs that point
outside a stream's schema are accepted here and reported, if at all, by
:mod:`singerschema.validation.checks`.
"""

from __future__ import annotations

from typing import Any

from singerschema.codec.errors import ROOT_PATH, StructuralDecodeError, child_path
from singerschema.codec.fields import (
    dump_json,
    json_type_name,
    optional_string,
    parse_json,
    require_field,
    require_object,
    require_string,
    string_list,
)
from singerschema.codec.schema import decode_json_schema, encode_json_schema
from singerschema.model.catalog import Catalog, MetadataEntry, Stream

# ###############
# Public Interface
# ###############


def decode_catalog(obj: Any, path: str = ROOT_PATH) -> Catalog:
    """Decode a ``{"streams": [...]}`` catalog document, preserving stream order."""
    obj = require_object(obj, path, what="catalog")
    streams_path = child_path(path, "streams")
    raw_streams = require_field(obj, "streams", path)
    if not isinstance(raw_streams, list):
        raise StructuralDecodeError(f"'streams' must be an array, got {json_type_name(raw_streams)}", streams_path)
    return Catalog(streams=tuple(decode_stream(s, child_path(streams_path, i)) for i, s in enumerate(raw_streams)))


def encode_catalog(catalog: Catalog) -> dict[str, Any]:
    """Encode a catalog document."""
    return {"streams": [encode_stream(s) for s in catalog.streams]}


def decode_stream(obj: Any, path: str = ROOT_PATH) -> Stream:
    """Decode a single catalog stream entry."""
    obj = require_object(obj, path, what="stream")
    metadata = None
    if obj.get("metadata") is not None:
        metadata = _metadata_from_list(obj["metadata"], child_path(path, "metadata"))
    return Stream(
        stream=require_string(obj, "stream", path),
        tap_stream_id=require_string(obj, "tap_stream_id", path),
        json_schema=decode_json_schema(require_field(obj, "schema", path), child_path(path, "schema")),
        table_name=optional_string(obj, "table_name", path),
        metadata=metadata,
    )


def encode_stream(stream: Stream) -> dict[str, Any]:
    """Encode a catalog stream entry, omitting absent optional fields."""
    d: dict[str, Any] = {
        "stream": stream.stream,
        "tap_stream_id": stream.tap_stream_id,
        "schema": encode_json_schema(stream.json_schema),
    }
    if stream.table_name is not None:
        d["table_name"] = stream.table_name
    if stream.metadata is not None:
        d["metadata"] = [_metadata_to_dict(m) for m in stream.metadata]
    return d


def loads_catalog(text: str | bytes) -> Catalog:
    """Decode a catalog from JSON text."""
    return decode_catalog(parse_json(text))


def dumps_catalog(catalog: Catalog, indent: int | None = None, sort_keys: bool = False) -> str:
    """Encode a catalog as JSON text."""
    return dump_json(encode_catalog(catalog), indent=indent, sort_keys=sort_keys)


# ################
# Implementation
# ################


def _metadata_from_list(value: Any, path: str) -> tuple[MetadataEntry, ...]:
    if not isinstance(value, list):
        raise StructuralDecodeError(f"'metadata' must be an array, got {json_type_name(value)}", path)
    return tuple(_metadata_from_dict(entry, child_path(path, i)) for i, entry in enumerate(value))


def _metadata_from_dict(obj: Any, path: str) -> MetadataEntry:
    obj = require_object(obj, path, what="metadata entry")
    return MetadataEntry(
        metadata=require_field(obj, "metadata", path),
        breadcrumb=string_list(require_field(obj, "breadcrumb", path), "breadcrumb", path),
    )


def _metadata_to_dict(entry: MetadataEntry) -> dict[str, Any]:
    return {"metadata": entry.metadata, "breadcrumb": list(entry.breadcrumb)}
