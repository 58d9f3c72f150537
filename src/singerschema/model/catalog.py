# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Catalog of streams and their schema metadata."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from singerschema.model.types import JsonSchema

# ###############
# Public Interface
# ###############


class MetadataEntry(BaseModel):
    """An annotation attached to the schema location named by ``breadcrumb``.

    An empty breadcrumb addresses the stream itself.
    """

    model_config = ConfigDict(frozen=True)

    metadata: Any
    breadcrumb: tuple[str, ...] = ()


class Stream(BaseModel):
    """A stream entry: identifiers, schema, and optional metadata."""

    model_config = ConfigDict(frozen=True)

    stream: str
    tap_stream_id: str
    json_schema: JsonSchema
    table_name: str | None = None
    metadata: tuple[MetadataEntry, ...] | None = None

    def metadata_map(self) -> dict[tuple[str, ...], Any]:
        """Return metadata keyed by breadcrumb; later entries override earlier ones."""
        return {entry.breadcrumb: entry.metadata for entry in self.metadata or ()}


class Catalog(BaseModel):
    """Ordered collection of streams. Order carries no meaning."""

    model_config = ConfigDict(frozen=True)

    streams: tuple[Stream, ...] = _Field(default_factory=tuple)

    def get_stream(self, tap_stream_id: str) -> Stream | None:
        """Return the first stream with the given tap stream id, or None."""
        for stream in self.streams:
            if stream.tap_stream_id == tap_stream_id:
                return stream
        return None
