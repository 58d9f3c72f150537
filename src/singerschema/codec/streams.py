# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Newline-delimited message framing and file helpers.

Each non-blank line of a message stream holds exactly one JSON message.
Catalogs and schemas are stored as single JSON documents.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from singerschema.codec.catalog import dumps_catalog, loads_catalog
from singerschema.codec.errors import StructuralDecodeError
from singerschema.codec.messages import dumps_message, loads_message
from singerschema.codec.schema import loads_schema
from singerschema.model.catalog import Catalog
from singerschema.model.messages import Message
from singerschema.model.types import JsonSchema

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def decode_lines(lines: Iterable[str]) -> Iterator[tuple[int, Message | StructuralDecodeError]]:
    """Decode each non-blank line independently.

    Yields ``(line_number, result)`` pairs, where *result* is either the
    decoded message or the error that terminated decoding of that line.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield line_number, loads_message(line)
        except StructuralDecodeError as exc:
            logger.debug("line %d rejected: %s", line_number, exc.reason)
            yield line_number, exc.at_line(line_number)


def iter_messages(lines: Iterable[str]) -> Iterator[Message]:
    """Decode messages line by line, stopping at the first malformed line.

    Raises:
        StructuralDecodeError: With ``line`` set to the failing 1-based line number.
    """
    for _, result in decode_lines(lines):
        if isinstance(result, StructuralDecodeError):
            raise result
        yield result


def write_messages(messages: Iterable[Message], out: TextIO) -> int:
    """Write one compact JSON line per message and return the number written."""
    count = 0
    for message in messages:
        out.write(dumps_message(message))
        out.write("\n")
        count += 1
    return count


def read_catalog(path: Path) -> Catalog:
    """Read and decode a catalog file; bytes that are not valid UTF-8 raise StructuralDecodeError."""
    return loads_catalog(path.read_bytes())


def write_catalog(catalog: Catalog, path: Path, indent: int | None = 2) -> None:
    """Write a catalog to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_catalog(catalog, indent=indent), encoding="utf-8")


def read_schema(path: Path) -> JsonSchema:
    """Read and decode a standalone schema file; bytes that are not valid UTF-8 raise StructuralDecodeError."""
    return loads_schema(path.read_bytes())
