# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised while decoding schema, message, and catalog documents."""

from __future__ import annotations

from typing import Any

# ###############
# Public Interface
# ###############

ROOT_PATH = "$"


class StructuralDecodeError(Exception):
    """Raised when a document is not valid JSON or does not match any supported shape.

    Decoding is terminal for the document: no partial value is produced.

    Attributes:
        path: JSON path of the offending value, ``$`` for the document root.
        line: 1-based line number when the document came from a line stream.
    """

    def __init__(self, message: str, path: str = ROOT_PATH, line: int | None = None) -> None:
        self.reason = message
        self.path = path
        self.line = line
        super().__init__(self._render())

    def at_line(self, line: int) -> StructuralDecodeError:
        """Attach a line number and return the error for re-raising."""
        self.line = line
        self.args = (self._render(),)
        return self

    def _render(self) -> str:
        text = f"{self.path}: {self.reason}"
        if self.line is not None:
            text = f"Line {self.line}, {text}"
        return text


class UnrecognizedSchemaShape(StructuralDecodeError):
    """Raised when a schema node matches none of the supported shapes."""


class UnknownMessageType(StructuralDecodeError):
    """Raised when a message carries a ``type`` tag outside the known vocabulary.

    Attributes:
        message_type: The offending tag value, as decoded from JSON.
    """

    def __init__(self, message_type: Any, path: str = ROOT_PATH) -> None:
        self.message_type = message_type
        super().__init__(f"unknown message type {message_type!r}", path)


def child_path(path: str, key: str | int) -> str:
    """Return the JSON path of *key* below *path*."""
    if isinstance(key, int):
        return f"{path}[{key}]"
    if key.isidentifier():
        return f"{path}.{key}"
    return f"{path}[{key!r}]"
