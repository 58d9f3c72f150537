# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared helpers for reading typed fields out of decoded JSON objects."""

from __future__ import annotations

import json
from typing import Any

from singerschema.codec.errors import ROOT_PATH, StructuralDecodeError, child_path

# ###############
# Public Interface
# ###############


def parse_json(text: str | bytes) -> Any:
    """Parse one JSON document, raising StructuralDecodeError on malformed input.

    ``NaN``, ``Infinity`` and ``-Infinity`` are not JSON and are rejected.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise StructuralDecodeError(
            f"invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        ) from exc
    except UnicodeDecodeError as exc:
        raise StructuralDecodeError(f"invalid JSON: {exc}") from exc
    except RecursionError:
        raise StructuralDecodeError("invalid JSON: nesting too deep") from None


def dump_json(obj: Any, indent: int | None = None, sort_keys: bool = False) -> str:
    """Serialize *obj*; compact separators are used when no indent is requested.

    Raises:
        ValueError: If *obj* holds a NaN or infinite float.
    """
    if indent is None:
        return json.dumps(obj, separators=(",", ":"), sort_keys=sort_keys, allow_nan=False)
    return json.dumps(obj, indent=indent, sort_keys=sort_keys, allow_nan=False)


def json_type_name(value: Any) -> str:
    """Return the JSON type name of a decoded value for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def require_object(value: Any, path: str = ROOT_PATH, what: str = "document") -> dict[str, Any]:
    """Return *value* if it is a JSON object, otherwise raise."""
    if not isinstance(value, dict):
        raise StructuralDecodeError(f"{what} must be a JSON object, got {json_type_name(value)}", path)
    return value


def require_field(obj: dict[str, Any], key: str, path: str) -> Any:
    """Extract a required field of any JSON type."""
    if key not in obj:
        raise StructuralDecodeError(f"missing required field '{key}'", path)
    return obj[key]


def require_string(obj: dict[str, Any], key: str, path: str) -> str:
    """Extract a required string field."""
    value = require_field(obj, key, path)
    if not isinstance(value, str):
        raise StructuralDecodeError(f"'{key}' must be a string, got {json_type_name(value)}", child_path(path, key))
    return value


def optional_string(obj: dict[str, Any], key: str, path: str) -> str | None:
    """Extract an optional string field; JSON null counts as absent."""
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise StructuralDecodeError(f"'{key}' must be a string, got {json_type_name(value)}", child_path(path, key))
    return value


def string_list(value: Any, key: str, path: str) -> tuple[str, ...]:
    """Validate that *value* is a JSON array of strings and return it as a tuple."""
    field_path = child_path(path, key)
    if not isinstance(value, list):
        raise StructuralDecodeError(f"'{key}' must be an array of strings, got {json_type_name(value)}", field_path)
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise StructuralDecodeError(
                f"'{key}' entries must be strings, got {json_type_name(item)}",
                child_path(field_path, index),
            )
    return tuple(value)


def optional_string_list(obj: dict[str, Any], key: str, path: str) -> tuple[str, ...] | None:
    """Extract an optional array-of-strings field; JSON null counts as absent."""
    value = obj.get(key)
    if value is None:
        return None
    return string_list(value, key, path)


# ################
# Implementation
# ################


def _reject_constant(name: str) -> Any:
    raise StructuralDecodeError(f"invalid JSON: {name} is not a valid JSON value")
