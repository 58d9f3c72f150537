# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decoding and encoding of tagged protocol messages."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from singerschema.codec.errors import ROOT_PATH, StructuralDecodeError, UnknownMessageType, child_path
from singerschema.codec.fields import (
    dump_json,
    json_type_name,
    optional_string,
    optional_string_list,
    parse_json,
    require_field,
    require_object,
    require_string,
    string_list,
)
from singerschema.codec.schema import decode_json_schema, encode_json_schema
from singerschema.model.messages import (
    INT64_MAX,
    INT64_MIN,
    ActivateVersionMessage,
    Message,
    RecordMessage,
    SchemaMessage,
    StateMessage,
)

# ###############
# Public Interface
# ###############

TAG_FIELD = "type"


def decode_message(obj: Any, path: str = ROOT_PATH) -> Message:
    """Decode a message by dispatching on its ``type`` tag.

    Raises:
        UnknownMessageType: If the tag is present but is not one of the known
            message type names, including a tag that is not a string at all.
        StructuralDecodeError: If the tag is missing or a variant field is malformed.
    """
    obj = require_object(obj, path, what="message")
    tag = require_field(obj, TAG_FIELD, path)
    decoder = _DECODERS.get(tag) if isinstance(tag, str) else None
    if decoder is None:
        raise UnknownMessageType(tag, child_path(path, TAG_FIELD))
    return decoder(obj, path)


def encode_message(message: Message) -> dict[str, Any]:
    """Encode a message, re-inserting its tag and omitting absent optional fields."""
    if isinstance(message, SchemaMessage):
        d: dict[str, Any] = {
            TAG_FIELD: message.type,
            "stream": message.stream,
            "schema": encode_json_schema(message.json_schema),
            "key_properties": list(message.key_properties),
        }
        if message.bookmark_properties is not None:
            d["bookmark_properties"] = list(message.bookmark_properties)
        return d
    if isinstance(message, RecordMessage):
        d = {TAG_FIELD: message.type, "stream": message.stream, "record": message.record}
        if message.time_extracted is not None:
            d["time_extracted"] = message.time_extracted
        return d
    if isinstance(message, StateMessage):
        return {TAG_FIELD: message.type, "value": message.value}
    # ActivateVersionMessage is the only remaining variant.
    assert isinstance(message, ActivateVersionMessage)
    return {TAG_FIELD: message.type, "stream": message.stream, "version": message.version}


def loads_message(text: str | bytes) -> Message:
    """Decode a message from one JSON document."""
    return decode_message(parse_json(text))


def dumps_message(message: Message, sort_keys: bool = False) -> str:
    """Encode a message as a single line of compact JSON."""
    return dump_json(encode_message(message), sort_keys=sort_keys)


# ################
# Implementation
# ################


def _schema_from_dict(obj: dict[str, Any], path: str) -> SchemaMessage:
    return SchemaMessage(
        stream=require_string(obj, "stream", path),
        json_schema=decode_json_schema(require_field(obj, "schema", path), child_path(path, "schema")),
        key_properties=string_list(require_field(obj, "key_properties", path), "key_properties", path),
        bookmark_properties=optional_string_list(obj, "bookmark_properties", path),
    )


def _record_from_dict(obj: dict[str, Any], path: str) -> RecordMessage:
    return RecordMessage(
        stream=require_string(obj, "stream", path),
        record=require_field(obj, "record", path),
        time_extracted=optional_string(obj, "time_extracted", path),
    )


def _state_from_dict(obj: dict[str, Any], path: str) -> StateMessage:
    return StateMessage(value=require_field(obj, "value", path))


def _activate_version_from_dict(obj: dict[str, Any], path: str) -> ActivateVersionMessage:
    version = require_field(obj, "version", path)
    # bool is an int subclass; JSON true/false must not pass as a version.
    if isinstance(version, bool) or not isinstance(version, int):
        raise StructuralDecodeError(
            f"'version' must be an integer, got {json_type_name(version)}", child_path(path, "version")
        )
    if not INT64_MIN <= version <= INT64_MAX:
        raise StructuralDecodeError(f"'version' {version} is outside the 64-bit range", child_path(path, "version"))
    return ActivateVersionMessage(stream=require_string(obj, "stream", path), version=version)


_DECODERS: dict[str, Callable[[dict[str, Any], str], Message]] = {
    "SCHEMA": _schema_from_dict,
    "RECORD": _record_from_dict,
    "STATE": _state_from_dict,
    "ACTIVATE_VERSION": _activate_version_from_dict,
}
