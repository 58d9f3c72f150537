# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON codecs for schema nodes, messages, and catalogs."""

from singerschema.codec.catalog import (
    decode_catalog,
    decode_stream,
    dumps_catalog,
    encode_catalog,
    encode_stream,
    loads_catalog,
)
from singerschema.codec.errors import StructuralDecodeError, UnknownMessageType, UnrecognizedSchemaShape
from singerschema.codec.messages import decode_message, dumps_message, encode_message, loads_message
from singerschema.codec.schema import (
    decode_json_schema,
    decode_schema_node,
    dumps_schema,
    encode_json_schema,
    encode_schema_node,
    loads_schema,
)
from singerschema.codec.streams import (
    decode_lines,
    iter_messages,
    read_catalog,
    read_schema,
    write_catalog,
    write_messages,
)

__all__ = [
    "StructuralDecodeError",
    "UnrecognizedSchemaShape",
    "UnknownMessageType",
    "decode_schema_node",
    "encode_schema_node",
    "decode_json_schema",
    "encode_json_schema",
    "loads_schema",
    "dumps_schema",
    "decode_message",
    "encode_message",
    "loads_message",
    "dumps_message",
    "decode_catalog",
    "encode_catalog",
    "decode_stream",
    "encode_stream",
    "loads_catalog",
    "dumps_catalog",
    "decode_lines",
    "iter_messages",
    "write_messages",
    "read_catalog",
    "write_catalog",
    "read_schema",
]
