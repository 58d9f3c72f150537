# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Message envelope variants exchanged between taps and targets."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from singerschema.model.types import JsonSchema

# ###############
# Public Interface
# ###############

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class SchemaMessage(BaseModel):
    """Announces the schema that subsequent records of a stream follow."""

    model_config = ConfigDict(frozen=True)

    type: Literal["SCHEMA"] = "SCHEMA"
    stream: str
    json_schema: JsonSchema
    key_properties: tuple[str, ...] = ()
    bookmark_properties: tuple[str, ...] | None = None


class RecordMessage(BaseModel):
    """A single data record for a stream."""

    model_config = ConfigDict(frozen=True)

    type: Literal["RECORD"] = "RECORD"
    stream: str
    record: Any
    time_extracted: str | None = None


class StateMessage(BaseModel):
    """An opaque sync position the tap can resume from."""

    model_config = ConfigDict(frozen=True)

    type: Literal["STATE"] = "STATE"
    value: Any


class ActivateVersionMessage(BaseModel):
    """Marks a newly loaded table version of a stream as the current one."""

    model_config = ConfigDict(frozen=True)

    type: Literal["ACTIVATE_VERSION"] = "ACTIVATE_VERSION"
    stream: str
    version: int = _Field(ge=INT64_MIN, le=INT64_MAX)


# A protocol message, discriminated by its upper-case `type` tag.
Message = Annotated[
    SchemaMessage | RecordMessage | StateMessage | ActivateVersionMessage,
    _Field(discriminator="type"),
]

MESSAGE_TYPES: tuple[str, ...] = ("SCHEMA", "RECORD", "STATE", "ACTIVATE_VERSION")
