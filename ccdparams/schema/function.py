# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Entry points of a contract schema from version 1 onwards are described by a function schema, which may carry the type
of its parameter, of its return value and (from version 2) of its error.

A FunctionV1 starts with a tag byte:

- 0: parameter only
- 1: return value only
- 2: parameter then return value

A FunctionV2 starts with a tag byte that tells which types follow, always in the order parameter, return value, error:

- 0: p, 1: r, 2: p r, 3: e, 4: p e, 5: r e, 6: p r e, 7: nothing
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ccdparams.schema_types import SchemaType
from ccdparams.serialization import BadDataError, Deserializer, Serializer
from ccdparams.serialization.encoding.int import decode_int, encode_int

FUNCTION_V1_TAGS: dict[int, tuple[bool, bool]] = {
    0: (True, False),
    1: (False, True),
    2: (True, True),
}

FUNCTION_V2_TAGS: dict[int, tuple[bool, bool, bool]] = {
    0: (True, False, False),
    1: (False, True, False),
    2: (True, True, False),
    3: (False, False, True),
    4: (True, False, True),
    5: (False, True, True),
    6: (True, True, True),
    7: (False, False, False),
}


def _read_present(deserializer: Deserializer, present: bool) -> Optional[SchemaType]:
    return SchemaType.deserialize(deserializer) if present else None


def _write_present(serializer: Serializer, schema_type: Optional[SchemaType]) -> None:
    if schema_type is not None:
        schema_type.serialize(serializer)


def _types_to_json(**types: Optional[SchemaType]) -> dict[str, SchemaType.Json]:
    return {key: schema_type.to_json_schema() for key, schema_type in types.items() if schema_type is not None}


@dataclass(slots=True, frozen=True)
class FunctionV1:
    parameter: Optional[SchemaType] = None
    return_value: Optional[SchemaType] = None

    def __post_init__(self) -> None:
        if self.parameter is None and self.return_value is None:
            raise ValueError('a FunctionV1 needs a parameter or a return value')

    @classmethod
    def deserialize(cls, deserializer: Deserializer) -> FunctionV1:
        tag = decode_int(deserializer, length=1, signed=False)
        if tag not in FUNCTION_V1_TAGS:
            raise BadDataError(f'invalid function tag: {tag}')
        has_parameter, has_return_value = FUNCTION_V1_TAGS[tag]
        parameter = _read_present(deserializer, has_parameter)
        return_value = _read_present(deserializer, has_return_value)
        return cls(parameter=parameter, return_value=return_value)

    def serialize(self, serializer: Serializer) -> None:
        present = (self.parameter is not None, self.return_value is not None)
        tag, = (tag for tag, flags in FUNCTION_V1_TAGS.items() if flags == present)
        encode_int(serializer, tag, length=1, signed=False)
        _write_present(serializer, self.parameter)
        _write_present(serializer, self.return_value)

    def to_json(self) -> dict[str, SchemaType.Json]:
        return _types_to_json(parameter=self.parameter, returnValue=self.return_value)


@dataclass(slots=True, frozen=True)
class FunctionV2:
    parameter: Optional[SchemaType] = None
    return_value: Optional[SchemaType] = None
    error: Optional[SchemaType] = None

    @classmethod
    def deserialize(cls, deserializer: Deserializer) -> FunctionV2:
        tag = decode_int(deserializer, length=1, signed=False)
        if tag not in FUNCTION_V2_TAGS:
            raise BadDataError(f'invalid function tag: {tag}')
        has_parameter, has_return_value, has_error = FUNCTION_V2_TAGS[tag]
        parameter = _read_present(deserializer, has_parameter)
        return_value = _read_present(deserializer, has_return_value)
        error = _read_present(deserializer, has_error)
        return cls(parameter=parameter, return_value=return_value, error=error)

    def serialize(self, serializer: Serializer) -> None:
        present = (self.parameter is not None, self.return_value is not None, self.error is not None)
        tag, = (tag for tag, flags in FUNCTION_V2_TAGS.items() if flags == present)
        encode_int(serializer, tag, length=1, signed=False)
        _write_present(serializer, self.parameter)
        _write_present(serializer, self.return_value)
        _write_present(serializer, self.error)

    def to_json(self) -> dict[str, SchemaType.Json]:
        return _types_to_json(parameter=self.parameter, returnValue=self.return_value, error=self.error)
