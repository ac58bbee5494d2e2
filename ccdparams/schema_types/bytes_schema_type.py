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

from __future__ import annotations

import re

from typing_extensions import Self, override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.schema_type import SchemaType, SizeLength, TypeTag
from ccdparams.serialization import Deserializer, Serializer
from ccdparams.serialization.encoding.int import decode_int, encode_int

# bytes.fromhex alone also skips whitespace between the bytes
_HEX_RE = re.compile(r'(?:[0-9a-fA-F]{2})*')


def _hex_to_bytes(json_value: SchemaType.Json) -> bytes:
    if not isinstance(json_value, str):
        raise JsonParameterError('expected a JSON string with hex encoded bytes', json_value)
    if not _HEX_RE.fullmatch(json_value):
        raise JsonParameterError(f'{json_value!r} is not valid hex', json_value)
    return bytes.fromhex(json_value)


class ByteListSchemaType(SchemaType):
    """ A byte sequence, given as a hex string and written with a length prefix.
    """

    __slots__ = ('_size_length',)

    _tag = TypeTag.BYTE_LIST

    _size_length: SizeLength

    def __init__(self, size_length: SizeLength) -> None:
        self._size_length = size_length

    @property
    def size_length(self) -> SizeLength:
        return self._size_length

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        return cls(SizeLength.deserialize(deserializer))

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        self._size_length.serialize(serializer)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        data = _hex_to_bytes(json_value)
        self._size_length.encode_length(serializer, len(data))
        serializer.write_bytes(data, max_bytes=None)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {'type': 'byte_list', 'size_length': self._size_length.json_name}


class ByteArraySchemaType(SchemaType):
    """ A byte sequence of a size fixed by the schema, given as a hex string and written without a length prefix.
    """

    __slots__ = ('_length',)

    _tag = TypeTag.BYTE_ARRAY

    _length: int

    def __init__(self, length: int) -> None:
        self._length = length

    @property
    def length(self) -> int:
        return self._length

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        return cls(decode_int(deserializer, length=4, signed=False))

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        encode_int(serializer, self._length, length=4, signed=False)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        data = _hex_to_bytes(json_value)
        if len(data) != self._length:
            raise JsonParameterError(f'expected exactly {self._length} bytes, got {len(data)}', json_value)
        serializer.write_bytes(data, max_bytes=None)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {'type': 'byte_array', 'length': self._length}
