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

from typing import ClassVar

from typing_extensions import Self, override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.schema_type import SchemaType, TypeTag
from ccdparams.schema_types.sized_int_schema_type import parse_decimal_string
from ccdparams.serialization import Deserializer, Serializer, TooLongError
from ccdparams.serialization.encoding.int import decode_int, encode_int
from ccdparams.serialization.encoding.leb128 import encode_leb128


class _Leb128SchemaType(SchemaType):
    """ Base class for variable-length integers, the schema constrains how many bytes the encoding can take.

    Values are given as decimal strings, since they can be arbitrarily large.
    """

    __slots__ = ('_max_bytes',)

    # XXX: subclass must define these values:
    _signed: ClassVar[bool]
    _json_name: ClassVar[str]

    _max_bytes: int

    def __init__(self, max_bytes: int) -> None:
        self._max_bytes = max_bytes

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        return cls(decode_int(deserializer, length=4, signed=False))

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        encode_int(serializer, self._max_bytes, length=4, signed=False)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        value = parse_decimal_string(json_value)
        if not self._signed and value < 0:
            raise JsonParameterError(f'{value} is negative, expected an unsigned integer', json_value)
        try:
            encode_leb128(serializer, value, signed=self._signed, max_bytes=self._max_bytes)
        except TooLongError:
            raise JsonParameterError(f'{value} does not fit in {self._max_bytes} LEB128 byte(s)', json_value)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {'type': self._json_name, 'max_bytes': self._max_bytes}


class ULeb128SchemaType(_Leb128SchemaType):
    _tag = TypeTag.ULEB128
    _json_name = 'uleb128'
    _signed = False


class ILeb128SchemaType(_Leb128SchemaType):
    _tag = TypeTag.ILEB128
    _json_name = 'ileb128'
    _signed = True
