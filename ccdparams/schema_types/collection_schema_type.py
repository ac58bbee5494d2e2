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

from abc import ABC
from typing import ClassVar

from typing_extensions import Self, override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.schema_type import SchemaType, SizeLength, TypeTag, json_path
from ccdparams.serialization import Deserializer, Serializer
from ccdparams.serialization.encoding.int import decode_int, encode_int


def _expect_list(json_value: SchemaType.Json) -> list:
    if not isinstance(json_value, list):
        raise JsonParameterError('expected a JSON array', json_value)
    return json_value


class PairSchemaType(SchemaType):
    """ A pair of values, given as a 2 element array.
    """

    __slots__ = ('_left', '_right')

    _tag = TypeTag.PAIR

    _left: SchemaType
    _right: SchemaType

    def __init__(self, left: SchemaType, right: SchemaType) -> None:
        self._left = left
        self._right = right

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        left = SchemaType.deserialize(deserializer)
        right = SchemaType.deserialize(deserializer)
        return cls(left, right)

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        self._left.serialize(serializer)
        self._right.serialize(serializer)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        items = _expect_list(json_value)
        if len(items) != 2:
            raise JsonParameterError(f'expected a pair, got {len(items)} element(s)', json_value)
        with json_path(0):
            self._left.serialize_json(serializer, items[0])
        with json_path(1):
            self._right.serialize_json(serializer, items[1])

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {'type': 'pair', 'left': self._left.to_json_schema(), 'right': self._right.to_json_schema()}


class _SizedCollectionSchemaType(SchemaType, ABC):
    """ Base class for lists and sets: a length prefix followed by each item.
    """

    __slots__ = ('_size_length', '_item')

    # XXX: subclass must define this value:
    _json_name: ClassVar[str]

    _size_length: SizeLength
    _item: SchemaType

    def __init__(self, size_length: SizeLength, item: SchemaType) -> None:
        self._size_length = size_length
        self._item = item

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        size_length = SizeLength.deserialize(deserializer)
        item = SchemaType.deserialize(deserializer)
        return cls(size_length, item)

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        self._size_length.serialize(serializer)
        self._item.serialize(serializer)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        items = _expect_list(json_value)
        self._size_length.encode_length(serializer, len(items))
        for i, item in enumerate(items):
            with json_path(i):
                self._item.serialize_json(serializer, item)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {
            'type': self._json_name,
            'size_length': self._size_length.json_name,
            'item': self._item.to_json_schema(),
        }


class ListSchemaType(_SizedCollectionSchemaType):
    _tag = TypeTag.LIST
    _json_name = 'list'


class SetSchemaType(_SizedCollectionSchemaType):
    _tag = TypeTag.SET
    _json_name = 'set'


class MapSchemaType(SchemaType):
    """ A map, given as an array of `[key, value]` arrays and written as a length prefix followed by each pair.
    """

    __slots__ = ('_size_length', '_key', '_value')

    _tag = TypeTag.MAP

    _size_length: SizeLength
    _key: SchemaType
    _value: SchemaType

    def __init__(self, size_length: SizeLength, key: SchemaType, value: SchemaType) -> None:
        self._size_length = size_length
        self._key = key
        self._value = value

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        size_length = SizeLength.deserialize(deserializer)
        key = SchemaType.deserialize(deserializer)
        value = SchemaType.deserialize(deserializer)
        return cls(size_length, key, value)

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        self._size_length.serialize(serializer)
        self._key.serialize(serializer)
        self._value.serialize(serializer)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        entries = _expect_list(json_value)
        self._size_length.encode_length(serializer, len(entries))
        for i, entry in enumerate(entries):
            with json_path(i):
                if not isinstance(entry, list) or len(entry) != 2:
                    raise JsonParameterError('expected a [key, value] JSON array', entry)
                with json_path(0):
                    self._key.serialize_json(serializer, entry[0])
                with json_path(1):
                    self._value.serialize_json(serializer, entry[1])

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {
            'type': 'map',
            'size_length': self._size_length.json_name,
            'key': self._key.to_json_schema(),
            'value': self._value.to_json_schema(),
        }


class ArraySchemaType(SchemaType):
    """ A fixed number of items, given as an array and written without a length prefix.
    """

    __slots__ = ('_length', '_item')

    _tag = TypeTag.ARRAY

    _length: int
    _item: SchemaType

    def __init__(self, length: int, item: SchemaType) -> None:
        self._length = length
        self._item = item

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        length = decode_int(deserializer, length=4, signed=False)
        item = SchemaType.deserialize(deserializer)
        return cls(length, item)

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        encode_int(serializer, self._length, length=4, signed=False)
        self._item.serialize(serializer)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        items = _expect_list(json_value)
        if len(items) != self._length:
            raise JsonParameterError(f'expected exactly {self._length} element(s), got {len(items)}', json_value)
        for i, item in enumerate(items):
            with json_path(i):
                self._item.serialize_json(serializer, item)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {'type': 'array', 'length': self._length, 'item': self._item.to_json_schema()}
