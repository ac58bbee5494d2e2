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
Fields are the payload of a struct or of an enum variant. They come in three shapes:

- named: `{"name": value, ...}`, every name in the schema must be present and no other
- unnamed: `[value, ...]`, exactly as many values as the schema has
- none: no payload, whatever JSON is given is ignored

In a schema they are described by a tag byte followed by a u32 count and the types (preceded by their names for named
fields).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, unique
from typing import Iterable

from typing_extensions import override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.schema_type import SchemaType, json_path
from ccdparams.serialization import BadDataError, Deserializer, Serializer
from ccdparams.serialization.compound_encoding.collection import decode_collection, encode_collection
from ccdparams.serialization.encoding.int import decode_int, encode_int
from ccdparams.serialization.encoding.utf8 import decode_utf8, encode_utf8


@unique
class FieldsTag(IntEnum):
    NAMED = 0
    UNNAMED = 1
    NONE = 2


def _encode_named_field(serializer: Serializer, field: tuple[str, SchemaType], /) -> None:
    name, schema_type = field
    encode_utf8(serializer, name)
    schema_type.serialize(serializer)


def _decode_named_field(deserializer: Deserializer, /) -> tuple[str, SchemaType]:
    name = decode_utf8(deserializer)
    return name, SchemaType.deserialize(deserializer)


class Fields(ABC):
    __slots__ = ()

    @staticmethod
    def deserialize(deserializer: Deserializer) -> Fields:
        raw_tag = decode_int(deserializer, length=1, signed=False)
        match raw_tag:
            case FieldsTag.NAMED:
                return NamedFields(decode_collection(deserializer, _decode_named_field, list))
            case FieldsTag.UNNAMED:
                return UnnamedFields(decode_collection(deserializer, SchemaType.deserialize, list))
            case FieldsTag.NONE:
                return NoFields()
            case _:
                raise BadDataError(f'unknown fields tag: {raw_tag}')

    @abstractmethod
    def serialize(self, serializer: Serializer) -> None:
        raise NotImplementedError

    @abstractmethod
    def serialize_json(self, serializer: Serializer, json_value: SchemaType.Json) -> None:
        raise NotImplementedError

    @abstractmethod
    def to_json_schema(self) -> SchemaType.Json:
        raise NotImplementedError


class NamedFields(Fields):
    __slots__ = ('_fields',)

    _fields: tuple[tuple[str, SchemaType], ...]

    def __init__(self, fields: Iterable[tuple[str, SchemaType]]) -> None:
        self._fields = tuple(fields)
        names = [name for name, _ in self._fields]
        if len(set(names)) != len(names):
            raise BadDataError('repeated field name')

    @property
    def fields(self) -> tuple[tuple[str, SchemaType], ...]:
        return self._fields

    @override
    def serialize(self, serializer: Serializer) -> None:
        encode_int(serializer, FieldsTag.NAMED, length=1, signed=False)
        encode_collection(serializer, self._fields, _encode_named_field)

    @override
    def serialize_json(self, serializer: Serializer, json_value: SchemaType.Json) -> None:
        if not isinstance(json_value, dict):
            raise JsonParameterError('expected a JSON object', json_value)
        expected_names = {name for name, _ in self._fields}
        unexpected = [key for key in json_value if key not in expected_names]
        if unexpected:
            raise JsonParameterError(f'unexpected field(s): {", ".join(map(repr, unexpected))}', json_value)
        for name, schema_type in self._fields:
            if name not in json_value:
                raise JsonParameterError(f'missing field {name!r}', json_value)
            with json_path(name):
                schema_type.serialize_json(serializer, json_value[name])

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {name: schema_type.to_json_schema() for name, schema_type in self._fields}


class UnnamedFields(Fields):
    __slots__ = ('_types',)

    _types: tuple[SchemaType, ...]

    def __init__(self, types: Iterable[SchemaType]) -> None:
        self._types = tuple(types)

    @property
    def types(self) -> tuple[SchemaType, ...]:
        return self._types

    @override
    def serialize(self, serializer: Serializer) -> None:
        encode_int(serializer, FieldsTag.UNNAMED, length=1, signed=False)
        encode_collection(serializer, self._types, lambda se, schema_type: schema_type.serialize(se))

    @override
    def serialize_json(self, serializer: Serializer, json_value: SchemaType.Json) -> None:
        if not isinstance(json_value, list):
            raise JsonParameterError('expected a JSON array', json_value)
        if len(json_value) != len(self._types):
            raise JsonParameterError(
                f'expected exactly {len(self._types)} element(s), got {len(json_value)}',
                json_value,
            )
        for i, (schema_type, item) in enumerate(zip(self._types, json_value)):
            with json_path(i):
                schema_type.serialize_json(serializer, item)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return [schema_type.to_json_schema() for schema_type in self._types]


class NoFields(Fields):
    __slots__ = ()

    @override
    def serialize(self, serializer: Serializer) -> None:
        encode_int(serializer, FieldsTag.NONE, length=1, signed=False)

    @override
    def serialize_json(self, serializer: Serializer, json_value: SchemaType.Json) -> None:
        pass

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return None
