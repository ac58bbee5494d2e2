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

from typing import Iterable, Mapping

from typing_extensions import Self, override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.fields import Fields
from ccdparams.schema_types.schema_type import SchemaType, TypeTag, json_path
from ccdparams.serialization import BadDataError, Deserializer, Serializer
from ccdparams.serialization.compound_encoding.collection import decode_collection, encode_collection
from ccdparams.serialization.compound_encoding.mapping import decode_mapping, encode_mapping
from ccdparams.serialization.encoding.int import decode_int, encode_int
from ccdparams.serialization.encoding.utf8 import decode_utf8, encode_utf8

# Enums with up to this many variants use a u8 tag, then a u16 tag up to MAX_VARIANTS
MAX_U8_TAGGED_VARIANTS: int = 256

# Enums with more variants than this cannot be written
MAX_VARIANTS: int = 256 * 256


def _encode_variant(serializer: Serializer, variant: tuple[str, Fields], /) -> None:
    name, fields = variant
    encode_utf8(serializer, name)
    fields.serialize(serializer)


def _decode_variant(deserializer: Deserializer, /) -> tuple[str, Fields]:
    name = decode_utf8(deserializer)
    return name, Fields.deserialize(deserializer)


def _encode_u8(serializer: Serializer, value: int, /) -> None:
    encode_int(serializer, value, length=1, signed=False)


def _decode_u8(deserializer: Deserializer, /) -> int:
    return decode_int(deserializer, length=1, signed=False)


def _get_single_variant(json_value: SchemaType.Json) -> tuple[str, SchemaType.Json]:
    if not isinstance(json_value, dict) or len(json_value) != 1:
        raise JsonParameterError('expected a JSON object with exactly one key, the variant name', json_value)
    (name, payload), = json_value.items()
    return name, payload


class StructSchemaType(SchemaType):
    __slots__ = ('_fields',)

    _tag = TypeTag.STRUCT

    _fields: Fields

    def __init__(self, fields: Fields) -> None:
        self._fields = fields

    @property
    def fields(self) -> Fields:
        return self._fields

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        return cls(Fields.deserialize(deserializer))

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        self._fields.serialize(serializer)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        self._fields.serialize_json(serializer, json_value)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {'type': 'struct', 'fields': self._fields.to_json_schema()}


class EnumSchemaType(SchemaType):
    """ An enum, given as `{"<variant>": <fields>}`.

    It is written as the index of the variant followed by its fields, the index takes a single byte unless there are
    more than 256 variants, in which case it takes 2. Enums with more than 65536 variants cannot be written.
    """

    __slots__ = ('_variants',)

    _tag = TypeTag.ENUM

    _variants: tuple[tuple[str, Fields], ...]

    def __init__(self, variants: Iterable[tuple[str, Fields]]) -> None:
        self._variants = tuple(variants)

    @property
    def variants(self) -> tuple[tuple[str, Fields], ...]:
        return self._variants

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        return cls(decode_collection(deserializer, _decode_variant, list))

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        encode_collection(serializer, self._variants, _encode_variant)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        name, payload = _get_single_variant(json_value)
        for index, (variant_name, fields) in enumerate(self._variants):
            if variant_name == name:
                break
        else:
            raise JsonParameterError(f'unknown variant {name!r}', json_value)
        if len(self._variants) <= MAX_U8_TAGGED_VARIANTS:
            tag_size = 1
        elif len(self._variants) <= MAX_VARIANTS:
            tag_size = 2
        else:
            raise JsonParameterError(f'enum has {len(self._variants)} variants, at most {MAX_VARIANTS} are supported',
                                     json_value)
        encode_int(serializer, index, length=tag_size, signed=False)
        with json_path(name):
            fields.serialize_json(serializer, payload)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {
            'type': 'enum',
            'variants': {name: fields.to_json_schema() for name, fields in self._variants},
        }


class TaggedEnumSchemaType(SchemaType):
    """ An enum whose variants carry an explicit u8 tag, given like an enum and written as the tag and the fields.
    """

    __slots__ = ('_variants',)

    _tag = TypeTag.TAGGED_ENUM

    _variants: dict[int, tuple[str, Fields]]

    def __init__(self, variants: Mapping[int, tuple[str, Fields]]) -> None:
        self._variants = dict(variants)
        names = [name for name, _ in self._variants.values()]
        if len(set(names)) != len(names):
            raise BadDataError('repeated variant name')

    @property
    def variants(self) -> dict[int, tuple[str, Fields]]:
        return dict(self._variants)

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        return cls(decode_mapping(deserializer, _decode_u8, _decode_variant))

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        encode_mapping(serializer, self._variants, _encode_u8, _encode_variant)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        name, payload = _get_single_variant(json_value)
        for variant_tag, (variant_name, fields) in self._variants.items():
            if variant_name == name:
                break
        else:
            raise JsonParameterError(f'unknown variant {name!r}', json_value)
        encode_int(serializer, variant_tag, length=1, signed=False)
        with json_path(name):
            fields.serialize_json(serializer, payload)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {
            'type': 'tagged_enum',
            'variants': {
                str(variant_tag): {'name': name, 'fields': fields.to_json_schema()}
                for variant_tag, (name, fields) in self._variants.items()
            },
        }
