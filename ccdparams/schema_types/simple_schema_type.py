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
from ccdparams.serialization import Deserializer, Serializer
from ccdparams.serialization.encoding.bool import encode_bool


class SimpleSchemaType(SchemaType):
    """ Base class for types that carry no data in the schema besides their tag.
    """

    # XXX: subclass must define this value:
    _json_name: ClassVar[str]

    @override
    @classmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        assert tag == cls._tag
        return cls()

    @override
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        pass

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return self._json_name


class UnitSchemaType(SimpleSchemaType):
    """ Represents `()`, any JSON value is accepted and nothing is written.
    """

    _tag = TypeTag.UNIT
    _json_name = 'unit'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        pass


class BoolSchemaType(SimpleSchemaType):
    _tag = TypeTag.BOOL
    _json_name = 'bool'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        if not isinstance(json_value, bool):
            raise JsonParameterError('expected a JSON boolean', json_value)
        encode_bool(serializer, json_value)
