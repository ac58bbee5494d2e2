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

from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import IntEnum, unique
from typing import Any, ClassVar, Iterator, TypeAlias, final

from typing_extensions import Self

from ccdparams.exception import JsonParameterError
from ccdparams.serialization import Deserializer, Serializer
from ccdparams.serialization.encoding.int import decode_int, encode_int
from ccdparams.serialization.encoding.length import encode_length


@unique
class TypeTag(IntEnum):
    """ The byte that starts the description of a type inside a schema.
    """
    UNIT = 0
    BOOL = 1
    U8 = 2
    U16 = 3
    U32 = 4
    U64 = 5
    I8 = 6
    I16 = 7
    I32 = 8
    I64 = 9
    AMOUNT = 10
    ACCOUNT_ADDRESS = 11
    CONTRACT_ADDRESS = 12
    TIMESTAMP = 13
    DURATION = 14
    PAIR = 15
    LIST = 16
    SET = 17
    MAP = 18
    ARRAY = 19
    STRUCT = 20
    ENUM = 21
    STRING = 22
    U128 = 23
    I128 = 24
    CONTRACT_NAME = 25
    RECEIVE_NAME = 26
    ULEB128 = 27
    ILEB128 = 28
    BYTE_LIST = 29
    BYTE_ARRAY = 30
    TAGGED_ENUM = 31


@unique
class SizeLength(IntEnum):
    """ Width of the length prefix of a sized parameter value (list, set, map, string, byte list, ...).
    """
    U8 = 0
    U16 = 1
    U32 = 2
    U64 = 3

    @property
    def byte_size(self) -> int:
        return 1 << self.value

    @property
    def json_name(self) -> str:
        return self.name.lower()

    def serialize(self, serializer: Serializer) -> None:
        encode_int(serializer, self.value, length=1, signed=False)

    @classmethod
    def deserialize(cls, deserializer: Deserializer) -> SizeLength:
        from ccdparams.serialization import BadDataError
        tag = decode_int(deserializer, length=1, signed=False)
        try:
            return cls(tag)
        except ValueError:
            raise BadDataError(f'invalid size length tag: {tag}')

    def encode_length(self, serializer: Serializer, length: int) -> None:
        """ Write a length prefix, raises JsonParameterError when it doesn't fit.
        """
        if length >= 1 << (8 * self.byte_size):
            raise JsonParameterError(f'length {length} does not fit in {self.json_name}', length)
        encode_length(serializer, length, size=self.byte_size)


@contextmanager
def json_path(segment: str | int) -> Iterator[None]:
    """ Prefix the path of any JsonParameterError raised inside the block with the given segment.
    """
    try:
        yield
    except JsonParameterError as e:
        e.path.insert(0, segment)
        raise


def is_json_int(json_value: Any) -> bool:
    # bool is a subclass of int, but `true` is not a JSON number
    return isinstance(json_value, int) and not isinstance(json_value, bool)


class SchemaType(ABC):
    """ This class is used to model a type of a contract schema.

    A schema type knows two encodings: how it is described inside a schema (`serialize`/`deserialize`) and how a JSON
    value of that type is written as a contract parameter (`serialize_json`). It can also describe itself as JSON for
    tools that want to show a schema to a person (`to_json_schema`).

    Instances are immutable after construction.
    """

    # These are all the values that can be observed when parsing a JSON with the builtin json module
    # See: https://docs.python.org/3/library/json.html#encoders-and-decoders
    Json: TypeAlias = dict | list | str | int | float | bool | None

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize this property
    _tag: ClassVar[TypeTag]

    @final
    @staticmethod
    def deserialize(deserializer: Deserializer, /) -> SchemaType:
        """ Read a type description from a schema, starting with its tag.
        """
        from ccdparams.schema_types import TAG_TO_SCHEMA_TYPE_MAP
        from ccdparams.serialization import BadDataError
        raw_tag = decode_int(deserializer, length=1, signed=False)
        try:
            tag = TypeTag(raw_tag)
        except ValueError:
            raise BadDataError(f'unknown type tag: {raw_tag}')
        schema_type_class = TAG_TO_SCHEMA_TYPE_MAP[tag]
        return schema_type_class._deserialize_schema(deserializer, tag)

    @final
    @staticmethod
    def from_bytes(data: bytes, /) -> SchemaType:
        """ Shortcut to parse a single type description from `bytes`, all the data must be used.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        schema_type = SchemaType.deserialize(deserializer)
        deserializer.finalize()
        return schema_type

    @property
    def tag(self) -> TypeTag:
        return self._tag

    @final
    def serialize(self, serializer: Serializer, /) -> None:
        """ Write the description of this type as it appears inside a schema.
        """
        encode_int(serializer, self._tag, length=1, signed=False)
        self._serialize_schema(serializer)

    @final
    def to_bytes(self) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer)
        return bytes(serializer.finalize())

    @final
    def serialize_json(self, serializer: Serializer, json_value: Json, /) -> None:
        """ Write a JSON value as a contract parameter of this type.

        Will raise a JsonParameterError if the given `json_value` is not compatible.
        """
        # XXX: subclasses must implement SchemaType._serialize_json, not SchemaType.serialize_json
        self._serialize_json(serializer, json_value)

    @final
    def json_to_bytes(self, json_value: Json, /) -> bytes:
        """ Shortcut to quickly convert a JSON value to parameter `bytes`.
        """
        serializer = Serializer.build_bytes_serializer()
        self.serialize_json(serializer, json_value)
        return bytes(serializer.finalize())

    @classmethod
    @abstractmethod
    def _deserialize_schema(cls, deserializer: Deserializer, tag: TypeTag, /) -> Self:
        """ Read whatever follows the tag in the schema description of this type.

        The tag is passed along so a single class can stand for more than one tag.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize_schema(self, serializer: Serializer, /) -> None:
        """ Write whatever follows the tag in the schema description of this type.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize_json(self, serializer: Serializer, json_value: Json, /) -> None:
        """ Inner implementation of `serialize_json`.

        Compound types should use `json_path` around the calls to their inner types so errors point at the failing
        value.
        """
        raise NotImplementedError

    @abstractmethod
    def to_json_schema(self) -> Json:
        """ Describe this type in JSON, simple types use their name and compound types an object with a "type" key.
        """
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaType):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.to_json_schema()!r})'
