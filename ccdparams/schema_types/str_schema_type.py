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

import string
from typing import ClassVar

from typing_extensions import Self, override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.schema_type import SchemaType, SizeLength, TypeTag, json_path
from ccdparams.serialization import Deserializer, Serializer

# Contract and receive names are limited to this many characters
MAX_FUNC_NAME_SIZE: int = 100

_NAME_CHARS = frozenset(string.ascii_letters + string.digits + string.punctuation)


def _check_name_chars(name: str, json_value: SchemaType.Json) -> None:
    if len(name) > MAX_FUNC_NAME_SIZE:
        raise JsonParameterError(f'{name!r} is longer than {MAX_FUNC_NAME_SIZE} characters', json_value)
    if not set(name) <= _NAME_CHARS:
        raise JsonParameterError(f'{name!r} must only have ASCII alphanumeric or punctuation characters', json_value)


def _get_str_member(json_value: SchemaType.Json, key: str) -> str:
    assert isinstance(json_value, dict)
    if key not in json_value:
        raise JsonParameterError(f'missing field {key!r}', json_value)
    member = json_value[key]
    if not isinstance(member, str):
        with json_path(key):
            raise JsonParameterError('expected a JSON string', member)
    return member


class _StrSchemaType(SchemaType):
    """ Base class for types written as a UTF-8 string with a length prefix whose width is given by the schema.
    """

    __slots__ = ('_size_length',)

    # XXX: subclass must define this value:
    _json_name: ClassVar[str]

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

    def _write_str(self, serializer: Serializer, value: str) -> None:
        try:
            data = value.encode('utf-8')
        except UnicodeEncodeError:
            raise JsonParameterError('string is not valid unicode, it has a lone surrogate', value)
        self._size_length.encode_length(serializer, len(data))
        serializer.write_bytes(data, max_bytes=None)

    @override
    def to_json_schema(self) -> SchemaType.Json:
        return {'type': self._json_name, 'size_length': self._size_length.json_name}


class StringSchemaType(_StrSchemaType):
    _tag = TypeTag.STRING
    _json_name = 'string'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        if not isinstance(json_value, str):
            raise JsonParameterError('expected a JSON string', json_value)
        self._write_str(serializer, json_value)


class ContractNameSchemaType(_StrSchemaType):
    """ A contract name, given as `{"contract": "<name>"}` and written as the name of its init function.
    """

    _tag = TypeTag.CONTRACT_NAME
    _json_name = 'contract_name'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        if not isinstance(json_value, dict):
            raise JsonParameterError('expected a JSON object with "contract"', json_value)
        contract = _get_str_member(json_value, 'contract')
        if '.' in contract:
            raise JsonParameterError(f'contract name {contract!r} cannot contain "."', json_value)
        name = f'init_{contract}'
        _check_name_chars(name, json_value)
        self._write_str(serializer, name)


class ReceiveNameSchemaType(_StrSchemaType):
    """ A receive function name, given as `{"contract": "<name>", "func": "<name>"}` and written as "contract.func".
    """

    _tag = TypeTag.RECEIVE_NAME
    _json_name = 'receive_name'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        if not isinstance(json_value, dict):
            raise JsonParameterError('expected a JSON object with "contract" and "func"', json_value)
        contract = _get_str_member(json_value, 'contract')
        func = _get_str_member(json_value, 'func')
        if '.' in contract:
            raise JsonParameterError(f'contract name {contract!r} cannot contain "."', json_value)
        name = f'{contract}.{func}'
        _check_name_chars(name, json_value)
        self._write_str(serializer, name)
