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
from typing import ClassVar

from typing_extensions import override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.schema_type import SchemaType, TypeTag, is_json_int
from ccdparams.schema_types.simple_schema_type import SimpleSchemaType
from ccdparams.serialization import Serializer
from ccdparams.serialization.encoding.int import encode_int

_DECIMAL_RE = re.compile(r'-?[0-9]+')


def parse_decimal_string(json_value: SchemaType.Json) -> int:
    """ Parse a JSON string holding a decimal integer, like "-1234".

    `int()` alone would also take "+1", " 1" and "1_000", which are not accepted here.
    """
    if not isinstance(json_value, str):
        raise JsonParameterError('expected a JSON string with a decimal integer', json_value)
    if not _DECIMAL_RE.fullmatch(json_value):
        raise JsonParameterError(f'{json_value!r} is not a decimal integer', json_value)
    try:
        return int(json_value)
    except ValueError:
        # the interpreter limits how many digits it converts
        raise JsonParameterError(f'decimal integer with {len(json_value)} characters is too long', json_value)


class _SizedIntSchemaType(SimpleSchemaType):
    """ Base class for classes that represent integers with a fixed size and signedness.
    """

    # XXX: subclass must define these values:
    _signed: ClassVar[bool]
    _byte_size: ClassVar[int]
    # 128-bit values do not fit a double, so they are also accepted as decimal strings
    _allow_str: ClassVar[bool] = False

    @classmethod
    def _upper_bound_value(cls) -> int:
        if cls._signed:
            return 2**(cls._byte_size * 8 - 1) - 1
        else:
            return 2**(cls._byte_size * 8) - 1

    @classmethod
    def _lower_bound_value(cls) -> int:
        if cls._signed:
            return -(2**(cls._byte_size * 8 - 1))
        else:
            return 0

    def _json_to_int(self, json_value: SchemaType.Json) -> int:
        if is_json_int(json_value):
            assert isinstance(json_value, int)
            return json_value
        if self._allow_str and isinstance(json_value, str):
            return parse_decimal_string(json_value)
        if self._allow_str:
            raise JsonParameterError('expected a JSON integer or a string with a decimal integer', json_value)
        raise JsonParameterError('expected a JSON integer', json_value)

    def _check_range(self, value: int) -> None:
        if value > self._upper_bound_value() or value < self._lower_bound_value():
            raise JsonParameterError(f'{value} is out of range for {self._json_name}', value)

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        value = self._json_to_int(json_value)
        self._check_range(value)
        encode_int(serializer, value, length=self._byte_size, signed=self._signed)


class U8SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.U8
    _json_name = 'u8'
    _signed = False
    _byte_size = 1


class U16SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.U16
    _json_name = 'u16'
    _signed = False
    _byte_size = 2


class U32SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.U32
    _json_name = 'u32'
    _signed = False
    _byte_size = 4


class U64SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.U64
    _json_name = 'u64'
    _signed = False
    _byte_size = 8


class U128SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.U128
    _json_name = 'u128'
    _signed = False
    _byte_size = 16
    _allow_str = True


class I8SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.I8
    _json_name = 'i8'
    _signed = True
    _byte_size = 1


class I16SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.I16
    _json_name = 'i16'
    _signed = True
    _byte_size = 2


class I32SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.I32
    _json_name = 'i32'
    _signed = True
    _byte_size = 4


class I64SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.I64
    _json_name = 'i64'
    _signed = True
    _byte_size = 8


class I128SchemaType(_SizedIntSchemaType):
    _tag = TypeTag.I128
    _json_name = 'i128'
    _signed = True
    _byte_size = 16
    _allow_str = True


class AmountSchemaType(SimpleSchemaType):
    """ An amount of micro CCD, given as a decimal string and written as a u64.
    """

    _tag = TypeTag.AMOUNT
    _json_name = 'amount'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        value = parse_decimal_string(json_value)
        if not 0 <= value < 2**64:
            raise JsonParameterError(f'{value} is not a valid amount of micro CCD', json_value)
        encode_int(serializer, value, length=8, signed=False)
