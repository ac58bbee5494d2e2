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

import base58
from typing_extensions import override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.schema_type import SchemaType, TypeTag, is_json_int, json_path
from ccdparams.schema_types.simple_schema_type import SimpleSchemaType
from ccdparams.serialization import Serializer
from ccdparams.serialization.encoding.int import encode_int

# Version byte of a base58check encoded account address
ACCOUNT_ADDRESS_VERSION_BYTE: int = 1

ACCOUNT_ADDRESS_SIZE: int = 32


def decode_account_address(address: str) -> bytes:
    """ Decode a base58check account address into its 32 bytes.

    The checksum is the first 4 bytes of a double sha256 of the version byte and the address bytes.
    """
    try:
        data = base58.b58decode_check(address)
    except ValueError as e:
        raise JsonParameterError(f'{address!r} is not a valid account address: {e}', address)
    if len(data) != 1 + ACCOUNT_ADDRESS_SIZE or data[0] != ACCOUNT_ADDRESS_VERSION_BYTE:
        raise JsonParameterError(f'{address!r} is not a valid account address: wrong version or size', address)
    return data[1:]


def encode_account_address(data: bytes) -> str:
    """ Encode 32 bytes as a base58check account address.
    """
    assert len(data) == ACCOUNT_ADDRESS_SIZE
    return base58.b58encode_check(bytes([ACCOUNT_ADDRESS_VERSION_BYTE]) + data).decode('ascii')


class AccountAddressSchemaType(SimpleSchemaType):
    """ An account address, given as its base58check string and written as the 32 raw bytes.
    """

    _tag = TypeTag.ACCOUNT_ADDRESS
    _json_name = 'account_address'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        if not isinstance(json_value, str):
            raise JsonParameterError('expected a JSON string with a base58 account address', json_value)
        serializer.write_bytes(decode_account_address(json_value))


class ContractAddressSchemaType(SimpleSchemaType):
    """ A contract address, given as `{"index": <u64>, "subindex": <u64>}` and written as two u64.
    """

    _tag = TypeTag.CONTRACT_ADDRESS
    _json_name = 'contract_address'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        if not isinstance(json_value, dict):
            raise JsonParameterError('expected a JSON object with "index" and "subindex"', json_value)
        for key in ('index', 'subindex'):
            if key not in json_value:
                raise JsonParameterError(f'missing field {key!r}', json_value)
        for key in ('index', 'subindex'):
            value = json_value[key]
            with json_path(key):
                if not is_json_int(value) or not 0 <= value < 2**64:
                    raise JsonParameterError('expected a u64 JSON integer', value)
                encode_int(serializer, value, length=8, signed=False)
