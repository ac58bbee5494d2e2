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
A module schema holds the schemas of all the contracts of a smart contract module.

Layout:

    [ff ff][version: u8]  only for versioned schemas
    [N: u32][name_0][contract_0]...[name_N][contract_N]

Legacy schemas have no magic prefix nor version byte, so the version has to be given by whoever supplies the schema.

>>> schema = ModuleSchema(version=0, contracts={'counter': ContractV0()})
>>> schema.to_bytes().hex()
'ffff000100000007000000636f756e746572000000000000'

Breakdown of the result:

    ffff: magic
    00: version 0
    01000000: 1 contract
    07000000636f756e746572: 'counter' with length prefix
    00: no state type
    00: no init type
    00000000: no receive functions

>>> parse_schema(bytes.fromhex('ffff000100000007000000636f756e746572000000000000')) == schema
True
>>> parse_schema(schema.to_bytes(versioned=False), schema_version=0) == schema
True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ccdparams.exception import ContractNotFoundError, MissingSchemaVersionError, SchemaError, SchemaParseError
from ccdparams.schema.contract import ContractSchema, ContractV0, ContractV1, ContractV2, ContractV3
from ccdparams.schema_types import SchemaType
from ccdparams.serialization import Deserializer, SerializationError, Serializer
from ccdparams.serialization.compound_encoding.mapping import decode_mapping, encode_mapping
from ccdparams.serialization.encoding.int import decode_int, encode_int
from ccdparams.serialization.encoding.utf8 import decode_utf8, encode_utf8

# Versioned schemas always start with two fully set bytes, legacy schemas never do
VERSIONED_SCHEMA_MAGIC: bytes = b'\xff\xff'

CONTRACT_SCHEMA_CLASSES: dict[int, type[ContractSchema]] = {
    0: ContractV0,
    1: ContractV1,
    2: ContractV2,
    3: ContractV3,
}


def _encode_contract(serializer: Serializer, contract: ContractSchema, /) -> None:
    contract.serialize(serializer)


@dataclass(slots=True, frozen=True)
class ModuleSchema:
    version: int
    contracts: dict[str, ContractSchema] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.version not in CONTRACT_SCHEMA_CLASSES:
            raise ValueError(f'unsupported schema version: {self.version}')
        contract_class = CONTRACT_SCHEMA_CLASSES[self.version]
        for name, contract in self.contracts.items():
            if not isinstance(contract, contract_class):
                raise TypeError(f'contract {name!r} is not a {contract_class.__name__}')

    @classmethod
    def deserialize(cls, deserializer: Deserializer, version: int) -> ModuleSchema:
        """ Read the contracts of a module schema, the magic and version byte must have been consumed already.
        """
        contract_class = CONTRACT_SCHEMA_CLASSES[version]
        contracts = decode_mapping(deserializer, decode_utf8, contract_class.deserialize)
        return cls(version=version, contracts=contracts)

    def serialize(self, serializer: Serializer, *, versioned: bool = True) -> None:
        if versioned:
            serializer.write_bytes(VERSIONED_SCHEMA_MAGIC)
            encode_int(serializer, self.version, length=1, signed=False)
        encode_mapping(serializer, dict(sorted(self.contracts.items())), encode_utf8, _encode_contract)

    def to_bytes(self, *, versioned: bool = True) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, versioned=versioned)
        return bytes(serializer.finalize())

    def get_contract(self, contract_name: str) -> ContractSchema:
        contract = self.contracts.get(contract_name)
        if contract is None:
            raise ContractNotFoundError(f'contract {contract_name!r} not found in schema')
        return contract

    def to_json(self) -> dict[str, SchemaType.Json]:
        """ Describe every contract of the module in JSON, keyed by contract name.
        """
        return {name: contract.to_json() for name, contract in sorted(self.contracts.items())}


def parse_schema(data: bytes, schema_version: Optional[int] = None) -> ModuleSchema:
    """ Parse a module schema, versioned or legacy.

    The `schema_version` is only used when the schema is not versioned, in which case it is required.
    """
    deserializer = Deserializer.build_bytes_deserializer(data)
    try:
        if data[:len(VERSIONED_SCHEMA_MAGIC)] == VERSIONED_SCHEMA_MAGIC:
            deserializer.read_bytes(len(VERSIONED_SCHEMA_MAGIC))
            version = decode_int(deserializer, length=1, signed=False)
            if version not in CONTRACT_SCHEMA_CLASSES:
                raise SchemaParseError(f'unsupported schema version: {version}')
        else:
            if schema_version is None:
                raise MissingSchemaVersionError(
                    'legacy unversioned schema was supplied, but no schema version was provided'
                )
            if schema_version not in CONTRACT_SCHEMA_CLASSES:
                raise SchemaError(f'unsupported schema version: {schema_version}')
            version = schema_version
        module_schema = ModuleSchema.deserialize(deserializer, version)
        deserializer.finalize()
    except SerializationError as e:
        raise SchemaParseError(f'invalid schema: {e}') from e
    except RecursionError as e:
        raise SchemaParseError('invalid schema: types are nested too deeply') from e
    return module_schema


def schema_to_json(data: bytes, schema_version: Optional[int] = None) -> dict[str, SchemaType.Json]:
    """ Parse a module schema and describe it in JSON.
    """
    return parse_schema(data, schema_version).to_json()
