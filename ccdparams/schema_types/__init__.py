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

from ccdparams.schema_types.address_schema_type import AccountAddressSchemaType, ContractAddressSchemaType
from ccdparams.schema_types.bytes_schema_type import ByteArraySchemaType, ByteListSchemaType
from ccdparams.schema_types.collection_schema_type import (
    ArraySchemaType,
    ListSchemaType,
    MapSchemaType,
    PairSchemaType,
    SetSchemaType,
)
from ccdparams.schema_types.fields import Fields, NamedFields, NoFields, UnnamedFields
from ccdparams.schema_types.leb128_schema_type import ILeb128SchemaType, ULeb128SchemaType
from ccdparams.schema_types.schema_type import SchemaType, SizeLength, TypeTag
from ccdparams.schema_types.simple_schema_type import BoolSchemaType, UnitSchemaType
from ccdparams.schema_types.sized_int_schema_type import (
    AmountSchemaType,
    I8SchemaType,
    I16SchemaType,
    I32SchemaType,
    I64SchemaType,
    I128SchemaType,
    U8SchemaType,
    U16SchemaType,
    U32SchemaType,
    U64SchemaType,
    U128SchemaType,
)
from ccdparams.schema_types.str_schema_type import ContractNameSchemaType, ReceiveNameSchemaType, StringSchemaType
from ccdparams.schema_types.struct_schema_type import EnumSchemaType, StructSchemaType, TaggedEnumSchemaType
from ccdparams.schema_types.time_schema_type import DurationSchemaType, TimestampSchemaType

__all__ = [
    'TAG_TO_SCHEMA_TYPE_MAP',
    'AccountAddressSchemaType',
    'AmountSchemaType',
    'ArraySchemaType',
    'BoolSchemaType',
    'ByteArraySchemaType',
    'ByteListSchemaType',
    'ContractAddressSchemaType',
    'ContractNameSchemaType',
    'DurationSchemaType',
    'EnumSchemaType',
    'Fields',
    'I8SchemaType',
    'I16SchemaType',
    'I32SchemaType',
    'I64SchemaType',
    'I128SchemaType',
    'ILeb128SchemaType',
    'ListSchemaType',
    'MapSchemaType',
    'NamedFields',
    'NoFields',
    'PairSchemaType',
    'ReceiveNameSchemaType',
    'SchemaType',
    'SetSchemaType',
    'SizeLength',
    'StringSchemaType',
    'StructSchemaType',
    'TaggedEnumSchemaType',
    'TimestampSchemaType',
    'TypeTag',
    'U8SchemaType',
    'U16SchemaType',
    'U32SchemaType',
    'U64SchemaType',
    'U128SchemaType',
    'ULeb128SchemaType',
    'UnitSchemaType',
    'UnnamedFields',
]

# Mapping between the tag that starts a type description and the class that parses it.
TAG_TO_SCHEMA_TYPE_MAP: dict[TypeTag, type[SchemaType]] = {
    TypeTag.UNIT: UnitSchemaType,
    TypeTag.BOOL: BoolSchemaType,
    TypeTag.U8: U8SchemaType,
    TypeTag.U16: U16SchemaType,
    TypeTag.U32: U32SchemaType,
    TypeTag.U64: U64SchemaType,
    TypeTag.I8: I8SchemaType,
    TypeTag.I16: I16SchemaType,
    TypeTag.I32: I32SchemaType,
    TypeTag.I64: I64SchemaType,
    TypeTag.AMOUNT: AmountSchemaType,
    TypeTag.ACCOUNT_ADDRESS: AccountAddressSchemaType,
    TypeTag.CONTRACT_ADDRESS: ContractAddressSchemaType,
    TypeTag.TIMESTAMP: TimestampSchemaType,
    TypeTag.DURATION: DurationSchemaType,
    TypeTag.PAIR: PairSchemaType,
    TypeTag.LIST: ListSchemaType,
    TypeTag.SET: SetSchemaType,
    TypeTag.MAP: MapSchemaType,
    TypeTag.ARRAY: ArraySchemaType,
    TypeTag.STRUCT: StructSchemaType,
    TypeTag.ENUM: EnumSchemaType,
    TypeTag.STRING: StringSchemaType,
    TypeTag.U128: U128SchemaType,
    TypeTag.I128: I128SchemaType,
    TypeTag.CONTRACT_NAME: ContractNameSchemaType,
    TypeTag.RECEIVE_NAME: ReceiveNameSchemaType,
    TypeTag.ULEB128: ULeb128SchemaType,
    TypeTag.ILEB128: ILeb128SchemaType,
    TypeTag.BYTE_LIST: ByteListSchemaType,
    TypeTag.BYTE_ARRAY: ByteArraySchemaType,
    TypeTag.TAGGED_ENUM: TaggedEnumSchemaType,
}

assert set(TAG_TO_SCHEMA_TYPE_MAP) == set(TypeTag), 'every tag must be mapped'
