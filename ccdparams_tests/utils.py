import base64

from ccdparams.schema import ContractV0, ContractV1, ContractV3, FunctionV1, FunctionV2, ModuleSchema
from ccdparams.schema_types import (
    AccountAddressSchemaType,
    BoolSchemaType,
    ByteListSchemaType,
    ContractAddressSchemaType,
    EnumSchemaType,
    ListSchemaType,
    NamedFields,
    SizeLength,
    StringSchemaType,
    StructSchemaType,
    U8SchemaType,
    U32SchemaType,
    ULeb128SchemaType,
    UnitSchemaType,
    UnnamedFields,
)

# An account address and the 32 bytes it stands for, the last 4 bytes of its base58check payload are the
# checksum e5f5eed7
ACCOUNT_ADDRESS = '3kBx2h5Y2veb4hZgAJWPrr8RyQESKm5TjzF3ti1QQ4VSYLwK1G'
ACCOUNT_ADDRESS_HEX = '69752406cc939fc90ca6a73b57cee109963547f942006d219144924f8485fb0d'


def schema_b64(module_schema: ModuleSchema, *, versioned: bool = True) -> str:
    return base64.b64encode(module_schema.to_bytes(versioned=versioned)).decode('ascii')


def counter_module_schema() -> ModuleSchema:
    """ A version 3 module with a single contract:

    - init takes a u32
    - increment takes a u8 and may fail with ()
    - configure takes a struct with a flag and a list of u8
    - view only returns a u32
    """
    config = StructSchemaType(NamedFields([
        ('enabled', BoolSchemaType()),
        ('steps', ListSchemaType(SizeLength.U16, U8SchemaType())),
    ]))
    counter = ContractV3(
        init=FunctionV2(parameter=U32SchemaType()),
        receive={
            'increment': FunctionV2(parameter=U8SchemaType(), error=UnitSchemaType()),
            'configure': FunctionV2(parameter=config),
            'view': FunctionV2(return_value=U32SchemaType()),
        },
        event=U8SchemaType(),
    )
    return ModuleSchema(version=3, contracts={'counter': counter})


def legacy_module_schema() -> ModuleSchema:
    """ A version 0 module, the parameter types are given directly.
    """
    legacy = ContractV0(
        state=U32SchemaType(),
        init=U8SchemaType(),
        receive={'set': U32SchemaType()},
    )
    return ModuleSchema(version=0, contracts={'legacy': legacy})


def v1_module_schema() -> ModuleSchema:
    token = ContractV1(
        init=FunctionV1(return_value=UnitSchemaType()),
        receive={'mint': FunctionV1(parameter=U32SchemaType(), return_value=BoolSchemaType())},
    )
    return ModuleSchema(version=1, contracts={'token': token})


def notes_module_schema() -> ModuleSchema:
    """ A version 3 module whose init takes a string and whose "flag" entrypoint takes a bool.
    """
    notes = ContractV3(
        init=FunctionV2(parameter=StringSchemaType(SizeLength.U8)),
        receive={'flag': FunctionV2(parameter=BoolSchemaType())},
    )
    return ModuleSchema(version=3, contracts={'notes': notes})


def cis2_module_schema() -> ModuleSchema:
    """ A version 3 module with the "transfer" entrypoint of a CIS-2 token contract.

    The parameter is a u16 sized list of transfers, each with a token id (u8 sized bytes), an amount (LEB128 of at most
    37 bytes), the sender address, the receiver and some additional data (u16 sized bytes). A contract receiver also
    names the entrypoint to be called, as a u16 sized string.
    """
    address = EnumSchemaType([
        ('Account', UnnamedFields([AccountAddressSchemaType()])),
        ('Contract', UnnamedFields([ContractAddressSchemaType()])),
    ])
    receiver = EnumSchemaType([
        ('Account', UnnamedFields([AccountAddressSchemaType()])),
        ('Contract', UnnamedFields([ContractAddressSchemaType(), StringSchemaType(SizeLength.U16)])),
    ])
    transfer = StructSchemaType(NamedFields([
        ('token_id', ByteListSchemaType(SizeLength.U8)),
        ('amount', ULeb128SchemaType(37)),
        ('from', address),
        ('to', receiver),
        ('data', ByteListSchemaType(SizeLength.U16)),
    ]))
    token = ContractV3(
        init=FunctionV2(parameter=UnitSchemaType()),
        receive={'transfer': FunctionV2(parameter=ListSchemaType(SizeLength.U16, transfer))},
    )
    return ModuleSchema(version=3, contracts={'cis2_token': token})
