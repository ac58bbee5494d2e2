import pytest

from ccdparams.exception import (
    ContractNotFoundError,
    FunctionNotFoundError,
    MissingParameterTypeError,
    MissingSchemaVersionError,
    SchemaError,
    SchemaParseError,
)
from ccdparams.schema import (
    ContractV0,
    ContractV1,
    ContractV2,
    ContractV3,
    FunctionV1,
    FunctionV2,
    ModuleSchema,
    parse_schema,
    schema_to_json,
)
from ccdparams.schema_types import BoolSchemaType, U8SchemaType, U32SchemaType, UnitSchemaType
from ccdparams_tests.utils import counter_module_schema, legacy_module_schema, v1_module_schema

TOKEN_V1_HEX = ''.join([
    'ffff01',  # magic and version
    '01000000',  # 1 contract
    '05000000746f6b656e',  # 'token'
    '01', '01', '00',  # init: return value only, unit
    '01000000',  # 1 receive function
    '040000006d696e74',  # 'mint'
    '02', '04', '01',  # parameter u32 and return value bool
])


def test_parse_v1() -> None:
    module_schema = parse_schema(bytes.fromhex(TOKEN_V1_HEX))
    assert module_schema == v1_module_schema()
    assert module_schema.to_bytes().hex() == TOKEN_V1_HEX


@pytest.mark.parametrize('module_schema', [
    legacy_module_schema(),
    v1_module_schema(),
    counter_module_schema(),
    ModuleSchema(version=2, contracts={
        'c': ContractV2(
            init=FunctionV2(error=U8SchemaType()),
            receive={'f': FunctionV2(), 'g': FunctionV2(U8SchemaType(), U32SchemaType(), BoolSchemaType())},
        ),
    }),
    ModuleSchema(version=3, contracts={'a': ContractV3(), 'b': ContractV3(event=UnitSchemaType())}),
])
def test_round_trip(module_schema: ModuleSchema) -> None:
    assert parse_schema(module_schema.to_bytes()) == module_schema
    assert parse_schema(module_schema.to_bytes(versioned=False), module_schema.version) == module_schema


def test_schema_version_is_ignored_when_versioned() -> None:
    data = counter_module_schema().to_bytes()
    assert parse_schema(data, schema_version=0) == counter_module_schema()


def test_unversioned_schema() -> None:
    data = legacy_module_schema().to_bytes(versioned=False)
    with pytest.raises(MissingSchemaVersionError):
        parse_schema(data)
    with pytest.raises(SchemaError, match='unsupported schema version: 4'):
        parse_schema(data, schema_version=4)
    # parsing the same bytes as another version does not consume them the same way
    with pytest.raises(SchemaParseError):
        parse_schema(data, schema_version=1)


def test_invalid_schemas() -> None:
    with pytest.raises(SchemaParseError, match='unsupported schema version: 4'):
        parse_schema(bytes.fromhex('ffff0400000000'))
    with pytest.raises(SchemaParseError, match='trailing data'):
        parse_schema(bytes.fromhex('ffff030000000000'))
    with pytest.raises(SchemaParseError, match='invalid schema'):
        parse_schema(bytes.fromhex('ffff03010000'))
    with pytest.raises(SchemaParseError, match='invalid function tag: 3'):
        parse_schema(bytes.fromhex(TOKEN_V1_HEX.replace('01010001000000', '01030001000000', 1)))
    with pytest.raises(SchemaParseError, match='invalid function tag: 8'):
        parse_schema(bytes.fromhex('ffff03' + '01000000' + '0100000063' + '0108' + '00000000' + '00'))
    with pytest.raises(MissingSchemaVersionError):
        parse_schema(b'')
    with pytest.raises(SchemaParseError):
        parse_schema(b'', schema_version=0)


def test_repeated_contract_names() -> None:
    contract = '0100000063' + '000000000000'
    data = bytes.fromhex('ffff00' + '02000000' + contract + contract)
    with pytest.raises(SchemaParseError, match="repeated key: 'c'"):
        parse_schema(data)


def test_deeply_nested_schema() -> None:
    # a V0 contract whose init type is a list of lists of lists...
    data = bytes.fromhex('ffff00' + '01000000' + '0100000063' + '00' + '01' + '1000' * 100_000)
    with pytest.raises(SchemaParseError):
        parse_schema(data)


def test_get_contract() -> None:
    module_schema = counter_module_schema()
    assert module_schema.get_contract('counter') is module_schema.contracts['counter']
    with pytest.raises(ContractNotFoundError, match="contract 'nope' not found in schema"):
        module_schema.get_contract('nope')


def test_parameter_types_v0() -> None:
    contract = legacy_module_schema().get_contract('legacy')
    assert contract.get_init_parameter_type('legacy') == U8SchemaType()
    assert contract.get_receive_parameter_type('legacy', 'set') == U32SchemaType()
    with pytest.raises(FunctionNotFoundError, match="receive function 'get' not found in contract 'legacy'"):
        contract.get_receive_parameter_type('legacy', 'get')
    with pytest.raises(MissingParameterTypeError):
        ContractV0().get_init_parameter_type('empty')


def test_parameter_types_v1() -> None:
    contract = v1_module_schema().get_contract('token')
    with pytest.raises(MissingParameterTypeError, match="no parameter type for the init function of contract 'token'"):
        contract.get_init_parameter_type('token')
    assert contract.get_receive_parameter_type('token', 'mint') == U32SchemaType()
    with pytest.raises(FunctionNotFoundError, match="init function not found in contract 'x'"):
        ContractV1().get_init_parameter_type('x')


def test_function_needs_a_type() -> None:
    with pytest.raises(ValueError):
        FunctionV1()
    # a version 2 function may have no types at all
    assert FunctionV2().to_json() == {}


def test_module_schema_checks_contract_versions() -> None:
    with pytest.raises(ValueError):
        ModuleSchema(version=5)
    with pytest.raises(TypeError):
        ModuleSchema(version=1, contracts={'c': ContractV3()})


def test_schema_to_json() -> None:
    assert schema_to_json(v1_module_schema().to_bytes()) == {
        'token': {
            'init': {'returnValue': 'unit'},
            'entrypoints': {'mint': {'parameter': 'u32', 'returnValue': 'bool'}},
        },
    }
    assert schema_to_json(legacy_module_schema().to_bytes(versioned=False), 0) == {
        'legacy': {'init': 'u8', 'state': 'u32', 'entrypoints': {'set': 'u32'}},
    }
    assert ModuleSchema(version=3, contracts={'empty': ContractV3()}).to_json() == {'empty': {}}
