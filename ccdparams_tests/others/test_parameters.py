from unittest.mock import patch

import pytest

from ccdparams.exception import (
    ContractNotFoundError,
    FunctionNotFoundError,
    MissingParameterTypeError,
    ParameterSerializationError,
    SchemaParseError,
)
from ccdparams.parameters import serialize_init_contract_parameters, serialize_update_contract_parameters
from ccdparams.schema_types import U32SchemaType
from ccdparams_tests.utils import (
    ACCOUNT_ADDRESS,
    ACCOUNT_ADDRESS_HEX,
    cis2_module_schema,
    counter_module_schema,
    legacy_module_schema,
    v1_module_schema,
)


@pytest.fixture
def counter_schema() -> bytes:
    return counter_module_schema().to_bytes()


def test_serialize_init(counter_schema):
    assert serialize_init_contract_parameters('counter', 10, counter_schema).hex() == '0a000000'


def test_serialize_does_not_describe_the_type(counter_schema):
    with patch.object(U32SchemaType, 'to_json_schema', side_effect=AssertionError) as to_json_schema:
        assert serialize_init_contract_parameters('counter', 10, counter_schema).hex() == '0a000000'
    to_json_schema.assert_not_called()


def test_serialize_update(counter_schema):
    data = serialize_update_contract_parameters('counter', 'increment', 255, counter_schema)
    assert data.hex() == 'ff'
    data = serialize_update_contract_parameters('counter', 'configure', {'enabled': False, 'steps': []}, counter_schema)
    assert data.hex() == '000000'


def test_serialize_legacy():
    schema = legacy_module_schema().to_bytes(versioned=False)
    assert serialize_init_contract_parameters('legacy', 1, schema, 0).hex() == '01'
    assert serialize_update_contract_parameters('legacy', 'set', 1, schema, 0).hex() == '01000000'


def test_error_messages(counter_schema):
    with pytest.raises(ParameterSerializationError) as e:
        serialize_update_contract_parameters('counter', 'configure', {'enabled': 1, 'steps': []}, counter_schema)
    assert str(e.value) == 'unable to serialize parameters: expected a JSON boolean'

    with pytest.raises(ParameterSerializationError) as e:
        serialize_update_contract_parameters('counter', 'configure', {'enabled': 1, 'steps': []}, counter_schema,
                                             verbose_error_message=True)
    assert str(e.value) == 'unable to serialize parameters: expected a JSON boolean at $.enabled, got: 1'


def test_lookup_errors(counter_schema):
    with pytest.raises(ContractNotFoundError):
        serialize_init_contract_parameters('other', 10, counter_schema)
    with pytest.raises(FunctionNotFoundError):
        serialize_update_contract_parameters('counter', 'decrement', 1, counter_schema)
    with pytest.raises(MissingParameterTypeError):
        serialize_update_contract_parameters('counter', 'view', 1, counter_schema)
    with pytest.raises(MissingParameterTypeError):
        serialize_init_contract_parameters('token', None, v1_module_schema().to_bytes())
    with pytest.raises(SchemaParseError):
        serialize_init_contract_parameters('counter', 10, counter_schema[:-1])



def test_serialize_cis2_transfer():
    transfer = {
        'token_id': '01',
        'amount': '100',
        'from': {'Account': [ACCOUNT_ADDRESS]},
        'to': {'Contract': [{'index': 5, 'subindex': 0}, 'onReceivingCIS2']},
        'data': '',
    }
    data = serialize_update_contract_parameters('cis2_token', 'transfer', [transfer], cis2_module_schema().to_bytes())
    assert data.hex() == ''.join([
        '0100',  # one transfer
        '0101',  # token id
        '64',  # amount
        '00' + ACCOUNT_ADDRESS_HEX,  # from an account
        '01' + '0500000000000000' + '0000000000000000',  # to a contract
        '0f00' + '6f6e526563656976696e6743495332',  # named entrypoint "onReceivingCIS2"
        '0000',  # no data
    ])
