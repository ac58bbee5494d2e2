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
Serialization of the JSON parameters of a contract call, using the types found in the module schema.

This is what both the init and update endpoints end up calling.
"""

from typing import Any, Optional

from structlog import get_logger

from ccdparams.exception import JsonParameterError, ParameterSerializationError
from ccdparams.schema import parse_schema
from ccdparams.schema_types import SchemaType

logger = get_logger()


def serialize_init_contract_parameters(
    contract_name: str,
    parameters: Any,
    schema: bytes,
    schema_version: Optional[int] = None,
    verbose_error_message: bool = False,
) -> bytes:
    """ Serialize the parameters of the init function of `contract_name`.

    Raises a subclass of `CCDParamsError` when the schema cannot be parsed, when it has no parameter type for the init
    function or when the parameters do not match that type.
    """
    module_schema = parse_schema(schema, schema_version)
    contract = module_schema.get_contract(contract_name)
    parameter_type = contract.get_init_parameter_type(contract_name)
    return _serialize_parameters(parameter_type, parameters, verbose_error_message)


def serialize_update_contract_parameters(
    contract_name: str,
    receive_function_name: str,
    parameters: Any,
    schema: bytes,
    schema_version: Optional[int] = None,
    verbose_error_message: bool = False,
) -> bytes:
    """ Serialize the parameters of the receive function `receive_function_name` of `contract_name`.

    Raises the same errors as `serialize_init_contract_parameters`.
    """
    module_schema = parse_schema(schema, schema_version)
    contract = module_schema.get_contract(contract_name)
    parameter_type = contract.get_receive_parameter_type(contract_name, receive_function_name)
    return _serialize_parameters(parameter_type, parameters, verbose_error_message)


def _serialize_parameters(parameter_type: SchemaType, parameters: Any, verbose_error_message: bool) -> bytes:
    try:
        data = parameter_type.json_to_bytes(parameters)
    except JsonParameterError as e:
        message = e.verbose_message() if verbose_error_message else e.reason
        raise ParameterSerializationError(f'unable to serialize parameters: {message}') from e
    except RecursionError as e:
        raise ParameterSerializationError('unable to serialize parameters: value is nested too deeply') from e
    logger.debug('serialized parameters', parameter_type=parameter_type.tag.name, size=len(data))
    return data
