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

from typing import Any

from ccdparams._openapi.register import register_resource
from ccdparams.parameters import serialize_init_contract_parameters
from ccdparams.resources.contract_parameters import ContractParametersRequest, ContractParametersResource


@register_resource
class InitParametersResource(ContractParametersResource):
    """ Implements a web server API with POST to serialize the parameters of a contract init function.
    """

    uses_receive_function_name = False

    def serialize(self, parsed: ContractParametersRequest, parameters: Any) -> bytes:
        self.log.debug('serialize init parameters', contract_name=parsed.contract_name,
                       schema_version=parsed.schema_version)
        return serialize_init_contract_parameters(
            parsed.contract_name,
            parameters,
            parsed.schema,
            parsed.schema_version,
            self._settings.VERBOSE_ERRORS,
        )


InitParametersResource.openapi = {
    '/init': {
        'post': {
            'tags': ['parameters'],
            'operationId': 'serialize_init_parameters',
            'summary': 'Serialize the parameters of a contract init function',
            'parameters': [
                {
                    'name': 'schema',
                    'in': 'query',
                    'description': 'Base64 of the module schema, URL encoded',
                    'required': True,
                    'schema': {
                        'type': 'string'
                    }
                },
                {
                    'name': 'contract_name',
                    'in': 'query',
                    'description': 'Name of the contract, without the "init_" prefix',
                    'required': True,
                    'schema': {
                        'type': 'string'
                    }
                },
                {
                    'name': 'schema_version',
                    'in': 'query',
                    'description': 'Version of the schema, only needed when it is not versioned',
                    'required': False,
                    'schema': {
                        'type': 'integer'
                    }
                },
            ],
            'requestBody': {
                'description': 'Parameters as JSON',
                'required': True,
                'content': {
                    'application/json': {
                        'schema': {}
                    }
                }
            },
            'responses': {
                '200': {
                    'description': 'Success',
                    'content': {
                        'text/plain': {
                            'schema': {
                                'type': 'string',
                            },
                            'examples': {
                                'success': {
                                    'summary': 'Hex of the serialized parameters',
                                    'value': '0a000000\n',
                                }
                            }
                        }
                    }
                },
                '400': {
                    'description': 'Invalid request',
                    'content': {
                        'application/json': {
                            'examples': {
                                'error': {
                                    'summary': 'Missing schema',
                                    'value': {
                                        'success': False,
                                        'error': "missing parameter 'schema'",
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
    }
}
