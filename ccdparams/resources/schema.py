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

import base64
import binascii
from typing import Optional

from pydantic import ConfigDict
from structlog import get_logger
from twisted.web.http import Request

from ccdparams._openapi.register import register_resource
from ccdparams.api_util import Resource, get_body, render_options, set_cors
from ccdparams.exception import InvalidRequestError
from ccdparams.resources.contract_parameters import parse_schema_version_param
from ccdparams.schema import schema_to_json
from ccdparams.util import api_catch_exceptions, json_dumpb
from ccdparams.utils.api import ErrorResponse, QueryParams

logger = get_logger()


class SchemaParams(QueryParams):
    model_config = ConfigDict(extra='ignore')

    schema_version: Optional[str] = None


@register_resource
class SchemaResource(Resource):
    """ Implements a web server API with POST to describe a base64 module schema in JSON.
    """
    isLeaf = True

    def __init__(self) -> None:
        super().__init__()
        self.log = logger.new()

    @api_catch_exceptions
    def render_POST(self, request: Request) -> bytes:
        set_cors(request, 'POST')
        request.setHeader(b'content-type', b'application/json; charset=utf-8')

        params = SchemaParams.from_request(request)
        if isinstance(params, ErrorResponse):
            request.setResponseCode(400)
            return params.json_dumpb()

        schema_version = parse_schema_version_param(params.schema_version)
        body = get_body(request).strip()
        if not body:
            raise InvalidRequestError('missing schema in request body')
        try:
            schema = base64.b64decode(body, validate=True)
        except binascii.Error:
            raise InvalidRequestError('request body is not valid base64')

        self.log.debug('schema to json', size=len(schema), schema_version=schema_version)
        return json_dumpb(schema_to_json(schema, schema_version))

    def render_OPTIONS(self, request: Request) -> int:
        return render_options(request)


SchemaResource.openapi = {
    '/schema': {
        'post': {
            'tags': ['schema'],
            'operationId': 'schema_to_json',
            'summary': 'Describe the contracts of a module schema',
            'parameters': [
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
                'description': 'Base64 of the module schema',
                'required': True,
                'content': {
                    'text/plain': {
                        'schema': {
                            'type': 'string'
                        }
                    }
                }
            },
            'responses': {
                '200': {
                    'description': 'Success',
                    'content': {
                        'application/json': {
                            'examples': {
                                'success': {
                                    'summary': 'A contract with an init function',
                                    'value': {
                                        'counter': {
                                            'init': {
                                                'parameter': 'u32',
                                            },
                                            'entrypoints': {
                                                'increment': {
                                                    'parameter': 'u8',
                                                    'error': 'unit',
                                                },
                                            },
                                        },
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
