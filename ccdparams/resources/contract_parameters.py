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

import base64
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from pydantic import ConfigDict, Field
from structlog import get_logger
from twisted.web.http import Request

from ccdparams.api_util import Resource, get_json_body, render_options, set_cors
from ccdparams.conf.get_settings import get_global_settings
from ccdparams.exception import InvalidRequestError
from ccdparams.util import api_catch_exceptions
from ccdparams.utils.api import ErrorResponse, QueryParams

logger = get_logger()


class ContractParametersParams(QueryParams):
    # unknown query parameters are ignored, like any other HTTP server would
    model_config = ConfigDict(extra='ignore')

    schema_b64: Optional[str] = Field(default=None, alias='schema')
    contract_name: Optional[str] = None
    receive_function_name: Optional[str] = None
    schema_version: Optional[str] = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ContractParametersRequest:
    schema: bytes
    contract_name: str
    receive_function_name: Optional[str]
    schema_version: Optional[int]


def decode_schema_param(schema_b64: str) -> Optional[bytes]:
    """ Decode a base64 schema, returns None unless encoding the result gives back exactly the same string.

    A `+` that was not URL encoded reaches us as a space, which is what the round-trip catches.

    >>> decode_schema_param('//8A')
    b'\\xff\\xff\\x00'
    >>> decode_schema_param('//8A AAAA') is None
    True
    >>> decode_schema_param('//8') is None
    True
    """
    try:
        data = base64.b64decode(schema_b64, validate=True)
    except ValueError:
        return None
    if base64.b64encode(data).decode('ascii') != schema_b64:
        return None
    return data


def parse_schema_version_param(schema_version: Optional[str]) -> Optional[int]:
    """ An absent or empty schema version means none was given.

    >>> parse_schema_version_param(None)
    >>> parse_schema_version_param('')
    >>> parse_schema_version_param('2')
    2
    """
    if not schema_version:
        return None
    try:
        return int(schema_version, 10)
    except ValueError:
        raise InvalidRequestError(f"parameter 'schema_version' is not a valid integer: {schema_version!r}")


def parse_contract_parameters_request(
    params: ContractParametersParams,
    *,
    uses_receive_function_name: bool,
) -> ContractParametersRequest:
    """ Validate the query parameters of the init and update endpoints, empty values count as missing.
    """
    if not params.schema_b64:
        raise InvalidRequestError("missing parameter 'schema'")
    schema = decode_schema_param(params.schema_b64)
    if schema is None:
        raise InvalidRequestError("parameter 'schema' is not valid base64 - did you remember to URL encode it?")
    if uses_receive_function_name and not params.receive_function_name:
        raise InvalidRequestError("missing parameter 'receive_function_name'")
    if not uses_receive_function_name and params.receive_function_name:
        raise InvalidRequestError("unexpected parameter 'receive_function_name'")
    if not params.contract_name:
        raise InvalidRequestError("missing parameter 'contract_name'")
    return ContractParametersRequest(
        schema=schema,
        contract_name=params.contract_name,
        receive_function_name=params.receive_function_name or None,
        schema_version=parse_schema_version_param(params.schema_version),
    )


class ContractParametersResource(Resource):
    """ Base for the resources that serialize the JSON body into contract parameters and answer with their hex.
    """
    isLeaf = True

    # XXX: subclasses must initialize this property
    uses_receive_function_name: ClassVar[bool]

    def __init__(self) -> None:
        super().__init__()
        self._settings = get_global_settings()
        self.log = logger.new()

    @api_catch_exceptions
    def render_POST(self, request: Request) -> bytes:
        set_cors(request, 'POST')

        params = ContractParametersParams.from_request(request)
        if isinstance(params, ErrorResponse):
            request.setResponseCode(400)
            request.setHeader(b'content-type', b'application/json; charset=utf-8')
            return params.json_dumpb()

        parsed = parse_contract_parameters_request(
            params,
            uses_receive_function_name=self.uses_receive_function_name,
        )
        parameters = get_json_body(request)
        data = self.serialize(parsed, parameters)

        request.setHeader(b'content-type', b'text/plain; charset=utf-8')
        return data.hex().encode('ascii') + b'\n'

    def render_OPTIONS(self, request: Request) -> int:
        return render_options(request)

    def serialize(self, parsed: ContractParametersRequest, parameters: Any) -> bytes:
        raise NotImplementedError
