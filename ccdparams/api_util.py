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

from typing import Any, ClassVar

from twisted.web import resource
from twisted.web.http import Request

from ccdparams.conf.get_settings import get_global_settings
from ccdparams.exception import InvalidRequestError, RequestTooLargeError
from ccdparams.util import json_loadb


class Resource(resource.Resource):
    openapi: ClassVar[dict[str, Any]] = {}


def set_cors(request: Request, method: str) -> None:
    settings = get_global_settings()
    request.setHeader('Access-Control-Allow-Origin', settings.CORS_ALLOWED_ORIGIN)
    request.setHeader('Access-Control-Allow-Methods', method)
    request.setHeader('Access-Control-Allow-Headers', 'x-prototype-version,x-requested-with,content-type')
    request.setHeader('Access-Control-Max-Age', '604800')


def render_options(request: Request, verbs: str = 'POST, OPTIONS') -> int:
    """Function to return OPTIONS request.

    All of the APIs only need it for POST and OPTIONS, but verbs can be passed as parameter.

    :param verbs: verbs to reply on render options
    :type verbs: str
    """
    from twisted.web import server
    set_cors(request, verbs)
    request.setHeader(b'content-type', b'application/json; charset=utf-8')
    request.write(b'')
    request.finish()
    return server.NOT_DONE_YET


def get_args(request: Request) -> dict[bytes, list[bytes]]:
    """Type-friendly way to access request.args, also always returns a dict instead of None."""
    args = request.args
    if args is None:
        return {}
    return args


def get_body(request: Request) -> bytes:
    """Read the whole request body, refusing it when larger than the configured maximum."""
    settings = get_global_settings()
    if request.content is None:
        return b''
    data = request.content.read(settings.MAX_BODY_SIZE + 1) or b''
    if len(data) > settings.MAX_BODY_SIZE:
        raise RequestTooLargeError(f'request body is larger than {settings.MAX_BODY_SIZE} bytes')
    return data


def get_json_body(request: Request) -> Any:
    """Parse the request body as JSON, an empty body counts as an empty JSON object."""
    data = get_body(request)
    if not data.strip():
        return {}
    try:
        return json_loadb(data)
    except ValueError as e:
        raise InvalidRequestError(f'request body is not valid JSON: {e}') from e
    except RecursionError as e:
        raise InvalidRequestError('request body is not valid JSON: nested too deeply') from e
