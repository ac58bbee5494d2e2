#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

from __future__ import annotations

from typing import Any

from pydantic import ValidationError, field_validator
from twisted.web.http import Request

from ccdparams.api_util import get_args
from ccdparams.utils.list import single_or_none
from ccdparams.utils.pydantic import BaseModel


class QueryParams(BaseModel):
    @field_validator('*', mode='before')
    @classmethod
    def _list_to_single_item_validator(cls, value: Any) -> Any:
        if isinstance(value, list):
            return single_or_none(value)
        return value

    @classmethod
    def from_request(cls, request: Request) -> QueryParams | ErrorResponse:
        raw_args = get_args(request).items()
        try:
            args = {k.decode('utf8'): v for k, v in raw_args}
        except UnicodeDecodeError:
            return ErrorResponse(error='query parameter names must be valid UTF-8')

        try:
            return cls.model_validate(args)
        except ValidationError as error:
            return ErrorResponse(error=str(error))


class Response(BaseModel):
    pass


class ErrorResponse(Response):
    success: bool = False
    error: str
