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

import json
from typing import Any


class CCDParamsError(Exception):
    """Base class for exceptions in ccdparams.

    Every error of this family is caused by the caller's input, so the API answers it with a 400.
    """
    status_code: int = 400


class InvalidRequestError(CCDParamsError):
    """Raised when the query parameters or the body of a request are not acceptable."""
    pass


class SchemaError(CCDParamsError):
    """Base class for errors about a contract schema."""
    pass


class SchemaParseError(SchemaError):
    """Raised when the schema bytes cannot be parsed."""
    pass


class MissingSchemaVersionError(SchemaError):
    """Raised when an unversioned schema is given without telling which version it is."""
    pass


class ContractNotFoundError(SchemaError):
    """Raised when the schema does not describe the requested contract."""
    pass


class FunctionNotFoundError(SchemaError):
    """Raised when the contract schema has no entry for the requested init or receive function."""
    pass


class MissingParameterTypeError(SchemaError):
    """Raised when the function is in the schema but its parameter type is not."""
    pass


class ParameterSerializationError(CCDParamsError):
    """Raised when the JSON parameters given by the caller cannot be serialized with the schema."""
    pass


class JsonParameterError(CCDParamsError):
    """Raised when a JSON value does not match the schema type it is being encoded with.

    `path` is filled while the error travels up through compound types, so it points at the value that failed.
    """

    def __init__(self, reason: str, value: Any = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.value = value
        self.path: list[str | int] = []

    def format_path(self) -> str:
        parts = ['$']
        for segment in self.path:
            if isinstance(segment, int):
                parts.append(f'[{segment}]')
            else:
                parts.append(f'.{segment}')
        return ''.join(parts)

    def verbose_message(self) -> str:
        # the value is escaped to ASCII, a JSON string can hold lone surrogates that cannot be written as UTF-8
        got = json.dumps(self.value, separators=(',', ':'))
        return f'{self.reason} at {self.format_path()}, got: {got}'


class RequestTooLargeError(InvalidRequestError):
    """Raised when the request body is larger than the configured maximum."""
    status_code = 413
