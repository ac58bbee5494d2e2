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

from pydantic import field_validator

from ccdparams.utils.pydantic import BaseModel
from ccdparams.utils.yaml import model_from_yaml


class ServerSettings(BaseModel):
    # Interface the HTTP server binds to
    HOST: str = '0.0.0.0'

    # Port the HTTP server listens on
    PORT: int = 7433

    # Value of the Access-Control-Allow-Origin header sent on every response
    CORS_ALLOWED_ORIGIN: str = '*'

    # Requests with a larger body are refused, in bytes
    MAX_BODY_SIZE: int = 1024 * 1024

    # Whether parameter errors include the path and the value that failed
    VERBOSE_ERRORS: bool = True

    @field_validator('PORT')
    @classmethod
    def _validate_port(cls, port: int) -> int:
        if not 0 <= port < 2**16:
            raise ValueError(f'invalid port: {port}')
        return port

    @field_validator('MAX_BODY_SIZE')
    @classmethod
    def _validate_max_body_size(cls, max_body_size: int) -> int:
        if max_body_size <= 0:
            raise ValueError('MAX_BODY_SIZE must be positive')
        return max_body_size

    @classmethod
    def from_yaml(cls, *, filepath: str) -> ServerSettings:
        """Takes a filepath to a yaml file and returns a validated ServerSettings instance."""
        return model_from_yaml(cls, filepath=filepath)
