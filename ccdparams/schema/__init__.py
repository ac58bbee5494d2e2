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

from ccdparams.schema.contract import ContractSchema, ContractV0, ContractV1, ContractV2, ContractV3
from ccdparams.schema.function import FunctionV1, FunctionV2
from ccdparams.schema.module_schema import VERSIONED_SCHEMA_MAGIC, ModuleSchema, parse_schema, schema_to_json

__all__ = [
    'VERSIONED_SCHEMA_MAGIC',
    'ContractSchema',
    'ContractV0',
    'ContractV1',
    'ContractV2',
    'ContractV3',
    'FunctionV1',
    'FunctionV2',
    'ModuleSchema',
    'parse_schema',
    'schema_to_json',
]
