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
import sys
from argparse import ArgumentParser, FileType


def create_parser() -> ArgumentParser:
    from ccdparams.cli.util import create_parser
    parser = create_parser()
    schema_args = parser.add_mutually_exclusive_group(required=True)
    schema_args.add_argument('--schema', help='Base64 of the module schema')
    schema_args.add_argument('--schema-file', type=FileType('rb'), help='File with the binary module schema')
    parser.add_argument('--schema-version', type=int, help='Version of the schema, required for legacy schemas')
    parser.add_argument('--contract-name', required=True, help='Name of the contract')
    parser.add_argument('--receive-function-name',
                        help='Serialize the parameters of this receive function instead of the init function')
    parser.add_argument('--verbose-errors', action='store_true',
                        help='Show the path and the value of the parameters that could not be serialized')
    parser.add_argument('parameters', type=FileType('rb'), nargs='?',
                        help='File with the JSON parameters, stdin when omitted')
    return parser


def main() -> int:
    from ccdparams.exception import CCDParamsError
    from ccdparams.parameters import serialize_init_contract_parameters, serialize_update_contract_parameters
    from ccdparams.util import json_loadb

    parser = create_parser()
    args = parser.parse_args()

    if args.schema_file is not None:
        schema = args.schema_file.read()
    else:
        try:
            schema = base64.b64decode(args.schema, validate=True)
        except binascii.Error as e:
            print(f'invalid base64 schema: {e}', file=sys.stderr)
            return 1

    try:
        parameters = json_loadb((args.parameters or sys.stdin.buffer).read())
    except ValueError as e:
        print(f'invalid JSON parameters: {e}', file=sys.stderr)
        return 1

    try:
        if args.receive_function_name:
            data = serialize_update_contract_parameters(args.contract_name, args.receive_function_name, parameters,
                                                        schema, args.schema_version, args.verbose_errors)
        else:
            data = serialize_init_contract_parameters(args.contract_name, parameters, schema, args.schema_version,
                                                      args.verbose_errors)
    except CCDParamsError as e:
        print(e, file=sys.stderr)
        return 1

    print(data.hex())
    return 0
