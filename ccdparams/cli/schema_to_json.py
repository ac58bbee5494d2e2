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
    parser.add_argument('schema', type=FileType('rb'), nargs='?',
                        help='File with the module schema, stdin when omitted')
    parser.add_argument('--base64', action='store_true', help='The schema file has the base64 of the schema')
    parser.add_argument('--schema-version', type=int, help='Version of the schema, required for legacy schemas')
    parser.add_argument('--indent', type=int, default=None, help='Number of spaces to use for indentation')
    return parser


def main() -> int:
    import json

    from ccdparams.exception import CCDParamsError
    from ccdparams.schema import schema_to_json

    parser = create_parser()
    args = parser.parse_args()

    data = (args.schema or sys.stdin.buffer).read()
    if args.base64:
        try:
            data = base64.b64decode(data.strip(), validate=True)
        except binascii.Error as e:
            print(f'invalid base64: {e}', file=sys.stderr)
            return 1

    try:
        schema_json = schema_to_json(data, args.schema_version)
    except CCDParamsError as e:
        print(e, file=sys.stderr)
        return 1

    print(json.dumps(schema_json, indent=args.indent))
    return 0
