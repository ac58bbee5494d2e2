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

import re
from datetime import datetime, timedelta, timezone

from typing_extensions import override

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types.schema_type import SchemaType, TypeTag
from ccdparams.schema_types.simple_schema_type import SimpleSchemaType
from ccdparams.serialization import Serializer
from ccdparams.serialization.encoding.int import encode_int

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MAX_U64 = 2**64 - 1

_RFC3339_RE = re.compile(
    r'[0-9]{4}-[0-9]{2}-[0-9]{2}[Tt ][0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?([Zz]|[+-][0-9]{2}:[0-9]{2})'
)
_DURATION_PART_RE = re.compile(r'([0-9]+)(ms|s|m|h|d)')
_DURATION_UNIT_MILLIS = {
    'ms': 1,
    's': 1000,
    'm': 60 * 1000,
    'h': 60 * 60 * 1000,
    'd': 24 * 60 * 60 * 1000,
}


def parse_timestamp(text: str) -> int:
    """ Parse an RFC 3339 date-time into milliseconds since the unix epoch.

    >>> parse_timestamp('1970-01-01T00:00:01Z')
    1000
    >>> parse_timestamp('2021-01-01T00:00:00+00:00')
    1609459200000
    >>> parse_timestamp('2021-01-01T02:00:00.500+02:00')
    1609459200500
    """
    # fromisoformat alone also takes the basic format, like "20210101T000000Z", and no offset at all
    if not _RFC3339_RE.fullmatch(text):
        raise JsonParameterError(f'{text!r} is not an RFC 3339 timestamp', text)
    try:
        moment = datetime.fromisoformat(text.upper())
    except ValueError:
        raise JsonParameterError(f'{text!r} is not an RFC 3339 timestamp', text)
    assert moment.tzinfo is not None
    millis = (moment - _EPOCH) // timedelta(milliseconds=1)
    if not 0 <= millis <= _MAX_U64:
        raise JsonParameterError(f'{text!r} is before the unix epoch', text)
    return millis


def parse_duration(text: str) -> int:
    """ Parse a duration made of whitespace separated parts with a unit (ms, s, m, h or d) into milliseconds.

    >>> parse_duration('1d 2h 3m 4s 5ms')
    93784005
    >>> parse_duration('10s 10s')
    20000
    >>> parse_duration('')
    0
    """
    total = 0
    for part in text.split():
        match = _DURATION_PART_RE.fullmatch(part)
        if match is None:
            raise JsonParameterError(f'{part!r} is not a valid duration part', text)
        amount, unit = match.groups()
        try:
            total += int(amount) * _DURATION_UNIT_MILLIS[unit]
        except ValueError:
            raise JsonParameterError(f'{part!r} has too many digits', text)
    if total > _MAX_U64:
        raise JsonParameterError(f'{text!r} is too long of a duration', text)
    return total


class TimestampSchemaType(SimpleSchemaType):
    """ A point in time, given as an RFC 3339 string and written as u64 milliseconds since the unix epoch.
    """

    _tag = TypeTag.TIMESTAMP
    _json_name = 'timestamp'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        if not isinstance(json_value, str):
            raise JsonParameterError('expected a JSON string with an RFC 3339 timestamp', json_value)
        encode_int(serializer, parse_timestamp(json_value), length=8, signed=False)


class DurationSchemaType(SimpleSchemaType):
    """ A duration, given as a string like "1d 2h 3m 4s 5ms" and written as u64 milliseconds.
    """

    _tag = TypeTag.DURATION
    _json_name = 'duration'

    @override
    def _serialize_json(self, serializer: Serializer, json_value: SchemaType.Json, /) -> None:
        if not isinstance(json_value, str):
            raise JsonParameterError('expected a JSON string with a duration', json_value)
        encode_int(serializer, parse_duration(json_value), length=8, signed=False)
