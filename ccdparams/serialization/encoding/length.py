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

"""
This module implements the length prefix used by sized sequences: an unsigned little-endian integer of a fixed width.

>>> se = Serializer.build_bytes_serializer()
>>> encode_length(se, 3, size=1)  # writes 03
>>> encode_length(se, 258, size=4)  # writes 02010000
>>> bytes(se.finalize()).hex()
'0302010000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0302010000'))
>>> decode_length(de, size=1)
3
>>> decode_length(de, size=4)
258

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_length(se, 256, size=1)
... except ValueError as e:
...     print(*e.args)
length 256 does not fit in 1 byte(s)
"""

from ccdparams.serialization import Deserializer, Serializer, TooLongError

from .int import decode_int, encode_int


def encode_length(serializer: Serializer, length: int, *, size: int) -> None:
    if length < 0:
        raise ValueError('length cannot be negative')
    if length >= 1 << (8 * size):
        raise TooLongError(f'length {length} does not fit in {size} byte(s)')
    encode_int(serializer, length, length=size, signed=False)


def decode_length(deserializer: Deserializer, *, size: int) -> int:
    return decode_int(deserializer, length=size, signed=False)
