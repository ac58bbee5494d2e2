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

r"""
Encoding a mapping is equivalent to encoding a collection of 2-tuples.

Layout: [N: unsigned int of `length_size` bytes][key_0][value_0]...[key_N][value_N]

>>> from ccdparams.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from ccdparams.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> value = {
...     'foo': False,
...     'bar': True,
... }
>>> encode_mapping(se, value, encode_utf8, encode_bool)
>>> bytes(se.finalize()).hex()
'0200000003000000666f6f000300000062617201'

Breakdown of the result:

    02000000: 2 as u32, the total length
    03000000666f6f: 'foo' with length prefix
    00: False
    03000000626172: 'bar' with length prefix
    01: True

Decoding refuses repeated keys.

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0200000003000000666f6f000300000062617201'))
>>> decode_mapping(de, decode_utf8, decode_bool)
{'foo': False, 'bar': True}
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0200000003000000666f6f0003000000666f6f01'))
>>> try:
...     decode_mapping(de, decode_utf8, decode_bool)
... except ValueError as e:
...     print(*e.args)
repeated key: 'foo'
"""

from collections.abc import Mapping
from typing import TypeVar

from ccdparams.serialization import BadDataError, Deserializer, Serializer
from ccdparams.serialization.encoding.length import decode_length, encode_length

from . import Decoder, Encoder

KT = TypeVar('KT')
VT = TypeVar('VT')


def encode_mapping(
    serializer: Serializer,
    values_mapping: Mapping[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
    *,
    length_size: int = 4,
) -> None:
    encode_length(serializer, len(values_mapping), size=length_size)
    for key, value in values_mapping.items():
        key_encoder(serializer, key)
        value_encoder(serializer, value)


def decode_mapping(
    deserializer: Deserializer,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    *,
    length_size: int = 4,
) -> dict[KT, VT]:
    size = decode_length(deserializer, size=length_size)
    result: dict[KT, VT] = {}
    for _ in range(size):
        key = key_decoder(deserializer)
        if key in result:
            raise BadDataError(f'repeated key: {key!r}')
        result[key] = value_decoder(deserializer)
    return result
