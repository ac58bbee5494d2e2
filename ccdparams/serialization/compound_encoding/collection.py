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
A collection is basically any value that has a known size and is iterable.

Layout: [N: unsigned int of `length_size` bytes][value_0]...[value_N]

>>> from ccdparams.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> value = ['foo', 'π']
>>> encode_collection(se, value, encode_utf8, length_size=1)
>>> bytes(se.finalize()).hex()
'0203000000666f6f02000000cf80'

Breakdown of the result:

    02: 2 in a single byte, the total length
    03000000666f6f: 'foo' with length prefix
    02000000cf80: 'π' with length prefix

When decoding, the builder can be any compabile collection, in the previous example a `list` was encoded, but when
decoding a `tuple` could be used, it only matters that the collection can be initialized with an `Iterable[T]`.

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0203000000666f6f02000000cf80'))
>>> decode_collection(de, decode_utf8, tuple, length_size=1)
('foo', 'π')
>>> de.finalize()
"""

from collections.abc import Collection, Iterable
from typing import Callable, TypeVar

from ccdparams.serialization import Deserializer, Serializer
from ccdparams.serialization.encoding.length import decode_length, encode_length

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R', bound=Collection)


def encode_collection(
    serializer: Serializer,
    values: Collection[T],
    encoder: Encoder[T],
    *,
    length_size: int = 4,
) -> None:
    encode_length(serializer, len(values), size=length_size)
    for value in values:
        encoder(serializer, value)


def decode_collection(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
    *,
    length_size: int = 4,
) -> R:
    length = decode_length(deserializer, size=length_size)
    return builder(decoder(deserializer) for _ in range(length))
