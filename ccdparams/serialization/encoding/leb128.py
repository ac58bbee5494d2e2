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
This module implements LEB128 for signed and unsigned integers, as used by WebAssembly.

An optional `max_bytes` limits how many bytes a value may take.

>>> se = Serializer.build_bytes_serializer()
>>> encode_leb128(se, 0, signed=False)  # writes 00
>>> encode_leb128(se, 624485, signed=False)  # writes e58e26
>>> encode_leb128(se, -123456, signed=True)  # writes c0bb78
>>> bytes(se.finalize()).hex()
'00e58e26c0bb78'

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_leb128(se, 624485, signed=False, max_bytes=2)
... except ValueError as e:
...     print(*e.args)
cannot encode more than 2 bytes
"""

from ccdparams.serialization import Serializer, TooLongError


def encode_leb128(serializer: Serializer, value: int, *, signed: bool, max_bytes: int | None = None) -> None:
    """ Encodes an integer using LEB128.

    Raises a ValueError if the value is negative and `signed=False`, and a TooLongError if the encoding would need more
    than `max_bytes` bytes.
    """
    if not signed and value < 0:
        raise ValueError('cannot encode a negative value as unsigned')
    data = bytearray()
    while True:
        byte = value & 0x7f
        value >>= 7
        if signed:
            done = (value == 0 and not byte & 0x40) or (value == -1 and byte & 0x40)
        else:
            done = value == 0
        if not done:
            byte |= 0x80
        data.append(byte)
        if done:
            break
    if max_bytes is not None and len(data) > max_bytes:
        raise TooLongError(f'cannot encode more than {max_bytes} bytes')
    serializer.write_bytes(bytes(data))
