import struct

import pytest

from ccdparams.serialization import Deserializer, OutOfDataError, Serializer
from ccdparams.serialization.encoding.int import decode_int, encode_int


@pytest.mark.parametrize('fmt, length, signed', [
    ('<B', 1, False),
    ('<b', 1, True),
    ('<H', 2, False),
    ('<h', 2, True),
    ('<I', 4, False),
    ('<i', 4, True),
    ('<Q', 8, False),
    ('<q', 8, True),
])
def test_matches_struct_pack(fmt: str, length: int, signed: bool) -> None:
    bits = 8 * length
    lower = -(1 << (bits - 1)) if signed else 0
    upper = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1
    for n in (lower, lower + 1, 0, 1, upper - 1, upper):
        se = Serializer.build_bytes_serializer()
        encode_int(se, n, length=length, signed=signed)
        data = bytes(se.finalize())
        assert data == struct.pack(fmt, n)
        de = Deserializer.build_bytes_deserializer(data)
        assert decode_int(de, length=length, signed=signed) == n
        de.finalize()


def test_out_of_bounds() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_int(se, 256, length=1, signed=False)
    with pytest.raises(ValueError):
        encode_int(se, -129, length=1, signed=True)


def test_out_of_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    with pytest.raises(OutOfDataError):
        decode_int(de, length=4, signed=False)
