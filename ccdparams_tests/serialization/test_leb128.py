import pytest

from ccdparams.serialization import Serializer, TooLongError
from ccdparams.serialization.encoding.leb128 import encode_leb128


def _encode(n: int, signed: bool, max_bytes: int | None = None) -> bytes:
    se = Serializer.build_bytes_serializer()
    encode_leb128(se, n, signed=signed, max_bytes=max_bytes)
    return bytes(se.finalize())


def _do_size_test(n: int, encoded_size: int, signed: bool) -> None:
    encoded_n = _encode(n, signed)
    assert len(encoded_n) == encoded_size
    # only the last byte has the continuation bit clear
    assert all(byte & 0x80 for byte in encoded_n[:-1])
    assert not encoded_n[-1] & 0x80


def gen_signed_test_cases():
    test_cases = [(0, 1), (63, 1), (-1, 1), (-64, 1), (64, 2), (-65, 2), (8191, 2), (-8192, 2)]
    for size in range(3, 10):
        n_pos_lo = (1 << (7 * (size - 1) - 1))
        n_pos_hi = (1 << (7 * size - 1)) - 1
        n_neg_lo = -(1 << (7 * size - 1))
        n_neg_hi = -(1 << (7 * (size - 1) - 1)) - 1
        test_cases.append((n_pos_lo, size))
        test_cases.append((n_pos_hi, size))
        test_cases.append((n_neg_lo, size))
        test_cases.append((n_neg_hi, size))
    return test_cases


def gen_unsigned_test_cases():
    test_cases = [(0, 1), (127, 1), (128, 2), (16383, 2)]
    for size in range(3, 40):
        n_lo = 1 << (7 * (size - 1))
        n_hi = (1 << (7 * size)) - 1
        test_cases.append((n_lo, size))
        test_cases.append((n_hi, size))
    return test_cases


@pytest.mark.parametrize('n, encoded_size', gen_signed_test_cases())
def test_signed_encoded_size(n, encoded_size):
    _do_size_test(n, encoded_size, True)


@pytest.mark.parametrize('n, encoded_size', gen_unsigned_test_cases())
def test_unsigned_encoded_size(n, encoded_size):
    _do_size_test(n, encoded_size, False)


def test_known_encodings() -> None:
    assert _encode(300, False).hex() == 'ac02'
    assert _encode(624485, False).hex() == 'e58e26'
    assert _encode(-1, True).hex() == '7f'
    assert _encode(-128, True).hex() == '807f'
    assert _encode(-123456, True).hex() == 'c0bb78'


def test_max_bytes() -> None:
    assert _encode(127, False, max_bytes=1).hex() == '7f'
    with pytest.raises(TooLongError):
        _encode(128, False, max_bytes=1)
    with pytest.raises(TooLongError):
        _encode(-65, True, max_bytes=1)


def test_negative_unsigned() -> None:
    with pytest.raises(ValueError):
        _encode(-1, False)
