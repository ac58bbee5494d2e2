from typing import Optional

from ccdparams.utils.api import ErrorResponse, QueryParams
from ccdparams_tests.resources.base_resource import TestDummyRequest


class _Params(QueryParams):
    name: str
    count: Optional[str] = None


def test_from_request_single_values() -> None:
    request = TestDummyRequest('GET', 'test', args={b'name': b'foo', b'count': b'3'})
    params = _Params.from_request(request)
    assert isinstance(params, _Params)
    assert params.name == 'foo'
    assert params.count == '3'


def test_from_request_missing_value() -> None:
    request = TestDummyRequest('GET', 'test', args={b'count': b'3'})
    params = _Params.from_request(request)
    assert isinstance(params, ErrorResponse)
    assert params.success is False
    assert 'name' in params.error


def test_from_request_repeated_value() -> None:
    request = TestDummyRequest('GET', 'test', args=[(b'name', b'foo'), (b'name', b'bar')])
    params = _Params.from_request(request)
    assert isinstance(params, ErrorResponse)
    assert 'expected at most one element, got 2' in params.error


def test_from_request_unknown_value() -> None:
    request = TestDummyRequest('GET', 'test', args={b'name': b'foo', b'other': b'1'})
    params = _Params.from_request(request)
    assert isinstance(params, ErrorResponse)
    assert 'other' in params.error


def test_from_request_invalid_utf8_name() -> None:
    request = TestDummyRequest('GET', 'test', args={b'name': b'foo', b'\xff': b'1'})
    params = _Params.from_request(request)
    assert isinstance(params, ErrorResponse)
    assert params.error == 'query parameter names must be valid UTF-8'


def test_error_response_json() -> None:
    assert ErrorResponse(error='oops').json_dumpb() == b'{"success":false,"error":"oops"}'
