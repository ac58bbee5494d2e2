from io import BytesIO

from twisted.internet.defer import succeed
from twisted.web import server
from twisted.web.test.requesthelper import DummyRequest

from ccdparams.util import json_dumpb, json_loadb
from ccdparams_tests import unittest


class _BaseResourceTest:
    class _ResourceTest(unittest.TestCase):
        pass


class TestDummyRequest(DummyRequest):
    __test__ = False

    def __init__(self, method, url, args=None, headers=None):
        slash = b'/' if isinstance(url, bytes) else '/'
        path = url.split(slash)
        DummyRequest.__init__(self, path)
        self.method = method
        self.content = BytesIO()

        for name, value in (headers or {}).items():
            self.requestHeaders.setRawHeaders(name, [value])

        # Set request args
        args = args or {}
        if isinstance(args, dict):
            for k, v in args.items():
                self.addArg(k, v)
        elif isinstance(args, list):
            for k, v in args:
                if k not in self.args:
                    self.args[k] = [v]
                else:
                    self.args[k].append(v)
        else:
            raise TypeError(f'unsupported type {type(args)} for args')

    def written_value(self) -> bytes:
        return b''.join(self.written)

    def json_value(self):
        return json_loadb(self.written_value())

    def content_type(self) -> bytes:
        content_types = self.responseHeaders.getRawHeaders(b'content-type')
        assert content_types
        return content_types[0]


class StubSite(server.Site):
    def post(self, url, body=None, args=None, headers=None, *, raw_body=None):
        return self._request('POST', url, body, args, headers, raw_body)

    def options(self, url, args=None, headers=None):
        return self._request('OPTIONS', url, None, args, headers, None)

    def _request(self, method, url, body, args, headers, raw_body):
        request = TestDummyRequest(method, url, args, headers)
        # body content
        if raw_body is not None:
            request.content = BytesIO(raw_body)
        elif body is not None:
            # Creating post content exactly the same as twisted resource
            request.content = BytesIO(json_dumpb(body))

        resource = self.getResourceFor(request)
        result = resource.render(request)
        return self._resolveResult(request, result)

    def _resolveResult(self, request, result):
        if isinstance(result, bytes):
            request.write(result)
            request.finish()
            return succeed(request)
        elif result == server.NOT_DONE_YET:
            if request.finished:
                return succeed(request)
            else:
                deferred = request.notifyFinish().addCallback(lambda _: request)
                deferred.request = request
                return deferred
        else:
            raise ValueError('Unexpected return value: %r' % (result,))
