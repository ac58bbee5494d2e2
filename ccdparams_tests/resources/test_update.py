from twisted.internet.defer import inlineCallbacks

from ccdparams.resources import UpdateParametersResource
from ccdparams_tests.resources.base_resource import StubSite, _BaseResourceTest
from ccdparams_tests.utils import counter_module_schema, legacy_module_schema, notes_module_schema, schema_b64


class UpdateParametersTest(_BaseResourceTest._ResourceTest):
    def setUp(self):
        super().setUp()
        self.web = StubSite(UpdateParametersResource())
        self.schema = schema_b64(counter_module_schema()).encode('ascii')

    def _args(self, receive_function_name: bytes) -> dict[bytes, bytes]:
        return {
            b'schema': self.schema,
            b'contract_name': b'counter',
            b'receive_function_name': receive_function_name,
        }

    @inlineCallbacks
    def test_serialize(self):
        response = yield self.web.post('update', 255, args=self._args(b'increment'))
        self.assertEqual(response.written_value(), b'ff\n')
        self.assertEqual(response.content_type(), b'text/plain; charset=utf-8')

    @inlineCallbacks
    def test_serialize_struct(self):
        body = {'enabled': True, 'steps': [1, 2]}
        response = yield self.web.post('update', body, args=self._args(b'configure'))
        # enabled, then the list length as u16 and its items
        self.assertEqual(response.written_value(), b'01' + b'0200' + b'0102' + b'\n')

    @inlineCallbacks
    def test_serialize_legacy_schema(self):
        schema = schema_b64(legacy_module_schema(), versioned=False).encode('ascii')
        args = {
            b'schema': schema,
            b'contract_name': b'legacy',
            b'receive_function_name': b'set',
            b'schema_version': b'0',
        }
        response = yield self.web.post('update', 258, args=args)
        self.assertEqual(response.written_value(), b'02010000\n')

    @inlineCallbacks
    def test_missing_receive_function_name(self):
        response = yield self.web.post('update', 1, args={b'schema': self.schema, b'contract_name': b'counter'})
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': "missing parameter 'receive_function_name'",
        })

        response = yield self.web.post('update', 1, args=self._args(b''))
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': "missing parameter 'receive_function_name'",
        })

    @inlineCallbacks
    def test_schema_is_checked_first(self):
        response = yield self.web.post('update', 1, args={b'contract_name': b'counter'})
        self.assertEqual(response.json_value(), {'success': False, 'error': "missing parameter 'schema'"})

    @inlineCallbacks
    def test_unknown_receive_function(self):
        response = yield self.web.post('update', 1, args=self._args(b'missing'))
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': "receive function 'missing' not found in contract 'counter'",
        })

    @inlineCallbacks
    def test_receive_function_without_parameter(self):
        response = yield self.web.post('update', 1, args=self._args(b'view'))
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': "no parameter type for receive function 'view' of contract 'counter'",
        })

    @inlineCallbacks
    def test_verbose_error_message(self):
        body = {'enabled': True, 'steps': [1, 300]}
        response = yield self.web.post('update', body, args=self._args(b'configure'))
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': 'unable to serialize parameters: 300 is out of range for u8 at $.steps[1], got: 300',
        })

    @inlineCallbacks
    def test_missing_field(self):
        response = yield self.web.post('update', {'enabled': True}, args=self._args(b'configure'))
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': 'unable to serialize parameters: missing field \'steps\' at $, got: {"enabled":true}',
        })

    @inlineCallbacks
    def test_options(self):
        response = yield self.web.options('update')
        self.assertTrue(response.finished)
        self.assertEqual(response.responseHeaders.getRawHeaders(b'access-control-allow-origin'), [b'*'])

    @inlineCallbacks
    def test_error_value_with_lone_surrogate(self):
        args = {
            b'schema': schema_b64(notes_module_schema()).encode('ascii'),
            b'contract_name': b'notes',
            b'receive_function_name': b'flag',
        }
        response = yield self.web.post('update', args=args, raw_body=b'{"a": "\\ud800"}')
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': 'unable to serialize parameters: expected a JSON boolean at $, got: {"a":"\\ud800"}',
        })
