from twisted.internet.defer import inlineCallbacks

from ccdparams.resources import InitParametersResource
from ccdparams_tests.resources.base_resource import StubSite, _BaseResourceTest
from ccdparams_tests.utils import counter_module_schema, legacy_module_schema, notes_module_schema, schema_b64


class InitParametersTest(_BaseResourceTest._ResourceTest):
    def setUp(self):
        super().setUp()
        self.web = StubSite(InitParametersResource())
        self.schema = schema_b64(counter_module_schema()).encode('ascii')

    @inlineCallbacks
    def test_serialize(self):
        response = yield self.web.post('init', 10, args={b'schema': self.schema, b'contract_name': b'counter'})
        self.assertEqual(response.written_value(), b'0a000000\n')
        self.assertEqual(response.content_type(), b'text/plain; charset=utf-8')
        self.assertEqual(response.responseHeaders.getRawHeaders(b'access-control-allow-origin'), [b'*'])

    @inlineCallbacks
    def test_serialize_legacy_schema(self):
        schema = schema_b64(legacy_module_schema(), versioned=False).encode('ascii')
        args = {b'schema': schema, b'contract_name': b'legacy', b'schema_version': b'0'}
        response = yield self.web.post('init', 7, args=args)
        self.assertEqual(response.written_value(), b'07\n')

    @inlineCallbacks
    def test_legacy_schema_without_version(self):
        schema = schema_b64(legacy_module_schema(), versioned=False).encode('ascii')
        response = yield self.web.post('init', 7, args={b'schema': schema, b'contract_name': b'legacy'})
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': 'legacy unversioned schema was supplied, but no schema version was provided',
        })

    @inlineCallbacks
    def test_missing_schema(self):
        response = yield self.web.post('init', 10, args={b'contract_name': b'counter'})
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {'success': False, 'error': "missing parameter 'schema'"})

        response = yield self.web.post('init', 10, args={b'schema': b'', b'contract_name': b'counter'})
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {'success': False, 'error': "missing parameter 'schema'"})

    @inlineCallbacks
    def test_schema_not_base64(self):
        # a "+" that was not URL encoded arrives as a space
        for schema in [b'//8A AAAA', b'//8', b'not base64!']:
            response = yield self.web.post('init', 10, args={b'schema': schema, b'contract_name': b'counter'})
            self.assertEqual(response.responseCode, 400)
            self.assertEqual(response.json_value(), {
                'success': False,
                'error': "parameter 'schema' is not valid base64 - did you remember to URL encode it?",
            })

    @inlineCallbacks
    def test_unexpected_receive_function_name(self):
        args = {b'schema': self.schema, b'contract_name': b'counter', b'receive_function_name': b'increment'}
        response = yield self.web.post('init', 10, args=args)
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': "unexpected parameter 'receive_function_name'",
        })

    @inlineCallbacks
    def test_empty_receive_function_name_is_ignored(self):
        args = {b'schema': self.schema, b'contract_name': b'counter', b'receive_function_name': b''}
        response = yield self.web.post('init', 10, args=args)
        self.assertEqual(response.written_value(), b'0a000000\n')

    @inlineCallbacks
    def test_missing_contract_name(self):
        response = yield self.web.post('init', 10, args={b'schema': self.schema})
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {'success': False, 'error': "missing parameter 'contract_name'"})

    @inlineCallbacks
    def test_unknown_contract(self):
        response = yield self.web.post('init', 10, args={b'schema': self.schema, b'contract_name': b'other'})
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {'success': False, 'error': "contract 'other' not found in schema"})

    @inlineCallbacks
    def test_invalid_schema_version(self):
        args = {b'schema': self.schema, b'contract_name': b'counter', b'schema_version': b'abc'}
        response = yield self.web.post('init', 10, args=args)
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': "parameter 'schema_version' is not a valid integer: 'abc'",
        })

    @inlineCallbacks
    def test_repeated_query_parameter(self):
        args = [(b'schema', self.schema), (b'schema', self.schema), (b'contract_name', b'counter')]
        response = yield self.web.post('init', 10, args=args)
        self.assertEqual(response.responseCode, 400)
        data = response.json_value()
        self.assertFalse(data['success'])
        self.assertIn('schema', data['error'])

    @inlineCallbacks
    def test_query_parameter_name_not_utf8(self):
        args = {b'schema': self.schema, b'contract_name': b'counter', b'\xff': b'1'}
        response = yield self.web.post('init', 10, args=args)
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': 'query parameter names must be valid UTF-8',
        })

    @inlineCallbacks
    def test_parameters_out_of_range(self):
        response = yield self.web.post('init', -1, args={b'schema': self.schema, b'contract_name': b'counter'})
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': 'unable to serialize parameters: -1 is out of range for u32 at $, got: -1',
        })

    @inlineCallbacks
    def test_serialize_string(self):
        args = {b'schema': schema_b64(notes_module_schema()).encode('ascii'), b'contract_name': b'notes'}
        response = yield self.web.post('init', '\u03c0', args=args)
        self.assertEqual(response.written_value(), b'02cf80\n')

    @inlineCallbacks
    def test_string_with_lone_surrogate(self):
        args = {b'schema': schema_b64(notes_module_schema()).encode('ascii'), b'contract_name': b'notes'}
        # valid JSON, but it cannot be written as UTF-8
        response = yield self.web.post('init', args=args, raw_body=b'"\\ud800"')
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': 'unable to serialize parameters: string is not valid unicode, it has a lone surrogate at $, '
                     'got: "\\ud800"',
        })

    @inlineCallbacks
    def test_invalid_json_body(self):
        args = {b'schema': self.schema, b'contract_name': b'counter'}
        response = yield self.web.post('init', args=args, raw_body=b'{"a": ')
        self.assertEqual(response.responseCode, 400)
        data = response.json_value()
        self.assertFalse(data['success'])
        self.assertTrue(data['error'].startswith('request body is not valid JSON'))

    @inlineCallbacks
    def test_body_too_large(self):
        args = {b'schema': self.schema, b'contract_name': b'counter'}
        response = yield self.web.post('init', args=args, raw_body=b'1' + b' ' * self._settings.MAX_BODY_SIZE)
        self.assertEqual(response.responseCode, 413)
        self.assertFalse(response.json_value()['success'])

    @inlineCallbacks
    def test_options(self):
        response = yield self.web.options('init')
        self.assertTrue(response.finished)
        self.assertEqual(response.responseHeaders.getRawHeaders(b'access-control-allow-methods'), [b'POST, OPTIONS'])
