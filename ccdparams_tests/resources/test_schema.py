from twisted.internet.defer import inlineCallbacks

from ccdparams.resources import SchemaResource
from ccdparams_tests.resources.base_resource import StubSite, _BaseResourceTest
from ccdparams_tests.utils import counter_module_schema, legacy_module_schema, schema_b64


class SchemaTest(_BaseResourceTest._ResourceTest):
    def setUp(self):
        super().setUp()
        self.web = StubSite(SchemaResource())

    @inlineCallbacks
    def test_schema_to_json(self):
        response = yield self.web.post('schema', raw_body=schema_b64(counter_module_schema()).encode('ascii'))
        self.assertEqual(response.content_type(), b'application/json; charset=utf-8')
        self.assertEqual(response.json_value(), {
            'counter': {
                'init': {'parameter': 'u32'},
                'event': 'u8',
                'entrypoints': {
                    'configure': {
                        'parameter': {
                            'type': 'struct',
                            'fields': {
                                'enabled': 'bool',
                                'steps': {'type': 'list', 'size_length': 'u16', 'item': 'u8'},
                            },
                        },
                    },
                    'increment': {'parameter': 'u8', 'error': 'unit'},
                    'view': {'returnValue': 'u32'},
                },
            },
        })

    @inlineCallbacks
    def test_legacy_schema(self):
        body = schema_b64(legacy_module_schema(), versioned=False).encode('ascii') + b'\n'
        response = yield self.web.post('schema', raw_body=body, args={b'schema_version': b'0'})
        self.assertEqual(response.json_value(), {
            'legacy': {
                'init': 'u8',
                'state': 'u32',
                'entrypoints': {'set': 'u32'},
            },
        })

        response = yield self.web.post('schema', raw_body=body)
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {
            'success': False,
            'error': 'legacy unversioned schema was supplied, but no schema version was provided',
        })

    @inlineCallbacks
    def test_invalid_body(self):
        response = yield self.web.post('schema', raw_body=b'')
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {'success': False, 'error': 'missing schema in request body'})

        response = yield self.web.post('schema', raw_body=b'%%%')
        self.assertEqual(response.responseCode, 400)
        self.assertEqual(response.json_value(), {'success': False, 'error': 'request body is not valid base64'})

    @inlineCallbacks
    def test_truncated_schema(self):
        # magic, version 3 and a contract count with no contracts after it
        response = yield self.web.post('schema', raw_body=b'//8DAQAAAA==')
        self.assertEqual(response.responseCode, 400)
        data = response.json_value()
        self.assertFalse(data['success'])
        self.assertTrue(data['error'].startswith('invalid schema: '))
