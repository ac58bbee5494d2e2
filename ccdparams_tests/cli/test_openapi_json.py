import json
import sys
from unittest.mock import patch

from ccdparams import __version__
from ccdparams.cli import openapi_json


def test_openapi_dict():
    openapi = openapi_json.get_openapi_dict()
    assert openapi['info']['version'] == __version__
    assert set(openapi['paths']) == {'/init', '/update', '/schema'}
    assert openapi['paths']['/init']['post']['operationId'] == 'serialize_init_parameters'


def test_generate_openapi_json(tmp_path):
    out = tmp_path / 'openapi.json'
    with patch.object(sys, 'argv', ['ccdparams generate_openapi_json', str(out)]):
        openapi_json.main()
    assert json.loads(out.read_text()) == openapi_json.get_openapi_dict()
