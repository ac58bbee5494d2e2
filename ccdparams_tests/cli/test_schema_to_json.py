import base64
import json
import sys
from unittest.mock import patch

from ccdparams.cli import schema_to_json
from ccdparams_tests.utils import legacy_module_schema, v1_module_schema


def _run(argv: list[str]) -> int:
    with patch.object(sys, 'argv', ['ccdparams schema_to_json'] + argv):
        return schema_to_json.main()


def test_binary_schema(tmp_path, capsys):
    schema_file = tmp_path / 'schema.bin'
    schema_file.write_bytes(v1_module_schema().to_bytes())

    assert _run([str(schema_file)]) == 0
    assert json.loads(capsys.readouterr().out) == v1_module_schema().to_json()


def test_base64_schema(tmp_path, capsys):
    schema_file = tmp_path / 'schema.b64'
    schema_file.write_bytes(base64.b64encode(legacy_module_schema().to_bytes(versioned=False)) + b'\n')

    assert _run(['--base64', '--schema-version', '0', '--indent', '2', str(schema_file)]) == 0
    out = capsys.readouterr().out
    assert json.loads(out) == {'legacy': {'init': 'u8', 'state': 'u32', 'entrypoints': {'set': 'u32'}}}
    assert '\n  "legacy"' in out


def test_invalid_schema(tmp_path, capsys):
    schema_file = tmp_path / 'schema.bin'
    schema_file.write_bytes(legacy_module_schema().to_bytes(versioned=False))
    assert _run([str(schema_file)]) == 1
    assert 'no schema version was provided' in capsys.readouterr().err

    schema_file.write_bytes(b'not base64!')
    assert _run(['--base64', str(schema_file)]) == 1
    assert capsys.readouterr().err.startswith('invalid base64')
