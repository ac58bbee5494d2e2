import base64
import sys
from unittest.mock import patch

from ccdparams.cli import serialize_params
from ccdparams_tests.utils import counter_module_schema, legacy_module_schema


def _run(argv: list[str]) -> int:
    with patch.object(sys, 'argv', ['ccdparams serialize_params'] + argv):
        return serialize_params.main()


def test_init_parameters(tmp_path, capsys):
    params_file = tmp_path / 'params.json'
    params_file.write_text('10')
    schema = base64.b64encode(counter_module_schema().to_bytes()).decode('ascii')

    assert _run(['--schema', schema, '--contract-name', 'counter', str(params_file)]) == 0
    assert capsys.readouterr().out == '0a000000\n'


def test_receive_parameters_from_schema_file(tmp_path, capsys):
    schema_file = tmp_path / 'schema.bin'
    schema_file.write_bytes(legacy_module_schema().to_bytes(versioned=False))
    params_file = tmp_path / 'params.json'
    params_file.write_text('258')

    argv = ['--schema-file', str(schema_file), '--schema-version', '0', '--contract-name', 'legacy',
            '--receive-function-name', 'set', str(params_file)]
    assert _run(argv) == 0
    assert capsys.readouterr().out == '02010000\n'


def test_errors(tmp_path, capsys):
    params_file = tmp_path / 'params.json'
    params_file.write_text('{"enabled": true, "steps": [1, 300]}')
    schema = base64.b64encode(counter_module_schema().to_bytes()).decode('ascii')
    base_argv = ['--schema', schema, '--contract-name', 'counter', '--receive-function-name', 'configure']

    assert _run(base_argv + [str(params_file)]) == 1
    assert capsys.readouterr().err == 'unable to serialize parameters: 300 is out of range for u8\n'

    assert _run(base_argv + ['--verbose-errors', str(params_file)]) == 1
    assert capsys.readouterr().err == (
        'unable to serialize parameters: 300 is out of range for u8 at $.steps[1], got: 300\n'
    )

    params_file.write_text('{')
    assert _run(base_argv + [str(params_file)]) == 1
    assert capsys.readouterr().err.startswith('invalid JSON parameters')

    assert _run(['--schema', '%%', '--contract-name', 'counter', str(params_file)]) == 1
    assert capsys.readouterr().err.startswith('invalid base64 schema')
