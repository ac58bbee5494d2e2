import sys
import unittest
from contextlib import redirect_stdout
from io import StringIO
from unittest.mock import patch

from structlog.testing import capture_logs

from ccdparams.cli import main


class CliMainTest(unittest.TestCase):
    def test_init(self):
        cli = main.CliManager()
        self.assertEqual(set(cli.command_list), {'run_server', 'schema_to_json', 'serialize_params',
                                                 'generate_openapi_json'})

        f = StringIO()
        with capture_logs():
            with redirect_stdout(f):
                cli.help()
        output = f.getvalue()
        for cmd in cli.command_list:
            self.assertIn(cmd, output)

    def test_help(self):
        cli = main.CliManager()

        f = StringIO()
        with self.assertRaises(SystemExit) as cm:
            with capture_logs():
                with redirect_stdout(f):
                    with patch.object(sys, 'argv', ['ccdparams', 'serialize_params', '--help']):
                        cli.execute_from_command_line()

        # Must exit with code 0
        self.assertEqual(cm.exception.args[0], 0)
        self.assertIn('--contract-name', f.getvalue())

    def test_unknown_command(self):
        cli = main.CliManager()

        f = StringIO()
        with redirect_stdout(f):
            with patch.object(sys, 'argv', ['ccdparams', 'nope']):
                self.assertEqual(cli.execute_from_command_line(), -1)
        self.assertIn('Unknown command: "nope"', f.getvalue())
