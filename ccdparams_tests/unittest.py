from unittest import main as ut_main

from structlog import get_logger
from twisted.trial import unittest

from ccdparams.conf.get_settings import get_global_settings

logger = get_logger()
main = ut_main


class TestCase(unittest.TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.log = logger.new()
        self._settings = get_global_settings()

    def assertHexEqual(self, data: bytes, expected_hex: str) -> None:
        self.assertEqual(data.hex(), expected_hex)
