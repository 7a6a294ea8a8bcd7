import logging
import os
import unittest
from unittest import mock

from mediabox.logs import configure_logging, debug_enabled


class TestLogging(unittest.TestCase):
    def test_debug_flag_values(self) -> None:
        for value, expected in (("1", True), ("Yes", True), ("on", True), ("0", False), ("", False)):
            with self.subTest(value=value):
                with mock.patch.dict(os.environ, {"DEBUG": value}):
                    self.assertIs(debug_enabled(), expected)

    def test_configure_logging_levels(self) -> None:
        with mock.patch("logging.basicConfig") as basic:
            configure_logging(debug=True)
            configure_logging(debug=False)

        self.assertEqual(basic.call_args_list[0].kwargs["level"], logging.DEBUG)
        self.assertEqual(basic.call_args_list[1].kwargs["level"], logging.INFO)

    def test_configure_logging_uses_env(self) -> None:
        with mock.patch.dict(os.environ, {"DEBUG": "true"}), mock.patch("logging.basicConfig") as basic:
            configure_logging()

        self.assertEqual(basic.call_args.kwargs["level"], logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
