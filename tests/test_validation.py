import unittest

from mediabox.errors import InvalidButtonCodeError
from mediabox.validation import (
    check_button_code,
    check_hex_data,
    decode_hex_lenient,
    parse_flag,
    parse_port,
    parse_seconds,
)


class TestHexHelpers(unittest.TestCase):
    def test_decode_lenient(self) -> None:
        cases = {
            "0401": b"\x04\x01",
            "ABcd": b"\xab\xcd",
            "abc": b"\xab",
            "12zz56": b"\x12",
            "zz": b"",
            "": b"",
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(decode_hex_lenient(text), expected)

    def test_check_button_code(self) -> None:
        self.assertEqual(check_button_code("0000000000e0"), "0000000000e0")
        for bad in ("123456", "0000000000e", "0000000000g0", "", None):
            with self.subTest(code=bad):
                with self.assertRaises(InvalidButtonCodeError):
                    check_button_code(bad)

    def test_check_hex_data(self) -> None:
        self.assertEqual(check_hex_data("00ff"), "00ff")
        for bad in ("0", "0x00", "", 12):
            with self.subTest(data=bad):
                with self.assertRaises(InvalidButtonCodeError):
                    check_hex_data(bad)


class TestEnvParsers(unittest.TestCase):
    def test_parse_seconds(self) -> None:
        self.assertEqual(parse_seconds("3", default=1.0), 3.0)
        self.assertEqual(parse_seconds(None, default=1.0), 1.0)
        self.assertEqual(parse_seconds("  ", default=1.0), 1.0)
        self.assertIsNone(parse_seconds("none", default=1.0))
        self.assertIsNone(parse_seconds("0", default=1.0))

    def test_parse_seconds_out_of_range(self) -> None:
        with self.assertLogs("mediabox.validation", level="WARNING"):
            self.assertEqual(parse_seconds("-2", default=1.0, context="t"), 1.0)

    def test_parse_port(self) -> None:
        self.assertEqual(parse_port("5901", default=5900), 5901)
        self.assertEqual(parse_port(None, default=5900), 5900)
        with self.assertLogs("mediabox.validation", level="WARNING"):
            self.assertEqual(parse_port("99999", default=5900), 5900)

    def test_parse_flag(self) -> None:
        self.assertTrue(parse_flag("ON"))
        self.assertFalse(parse_flag("0"))
        self.assertTrue(parse_flag("", default=True))


if __name__ == "__main__":
    unittest.main()
