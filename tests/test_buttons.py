import json
import tempfile
import unittest
from pathlib import Path

from mediabox.buttons import ButtonTable


class TestButtonTable(unittest.TestCase):
    def test_find_by_name_exact_match(self) -> None:
        table = ButtonTable([{"name": "power", "code": "0000000000e0"}, {"name": "Power", "code": "0000000000e1"}])

        self.assertEqual(table.find_by_name("power"), "0000000000e0")
        self.assertEqual(table.find_by_name("Power"), "0000000000e1")
        self.assertIsNone(table.find_by_name("POWER"))
        self.assertIsNone(table.find_by_name("power "))

    def test_container_protocol(self) -> None:
        table = ButtonTable([{"name": "up", "code": "000000000001"}, {"name": "down", "code": "000000000002"}])

        self.assertEqual(len(table), 2)
        self.assertIn("up", table)
        self.assertNotIn("left", table)
        self.assertEqual(table.names(), ["up", "down"])
        self.assertEqual(list(table), [("up", "000000000001"), ("down", "000000000002")])

    def test_malformed_records_rejected(self) -> None:
        for records in ([{"name": "up"}], [{"name": 1, "code": "00"}], ["up"]):
            with self.subTest(records=records):
                with self.assertRaises(ValueError):
                    ButtonTable(records)

    def test_load_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "buttons.yaml"
            path.write_text(
                "buttons:\n"
                "  - name: ok\n"
                "    code: '0000000000e5'\n"
                "  - name: back\n"
                "    code: '0000000000e6'\n",
                encoding="utf-8",
            )

            with self.assertLogs("mediabox.buttons", level="INFO"):
                table = ButtonTable.load(path)

        self.assertEqual(table.find_by_name("back"), "0000000000e6")

    def test_load_json_list(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "buttons.json"
            path.write_text(json.dumps([{"name": "mute", "code": "0000000000ef"}]), encoding="utf-8")

            table = ButtonTable.load(str(path))

        self.assertEqual(table.names(), ["mute"])

    def test_load_rejects_unknown_format(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "buttons.txt"
            path.write_text("ok=0000000000e5", encoding="utf-8")

            with self.assertRaises(ValueError):
                ButtonTable.load(path)

    def test_load_rejects_bad_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "buttons.json"
            path.write_text(json.dumps({"buttons": {"ok": "0000000000e5"}}), encoding="utf-8")

            with self.assertRaises(ValueError):
                ButtonTable.load(path)


if __name__ == "__main__":
    unittest.main()
