"""Tests for the JSON export of cell sequences."""

from __future__ import annotations

import json
import re
import unittest
from unittest import mock

from strexplorer import export as export_mod
from strexplorer.cells import decompose

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class CellRecordTests(unittest.TestCase):
    def test_ascii_cell_record_carries_every_encoding(self) -> None:
        (cell,) = decompose("A")
        self.assertEqual(
            export_mod.cell_to_record(cell),
            {
                "group_id": 0,
                "character": {"index": 0, "value": "A"},
                "unicode_scalar": {"index": 0, "value": "A", "code_point": "U+0041"},
                "utf16_code_unit": {"index": 0, "value": 0x41},
                "utf8_code_unit": {"index": 0, "value": 0x41},
            },
        )

    def test_continuation_cells_export_absent_fields_as_null(self) -> None:
        records = json.loads(export_mod.cells_to_json(decompose("é")))

        self.assertEqual(len(records), 2)
        self.assertEqual(records[1]["group_id"], 0)
        self.assertIsNone(records[1]["character"])
        self.assertIsNone(records[1]["unicode_scalar"])
        self.assertIsNone(records[1]["utf16_code_unit"])
        self.assertEqual(records[1]["utf8_code_unit"], {"index": 1, "value": 0xA9})

    def test_json_keeps_non_ascii_text_readable(self) -> None:
        output = export_mod.cells_to_json(decompose("\U0001F600"), indent=None)
        self.assertIn("\U0001F600", output)
        self.assertIn('"code_point": "U+1F600"', output)

    def test_empty_text_exports_empty_list(self) -> None:
        self.assertEqual(export_mod.cells_to_json(decompose("")), "[]")

    def test_lone_surrogates_are_escaped_and_other_text_stays_readable(self) -> None:
        output = export_mod.cells_to_json(decompose(["\udcff", "é"]), indent=None)

        output.encode("utf-8")
        self.assertIn("\\udcff", output)
        self.assertIn("é", output)
        records = json.loads(output)
        self.assertEqual(records[0]["character"]["value"], "\udcff")
        self.assertEqual(records[0]["unicode_scalar"]["code_point"], "U+DCFF")


class HighlightJsonTests(unittest.TestCase):
    def test_highlight_keeps_json_text_under_color(self) -> None:
        source = export_mod.cells_to_json(decompose("A")) + "\n"
        highlighted = export_mod.highlight_json(source, "monokai")
        self.assertEqual(json.loads(ANSI_RE.sub("", highlighted)), json.loads(source))

    def test_unknown_style_falls_back_to_default(self) -> None:
        source = "[]\n"
        highlighted = export_mod.highlight_json(source, "no-such-style")
        self.assertEqual(ANSI_RE.sub("", highlighted).strip(), "[]")

    def test_highlight_failure_returns_source_unchanged(self) -> None:
        export_mod._ensure_pygments_loaded()
        with mock.patch.object(export_mod, "_PYGMENTS_HIGHLIGHT", side_effect=RuntimeError("boom")):
            self.assertEqual(export_mod.highlight_json("[1]\n"), "[1]\n")


if __name__ == "__main__":
    unittest.main()
