import tempfile
import unittest
from datetime import date, datetime
from pathlib import Path
from unittest import mock

import pandas as pd
from openpyxl import Workbook

from school_intake import readers
from school_intake.errors import MalformedSource
from school_intake.readers import (
    DateCell,
    EmptyCell,
    NumberCell,
    TextCell,
    cell_text,
    decode_text,
    detect_delimiter,
    read_delimited_text,
    read_workbook,
    split_line,
    to_cell_value,
)


def save_workbook(path: Path, sheets: dict) -> Path:
    wb = Workbook()
    first = True
    for title, rows in sheets.items():
        ws = wb.active if first else wb.create_sheet(title)
        ws.title = title
        first = False
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


class DelimiterDetectionTests(unittest.TestCase):
    def test_picks_candidate_with_most_segments(self):
        self.assertEqual(detect_delimiter("a,b,c"), ",")
        self.assertEqual(detect_delimiter("a;b;c"), ";")
        self.assertEqual(detect_delimiter("a\tb\tc"), "\t")
        self.assertEqual(detect_delimiter("a;b;c,d"), ";")

    def test_ties_follow_candidate_order(self):
        self.assertEqual(detect_delimiter("a,b;c"), ",")
        self.assertEqual(detect_delimiter("a;b\tc"), ";")
        self.assertEqual(detect_delimiter("single column"), ",")


class CellValueTests(unittest.TestCase):
    def test_classification(self):
        self.assertEqual(to_cell_value(None), EmptyCell())
        self.assertEqual(to_cell_value(float("nan")), EmptyCell())
        self.assertEqual(to_cell_value(pd.NaT), EmptyCell())
        self.assertEqual(to_cell_value(" x\x00 "), TextCell(" x "))
        self.assertEqual(to_cell_value(3), NumberCell(3))
        self.assertEqual(to_cell_value(True), TextCell("TRUE"))
        self.assertEqual(to_cell_value(date(2024, 3, 5)), DateCell(date(2024, 3, 5)))

    def test_rendering(self):
        self.assertEqual(cell_text(to_cell_value(None)), "")
        self.assertEqual(cell_text(to_cell_value(3.0)), "3")
        self.assertEqual(cell_text(to_cell_value(2.5)), "2.5")
        self.assertEqual(cell_text(to_cell_value(420)), "420")
        self.assertEqual(cell_text(to_cell_value(False)), "FALSE")
        self.assertEqual(cell_text(to_cell_value(datetime(2024, 3, 5, 14, 30))), "05/03/2024")
        self.assertEqual(cell_text(to_cell_value(date(2024, 11, 20))), "20/11/2024")
        self.assertEqual(cell_text(to_cell_value(pd.Timestamp("2024-03-05"))), "05/03/2024")
        self.assertEqual(cell_text(to_cell_value("שלום")), "שלום")


class DecodeTextTests(unittest.TestCase):
    def test_utf8_bom_is_removed(self):
        text, encoding = decode_text("\ufeffname,notes\nA,B\n".encode("utf-8"))
        self.assertEqual(text, "name,notes\nA,B\n")
        self.assertEqual(encoding, "utf-8-sig")

    def test_falls_back_to_detected_encoding_per_line(self):
        raw = "שם בית הספר,מנהל/ת\n".encode("cp1255") + "תיכון,דנה\n".encode("utf-8")
        with mock.patch.object(readers, "detect_encoding", return_value="windows-1255"):
            text, encoding = decode_text(raw)
        self.assertEqual(encoding, "windows-1255")
        self.assertEqual(text.splitlines(), ["שם בית הספר,מנהל/ת", "תיכון,דנה"])

    def test_nul_bytes_are_dropped(self):
        with mock.patch.object(readers, "detect_encoding", return_value="ascii"):
            text, _ = decode_text(b"name,no\x00tes\nA,B\n")
        self.assertEqual(text.splitlines()[0], "name,notes")


class DelimitedTextReaderTests(unittest.TestCase):
    def test_crlf_blank_lines_and_bom(self):
        source = read_delimited_text("\ufeffname,principal\r\n\r\nA,B\r\n   \r\nC,D\r\n")
        self.assertEqual(source.headers, ["name", "principal"])
        self.assertEqual(source.rows, [["A", "B"], ["C", "D"]])
        self.assertEqual(source.delimiter, ",")

    def test_cells_are_trimmed_and_unquoted(self):
        source = read_delimited_text('"name" ; "notes"\n  "Example" ;  "a b"  \n')
        self.assertEqual(source.delimiter, ";")
        self.assertEqual(source.headers, ["name", "notes"])
        self.assertEqual(source.rows, [["Example", "a b"]])

    def test_quoted_delimiter_stays_in_cell(self):
        source = read_delimited_text('name,notes\n"Example","a, b"\n')
        self.assertEqual(source.rows, [["Example", "a, b"]])

    def test_inner_apostrophes_are_kept(self):
        source = read_delimited_text("שכבה,הערות\nכיתה ז',בסדר\n")
        self.assertEqual(source.rows, [["כיתה ז'", "בסדר"]])

    def test_ragged_rows_are_kept_as_is(self):
        source = read_delimited_text("a\tb\tc\n1\n1\t2\t3\t4\n")
        self.assertEqual(source.rows, [["1"], ["1", "2", "3", "4"]])

    def test_header_only_is_malformed(self):
        with self.assertRaisesRegex(MalformedSource, "header row and at least one data row"):
            read_delimited_text("name,principal\n\n  \n")

    def test_empty_text_is_malformed(self):
        with self.assertRaises(MalformedSource):
            read_delimited_text("")


class WorkbookReaderTests(unittest.TestCase):
    def test_first_sheet_rendered_to_display_text(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_workbook(
                Path(tmpdir) / "schools.xlsx",
                {
                    "Main": [
                        [" name ", "students", "visit"],
                        ["Example School", 420, datetime(2024, 3, 5)],
                        [None, None, None],
                        ["Other School", 3.5, None],
                    ],
                    "Backup": [["name"], ["Ignored"]],
                },
            )
            source = read_workbook(path, "xlsx")

        self.assertEqual(source.sheet_name, "Main")
        self.assertEqual(source.headers, ["name", "students", "visit"])
        self.assertEqual(
            source.rows,
            [["Example School", "420", "05/03/2024"], ["Other School", "3.5", ""]],
        )
        self.assertTrue(any("Multiple sheets found" in warning for warning in source.warnings))

    def test_accepts_raw_bytes(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_workbook(Path(tmpdir) / "s.xlsx", {"S": [["name"], ["A"]]})
            content = path.read_bytes()
        source = read_workbook(content, ".XLSX")
        self.assertEqual(source.rows, [["A"]])
        self.assertEqual(source.warnings, [])

    def test_single_row_is_malformed(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_workbook(Path(tmpdir) / "s.xlsx", {"S": [["name", "notes"], [None, None]]})
            with self.assertRaisesRegex(MalformedSource, "at least one data row"):
                read_workbook(path, "xlsx")

    def test_unreadable_workbook_raises_value_error(self):
        with self.assertRaisesRegex(ValueError, "Could not read workbook"):
            read_workbook(b"definitely not a workbook", "xlsx")

    def test_missing_xlrd_raises_clear_importerror(self):
        original_import = __import__

        def fake_import(name, globals=None, locals=None, fromlist=(), level=0):
            if name == "xlrd":
                raise ImportError("simulated missing xlrd")
            return original_import(name, globals, locals, fromlist, level)

        with mock.patch("builtins.__import__", side_effect=fake_import):
            with self.assertRaisesRegex(ImportError, r"\.xls files require xlrd"):
                read_workbook(b"not-a-real-xls", "xls")


class CellTolerancePolicyTests(unittest.TestCase):
    def test_workbook_keeps_missing_value_markers_as_text(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_workbook(
                Path(tmpdir) / "s.xlsx",
                {"S": [["name", "notes", "extra"], ["School A", "N/A", None], ["NA", "None", "null"]]},
            )
            source = read_workbook(path, "xlsx")

        self.assertEqual(source.rows, [["School A", "N/A", ""], ["NA", "None", "null"]])

    def test_workbook_row_of_only_marker_text_is_not_blank(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_workbook(Path(tmpdir) / "s.xlsx", {"S": [["name", "notes"], ["NA", "nan"]]})
            source = read_workbook(path, "xlsx")

        self.assertEqual(source.rows, [["NA", "nan"]])

    def test_delimited_text_keeps_missing_value_markers(self):
        source = read_delimited_text("name,notes\nSchool A,N/A\nNA,null\n")
        self.assertEqual(source.rows, [["School A", "N/A"], ["NA", "null"]])

    def test_lone_carriage_return_stays_inside_cell(self):
        source = read_delimited_text("name,notes\nA,line1\rline2\nB,ok\n")
        self.assertEqual(source.rows, [["A", "line1\rline2"], ["B", "ok"]])

    def test_unbalanced_quote_keeps_row(self):
        source = read_delimited_text('name,notes\nA,"open quote\nB,5" screen\n')
        self.assertEqual(source.rows, [["A", "open quote"], ["B", '5" screen']])

    def test_only_one_wrapping_quote_pair_is_removed(self):
        self.assertEqual(readers._clean_cell('"5"" screen"'), '5"" screen')
        self.assertEqual(readers._clean_cell(' "Example" '), "Example")
        self.assertEqual(readers._clean_cell('12"'), '12"')
        self.assertEqual(readers._clean_cell('"'), '"')
        self.assertEqual(split_line('A;12" ;"x"', ";"), ["A", '12"', "x"])


if __name__ == "__main__":
    unittest.main()
