import copy
import pickle
import unittest
from dataclasses import FrozenInstanceError

from school_intake.catalog import CANONICAL_FIELDS
from school_intake.mapper import map_headers
from school_intake.normalizer import (
    coerce_score,
    normalize_row,
    normalize_rows,
    passthrough_labels,
    placeholder_name,
)


class CoerceScoreTests(unittest.TestCase):
    def test_valid_scores(self):
        self.assertEqual(coerce_score("3"), "3")
        self.assertEqual(coerce_score("3.0"), "3")
        self.assertEqual(coerce_score(""), "")

    def test_invalid_scores(self):
        for value in ["5", "0", "2.5", "abc", "nan", "-1"]:
            self.assertIsNone(coerce_score(value), value)


class NormalizeRowTests(unittest.TestCase):
    def test_every_canonical_field_is_present(self):
        assignments = map_headers(["שם בית הספר", "מנהל/ת", "garbage_col"])
        row = normalize_row(["Example School", "Jane Doe", "xyz"], assignments, 1)
        self.assertEqual(set(row.values), set(CANONICAL_FIELDS))
        self.assertEqual(row.values["name"], "Example School")
        self.assertEqual(row.values["principal"], "Jane Doe")
        others = {k: v for k, v in row.values.items() if k not in {"name", "principal"}}
        self.assertTrue(all(value == "" for value in others.values()))
        self.assertEqual(row.passthrough, {"garbage_col": "xyz"})

    def test_missing_and_extra_cells(self):
        assignments = map_headers(["name", "principal", "notes"])
        short = normalize_row([" A "], assignments, 1)
        self.assertEqual(short.values["name"], "A")
        self.assertEqual(short.values["principal"], "")
        self.assertEqual(short.values["notes"], "")
        long = normalize_row(["A", "B", "C", "spill"], assignments, 2)
        self.assertNotIn("spill", long.values.values())
        self.assertEqual(long.passthrough, {})

    def test_blank_name_gets_positional_placeholder(self):
        assignments = map_headers(["name", "principal"])
        row = normalize_row(["   ", "Jane"], assignments, 7)
        self.assertEqual(row.values["name"], placeholder_name(7))
        self.assertIn("7", row.values["name"])

    def test_invalid_score_is_emptied_with_warning(self):
        assignments = map_headers(["name", "vision_clearAndAgreedScore", "math_linkToDailyLifeScore"])
        warnings = []
        row = normalize_row(["A", "9", "4.0"], assignments, 3, warnings)
        self.assertEqual(row.values["vision_clearAndAgreedScore"], "")
        self.assertEqual(row.values["math_linkToDailyLifeScore"], "4")
        self.assertEqual(len(warnings), 1)
        self.assertIn("Row 3", warnings[0])
        self.assertIn("'9'", warnings[0])

    def test_unmapped_column_named_like_a_field_is_not_merged(self):
        assignments = map_headers(["notes", "notes"])
        row = normalize_row(["first", "second"], assignments, 1)
        self.assertEqual(row.values["notes"], "first")
        self.assertEqual(row.passthrough, {"notes": "second"})

    def test_record_survives_copy_and_pickle(self):
        assignments = map_headers(["name", "extra"])
        record = normalize_row(["A", "kept"], assignments, 1).to_record(4)
        for clone in (copy.copy(record), copy.deepcopy(record), pickle.loads(pickle.dumps(record))):
            self.assertEqual(clone.as_dict(), record.as_dict())
            self.assertEqual(dict(clone.passthrough), {"extra": "kept"})
            self.assertEqual(clone.name, "A")
            with self.assertRaises(TypeError):
                clone.values["name"] = "B"

    def test_to_record_is_read_only(self):
        assignments = map_headers(["name"])
        record = normalize_row(["A"], assignments, 1).to_record(1)
        with self.assertRaises(TypeError):
            record.values["name"] = "B"
        with self.assertRaises(FrozenInstanceError):
            record.id = 2
        copy = record.as_dict()
        copy["name"] = "B"
        self.assertEqual(record.name, "A")
        self.assertEqual(copy["id"], 1)


class PassthroughLabelTests(unittest.TestCase):
    def test_repeated_and_blank_labels(self):
        assignments = map_headers(["foo", "foo", "", "name", "bar"])
        self.assertEqual(passthrough_labels(assignments), {0: "foo", 1: "foo [2]", 4: "bar"})


class NormalizeRowsTests(unittest.TestCase):
    def test_positions_are_one_based_and_warnings_collected(self):
        assignments = map_headers(["name", "vision_clearAndAgreedScore"])
        rows, warnings = normalize_rows([["", "1"], ["B", "x"]], assignments)
        self.assertEqual([row.position for row in rows], [1, 2])
        self.assertEqual(rows[0].values["name"], placeholder_name(1))
        self.assertEqual(len(warnings), 1)
        self.assertIn("Row 2", warnings[0])


if __name__ == "__main__":
    unittest.main()
