import tempfile
import unittest
from pathlib import Path

from slicer_landmarks.core.utils import normalize_label, read_files


class TestNormalizeLabel(unittest.TestCase):
    def test_trims_and_collapses(self):
        self.assertEqual(normalize_label("  Foo   Bar "), "Foo Bar")

    def test_tabs_and_newlines_count_as_whitespace(self):
        self.assertEqual(normalize_label("Nasion\t\n  point"), "Nasion point")

    def test_idempotent(self):
        for label in ("Foo Bar", "  a  b  c ", "", "   ", "L1"):
            once = normalize_label(label)
            self.assertEqual(normalize_label(once), once)

    def test_blank_label(self):
        self.assertEqual(normalize_label(" \t "), "")


class TestReadFiles(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_walks_subfolders_and_matches_extension(self):
        (self.root / "a" / "b").mkdir(parents=True)
        (self.root / "top.mrb").write_bytes(b"")
        (self.root / "a" / "b" / "deep.MRB").write_bytes(b"")
        (self.root / "a" / "notes.txt").write_text("x")
        (self.root / "a" / "points.mrk.json").write_text("{}")

        names = sorted(p.name for p in read_files(self.root, ".mrb"))
        self.assertEqual(names, ["deep.MRB", "top.mrb"])
        self.assertEqual([p.name for p in read_files(self.root, ".mrk.json")], ["points.mrk.json"])

    def test_missing_folder(self):
        with self.assertRaises(FileNotFoundError):
            read_files(self.root / "missing", ".mrb")


if __name__ == "__main__":
    unittest.main()
