import csv
import tempfile
import unittest
from pathlib import Path

from slicer_landmarks.core.aggregation import FileCoordinateSet, LandmarkAggregation
from slicer_landmarks.core.collation import NaturalCollator
from slicer_landmarks.core.coordinates import Coordinate
from slicer_landmarks.core.reports import (
    build_main_data_table,
    build_statistics_table,
    format_value,
    write_reports,
)


def _scenario():
    """File A: Tip (RAS 1,2,3). File B: Tip (LPS 1,2,3) and Base (RAS 0,0,0)."""
    file_a = FileCoordinateSet("File A.mrb", {"Tip": Coordinate(1.0, 2.0, 3.0)})
    file_b = FileCoordinateSet(
        "File B.mrb", {"Tip": Coordinate(-1.0, -2.0, 3.0), "Base": Coordinate(0.0, 0.0, 0.0)}
    )
    return LandmarkAggregation.build([file_b, file_a], NaturalCollator(transform=lambda s: s))


def _read_csv(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestFormatValue(unittest.TestCase):
    def test_default_decimal_text(self):
        self.assertEqual(format_value(1.0), "1")
        self.assertEqual(format_value(-2.5), "-2.5")
        self.assertEqual(format_value(0.1), "0.1")
        self.assertEqual(format_value(1e-5), "0.00001")
        self.assertEqual(format_value(123456.789), "123456.789")

    def test_nan(self):
        self.assertEqual(format_value(float("nan")), "nan")


class TestMainDataTable(unittest.TestCase):
    def test_scenario(self):
        table = build_main_data_table(_scenario())
        self.assertEqual(
            list(table.columns), ["File A.mrb", "R", "A", "S", "File B.mrb", "R", "A", "S"]
        )
        self.assertEqual(
            table.values.tolist(),
            [
                ["Base", "", "", "", "Base", "0", "0", "0"],
                ["Tip", "1", "2", "3", "Tip", "-1", "-2", "3"],
            ],
        )

    def test_rectangular_when_everything_is_missing(self):
        files = [FileCoordinateSet(f"s{i}.mrb") for i in range(3)]
        aggregation = LandmarkAggregation(tuple(files), ("L1", "L2"))
        table = build_main_data_table(aggregation)
        self.assertEqual(table.shape, (2, 12))
        self.assertEqual(table.iloc[1].tolist(), ["L2", "", "", ""] * 3)


class TestStatisticsTable(unittest.TestCase):
    def test_scenario(self):
        table = build_statistics_table(_scenario())
        self.assertEqual(list(table.columns), ["Samples", "Base__A", "Base__S", "Tip__A", "Tip__S"])
        self.assertEqual(
            table.values.tolist(),
            [["File A.mrb", "", "", "2", "3"], ["File B.mrb", "0", "0", "-2", "3"]],
        )

    def test_rectangular_when_everything_is_missing(self):
        files = [FileCoordinateSet(f"s{i}.mrb") for i in range(3)]
        aggregation = LandmarkAggregation(tuple(files), ("L1", "L2"))
        table = build_statistics_table(aggregation)
        self.assertEqual(table.shape, (3, 5))
        self.assertEqual(table.iloc[0].tolist(), ["s0.mrb", "", "", "", ""])

    def test_no_samples(self):
        table = build_statistics_table(LandmarkAggregation((), ("L1",)))
        self.assertEqual(list(table.columns), ["Samples", "L1__A", "L1__S"])
        self.assertEqual(len(table), 0)


class TestWriteReports(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.out = Path(self._tmp.name) / "reports"

    def tearDown(self):
        self._tmp.cleanup()

    def test_writes_both_files(self):
        result = write_reports(_scenario(), self.out)
        self.assertEqual(result.main_data_path, self.out / "main data.csv")
        self.assertEqual(result.statistics_path, self.out / "statistics.csv")
        self.assertEqual((result.landmark_count, result.sample_count), (2, 2))

        main_rows = _read_csv(result.main_data_path)
        self.assertEqual(len(main_rows), 3)
        self.assertTrue(all(len(row) == 8 for row in main_rows))
        self.assertEqual(main_rows[0], ["File A.mrb", "R", "A", "S", "File B.mrb", "R", "A", "S"])
        self.assertEqual(main_rows[1], ["Base", "", "", "", "Base", "0", "0", "0"])

        stats_rows = _read_csv(result.statistics_path)
        self.assertEqual(len(stats_rows), 3)
        self.assertTrue(all(len(row) == 5 for row in stats_rows))
        self.assertEqual(stats_rows[2], ["File B.mrb", "0", "0", "-2", "3"])

    def test_labels_with_commas_are_quoted(self):
        files = [FileCoordinateSet("a.mrb", {"Tip, left": Coordinate(1.0, 2.0, 3.0)})]
        result = write_reports(LandmarkAggregation(tuple(files), ("Tip, left",)), self.out)
        self.assertEqual(_read_csv(result.statistics_path)[0], ["Samples", "Tip, left__A", "Tip, left__S"])


if __name__ == "__main__":
    unittest.main()
