import itertools
import math
import unittest

from slicer_landmarks.core.coordinates import Coordinate, axis_mapping, to_ras
from slicer_landmarks.core.errors import CoordinateSystemError


class TestToRas(unittest.TestCase):
    def test_lps_inverts_left_and_posterior(self):
        self.assertEqual(to_ras("LPS", (1, 2, 3)), Coordinate(-1.0, -2.0, 3.0))

    def test_ras_is_unchanged(self):
        self.assertEqual(to_ras("RAS", (1, 2, 3)), Coordinate(1.0, 2.0, 3.0))

    def test_lowercase_code_inverts_like_uppercase(self):
        self.assertEqual(to_ras("lps", (1, 2, 3)), Coordinate(-1.0, -2.0, 3.0))
        self.assertEqual(to_ras("rAs", (1, 2, 3)), Coordinate(1.0, 2.0, 3.0))

    def test_permuted_axes_pick_the_right_component(self):
        # component 0 is superior, 1 is left, 2 is anterior
        self.assertEqual(to_ras("SLA", (10, 20, 30)), Coordinate(-20.0, 30.0, 10.0))
        self.assertEqual(to_ras("IRP", (1.5, -2.5, 4.0)), Coordinate(-2.5, -4.0, -1.5))

    def test_every_valid_code_is_invertible(self):
        """Undoing the sign rule on the output gives back the raw vector."""
        raw = (1.25, -7.5, 42.0)
        pairs = (("R", "L"), ("A", "P"), ("S", "I"))
        for letters in itertools.product(*pairs):
            for order in itertools.permutations(letters):
                code = "".join(order)
                coordinate = to_ras(code, raw)
                recovered = [0.0, 0.0, 0.0]
                for value, (idx, sign) in zip(
                    (coordinate.r, coordinate.a, coordinate.s), axis_mapping(code)
                ):
                    recovered[idx] = sign * value
                self.assertEqual(tuple(recovered), raw, code)

    def test_nan_passes_through(self):
        coordinate = to_ras("LPS", (float("nan"), 2, 3))
        self.assertTrue(math.isnan(coordinate.r))
        self.assertEqual((coordinate.a, coordinate.s), (-2.0, 3.0))

    def test_as_array(self):
        self.assertEqual(Coordinate(1.0, 2.0, 3.0).as_array().tolist(), [1.0, 2.0, 3.0])


class TestAxisValidation(unittest.TestCase):
    def test_missing_axis_letter(self):
        with self.assertRaises(CoordinateSystemError) as ctx:
            to_ras("XAS", (1, 2, 3))
        self.assertEqual(ctx.exception.code, "XAS")

    def test_missing_pair_reports_both_letters(self):
        with self.assertRaises(CoordinateSystemError) as ctx:
            axis_mapping("RAR")
        self.assertIn("S or I", str(ctx.exception))

    def test_wrong_length(self):
        for code in ("", "RA", "RASL", "LPSX"):
            with self.subTest(code=code):
                with self.assertRaises(CoordinateSystemError):
                    to_ras(code, (1, 2, 3))

    def test_duplicate_pair_is_rejected(self):
        with self.assertRaises(CoordinateSystemError):
            to_ras("RLS", (1, 2, 3))

    def test_error_names_the_source(self):
        with self.assertRaises(CoordinateSystemError) as ctx:
            to_ras("XAS", (1, 2, 3), source="subject01.mrb")
        self.assertEqual(ctx.exception.source, "subject01.mrb")
        self.assertIn("subject01.mrb", str(ctx.exception))

    def test_position_must_have_three_components(self):
        with self.assertRaises(ValueError):
            to_ras("RAS", (1, 2))


if __name__ == "__main__":
    unittest.main()
