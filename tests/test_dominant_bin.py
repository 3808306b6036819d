import unittest

import numpy as np

from fft_tuner.detection.dominant_bin import DominantBinFinder


class TestFindMax(unittest.TestCase):
    def setUp(self):
        self.finder = DominantBinFinder(8)

    def test_single_maximum(self):
        magnitude = np.array([0.0, 1.0, 5.0, 2.0, 0.5, 0.0, 0.0, 0.0])
        self.assertEqual(self.finder.find_max(magnitude, 8), 2)

    def test_ties_resolve_to_lowest_index(self):
        magnitude = np.array([1.0, 7.0, 3.0, 7.0, 7.0, 0.0, 0.0, 0.0])
        self.assertEqual(self.finder.find_max(magnitude, 8), 1)

    def test_range_is_exclusive(self):
        magnitude = np.array([0.0, 1.0, 5.0, 2.0, 9.0, 0.0, 0.0, 0.0])
        self.assertEqual(self.finder.find_max(magnitude, 4), 2)
        self.assertEqual(self.finder.find_max(magnitude, 5), 4)

    def test_range_of_one_returns_first_bin(self):
        magnitude = np.array([0.0, 1.0, 5.0, 2.0, 9.0, 0.0, 0.0, 0.0])
        self.assertEqual(self.finder.find_max(magnitude, 1), 0)

    def test_flat_spectrum_returns_first_bin(self):
        self.assertEqual(self.finder.find_max(np.zeros(8), 8), 0)

    def test_invalid_range_rejected(self):
        magnitude = np.ones(8)
        with self.assertRaises(ValueError):
            self.finder.find_max(magnitude, 0)
        with self.assertRaises(ValueError):
            self.finder.find_max(magnitude, 9)


class TestFindDominant(unittest.TestCase):
    """The upper-half fallback is a heuristic; these pin its exact behaviour."""

    def setUp(self):
        self.finder = DominantBinFinder(16)

    def test_peak_in_lower_half_kept(self):
        magnitude = np.zeros(16)
        magnitude[3] = 5.0
        magnitude[12] = 4.0
        self.assertEqual(self.finder.find_dominant(magnitude), 3)

    def test_peak_above_fold_falls_back_to_lower_half(self):
        magnitude = np.zeros(16)
        magnitude[12] = 10.0
        magnitude[3] = 5.0
        self.assertEqual(self.finder.find_dominant(magnitude), 3)

    def test_peak_exactly_at_fold_kept(self):
        magnitude = np.zeros(16)
        magnitude[8] = 10.0
        magnitude[3] = 5.0
        self.assertEqual(self.finder.find_dominant(magnitude), 8)

    def test_fallback_searches_strictly_below_fold(self):
        magnitude = np.zeros(16)
        magnitude[9] = 10.0
        magnitude[8] = 9.0
        magnitude[2] = 1.0
        self.assertEqual(self.finder.find_dominant(magnitude), 2)


if __name__ == "__main__":
    unittest.main()
