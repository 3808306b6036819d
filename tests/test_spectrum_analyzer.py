import unittest

import numpy as np

from fft_tuner.core.config import ConfigurationError
from fft_tuner.detection.spectrum_analyzer import FrequencyAxis, SpectrumAnalyzer


class TestFrequencyAxis(unittest.TestCase):
    def test_bin_frequencies(self):
        axis = FrequencyAxis(16000, 4096)
        self.assertEqual(len(axis), 4096)
        self.assertEqual(axis[0], 0.0)
        self.assertAlmostEqual(axis[1], 3.90625)
        self.assertAlmostEqual(axis[113], 113 * 16000 / 4096)
        self.assertAlmostEqual(axis[2048], 8000.0)
        self.assertAlmostEqual(axis.bin_width, 3.90625)

    def test_axis_is_read_only(self):
        axis = FrequencyAxis(16000, 64)
        with self.assertRaises(ValueError):
            axis.values[3] = 1.0

    def test_invalid_parameters(self):
        with self.assertRaises(ConfigurationError):
            FrequencyAxis(0, 64)
        with self.assertRaises(ConfigurationError):
            FrequencyAxis(16000, 0)


class TestSpectrumAnalyzer(unittest.TestCase):
    def test_rejects_non_power_of_two(self):
        with self.assertRaises(ConfigurationError):
            SpectrumAnalyzer(3000)

    def test_rejects_wrong_block_length(self):
        analyzer = SpectrumAnalyzer(64)
        with self.assertRaises(ConfigurationError):
            analyzer.analyze(np.zeros(32, dtype=np.float32))

    def test_impulse_has_flat_spectrum(self):
        analyzer = SpectrumAnalyzer(64)
        mono = np.zeros(64, dtype=np.float32)
        mono[0] = 1.0
        np.testing.assert_allclose(analyzer.analyze(mono), np.ones(64))

    def test_cosine_on_bin_center(self):
        size = 256
        k = 10
        n = np.arange(size)
        mono = np.cos(2 * np.pi * k * n / size).astype(np.float32)

        magnitude = SpectrumAnalyzer(size).analyze(mono)

        self.assertAlmostEqual(magnitude[k], size / 2, places=2)
        self.assertAlmostEqual(magnitude[size - k], size / 2, places=2)
        others = np.delete(magnitude, [k, size - k])
        self.assertLess(others.max(), 1e-3)

    def test_magnitude_matches_complex_spectrum(self):
        rng = np.random.default_rng(7)
        mono = rng.normal(size=128).astype(np.float32)
        analyzer = SpectrumAnalyzer(128)

        magnitude = analyzer.analyze(mono)

        interleaved = analyzer.complex_spectrum
        self.assertEqual(interleaved.shape, (256,))
        real, imag = interleaved[0::2], interleaved[1::2]
        np.testing.assert_allclose(magnitude, np.sqrt(real**2 + imag**2))
        np.testing.assert_allclose(magnitude, np.abs(np.fft.fft(mono)), rtol=1e-5, atol=1e-4)

    def test_output_buffer_is_reused(self):
        analyzer = SpectrumAnalyzer(64)
        first = analyzer.analyze(np.ones(64, dtype=np.float32))
        second = analyzer.analyze(np.zeros(64, dtype=np.float32))
        self.assertIs(first, second)
        self.assertIs(second, analyzer.magnitude)
        self.assertEqual(second.max(), 0.0)

    def test_deterministic(self):
        rng = np.random.default_rng(3)
        mono = rng.normal(size=64).astype(np.float32)
        analyzer = SpectrumAnalyzer(64)
        first = analyzer.analyze(mono).copy()
        np.testing.assert_array_equal(analyzer.analyze(mono), first)


if __name__ == "__main__":
    unittest.main()
