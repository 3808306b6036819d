"""Fixed-size FFT of a mono block and the matching frequency axis."""

from __future__ import annotations
import numpy as np

from ..logging_config import get_logger
from ..core.config import ConfigurationError, is_power_of_two

logger = get_logger(__name__)


class FrequencyAxis:
    """Lookup from FFT bin index to frequency in Hz.

    Computed once; the underlying array is read-only.
    """

    def __init__(self, sample_rate: int, size: int) -> None:
        if sample_rate <= 0:
            raise ConfigurationError("Sample rate must be positive")
        if size <= 0:
            raise ConfigurationError("Frequency axis size must be positive")

        self._sample_rate = sample_rate
        self._size = size
        self._values = np.arange(size, dtype=np.float64) * (sample_rate / size)
        self._values.setflags(write=False)

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> float:
        return float(self._values[index])

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def bin_width(self) -> float:
        """Width of one bin in Hz."""
        return self._sample_rate / self._size


class SpectrumAnalyzer:
    """Turns a mono block into a magnitude spectrum.

    No window is applied, so leakage between neighbouring bins is expected.
    The complex and magnitude buffers are allocated once and overwritten by
    every call to analyze(); the returned array is that shared buffer.
    """

    def __init__(self, size: int) -> None:
        """Initialize the analyzer.

        Args:
            size: Transform length; must be a power of two

        Raises:
            ConfigurationError: If size is not a power of two
        """
        if not is_power_of_two(size):
            raise ConfigurationError(f"FFT size must be a power of two, got {size}")

        self._size = size
        self._complex = np.zeros(size, dtype=np.complex128)
        self._magnitude = np.zeros(size, dtype=np.float64)

        logger.debug(f"Spectrum analyzer initialized: size={size}")

    @property
    def complex_spectrum(self) -> np.ndarray:
        """Last transform as interleaved real/imaginary pairs (2 * size floats)."""
        return self._complex.view(np.float64)

    @property
    def magnitude(self) -> np.ndarray:
        return self._magnitude

    def analyze(self, mono: np.ndarray) -> np.ndarray:
        """Compute the magnitude spectrum of a mono block.

        Args:
            mono: Exactly one transform length of real samples

        Returns:
            Magnitude of every bin, magnitude[i] = sqrt(re[i]**2 + im[i]**2)
        """
        if mono.shape != (self._size,):
            raise ConfigurationError(
                f"Expected {self._size} mono samples, got shape {mono.shape}"
            )

        # Real part carries the signal, imaginary part is zero
        self._complex[:] = mono
        self._complex[:] = np.fft.fft(self._complex)
        np.abs(self._complex, out=self._magnitude)
        return self._magnitude
