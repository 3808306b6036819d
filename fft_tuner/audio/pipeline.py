"""Per-block pitch detection for stereo audio."""

from __future__ import annotations
import numpy as np
from typing import Optional

from ..logging_config import get_logger
from ..note_types import DetectionResult
from ..core.config import ConfigurationError, TunerConfig
from ..core.interfaces import IDisplay
from ..detection.spectrum_analyzer import FrequencyAxis, SpectrumAnalyzer
from ..detection.dominant_bin import DominantBinFinder
from ..services.frequency import PitchClassMapper
from .conversion import mono_float_to_stereo_int16, stereo_int16_to_mono_float

logger = get_logger(__name__)


class PitchDetectionPipeline:
    """Detects the dominant note of each audio block.

    A single host context calls process() once per block. All buffers are
    allocated here and reused; the only state that outlives a block is the
    frequency axis and the note tables, which never change.
    """

    def __init__(
        self,
        config: Optional[TunerConfig] = None,
        display: Optional[IDisplay] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Validated tuner settings, or None for the defaults
            display: Receives the label (or no-signal text) of every block
        """
        self._config = config or TunerConfig()
        self._display = display

        size = self._config.fft_size
        self._frequency_axis = FrequencyAxis(self._config.sample_rate, size)
        self._analyzer = SpectrumAnalyzer(size)
        self._finder = DominantBinFinder(size)
        self._mapper = PitchClassMapper.from_config(self._config)

        self._mono = np.zeros(self._config.mono_block_size, dtype=np.float32)

        logger.info(
            f"Pitch detection pipeline initialized: sample_rate={self._config.sample_rate}, "
            f"fft_size={size}, stereo_block={self._config.stereo_block_size}"
        )

    @property
    def config(self) -> TunerConfig:
        return self._config

    @property
    def frequency_axis(self) -> FrequencyAxis:
        return self._frequency_axis

    @property
    def analyzer(self) -> SpectrumAnalyzer:
        return self._analyzer

    def set_display(self, display: Optional[IDisplay]) -> None:
        """Set the display collaborator.

        Args:
            display: Display or None to stop emitting labels
        """
        self._display = display

    def locate_peak(self, magnitude: np.ndarray) -> int:
        """Winning bin of a magnitude spectrum, with upper-half fallback."""
        return self._finder.find_dominant(magnitude)

    def detect(self, mono: np.ndarray) -> DetectionResult:
        """Run analysis and note mapping on one mono block.

        Args:
            mono: Exactly fft_size samples

        Returns:
            The detection result; its text has also been sent to the display
        """
        magnitude = self._analyzer.analyze(mono)
        bin_index = self.locate_peak(magnitude)
        frequency = self._frequency_axis[bin_index]
        note = self._mapper.frequency_to_note(frequency)

        result = DetectionResult(bin_index=bin_index, frequency=frequency, note=note)
        logger.debug(
            f"bin={bin_index} freq={frequency:.2f}Hz "
            f"magnitude={magnitude[bin_index]:.1f} -> {result.text}"
        )

        if self._display is not None:
            self._display.display_text(result.text)

        return result

    def process(
        self, stereo_in: np.ndarray, stereo_out: np.ndarray, stereo_size: int
    ) -> DetectionResult:
        """Process one interleaved stereo block.

        Args:
            stereo_in: Interleaved int16 input (L0, R0, L1, R1, ...)
            stereo_out: Interleaved int16 output, filled with the mono signal
                on both channels
            stereo_size: Number of int16 values in the block

        Returns:
            The detection result for this block

        Raises:
            ConfigurationError: If the block size does not match the configuration
        """
        expected = self._config.stereo_block_size
        if stereo_size != expected:
            raise ConfigurationError(
                f"Stereo block of {stereo_size} values, expected {expected}"
            )
        if len(stereo_in) < stereo_size or len(stereo_out) < stereo_size:
            raise ConfigurationError(
                f"Stereo buffers must hold {stereo_size} values "
                f"(in={len(stereo_in)}, out={len(stereo_out)})"
            )

        stereo_int16_to_mono_float(stereo_in, self._mono, stereo_size)
        result = self.detect(self._mono)

        # Pass-through
        mono_float_to_stereo_int16(self._mono, stereo_out, stereo_size // 2)
        return result
