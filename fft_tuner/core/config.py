"""Configuration management for FFT Tuner components."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

from ..logging_config import get_logger

logger = get_logger(__name__)

# Audio defaults
SAMPLING_RATE_HZ = 16000
FFT_SIZE = 4096  # must be a power of two
DOUBLE_AUDIO_BUFFER_SIZE = 16384  # int16 values, interrupts at half and full

# Sample rates an audio codec host can be clocked at
SUPPORTED_SAMPLE_RATES: Tuple[int, ...] = (
    8000,
    11025,
    16000,
    22050,
    32000,
    44100,
    48000,
    96000,
    192000,
)

# Calibration constants for the note mapping
REFERENCE_FREQUENCY = 440.0  # A4
OCTAVE_OFFSET = 46  # ceil((semitones + 46) / 12) puts A4 in octave 4
MIN_FREQUENCY = 80.0  # Hz, just below E2
MAX_FREQUENCY = 4000.0  # Hz, around B7

NO_SIGNAL_MESSAGE = "No signal is detected"


class ConfigurationError(ValueError):
    """Raised when the tuner is configured or driven with unsupported sizes."""


def is_power_of_two(value: int) -> bool:
    return value > 0 and (value & (value - 1)) == 0


@dataclass(frozen=True)
class TunerConfig:
    """Immutable settings shared by every stage of the detection pipeline."""

    sample_rate: int = SAMPLING_RATE_HZ
    fft_size: int = FFT_SIZE
    double_buffer_size: int = DOUBLE_AUDIO_BUFFER_SIZE
    reference_frequency: float = REFERENCE_FREQUENCY
    octave_offset: int = OCTAVE_OFFSET
    min_frequency: float = MIN_FREQUENCY
    max_frequency: float = MAX_FREQUENCY

    def __post_init__(self) -> None:
        self.validate()

    @property
    def stereo_block_size(self) -> int:
        """Number of interleaved int16 values handed over per interrupt."""
        return self.double_buffer_size // 2

    @property
    def mono_block_size(self) -> int:
        """Number of frames (mono samples) per block."""
        return self.stereo_block_size // 2

    @property
    def fold_threshold(self) -> int:
        """Bins above this index are treated as upper-half artifacts."""
        return self.fft_size // 2

    @property
    def bin_width(self) -> float:
        return self.sample_rate / self.fft_size

    @property
    def block_period(self) -> float:
        """Seconds between two block-ready callbacks."""
        return self.mono_block_size / self.sample_rate

    def validate(self) -> None:
        """Check the settings, raising ConfigurationError on the first problem."""
        if self.sample_rate not in SUPPORTED_SAMPLE_RATES:
            raise ConfigurationError(
                f"Unsupported sample rate {self.sample_rate} Hz; "
                f"expected one of {SUPPORTED_SAMPLE_RATES}"
            )
        if not is_power_of_two(self.fft_size) or self.fft_size < 2:
            raise ConfigurationError(
                f"FFT size must be a power of two >= 2, got {self.fft_size}"
            )
        if self.double_buffer_size % 4 != 0:
            raise ConfigurationError(
                f"Double buffer size {self.double_buffer_size} does not split "
                "into two stereo halves"
            )
        if self.mono_block_size != self.fft_size:
            raise ConfigurationError(
                f"Mono block of {self.mono_block_size} samples does not match "
                f"FFT size {self.fft_size}"
            )
        if self.reference_frequency <= 0:
            raise ConfigurationError("Reference frequency must be positive")
        if not 0 < self.min_frequency < self.max_frequency:
            raise ConfigurationError(
                f"Invalid frequency range {self.min_frequency}-{self.max_frequency} Hz"
            )

    @classmethod
    def for_fft_size(cls, fft_size: int, **kwargs) -> "TunerConfig":
        """Build a config whose double buffer exactly feeds one transform per half."""
        return cls(fft_size=fft_size, double_buffer_size=4 * fft_size, **kwargs)


class ConfigManager:
    """Configuration manager for FFT Tuner components.

    Holds named configuration sections in memory. Nothing is persisted; the
    pipeline section is frozen into a TunerConfig when a pipeline is built.
    """

    def __init__(self, overrides: Optional[Dict[str, Dict[str, Any]]] = None):
        """Initialize the configuration manager.

        Args:
            overrides: Per-section values replacing the defaults
        """
        # Default configurations
        self.default_configs: Dict[str, Dict[str, Any]] = {
            "pipeline": {f.name: f.default for f in fields(TunerConfig)},
            "audio_host": {
                "device": None,
                "realtime": False,
            },
        }

        self.configs = {
            name: default.copy() for name, default in self.default_configs.items()
        }
        for name, updates in (overrides or {}).items():
            if not self.update_config(name, updates):
                raise ConfigurationError(f"Unknown configuration section: {name}")

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get configuration by name.

        Args:
            name: Configuration name

        Returns:
            Configuration dictionary
        """
        return self.configs.get(name, {}).copy()

    def update_config(self, name: str, updates: Dict[str, Any]) -> bool:
        """Update a configuration section.

        Args:
            name: Configuration name
            updates: Dictionary of updates to apply

        Returns:
            True if updated, False if the section is unknown

        Raises:
            ConfigurationError: If a key is not a setting of the section
        """
        if name not in self.configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        unknown = sorted(set(updates) - set(self.default_configs[name]))
        if unknown:
            raise ConfigurationError(
                f"Unknown {name} settings: {', '.join(unknown)}"
            )

        self.configs[name].update(updates)
        logger.debug(f"Updated configuration {name}: {updates}")
        return True

    def reset_config(self, name: str) -> bool:
        """Reset configuration to default.

        Args:
            name: Configuration name

        Returns:
            True if reset successfully, False otherwise
        """
        if name not in self.default_configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name] = self.default_configs[name].copy()
        return True

    def tuner_config(self) -> TunerConfig:
        """Freeze the pipeline section into a validated TunerConfig.

        Raises:
            ConfigurationError: If the settings cannot drive the pipeline
        """
        config = TunerConfig(**self.configs["pipeline"])
        logger.info(
            f"Tuner configured: sample_rate={config.sample_rate}Hz, "
            f"fft_size={config.fft_size}, bin_width={config.bin_width:.3f}Hz"
        )
        return config
