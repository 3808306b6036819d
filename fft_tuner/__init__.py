"""FFT Tuner - monophonic pitch detection for stereo audio blocks."""

__version__ = "0.1.0"
