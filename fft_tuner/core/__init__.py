"""Core components for the FFT Tuner application."""

from .config import ConfigManager, ConfigurationError, TunerConfig

__all__ = ["ConfigManager", "ConfigurationError", "TunerConfig"]
