"""Centralized logging configuration for FFT Tuner.

This module provides a consistent way to configure logging across the application.
"""

import logging
import sys
from typing import Optional

# Log levels for different modules
MODULE_LOG_LEVELS = {
    # Core modules
    "fft_tuner": logging.INFO,
    "fft_tuner.core": logging.INFO,
    # Detection chain; DEBUG here logs every processed block
    "fft_tuner.audio.pipeline": logging.INFO,
    "fft_tuner.detection": logging.INFO,
    "fft_tuner.services.frequency": logging.WARNING,
    # Hosts
    "fft_tuner.services.audio_providers": logging.INFO,
    "fft_tuner.services.live_audio": logging.INFO,
    "fft_tuner.cli": logging.INFO,
    "fft_tuner.ui": logging.WARNING,
    # Libraries/third-party
    "numpy": logging.ERROR,
    # Root logger
    "": logging.ERROR,
}

# Shared console handler
_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'fft_tuner' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    # Create a single, shared console handler if it doesn't exist
    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)

    # Determine log levels
    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("fft_tuner"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    # Apply module-specific levels
    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name)
        logger.setLevel(module_level)

        # Clear existing handlers and add the shared one
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_console_handler)
        logger.propagate = False

    logging.getLogger("fft_tuner").debug("Logging configuration complete")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module of this package.

    Names outside the package (``__main__`` when a module runs as a script)
    are nested under ``fft_tuner`` so MODULE_LOG_LEVELS and the shared
    handler still apply to them.
    """
    if name != "fft_tuner" and not name.startswith("fft_tuner."):
        name = f"fft_tuner.{name}"
    return logging.getLogger(name)
