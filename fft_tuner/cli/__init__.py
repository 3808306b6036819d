"""Command-line interface for FFT Tuner."""

from .main import main as run_cli

__all__ = ["run_cli"]
