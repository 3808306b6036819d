"""Spectral analysis stages of the pitch detector."""

from .dominant_bin import DominantBinFinder
from .spectrum_analyzer import FrequencyAxis, SpectrumAnalyzer

__all__ = ["DominantBinFinder", "FrequencyAxis", "SpectrumAnalyzer"]
