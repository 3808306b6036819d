"""Defines the core interfaces for the FFT Tuner application."""

from __future__ import annotations
from abc import ABC, abstractmethod


class IDisplay(ABC):
    """Interface for anything that shows the detected note."""

    @abstractmethod
    def display_text(self, text: str) -> None:
        """Show a short printable string (a note label or the no-signal text)."""
        pass


class IAudioHost(ABC):
    """Interface for hosts that feed audio blocks into the pipeline."""

    @abstractmethod
    def start(self) -> bool:
        """Start delivering blocks to the pipeline."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop delivering blocks."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Check if the host is running."""
        pass
