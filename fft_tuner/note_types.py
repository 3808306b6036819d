"""Type definitions for the FFT Tuner project."""

from typing import Optional
from dataclasses import dataclass

from .core.config import NO_SIGNAL_MESSAGE


@dataclass(frozen=True)
class NoteLabel:
    """A note name in the Western scale, e.g. A4 or C#3."""

    letter: str  # 'A' through 'G'
    modifier: str  # '' or '#'
    octave: int

    @property
    def pitch_class(self) -> str:
        return f"{self.letter}{self.modifier}"

    def __str__(self):
        return f"{self.letter}{self.modifier}{self.octave}"


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one pipeline cycle."""

    bin_index: int  # Winning FFT bin
    frequency: float  # Frequency of that bin in Hz
    note: Optional[NoteLabel] = None  # None when no signal is in range

    @property
    def has_signal(self) -> bool:
        return self.note is not None

    @property
    def text(self) -> str:
        """Printable form sent to the display."""
        return str(self.note) if self.note is not None else NO_SIGNAL_MESSAGE
