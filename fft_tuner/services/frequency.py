#!/usr/bin/env python3

import math
import numpy as np
import logging
from typing import (
    ClassVar,
    Optional,
    Tuple,
    TypeAlias,
)

from ..core.config import (
    MAX_FREQUENCY,
    MIN_FREQUENCY,
    OCTAVE_OFFSET,
    REFERENCE_FREQUENCY,
)
from ..note_types import NoteLabel

logger = logging.getLogger(__name__)


class PitchClassMapper:
    # Type aliases
    NoteLetter: TypeAlias = str
    Modifier: TypeAlias = str

    # Chromatic scale starting at the reference pitch class (A)
    NOTE_LETTERS: ClassVar[Tuple[NoteLetter, ...]] = (
        "A",
        "A",
        "B",
        "C",
        "C",
        "D",
        "D",
        "E",
        "F",
        "F",
        "G",
        "G",
    )

    MODIFIERS: ClassVar[Tuple[Modifier, ...]] = (
        "",
        "#",
        "",
        "",
        "#",
        "",
        "#",
        "",
        "",
        "#",
        "",
        "#",
    )

    def __init__(
        self,
        reference_frequency: float = REFERENCE_FREQUENCY,
        octave_offset: int = OCTAVE_OFFSET,
        min_frequency: float = MIN_FREQUENCY,
        max_frequency: float = MAX_FREQUENCY,
    ) -> None:
        self._reference_frequency = reference_frequency
        self._octave_offset = octave_offset
        self._min_frequency = min_frequency
        self._max_frequency = max_frequency

    @classmethod
    def from_config(cls, config) -> "PitchClassMapper":
        return cls(
            reference_frequency=config.reference_frequency,
            octave_offset=config.octave_offset,
            min_frequency=config.min_frequency,
            max_frequency=config.max_frequency,
        )

    def in_range(self, frequency: float) -> bool:
        return self._min_frequency <= frequency <= self._max_frequency

    def semitones_from_reference(self, frequency: float) -> int:
        """Nearest whole number of semitones between frequency and the reference.

        Python's round() is used, so an exact half-semitone goes to the even
        neighbour.
        """
        return int(round(12 * np.log2(frequency / self._reference_frequency)))

    def octave_for(self, semitones: int) -> int:
        return math.ceil((semitones + self._octave_offset) / 12.0)

    @staticmethod
    def class_index(semitones: int) -> int:
        return (semitones % 12 + 12) % 12

    def frequency_to_note(self, frequency: float) -> Optional[NoteLabel]:
        """Convert a frequency in Hz to the nearest note.

        Args:
            frequency: The frequency in Hz to convert

        Returns:
            NoteLabel (e.g. A4, A#4), or None when the frequency is outside
            the instrument range and no signal should be reported
        """
        if not isinstance(frequency, (int, float, np.floating)) or not np.isfinite(
            frequency
        ):
            logger.warning(f"Invalid frequency value: {frequency}")
            return None

        if not self.in_range(frequency):
            logger.debug(
                f"Frequency {frequency:.2f}Hz outside "
                f"{self._min_frequency}-{self._max_frequency}Hz"
            )
            return None

        semitones = self.semitones_from_reference(frequency)
        index = self.class_index(semitones)

        return NoteLabel(
            letter=self.NOTE_LETTERS[index],
            modifier=self.MODIFIERS[index],
            octave=self.octave_for(semitones),
        )
