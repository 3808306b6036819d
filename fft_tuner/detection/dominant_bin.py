"""Search for the strongest bin of a magnitude spectrum."""

from __future__ import annotations
import numpy as np

from ..logging_config import get_logger

logger = get_logger(__name__)


class DominantBinFinder:
    """Finds the maximum-magnitude bin, rejecting upper-half artifacts.

    The upper half of a real signal's spectrum mirrors the lower half, and any
    energy that wins there is treated as an artifact: when the global maximum
    sits above size // 2 the search is repeated over the lower half only. This
    stands in for a low-pass stage and is an approximation, not a guarantee.
    """

    def __init__(self, size: int) -> None:
        self._size = size

    @property
    def fold_threshold(self) -> int:
        return self._size // 2

    def find_max(self, magnitude: np.ndarray, checked_range: int) -> int:
        """Index of the largest value in magnitude[0:checked_range].

        Ties resolve to the lowest index.

        Raises:
            ValueError: If checked_range is outside 1..size
        """
        if not 1 <= checked_range <= self._size:
            raise ValueError(
                f"checked_range must be between 1 and {self._size}, got {checked_range}"
            )
        # argmax returns the first occurrence of the maximum
        return int(np.argmax(magnitude[:checked_range]))

    def find_dominant(self, magnitude: np.ndarray) -> int:
        """Two-pass search: whole spectrum, then lower half if needed."""
        index = self.find_max(magnitude, self._size)
        if index > self.fold_threshold:
            lower = self.find_max(magnitude, self.fold_threshold)
            logger.debug(f"Peak at bin {index} is above the fold, using bin {lower}")
            index = lower
        return index
