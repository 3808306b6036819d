"""Terminal display for the detected note."""

import sys
from typing import Optional, TextIO

from ..core.interfaces import IDisplay


class ConsoleDisplay(IDisplay):
    """Shows the current note on a single terminal line.

    When `changes_only` is set, repeated texts are not re-printed.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        single_line: bool = True,
        changes_only: bool = False,
    ) -> None:
        self._stream = stream or sys.stdout
        self._single_line = single_line
        self._changes_only = changes_only
        self._last_text: Optional[str] = None

    def display_text(self, text: str) -> None:
        if self._changes_only and text == self._last_text:
            return
        self._last_text = text

        if self._single_line:
            # Pad so a shorter label fully overwrites "No signal is detected"
            self._stream.write(f"\r{text:<24}")
        else:
            self._stream.write(f"{text}\n")
        self._stream.flush()

    def close(self) -> None:
        """Move past the status line."""
        if self._single_line and self._last_text is not None:
            self._stream.write("\n")
            self._stream.flush()
