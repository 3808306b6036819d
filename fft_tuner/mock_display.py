from typing import List

from .core.interfaces import IDisplay


class MockDisplay(IDisplay):
    """A display for unit tests. Records every text it is asked to show."""

    def __init__(self):
        self.texts: List[str] = []

    def display_text(self, text: str) -> None:
        self.texts.append(text)

    @property
    def last_text(self):
        return self.texts[-1] if self.texts else None
