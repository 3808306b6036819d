"""User-facing displays for detected notes."""

from .console import ConsoleDisplay

__all__ = ["ConsoleDisplay"]
