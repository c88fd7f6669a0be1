"""Step generators for the six sorting algorithms."""

from . import bubble, heap, insertion, merge, quick, selection

__all__ = [
    "bubble",
    "heap",
    "insertion",
    "merge",
    "quick",
    "selection",
]
