"""
Input events understood by the zoom/pan controller.

The display layer translates its native events (pygame, or a scripted
buffer) into these types. Anything it does not recognize is dropped there
or ignored by the controller.
"""

from dataclasses import dataclass


# Key codes
KEY_ESCAPE = 0
KEY_INCREASE_ITERATIONS = 1   # Up arrow
KEY_DECREASE_ITERATIONS = 2   # Down arrow
KEY_RESET = 3                 # R


@dataclass(frozen=True)
class QuitEvent:
    """Window closed."""


@dataclass(frozen=True)
class KeyDownEvent:
    key: int


@dataclass(frozen=True)
class WheelEvent:
    """Mouse wheel; positive direction is wheel-up (zoom in)."""

    direction: int


@dataclass(frozen=True)
class PointerMoveEvent:
    x: int
    y: int
