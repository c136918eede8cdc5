"""Exception types raised by the simulation core."""

from __future__ import annotations


class LightDuelError(Exception):
    """Base class for Light Duel errors."""


class OutOfBounds(LightDuelError, IndexError):
    """Raised when grid coordinates fall outside the playfield.

    The engine checks bounds before touching the grid, so seeing this means an
    internal invariant was broken. It is never swallowed.
    """

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"cell ({x}, {y}) is outside the {width}x{height} grid")
        self.x = x
        self.y = y
