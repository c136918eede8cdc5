"""Fixed-size occupancy map holding every trail cell of a round."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from .errors import OutOfBounds


class PlayerId(IntEnum):
    """Stable identity of the two riders."""

    P1 = 1
    P2 = 2

    @property
    def label(self) -> str:
        return f"Player {self.value}"


Occupant = Optional[PlayerId]
EMPTY: Occupant = None


class Grid:
    """Row-major occupancy map.

    A cell is either empty (``None``) or owned by the player whose trail passed
    through it. Cells are only ever written by :meth:`mark`, so ownership never
    reverts to empty until :meth:`clear`.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells: list[list[Occupant]] = [[EMPTY] * width for _ in range(height)]

    def clear(self) -> None:
        """Reset every cell to empty."""
        for row in self._cells:
            for x in range(self.width):
                row[x] = EMPTY

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def occupant(self, x: int, y: int) -> Occupant:
        """Return the owner of a cell, or ``None`` when it is empty."""
        self._check(x, y)
        return self._cells[y][x]

    def mark(self, x: int, y: int, player_id: PlayerId) -> None:
        """Record a trail cell for player_id."""
        self._check(x, y)
        self._cells[y][x] = player_id

    def is_empty(self) -> bool:
        return all(cell is EMPTY for row in self._cells for cell in row)

    def cells_owned_by(self, player_id: PlayerId) -> int:
        """Count the trail cells owned by player_id."""
        return sum(1 for row in self._cells for cell in row if cell == player_id)

    def snapshot(self) -> tuple[tuple[Occupant, ...], ...]:
        """Immutable copy of the occupancy rows, indexed ``[y][x]``."""
        return tuple(tuple(row) for row in self._cells)

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
