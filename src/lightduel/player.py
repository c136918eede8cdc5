"""Lightcycle rider state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .grid import PlayerId
from .utils import Heading, Position, add_heading


@dataclass(slots=True, frozen=True)
class PlayerSnapshot:
    """Read-only view of a rider handed to renderers and input adapters."""

    player_id: PlayerId
    position: Position
    heading: Heading
    alive: bool


@dataclass(slots=True)
class LightCycle:
    """State for one rider; mutated by the engine once per tick."""

    player_id: PlayerId
    start_pos: Position
    start_heading: Heading

    position: Position = field(init=False)
    heading: Heading = field(init=False)
    alive: bool = field(default=True, init=False)

    def __post_init__(self) -> None:
        self.reset_round()

    def reset_round(self) -> None:
        """Return to the spawn cell and heading."""
        self.position = self.start_pos
        self.heading = self.start_heading
        self.alive = True

    def next_position(self, heading: Heading | None = None) -> Position:
        """Compute the next grid cell along heading (defaults to the current one)."""
        return add_heading(self.position, heading or self.heading)

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(self.player_id, self.position, self.heading, self.alive)


def spawn_players(width: int, height: int) -> tuple[LightCycle, LightCycle]:
    """Build the two riders at mirrored spawn cells on the middle row."""
    column = width // 4
    mid_y = height // 2
    return (
        LightCycle(PlayerId.P1, start_pos=(column, mid_y), start_heading=Heading.RIGHT),
        LightCycle(PlayerId.P2, start_pos=(width - 1 - column, mid_y), start_heading=Heading.LEFT),
    )
