"""Round controller: owns the grid, both riders and the round state."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from .engine import RUNNING, CrashCause, Engine, IntentBuffer, Outcome, RoundState
from .grid import Grid, Occupant, PlayerId
from .player import LightCycle, PlayerSnapshot, spawn_players
from .utils import MIN_GRID_WIDTH, Heading, is_opposite

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RoundStats:
    """Summary of a finished round for the status display."""

    outcome: Outcome
    crashes: dict[PlayerId, CrashCause] = field(default_factory=dict)
    ticks: int = 0
    trail_cells: dict[PlayerId, int] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class RoundSnapshot:
    """Everything a renderer needs for one frame."""

    width: int
    height: int
    cells: tuple[tuple[Occupant, ...], ...]
    players: tuple[PlayerSnapshot, ...]
    state: RoundState
    ticks: int


class RoundController:
    """Own one round at a time and rebuild everything on reset.

    Input handlers only call :meth:`submit_direction`, which writes an
    isolated intent slot. Grid, riders and state are mutated by the engine
    inside :meth:`tick` and are exposed to everyone else as snapshots.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < MIN_GRID_WIDTH or height <= 0:
            raise ValueError(
                f"grid must be at least {MIN_GRID_WIDTH} cells wide and 1 tall, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.reset()

    def reset(self) -> None:
        """Start a fresh round with cleared grid and spawned riders."""
        self._grid = Grid(self.width, self.height)
        self._players = spawn_players(self.width, self.height)
        self._intents = IntentBuffer(player.player_id for player in self._players)
        self._engine = Engine(self._grid, self._players, self._intents)
        self._state = RUNNING
        self._ticks = 0
        self._stats: RoundStats | None = None
        logger.info("Round reset on %dx%d grid", self.width, self.height)

    def submit_direction(self, player_id: PlayerId, heading: Heading) -> bool:
        """Queue a heading change for the next tick.

        Returns False (and changes nothing) when the round is over, the player
        is unknown or dead, or the heading reverses the current one.
        """
        player = self._find(player_id)
        if player is None or not self._state.running or not player.alive:
            logger.debug("Ignored %s request for %s", heading.name, player_id)
            return False
        if is_opposite(heading, player.heading):
            logger.debug("Ignored reversal %s for %s", heading.name, player.player_id.label)
            return False
        self._intents.put(player.player_id, heading)
        return True

    def tick(self) -> RoundState:
        """Advance one step while running; a no-op once the round is finished."""
        if not self._state.running:
            return self._state
        self._state = self._engine.tick()
        self._ticks += 1
        if self._state.outcome is not None:
            self._finish(self._state.outcome)
        return self._state

    def _finish(self, outcome: Outcome) -> None:
        self._stats = RoundStats(
            outcome=outcome,
            crashes=dict(self._engine.last_crashes),
            ticks=self._ticks,
            trail_cells={player.player_id: self._grid.cells_owned_by(player.player_id) for player in self._players},
        )
        if outcome.winner is None:
            logger.info("Round over after %d ticks: draw", self._ticks)
        else:
            logger.info("Round over after %d ticks: %s wins", self._ticks, outcome.winner.label)

    def _find(self, player_id: object) -> LightCycle | None:
        for player in self._players:
            if player.player_id == player_id:
                return player
        return None

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def stats(self) -> RoundStats | None:
        return self._stats

    @property
    def players(self) -> tuple[PlayerSnapshot, ...]:
        return tuple(player.snapshot() for player in self._players)

    def player(self, player_id: PlayerId) -> PlayerSnapshot:
        player = self._find(player_id)
        if player is None:
            raise KeyError(player_id)
        return player.snapshot()

    def pending_direction(self, player_id: PlayerId) -> Heading | None:
        return self._intents.get(player_id)

    def occupant(self, x: int, y: int) -> Occupant:
        return self._grid.occupant(x, y)

    def in_bounds(self, x: int, y: int) -> bool:
        return self._grid.in_bounds(x, y)

    def grid_is_empty(self) -> bool:
        return self._grid.is_empty()

    def snapshot(self) -> RoundSnapshot:
        return RoundSnapshot(
            width=self.width,
            height=self.height,
            cells=self._grid.snapshot(),
            players=self.players,
            state=self._state,
            ticks=self._ticks,
        )
