"""Deterministic tick engine: trail marking, movement and collision rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable
import logging

from .grid import EMPTY, Grid, PlayerId
from .player import LightCycle
from .utils import Heading, Position

logger = logging.getLogger(__name__)


class CrashCause(str, Enum):
    """Why a rider went down."""

    WALL = "wall"
    TRAIL = "trail"
    HEAD_ON = "head_on"


@dataclass(slots=True, frozen=True)
class Outcome:
    """Terminal result of a round; ``winner`` is ``None`` for a draw."""

    winner: PlayerId | None = None

    @classmethod
    def win(cls, player_id: PlayerId) -> Outcome:
        return cls(winner=player_id)

    @classmethod
    def draw(cls) -> Outcome:
        return cls(winner=None)

    @property
    def is_draw(self) -> bool:
        return self.winner is None


@dataclass(slots=True, frozen=True)
class RoundState:
    """Either running (no outcome yet) or finished with an outcome."""

    outcome: Outcome | None = None

    @property
    def running(self) -> bool:
        return self.outcome is None

    @property
    def finished(self) -> bool:
        return self.outcome is not None


RUNNING = RoundState()


class IntentBuffer:
    """One pending heading slot per player, last write wins.

    Writes from the input side replace the slot wholesale, and the engine reads
    each slot once at the start of the move pass, so a tick never sees half of
    an update.
    """

    def __init__(self, player_ids: Iterable[PlayerId]) -> None:
        self._slots: dict[PlayerId, Heading | None] = {pid: None for pid in player_ids}

    def put(self, player_id: PlayerId, heading: Heading) -> None:
        self._slots[player_id] = heading

    def get(self, player_id: PlayerId) -> Heading | None:
        return self._slots[player_id]


@dataclass(slots=True, frozen=True)
class Move:
    """Resolved step for one rider on one tick."""

    player_id: PlayerId
    heading: Heading
    target: Position
    crash: CrashCause | None


class Engine:
    """Advance a round one tick at a time.

    The engine owns no clock. A driver (timer, test, stepper) calls
    :meth:`tick` and stops once the returned state is finished.
    """

    def __init__(self, grid: Grid, players: tuple[LightCycle, LightCycle], intents: IntentBuffer) -> None:
        self.grid = grid
        self.players = players
        self.intents = intents
        self.last_crashes: dict[PlayerId, CrashCause] = {}

    def tick(self) -> RoundState:
        """Run one simulation step and return the resulting round state."""
        self._mark_trails()
        moves = self._resolve_moves()
        self._apply(moves)
        return self._round_state()

    def _mark_trails(self) -> None:
        for player in self.players:
            if player.alive and self.grid.in_bounds(*player.position):
                self.grid.mark(*player.position, player.player_id)

    def _resolve_moves(self) -> list[Move]:
        proposals: list[tuple[LightCycle, Heading, Position]] = []
        for player in self.players:
            if not player.alive:
                continue
            heading = self.intents.get(player.player_id) or player.heading
            proposals.append((player, heading, player.next_position(heading)))

        targets = [target for _, _, target in proposals]
        moves = []
        for player, heading, target in proposals:
            crash = detect_collision(self.grid, target)
            if crash is None and targets.count(target) > 1:
                crash = CrashCause.HEAD_ON
            moves.append(Move(player.player_id, heading, target, crash))
        return moves

    def _apply(self, moves: list[Move]) -> None:
        self.last_crashes = {}
        by_id = {player.player_id: player for player in self.players}
        for move in moves:
            player = by_id[move.player_id]
            if move.crash is not None:
                player.alive = False
                self.last_crashes[move.player_id] = move.crash
                logger.debug("%s crashed (%s) at %s", move.player_id.label, move.crash.value, player.position)
                continue
            player.position = move.target
            player.heading = move.heading

    def _round_state(self) -> RoundState:
        survivors = [player.player_id for player in self.players if player.alive]
        if len(survivors) == len(self.players):
            return RUNNING
        if len(survivors) == 1:
            return RoundState(Outcome.win(survivors[0]))
        return RoundState(Outcome.draw())


def detect_collision(grid: Grid, target: Position) -> CrashCause | None:
    """Judge a single proposed step against the post-mark board."""
    if not grid.in_bounds(*target):
        return CrashCause.WALL
    if grid.occupant(*target) is not EMPTY:
        return CrashCause.TRAIL
    return None
