from __future__ import annotations

import pytest

from lightduel.controller import RoundController
from lightduel.engine import CrashCause, Outcome
from lightduel.grid import PlayerId
from lightduel.utils import Heading


def _run_until_finished(controller: RoundController, limit: int = 500) -> None:
    for _ in range(limit):
        if controller.tick().finished:
            return
    raise AssertionError(f"round still running after {limit} ticks")


def test_reset_state(controller: RoundController) -> None:
    p1, p2 = controller.players
    assert p1.alive and p2.alive
    assert p1.position == (5, 10)
    assert p2.position == (14, 10)
    assert p1.position[0] + p2.position[0] == controller.width - 1
    assert p1.position[1] == p2.position[1]
    assert controller.state.running
    assert controller.grid_is_empty()
    assert controller.pending_direction(PlayerId.P1) is None


def test_reset_is_deterministic(controller: RoundController) -> None:
    controller.submit_direction(PlayerId.P1, Heading.UP)
    for _ in range(4):
        controller.tick()
    controller.reset()
    first = controller.snapshot()
    controller.reset()
    assert controller.snapshot() == first
    assert first.ticks == 0
    assert controller.stats is None


@pytest.mark.parametrize(
    "player_id, heading, reverse",
    [
        (PlayerId.P1, Heading.RIGHT, Heading.LEFT),
        (PlayerId.P2, Heading.LEFT, Heading.RIGHT),
        (PlayerId.P1, Heading.UP, Heading.DOWN),
        (PlayerId.P1, Heading.DOWN, Heading.UP),
    ],
)
def test_reversal_is_rejected(controller: RoundController, player_id, heading, reverse) -> None:
    if controller.player(player_id).heading is not heading:
        assert controller.submit_direction(player_id, heading)
        controller.tick()
    assert controller.player(player_id).heading is heading
    pending = controller.pending_direction(player_id)

    assert not controller.submit_direction(player_id, reverse)
    assert controller.pending_direction(player_id) is pending


def test_reversal_is_judged_against_current_heading(controller: RoundController) -> None:
    assert controller.submit_direction(PlayerId.P1, Heading.UP)
    assert not controller.submit_direction(PlayerId.P1, Heading.LEFT)
    assert controller.pending_direction(PlayerId.P1) is Heading.UP


def test_latest_request_wins(controller: RoundController) -> None:
    controller.submit_direction(PlayerId.P1, Heading.UP)
    controller.submit_direction(PlayerId.P1, Heading.DOWN)
    controller.tick()
    assert controller.player(PlayerId.P1).position == (5, 11)


def test_unknown_player_is_ignored(controller: RoundController) -> None:
    assert not controller.submit_direction(3, Heading.UP)
    with pytest.raises(KeyError):
        controller.player(3)


def test_requests_ignored_after_round_ends(controller: RoundController) -> None:
    controller.submit_direction(PlayerId.P1, Heading.UP)
    controller.submit_direction(PlayerId.P2, Heading.UP)
    _run_until_finished(controller)
    assert not controller.submit_direction(PlayerId.P1, Heading.LEFT)
    assert controller.pending_direction(PlayerId.P1) is Heading.UP


def test_tick_is_noop_when_finished(controller: RoundController) -> None:
    controller.submit_direction(PlayerId.P2, Heading.DOWN)
    _run_until_finished(controller)
    before = controller.snapshot()
    state = controller.tick()
    assert state is before.state
    assert controller.snapshot() == before


def test_trail_permanence_across_ticks(controller: RoundController) -> None:
    controller.tick()
    for _ in range(3):
        controller.tick()
        assert controller.occupant(5, 10) is PlayerId.P1
        assert controller.occupant(14, 10) is PlayerId.P2


def test_self_trail_kills(controller: RoundController) -> None:
    controller.tick()
    for heading in (Heading.DOWN, Heading.LEFT):
        controller.submit_direction(PlayerId.P1, heading)
        controller.tick()
    assert controller.player(PlayerId.P1).position == (5, 11)

    controller.submit_direction(PlayerId.P1, Heading.UP)
    state = controller.tick()

    p1 = controller.player(PlayerId.P1)
    assert not p1.alive
    assert p1.position == (5, 11)
    assert controller.occupant(5, 11) is PlayerId.P1
    assert controller.occupant(5, 10) is PlayerId.P1
    assert state.outcome == Outcome.win(PlayerId.P2)
    assert controller.stats.crashes == {PlayerId.P1: CrashCause.TRAIL}


def test_rejects_grids_too_small_for_spawns() -> None:
    with pytest.raises(ValueError):
        RoundController(4, 10)
    RoundController(5, 1)
