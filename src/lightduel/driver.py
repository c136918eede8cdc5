"""Tick sources that call into the round controller at a fixed cadence."""

from __future__ import annotations

from typing import Protocol

from .engine import RoundState


class Tickable(Protocol):
    """Anything exposing a running state and a ``tick()`` step."""

    @property
    def state(self) -> RoundState: ...

    def tick(self) -> RoundState: ...


class FixedStepDriver:
    """Accumulate elapsed frame time and run whole ticks from it.

    Ticks run strictly one after another and stop as soon as the round
    finishes; leftover time is dropped at that point.
    """

    def __init__(self, target: Tickable, step_ms: float) -> None:
        if step_ms <= 0:
            raise ValueError("step_ms must be positive")
        self.target = target
        self.step_ms = step_ms
        self.accumulator_ms = 0.0

    def reset(self) -> None:
        self.accumulator_ms = 0.0

    def advance(self, dt_ms: float) -> int:
        """Feed dt_ms of wall time; return how many ticks were run."""
        if not self.target.state.running:
            return 0
        self.accumulator_ms += dt_ms
        ticks = 0
        while self.accumulator_ms >= self.step_ms:
            self.accumulator_ms -= self.step_ms
            ticks += 1
            if self.target.tick().finished:
                self.accumulator_ms = 0.0
                break
        return ticks
