"""Translate key presses into direction requests for the round controller."""

from __future__ import annotations

from typing import Mapping

from .controller import RoundController
from .grid import PlayerId
from .settings import ControlScheme, GameSettings
from .utils import Heading, is_opposite

KeyBinding = tuple[PlayerId, Heading]


def bindings_for(player_id: PlayerId, scheme: ControlScheme) -> dict[int, KeyBinding]:
    """Expand a control scheme into key -> (player, heading) entries."""
    return {
        scheme.up: (player_id, Heading.UP),
        scheme.down: (player_id, Heading.DOWN),
        scheme.left: (player_id, Heading.LEFT),
        scheme.right: (player_id, Heading.RIGHT),
    }


class InputAdapter:
    """Key-code front door to :meth:`RoundController.submit_direction`."""

    def __init__(self, controller: RoundController, bindings: Mapping[int, KeyBinding]) -> None:
        self.controller = controller
        self.bindings = dict(bindings)

    @classmethod
    def from_settings(cls, controller: RoundController, settings: GameSettings) -> InputAdapter:
        bindings = bindings_for(PlayerId.P1, settings.player1_controls)
        bindings.update(bindings_for(PlayerId.P2, settings.player2_controls))
        return cls(controller, bindings)

    def handle_key(self, key: int) -> bool:
        """Submit the mapped request; return whether it was accepted."""
        if key not in self.bindings:
            return False
        player_id, heading = self.bindings[key]
        current = self.controller.player(player_id).heading
        if is_opposite(heading, current):
            return False
        return self.controller.submit_direction(player_id, heading)
