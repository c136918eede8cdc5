from __future__ import annotations

import pygame

from lightduel.controller import RoundController
from lightduel.grid import PlayerId
from lightduel.input import InputAdapter, bindings_for
from lightduel.settings import ControlScheme, GameSettings
from lightduel.utils import Heading


def _adapter(controller: RoundController) -> InputAdapter:
    return InputAdapter.from_settings(controller, GameSettings())


def test_default_bindings_route_to_players(controller: RoundController) -> None:
    adapter = _adapter(controller)
    assert adapter.handle_key(pygame.K_w)
    assert adapter.handle_key(pygame.K_DOWN)
    assert controller.pending_direction(PlayerId.P1) is Heading.UP
    assert controller.pending_direction(PlayerId.P2) is Heading.DOWN


def test_reversal_keys_are_dropped(controller: RoundController) -> None:
    adapter = _adapter(controller)
    assert not adapter.handle_key(pygame.K_a)
    assert not adapter.handle_key(pygame.K_RIGHT)
    assert controller.pending_direction(PlayerId.P1) is None
    assert controller.pending_direction(PlayerId.P2) is None


def test_unbound_key_is_ignored(controller: RoundController) -> None:
    adapter = _adapter(controller)
    assert not adapter.handle_key(pygame.K_q)


def test_bindings_for_custom_scheme() -> None:
    scheme = ControlScheme(up=1, down=2, left=3, right=4)
    assert bindings_for(PlayerId.P2, scheme) == {
        1: (PlayerId.P2, Heading.UP),
        2: (PlayerId.P2, Heading.DOWN),
        3: (PlayerId.P2, Heading.LEFT),
        4: (PlayerId.P2, Heading.RIGHT),
    }
