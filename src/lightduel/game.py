"""Pygame window: event loop, fixed-step driver, rendering and status text."""

from __future__ import annotations

from pathlib import Path
import logging
import pygame

from .controller import RoundController, RoundSnapshot, RoundStats
from .driver import FixedStepDriver
from .engine import CrashCause, Outcome, RoundState
from .grid import PlayerId
from .input import InputAdapter
from .settings import CONTINUE_KEY, GRID_TOGGLE_KEY, QUIT_KEY, RESTART_KEY, GameSettings, SettingsManager
from .utils import (
    BG_COLOR,
    CYAN,
    FPS,
    GRID_COLOR,
    GRID_GLOW,
    ORANGE,
    RED,
    SETTINGS_FILE,
    SHADOW_COLOR,
    TEXT_COLOR,
    YELLOW,
)

logger = logging.getLogger(__name__)

PLAYER_COLORS: dict[PlayerId, tuple[int, int, int]] = {
    PlayerId.P1: CYAN,
    PlayerId.P2: ORANGE,
}

CRASH_TEXT = {
    CrashCause.WALL: "hit the wall",
    CrashCause.TRAIL: "hit a trail",
    CrashCause.HEAD_ON: "crashed head-on",
}


def status_text(state: RoundState) -> str:
    """Headline for the status display."""
    if state.outcome is None:
        return "RUNNING"
    return outcome_text(state.outcome)


def outcome_text(outcome: Outcome) -> str:
    if outcome.winner is None:
        return "DRAW"
    return f"{outcome.winner.label.upper()} WINS"


def crash_detail(stats: RoundStats) -> str:
    """One line describing who crashed and how."""
    parts = [
        f"{player_id.label} {CRASH_TEXT[cause]}"
        for player_id, cause in sorted(stats.crashes.items())
    ]
    return ", ".join(parts)


class TronGame:
    """Two-player light-cycle duel on a shared keyboard."""

    def __init__(self, root: Path, settings_path: Path | None = None) -> None:
        pygame.init()
        pygame.font.init()

        self.root = root
        self.settings_manager = SettingsManager(settings_path or root / SETTINGS_FILE)
        self.settings: GameSettings = self.settings_manager.settings

        self.cell_size = self.settings.cell_size
        self.screen_size = self.settings.screen_size
        flags = pygame.FULLSCREEN if self.settings.display.fullscreen else 0
        self.screen = pygame.display.set_mode(self.screen_size, flags)
        pygame.display.set_caption("Light Duel")
        self.clock = pygame.time.Clock()

        self.title_font = pygame.font.SysFont("consolas", 40, bold=True)
        self.body_font = pygame.font.SysFont("consolas", 24, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 16)

        self.controller = RoundController(self.settings.grid_width, self.settings.grid_height)
        self.driver = FixedStepDriver(self.controller, self.settings.step_interval_ms)
        self.input = InputAdapter.from_settings(self.controller, self.settings)
        self.grid_surface = self._build_grid_surface()

    def reset_round(self) -> None:
        """Restart the duel from the spawn positions."""
        self.controller.reset()
        self.driver.reset()

    def run(self) -> None:
        """Main event/update/render loop."""
        self.reset_round()
        running = True
        while running:
            dt_ms = self.clock.tick(FPS)
            running = self._handle_events()
            if not running:
                break
            self.driver.advance(dt_ms)
            self._render()

        pygame.quit()

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue

            if event.key == QUIT_KEY:
                return False
            if event.key in (RESTART_KEY, CONTINUE_KEY):
                if event.key == RESTART_KEY or self.controller.state.finished:
                    logger.info("Restart requested")
                    self.reset_round()
                continue
            if event.key == GRID_TOGGLE_KEY:
                self.settings_manager.toggle_grid()
                continue
            self.input.handle_key(event.key)
        return True

    def _render(self) -> None:
        snapshot = self.controller.snapshot()
        frame = pygame.Surface(self.screen_size, pygame.SRCALPHA)
        frame.fill(BG_COLOR)
        if self.settings.display.show_grid:
            frame.blit(self.grid_surface, (0, 0))

        self._draw_cells(frame, snapshot)
        self._render_hud(frame)
        if snapshot.state.outcome is not None:
            self._render_round_overlay(frame, snapshot.state.outcome)

        self.screen.fill((0, 0, 0))
        self.screen.blit(frame, (0, 0))
        pygame.display.flip()

    def _build_grid_surface(self) -> pygame.Surface:
        width, height = self.screen_size
        step = self.cell_size * 2
        grid = pygame.Surface((width, height), pygame.SRCALPHA)
        for x in range(0, width, step):
            strong = (x // step) % 6 == 0
            color = GRID_GLOW if strong else GRID_COLOR
            pygame.draw.line(grid, (*color, 85 if strong else 45), (x, 0), (x, height), 1)
        for y in range(0, height, step):
            strong = (y // step) % 6 == 0
            color = GRID_GLOW if strong else GRID_COLOR
            pygame.draw.line(grid, (*color, 85 if strong else 45), (0, y), (width, y), 1)
        return grid

    def _draw_cells(self, surface: pygame.Surface, snapshot: RoundSnapshot) -> None:
        size = self.cell_size
        for y, row in enumerate(snapshot.cells):
            for x, owner in enumerate(row):
                if owner is None:
                    continue
                rect = pygame.Rect(x * size, y * size, size, size)
                pygame.draw.rect(surface, PLAYER_COLORS[owner], rect)

        glow_layer = pygame.Surface(self.screen_size, pygame.SRCALPHA)
        for player in snapshot.players:
            if not player.alive:
                continue
            x, y = player.position
            rect = pygame.Rect(x * size, y * size, size, size)
            color = PLAYER_COLORS[player.player_id]
            if self.settings.display.glow:
                self._draw_glow_rect(glow_layer, color, rect, 4, size, 170)
            pygame.draw.rect(glow_layer, (*color, 255), rect, border_radius=2)
        surface.blit(glow_layer, (0, 0), special_flags=pygame.BLEND_RGBA_ADD)

    @staticmethod
    def _draw_glow_rect(
        surface: pygame.Surface,
        color: tuple[int, int, int],
        rect: pygame.Rect,
        layers: int,
        spread: int,
        alpha: int,
    ) -> None:
        for i in range(layers, 0, -1):
            inflate = i * spread
            glow_rect = rect.inflate(inflate, inflate)
            glow = pygame.Surface(glow_rect.size, pygame.SRCALPHA)
            pygame.draw.rect(glow, (*color, max(8, alpha // (i + 1))), glow.get_rect(), border_radius=4)
            surface.blit(glow, glow_rect.topleft)

    def _render_hud(self, surface: pygame.Surface) -> None:
        status = self.small_font.render(status_text(self.controller.state), True, YELLOW)
        surface.blit(status, (12, 10))

        _, height = self.screen_size
        helper = self.small_font.render("P1: WASD | P2: Arrows | R Restart | G Grid | Esc Quit", True, TEXT_COLOR)
        surface.blit(helper, (12, height - 24))

    def _render_round_overlay(self, surface: pygame.Surface, outcome: Outcome) -> None:
        width, height = self.screen_size
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((4, 8, 16, 165))
        surface.blit(overlay, (0, 0))

        headline = outcome_text(outcome)
        color = YELLOW if outcome.winner is None else PLAYER_COLORS[outcome.winner]
        line1_shadow = self.title_font.render(headline, True, SHADOW_COLOR)
        line1 = self.title_font.render(headline, True, color)
        surface.blit(line1_shadow, (width // 2 - line1.get_width() // 2 + 3, height // 2 - 77))
        surface.blit(line1, (width // 2 - line1.get_width() // 2, height // 2 - 80))

        stats = self.controller.stats
        if stats is not None:
            line2 = self.body_font.render(crash_detail(stats), True, RED)
            line3 = self.small_font.render(
                f"Ticks: {stats.ticks} | Trails P1/P2: {stats.trail_cells[PlayerId.P1]}/{stats.trail_cells[PlayerId.P2]}",
                True,
                ORANGE,
            )
            surface.blit(line2, (width // 2 - line2.get_width() // 2, height // 2 - 24))
            surface.blit(line3, (width // 2 - line3.get_width() // 2, height // 2 + 10))

        prompt = self.small_font.render("Press R or Space to race again", True, TEXT_COLOR)
        surface.blit(prompt, (width // 2 - prompt.get_width() // 2, height // 2 + 48))
