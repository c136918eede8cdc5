"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
import logging
import pygame

from .utils import (
    DEFAULT_CELL_SIZE,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    DEFAULT_STEP_INTERVAL_MS,
    MIN_GRID_WIDTH,
    SETTINGS_FILE,
    load_json,
    save_json,
)

logger = logging.getLogger(__name__)

QUIT_KEY = pygame.K_ESCAPE
RESTART_KEY = pygame.K_r
CONTINUE_KEY = pygame.K_SPACE
GRID_TOGGLE_KEY = pygame.K_g
RESERVED_KEYS = frozenset((QUIT_KEY, RESTART_KEY, CONTINUE_KEY, GRID_TOGGLE_KEY))


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    fullscreen: bool = False
    show_grid: bool = True
    glow: bool = True


@dataclass(slots=True)
class ControlScheme:
    """Per-player key bindings."""

    up: int
    down: int
    left: int
    right: int


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    grid_width: int = DEFAULT_GRID_WIDTH
    grid_height: int = DEFAULT_GRID_HEIGHT
    cell_size: int = DEFAULT_CELL_SIZE
    step_interval_ms: int = DEFAULT_STEP_INTERVAL_MS
    display: DisplaySettings = field(default_factory=DisplaySettings)
    player1_controls: ControlScheme = field(
        default_factory=lambda: ControlScheme(
            up=pygame.K_w,
            down=pygame.K_s,
            left=pygame.K_a,
            right=pygame.K_d,
        )
    )
    player2_controls: ControlScheme = field(
        default_factory=lambda: ControlScheme(
            up=pygame.K_UP,
            down=pygame.K_DOWN,
            left=pygame.K_LEFT,
            right=pygame.K_RIGHT,
        )
    )

    @property
    def screen_size(self) -> tuple[int, int]:
        return (self.grid_width * self.cell_size, self.grid_height * self.cell_size)


class SettingsManager:
    """Load, save, and mutate game settings."""

    def __init__(self, path: Path = SETTINGS_FILE) -> None:
        self.path = path
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk with safe defaults."""
        raw = load_json(self.path, {})
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed settings file %s", self.path)
            raw = {}
        settings = GameSettings()

        settings.grid_width = self._load_int(raw, "grid_width", settings.grid_width, MIN_GRID_WIDTH)
        settings.grid_height = self._load_int(raw, "grid_height", settings.grid_height, 1)
        settings.cell_size = self._load_int(raw, "cell_size", settings.cell_size, 1)
        settings.step_interval_ms = self._load_int(raw, "step_interval_ms", settings.step_interval_ms, 1)

        display = self._section(raw, "display")
        settings.display.fullscreen = bool(display.get("fullscreen", settings.display.fullscreen))
        settings.display.show_grid = bool(display.get("show_grid", settings.display.show_grid))
        settings.display.glow = bool(display.get("glow", settings.display.glow))

        settings.player1_controls = self._load_controls(
            self._section(raw, "player1_controls"), settings.player1_controls
        )
        settings.player2_controls = self._load_controls(
            self._section(raw, "player2_controls"), settings.player2_controls
        )
        return settings

    @staticmethod
    def _load_int(raw: dict, key: str, default: int, minimum: int) -> int:
        try:
            value = int(raw.get(key, default))
        except (TypeError, ValueError):
            logger.warning("Setting %s=%r is not an integer, using %d", key, raw.get(key), default)
            return default
        if value < minimum:
            logger.warning("Setting %s=%d is below %d, using %d", key, value, minimum, default)
            return default
        return value

    @staticmethod
    def _section(raw: dict, key: str) -> dict:
        section = raw.get(key, {})
        if not isinstance(section, dict):
            logger.warning("Setting %s=%r is not a mapping, using defaults", key, section)
            return {}
        return section

    @classmethod
    def _load_controls(cls, payload: dict[str, int], defaults: ControlScheme) -> ControlScheme:
        keys = {}
        for name in ("up", "down", "left", "right"):
            default = getattr(defaults, name)
            key = cls._load_int(payload, name, default, 0)
            if key in RESERVED_KEYS:
                logger.warning("Key %d is reserved for game hotkeys, %s stays on %d", key, name, default)
                key = default
            keys[name] = key
        return ControlScheme(**keys)

    def save(self) -> None:
        """Persist settings to disk."""
        save_json(self.path, asdict(self.settings))

    def toggle_grid(self) -> bool:
        """Flip the background grid and persist settings."""
        self.settings.display.show_grid = not self.settings.display.show_grid
        self.save()
        return self.settings.display.show_grid
