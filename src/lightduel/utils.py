"""Shared constants and utility helpers for Light Duel."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Tuple
import json

FPS = 60
DEFAULT_GRID_WIDTH = 120
DEFAULT_GRID_HEIGHT = 76
DEFAULT_CELL_SIZE = 10
DEFAULT_STEP_INTERVAL_MS = 45
MIN_GRID_WIDTH = 5

BG_COLOR = (3, 5, 13)
GRID_COLOR = (22, 39, 70)
GRID_GLOW = (20, 80, 130)
TEXT_COLOR = (220, 238, 255)
SHADOW_COLOR = (15, 24, 45)

CYAN = (29, 201, 255)
ORANGE = (255, 147, 51)
YELLOW = (255, 233, 68)
RED = (255, 85, 85)

Position = Tuple[int, int]

DATA_DIR = Path(".lightduel")
SETTINGS_FILE = DATA_DIR / "settings.json"


class Heading(Enum):
    """Axis-aligned heading; the value is the unit vector in grid space."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Heading:
        dx, dy = self.value
        return Heading((-dx, -dy))


def is_opposite(a: Heading, b: Heading) -> bool:
    """Return whether two headings point in opposite directions."""
    return a.opposite is b


def add_heading(position: Position, heading: Heading) -> Position:
    """Move a grid position one cell along heading."""
    dx, dy = heading.value
    return (position[0] + dx, position[1] + dy)


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
