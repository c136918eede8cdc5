"""Executable entrypoint for Light Duel."""

from __future__ import annotations

from pathlib import Path
import logging
import os

from .game import TronGame

LOG_LEVEL = os.getenv("LIGHTDUEL_LOG_LEVEL", "INFO").upper()


def main() -> None:
    """Launch the game."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    TronGame(root=Path.cwd()).run()


if __name__ == "__main__":
    main()
