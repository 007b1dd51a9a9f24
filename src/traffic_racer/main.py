"""Executable entrypoint for Traffic Racer."""

from __future__ import annotations

import logging

from .game import RacerGame


def main() -> None:
    """Launch the game."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    RacerGame().run()


if __name__ == "__main__":
    main()
