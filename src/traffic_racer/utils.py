"""Shared constants and utility helpers for Traffic Racer."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple
import json
import os
import random
import tempfile

SCREEN_WIDTH = 1000
SCREEN_HEIGHT = 760
FPS = 60

ENEMY_SPEED = 5
BOOST_MULTIPLIER = 2
LANE_DASH_STEP = 10
LANE_DASH_PERIOD = 60
SPAWN_CHANCE = 0.02

HIGHSCORE_KEY = "trafficRacerHighscore"
HIGHSCORE_TTL_DAYS = 365

Color = Tuple[int, int, int]

ROAD_COLOR = (34, 34, 34)
SIDEWALK_COLOR = (102, 102, 102)
LANE_MARK_COLOR = (255, 255, 255)
ROOF_COLOR = (119, 204, 255)
WHEEL_COLOR = (34, 34, 34)
OUTLINE_COLOR = (0, 0, 0)
PLAYER_COLOR = (0, 170, 255)

TEXT_COLOR = (240, 240, 240)
SHADOW_COLOR = (15, 15, 20)
YELLOW = (255, 220, 70)
BUTTON_COLOR = (40, 44, 60)
BUTTON_BORDER = (200, 200, 210)

DATA_DIR = Path(".traffic_racer")
SETTINGS_FILE = DATA_DIR / "settings.json"
SCORES_FILE = DATA_DIR / "scores.json"


def ensure_data_dirs() -> None:
    """Create the data directory for save files."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def random_pastel_color(rng: random.Random | None = None) -> Color:
    """Return a light color with every channel in the upper half of the range."""
    rng = rng or random
    return (rng.randint(128, 254), rng.randint(128, 254), rng.randint(128, 254))


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
    """Save JSON data with deterministic formatting, replacing the file atomically."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
