"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .utils import SCREEN_HEIGHT, SCREEN_WIDTH, SETTINGS_FILE, ensure_data_dirs, load_json, save_json


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    fullscreen: bool = False
    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    show_fps: bool = False


@dataclass(slots=True)
class ControlScheme:
    """Key bindings, as lowercase names reported by ``pygame.key.name``."""

    left: tuple[str, ...] = ("left", "a")
    right: tuple[str, ...] = ("right", "d")
    boost: tuple[str, ...] = ("left shift", "right shift")
    pause: tuple[str, ...] = ("p", "escape")
    restart: tuple[str, ...] = ("r",)


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    display: DisplaySettings = field(default_factory=DisplaySettings)
    controls: ControlScheme = field(default_factory=ControlScheme)


class SettingsManager:
    """Load, save, and mutate game settings."""

    def __init__(self) -> None:
        ensure_data_dirs()
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk with safe defaults."""
        raw = load_json(SETTINGS_FILE, {})
        if not isinstance(raw, dict):
            raw = {}
        settings = GameSettings()

        display = raw.get("display", {})
        if isinstance(display, dict):
            settings.display.fullscreen = bool(display.get("fullscreen", settings.display.fullscreen))
            settings.display.width = self._positive_int(display.get("width"), settings.display.width)
            settings.display.height = self._positive_int(display.get("height"), settings.display.height)
            settings.display.show_fps = bool(display.get("show_fps", settings.display.show_fps))

        controls = raw.get("controls", {})
        if isinstance(controls, dict):
            settings.controls = self._load_controls(controls, settings.controls)
        return settings

    @staticmethod
    def _positive_int(value: Any, default: int) -> int:
        try:
            number = int(value)
        except (TypeError, ValueError):
            return default
        return number if number > 0 else default

    @staticmethod
    def _key_names(value: Any, default: tuple[str, ...]) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not value:
            return default
        return tuple(str(name).lower() for name in value)

    @classmethod
    def _load_controls(cls, payload: dict[str, Any], defaults: ControlScheme) -> ControlScheme:
        return ControlScheme(
            left=cls._key_names(payload.get("left"), defaults.left),
            right=cls._key_names(payload.get("right"), defaults.right),
            boost=cls._key_names(payload.get("boost"), defaults.boost),
            pause=cls._key_names(payload.get("pause"), defaults.pause),
            restart=cls._key_names(payload.get("restart"), defaults.restart),
        )

    def save(self) -> None:
        """Persist settings to disk."""
        payload = asdict(self.settings)
        payload["controls"] = {name: list(keys) for name, keys in payload["controls"].items()}
        save_json(SETTINGS_FILE, payload)

    def set_window_size(self, width: int, height: int) -> None:
        """Remember the last window size for the next launch."""
        self.settings.display.width = width
        self.settings.display.height = height
        self.save()

    def toggle_fps(self) -> bool:
        """Flip the FPS readout and persist settings."""
        self.settings.display.show_fps = not self.settings.display.show_fps
        self.save()
        return self.settings.display.show_fps
