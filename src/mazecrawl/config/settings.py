from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from platformdirs import PlatformDirs
from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from ..exceptions import SettingsError

logger = logging.getLogger(__name__)

APP_NAME = "mazecrawl"
SETTINGS_FILENAME = "settings.yaml"

# Environment variable override (useful for tests and portable installs)
ENV_CONFIG_DIR = "MAZECRAWL_CONFIG_DIR"

SIZE_PRESETS = ("small", "medium", "large")
MAX_CUSTOM_SEED = 999999

_INT_RANGES: Dict[str, Tuple[int, int]] = {
    "mob_strength": (1, 100),
    "beam_cooldown_ms": (100, 5000),
    "difficulty_value": (1, 1000),
    "enemy_amount": (1, 100),
    "enemy_speed": (1, 100),
    "character_type": (0, 9),
}

_BOOL_FIELDS = (
    "sound_enabled",
    "grid_display",
    "show_controls_on_start",
    "peaceful",
    "beam_penetration",
    "hint_persistent",
)


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey values into a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


class GameSettings(BaseModel):
    """Player-facing settings blob.

    Values arriving from the UI or a settings file are never rejected: numbers
    are clamped into range, malformed values fall back to the field default and
    an out-of-range custom seed is dropped. The simulation core only ever sees
    in-range values and reads them as plain attributes.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    difficulty: str = Field("medium", description="Size preset: small, medium or large")
    sound_enabled: bool = Field(True, description="Whether audio cues should be played")
    grid_display: bool = Field(True, description="Whether the renderer draws grid lines")
    custom_seed: Optional[int] = Field(None, description="Seed for the next game only (0..999999)")
    show_controls_on_start: bool = Field(True, description="Show the controls help before a game")
    mob_strength: int = Field(50, description="Enemy hp/damage/attack rate (1..100)")
    peaceful: bool = Field(False, description="Spawn no enemies")
    beam_cooldown_ms: int = Field(500, description="Minimum time between beam shots (100..5000)")
    beam_penetration: bool = Field(False, description="Beam continues through killed enemies")
    hint_persistent: bool = Field(False, description="Keep the route hint on screen")
    difficulty_value: int = Field(500, description="Maze size scaling (1..1000)")
    enemy_amount: int = Field(50, description="Enemy count scaling (1..100)")
    enemy_speed: int = Field(50, description="Enemy movement speed (1..100)")
    character_type: int = Field(0, description="Cosmetic character id (0..9)")

    @field_validator(*_INT_RANGES, mode="before")
    @classmethod
    def _clamp_int(cls, value: Any, info: ValidationInfo) -> int:
        lo, hi = _INT_RANGES[info.field_name]
        try:
            n = int(value)
        except (TypeError, ValueError, OverflowError):
            default = cls.model_fields[info.field_name].default
            logger.debug("Ignoring malformed %s=%r; using %s", info.field_name, value, default)
            return default
        return max(lo, min(hi, n))

    @field_validator(*_BOOL_FIELDS, mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool:
        return _as_bool(value)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _known_preset(cls, value: Any) -> str:
        preset = str(value).strip().lower() if value is not None else ""
        return preset if preset in SIZE_PRESETS else "medium"

    @field_validator("custom_seed", mode="before")
    @classmethod
    def _seed_in_range(cls, value: Any) -> Optional[int]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            n = int(value)
        except (TypeError, ValueError, OverflowError):
            return None
        if not 0 <= n <= MAX_CUSTOM_SEED:
            logger.debug("Ignoring out-of-range custom seed %r", value)
            return None
        return n

    def snapshot(self) -> "GameSettings":
        """Detached copy for a single game; later edits do not leak into it."""
        return self.model_copy()


def default_settings_path() -> Path:
    override = os.getenv(ENV_CONFIG_DIR)
    if override:
        base = Path(override).expanduser().resolve()
    else:
        base = Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_config_dir)
    return base / SETTINGS_FILENAME


class SettingsStore:
    """Loads and saves the settings blob as YAML in the platform config dir."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()

    def load(self) -> GameSettings:
        if not self.path.exists():
            logger.info("No settings file at %s; using defaults", self.path)
            return GameSettings()
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Failed to read settings from %s: %s; using defaults", self.path, exc)
            return GameSettings()
        if not isinstance(data, dict):
            logger.warning("Settings file %s does not hold a mapping; using defaults", self.path)
            return GameSettings()
        try:
            settings = GameSettings.model_validate(data)
        except ValidationError as exc:
            logger.warning("Invalid settings in %s: %s; using defaults", self.path, exc)
            return GameSettings()
        logger.info("Loaded settings from %s", self.path)
        return settings

    def save(self, settings: GameSettings) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(settings.model_dump(), f, sort_keys=False)
        except OSError as exc:
            raise SettingsError(f"Failed to save settings to {self.path}: {exc}") from exc
        logger.info("Saved settings to %s", self.path)

    def reset(self, settings: GameSettings) -> GameSettings:
        """Restore the menu defaults (preset, sound, grid, seed) and persist."""
        settings.difficulty = "medium"
        settings.sound_enabled = True
        settings.grid_display = True
        settings.custom_seed = None
        self.save(settings)
        return settings


__all__ = [
    "ENV_CONFIG_DIR",
    "GameSettings",
    "SIZE_PRESETS",
    "SettingsStore",
    "default_settings_path",
]
