"""Configuration helpers for the car viewer."""
from __future__ import annotations

from configparser import ConfigParser, Error
from dataclasses import dataclass
import logging
from pathlib import Path
import sys
from typing import Optional


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "car_viewer.ini"
PRESETS_FILENAME = "car_viewer_presets.json"
_CAMERA_SECTION = "camera"
_SPEED_SECTION = "speed"
_STORAGE_SECTION = "storage"

_CAMERA_KEYS = (
    "revert_delay_ms",
    "brake_transition_ms",
    "revert_transition_ms",
    "shortcut_transition_ms",
    "default_transition_ms",
    "floor_y",
    "frame_interval_ms",
)
_SPEED_KEYS = ("base_rate", "max_speed_mph", "calibration_speed_mph")


@dataclass
class ViewerSettings:
    revert_delay_ms: float = 1000.0
    brake_transition_ms: float = 1200.0
    revert_transition_ms: float = 800.0
    shortcut_transition_ms: float = 800.0
    default_transition_ms: float = 1000.0
    floor_y: float = -0.49
    frame_interval_ms: float = 16.0
    base_rate: float = 0.3
    max_speed_mph: float = 75.0
    calibration_speed_mph: float = 50.0
    presets_path: Optional[Path] = None


def _config_dir(main_script_path: Optional[Path]) -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    if main_script_path is not None:
        return main_script_path.resolve().parent
    main_module = sys.modules.get("__main__")
    if main_module and getattr(main_module, "__file__", None):
        return Path(main_module.__file__).resolve().parent
    return Path.cwd()


def config_path(main_script_path: Optional[Path]) -> Path:
    return _config_dir(main_script_path) / CONFIG_FILENAME


def default_presets_path(main_script_path: Optional[Path]) -> Path:
    return _config_dir(main_script_path) / PRESETS_FILENAME


def _read_floats(parser: ConfigParser, section: str, keys: tuple[str, ...]) -> dict[str, float]:
    values: dict[str, float] = {}
    if not parser.has_section(section):
        return values
    for key in keys:
        raw = parser.get(section, key, fallback=None)
        if raw is None:
            continue
        try:
            values[key] = float(raw)
        except ValueError:
            logger.warning("Ignoring invalid %s.%s value: %r", section, key, raw)
    return values


def load_settings(
    main_script_path: Optional[Path] = None, ini_path: Optional[Path] = None
) -> ViewerSettings:
    """Read ``car_viewer.ini``; anything missing or malformed keeps its default."""

    settings = ViewerSettings()
    ini_path = ini_path or config_path(main_script_path)
    if ini_path.exists():
        parser = ConfigParser()
        try:
            with ini_path.open("r", encoding="utf-8") as handle:
                parser.read_file(handle)
        except (OSError, Error):
            logger.warning("Could not read %s; using defaults", ini_path)
            parser = ConfigParser()
        overrides = _read_floats(parser, _CAMERA_SECTION, _CAMERA_KEYS)
        overrides.update(_read_floats(parser, _SPEED_SECTION, _SPEED_KEYS))
        for key, value in overrides.items():
            setattr(settings, key, value)
        stored_path = parser.get(_STORAGE_SECTION, "presets_path", fallback=None)
        if stored_path:
            candidate = Path(stored_path)
            if not candidate.is_absolute():
                candidate = ini_path.parent / candidate
            settings.presets_path = candidate
    if settings.calibration_speed_mph <= 0:
        logger.warning("calibration_speed_mph must be positive; using 50")
        settings.calibration_speed_mph = 50.0
    if settings.presets_path is None:
        settings.presets_path = default_presets_path(main_script_path)
    return settings
