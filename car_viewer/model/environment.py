"""Showroom/drive and day/night environment state.

Lighting parameters are looked up from a fixed table rather than computed;
the renderer consumes whichever :class:`LightingProfile` is active.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class EnvironmentMode(Enum):
    SHOWROOM = "showroom"
    DRIVE = "drive"


@dataclass(frozen=True)
class LightingProfile:
    background_color: int
    fog_color: int
    ambient_intensity: float
    spotlights_visible: bool
    ground_visible: bool
    road_visible: bool


_SHOWROOM = LightingProfile(
    background_color=0x1A1A1A,
    fog_color=0x1A1A1A,
    ambient_intensity=0.2,
    spotlights_visible=True,
    ground_visible=True,
    road_visible=False,
)

LIGHTING_PROFILES: dict[tuple[EnvironmentMode, bool], LightingProfile] = {
    (EnvironmentMode.SHOWROOM, True): _SHOWROOM,
    (EnvironmentMode.SHOWROOM, False): _SHOWROOM,
    (EnvironmentMode.DRIVE, True): LightingProfile(
        background_color=0x87CEEB,
        fog_color=0x87CEEB,
        ambient_intensity=0.6,
        spotlights_visible=False,
        ground_visible=False,
        road_visible=True,
    ),
    (EnvironmentMode.DRIVE, False): LightingProfile(
        background_color=0x0A0A2E,
        fog_color=0x0A0A2E,
        ambient_intensity=0.3,
        spotlights_visible=False,
        ground_visible=False,
        road_visible=True,
    ),
}


class SceneToggles(Protocol):
    def apply_lighting(self, profile: LightingProfile) -> None:
        ...


class Environment:
    """Tracks the environment flags and pushes the matching profile."""

    def __init__(self, scene: SceneToggles | None = None, is_day_mode: bool = True) -> None:
        self._scene = scene
        self._mode = EnvironmentMode.SHOWROOM
        self._is_day_mode = is_day_mode

    @property
    def mode(self) -> EnvironmentMode:
        return self._mode

    @property
    def is_driving(self) -> bool:
        return self._mode is EnvironmentMode.DRIVE

    @property
    def is_day_mode(self) -> bool:
        return self._is_day_mode

    @property
    def profile(self) -> LightingProfile:
        return LIGHTING_PROFILES[(self._mode, self._is_day_mode)]

    def enter_showroom(self) -> None:
        self._mode = EnvironmentMode.SHOWROOM
        self._apply()

    def enter_drive(self) -> None:
        self._mode = EnvironmentMode.DRIVE
        self._apply()

    def set_day_mode(self, is_day: bool) -> None:
        self._is_day_mode = bool(is_day)
        self._apply()

    def toggle_day_night(self) -> bool:
        self.set_day_mode(not self._is_day_mode)
        return self._is_day_mode

    def _apply(self) -> None:
        if self._scene is not None:
            self._scene.apply_lighting(self.profile)
