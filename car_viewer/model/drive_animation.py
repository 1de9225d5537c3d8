"""Per-frame road, roadside object and wheel motion for drive mode."""
from __future__ import annotations

from dataclasses import dataclass, field

BASE_WHEEL_SPEED = 0.05
WHEEL_SPEED_FACTOR = 0.33
WRAP_LIMIT = -50.0
LANE_WRAP = 100.0
OBJECT_WRAP = 200.0


def default_lane_positions() -> list[float]:
    return [float(i * 10 - 50) for i in range(20)]


def default_object_positions() -> list[float]:
    return [float(i * 20 - 50) for _side in (-1, 1) for i in range(10)]


@dataclass
class DriveAnimation:
    """Scrolls the scenery toward -z instead of moving the car."""

    lane_positions: list[float] = field(default_factory=default_lane_positions)
    object_positions: list[float] = field(default_factory=default_object_positions)
    road_offset: float = 0.0
    wheel_rotation: float = 0.0

    def reset(self) -> None:
        self.road_offset = 0.0

    def step(self, animation_speed: float, is_driving: bool) -> None:
        self.wheel_rotation += BASE_WHEEL_SPEED
        if not is_driving or animation_speed <= 0:
            return
        self.road_offset += animation_speed
        self.lane_positions = [
            _wrap(z - animation_speed, LANE_WRAP) for z in self.lane_positions
        ]
        self.object_positions = [
            _wrap(z - animation_speed, OBJECT_WRAP) for z in self.object_positions
        ]
        self.wheel_rotation += animation_speed * WHEEL_SPEED_FACTOR


def _wrap(z: float, span: float) -> float:
    return z + span if z < WRAP_LIMIT else z
