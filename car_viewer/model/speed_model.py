"""Vehicle speed signal to road-animation rate mapping."""
from __future__ import annotations

import math

BASE_RATE = 0.3
MAX_SPEED_MPH = 75.0
CALIBRATION_SPEED_MPH = 50.0


def coerce_number(raw: object) -> float:
    """Best-effort numeric coercion; anything unusable becomes ``0.0``.

    Strings follow Python's ``float`` grammar: ``"1_0"`` reads as 10 and
    hex literals such as ``"0x10"`` are rejected (0.0). ``inf`` passes through
    and is clamped by the caller.
    """

    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, (str, bytes)):
        text = raw.decode("utf-8", "replace") if isinstance(raw, bytes) else raw
        text = text.strip()
        if not text:
            return 0.0
        raw = text
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(value):
        return 0.0
    return value


class SpeedModel:
    """Clamps speed to the legal range and derives the animation rate.

    The calibration speed maps to exactly ``base_rate``; the mapping stays
    linear above it, so the top speed yields 1.5x the base rate.
    """

    def __init__(
        self,
        base_rate: float = BASE_RATE,
        max_speed_mph: float = MAX_SPEED_MPH,
        calibration_speed_mph: float = CALIBRATION_SPEED_MPH,
    ) -> None:
        self.base_rate = base_rate
        self.max_speed_mph = max_speed_mph
        self.calibration_speed_mph = calibration_speed_mph
        self._speed = 0.0
        self._animation_speed = 0.0

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def animation_speed(self) -> float:
        return self._animation_speed

    def set_speed(self, raw: object) -> float:
        self._speed = max(0.0, min(self.max_speed_mph, coerce_number(raw)))
        self._animation_speed = self._speed / self.calibration_speed_mph * self.base_rate
        return self._speed
