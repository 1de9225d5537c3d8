"""Camera pose value type shared by presets, the tweener and the rig."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np

Vec3 = tuple[float, float, float]


def to_vec3(value: Sequence[float] | Mapping[str, float]) -> Vec3:
    """Coerce ``[x, y, z]`` or ``{"x", "y", "z"}`` into a float triple.

    Raises ``ValueError`` or ``TypeError`` when the value is not a usable
    vector; callers that degrade silently catch those.
    """

    if isinstance(value, Mapping):
        items = [value["x"], value["y"], value["z"]]
    elif isinstance(value, (str, bytes)):
        raise TypeError("vector must be a sequence of numbers")
    else:
        items = list(value)
    if len(items) != 3:
        raise ValueError(f"expected 3 components, got {len(items)}")
    x, y, z = (float(item) for item in items)
    if not all(np.isfinite((x, y, z))):
        raise ValueError("vector components must be finite")
    return x, y, z


@dataclass(frozen=True)
class Pose:
    """Camera position plus the orbit look-at target."""

    position: Vec3
    target: Vec3

    @classmethod
    def from_payload(cls, payload: object) -> "Pose":
        if not isinstance(payload, Mapping):
            raise TypeError("pose payload must be a mapping")
        try:
            position = payload["position"]
            target = payload["target"]
        except KeyError as exc:
            raise ValueError(f"pose payload is missing {exc.args[0]!r}") from exc
        return cls(to_vec3(position), to_vec3(target))

    def to_payload(self) -> dict[str, list[float]]:
        return {"position": list(self.position), "target": list(self.target)}


def ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


def lerp_pose(start: Pose, end: Pose, alpha: float) -> Pose:
    """Linearly interpolate position and target independently."""

    def _lerp(a: Vec3, b: Vec3) -> Vec3:
        a_arr = np.asarray(a, dtype=float)
        b_arr = np.asarray(b, dtype=float)
        x, y, z = (a_arr + (b_arr - a_arr) * alpha).tolist()
        return x, y, z

    return Pose(_lerp(start.position, end.position), _lerp(start.target, end.target))
