"""Readouts of the live camera for the HUD and the clipboard."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass

import numpy as np

from car_viewer.model.pose import Pose, Vec3


@dataclass(frozen=True)
class CameraReadout:
    distance: float
    azimuth_deg: float
    polar_deg: float


def describe_pose(pose: Pose) -> CameraReadout:
    """Spherical angles of the camera around its target, y-up.

    Azimuth is measured from +z toward +x, polar from +y, following the
    orbit-controls convention.
    """

    offset = np.asarray(pose.position, dtype=float) - np.asarray(pose.target, dtype=float)
    distance = float(np.linalg.norm(offset))
    if distance == 0.0:
        return CameraReadout(0.0, 0.0, 0.0)
    x, y, z = offset.tolist()
    azimuth = math.atan2(x, z)
    polar = math.acos(max(-1.0, min(1.0, y / distance)))
    return CameraReadout(distance, math.degrees(azimuth), math.degrees(polar))


def format_vec3(value: Vec3) -> str:
    return ", ".join(f"{component:.3f}" for component in value)


def hud_lines(pose: Pose) -> list[str]:
    readout = describe_pose(pose)
    return [
        f"Pos: {format_vec3(pose.position)}",
        f"Target: {format_vec3(pose.target)}",
        f"Distance: {readout.distance:.3f}",
        f"Azimuth: {readout.azimuth_deg:.2f}°, Polar: {readout.polar_deg:.2f}°",
    ]


def clipboard_payload(pose: Pose) -> str:
    readout = describe_pose(pose)
    px, py, pz = pose.position
    tx, ty, tz = pose.target
    payload = {
        "position": {"x": px, "y": py, "z": pz},
        "target": {"x": tx, "y": ty, "z": tz},
        "distance": round(readout.distance, 6),
        "azimuthDeg": round(readout.azimuth_deg, 6),
        "polarDeg": round(readout.polar_deg, 6),
    }
    return json.dumps(payload, indent=2)
