import json
import math

import pytest

from car_viewer.model.camera_info import clipboard_payload, describe_pose, format_vec3, hud_lines
from car_viewer.model.pose import Pose


def test_describe_pose_reports_orbit_angles():
    readout = describe_pose(Pose((3.0, 0.0, 0.0), (0.0, 0.0, 0.0)))

    assert readout.distance == pytest.approx(3.0)
    assert readout.azimuth_deg == pytest.approx(90.0)
    assert readout.polar_deg == pytest.approx(90.0)


def test_describe_pose_measures_relative_to_target():
    readout = describe_pose(Pose((1.0, 1.0 + math.sqrt(2.0), 1.0 + 1.0), (1.0, 1.0, 1.0)))

    assert readout.distance == pytest.approx(math.sqrt(3.0))
    assert readout.azimuth_deg == pytest.approx(0.0)
    assert readout.polar_deg == pytest.approx(math.degrees(math.acos(math.sqrt(2.0 / 3.0))))


def test_degenerate_pose_has_zero_readout():
    readout = describe_pose(Pose((1.0, 1.0, 1.0), (1.0, 1.0, 1.0)))

    assert (readout.distance, readout.azimuth_deg, readout.polar_deg) == (0.0, 0.0, 0.0)


def test_hud_lines_and_clipboard_payload():
    pose = Pose((0.0, 2.0, 0.0), (0.0, 0.0, 0.0))

    assert format_vec3((1.0, -2.5, 0.12345)) == "1.000, -2.500, 0.123"
    assert hud_lines(pose)[:3] == ["Pos: 0.000, 2.000, 0.000", "Target: 0.000, 0.000, 0.000", "Distance: 2.000"]

    payload = json.loads(clipboard_payload(pose))
    assert payload["position"] == {"x": 0.0, "y": 2.0, "z": 0.0}
    assert payload["distance"] == 2.0
    assert payload["polarDeg"] == 0.0
