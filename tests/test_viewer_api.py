import argparse
import json
import logging

import pytest

pytest.importorskip("PyQt5")

from car_viewer import main as main_mod
from car_viewer.controllers.frame_scheduler import ManualFrameScheduler
from car_viewer.controllers.orbit_rig import OrbitCameraRig
from car_viewer.model.pose import Pose
from car_viewer.services.preset_store import DEFAULT_PRESETS, LEGACY_HOME_KEY, PRESETS_KEY
from car_viewer.services.storage import JsonFileStorage, MemoryStorage
from car_viewer.viewer_api import build_viewer


def test_end_to_end_start_then_release_brake():
    scheduler = ManualFrameScheduler(frame_interval_ms=16)
    rig = OrbitCameraRig()
    api = build_viewer(MemoryStorage(), scheduler, rig=rig)

    assert api.controller.state.current_mode == "Home"
    assert api.status_text() == "park_brake: 1 (mode: Home)"
    assert rig.pose() == DEFAULT_PRESETS["Home"]

    api.set_parking_brake(0)

    assert api.controller.state.current_mode == "Drive"
    assert api.controller.state.park_brake == 0

    scheduler.advance(1200)

    assert rig.pose() == DEFAULT_PRESETS["Drive"]


def test_api_preset_round_trip_through_persistent_storage(tmp_path):
    path = tmp_path / "presets.json"
    api = build_viewer(JsonFileStorage(path), ManualFrameScheduler())

    api.save_preset("Garage", {"position": [3, 1, 3], "target": [0, 0.5, 0]})

    reopened = build_viewer(JsonFileStorage(path), ManualFrameScheduler())
    assert reopened.list_preset_names() == ["Drive", "Home", "Garage"]
    assert reopened.get_preset("Garage").position == pytest.approx((3.0, 1.0, 3.0))
    assert reopened.get_preset("Garage").target == pytest.approx((0.0, 0.5, 0.0))


def test_api_migrates_legacy_home_on_startup():
    legacy = {"position": [1.0, 2.0, 3.0], "target": [0.0, 0.0, 0.0]}
    storage = MemoryStorage({LEGACY_HOME_KEY: json.dumps(legacy)})
    rig = OrbitCameraRig()

    api = build_viewer(storage, ManualFrameScheduler(), rig=rig)

    assert storage.get_item(LEGACY_HOME_KEY) is None
    assert api.get_preset("Home") == Pose((1.0, 2.0, 3.0), (0.0, 0.0, 0.0))
    assert rig.pose() == api.get_preset("Home")
    assert set(json.loads(storage.get_item(PRESETS_KEY))) == {"Home", "Drive"}


def test_api_go_to_and_animate_to():
    scheduler = ManualFrameScheduler(frame_interval_ms=10)
    rig = OrbitCameraRig()
    api = build_viewer(MemoryStorage(), scheduler, rig=rig)

    first = api.animate_to({"position": [0, 5, 5]}, 300)
    second = api.go_to_preset("Drive", 200)
    scheduler.advance(200)

    assert first.cancelled()
    assert second.done() and not second.cancelled()
    assert rig.pose() == DEFAULT_PRESETS["Drive"]
    assert api.go_to_preset("Nowhere") is None


def test_api_speed_and_day_mode():
    api = build_viewer(MemoryStorage(), ManualFrameScheduler())

    api.set_speed(75)
    assert api.get_speed() == 75.0
    assert api.get_animation_speed() == pytest.approx(0.45)

    api.receive_signal("velocity", -3)
    assert api.get_speed() == 0.0

    api.set_day_mode(False)
    assert api.get_day_mode() is False
    assert api.toggle_day_night() is True


def test_api_simulated_brake_and_copy():
    copied = []
    api = build_viewer(MemoryStorage(), ManualFrameScheduler(), clipboard=copied.append)

    assert api.toggle_simulated_brake() == 0
    assert api.controller.state.current_mode == "Drive"
    assert json.loads(api.copy_camera_state()) == json.loads(copied[0])


def test_offline_replay_runs_signals(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(main_mod, "configure_logging", lambda: None)
    storage_path = tmp_path / "presets.json"

    with caplog.at_level(logging.INFO, logger="car_viewer.main"):
        exit_code = main_mod.main(
            [
                "--offline",
                "--storage",
                str(storage_path),
                "--interval-ms",
                "100",
                "--signal",
                "vehicle_speed=40",
                "--signal",
                "park_brake=0",
            ]
        )

    assert exit_code == 0
    assert storage_path.exists()
    assert "Notice: Speed: 40 mph" in caplog.text
    assert "Notice: Moved to Drive" in caplog.text
    assert "park_brake: 0 (mode: Drive)" in caplog.text


def test_parse_signal_requires_name_and_value():
    assert main_mod.parse_signal(" park_brake = 1 ") == ("park_brake", "1")
    with pytest.raises(argparse.ArgumentTypeError):
        main_mod.parse_signal("park_brake")


def test_api_keyboard_shortcuts_drive_the_controller():
    scheduler = ManualFrameScheduler(frame_interval_ms=10)
    rig = OrbitCameraRig()
    copied = []
    api = build_viewer(MemoryStorage(), scheduler, rig=rig, clipboard=copied.append)
    rig.set_pose(Pose((6.0, 2.0, 6.0), (0.0, 0.0, 0.0)))

    assert api.key_pressed("h")
    scheduler.advance(800)
    assert rig.pose() == DEFAULT_PRESETS["Home"]

    assert api.key_pressed("c")
    assert len(copied) == 1

    assert api.key_pressed("i")
    assert api.key_pressed("i", is_repeat=True) is False
    assert api.key_released("i")
    assert api.controller.state.info_visible


def test_api_hud_follows_info_toggle():
    rig = OrbitCameraRig()
    api = build_viewer(MemoryStorage(), ManualFrameScheduler(), rig=rig)
    rig.set_pose(Pose((0.0, 2.0, 0.0), (0.0, 0.0, 0.0)))

    assert api.hud_lines() == []
    readout = api.camera_readout()
    assert readout.distance == pytest.approx(2.0)
    assert readout.polar_deg == pytest.approx(0.0)

    api.key_pressed("i")

    assert api.hud_lines()[:3] == [
        "Pos: 0.000, 2.000, 0.000",
        "Target: 0.000, 0.000, 0.000",
        "Distance: 2.000",
    ]
