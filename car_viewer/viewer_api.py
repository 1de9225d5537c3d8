"""Public API surface exposed to the host application."""
from __future__ import annotations

from typing import Callable, Mapping

from car_viewer.config import ViewerSettings
from car_viewer.controllers.camera_tweener import TweenTask
from car_viewer.controllers.frame_scheduler import FrameScheduler
from car_viewer.controllers.orbit_rig import OrbitCameraRig
from car_viewer.controllers.shortcuts import KeyboardShortcuts
from car_viewer.controllers.view_controller import ViewController
from car_viewer.model.camera_info import CameraReadout
from car_viewer.model.environment import SceneToggles
from car_viewer.model.pose import Pose
from car_viewer.services.preset_store import PresetStore
from car_viewer.services.storage import KeyValueStorage


class CarViewerApi:
    """Thin API wrapper over the view controller."""

    def __init__(
        self, controller: ViewController, shortcuts: KeyboardShortcuts | None = None
    ) -> None:
        self._controller = controller
        self._shortcuts = shortcuts or KeyboardShortcuts(controller)

    @property
    def controller(self) -> ViewController:
        return self._controller

    def set_parking_brake(self, value: object) -> None:
        self._controller.set_parking_brake(value)

    def set_speed(self, mph: object) -> None:
        self._controller.set_speed(mph)

    def receive_signal(self, name: str, value: object) -> None:
        self._controller.receive_signal(name, value)

    def save_preset(self, name: str, pose: Pose | Mapping[str, object] | None = None) -> Pose:
        return self._controller.save_preset(name, pose)

    def get_preset(self, name: str) -> Pose | None:
        return self._controller.get_preset(name)

    def list_preset_names(self) -> list[str]:
        return self._controller.list_preset_names()

    def go_to_preset(self, name: str, duration_ms: float | None = None) -> TweenTask | None:
        return self._controller.go_to_preset(name, duration_ms)

    def animate_to(
        self, pose: Pose | Mapping[str, object], duration_ms: float | None = None
    ) -> TweenTask:
        return self._controller.animate_to(pose, duration_ms)

    def set_day_mode(self, is_day: bool) -> None:
        self._controller.set_day_mode(is_day)

    def get_day_mode(self) -> bool:
        return self._controller.get_day_mode()

    def toggle_day_night(self) -> bool:
        return self._controller.toggle_day_night()

    def get_speed(self) -> float:
        return self._controller.get_speed()

    def get_animation_speed(self) -> float:
        return self._controller.get_animation_speed()

    def toggle_simulated_brake(self) -> int:
        return self._controller.toggle_simulated_brake()

    def copy_camera_state(self) -> str:
        return self._controller.copy_camera_state()

    def status_text(self) -> str:
        return self._controller.status_text()

    def camera_readout(self) -> CameraReadout:
        return self._controller.camera_readout()

    def hud_lines(self) -> list[str]:
        return self._controller.hud_lines()

    def key_pressed(self, key: str, is_repeat: bool = False) -> bool:
        return self._shortcuts.key_pressed(key, is_repeat)

    def key_released(self, key: str) -> bool:
        return self._shortcuts.key_released(key)


def build_viewer(
    storage: KeyValueStorage,
    scheduler: FrameScheduler,
    settings: ViewerSettings | None = None,
    rig: OrbitCameraRig | None = None,
    scene: SceneToggles | None = None,
    clipboard: Callable[[str], None] | None = None,
    start: bool = True,
) -> CarViewerApi:
    """Wire a rig, preset store and controller into a ready-to-use API."""

    rig = rig or OrbitCameraRig()
    controller = ViewController(
        rig,
        PresetStore(storage),
        scheduler,
        settings=settings,
        scene=scene,
        clipboard=clipboard,
    )
    controller.bind_orbit_controls(rig)
    if start:
        controller.start()
    return CarViewerApi(controller, KeyboardShortcuts(controller))
