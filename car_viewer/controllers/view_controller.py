"""Mode state machine reconciling vehicle signals with camera behavior.

The controller owns one :class:`ViewState` and decides, for every incoming
signal or orbit interaction, which preset the camera should head for, which
environment profile applies and when an automatic revert is due.
"""
from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional, Union

from PyQt5 import QtCore

from car_viewer.config import ViewerSettings
from car_viewer.controllers.camera_tweener import CameraTweener, TweenOutcome, TweenTask
from car_viewer.controllers.frame_scheduler import FrameScheduler, ScheduledCall
from car_viewer.controllers.orbit_rig import CameraRig, OrbitCameraRig
from car_viewer.controllers.signal_router import SignalRoute, SignalRouter, name_contains
from car_viewer.model.camera_info import (
    CameraReadout,
    clipboard_payload,
    describe_pose,
    hud_lines as format_hud_lines,
)
from car_viewer.model.drive_animation import DriveAnimation
from car_viewer.model.environment import Environment, SceneToggles
from car_viewer.model.pose import Pose, Vec3, to_vec3
from car_viewer.model.speed_model import SpeedModel, coerce_number
from car_viewer.model.view_state import ViewState
from car_viewer.services.preset_store import DRIVE, HOME, PresetLoadResult, PresetStore


logger = logging.getLogger(__name__)

PoseInput = Optional[Union[Pose, Mapping[str, object]]]


class ViewController(QtCore.QObject):
    """Top-level orchestrator for camera presets, brake edges and reverts."""

    notification = QtCore.pyqtSignal(str)
    modeChanged = QtCore.pyqtSignal(object)
    parkBrakeChanged = QtCore.pyqtSignal(int)
    speedChanged = QtCore.pyqtSignal(float)
    dayModeChanged = QtCore.pyqtSignal(bool)
    cameraMoved = QtCore.pyqtSignal(str)

    def __init__(
        self,
        rig: CameraRig,
        presets: PresetStore,
        scheduler: FrameScheduler,
        settings: ViewerSettings | None = None,
        scene: SceneToggles | None = None,
        clipboard: Callable[[str], None] | None = None,
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._rig = rig
        self._presets = presets
        self._scheduler = scheduler
        self._settings = settings or ViewerSettings()
        self._clipboard = clipboard
        self._state = ViewState()
        self._environment = Environment(scene, is_day_mode=self._state.is_day_mode)
        self._speed = SpeedModel(
            base_rate=self._settings.base_rate,
            max_speed_mph=self._settings.max_speed_mph,
            calibration_speed_mph=self._settings.calibration_speed_mph,
        )
        self._tweener = CameraTweener(rig, scheduler)
        self._animation = DriveAnimation()
        self._revert_call: ScheduledCall | None = None
        self._last_park_brake = 1
        self._router = SignalRouter(
            [
                SignalRoute("park_brake", name_contains("park"), self._on_brake_signal),
                SignalRoute("speed", name_contains("speed", "velocity"), self._on_speed_signal),
            ],
            fallback=self._on_generic_signal,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def rig(self) -> CameraRig:
        return self._rig

    @property
    def presets(self) -> PresetStore:
        return self._presets

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def tweener(self) -> CameraTweener:
        return self._tweener

    @property
    def drive_animation(self) -> DriveAnimation:
        return self._animation

    @property
    def settings(self) -> ViewerSettings:
        return self._settings

    @property
    def last_park_brake(self) -> int:
        return self._last_park_brake

    def bind_orbit_controls(self, rig: OrbitCameraRig) -> None:
        rig.interactionStarted.connect(self.on_interaction_started)
        rig.interactionFinished.connect(self.on_interaction_finished)
        rig.poseChanged.connect(self.on_pose_changed)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------
    def start(self) -> PresetLoadResult:
        """Load presets and snap the camera to Home without animating."""

        result = self._presets.load()
        self._presets.seed_defaults()
        self._last_park_brake = 1
        self.set_mode(HOME)
        home = self._presets.get(HOME)
        if home is not None:
            self._tweener.animate_to(home, 0)
        logger.info("Initialized to %s mode", HOME)
        return result

    # ------------------------------------------------------------------
    # Modes and presets
    # ------------------------------------------------------------------
    def set_mode(self, name: str | None) -> None:
        self._state.current_mode = name
        if name == HOME:
            self._set_park_brake_display(1)
            self._environment.enter_showroom()
        elif name == DRIVE:
            self._set_park_brake_display(0)
            self._environment.enter_drive()
            self._animation.reset()
        elif self._state.park_brake is None:
            self._set_park_brake_display(0)
        self._state.is_driving = self._environment.is_driving
        self._cancel_revert()
        logger.debug("Mode set to %s", name)
        self.modeChanged.emit(name)

    def go_to_preset(self, name: str, duration_ms: float | None = None) -> TweenTask | None:
        """Tween to a named preset; ``None`` when the preset does not exist."""

        pose = self._presets.get(name)
        if pose is None:
            self.notify("Preset not found")
            return None
        if duration_ms is None:
            duration_ms = self._settings.default_transition_ms
        self.set_mode(name)
        task = self._tweener.animate_to(pose, duration_ms)
        task.add_done_callback(lambda outcome: self._on_preset_reached(name, outcome))
        return task

    def _on_preset_reached(self, name: str, outcome: TweenOutcome) -> None:
        if outcome is not TweenOutcome.ARRIVED:
            return
        self.cameraMoved.emit(name)
        self.notify(f"Moved to {name}")

    def animate_to(self, pose: PoseInput, duration_ms: float | None = None) -> TweenTask:
        if duration_ms is None:
            duration_ms = self._settings.default_transition_ms
        return self._tweener.animate_to(self._resolve_pose(pose), duration_ms)

    def save_preset(self, name: str, pose: PoseInput = None) -> Pose:
        """Store a preset; missing halves are taken from the live camera."""

        resolved = self._resolve_pose(pose)
        self._presets.set(name, resolved)
        self.notify(f"{name} saved")
        return resolved

    def get_preset(self, name: str) -> Pose | None:
        return self._presets.get(name)

    def list_preset_names(self) -> list[str]:
        return self._presets.names()

    def _resolve_pose(self, pose: PoseInput) -> Pose:
        if isinstance(pose, Pose):
            return pose
        live = self._rig.pose()
        data: Mapping[str, object] = pose if isinstance(pose, Mapping) else {}
        return Pose(
            self._vector_or_live(data.get("position"), live.position, "position"),
            self._vector_or_live(data.get("target"), live.target, "target"),
        )

    @staticmethod
    def _vector_or_live(value: object, live: Vec3, label: str) -> Vec3:
        if value is None:
            return live
        try:
            return to_vec3(value)  # type: ignore[arg-type]
        except (KeyError, TypeError, ValueError):
            logger.warning("Invalid %s %r; using the live camera value", label, value)
            return live

    # ------------------------------------------------------------------
    # Vehicle signals
    # ------------------------------------------------------------------
    def receive_signal(self, name: str, value: object) -> str | None:
        return self._router.dispatch(name, value)

    def set_parking_brake(self, value: object) -> None:
        brake = 1 if coerce_number(value) else 0
        self._set_park_brake_display(brake)
        previous, self._last_park_brake = self._last_park_brake, brake
        if previous == 1 and brake == 0:
            self._follow_brake_edge(DRIVE, "released")
        elif previous == 0 and brake == 1:
            self._follow_brake_edge(HOME, "engaged")

    def toggle_simulated_brake(self) -> int:
        self.set_parking_brake(0 if self._state.park_brake == 1 else 1)
        return self._state.park_brake or 0

    def _follow_brake_edge(self, preset: str, edge: str) -> None:
        logger.info("park_brake %s", edge)
        if preset not in self._presets:
            self.notify(f"park_brake {edge} — {preset} preset not found")
            return
        self.go_to_preset(preset, self._settings.brake_transition_ms)
        self.notify(f"park_brake {edge} — entering {preset} view")

    def _set_park_brake_display(self, value: int) -> None:
        self._state.park_brake = value
        self.parkBrakeChanged.emit(value)

    def set_speed(self, raw: object) -> float:
        speed = self._speed.set_speed(raw)
        self._state.current_speed_mph = speed
        self._state.animation_speed = self._speed.animation_speed
        self.speedChanged.emit(speed)
        return speed

    def get_speed(self) -> float:
        return self._speed.speed

    def get_animation_speed(self) -> float:
        return self._speed.animation_speed

    def _on_brake_signal(self, _name: str, value: object) -> None:
        self.set_parking_brake(value)

    def _on_speed_signal(self, _name: str, value: object) -> None:
        speed = self.set_speed(value)
        self.notify(f"Speed: {speed:.0f} mph")

    def _on_generic_signal(self, name: str, value: object) -> None:
        self.notify(f"{name}: {value}")

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------
    def set_day_mode(self, is_day: bool) -> None:
        self._environment.set_day_mode(is_day)
        self._state.is_day_mode = self._environment.is_day_mode
        self.dayModeChanged.emit(self._state.is_day_mode)

    def get_day_mode(self) -> bool:
        return self._environment.is_day_mode

    def toggle_day_night(self) -> bool:
        self.set_day_mode(not self._environment.is_day_mode)
        return self._state.is_day_mode

    def advance_animation(self) -> None:
        self._animation.step(self._state.animation_speed, self._state.is_driving)

    # ------------------------------------------------------------------
    # Orbit interaction
    # ------------------------------------------------------------------
    def on_interaction_started(self) -> None:
        self._state.user_interacting = True
        self._tweener.cancel()
        self._cancel_revert()

    def on_interaction_finished(self) -> None:
        self._state.user_interacting = False
        self._cancel_revert()
        delay = self._settings.revert_delay_ms
        self._revert_call = self._scheduler.call_later(delay, self._on_revert_timeout)
        self._state.pending_revert_deadline = self._scheduler.now_ms() + delay

    def _on_revert_timeout(self) -> None:
        self._revert_call = None
        self._state.pending_revert_deadline = None
        mode = self._state.current_mode
        if self._state.user_interacting or not mode or mode not in self._presets:
            return
        self.go_to_preset(mode, self._settings.revert_transition_ms)
        self.notify(f"Reverting to {mode} view")

    def _cancel_revert(self) -> None:
        if self._revert_call is not None:
            self._revert_call.cancel()
            self._revert_call = None
        self._state.pending_revert_deadline = None

    def on_pose_changed(self, _pose: object = None) -> None:
        """Keep the camera and its target above the floor."""

        pose = self._rig.pose()
        floor = self._settings.floor_y
        px, py, pz = pose.position
        tx, ty, tz = pose.target
        if py >= floor and ty >= floor:
            return
        self._rig.set_pose(Pose((px, max(py, floor), pz), (tx, max(ty, floor), tz)))

    # ------------------------------------------------------------------
    # HUD helpers
    # ------------------------------------------------------------------
    def camera_readout(self) -> CameraReadout:
        return describe_pose(self._rig.pose())

    def hud_lines(self) -> list[str]:
        """Readout lines for the info overlay; empty while it is hidden."""

        if not self._state.info_visible:
            return []
        return format_hud_lines(self._rig.pose())

    def toggle_info(self) -> bool:
        self._state.info_visible = not self._state.info_visible
        return self._state.info_visible

    def status_text(self) -> str:
        return self._state.brake_status_text()

    def copy_camera_state(self) -> str:
        text = clipboard_payload(self._rig.pose())
        if self._clipboard is None:
            self.notify("Copy failed")
            return text
        try:
            self._clipboard(text)
        except (OSError, RuntimeError):
            logger.exception("Clipboard write failed")
            self.notify("Copy failed")
            return text
        self.notify("Camera state copied")
        return text

    def notify(self, message: str) -> None:
        logger.debug("notify: %s", message)
        self.notification.emit(message)
