"""Time-boxed camera transitions driven by the frame scheduler."""
from __future__ import annotations

from enum import Enum
from typing import Callable

from PyQt5 import QtCore

from car_viewer.controllers.frame_scheduler import FrameScheduler
from car_viewer.controllers.orbit_rig import CameraRig
from car_viewer.model.pose import Pose, ease_in_out_quad, lerp_pose


class TweenOutcome(Enum):
    ARRIVED = "arrived"
    CANCELLED = "cancelled"


class TweenTask(QtCore.QObject):
    """Handle for one camera transition.

    ``finished`` fires exactly once with the :class:`TweenOutcome`. Callers
    that only care about arrival check the outcome before running their
    completion side effects.
    """

    finished = QtCore.pyqtSignal(object)

    def __init__(self, start: Pose, end: Pose, start_time: float, duration_ms: float) -> None:
        super().__init__()
        self.start_pose = start
        self.end_pose = end
        self.start_time = start_time
        self.duration_ms = duration_ms
        self._outcome: TweenOutcome | None = None

    @property
    def outcome(self) -> TweenOutcome | None:
        return self._outcome

    def done(self) -> bool:
        return self._outcome is not None

    def cancelled(self) -> bool:
        return self._outcome is TweenOutcome.CANCELLED

    def add_done_callback(self, callback: Callable[[TweenOutcome], None]) -> None:
        if self._outcome is not None:
            callback(self._outcome)
            return
        self.finished.connect(callback)

    def _resolve(self, outcome: TweenOutcome) -> None:
        if self._outcome is not None:
            return
        self._outcome = outcome
        self.finished.emit(outcome)


class CameraTweener:
    """Moves a camera rig toward a pose with quadratic ease-in-out.

    Only one transition runs at a time; starting another cancels the one in
    flight.
    """

    def __init__(self, rig: CameraRig, scheduler: FrameScheduler) -> None:
        self._rig = rig
        self._scheduler = scheduler
        self._active: TweenTask | None = None

    @property
    def active(self) -> TweenTask | None:
        return self._active

    def cancel(self) -> None:
        task, self._active = self._active, None
        if task is not None:
            task._resolve(TweenOutcome.CANCELLED)

    def animate_to(self, pose: Pose, duration_ms: float = 1000) -> TweenTask:
        self.cancel()
        task = TweenTask(self._rig.pose(), pose, self._scheduler.now_ms(), duration_ms)
        if duration_ms <= 0:
            self._rig.set_pose(pose)
            task._resolve(TweenOutcome.ARRIVED)
            return task
        self._active = task
        self._step(task)
        return task

    def _step(self, task: TweenTask) -> None:
        if task.done():
            return
        elapsed = self._scheduler.now_ms() - task.start_time
        t = min(1.0, elapsed / task.duration_ms)
        if t >= 1.0:
            self._rig.set_pose(task.end_pose)
            if self._active is task:
                self._active = None
            task._resolve(TweenOutcome.ARRIVED)
            return
        self._rig.set_pose(lerp_pose(task.start_pose, task.end_pose, ease_in_out_quad(t)))
        self._scheduler.request_frame(lambda: self._step(task))
