"""Live camera plus orbit-controls collaborator."""
from __future__ import annotations

from typing import Protocol

from PyQt5 import QtCore

from car_viewer.model.pose import Pose


class CameraRig(Protocol):
    def pose(self) -> Pose:
        ...

    def set_pose(self, pose: Pose) -> None:
        ...


class OrbitCameraRig(QtCore.QObject):
    """Holds the live camera pose and relays orbit-control interaction.

    A renderer reads :meth:`pose` each frame; an input layer calls
    :meth:`begin_interaction`, :meth:`drag_to` and :meth:`end_interaction`
    while the user orbits the camera.
    """

    interactionStarted = QtCore.pyqtSignal()
    interactionFinished = QtCore.pyqtSignal()
    poseChanged = QtCore.pyqtSignal(object)

    def __init__(self, pose: Pose | None = None, parent: QtCore.QObject | None = None) -> None:
        super().__init__(parent)
        self._pose = pose or Pose(position=(5.0, 3.0, 5.0), target=(0.0, 0.0, 0.0))

    def pose(self) -> Pose:
        return self._pose

    def set_pose(self, pose: Pose) -> None:
        if pose == self._pose:
            return
        self._pose = pose
        self.poseChanged.emit(pose)

    def begin_interaction(self) -> None:
        self.interactionStarted.emit()

    def drag_to(self, pose: Pose) -> None:
        self.set_pose(pose)

    def end_interaction(self) -> None:
        self.interactionFinished.emit()
