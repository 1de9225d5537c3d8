"""Rendering-clock scheduling used by camera tweens and revert timers.

Everything runs on the thread that drives the render loop. Work is never
blocked on; it is re-queued for the next frame or for a deadline.
"""
from __future__ import annotations

import itertools
from typing import Callable, Protocol

from PyQt5 import QtCore


class ScheduledCall(Protocol):
    def cancel(self) -> None:
        ...

    def active(self) -> bool:
        ...


class FrameScheduler(Protocol):
    def now_ms(self) -> float:
        ...

    def request_frame(self, callback: Callable[[], None]) -> None:
        ...

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        ...


class _QtScheduledCall:
    def __init__(self, timer: QtCore.QTimer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()

    def active(self) -> bool:
        return self._timer.isActive()


class QtFrameScheduler:
    """Schedules frames and deferred calls on the Qt event loop."""

    def __init__(self, frame_interval_ms: int = 16) -> None:
        self._frame_interval_ms = frame_interval_ms
        self._clock = QtCore.QElapsedTimer()
        self._clock.start()

    def now_ms(self) -> float:
        return float(self._clock.elapsed())

    def request_frame(self, callback: Callable[[], None]) -> None:
        QtCore.QTimer.singleShot(self._frame_interval_ms, callback)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = QtCore.QTimer()
        timer.setSingleShot(True)
        timer.setTimerType(QtCore.Qt.PreciseTimer)
        timer.timeout.connect(callback)
        timer.start(max(0, int(delay_ms)))
        return _QtScheduledCall(timer)


class _ManualCall:
    def __init__(self, deadline: float, order: int, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.order = order
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class ManualFrameScheduler:
    """A stepped clock: time only moves when :meth:`advance` is called."""

    def __init__(self, frame_interval_ms: float = 16.0) -> None:
        self.frame_interval_ms = frame_interval_ms
        self._now = 0.0
        self._frames: list[Callable[[], None]] = []
        self._calls: list[_ManualCall] = []
        self._order = itertools.count()

    def now_ms(self) -> float:
        return self._now

    def request_frame(self, callback: Callable[[], None]) -> None:
        self._frames.append(callback)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        call = _ManualCall(self._now + max(0.0, delay_ms), next(self._order), callback)
        self._calls.append(call)
        return call

    @property
    def pending_frames(self) -> int:
        return len(self._frames)

    def advance(self, ms: float) -> None:
        """Move the clock forward frame by frame, running due work."""

        end = self._now + ms
        while self._now < end:
            self._now = min(end, self._now + self.frame_interval_ms)
            self._run_due_calls()
            frames, self._frames = self._frames, []
            for callback in frames:
                callback()

    def _run_due_calls(self) -> None:
        due = sorted(
            (call for call in self._calls if call.active() and call.deadline <= self._now),
            key=lambda call: (call.deadline, call.order),
        )
        self._calls = [call for call in self._calls if call.active() and call not in due]
        for call in due:
            if call.cancelled:
                continue
            call.fired = True
            call.callback()
