"""View-state container for the vehicle viewer.

This is the transient state one view controller owns and mutates in response
to signals and user input. Nothing here is persisted; presets live in the
preset store.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ViewState:
    current_mode: str | None = None
    park_brake: int | None = None
    is_driving: bool = False
    is_day_mode: bool = True
    current_speed_mph: float = 0.0
    animation_speed: float = 0.0
    user_interacting: bool = False
    pending_revert_deadline: float | None = None
    info_visible: bool = False

    def brake_status_text(self) -> str:
        brake = "-" if self.park_brake is None else str(self.park_brake)
        return f"park_brake: {brake} (mode: {self.current_mode or 'none'})"

    def brake_action_label(self) -> str:
        """Label for the simulated brake button: the action it performs."""

        return "Sim Brake Release" if self.park_brake == 1 else "Sim Brake Enable"
