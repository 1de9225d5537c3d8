"""Keyboard shortcuts for the viewer: info toggle, go Home, copy camera."""
from __future__ import annotations

from car_viewer.controllers.view_controller import ViewController
from car_viewer.services.preset_store import HOME


class KeyboardShortcuts:
    """Maps key presses onto controller actions.

    ``i`` flips the info readout once per physical press; holding the key
    does nothing further until it is released.
    """

    def __init__(self, controller: ViewController) -> None:
        self._controller = controller
        self._info_key_held = False

    def key_pressed(self, key: str, is_repeat: bool = False) -> bool:
        if is_repeat:
            return False
        key = (key or "").lower()
        if key == "i":
            if not self._info_key_held:
                self._controller.toggle_info()
                self._info_key_held = True
            return True
        if key == "h":
            if self._controller.get_preset(HOME) is not None:
                self._controller.go_to_preset(HOME, self._controller.settings.shortcut_transition_ms)
            else:
                self._controller.notify("No Home set")
            return True
        if key == "c":
            self._controller.copy_camera_state()
            return True
        return False

    def key_released(self, key: str) -> bool:
        if (key or "").lower() != "i":
            return False
        handled = self._info_key_held
        self._info_key_held = False
        return handled
