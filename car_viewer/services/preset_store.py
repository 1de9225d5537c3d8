"""Named camera presets persisted as one JSON blob."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Mapping

from car_viewer.model.pose import Pose
from car_viewer.services.storage import KeyValueStorage


logger = logging.getLogger(__name__)

PRESETS_KEY = "cameraPresets"
LEGACY_HOME_KEY = "cameraHome"

HOME = "Home"
DRIVE = "Drive"

DEFAULT_PRESETS: dict[str, Pose] = {
    DRIVE: Pose(
        position=(0.12909591647276278, 2.215759854813773, -5.849405778042717),
        target=(0.0, 0.0, 0.0),
    ),
    HOME: Pose(
        position=(-4.358857444267401, 1.5797084394163963, 3.222751650234066),
        target=(0.0, 0.0, 0.0),
    ),
}


@dataclass
class PresetLoadResult:
    """Outcome of reading the persisted presets.

    ``degraded`` is set when the stored blob could not be used as-is; the
    store then falls back to whatever could be salvaged (often nothing).
    """

    presets: dict[str, Pose] = field(default_factory=dict)
    degraded: bool = False
    reason: str | None = None
    skipped: list[str] = field(default_factory=list)
    migrated_legacy: bool = False


def parse_presets(raw: str | None) -> PresetLoadResult:
    if raw is None:
        return PresetLoadResult()
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        return PresetLoadResult(degraded=True, reason=f"invalid JSON: {exc.msg}")
    if not isinstance(payload, dict):
        return PresetLoadResult(degraded=True, reason="presets blob is not an object")

    result = PresetLoadResult()
    for name, entry in payload.items():
        try:
            result.presets[str(name)] = Pose.from_payload(entry)
        except (KeyError, TypeError, ValueError):
            result.skipped.append(str(name))
    if result.skipped:
        result.degraded = True
        result.reason = "skipped malformed presets: " + ", ".join(result.skipped)
    return result


class PresetStore:
    """Owns the name -> pose mapping and its persistence."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._presets: dict[str, Pose] = {}

    def load(self) -> PresetLoadResult:
        result = parse_presets(self._storage.get_item(PRESETS_KEY))
        if result.degraded:
            logger.warning("Camera presets degraded: %s", result.reason)
        self._presets = dict(result.presets)

        if self._migrate_legacy_home():
            result.migrated_legacy = True
            result.presets = dict(self._presets)
        return result

    def _migrate_legacy_home(self) -> bool:
        raw = self._storage.get_item(LEGACY_HOME_KEY)
        if raw is None or HOME in self._presets:
            return False
        try:
            pose = Pose.from_payload(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Ignoring malformed legacy %s record", LEGACY_HOME_KEY)
            return False
        self._presets[HOME] = pose
        self.save()
        self._storage.remove_item(LEGACY_HOME_KEY)
        logger.info("Migrated legacy %s record into the %s preset", LEGACY_HOME_KEY, HOME)
        return True

    def save(self) -> None:
        payload = {name: pose.to_payload() for name, pose in self._presets.items()}
        self._storage.set_item(PRESETS_KEY, json.dumps(payload))

    def set(self, name: str, pose: Pose) -> None:
        self._presets[name] = pose
        self.save()
        logger.debug("Saved preset %s: %s", name, pose)

    def get(self, name: str) -> Pose | None:
        return self._presets.get(name)

    def names(self) -> list[str]:
        return list(self._presets)

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def seed_defaults(self, defaults: Mapping[str, Pose] = DEFAULT_PRESETS) -> list[str]:
        """Insert any missing default presets and persist them."""

        seeded = [name for name in defaults if name not in self._presets]
        for name in seeded:
            self._presets[name] = defaults[name]
            logger.info("%s preset added as default", name)
        if seeded:
            self.save()
        return seeded
