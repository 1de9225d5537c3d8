"""Entry point: replay vehicle signals through a headless car viewer."""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
import sys
from typing import Sequence

from PyQt5 import QtCore

from car_viewer.config import ViewerSettings, load_settings
from car_viewer.controllers.frame_scheduler import ManualFrameScheduler, QtFrameScheduler
from car_viewer.model.environment import LightingProfile
from car_viewer.services.storage import JsonFileStorage, KeyValueStorage, QSettingsStorage
from car_viewer.viewer_api import CarViewerApi, build_viewer


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    base_dir = os.path.dirname(sys.argv[0])
    log_path = os.path.join(base_dir, "car_viewer_log.txt")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )


class LoggingScene:
    """Scene stand-in that records lighting changes in the log."""

    def apply_lighting(self, profile: LightingProfile) -> None:
        logger.info(
            "Lighting: background=#%06x ambient=%.1f spotlights=%s road=%s",
            profile.background_color,
            profile.ambient_intensity,
            profile.spotlights_visible,
            profile.road_visible,
        )


def parse_signal(text: str) -> tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay vehicle signals through the car viewer.")
    parser.add_argument("--storage", type=Path, help="JSON file holding camera presets")
    parser.add_argument(
        "--qsettings",
        action="store_true",
        help="store presets in the platform settings store instead of a JSON file",
    )
    parser.add_argument(
        "--signal",
        dest="signals",
        action="append",
        type=parse_signal,
        default=[],
        metavar="NAME=VALUE",
        help="signal to replay, e.g. park_brake=0 or vehicle_speed=45 (repeatable)",
    )
    parser.add_argument(
        "--interval-ms", type=int, default=1500, help="delay between replayed signals"
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="replay on a stepped clock without starting an event loop",
    )
    return parser


def _storage_for(args: argparse.Namespace, settings: ViewerSettings) -> KeyValueStorage:
    if args.qsettings:
        return QSettingsStorage()
    return JsonFileStorage(args.storage or settings.presets_path)


def _log_summary(api: CarViewerApi) -> None:
    readout = api.camera_readout()
    logger.info(
        "Final state: %s speed=%.0f mph animation=%.3f day=%s camera=%s "
        "distance=%.3f azimuth=%.2f polar=%.2f",
        api.status_text(),
        api.get_speed(),
        api.get_animation_speed(),
        api.get_day_mode(),
        api.controller.rig.pose(),
        readout.distance,
        readout.azimuth_deg,
        readout.polar_deg,
    )


def run_offline(args: argparse.Namespace, settings: ViewerSettings) -> int:
    scheduler = ManualFrameScheduler(settings.frame_interval_ms)
    api = build_viewer(_storage_for(args, settings), scheduler, settings, scene=LoggingScene())
    api.controller.notification.connect(lambda message: logger.info("Notice: %s", message))
    for name, value in args.signals:
        api.receive_signal(name, value)
        scheduler.advance(args.interval_ms)
    scheduler.advance(settings.brake_transition_ms)
    _log_summary(api)
    return 0


def run_event_loop(args: argparse.Namespace, settings: ViewerSettings) -> int:
    app = QtCore.QCoreApplication(sys.argv)

    scheduler = QtFrameScheduler(int(settings.frame_interval_ms))
    api = build_viewer(_storage_for(args, settings), scheduler, settings, scene=LoggingScene())
    api.controller.notification.connect(lambda message: logger.info("Notice: %s", message))

    for index, (name, value) in enumerate(args.signals):
        QtCore.QTimer.singleShot(
            (index + 1) * args.interval_ms,
            lambda name=name, value=value: api.receive_signal(name, value),
        )

    def finish() -> None:
        _log_summary(api)
        app.quit()

    quit_after = (len(args.signals) + 1) * args.interval_ms + int(settings.brake_transition_ms)
    QtCore.QTimer.singleShot(quit_after, finish)
    return app.exec_()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    logger.info("Starting Car Viewer")
    QtCore.QCoreApplication.setOrganizationName("car_viewer")
    QtCore.QCoreApplication.setApplicationName("Car Viewer")

    settings = load_settings(Path(sys.argv[0]).resolve() if sys.argv[0] else None)
    if args.offline:
        return run_offline(args, settings)
    return run_event_loop(args, settings)


if __name__ == "__main__":
    sys.exit(main())
