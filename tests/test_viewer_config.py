from pathlib import Path

from car_viewer.config import (
    CONFIG_FILENAME,
    PRESETS_FILENAME,
    ViewerSettings,
    config_path,
    load_settings,
)


def test_missing_ini_uses_defaults(tmp_path):
    main_script = tmp_path / "main.py"

    settings = load_settings(main_script)

    assert settings.revert_delay_ms == 1000.0
    assert settings.brake_transition_ms == 1200.0
    assert settings.floor_y == -0.49
    assert settings.base_rate == 0.3
    assert settings.presets_path == tmp_path.resolve() / PRESETS_FILENAME


def test_ini_overrides_known_values(tmp_path):
    main_script = tmp_path / "main.py"
    (tmp_path / CONFIG_FILENAME).write_text(
        "[camera]\n"
        "revert_delay_ms = 2500\n"
        "floor_y = -1.0\n"
        "[speed]\n"
        "base_rate = 0.5\n"
        "[storage]\n"
        "presets_path = data/presets.json\n",
        encoding="utf-8",
    )

    settings = load_settings(main_script)

    assert settings.revert_delay_ms == 2500.0
    assert settings.floor_y == -1.0
    assert settings.base_rate == 0.5
    assert settings.revert_transition_ms == ViewerSettings().revert_transition_ms
    assert settings.presets_path == tmp_path.resolve() / "data" / "presets.json"


def test_malformed_values_fall_back_to_defaults(tmp_path):
    main_script = tmp_path / "main.py"
    (tmp_path / CONFIG_FILENAME).write_text(
        "[camera]\nrevert_delay_ms = soon\n[speed]\ncalibration_speed_mph = 0\n",
        encoding="utf-8",
    )

    settings = load_settings(main_script)

    assert settings.revert_delay_ms == 1000.0
    assert settings.calibration_speed_mph == 50.0


def test_unparseable_ini_is_ignored(tmp_path):
    main_script = tmp_path / "main.py"
    (tmp_path / CONFIG_FILENAME).write_text("no section header\n", encoding="utf-8")

    settings = load_settings(main_script)

    assert settings == ViewerSettings(presets_path=tmp_path.resolve() / PRESETS_FILENAME)


def test_config_path_sits_beside_main_script(tmp_path):
    assert config_path(Path(tmp_path / "main.py")) == tmp_path.resolve() / CONFIG_FILENAME
