"""
Tests for loading, migrating and updating the YAML configuration.
"""

import pytest
import yaml

from almanac import configuration
from almanac.initialize import initialize
from almanac.repository.configuration import ConfigurationRepository


def test_defaults_when_config_file_missing(config_dir):
    repository = ConfigurationRepository()

    assert repository.get_config() == configuration.get_default_configuration()


def test_missing_keys_are_back_filled(config_dir):
    configuration.APP_CONFIG_PATH.write_text(
        yaml.safe_dump({"calendar_default_view": "week"})
    )

    config = ConfigurationRepository().get_config()

    assert config["calendar_default_view"] == "week"
    assert config["calendar_day_start_hour"] == 6
    assert config["calendar_quarter_hour_px"] == 16
    assert config["show_header"] is True


@pytest.mark.parametrize(
    "key,value",
    [
        ("calendar_default_view", "year"),
        ("calendar_day_start_hour", 24),
        ("calendar_day_start_hour", "six"),
        ("calendar_quarter_hour_px", 0),
        ("now_refresh_seconds", 120),
    ],
)
def test_invalid_values_fall_back_to_defaults(config_dir, key, value):
    configuration.APP_CONFIG_PATH.write_text(yaml.safe_dump({key: value}))

    config = ConfigurationRepository().get_config()

    assert config[key] == configuration.get_default_configuration()[key]


def test_get_config_returns_a_copy(config_dir):
    repository = ConfigurationRepository()

    repository.get_config()["calendar_day_start_hour"] = 0

    assert repository.get_config()["calendar_day_start_hour"] == 6


def test_update_and_flush(config_dir):
    repository = ConfigurationRepository()

    repository.update_config(
        calendar_default_view="day",
        calendar_day_start_hour=8,
        calendar_quarter_hour_px=12,
    )

    assert repository.flush() is True
    assert repository.flush() is False
    saved = yaml.safe_load(configuration.APP_CONFIG_PATH.read_text())
    assert saved["calendar_default_view"] == "day"
    assert saved["calendar_day_start_hour"] == 8
    assert saved["calendar_quarter_hour_px"] == 12


@pytest.mark.parametrize(
    "kwargs",
    [
        {"calendar_default_view": "fortnight"},
        {"calendar_day_start_hour": -1},
        {"calendar_quarter_hour_px": -16},
        {"now_refresh_seconds": 0},
        {"calendar_default_view": "day", "calendar_day_start_hour": 99},
    ],
)
def test_invalid_updates_raise_and_change_nothing(config_dir, kwargs):
    repository = ConfigurationRepository()

    with pytest.raises(ValueError):
        repository.update_config(**kwargs)

    assert repository.get_config() == configuration.get_default_configuration()
    assert repository.is_dirty is False


def test_set_data_path_moves_record_files(tmp_path, monkeypatch):
    for name in ("DATA_PATH", "DATA_NOTES_PATH", "DATA_EXPENSES_PATH", "DATA_INCOME_PATH"):
        monkeypatch.setattr(configuration, name, getattr(configuration, name))

    configuration.set_data_path(tmp_path)

    assert configuration.DATA_NOTES_PATH == tmp_path / "notes.yaml"
    assert configuration.DATA_EXPENSES_PATH == tmp_path / "expenses.yaml"
    assert configuration.DATA_INCOME_PATH == tmp_path / "income.yaml"


def test_initialize_writes_default_config(config_dir, tmp_path, monkeypatch, show_header):
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path / "data")

    initialize()

    assert configuration.APP_CONFIG_PATH.is_file()
    saved = yaml.safe_load(configuration.APP_CONFIG_PATH.read_text())
    assert saved == dict(configuration.get_default_configuration())
    assert (tmp_path / "data").is_dir()
