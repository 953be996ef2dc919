# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

from almanac.model.navigation import Granularity

APP_NAME = "almanac"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_NOTES_PATH: Path = DATA_PATH / "notes.yaml"
DATA_EXPENSES_PATH: Path = DATA_PATH / "expenses.yaml"
DATA_INCOME_PATH: Path = DATA_PATH / "income.yaml"

DEFAULT_CALENDAR_VIEW: Granularity = "month"
DEFAULT_DAY_START_HOUR = 6
DEFAULT_QUARTER_HOUR_PX = 16
DEFAULT_NOW_REFRESH_SECONDS = 30.0


class Configuration(TypedDict):
    calendar_default_view: Granularity
    calendar_day_start_hour: int
    calendar_quarter_hour_px: int
    now_refresh_seconds: float
    show_header: bool
    data_path: Optional[str]


def get_default_configuration() -> Configuration:
    return {
        "calendar_default_view": DEFAULT_CALENDAR_VIEW,
        "calendar_day_start_hour": DEFAULT_DAY_START_HOUR,
        "calendar_quarter_hour_px": DEFAULT_QUARTER_HOUR_PX,
        "now_refresh_seconds": DEFAULT_NOW_REFRESH_SECONDS,
        "show_header": True,
        "data_path": None,
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_NOTES_PATH, DATA_EXPENSES_PATH, DATA_INCOME_PATH

    DATA_PATH = data_path
    DATA_NOTES_PATH = DATA_PATH / "notes.yaml"
    DATA_EXPENSES_PATH = DATA_PATH / "expenses.yaml"
    DATA_INCOME_PATH = DATA_PATH / "income.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before the record
    repository is read.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
