# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from almanac import configuration
from almanac.model.navigation import GRANULARITIES, Granularity

logger = logging.getLogger(__name__)


def validate_default_view(value: Any) -> Granularity:
    if value not in GRANULARITIES:
        raise ValueError(
            f"Default view must be one of {', '.join(GRANULARITIES)}, got {value!r}"
        )
    return cast(Granularity, value)


def validate_start_hour(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 23:
        raise ValueError(f"Day start hour must be between 0 and 23, got {value!r}")
    return value


def validate_quarter_hour_px(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(
            f"Quarter-hour pixel height must be a positive integer, got {value!r}"
        )
    return value


def validate_refresh_seconds(value: Any) -> float:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not 0 < value < 60
    ):
        raise ValueError(
            f"Refresh interval must be between 0 and 60 seconds, got {value!r}"
        )
    return float(value)


_VALIDATORS = {
    "calendar_default_view": validate_default_view,
    "calendar_day_start_hour": validate_start_hour,
    "calendar_quarter_hour_px": validate_quarter_hour_px,
    "now_refresh_seconds": validate_refresh_seconds,
}


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        raw_config = None
        if configuration.APP_CONFIG_PATH.is_file():
            raw_config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        defaults = configuration.get_default_configuration()
        if raw_config is None:
            self._config = defaults
            return

        # Migration: back-fill any field that doesn't exist yet
        for key, default_value in defaults.items():
            if key not in raw_config:
                raw_config[key] = default_value

        # Replace invalid hand-edited values with their defaults
        for key, validator in _VALIDATORS.items():
            try:
                raw_config[key] = validator(raw_config[key])
            except ValueError:
                logger.warning(
                    "Invalid %s in %s, using default",
                    key,
                    configuration.APP_CONFIG_PATH,
                )
                raw_config[key] = defaults[key]  # type: ignore[literal-required]

        self._config = cast(configuration.Configuration, raw_config)

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        calendar_default_view: Optional[str] = None,
        calendar_day_start_hour: Optional[int] = None,
        calendar_quarter_hour_px: Optional[int] = None,
        now_refresh_seconds: Optional[float] = None,
        show_header: Optional[bool] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        # Validate everything before touching the cached config
        if calendar_default_view is not None:
            calendar_default_view = validate_default_view(calendar_default_view)
        if calendar_day_start_hour is not None:
            calendar_day_start_hour = validate_start_hour(calendar_day_start_hour)
        if calendar_quarter_hour_px is not None:
            calendar_quarter_hour_px = validate_quarter_hour_px(
                calendar_quarter_hour_px
            )
        if now_refresh_seconds is not None:
            now_refresh_seconds = validate_refresh_seconds(now_refresh_seconds)

        self.is_dirty = True

        if calendar_default_view is not None:
            self.config["calendar_default_view"] = cast(
                Granularity, calendar_default_view
            )
        if calendar_day_start_hour is not None:
            self.config["calendar_day_start_hour"] = calendar_day_start_hour
        if calendar_quarter_hour_px is not None:
            self.config["calendar_quarter_hour_px"] = calendar_quarter_hour_px
        if now_refresh_seconds is not None:
            self.config["now_refresh_seconds"] = now_refresh_seconds
        if show_header is not None:
            self.config["show_header"] = show_header
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
