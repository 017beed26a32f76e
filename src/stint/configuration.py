# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import Optional, TypedDict

import platformdirs

APP_NAME = "stint"

CONFIG_PATH_ENV = "STINT_CONFIG_PATH"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

DEFAULT_DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
ENTRIES_FILE_NAME = "entries.yaml"


class Configuration(TypedDict):
    show_seconds: bool
    delete_confirmation: bool
    data_path: Optional[str]


def get_default_configuration() -> Configuration:
    return {
        "show_seconds": True,
        "delete_confirmation": True,
        "data_path": None,
    }


def get_app_config_path() -> Path:
    """
    Location of the config file.

    The STINT_CONFIG_PATH environment variable overrides the platform
    default so tests and scripts can point at a scratch file.
    """
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return APP_CONFIG_PATH


def get_data_path(config: Configuration) -> Path:
    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        return Path(data_path_setting)
    return DEFAULT_DATA_PATH


def get_entries_path(config: Configuration) -> Path:
    return get_data_path(config) / ENTRIES_FILE_NAME
