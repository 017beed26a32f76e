"""
Tests for configuration loading and updates.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from stint import configuration
from stint.repository.configuration import ConfigurationRepository


def test_config_path_override(isolate_config):
    """
    Ensure the environment variable points at the config file.

    Returns
    -------
    None
        This test asserts config path resolution.
    """
    assert configuration.get_app_config_path() == isolate_config


def test_config_path_default(monkeypatch):
    """
    Ensure the platform path is used without an override.

    Returns
    -------
    None
        This test asserts config path resolution.
    """
    monkeypatch.delenv(configuration.CONFIG_PATH_ENV)
    assert configuration.get_app_config_path() == configuration.APP_CONFIG_PATH


def test_missing_keys_are_back_filled(tmp_path):
    """
    Ensure settings absent from the file fall back to defaults.

    Returns
    -------
    None
        This test asserts default back-filling.
    """
    path = tmp_path / "config.yaml"
    path.write_text("show_seconds: false\n")
    config = ConfigurationRepository(path).get_config()
    assert config == {
        "show_seconds": False,
        "delete_confirmation": True,
        "data_path": None,
    }


def test_empty_file_is_default(tmp_path):
    """
    Ensure an empty file yields the default configuration.

    Returns
    -------
    None
        This test asserts default configuration.
    """
    path = tmp_path / "config.yaml"
    path.write_text("")
    config = ConfigurationRepository(path).get_config()
    assert config == configuration.get_default_configuration()


def test_update_and_flush(tmp_path):
    """
    Ensure updates are persisted only on flush.

    Returns
    -------
    None
        This test asserts update persistence.
    """
    path = tmp_path / "config.yaml"
    path.write_text("")
    repo = ConfigurationRepository(path)

    repo.update_config(show_seconds=False, data_path=str(tmp_path / "data"))
    assert path.read_text() == ""
    repo.flush()
    assert repo.is_dirty is False

    saved = yaml.safe_load(path.read_text())
    assert saved["show_seconds"] is False
    assert saved["data_path"] == str(tmp_path / "data")

    repo.update_config(remove_data_path=True)
    repo.flush()
    assert yaml.safe_load(path.read_text())["data_path"] is None


def test_entries_path():
    """
    Ensure the entries file lives in the configured data directory.

    Returns
    -------
    None
        This test asserts data path resolution.
    """
    config = configuration.get_default_configuration()
    assert configuration.get_entries_path(config) == (
        configuration.DEFAULT_DATA_PATH / configuration.ENTRIES_FILE_NAME
    )
    config["data_path"] = "/srv/stint"
    assert configuration.get_entries_path(config) == Path("/srv/stint/entries.yaml")
