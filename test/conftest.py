"""
Shared pytest fixtures for stint tests.
"""

from __future__ import annotations

import pendulum
import pytest
import yaml

from stint.repository.time_entry import TimeEntryRepository
from stint.service.editor import GroupEditor
from stint.time import Precision, parse_local_datetime

NOW = pendulum.datetime(2024, 6, 1, 12, 0, 0, tz="local")


def at(text: str) -> pendulum.DateTime:
    """Parse a local 'YYYY-MM-DD HH:MM:SS' time for test data."""
    return parse_local_datetime(text, Precision.WITH_SECONDS)


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """
    Ensure tests never read or write the real config or data directories.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary path provided by pytest.
    monkeypatch : pytest.MonkeyPatch
        Monkeypatch fixture for environment updates.
    """
    config_path = tmp_path / "config" / "config.yaml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text(
        yaml.safe_dump(
            {
                "show_seconds": True,
                "delete_confirmation": False,
                "data_path": str(tmp_path / "data"),
            }
        )
    )
    monkeypatch.setenv("STINT_CONFIG_PATH", str(config_path))
    return config_path


@pytest.fixture
def store(tmp_path):
    return TimeEntryRepository(tmp_path / "store" / "entries.yaml")


@pytest.fixture
def editor(store):
    return GroupEditor(store, Precision.WITH_SECONDS, clock=lambda: NOW)
