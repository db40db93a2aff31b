"""Shared fixtures for staffgen tests."""

import random
from datetime import datetime, timezone

import pytest

from staffgen import config as staffgen_config
from staffgen.cli.commands import config_cmd

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config layer at a temp dir and clear STAFFGEN_* env vars."""
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(staffgen_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(staffgen_config, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    monkeypatch.setattr(staffgen_config, "_dotenv_loaded", True)
    for var in (
        "STAFFGEN_MODE",
        "STAFFGEN_BIRTHDATE_STRATEGY",
        "STAFFGEN_SURNAME_COVERAGE",
    ):
        monkeypatch.delenv(var, raising=False)

    staffgen_config.reset_config()
    yield config_file
    staffgen_config.reset_config()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def rng():
    return random.Random(42)
