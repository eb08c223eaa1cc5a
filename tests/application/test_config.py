"""Tests for configuration resolution."""

from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from cadence.application.config import EngineConfig, resolve_config
from cadence.infrastructure.clock import SystemClock


def test_defaults(mock_home, monkeypatch):
    monkeypatch.delenv("CADENCE_TIMEZONE", raising=False)
    config = resolve_config()
    assert config.timezone == "UTC"
    assert config.max_batch_reviews == 100


def test_env_override(mock_home, monkeypatch):
    monkeypatch.setenv("CADENCE_TIMEZONE", "Europe/Berlin")
    config = resolve_config()
    assert config.timezone == "Europe/Berlin"
    assert config.tzinfo == ZoneInfo("Europe/Berlin")


def test_toml_file(mock_home, monkeypatch):
    monkeypatch.delenv("CADENCE_TIMEZONE", raising=False)
    cfg_dir = mock_home / ".config" / "cadence"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "config.toml").write_text('timezone = "Asia/Tokyo"\nmax_batch_reviews = 20\n')

    config = resolve_config()

    assert config.timezone == "Asia/Tokyo"
    assert config.max_batch_reviews == 20


def test_cli_overrides_win(mock_home, monkeypatch):
    monkeypatch.setenv("CADENCE_TIMEZONE", "Europe/Berlin")
    config = resolve_config({"timezone": "America/Chicago", "verbose": None})
    assert config.timezone == "America/Chicago"
    assert config.verbose == 1


def test_unknown_timezone_rejected(mock_home):
    with pytest.raises(ValidationError, match="Unknown time zone"):
        EngineConfig(timezone="Mars/Olympus_Mons")


def test_clock_uses_zone(mock_home):
    clock = EngineConfig(timezone="Asia/Tokyo").clock()
    assert isinstance(clock, SystemClock)
    assert clock.now().tzinfo == ZoneInfo("Asia/Tokyo")
