"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from habitarc.config import BaseConfig, TestingConfig


def test_defaults_live_in_data_dir(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == tmp_path.resolve()
    assert config.DATABASE_URL == f"sqlite:///{tmp_path.resolve() / 'habitarc.db'}"
    assert config.DEV_MODE is True
    assert config.WEEK_START_DAY == 0
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HABITARC_DATABASE_URL", "postgresql://habits@localhost/habits")
    monkeypatch.setenv("HABITARC_DEV_MODE", "off")
    monkeypatch.setenv("HABITARC_WEEK_START_DAY", "1")

    config = BaseConfig()

    assert config.DATABASE_URL == "postgresql://habits@localhost/habits"
    assert config.DEV_MODE is False
    assert config.WEEK_START_DAY == 1
    assert config.sqlalchemy_engine_options() == {}


@pytest.mark.parametrize("raw", ["7", "-1", "monday"])
def test_invalid_week_start_day(monkeypatch, raw):
    monkeypatch.setenv("HABITARC_WEEK_START_DAY", raw)

    with pytest.raises(ValueError, match="HABITARC_WEEK_START_DAY"):
        BaseConfig()


def test_test_config_uses_memory_database():
    assert TestingConfig().DATABASE_URL == "sqlite://"
