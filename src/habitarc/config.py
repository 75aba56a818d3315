"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_week_start_day(name: str, default: int = 0) -> int:
    """Read a 0 (Sunday) .. 6 (Saturday) week start from the environment."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer between 0 and 6, got {raw!r}") from exc
    if not 0 <= value <= 6:
        raise ValueError(f"{name} must be between 0 (Sunday) and 6 (Saturday), got {value}")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "habitarc"
    DB_FILENAME = "habitarc.db"
    MAX_HABIT_NAME_LENGTH = 100

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITARC_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HABITARC_DATABASE_URL", self._build_sqlite_url())
        self.WEEK_START_DAY = _env_week_start_day("HABITARC_WEEK_START_DAY", default=0)

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITARC_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite; keeps everything in memory."""

    DEBUG = True
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
