"""Pytest configuration and shared fixtures for habitarc tests.

This module provides database fixtures, test data factories, and helper utilities
for testing the streak engine, repositories, and services without touching a real
application database.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest
from sqlmodel import Session, create_engine

from habitarc.infra.database import create_session_factory, init_database
from habitarc.logging_config import ROOT_LOGGER_NAME
from habitarc.models import Habit, HabitLog, StreakFreeze

USER_ID = 1


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point configuration at a per-test data directory."""

    monkeypatch.setenv("HABITARC_DATA_DIR", str(tmp_path))
    for name in ("HABITARC_DATABASE_URL", "HABITARC_DEV_MODE", "HABITARC_WEEK_START_DAY"):
        monkeypatch.delenv(name, raising=False)
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    init_database(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories expect."""
    return create_session_factory(db_engine)


@pytest.fixture
def user_id() -> int:
    return USER_ID


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(db_session):
    """Factory for creating test habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Test Habit",
        cadence: str = "daily",
        start_date: date = date(2024, 1, 1),
        order: int = 0,
        is_archived: bool = False,
        owner_id: int = USER_ID,
    ) -> Habit:
        habit = Habit(
            user_id=owner_id,
            name=name,
            cadence=cadence,
            start_date=start_date,
            order=order,
            is_archived=is_archived,
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


# =============================================================================
# Helpers for in-memory history
# =============================================================================


def days(start: date, count: int) -> list[date]:
    """Return ``count`` consecutive days beginning at ``start``."""
    return [start + timedelta(days=i) for i in range(count)]


def make_logs(day_list, completed: bool = True, habit_id: int = 1) -> list[HabitLog]:
    return [
        HabitLog(habit_id=habit_id, user_id=USER_ID, occurred_on=d, completed=completed)
        for d in day_list
    ]


def make_freezes(day_list, habit_id: int = 1) -> list[StreakFreeze]:
    return [StreakFreeze(habit_id=habit_id, user_id=USER_ID, occurred_on=d) for d in day_list]
