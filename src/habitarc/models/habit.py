"""Habits tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    """A user-defined habit tracked daily or weekly."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    cadence: str = Field(default="daily", max_length=16, index=True)
    start_date: date = Field(default_factory=date.today, nullable=False)
    is_archived: bool = Field(default=False, nullable=False)
    order: int = Field(default=0, nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)


class HabitLog(SQLModel, table=True):
    """Completion (or explicit skip) of a habit on a calendar day.

    Absence of a row means the day was not logged at all.
    """

    __tablename__: ClassVar[str] = "habit_log"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    occurred_on: date = Field(primary_key=True, index=True)
    user_id: int = Field(nullable=False, index=True)
    completed: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)


class StreakFreeze(SQLModel, table=True):
    """A day exempted from breaking the habit's streak."""

    __tablename__: ClassVar[str] = "streak_freeze"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    occurred_on: date = Field(primary_key=True, index=True)
    user_id: int = Field(nullable=False, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)


class WeeklyTarget(SQLModel, table=True):
    """Number of completions planned for a weekly habit in a given week."""

    __tablename__: ClassVar[str] = "weekly_target"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    week_start: date = Field(primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    target: int = Field(default=1, nullable=False)
