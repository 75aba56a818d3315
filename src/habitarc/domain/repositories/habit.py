"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol

from ...models.habit import Habit, HabitLog, StreakFreeze, WeeklyTarget
from ...services.habits import StreakResult


class HabitRepository(Protocol):
    """Repository for habits and the history the streak engine consumes."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_active(
        self, *, user_id: int, today: date, cadence: Optional[str] = None
    ) -> list[Habit]:
        """List non-archived habits that have started by ``today``."""
        ...

    def list_archived(self, *, user_id: int) -> list[Habit]:
        """List archived habits, most recently created first."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit; empty or over-long names raise ``ValueError``."""
        ...

    def archive(self, habit_id: int, *, user_id: int) -> Habit:
        """Archive a habit."""
        ...

    def restore(self, habit_id: int, *, user_id: int) -> Habit:
        """Restore an archived habit."""
        ...

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit and everything recorded for it."""
        ...

    def reorder(self, orders: Mapping[int, int], *, user_id: int) -> None:
        """Set the display order of several habits at once."""
        ...

    # Log operations
    def get_logs(
        self,
        habit_id: int,
        *,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[HabitLog]:
        """Get logs for a habit, newest first, optionally within a date range."""
        ...

    def get_logs_for_date(self, day: date, *, user_id: int) -> list[HabitLog]:
        """Get every habit's log for one day."""
        ...

    def upsert_log(self, habit_id: int, day: date, completed: bool, *, user_id: int) -> HabitLog:
        """Insert or overwrite the log for a day."""
        ...

    def delete_log(self, habit_id: int, day: date, *, user_id: int) -> None:
        """Delete the log for a day."""
        ...

    # Freeze operations
    def get_freezes(self, habit_id: int, *, user_id: int) -> list[StreakFreeze]:
        """Get freezes for a habit, newest first."""
        ...

    def add_freeze(self, habit_id: int, day: date, *, user_id: int) -> StreakFreeze:
        """Freeze a day; freezing an already frozen day is a no-op."""
        ...

    def remove_freeze(self, habit_id: int, day: date, *, user_id: int) -> None:
        """Remove the freeze for a day."""
        ...

    # Weekly targets
    def get_weekly_target(self, habit_id: int, week_start: date, *, user_id: int) -> Optional[WeeklyTarget]:
        """Get the target set for a week."""
        ...

    def set_weekly_target(
        self, habit_id: int, week_start: date, target: int, *, user_id: int
    ) -> WeeklyTarget:
        """Insert or overwrite the target for a week."""
        ...

    # Derived statistics
    def get_streaks(self, habit_id: int, *, user_id: int, today: date) -> StreakResult:
        """Calculate current and longest streak for a habit."""
        ...

    def get_completion_rate(self, habit_id: int, *, user_id: int, today: date) -> int:
        """Calculate the completion percentage for a habit."""
        ...
