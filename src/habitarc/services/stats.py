"""Per-habit display statistics assembled from repository data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional

from ..dates import format_day, parse_day, week_start
from ..logging_config import get_logger
from ..models.habit import Habit
from .habits import CompletionRecord, FrozenDay, compute_completion_rate, compute_streaks, weekly_progress

if TYPE_CHECKING:  # pragma: no cover
    from ..domain.repositories.habit import HabitRepository

logger = get_logger("services.stats")


@dataclass(slots=True)
class HabitStats:
    """Lightweight DTO with the numbers shown for a daily habit."""

    habit_id: int
    name: str
    order: int
    current_streak: int
    longest_streak: int
    completion_rate: int
    today_log: Optional[bool] = None

    @property
    def logged_today(self) -> bool:
        return self.today_log is not None


@dataclass(slots=True)
class WeeklyHabitProgress:
    """Completed count against the target for a weekly habit."""

    habit_id: int
    name: str
    order: int
    progress: int
    target: Optional[int] = None

    @property
    def target_met(self) -> bool:
        return self.target is not None and self.progress >= self.target


def build_habit_stats(
    habit: Habit,
    logs: Iterable[CompletionRecord],
    freezes: Iterable[FrozenDay],
    today: date,
) -> HabitStats:
    """Run the streak engine for one habit and package the results."""

    logs = list(logs)
    today = parse_day(today)
    current, longest = compute_streaks(logs, freezes, habit.start_date, today)
    today_log = None
    for log in logs:
        # Same rule as the engine: the last record for a day wins.
        if parse_day(log.occurred_on) == today:
            today_log = bool(log.completed)
    return HabitStats(
        habit_id=habit.id,
        name=habit.name,
        order=habit.order,
        current_streak=current,
        longest_streak=longest,
        completion_rate=compute_completion_rate(logs, habit.start_date, today),
        today_log=today_log,
    )


def order_daily_stats(stats: Iterable[HabitStats]) -> list[HabitStats]:
    """Put habits still waiting for today's log first, then sort by ``order``."""

    return sorted(stats, key=lambda s: (s.logged_today, s.order))


def collect_daily_stats(
    repository: "HabitRepository", *, user_id: int, today: Optional[date] = None
) -> list[HabitStats]:
    """Return ordered stats for every active daily habit of a user."""

    today = today or date.today()
    habits = repository.list_active(user_id=user_id, today=today, cadence="daily")
    stats = [
        build_habit_stats(
            habit,
            repository.get_logs(habit.id, user_id=user_id, end_date=today),
            repository.get_freezes(habit.id, user_id=user_id),
            today,
        )
        for habit in habits
    ]
    logger.info(
        "Collected daily habit stats",
        extra={"user_id": user_id, "today": format_day(today), "habits": len(stats)},
    )
    return order_daily_stats(stats)


def collect_weekly_progress(
    repository: "HabitRepository",
    *,
    user_id: int,
    today: Optional[date] = None,
    week_start_day: int = 0,
) -> list[WeeklyHabitProgress]:
    """Return this week's progress for every active weekly habit of a user."""

    today = today or date.today()
    first_day = week_start(today, week_start_day)
    results: list[WeeklyHabitProgress] = []
    for habit in repository.list_active(user_id=user_id, today=today, cadence="weekly"):
        logs = repository.get_logs(habit.id, user_id=user_id, start_date=first_day, end_date=today)
        target = repository.get_weekly_target(habit.id, first_day, user_id=user_id)
        results.append(
            WeeklyHabitProgress(
                habit_id=habit.id,
                name=habit.name,
                order=habit.order,
                progress=weekly_progress(logs, first_day, week_start_day),
                target=target.target if target else None,
            )
        )
    return results


__all__ = [
    "HabitStats",
    "WeeklyHabitProgress",
    "build_habit_stats",
    "collect_daily_stats",
    "collect_weekly_progress",
    "order_daily_stats",
]
