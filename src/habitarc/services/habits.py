"""Habit streak and completion-rate calculations.

All functions here are pure: they read the log/freeze snapshots handed to them,
never touch storage or the clock, and return fresh values on every call.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, NamedTuple, Protocol

from ..dates import DayLike, iter_days, parse_day, week_end, week_start
from ..logging_config import get_logger

logger = get_logger("services.habits")


class CompletionRecord(Protocol):
    """Anything shaped like a habit log: a day plus a completed flag."""

    occurred_on: DayLike
    completed: bool


class FrozenDay(Protocol):
    """Anything shaped like a streak freeze."""

    occurred_on: DayLike


class StreakResult(NamedTuple):
    current_streak: int
    longest_streak: int


def _completion_by_day(logs: Iterable[CompletionRecord]) -> dict:
    # Later records for the same day replace earlier ones.
    return {parse_day(log.occurred_on): bool(log.completed) for log in logs}


def compute_streaks(
    logs: Iterable[CompletionRecord],
    freezes: Iterable[FrozenDay],
    start_date: DayLike,
    today: DayLike,
) -> StreakResult:
    """Return (current_streak, longest_streak) for a single habit.

    Days are examined from ``start_date`` to ``today`` inclusive. A completed
    log extends a run, a freeze keeps the run alive without extending it, and
    a skipped or unlogged day breaks it. Today is the exception: with no log
    yet it neither breaks nor extends anything.
    """

    start = parse_day(start_date)
    today = parse_day(today)
    by_day = _completion_by_day(logs)
    frozen = {parse_day(freeze.occurred_on) for freeze in freezes}

    # Current streak: walk backwards from today until the first breaking day.
    current = 0
    for day in iter_days(start, today, reverse=True):
        completed = by_day.get(day)
        if completed is None and day == today:
            continue
        if completed:
            current += 1
        elif day in frozen:
            continue
        else:
            break

    # Longest streak: sweep forward from the start date.
    longest = 0
    run = 0
    for day in iter_days(start, today):
        completed = by_day.get(day)
        if completed:
            run += 1
            longest = max(longest, run)
        elif day in frozen:
            longest = max(longest, run)
        elif completed is False or day != today:
            run = 0

    logger.debug(
        "Computed streaks",
        extra={"start_date": start.isoformat(), "today": today.isoformat(), "current": current, "longest": longest},
    )
    return StreakResult(current, longest)


def compute_completion_rate(
    logs: Iterable[CompletionRecord],
    start_date: DayLike,
    today: DayLike,
) -> int:
    """Return the whole-number percentage of days completed since ``start_date``.

    Every completed log counts; freezes do not. Halves round up.
    """

    start = parse_day(start_date)
    today = parse_day(today)
    if start > today:
        return 0

    total_days = (today - start).days + 1
    completed_days = sum(1 for log in logs if log.completed)
    if total_days == 0:
        return 0

    rate = Decimal(completed_days) * 100 / Decimal(total_days)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def weekly_progress(
    logs: Iterable[CompletionRecord],
    week_of: DayLike,
    week_start_day: int = 0,
) -> int:
    """Count completed logs that fall inside the week containing ``week_of``."""

    first = week_start(week_of, week_start_day)
    last = week_end(week_of, week_start_day)
    return sum(1 for log in logs if log.completed and first <= parse_day(log.occurred_on) <= last)


__all__ = [
    "CompletionRecord",
    "FrozenDay",
    "StreakResult",
    "compute_completion_rate",
    "compute_streaks",
    "weekly_progress",
]
