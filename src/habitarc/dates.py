"""Calendar-day helpers shared by the streak engine and stats services.

Week start days use the 0 = Sunday .. 6 = Saturday convention, which differs
from :meth:`datetime.date.weekday` (0 = Monday).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Union

DayLike = Union[date, datetime, str]

ONE_DAY = timedelta(days=1)


def parse_day(value: DayLike) -> date:
    """Return a calendar day from a date, datetime or ISO ``yyyy-MM-dd`` string."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    # Timestamps such as "2024-01-10T08:00:00" keep only their date part.
    if len(text) > 10 and text[10] in "T ":
        text = text[:10]
    return date.fromisoformat(text)


def format_day(value: DayLike) -> str:
    """Return the ISO ``yyyy-MM-dd`` form of a day."""

    return parse_day(value).isoformat()


def _sunday_based_weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


def week_start(value: DayLike, week_start_day: int = 0) -> date:
    """Return the first day of the week containing ``value``."""

    day = parse_day(value)
    offset = (_sunday_based_weekday(day) - week_start_day) % 7
    return day - timedelta(days=offset)


def week_end(value: DayLike, week_start_day: int = 0) -> date:
    """Return the last day (inclusive) of the week containing ``value``."""

    return week_start(value, week_start_day) + timedelta(days=6)


def iter_days(start: DayLike, end: DayLike, *, reverse: bool = False) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive.

    With ``reverse=True`` the walk runs from ``end`` down to ``start``. Nothing
    is yielded when ``start`` is after ``end``.
    """

    first, last = parse_day(start), parse_day(end)
    if reverse:
        cursor = last
        while cursor >= first:
            yield cursor
            cursor -= ONE_DAY
    else:
        cursor = first
        while cursor <= last:
            yield cursor
            cursor += ONE_DAY
