"""Tests for calendar helpers and weekly progress."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from conftest import make_logs

from habitarc.dates import format_day, iter_days, parse_day, week_end, week_start
from habitarc.services.habits import weekly_progress

WEDNESDAY = date(2024, 1, 10)


class TestParsing:
    def test_parse_day_accepts_all_shapes(self):
        assert parse_day(WEDNESDAY) == WEDNESDAY
        assert parse_day(datetime(2024, 1, 10, 23, 59)) == WEDNESDAY
        assert parse_day("2024-01-10") == WEDNESDAY

    def test_parse_day_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_day("10/01/2024")

    @pytest.mark.parametrize("value", ["2024-01-10garbage", "2024-01-10Z"])
    def test_parse_day_rejects_trailing_text(self, value):
        with pytest.raises(ValueError):
            parse_day(value)

    @pytest.mark.parametrize("value", ["2024-01-10T08:30:00", "2024-01-10 08:30", " 2024-01-10 "])
    def test_parse_day_keeps_date_part_of_timestamps(self, value):
        assert parse_day(value) == WEDNESDAY

    def test_format_day(self):
        assert format_day(WEDNESDAY) == "2024-01-10"


class TestWeekBoundaries:
    def test_sunday_start(self):
        assert week_start(WEDNESDAY) == date(2024, 1, 7)
        assert week_end(WEDNESDAY) == date(2024, 1, 13)

    def test_monday_start(self):
        assert week_start(WEDNESDAY, 1) == date(2024, 1, 8)
        assert week_end(WEDNESDAY, 1) == date(2024, 1, 14)

    def test_first_day_is_its_own_week_start(self):
        assert week_start(date(2024, 1, 7)) == date(2024, 1, 7)

    def test_saturday_start_spans_back(self):
        assert week_start(WEDNESDAY, 6) == date(2024, 1, 6)


class TestIterDays:
    def test_forward_and_reverse_are_inclusive(self):
        forward = list(iter_days("2024-01-01", "2024-01-03"))
        assert forward == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
        assert list(iter_days("2024-01-01", "2024-01-03", reverse=True)) == forward[::-1]

    def test_empty_when_start_after_end(self):
        assert list(iter_days("2024-01-02", "2024-01-01")) == []
        assert list(iter_days("2024-01-02", "2024-01-01", reverse=True)) == []

    def test_crosses_month_boundary(self):
        assert len(list(iter_days("2024-01-30", "2024-02-02"))) == 4


class TestWeeklyProgress:
    def test_counts_completed_logs_inside_week(self):
        logs = make_logs([date(2024, 1, 7), date(2024, 1, 9), date(2024, 1, 13)])
        logs += make_logs([date(2024, 1, 10)], completed=False)
        logs += make_logs([date(2024, 1, 6), date(2024, 1, 14)])

        assert weekly_progress(logs, WEDNESDAY) == 3

    def test_respects_week_start_day(self):
        logs = make_logs([date(2024, 1, 7), date(2024, 1, 14)])

        assert weekly_progress(logs, WEDNESDAY, week_start_day=1) == 1

    def test_empty(self):
        assert weekly_progress([], WEDNESDAY) == 0
