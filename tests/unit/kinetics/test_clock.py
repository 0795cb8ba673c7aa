"""
Unit tests for the local-time helpers.
"""

import datetime
from zoneinfo import ZoneInfo

import pytest

from app.kinetics.clock import hours_between, next_bedtime, parse_hhmm

NEW_YORK = ZoneInfo("America/New_York")


class TestHoursBetween:

    def test_naive(self):
        start = datetime.datetime(2026, 10, 19, 8, 0)
        assert hours_between(start, start + datetime.timedelta(hours=3, minutes=30)) == 3.5

    def test_negative_when_start_is_later(self):
        start = datetime.datetime(2026, 10, 19, 8, 0)
        assert hours_between(start, start - datetime.timedelta(hours=2)) == -2.0

    @pytest.mark.parametrize("start,end,expected", [
        # Fall back: 01:00-02:00 happens twice
        (datetime.datetime(2026, 11, 1, 0, 30), datetime.datetime(2026, 11, 1, 8, 0), 8.5),
        # Spring forward: 02:00-03:00 is skipped
        (datetime.datetime(2026, 3, 8, 1, 0), datetime.datetime(2026, 3, 8, 4, 0), 2.0),
    ])
    def test_aware_values_use_real_elapsed_time(self, start, end, expected):
        assert hours_between(start.replace(tzinfo=NEW_YORK), end.replace(tzinfo=NEW_YORK)) == expected

    def test_mixed_zones(self):
        start = datetime.datetime(2026, 10, 19, 12, 0, tzinfo=datetime.timezone.utc)
        end = datetime.datetime(2026, 10, 19, 10, 0, tzinfo=NEW_YORK)
        assert hours_between(start, end) == 2.0


class TestNextBedtime:

    def test_later_today(self):
        now = datetime.datetime(2026, 10, 19, 15, 0)
        assert next_bedtime(now, datetime.time(23, 0)) == datetime.datetime(2026, 10, 19, 23, 0)

    def test_equal_time_rolls_to_tomorrow(self):
        now = datetime.datetime(2026, 10, 19, 23, 0)
        assert next_bedtime(now, datetime.time(23, 0)) == datetime.datetime(2026, 10, 20, 23, 0)


class TestParseHHMM:

    @pytest.mark.parametrize("value,expected", [
        ("22:30", datetime.time(22, 30)),
        (" 07:05 ", datetime.time(7, 5)),
        ("garbage", datetime.time(23, 0)),
        ("25:00", datetime.time(23, 0)),
    ])
    def test_parse(self, value, expected):
        assert parse_hhmm(value) == expected
