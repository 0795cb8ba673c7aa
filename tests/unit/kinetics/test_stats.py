"""
Unit tests for rolling log statistics and the tracking streak.
"""

import datetime

from app.kinetics.stats import compute_log_stats
from app.schemas.consumption import ConsumptionEvent

NOW = datetime.datetime(2026, 10, 19, 20, 0)


def _make_event(at: datetime.datetime, mg: float = 100.0, name: str = "Latte") -> ConsumptionEvent:
    return ConsumptionEvent(
        id=f"{name}-{at.isoformat()}",
        substance_id=name.lower(),
        display_name=name,
        caffeine_mg=mg,
        consumed_at=at,
    )


def _day(days_back: int, hour: int = 9) -> datetime.datetime:
    return NOW.replace(hour=hour) - datetime.timedelta(days=days_back)


class TestEmpty:

    def test_defaults(self):
        stats = compute_log_stats([], NOW)
        assert stats.total_mg_week == 0
        assert stats.average_daily_mg == 0
        assert stats.most_consumed_drink is None
        assert stats.peak_consumption_hour == 9
        assert stats.last_consumed_at is None
        assert stats.tracking_streak_days == 0


class TestTotals:

    def _events(self):
        return [
            _make_event(_day(0, 8), 100, "Espresso"),
            _make_event(_day(0, 12), 50, "Tea"),
            _make_event(_day(2, 9), 200, "Espresso"),
            _make_event(_day(18, 9), 100, "Latte"),
            _make_event(_day(39, 9), 500, "Latte"),
        ]

    def test_windows(self):
        stats = compute_log_stats(self._events(), NOW)
        assert (stats.total_mg_today, stats.drinks_today) == (150, 2)
        assert (stats.total_mg_week, stats.drinks_week) == (350, 3)
        assert (stats.total_mg_month, stats.drinks_month) == (450, 4)

    def test_weekly_average_divides_by_seven(self):
        assert compute_log_stats(self._events(), NOW).average_daily_mg == 50.0

    def test_most_consumed_and_peak_hour(self):
        stats = compute_log_stats(self._events(), NOW)
        assert stats.most_consumed_drink == "Espresso"
        assert stats.peak_consumption_hour == 9

    def test_last_consumed(self):
        assert compute_log_stats(self._events(), NOW).last_consumed_at == _day(0, 12)

    def test_future_events_ignored(self):
        events = self._events() + [_make_event(NOW + datetime.timedelta(hours=2), 300)]
        stats = compute_log_stats(events, NOW)
        assert stats.total_mg_today == 150
        assert stats.last_consumed_at == _day(0, 12)


class TestStreak:

    def test_seven_consecutive_days(self):
        events = [_make_event(_day(n)) for n in range(7)]
        assert compute_log_stats(events, NOW).tracking_streak_days == 7

    def test_gap_breaks_streak(self):
        events = [_make_event(_day(n)) for n in (0, 1, 2, 4, 5)]
        assert compute_log_stats(events, NOW).tracking_streak_days == 3

    def test_no_entry_today_means_no_streak(self):
        events = [_make_event(_day(n)) for n in range(1, 9)]
        assert compute_log_stats(events, NOW).tracking_streak_days == 0

    def test_multiple_entries_per_day_count_once(self):
        events = [_make_event(_day(n, h)) for n in range(3) for h in (8, 11, 15)]
        assert compute_log_stats(events, NOW).tracking_streak_days == 3
