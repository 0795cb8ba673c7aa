"""
Unit tests for the pattern analyzer and weekly insights.

2026-10-19 is a Monday; the 17th and 18th are a weekend.
"""

import datetime

import pytest
from zoneinfo import ZoneInfo

from app.kinetics.clock import hours_between
from app.kinetics.config import KineticsConfig
from app.kinetics.decay import remaining
from app.kinetics.patterns import (
    _hours_before_bedtime,
    analyze_patterns,
    generate_weekly_insights,
    personalized_recommendations,
    predict_energy,
)
from app.schemas.consumption import ConsumptionEvent

MONDAY = datetime.datetime(2026, 10, 19)


# ======================================================================
# Helpers
# ======================================================================


def _at(day: int, hour: int, minute: int = 0) -> datetime.datetime:
    return datetime.datetime(2026, 10, day, hour, minute)


def _make_event(at: datetime.datetime, mg: float = 100.0, name: str = "Latte") -> ConsumptionEvent:
    return ConsumptionEvent(
        id=f"{name}-{at.isoformat()}",
        substance_id=name.lower(),
        display_name=name,
        caffeine_mg=mg,
        consumed_at=at,
    )


# ======================================================================
# analyze_patterns
# ======================================================================


class TestBaseline:

    def test_empty_history(self):
        p = analyze_patterns([], MONDAY.replace(hour=20))
        assert p.average_first_dose == "08:00"
        assert p.average_last_dose == "14:00"
        assert p.peak_hour == 9
        assert p.average_daily_mg == 0
        assert p.weekday_vs_weekend_diff_mg == 0
        assert p.optimal_timing_pct == 100
        assert p.preferred_drinks == []
        assert p.sample_count == 0

    def test_only_old_events(self):
        old = [_make_event(datetime.datetime(2026, 8, 1, 9, 0))]
        assert analyze_patterns(old, MONDAY.replace(hour=20)).sample_count == 0

    def test_only_malformed_events(self):
        events = [ConsumptionEvent(id="x", substance_id="latte", caffeine_mg=100, consumed_at=None)]
        assert analyze_patterns(events, MONDAY.replace(hour=20)).optimal_timing_pct == 100


class TestAggregation:

    def test_first_and_last_dose_averages(self):
        events = [
            _make_event(_at(15, 7, 30)), _make_event(_at(15, 15, 0)),
            _make_event(_at(16, 8, 0)), _make_event(_at(16, 16, 30)),
        ]
        p = analyze_patterns(events, MONDAY.replace(hour=20))
        assert p.average_first_dose == "07:45"
        assert p.average_last_dose == "15:45"
        assert p.average_first_dose_hour == pytest.approx(7.75)
        assert p.days_analyzed == 2
        assert p.sample_count == 4

    def test_average_daily_total(self):
        events = [_make_event(_at(15, 8), 100), _make_event(_at(15, 12), 100), _make_event(_at(16, 9), 100)]
        p = analyze_patterns(events, MONDAY.replace(hour=20))
        assert p.average_daily_mg == 150

    def test_peak_hour_is_mg_weighted(self):
        events = [
            _make_event(_at(14, 8), 50), _make_event(_at(15, 8), 50), _make_event(_at(16, 8), 50),
            _make_event(_at(16, 15), 300),
        ]
        assert analyze_patterns(events, MONDAY.replace(hour=20)).peak_hour == 15

    def test_optimal_timing(self):
        events = [
            _make_event(_at(15, 8)), _make_event(_at(15, 13, 59)),
            _make_event(_at(15, 14)), _make_event(_at(15, 18)),
        ]
        assert analyze_patterns(events, MONDAY.replace(hour=20)).optimal_timing_pct == 50

    def test_weekend_skew_positive_when_more_on_weekends(self):
        events = [
            _make_event(_at(16, 9), 100),                              # Friday
            _make_event(_at(17, 9), 150), _make_event(_at(17, 13), 150),  # Saturday
            _make_event(_at(18, 10), 300),                             # Sunday
        ]
        assert analyze_patterns(events, MONDAY.replace(hour=20)).weekday_vs_weekend_diff_mg == 200

    def test_weekend_skew_negative_when_more_on_weekdays(self):
        events = [_make_event(_at(16, 9), 300), _make_event(_at(17, 9), 100)]
        assert analyze_patterns(events, MONDAY.replace(hour=20)).weekday_vs_weekend_diff_mg == -200

    def test_preferred_drinks_top_three(self):
        events = (
            [_make_event(_at(15, h), name="Espresso") for h in (7, 8, 9)]
            + [_make_event(_at(16, h), name="Latte") for h in (7, 8)]
            + [_make_event(_at(16, 12), name="Mocha"), _make_event(_at(16, 13), name="Tea")]
            + [_make_event(_at(14, 12), name="Tea")]
        )
        p = analyze_patterns(events, MONDAY.replace(hour=20))
        assert p.preferred_drinks[0] == "Espresso"
        assert set(p.preferred_drinks[1:]) == {"Latte", "Tea"}

    def test_window_days(self):
        events = [_make_event(_at(5, 9)), _make_event(_at(16, 9))]
        now = MONDAY.replace(hour=20)
        assert analyze_patterns(events, now).sample_count == 2
        assert analyze_patterns(events, now, window_days=7).sample_count == 1

    def test_future_events_ignored(self):
        events = [_make_event(_at(19, 9)), _make_event(_at(19, 21))]
        assert analyze_patterns(events, MONDAY.replace(hour=12)).sample_count == 1

    def test_input_order_irrelevant(self):
        events = [_make_event(_at(d, h)) for d in (14, 15, 16) for h in (8, 15)]
        now = MONDAY.replace(hour=20)
        assert analyze_patterns(events, now) == analyze_patterns(list(reversed(events)), now)


# ======================================================================
# Weekly insights
# ======================================================================


class TestHoursBeforeBedtime:

    @pytest.mark.parametrize("hour,bedtime,expected", [
        (18, datetime.time(23, 0), 5),
        (8, datetime.time(23, 0), 15),
        (22, datetime.time(1, 0), 3),
        (23, datetime.time(23, 0), 0),
    ])
    def test_wraps_midnight(self, hour, bedtime, expected):
        assert _hours_before_bedtime(_at(16, hour), bedtime) == expected


class TestWeeklyInsights:

    def test_empty_week(self):
        assert generate_weekly_insights([], MONDAY.replace(hour=12), "23:00") == []

    def test_late_coffee_alert(self):
        events = [_make_event(_at(d, 18), 95) for d in (16, 17, 18)]
        insights = generate_weekly_insights(events, MONDAY.replace(hour=12), "23:00")
        titles = [i.title for i in insights]
        assert titles[0] == "Sleep Impact Alert"
        assert insights[0].kind == "warning"
        assert "3 coffees" in insights[0].message
        assert "Excellent Timing" not in titles

    def test_morning_coffee_is_not_late(self):
        events = [_make_event(_at(d, 8), 95) for d in (15, 16, 17, 18)]
        titles = [i.title for i in generate_weekly_insights(events, MONDAY.replace(hour=12), "23:00")]
        assert "Sleep Impact Alert" not in titles
        assert "Great Consistency!" in titles
        assert "Excellent Timing" in titles

    def test_inconsistent_days(self):
        events = [_make_event(_at(17, 9), 200), _make_event(_at(17, 11), 200)]
        insights = generate_weekly_insights(events, MONDAY.replace(hour=12), "23:00")
        assert insights[0].title == "Inconsistent Patterns"
        assert insights[0].kind == "neutral"
        assert "Great Consistency!" not in [i.title for i in insights]

    def test_excellent_timing_message(self):
        events = [_make_event(_at(d, 9), 80) for d in (13, 14, 15, 16, 17, 18)]
        insights = generate_weekly_insights(events, MONDAY.replace(hour=12), "23:00")
        timing = [i for i in insights if i.title == "Excellent Timing"]
        assert timing[0].message.startswith("100%")


# ======================================================================
# Energy forecast
# ======================================================================


class TestPredictEnergy:

    def test_empty_history(self):
        now = MONDAY.replace(hour=8)
        points = predict_energy([], now)
        assert [p.at for p in points] == [now + datetime.timedelta(hours=h) for h in range(1, 7)]
        assert all(p.level_mg == 0 and p.energy_score == 0 for p in points)
        assert all(p.recommendation == "Perfect time for your next coffee" for p in points)
        assert points[0].confidence == 0.5

    def test_levels_follow_decay(self):
        now = MONDAY.replace(hour=8)
        points = predict_energy([_make_event(now, 300)], now)
        assert [p.level_mg for p in points] == [remaining(300, h) for h in range(1, 7)]
        assert points[0].energy_score == 100
        assert points[0].recommendation == "High energy - hold off on more caffeine"

    def test_small_dose_scores_low(self):
        now = MONDAY.replace(hour=8)
        first = predict_energy([_make_event(now, 30)], now)[0]
        assert first.level_mg == 26
        assert first.energy_score == 13
        assert first.recommendation == "Perfect time for your next coffee"

    def test_mid_range_recommendation(self):
        now = MONDAY.replace(hour=8)
        last = predict_energy([_make_event(now, 100)], now)[-1]
        assert last.level_mg == 44
        assert last.energy_score == 22
        assert last.recommendation == "Good time for a small coffee boost"

    def test_future_dose_counts_from_its_hour(self):
        now = MONDAY.replace(hour=8)
        points = predict_energy([_make_event(now + datetime.timedelta(hours=2, minutes=30), 100)], now)
        assert [p.level_mg for p in points[:2]] == [0, 0]
        assert points[2].level_mg == remaining(100, 0.5)

    @pytest.mark.parametrize("count,confidence", [(5, 0.5), (6, 0.8)])
    def test_confidence(self, count, confidence):
        now = MONDAY.replace(hour=20)
        events = [_make_event(MONDAY.replace(hour=h)) for h in range(7, 7 + count)]
        assert predict_energy(events, now)[0].confidence == confidence

    def test_steps_are_real_hours_across_dst(self):
        new_york = ZoneInfo("America/New_York")
        now = datetime.datetime(2026, 11, 1, 0, 30, tzinfo=new_york)
        points = predict_energy([], now)
        assert [hours_between(now, p.at) for p in points] == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


# ======================================================================
# Personalized recommendations
# ======================================================================


class TestPersonalizedRecommendations:

    def test_fresh_morning(self):
        tips = personalized_recommendations([], MONDAY.replace(hour=8), 0, "23:00")
        assert tips == [
            "Morning is your optimal caffeine window - enjoy!",
            "Your habits are well-balanced!",
            "Perfect time for a coffee boost!",
        ]

    def test_late_evening_capped_at_three(self):
        events = [_make_event(_at(d, 17)) for d in range(10, 19)]
        tips = personalized_recommendations(events, MONDAY.replace(hour=18), 350, "23:00")
        assert tips == [
            "Consider switching to decaf to protect your sleep",
            "Try having your last coffee by 14:00 for better sleep",
            "Try moving your last coffee earlier",
        ]

    def test_midday_high_level(self):
        tips = personalized_recommendations([], MONDAY.replace(hour=12), 350, "23:00")
        assert tips == [
            "Your habits are well-balanced!",
            "You're well-caffeinated - consider waiting 2-3 hours",
        ]

    def test_thresholds_follow_config(self):
        cfg = KineticsConfig(jitter_threshold_mg=400)
        tips = personalized_recommendations([], MONDAY.replace(hour=12), 350, "23:00", config=cfg)
        assert tips == ["Your habits are well-balanced!"]

    def test_afternoon_far_from_bedtime(self):
        tips = personalized_recommendations([], MONDAY.replace(hour=15), 100, "03:00")
        assert "Consider switching to decaf to protect your sleep" not in tips
