"""
Unit tests for the personality & badge classifier and the profile.

Each badge predicate is exercised on its own synthetic fixture.
"""

import datetime

import pytest

from app.kinetics.profile import (
    classify_personality,
    compute_consumption_level,
    compute_profile,
    compute_timing_pattern,
    count_days_tracked,
    evaluate_badges,
    is_custom_blend,
    is_mindful_sipper,
    is_morning_ritual,
    is_power_caffeinator,
    is_sleep_guardian,
    is_streak_master,
    newly_earned_badges,
)
from app.kinetics.patterns import analyze_patterns
from app.kinetics.stats import compute_log_stats
from app.schemas.consumption import ConsumptionEvent
from app.schemas.pattern import ConsumptionPattern, LogStats
from app.schemas.sleep_checkin import SleepCheckin

NOW = datetime.datetime(2026, 10, 19, 20, 0)


# ======================================================================
# Helpers
# ======================================================================


def _hour(hhmm: str) -> float:
    hh, mm = hhmm.split(":")
    return int(hh) + int(mm) / 60


def _make_pattern(
    first: str = "08:00",
    last: str = "13:00",
    avg: int = 150,
    diff: int = 0,
    optimal: int = 90,
) -> ConsumptionPattern:
    return ConsumptionPattern(
        average_first_dose_hour=_hour(first),
        average_last_dose_hour=_hour(last),
        average_first_dose=first,
        average_last_dose=last,
        peak_hour=9,
        average_daily_mg=avg,
        weekday_vs_weekend_diff_mg=diff,
        optimal_timing_pct=optimal,
    )


def _make_event(at: datetime.datetime, mg: float = 95.0, substance_id: str = "latte") -> ConsumptionEvent:
    return ConsumptionEvent(
        id=f"{substance_id}-{at.isoformat()}",
        substance_id=substance_id,
        display_name=substance_id.title(),
        caffeine_mg=mg,
        consumed_at=at,
    )


def _at(days_back: int, hour: int) -> datetime.datetime:
    return NOW.replace(hour=hour) - datetime.timedelta(days=days_back)


def _make_checkins(qualities: list[str]) -> list[SleepCheckin]:
    start = datetime.date(2026, 10, 1)
    return [
        SleepCheckin(date=start + datetime.timedelta(days=i), quality=q, yesterday_caffeine_mg=150)
        for i, q in enumerate(qualities)
    ]


# ======================================================================
# Personality
# ======================================================================


class TestPersonality:

    @pytest.mark.parametrize("kwargs,expected", [
        ({"first": "06:30", "optimal": 85}, "early-bird"),
        ({"first": "06:59", "optimal": 80}, "steady-sipper"),
        ({"avg": 301}, "power-drinker"),
        ({"avg": 300}, "steady-sipper"),
        ({"last": "17:00"}, "night-owl"),
        ({"last": "16:59"}, "steady-sipper"),
        ({"optimal": 49}, "night-owl"),
        ({"optimal": 50}, "steady-sipper"),
        ({"diff": 101}, "weekend-warrior"),
        ({"diff": -101}, "weekend-warrior"),
        ({"diff": 100}, "steady-sipper"),
        ({}, "steady-sipper"),
    ])
    def test_rules(self, kwargs, expected):
        assert classify_personality(_make_pattern(**kwargs)).tag == expected

    def test_early_bird_wins_over_power_drinker(self):
        assert classify_personality(_make_pattern(first="06:00", optimal=95, avg=450)).tag == "early-bird"

    def test_power_drinker_wins_over_night_owl(self):
        assert classify_personality(_make_pattern(avg=450, last="19:00")).tag == "power-drinker"

    def test_night_owl_wins_over_weekend_warrior(self):
        assert classify_personality(_make_pattern(last="18:00", diff=250)).tag == "night-owl"

    def test_result_carries_copy(self):
        result = classify_personality(_make_pattern(avg=350))
        assert result.name == "Power Drinker"
        assert len(result.traits) == 3
        assert len(result.recommendations) == 3

    def test_empty_history_baseline_is_steady_sipper(self):
        assert classify_personality(analyze_patterns([], NOW)).tag == "steady-sipper"

    def test_late_history_is_night_owl(self):
        events = [_make_event(_at(d, 18)) for d in range(1, 8)]
        assert classify_personality(analyze_patterns(events, NOW)).tag == "night-owl"


# ======================================================================
# Badge predicates
# ======================================================================


class TestPowerCaffeinator:

    @pytest.mark.parametrize("avg,drinks,expected", [
        (400, 7, True),
        (520, 12, True),
        (399.9, 7, False),
        (400, 6, False),
    ])
    def test_predicate(self, avg, drinks, expected):
        assert is_power_caffeinator(LogStats(average_daily_mg=avg, drinks_week=drinks)) is expected

    def test_no_stats(self):
        assert is_power_caffeinator(None) is False


class TestSleepGuardian:

    def test_five_great_nights(self):
        assert is_sleep_guardian(_make_checkins(["great"] * 5 + ["poor"]))

    def test_four_great_nights(self):
        assert not is_sleep_guardian(_make_checkins(["great"] * 4 + ["ok"] * 3))


class TestMorningRitual:

    def test_ninety_percent_before_noon(self):
        events = (
            [_make_event(_at(d, 9)) for d in range(7)]
            + [_make_event(_at(d, 8)) for d in (1, 2)]
            + [_make_event(_at(1, 15))]
        )
        assert is_morning_ritual(events, NOW)

    def test_eighty_percent_is_not_enough(self):
        events = [_make_event(_at(d, 9)) for d in range(7)] + [_make_event(_at(d, 15)) for d in (1, 2)]
        assert not is_morning_ritual(events, NOW)

    def test_needs_five_samples(self):
        events = [_make_event(_at(d, 8)) for d in range(4)]
        assert not is_morning_ritual(events, NOW)

    def test_only_last_seven_days(self):
        events = [_make_event(_at(d, 8)) for d in range(10, 20)]
        assert not is_morning_ritual(events, NOW)


class TestStreakMaster:

    @pytest.mark.parametrize("streak,expected", [(7, True), (30, True), (6, False), (0, False)])
    def test_predicate(self, streak, expected):
        assert is_streak_master(LogStats(tracking_streak_days=streak)) is expected


class TestMindfulSipper:

    def test_five_checkins_of_any_quality(self):
        assert is_mindful_sipper(_make_checkins(["poor", "ok", "great", "ok", "poor"]))

    def test_four_checkins(self):
        assert not is_mindful_sipper(_make_checkins(["great"] * 4))


class TestCustomBlend:

    def test_custom_drink(self):
        events = [_make_event(_at(3, 9)), _make_event(_at(2, 9), substance_id="custom_home_brew")]
        assert is_custom_blend(events)

    def test_catalog_only(self):
        assert not is_custom_blend([_make_event(_at(2, 9), substance_id="espresso")])


class TestEvaluateBadges:

    def test_fixed_order_and_all_present(self):
        badges = evaluate_badges([], [], None, NOW)
        assert [b.id for b in badges] == [
            "power-caffeinator", "sleep-guardian", "morning-ritual",
            "streak-master", "mindful-sipper", "custom-blend",
        ]
        assert not any(b.earned for b in badges)

    def test_idempotent(self):
        events = [_make_event(_at(d, 8), 420) for d in range(8)] + [_make_event(_at(0, 9), substance_id="custom_x")]
        checkins = _make_checkins(["great"] * 5)
        stats = compute_log_stats(events, NOW)
        first = evaluate_badges(checkins, events, stats, NOW)
        second = evaluate_badges(checkins, events, stats, NOW)
        assert [b.earned for b in first] == [b.earned for b in second]
        assert all(b.earned for b in first)

    def test_duplicate_checkins_collapse(self):
        same_day = [SleepCheckin(date=datetime.date(2026, 10, 1), quality="great") for _ in range(5)]
        badges = {b.id: b.earned for b in evaluate_badges(same_day, [], None, NOW)}
        assert badges["sleep-guardian"] is False
        assert badges["mindful-sipper"] is False


class TestNewlyEarned:

    def test_diff_against_seen(self):
        events = [_make_event(_at(0, 9), substance_id="custom_x")]
        badges = evaluate_badges(_make_checkins(["ok"] * 5), events, None, NOW)
        assert {b.id for b in newly_earned_badges(badges, [])} == {"mindful-sipper", "custom-blend"}
        assert [b.id for b in newly_earned_badges(badges, ["custom-blend"])] == ["mindful-sipper"]
        assert newly_earned_badges(badges, ["custom-blend", "mindful-sipper"]) == []


# ======================================================================
# Timing / consumption level / days tracked
# ======================================================================


class TestTimingPattern:

    @pytest.mark.parametrize("hours,expected", [
        ((8, 9), "unknown"),
        ((8, 9, 10, 11), "early-bird"),
        ((9, 14, 15, 16), "afternoon-booster"),
        ((9, 10, 13, 15), "steady-sipper"),
    ])
    def test_patterns(self, hours, expected):
        events = [_make_event(_at(i, h)) for i, h in enumerate(hours)]
        pattern, description = compute_timing_pattern(events, NOW)
        assert pattern == expected
        assert description


class TestConsumptionLevel:

    @pytest.mark.parametrize("avg,expected", [
        (150, "light"),
        (199.9, "light"),
        (200, "moderate"),
        (400, "moderate"),
        (401, "heavy"),
    ])
    def test_levels(self, avg, expected):
        level, _ = compute_consumption_level(LogStats(average_daily_mg=avg, drinks_week=5))
        assert level == expected

    def test_description_has_rounded_average(self):
        _, description = compute_consumption_level(LogStats(average_daily_mg=250.5, drinks_week=5))
        assert description.startswith("251mg/day")

    @pytest.mark.parametrize("stats", [None, LogStats()])
    def test_unknown(self, stats):
        assert compute_consumption_level(stats)[0] == "unknown"


class TestDaysTracked:

    def test_distinct_dates_not_consecutive(self):
        events = [_make_event(_at(d, h)) for d in (0, 2, 5, 40) for h in (8, 12)]
        assert count_days_tracked(events, NOW) == 4


# ======================================================================
# compute_profile
# ======================================================================


class TestComputeProfile:

    def _profile(self, days: int, override: str | None = None):
        events = [_make_event(_at(d, 8)) for d in range(days)]
        checkins = _make_checkins(["great"] * 5)
        return compute_profile(
            checkins, events, compute_log_stats(events, NOW), analyze_patterns(events, NOW), NOW,
            sensitivity_override=override,
        )

    def test_locked_below_seven_days(self):
        profile = self._profile(6)
        assert profile.days_tracked == 6
        assert profile.is_unlocked is False

    def test_unlocked_at_seven_days(self):
        profile = self._profile(7)
        assert profile.is_unlocked is True
        assert profile.timing_pattern == "early-bird"
        assert profile.consumption_level == "light"
        assert profile.sensitivity_level == "low"

    def test_sensitivity_override(self):
        profile = self._profile(7, override="high")
        assert profile.sensitivity_level == "high"
        assert profile.sensitivity.computed_level == "low"
