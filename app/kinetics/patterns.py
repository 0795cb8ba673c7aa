"""
Pattern analyzer — rolling-window statistics over consumption history.

Events inside the window (default 30 days back from ``now``) are grouped
by local calendar day and summarised into a :class:`ConsumptionPattern`:

- **first / last dose** — arithmetic mean of each day's first and last
  dose hour.  Coffee hours don't wrap midnight in practice, so no
  circular mean is needed.
- **peak hour** — argmax of an mg-weighted hour-of-day histogram.
- **weekday vs weekend** — average *daily* total on weekend days minus
  the same on weekdays (positive = more on weekends).
- **optimal timing** — share of doses taken before the optimal cutoff
  hour (14:00 by default).

Empty input never raises: the neutral baseline (08:00 / 14:00, 100 %)
is returned so callers never special-case a new user.
"""

from __future__ import annotations

import datetime
from collections import Counter, defaultdict
from typing import Optional, Sequence

from app.kinetics.clock import (
    add_hours,
    format_hour,
    hours_between,
    local_hour,
    next_bedtime,
    parse_hhmm,
    start_of_local_day,
)
from app.kinetics.config import DEFAULT_CONFIG, KineticsConfig
from app.kinetics.decay import round_half_up
from app.kinetics.doses import Dose, in_window, to_doses
from app.kinetics.profile import classify_personality
from app.kinetics.status import level_at
from app.schemas.consumption import ConsumptionEvent
from app.schemas.pattern import ConsumptionPattern, EnergyPrediction, WeeklyInsight

# Neutral baseline for an empty window.
BASELINE_FIRST_HOUR = 8.0
BASELINE_LAST_HOUR = 14.0
BASELINE_PEAK_HOUR = 9

_TOP_DRINKS = 3

# Weekly insight thresholds.
_INSIGHT_WINDOW_DAYS = 7
_LATE_DOSE_HOURS = 6.0
_LATE_DOSE_ALERT_COUNT = 2
_DAILY_SPREAD_MG = 200
_CONSISTENT_AVERAGE_MG = 300
_EXCELLENT_TIMING_PCT = 80

# Energy forecast.
_FORECAST_HOURS = 6
_ENERGY_FULL_SCALE_MG = 200
_ENERGY_LOW_SCORE = 20
_ENERGY_HIGH_SCORE = 50
_CONFIDENT_MIN_DOSES = 5
_CONFIDENT = 0.8
_UNCERTAIN = 0.5

# Personalized recommendations.
_MAX_TIPS = 3
_MORNING_WINDOW_END_HOUR = 10
_DECAF_HOURS_BEFORE_BED = 8
_GOOD_TIMING_PCT = 70
_BOOST_CUTOFF_HOUR = 15


def _baseline() -> ConsumptionPattern:
    return ConsumptionPattern(
        average_first_dose_hour=BASELINE_FIRST_HOUR,
        average_last_dose_hour=BASELINE_LAST_HOUR,
        average_first_dose=format_hour(BASELINE_FIRST_HOUR),
        average_last_dose=format_hour(BASELINE_LAST_HOUR),
        peak_hour=BASELINE_PEAK_HOUR,
        average_daily_mg=0,
        weekday_vs_weekend_diff_mg=0,
        optimal_timing_pct=100,
        preferred_drinks=[],
        days_analyzed=0,
        sample_count=0,
    )


def _group_by_day(doses: Sequence[Dose]) -> dict[datetime.date, list[Dose]]:
    days: dict[datetime.date, list[Dose]] = defaultdict(list)
    for dose in doses:
        days[dose.at.date()].append(dose)
    return days


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _peak_hour(doses: Sequence[Dose]) -> int:
    """mg-weighted histogram argmax; ties resolve to the earliest hour."""
    histogram = [0.0] * 24
    for dose in doses:
        histogram[dose.at.hour] += dose.mg
    return histogram.index(max(histogram))


def _preferred_drinks(doses: Sequence[Dose]) -> list[str]:
    counts = Counter(d.event.display_name or d.event.substance_id for d in doses)
    return [name for name, _ in counts.most_common(_TOP_DRINKS)]


def _weekend_skew(days: dict[datetime.date, list[Dose]]) -> float:
    weekday_totals: list[float] = []
    weekend_totals: list[float] = []
    for day, day_doses in days.items():
        total = sum(d.mg for d in day_doses)
        (weekend_totals if day.weekday() >= 5 else weekday_totals).append(total)
    return _mean(weekend_totals) - _mean(weekday_totals)


def _window_doses(
    events: Sequence[ConsumptionEvent],
    now: datetime.datetime,
    window_days: int,
) -> list[Dose]:
    start = now - datetime.timedelta(days=window_days)
    return in_window(to_doses(events, now), start, now)


# ======================================================================
# Main entry point
# ======================================================================


def analyze_patterns(
    events: Sequence[ConsumptionEvent],
    now: datetime.datetime,
    window_days: Optional[int] = None,
    config: Optional[KineticsConfig] = None,
) -> ConsumptionPattern:
    """Summarise consumption habits over a rolling window.

    Args:
        events: Consumption history (any order, any span).
        now: Reference instant; the window is ``(now - window_days, now]``.
        window_days: Window length (defaults to ``pattern_window_days``).
        config: Optional :class:`KineticsConfig` override.

    Returns:
        :class:`ConsumptionPattern`, or the neutral baseline when the
        window holds no doses.
    """
    cfg = config or DEFAULT_CONFIG
    days_back = window_days if window_days is not None and window_days > 0 else cfg.pattern_window_days

    doses = _window_doses(events, now, days_back)
    if not doses:
        return _baseline()

    days = _group_by_day(doses)
    first_hours = [local_hour(day_doses[0].at, now) for day_doses in days.values()]
    last_hours = [local_hour(day_doses[-1].at, now) for day_doses in days.values()]
    daily_totals = [sum(d.mg for d in day_doses) for day_doses in days.values()]

    avg_first = _mean(first_hours)
    avg_last = _mean(last_hours)
    optimal = sum(1 for d in doses if d.at.hour < cfg.optimal_cutoff_hour)

    return ConsumptionPattern(
        average_first_dose_hour=avg_first,
        average_last_dose_hour=avg_last,
        average_first_dose=format_hour(avg_first),
        average_last_dose=format_hour(avg_last),
        peak_hour=_peak_hour(doses),
        average_daily_mg=round_half_up(_mean(daily_totals)),
        weekday_vs_weekend_diff_mg=round_half_up(_weekend_skew(days)),
        optimal_timing_pct=round_half_up(optimal / len(doses) * 100),
        preferred_drinks=_preferred_drinks(doses),
        days_analyzed=len(days),
        sample_count=len(doses),
    )


# ======================================================================
# Weekly insights
# ======================================================================


def _hours_before_bedtime(at: datetime.datetime, bedtime: datetime.time) -> float:
    """Hours from a dose's time of day forward to bedtime, in ``[0, 24)``."""
    dose_hour = at.hour + at.minute / 60.0
    bed_hour = bedtime.hour + bedtime.minute / 60.0
    return (bed_hour - dose_hour) % 24


def generate_weekly_insights(
    events: Sequence[ConsumptionEvent],
    now: datetime.datetime,
    bedtime: datetime.time | str,
    config: Optional[KineticsConfig] = None,
) -> list[WeeklyInsight]:
    """Short observations about the last seven days, most urgent first."""
    cfg = config or DEFAULT_CONFIG
    bed = parse_hhmm(bedtime)
    doses = _window_doses(events, now, _INSIGHT_WINDOW_DAYS)
    if not doses:
        return []

    insights: list[WeeklyInsight] = []

    late = [d for d in doses if _hours_before_bedtime(d.at, bed) < _LATE_DOSE_HOURS]
    if len(late) > _LATE_DOSE_ALERT_COUNT:
        insights.append(WeeklyInsight(
            title="Sleep Impact Alert",
            message=f"You had {len(late)} coffees within 6 hours of bedtime this week",
            kind="warning",
            action="Try moving your last coffee earlier for better sleep",
        ))

    # Seven calendar days ending today, empty days included.
    today = start_of_local_day(now).date()
    per_day = _group_by_day(doses)
    daily = [
        sum(d.mg for d in per_day.get(today - datetime.timedelta(days=offset), []))
        for offset in range(_INSIGHT_WINDOW_DAYS)
    ]
    average = sum(daily) / _INSIGHT_WINDOW_DAYS
    if max(daily) - min(daily) > _DAILY_SPREAD_MG:
        insights.append(WeeklyInsight(
            title="Inconsistent Patterns",
            message="Your caffeine intake varies significantly day to day",
            kind="neutral",
            action="Try maintaining more consistent daily amounts",
        ))
    elif 0 < average < _CONSISTENT_AVERAGE_MG:
        insights.append(WeeklyInsight(
            title="Great Consistency!",
            message="Your caffeine intake has been nicely balanced this week",
            kind="positive",
        ))

    pattern = analyze_patterns(events, now, window_days=_INSIGHT_WINDOW_DAYS, config=cfg)
    if pattern.optimal_timing_pct > _EXCELLENT_TIMING_PCT:
        insights.append(WeeklyInsight(
            title="Excellent Timing",
            message=f"{pattern.optimal_timing_pct}% of your coffee was consumed at optimal times",
            kind="positive",
        ))

    return insights


# ======================================================================
# Energy forecast
# ======================================================================


def _forecast_recommendation(score: int) -> str:
    if score < _ENERGY_LOW_SCORE:
        return "Perfect time for your next coffee"
    if score < _ENERGY_HIGH_SCORE:
        return "Good time for a small coffee boost"
    return "High energy - hold off on more caffeine"


def predict_energy(
    events: Sequence[ConsumptionEvent],
    now: datetime.datetime,
    hours: int = _FORECAST_HOURS,
    config: Optional[KineticsConfig] = None,
) -> list[EnergyPrediction]:
    """Hour-by-hour caffeine projection for the next ``hours`` hours.

    Each point scales the projected level to a 0-100 energy score
    (200 mg or more is 100).  Confidence is 0.8 with more than five logged
    doses and 0.5 otherwise.  Only doses taken by each point count, so a
    pre-logged future drink shows up from its own hour onward.
    """
    cfg = config or DEFAULT_CONFIG
    doses = to_doses(events, now)
    confidence = _CONFIDENT if len(doses) > _CONFIDENT_MIN_DOSES else _UNCERTAIN

    predictions: list[EnergyPrediction] = []
    for step in range(1, hours + 1):
        at = add_hours(now, step)
        level = round_half_up(level_at(doses, at, cfg.half_life_hours))
        score = min(100, round_half_up(level / _ENERGY_FULL_SCALE_MG * 100))
        predictions.append(EnergyPrediction(
            at=at,
            level_mg=level,
            energy_score=score,
            confidence=confidence,
            recommendation=_forecast_recommendation(score),
        ))
    return predictions


# ======================================================================
# Personalized recommendations
# ======================================================================


def personalized_recommendations(
    events: Sequence[ConsumptionEvent],
    now: datetime.datetime,
    current_level_mg: float,
    bedtime: datetime.time | str,
    config: Optional[KineticsConfig] = None,
) -> list[str]:
    """Up to three short tips for right now.

    Checked in order: time of day, timing habit, personality, current
    level.  The first three that apply are returned.
    """
    cfg = config or DEFAULT_CONFIG
    pattern = analyze_patterns(events, now, config=cfg)
    personality = classify_personality(pattern)
    hours_to_bed = hours_between(now, next_bedtime(now, parse_hhmm(bedtime)))
    hour = now.hour

    tips: list[str] = []
    if hour < _MORNING_WINDOW_END_HOUR:
        tips.append("Morning is your optimal caffeine window - enjoy!")
    elif hour > cfg.optimal_cutoff_hour and hours_to_bed < _DECAF_HOURS_BEFORE_BED:
        tips.append("Consider switching to decaf to protect your sleep")

    if pattern.optimal_timing_pct < _GOOD_TIMING_PCT:
        tips.append(
            f"Try having your last coffee by {format_hour(cfg.optimal_cutoff_hour)} for better sleep"
        )

    tips.extend(personality.recommendations[:1])

    if current_level_mg > cfg.jitter_threshold_mg:
        tips.append("You're well-caffeinated - consider waiting 2-3 hours")
    elif current_level_mg < cfg.sleep_safe_mg and hour < _BOOST_CUTOFF_HOUR:
        tips.append("Perfect time for a coffee boost!")

    return tips[:_MAX_TIPS]
