"""
Personality & badge classifier — the longitudinal caffeine profile.

Personality
-----------
Ordered rules over a :class:`ConsumptionPattern`, first match wins:

    1. early-bird       first dose before 07:00 and > 80 % optimal timing
    2. power-drinker    daily average > 300 mg
    3. night-owl        last dose after 16:00 or < 50 % optimal timing
    4. weekend-warrior  |weekend − weekday| > 100 mg
    5. steady-sipper    otherwise

Hours are compared as the integer hour of the averaged ``HH:MM`` time, so
an average last dose of 16:40 does not count as "after 16".

Badges
------
Six independent predicates, re-evaluated from scratch on every call.  The
engine never remembers which badges were already earned;
:func:`newly_earned_badges` is a pure diff that the caller feeds with its
own persisted set of seen ids.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Optional, Sequence

from app.kinetics.config import DEFAULT_CONFIG, KineticsConfig
from app.kinetics.decay import round_half_up
from app.kinetics.doses import in_window, to_doses
from app.kinetics.sensitivity import infer_sensitivity, unique_checkins
from app.schemas.consumption import ConsumptionEvent
from app.schemas.pattern import ConsumptionPattern, LogStats
from app.schemas.profile import Badge, CaffeineProfile, PersonalityResult
from app.schemas.sleep_checkin import SleepCheckin

UNLOCK_DAYS = 7

_RECENT_DAYS = 7
_TIMING_MIN_SAMPLES = 3
_MORNING_SHARE = 0.8
_AFTERNOON_SHARE = 0.5
_AFTERNOON_HOUR = 14

_LIGHT_MAX_MG = 200
_MODERATE_MAX_MG = 400


# ======================================================================
# Personality
# ======================================================================

_PERSONALITIES: dict[str, dict] = {
    "early-bird": {
        "name": "Early Bird",
        "description": "You start your day early and make smart timing choices",
        "traits": ["Early riser", "Great timing", "Consistent habits"],
        "recommendations": [
            "Keep up your excellent timing!",
            "Consider a second cup around 10 AM for sustained energy",
            "Your habits support great sleep quality",
        ],
    },
    "power-drinker": {
        "name": "Power Drinker",
        "description": "You rely heavily on caffeine for sustained energy",
        "traits": ["High tolerance", "Frequent consumer", "Energy dependent"],
        "recommendations": [
            "Consider spacing your coffee more evenly",
            "Try switching some cups to green tea",
            "Monitor your sleep quality closely",
        ],
    },
    "night-owl": {
        "name": "Night Owl",
        "description": "You enjoy coffee later in the day",
        "traits": ["Late drinker", "May affect sleep", "Flexible schedule"],
        "recommendations": [
            "Try moving your last coffee earlier",
            "Consider decaf for afternoon cravings",
            "Monitor how late coffee affects your sleep",
        ],
    },
    "weekend-warrior": {
        "name": "Weekend Warrior",
        "description": "Your coffee habits change dramatically on weekends",
        "traits": ["Variable patterns", "Lifestyle driven", "Social drinker"],
        "recommendations": [
            "Try to maintain more consistent patterns",
            "Weekend coffee can be a treat, not a necessity",
            "Consider your weekend sleep schedule",
        ],
    },
    "steady-sipper": {
        "name": "Steady Sipper",
        "description": "You have consistent, moderate coffee habits",
        "traits": ["Balanced approach", "Consistent timing", "Mindful consumption"],
        "recommendations": [
            "Your habits are well-balanced!",
            "Experiment with timing to optimize energy",
            "Consider tracking how coffee affects your mood",
        ],
    },
}


def _hour_of(hhmm: str) -> int:
    return int(hhmm.split(":", 1)[0])


def _label_personality(pattern: ConsumptionPattern) -> str:
    first_hour = _hour_of(pattern.average_first_dose)
    last_hour = _hour_of(pattern.average_last_dose)

    if first_hour < 7 and pattern.optimal_timing_pct > 80:
        return "early-bird"
    if pattern.average_daily_mg > 300:
        return "power-drinker"
    if last_hour > 16 or pattern.optimal_timing_pct < 50:
        return "night-owl"
    if abs(pattern.weekday_vs_weekend_diff_mg) > 100:
        return "weekend-warrior"
    return "steady-sipper"


def classify_personality(pattern: ConsumptionPattern) -> PersonalityResult:
    """Exactly one personality for a consumption pattern.

    The pattern already summarises the raw events, so the events
    themselves are not needed here.
    """
    tag = _label_personality(pattern)
    return PersonalityResult(tag=tag, **_PERSONALITIES[tag])


# ======================================================================
# Badges
# ======================================================================

_BADGE_DEFS: dict[str, dict[str, str]] = {
    "power-caffeinator": {
        "name": "Power Caffeinator",
        "description": "400+mg daily average over 7 days",
        "icon": "⚡",
    },
    "sleep-guardian": {
        "name": "Sleep Guardian",
        "description": "5+ days of great sleep with mindful caffeine",
        "icon": "🛡️",
    },
    "morning-ritual": {
        "name": "Morning Ritual",
        "description": "90%+ of coffee before noon for 7 days",
        "icon": "🌅",
    },
    "streak-master": {
        "name": "Streak Master",
        "description": "7+ day tracking streak",
        "icon": "🔥",
    },
    "mindful-sipper": {
        "name": "Mindful Sipper",
        "description": "5+ sleep check-ins completed",
        "icon": "🧘",
    },
    "custom-blend": {
        "name": "Custom Blend",
        "description": "Logged a custom drink",
        "icon": "🎨",
    },
}


def _badge(badge_id: str, earned: bool) -> Badge:
    return Badge(id=badge_id, earned=earned, **_BADGE_DEFS[badge_id])


def _recent_hours(events: Sequence[ConsumptionEvent], now: datetime.datetime) -> list[int]:
    """Local hours of the doses taken in the last seven days."""
    doses = to_doses(events, now)
    start = now - datetime.timedelta(days=_RECENT_DAYS)
    return [d.at.hour for d in in_window(doses, start, now)]


def is_power_caffeinator(stats: Optional[LogStats]) -> bool:
    return stats is not None and stats.average_daily_mg >= 400 and stats.drinks_week >= 7


def is_sleep_guardian(checkins: Sequence[SleepCheckin]) -> bool:
    return sum(1 for c in checkins if c.quality == "great") >= 5


def is_morning_ritual(
    events: Sequence[ConsumptionEvent],
    now: datetime.datetime,
    config: Optional[KineticsConfig] = None,
) -> bool:
    cfg = config or DEFAULT_CONFIG
    hours = _recent_hours(events, now)
    if len(hours) < 5:
        return False
    morning = sum(1 for h in hours if h < cfg.morning_cutoff_hour)
    return morning / len(hours) >= 0.9


def is_streak_master(stats: Optional[LogStats]) -> bool:
    return stats is not None and stats.tracking_streak_days >= 7


def is_mindful_sipper(checkins: Sequence[SleepCheckin]) -> bool:
    return len(checkins) >= 5


def is_custom_blend(events: Sequence[ConsumptionEvent]) -> bool:
    return any(e.is_custom for e in events)


def evaluate_badges(
    checkins: Sequence[SleepCheckin],
    events: Sequence[ConsumptionEvent],
    stats: Optional[LogStats],
    now: datetime.datetime,
    config: Optional[KineticsConfig] = None,
) -> list[Badge]:
    """Evaluate every badge predicate against the given snapshot.

    Args:
        checkins: Sleep check-ins (duplicates per date are collapsed).
        events: Consumption history.
        stats: Rolling log statistics, or ``None`` when unavailable.
        now: Reference instant for the 7-day window.
        config: Optional :class:`KineticsConfig` override.

    Returns:
        One :class:`Badge` per badge id, in a fixed order.
    """
    unique = unique_checkins(checkins)
    return [
        _badge("power-caffeinator", is_power_caffeinator(stats)),
        _badge("sleep-guardian", is_sleep_guardian(unique)),
        _badge("morning-ritual", is_morning_ritual(events, now, config)),
        _badge("streak-master", is_streak_master(stats)),
        _badge("mindful-sipper", is_mindful_sipper(unique)),
        _badge("custom-blend", is_custom_blend(events)),
    ]


def newly_earned_badges(badges: Iterable[Badge], previously_seen: Iterable[str]) -> list[Badge]:
    """Earned badges whose id is not in ``previously_seen``."""
    seen = set(previously_seen)
    return [b for b in badges if b.earned and b.id not in seen]


# ======================================================================
# Timing & consumption level
# ======================================================================


def compute_timing_pattern(
    events: Sequence[ConsumptionEvent],
    now: datetime.datetime,
    config: Optional[KineticsConfig] = None,
) -> tuple[str, str]:
    """``(pattern, description)`` from the last seven days of doses."""
    cfg = config or DEFAULT_CONFIG
    hours = _recent_hours(events, now)
    if len(hours) < _TIMING_MIN_SAMPLES:
        return "unknown", "Need more data to determine your timing pattern"

    before_noon = sum(1 for h in hours if h < cfg.morning_cutoff_hour)
    afternoon = sum(1 for h in hours if h >= _AFTERNOON_HOUR)

    if before_noon / len(hours) >= _MORNING_SHARE:
        return "early-bird", "You drink most of your coffee in the morning"
    if afternoon / len(hours) >= _AFTERNOON_SHARE:
        return "afternoon-booster", "You tend to drink coffee in the afternoon"
    return "steady-sipper", "Your coffee is spread throughout the day"


def compute_consumption_level(stats: Optional[LogStats]) -> tuple[str, str]:
    if stats is None or stats.drinks_week == 0:
        return "unknown", "Not enough data yet"

    avg = round_half_up(stats.average_daily_mg)
    if stats.average_daily_mg < _LIGHT_MAX_MG:
        return "light", f"{avg}mg/day avg: light caffeine consumer"
    if stats.average_daily_mg <= _MODERATE_MAX_MG:
        return "moderate", f"{avg}mg/day avg: moderate, within recommended limits"
    return "heavy", f"{avg}mg/day avg: heavy consumer, consider reducing"


def count_days_tracked(events: Sequence[ConsumptionEvent], now: datetime.datetime) -> int:
    """Distinct local calendar dates with at least one dose."""
    return len({d.at.date() for d in to_doses(events, now)})


# ======================================================================
# Main entry point
# ======================================================================


def compute_profile(
    checkins: Sequence[SleepCheckin],
    events: Sequence[ConsumptionEvent],
    stats: Optional[LogStats],
    pattern: ConsumptionPattern,
    now: datetime.datetime,
    sensitivity_override: Optional[str] = None,
    config: Optional[KineticsConfig] = None,
) -> CaffeineProfile:
    """Assemble the full caffeine profile.

    Args:
        checkins: Sleep check-ins.
        events: Consumption history (at least the pattern window).
        stats: Rolling log statistics.
        pattern: Output of :func:`~app.kinetics.patterns.analyze_patterns`.
        now: Reference instant.
        sensitivity_override: ``auto`` / ``low`` / ``moderate`` / ``high``.
        config: Optional :class:`KineticsConfig` override.

    Returns:
        :class:`CaffeineProfile`; ``is_unlocked`` once 7 distinct days
        have been tracked.
    """
    days_tracked = count_days_tracked(events, now)
    timing, timing_description = compute_timing_pattern(events, now, config)
    level, level_description = compute_consumption_level(stats)

    return CaffeineProfile(
        sensitivity=infer_sensitivity(checkins, sensitivity_override),
        timing_pattern=timing,
        timing_description=timing_description,
        consumption_level=level,
        consumption_description=level_description,
        personality=classify_personality(pattern),
        badges=evaluate_badges(checkins, events, stats, now, config),
        days_tracked=days_tracked,
        is_unlocked=days_tracked >= UNLOCK_DAYS,
    )
