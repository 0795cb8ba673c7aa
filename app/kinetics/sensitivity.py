"""
Sensitivity inferencer — how strongly caffeine appears to affect sleep.

Compares the previous-day caffeine of nights reported as ``great`` with
nights reported as ``poor``:

    fewer than 5 check-ins      → unknown ("need N more")
    no great and no poor nights → moderate (flat, inconclusive)
    no poor nights              → low
    no great nights             → high
    avg(poor) − avg(great) > 150 → high
                           > 50  → moderate
                           else  → low

An explicit user preference (anything but ``auto``) replaces the level and
description, but the statistical value is always computed and returned in
``computed_level``.
"""

from __future__ import annotations

from typing import Optional, Sequence

from app.kinetics.decay import round_half_up
from app.schemas.profile import SensitivityResult
from app.schemas.sleep_checkin import SleepCheckin

MIN_CHECKINS = 5

HIGH_DIFF_MG = 150.0
MODERATE_DIFF_MG = 50.0

_OVERRIDE_DESCRIPTIONS: dict[str, str] = {
    "low": "Set in settings: you tend to tolerate caffeine well before sleep.",
    "moderate": "Set in settings: moderate sensitivity to caffeine before bed.",
    "high": "Set in settings: you're sensitive to caffeine, so keep intake low near bedtime.",
}


def unique_checkins(checkins: Sequence[SleepCheckin]) -> list[SleepCheckin]:
    """One check-in per date; the most recently recorded one wins."""
    by_date: dict = {}
    for checkin in checkins:
        kept = by_date.get(checkin.date)
        if kept is None or _recorded_key(checkin) >= _recorded_key(kept):
            by_date[checkin.date] = checkin
    return [by_date[d] for d in sorted(by_date)]


def _recorded_key(checkin: SleepCheckin) -> float:
    return checkin.recorded_at.timestamp() if checkin.recorded_at is not None else float("-inf")


def _average_mg(group: Sequence[SleepCheckin]) -> float:
    return sum(c.yesterday_caffeine_mg for c in group) / len(group)


def _infer(checkins: Sequence[SleepCheckin]) -> tuple[str, str, int]:
    """Statistical level, description and missing check-in count."""
    if len(checkins) < MIN_CHECKINS:
        needed = MIN_CHECKINS - len(checkins)
        return "unknown", f"Need {needed} more sleep check-ins to determine sensitivity", needed

    great = [c for c in checkins if c.quality == "great"]
    poor = [c for c in checkins if c.quality == "poor"]

    if not great and not poor:
        return "moderate", "Your sleep quality is consistently OK regardless of caffeine", 0
    if not poor:
        return "low", "You sleep well regardless of caffeine intake, so sensitivity looks low", 0
    if not great:
        return "high", "Your sleep is frequently affected, so you may be highly sensitive to caffeine", 0

    diff = _average_mg(poor) - _average_mg(great)
    if diff > HIGH_DIFF_MG:
        return (
            "high",
            f"Poor sleep days average {round_half_up(diff)}mg more caffeine, so you're sensitive",
            0,
        )
    if diff > MODERATE_DIFF_MG:
        return "moderate", "Moderate sensitivity: higher caffeine days slightly affect your sleep", 0
    return "low", "Caffeine doesn't seem to strongly affect your sleep quality", 0


def infer_sensitivity(
    checkins: Sequence[SleepCheckin],
    override: Optional[str] = None,
) -> SensitivityResult:
    """Infer the sensitivity tag from sleep check-ins.

    Args:
        checkins: Sleep check-ins in any order.  Duplicates for the same
            date collapse to the latest recorded one.
        override: ``auto`` / ``None`` to use the inferred value, or an
            explicit ``low`` / ``moderate`` / ``high``.

    Returns:
        :class:`SensitivityResult`.
    """
    level, description, needed = _infer(unique_checkins(checkins))

    if override in _OVERRIDE_DESCRIPTIONS:
        return SensitivityResult(
            level=override,
            description=_OVERRIDE_DESCRIPTIONS[override],
            computed_level=level,
            computed_description=description,
            is_override=True,
            checkins_needed=needed,
        )

    return SensitivityResult(
        level=level,
        description=description,
        computed_level=level,
        computed_description=description,
        checkins_needed=needed,
    )
