"""
Status aggregator — the real-time caffeine snapshot.

Combines a set of consumption events, ``now``, the user's bedtime and daily
limit into a :class:`CaffeineStatus`:

- **current level** — superposition of every dose decayed to ``now``,
- **peak level** — highest level reached today,
- **daily totals** — raw mg consumed since local midnight,
- **bedtime projection** — every dose decayed forward to the next bedtime.

Peak detection
--------------
The level is a sum of decaying exponentials, so between two doses it only
ever falls.  Local maxima can therefore only sit at a dose instant (or at
the start of the window, when residue from yesterday is still decaying).
The peak is evaluated at exactly those instants — never by sampling the
curve on a grid, which misses maxima between samples.

The event list is never truncated here.  Callers should pass at least the
last 24 hours of events; anything older than ~5 half-lives contributes
nothing measurable.
"""

from __future__ import annotations

import datetime
import math
from typing import Optional, Sequence

from app.kinetics.clock import hours_between, next_bedtime, parse_hhmm, start_of_local_day
from app.kinetics.config import DEFAULT_CONFIG, KineticsConfig
from app.kinetics.decay import hours_to_reach, remaining, round_half_up
from app.kinetics.doses import Dose, to_doses
from app.schemas.caffeine import CaffeineStatus
from app.schemas.consumption import ConsumptionEvent

DEFAULT_DAILY_LIMIT_MG = 400.0

_SLEEP_RISK_MESSAGES: dict[str, str] = {
    "low": "Your caffeine will clear well before bedtime. Sleep should be unaffected.",
    "medium": "Some caffeine may remain at bedtime. Consider avoiding caffeine for the next few hours.",
    "high": "Significant caffeine will remain at bedtime. This may affect your sleep quality.",
}


# ======================================================================
# Labelling
# ======================================================================


def _label_sleep_risk(projected_mg: float, cfg: KineticsConfig) -> str:
    """Map a projected bedtime level to its sleep-risk label."""
    if projected_mg < cfg.sleep_safe_mg:
        return "low"
    if projected_mg < cfg.sleep_caution_mg:
        return "medium"
    return "high"


# ======================================================================
# Level computation
# ======================================================================


def level_at(doses: Sequence[Dose], instant: datetime.datetime, half_life: float) -> float:
    """Level at ``instant`` from the doses taken at or before it."""
    return sum(
        remaining(d.mg, hours_between(d.at, instant), half_life)
        for d in doses
        if d.at <= instant
    )


def _compute_peak(
    doses: Sequence[Dose],
    day_start: datetime.datetime,
    current_level: int,
    half_life: float,
) -> int:
    """Highest level reached since ``day_start``.

    Candidates are today's dose instants plus ``day_start`` itself when
    earlier doses leave residue.  Clamped to the current level so
    ``peak >= current`` holds even for doses dated after ``now``.
    """
    candidates = [d.at for d in doses if d.at >= day_start]
    if any(d.at < day_start for d in doses):
        candidates.append(day_start)

    peak = 0
    for instant in candidates:
        peak = max(peak, round_half_up(level_at(doses, instant, half_life)))
    return max(peak, current_level)


def _sanitize_limit(daily_limit_mg: float) -> float:
    try:
        limit = float(daily_limit_mg)
    except (TypeError, ValueError):
        return DEFAULT_DAILY_LIMIT_MG
    if not math.isfinite(limit) or limit <= 0:
        return DEFAULT_DAILY_LIMIT_MG
    return limit


# ======================================================================
# Main entry point
# ======================================================================


def compute_status(
    events: Sequence[ConsumptionEvent],
    now: datetime.datetime,
    bedtime: datetime.time | str,
    daily_limit_mg: float = DEFAULT_DAILY_LIMIT_MG,
    config: Optional[KineticsConfig] = None,
) -> CaffeineStatus:
    """Compute the caffeine snapshot at ``now``.

    Args:
        events: Consumption events covering at least the last 24 hours.
            Order is irrelevant; malformed records contribute 0 mg.
        now: Reference instant, sampled once by the caller.
        bedtime: Bedtime of day (``datetime.time`` or ``"HH:MM"``).
        daily_limit_mg: User's daily limit.  Non-positive values fall
            back to 400 mg.
        config: Optional :class:`KineticsConfig` override (uses
            ``DEFAULT_CONFIG`` if ``None``).

    Returns:
        :class:`CaffeineStatus` for ``now``.
    """
    cfg = config or DEFAULT_CONFIG
    half_life = cfg.half_life_hours
    limit = _sanitize_limit(daily_limit_mg)
    doses = to_doses(events, now)

    # --- Current level ---
    current_level = max(0, round_half_up(sum(
        remaining(d.mg, hours_between(d.at, now), half_life) for d in doses
    )))

    # --- Peak today ---
    day_start = start_of_local_day(now)
    peak_level = _compute_peak(doses, day_start, current_level, half_life)

    # --- Daily totals ---
    daily_consumed = sum(d.mg for d in doses if d.at >= day_start)
    daily_progress = min(100.0, daily_consumed / limit * 100.0)

    # --- Bedtime projection ---
    bedtime_at = next_bedtime(now, parse_hhmm(bedtime))
    hours_to_bedtime = hours_between(now, bedtime_at)
    projected = max(0, round_half_up(sum(
        remaining(d.mg, hours_between(d.at, bedtime_at), half_life) for d in doses
    )))
    sleep_risk = _label_sleep_risk(projected, cfg)

    # --- Next dose ---
    hours_to_next = hours_to_reach(current_level, cfg.jitter_headroom_mg, half_life)
    is_safe = current_level + cfg.next_dose_estimate_mg < cfg.jitter_threshold_mg

    return CaffeineStatus(
        current_level_mg=current_level,
        peak_level_mg=peak_level,
        daily_consumed_mg=round(daily_consumed, 1),
        daily_limit_mg=limit,
        daily_progress_pct=round(daily_progress, 1),
        projected_at_bedtime_mg=projected,
        bedtime_at=bedtime_at,
        hours_to_bedtime=round(hours_to_bedtime, 3),
        hours_to_next_safe_dose=round(hours_to_next, 3),
        is_safe_for_next_dose=is_safe,
        sleep_risk=sleep_risk,
        sleep_risk_message=_SLEEP_RISK_MESSAGES[sleep_risk],
        computed_at=now,
        half_life_hours=half_life,
    )
