"""
Decay model — single-compartment exponential elimination.

Each dose decays independently:

    remaining(t) = mg × 0.5 ^ (t / half_life)

and the level in the system is the sum over doses (superposition).  A
half-life of 5 hours is the conventional adult average; it is a parameter,
not a claim about any individual.

Conventions
-----------
1. **Integer milligrams** — every decayed per-dose contribution is
   rounded half-up to whole mg.
2. **No decay into the past** — a non-positive elapsed time returns the
   dose unchanged.
3. **Clamping, not raising** — negative, NaN or infinite amounts count
   as zero.
"""

from __future__ import annotations

import datetime
import math

from app.kinetics.clock import hours_between, to_local
from app.schemas.caffeine import DecayMilestone, EnergyCurvePoint, PeakEnergyInfo

DEFAULT_HALF_LIFE_HOURS = 5.0

# Absorption peak after ingestion (minutes).
PEAK_MINUTES = 45

# Energy curve sampling.
_CURVE_STEP_MINUTES = 30
_CURVE_SPAN_MINUTES = 8 * 60


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def safe_mg(mg: float | None) -> float:
    """Clamp a raw amount to a usable non-negative finite value."""
    if mg is None:
        return 0.0
    try:
        value = float(mg)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value <= 0:
        return 0.0
    return value


def remaining(mg: float, elapsed_hours: float, half_life_hours: float = DEFAULT_HALF_LIFE_HOURS) -> float:
    """Caffeine left from a dose of ``mg`` after ``elapsed_hours``.

    Always a float.  Once any decay applied it is a whole number of mg;
    when no time elapsed it is the dose itself, which may be fractional, so
    callers displaying a single dose round it themselves.
    """
    amount = safe_mg(mg)
    if amount <= 0:
        return 0.0
    if math.isnan(elapsed_hours) or elapsed_hours <= 0:
        return amount
    if half_life_hours <= 0:
        return 0.0
    value = amount * math.pow(0.5, elapsed_hours / half_life_hours)
    return float(max(0, round_half_up(value)))


def hours_to_reach(mg: float, target_mg: float, half_life_hours: float = DEFAULT_HALF_LIFE_HOURS) -> float:
    """Hours until a level of ``mg`` decays down to ``target_mg``.

    Returns 0 when the level is already at or below the target.  A
    non-positive target is never reached, so the time to fall below 1 mg
    is returned instead.
    """
    amount = safe_mg(mg)
    if amount <= 0 or amount <= target_mg:
        return 0.0
    target = target_mg if target_mg > 0 else 1.0
    if amount <= target:
        return 0.0
    return half_life_hours * math.log2(amount / target)


def milestones(mg: float, half_life_hours: float = DEFAULT_HALF_LIFE_HOURS) -> list[DecayMilestone]:
    """Half-life and quarter-life checkpoints for a single dose."""
    half = half_life_hours
    quarter = half_life_hours * 2
    return [
        DecayMilestone(label="Half-life", hours=half, remaining_mg=round_half_up(remaining(mg, half, half_life_hours))),
        DecayMilestone(label="Quarter-life", hours=quarter, remaining_mg=round_half_up(remaining(mg, quarter, half_life_hours))),
    ]


def peak_energy(consumed_at: datetime.datetime, now: datetime.datetime) -> PeakEnergyInfo:
    """Locate a dose on its absorption / peak / decline timeline."""
    consumed = to_local(consumed_at, now)
    peak_at = consumed + datetime.timedelta(minutes=PEAK_MINUTES)
    minutes_to_peak = round_half_up(hours_between(now, peak_at) * 60)
    minutes_since = round_half_up(hours_between(consumed, now) * 60)
    is_past_peak = minutes_to_peak <= 0

    if minutes_since < 15:
        phase, description = "absorbing", "Caffeine is entering your bloodstream"
    elif minutes_since < 60:
        phase = "peak"
        description = "You're at peak alertness" if is_past_peak else "Approaching peak alertness"
    elif minutes_since < 180:
        phase, description = "sustained", "Sustained energy from caffeine"
    else:
        phase, description = "declining", "Caffeine is gradually clearing"

    return PeakEnergyInfo(
        peak_at=peak_at,
        minutes_to_peak=minutes_to_peak,
        is_past_peak=is_past_peak,
        phase=phase,
        phase_description=description,
    )


def energy_curve(
    mg: float,
    consumed_at: datetime.datetime,
    half_life_hours: float = DEFAULT_HALF_LIFE_HOURS,
) -> list[EnergyCurvePoint]:
    """Plot points for one dose: linear absorption to the peak, then decay."""
    amount = safe_mg(mg)
    points: list[EnergyCurvePoint] = []
    for minutes_after in range(0, _CURVE_SPAN_MINUTES + 1, _CURVE_STEP_MINUTES):
        if minutes_after <= PEAK_MINUTES:
            level = round_half_up(minutes_after / PEAK_MINUTES * amount)
        else:
            level = round_half_up(remaining(amount, (minutes_after - PEAK_MINUTES) / 60.0, half_life_hours))
        points.append(EnergyCurvePoint(
            at=consumed_at + datetime.timedelta(minutes=minutes_after),
            level_mg=level,
        ))
    return points
