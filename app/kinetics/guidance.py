"""
Guidance state machine — turns a :class:`CaffeineStatus` into advice.

Two independent risk axes:

- **Jitter** (short-term stacking) — active when the current level plus
  one more typical dose reaches the jitter ceiling.  The ceiling is not
  the daily limit.
- **Sleep** (bedtime residue) — active when the status' sleep risk is
  ``medium`` or ``high``.

State is the combination of the two axes::

    neither      → safe          (green)
    jitter only  → jitter_risk   (yellow)
    sleep only   → sleep_risk    (yellow, red if sleep risk is high)
    both         → both_risks    (red)

Sleep risk shapes the message but never blocks the next dose:
``is_safe_for_next_dose`` depends on the jitter axis alone.

The function is deterministic and holds no state; the same status and
thresholds always produce the same guidance.
"""

from __future__ import annotations

import math
from typing import Optional

from app.kinetics.config import DEFAULT_CONFIG, KineticsConfig
from app.kinetics.decay import hours_to_reach, remaining, round_half_up
from app.schemas.caffeine import CaffeineStatus, GuidanceState, SleepVerdict

# Daily progress above which an informational note is attached.
_DAILY_LIMIT_NOTE_PCT = 90.0


# ======================================================================
# Formatting
# ======================================================================


def format_duration(hours: float) -> str:
    """Human-readable duration: ``Now``, ``45m``, ``2h``, ``2h 15m``."""
    if not math.isfinite(hours):
        return "Now"
    minutes = hours * 60
    if minutes < 1:
        return "Now"
    if minutes < 60:
        return f"{math.ceil(minutes)}m"
    whole_hours = int(minutes // 60)
    rest = math.ceil(minutes % 60)
    if rest == 60:
        whole_hours, rest = whole_hours + 1, 0
    if rest == 0:
        return f"{whole_hours}h"
    return f"{whole_hours}h {rest}m"


# ======================================================================
# Axes
# ======================================================================


def _jitter_axis(status: CaffeineStatus, jitter_mg: float, next_dose_mg: float) -> bool:
    return status.current_level_mg + next_dose_mg >= jitter_mg


def _sleep_axis(status: CaffeineStatus) -> bool:
    return status.sleep_risk in ("medium", "high")


def _combine(jitter: bool, sleep: bool) -> str:
    if jitter and sleep:
        return "both_risks"
    if jitter:
        return "jitter_risk"
    if sleep:
        return "sleep_risk"
    return "safe"


def _color(state: str, status: CaffeineStatus) -> str:
    if state == "safe":
        return "green"
    if state == "both_risks" or status.sleep_risk == "high":
        return "red"
    return "yellow"


# ======================================================================
# Copy
# ======================================================================


def _copy(state: str, status: CaffeineStatus, wait_label: Optional[str]) -> tuple[str, str]:
    """Headline and message for a state."""
    if state == "safe":
        return (
            "Safe to have coffee",
            "Go ahead and enjoy your coffee!",
        )
    if state == "jitter_risk":
        return (
            "Caffeine still active",
            f"You're at {status.current_level_mg} mg. Wait about {wait_label} before another cup "
            "to avoid the jitters.",
        )
    if state == "sleep_risk":
        return (
            "Mind your bedtime",
            f"About {status.projected_at_bedtime_mg} mg will still be in your system at bedtime. "
            "Consider decaf or herbal tea from here on.",
        )
    return (
        "Better hold off",
        f"You're at {status.current_level_mg} mg and about {status.projected_at_bedtime_mg} mg "
        f"will remain at bedtime. Wait at least {wait_label} and switch to decaf.",
    )


# ======================================================================
# Main entry point
# ======================================================================


def compute_guidance(
    status: CaffeineStatus,
    jitter_threshold_mg: Optional[float] = None,
    next_dose_estimate_mg: Optional[float] = None,
    config: Optional[KineticsConfig] = None,
) -> GuidanceState:
    """Derive the guidance state for a status snapshot.

    Args:
        status: Snapshot from :func:`~app.kinetics.status.compute_status`.
        jitter_threshold_mg: Jitter ceiling override (defaults to the
            config value).
        next_dose_estimate_mg: Size of the prospective dose (defaults to
            the config value, a typical single serving).
        config: Optional :class:`KineticsConfig` override.

    Returns:
        :class:`GuidanceState`.
    """
    cfg = config or DEFAULT_CONFIG
    jitter_mg = cfg.jitter_threshold_mg if jitter_threshold_mg is None else jitter_threshold_mg
    next_dose_mg = cfg.next_dose_estimate_mg if next_dose_estimate_mg is None else next_dose_estimate_mg

    jitter = _jitter_axis(status, jitter_mg, next_dose_mg)
    sleep = _sleep_axis(status)
    state = _combine(jitter, sleep)

    wait_hours: Optional[float] = None
    if state != "safe":
        jitter_wait = (
            hours_to_reach(status.current_level_mg, jitter_mg - next_dose_mg, status.half_life_hours)
            if jitter else 0.0
        )
        # No wait clears the bedtime residue of a new dose, so the sleep axis
        # defers the next cup until after bedtime.
        sleep_wait = status.hours_to_bedtime if sleep else 0.0
        wait_hours = round(max(jitter_wait, sleep_wait), 3)

    wait_label = format_duration(wait_hours) if wait_hours is not None else None
    headline, message = _copy(state, status, wait_label)

    notes: list[str] = []
    if status.daily_progress_pct >= _DAILY_LIMIT_NOTE_PCT:
        notes.append("Daily limit nearly reached. Consider decaf or herbal tea.")
    if status.sleep_risk != "low":
        notes.append(status.sleep_risk_message)

    return GuidanceState(
        state=state,
        color=_color(state, status),
        jitter_risk=jitter,
        sleep_risk=sleep,
        is_safe_for_next_dose=not jitter,
        wait_time_hours=wait_hours,
        wait_time_label=wait_label,
        headline=headline,
        message=message,
        notes=notes,
    )


# ======================================================================
# Prospective drink verdict
# ======================================================================


def sleep_verdict(
    mg: float,
    hours_until_bed: float,
    config: Optional[KineticsConfig] = None,
) -> SleepVerdict:
    """What a drink of ``mg`` taken now leaves at bedtime."""
    cfg = config or DEFAULT_CONFIG
    left = round_half_up(remaining(mg, hours_until_bed, cfg.half_life_hours))
    dose = round_half_up(max(mg, 0.0)) if math.isfinite(mg) else 0

    if left < cfg.sleep_safe_mg:
        return SleepVerdict(
            code="green",
            headline="Clear to sip",
            detail=f"This cup's ~{dose} mg will mellow out to ~{left} mg by bedtime.",
            suggestion="You could even go for a medium roast and still be fine.",
            remaining_mg=left,
        )
    if left <= cfg.sleep_caution_mg:
        return SleepVerdict(
            code="yellow",
            headline="Sip smart",
            detail=f"Drink this now and about {left} mg will still be buzzing at bedtime.",
            suggestion="Try a smaller size or half-caff to be bedtime-ready.",
            remaining_mg=left,
        )
    return SleepVerdict(
        code="red",
        headline="Better hold off",
        detail=f"This {dose} mg drink leaves over {left} mg at bedtime.",
        suggestion="Swap for decaf or tea, or make it a small.",
        remaining_mg=left,
    )
