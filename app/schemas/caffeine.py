"""
Real-time caffeine schemas — status snapshot and guidance.

The real-time path is:

    events → decay model → :class:`CaffeineStatus` → :class:`GuidanceState`

Both objects are derived on demand and never persisted.  Sleep-risk labels
are *operational categories* on the projected bedtime level:

- ``low``    — projected < sleep_safe_mg
- ``medium`` — sleep_safe_mg <= projected < sleep_caution_mg
- ``high``   — projected >= sleep_caution_mg
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SleepRisk = Literal["low", "medium", "high"]
GuidanceLabel = Literal["safe", "jitter_risk", "sleep_risk", "both_risks"]
GuidanceColor = Literal["green", "yellow", "red"]
EnergyPhase = Literal["absorbing", "peak", "sustained", "declining"]


class CaffeineStatus(BaseModel):
    """Snapshot of the caffeine state at ``computed_at``."""

    model_config = ConfigDict(frozen=True)

    current_level_mg: int = Field(..., ge=0, description="Caffeine currently in the system (mg)")
    peak_level_mg: int = Field(..., ge=0, description="Highest level reached today (mg)")
    daily_consumed_mg: float = Field(..., ge=0.0, description="Sum of today's doses (mg)")
    daily_limit_mg: float = Field(..., gt=0.0, description="User's daily limit (mg)")
    daily_progress_pct: float = Field(..., ge=0.0, le=100.0, description="Share of the daily limit consumed")
    projected_at_bedtime_mg: int = Field(..., ge=0, description="Residual caffeine forecast at bedtime (mg)")
    bedtime_at: datetime.datetime = Field(..., description="Next bedtime strictly after computed_at")
    hours_to_bedtime: float = Field(..., ge=0.0)
    hours_to_next_safe_dose: float = Field(
        ..., ge=0.0,
        description="Hours until another typical dose no longer crosses the jitter ceiling",
    )
    is_safe_for_next_dose: bool
    sleep_risk: SleepRisk
    sleep_risk_message: str
    computed_at: datetime.datetime
    half_life_hours: float = Field(..., gt=0.0)


class GuidanceState(BaseModel):
    """Discrete guidance derived from a :class:`CaffeineStatus`."""

    model_config = ConfigDict(frozen=True)

    state: GuidanceLabel
    color: GuidanceColor
    jitter_risk: bool = Field(..., description="Short-term stacking axis active")
    sleep_risk: bool = Field(..., description="Bedtime residue axis active")
    is_safe_for_next_dose: bool = Field(
        ...,
        description="True unless the jitter axis is active (sleep risk informs messaging only)",
    )
    wait_time_hours: Optional[float] = Field(
        None, ge=0.0,
        description="Suggested wait before the next dose (None when state is safe)",
    )
    wait_time_label: Optional[str] = None
    headline: str
    message: str
    notes: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Decay curve helpers
# ---------------------------------------------------------------------------

class DecayMilestone(BaseModel):
    """A checkpoint on the decay curve of a single dose."""

    model_config = ConfigDict(frozen=True)

    label: str
    hours: float
    remaining_mg: int


class PeakEnergyInfo(BaseModel):
    """Where a single dose sits on its absorption / decay timeline."""

    model_config = ConfigDict(frozen=True)

    peak_at: datetime.datetime
    minutes_to_peak: int = Field(..., description="Negative once the peak has passed")
    is_past_peak: bool
    phase: EnergyPhase
    phase_description: str


class EnergyCurvePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    at: datetime.datetime
    level_mg: int


class SleepVerdict(BaseModel):
    """Verdict for a prospective drink: what it leaves at bedtime."""

    model_config = ConfigDict(frozen=True)

    code: GuidanceColor
    headline: str
    detail: str
    suggestion: str
    remaining_mg: int


# ---------------------------------------------------------------------------
# API schemas
# ---------------------------------------------------------------------------

class StatusGuidanceResponse(BaseModel):
    status: CaffeineStatus
    guidance: GuidanceState


class DecayResponse(BaseModel):
    """Decay preview of a single (possibly prospective) dose."""

    caffeine_mg: float
    half_life_hours: float
    milestones: list[DecayMilestone]
    curve: list[EnergyCurvePoint]
    peak_energy: PeakEnergyInfo
    verdict: SleepVerdict
