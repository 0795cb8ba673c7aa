"""
Longitudinal pattern schemas.

Everything here is derived from a rolling window of consumption events
(default 30 days) grouped by local calendar day.
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

InsightKind = Literal["positive", "warning", "neutral"]


class ConsumptionPattern(BaseModel):
    """Rolling-window consumption statistics."""

    model_config = ConfigDict(frozen=True)

    average_first_dose_hour: float = Field(..., ge=0.0, lt=24.0, description="Mean hour-of-day of the first dose")
    average_last_dose_hour: float = Field(..., ge=0.0, lt=24.0, description="Mean hour-of-day of the last dose")
    average_first_dose: str = Field(..., description="Mean first dose time (HH:MM)")
    average_last_dose: str = Field(..., description="Mean last dose time (HH:MM)")
    peak_hour: int = Field(..., ge=0, le=23, description="Hour with the highest mg-weighted intake")
    average_daily_mg: int = Field(..., ge=0, description="Mean total per tracked day (mg)")
    weekday_vs_weekend_diff_mg: int = Field(
        ...,
        description="Weekend minus weekday average daily mg (positive = more on weekends)",
    )
    optimal_timing_pct: int = Field(..., ge=0, le=100, description="Share of doses before the optimal cutoff hour")
    preferred_drinks: list[str] = Field(default_factory=list, description="Top 3 drinks by count")
    days_analyzed: int = Field(0, ge=0)
    sample_count: int = Field(0, ge=0)


class LogStats(BaseModel):
    """Rolling totals over today, the last 7 days and the last 30 days."""

    model_config = ConfigDict(frozen=True)

    total_mg_today: float = 0.0
    total_mg_week: float = 0.0
    total_mg_month: float = 0.0
    drinks_today: int = 0
    drinks_week: int = 0
    drinks_month: int = 0
    average_daily_mg: float = Field(0.0, description="7-day total / 7 (0 when the week is empty)")
    most_consumed_drink: Optional[str] = None
    peak_consumption_hour: int = Field(9, ge=0, le=23)
    last_consumed_at: Optional[datetime.datetime] = None
    tracking_streak_days: int = Field(0, ge=0, description="Consecutive logged days ending today")


class WeeklyInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    kind: InsightKind
    action: Optional[str] = None


class EnergyPrediction(BaseModel):
    """Projected caffeine level and energy score at a future hour."""

    model_config = ConfigDict(frozen=True)

    at: datetime.datetime
    level_mg: int = Field(..., ge=0, description="Projected caffeine in the system (mg)")
    energy_score: int = Field(..., ge=0, le=100, description="Level scaled to 0-100 (200 mg = 100)")
    confidence: float = Field(..., ge=0.0, le=1.0)
    recommendation: str
