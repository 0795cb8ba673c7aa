"""
Sleep check-in schemas.

One check-in per local calendar date.  The caffeine context of the previous
day (``yesterday_caffeine_mg``, ``yesterday_last_coffee_hour``) is captured
at submission time so later edits of the event log do not rewrite history.
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SleepQuality = Literal["poor", "ok", "great"]


class SleepCheckin(BaseModel):
    """Read-only check-in as seen by the kinetics engine."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Local calendar date of the check-in")
    quality: SleepQuality
    yesterday_caffeine_mg: float = Field(0.0, ge=0.0)
    yesterday_last_coffee_hour: int = Field(0, ge=0, le=23)
    recorded_at: Optional[datetime.datetime] = None


class YesterdaySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_mg: float = 0.0
    last_hour: int = Field(0, ge=0, le=23)
    count: int = 0


# ---------------------------------------------------------------------------
# API schemas
# ---------------------------------------------------------------------------

class SleepCheckinCreate(BaseModel):
    quality: SleepQuality


class SleepCheckinResponse(BaseModel):
    id: int
    date: datetime.date
    quality: SleepQuality
    yesterday_caffeine_mg: float
    yesterday_last_coffee_hour: int
    recorded_at: datetime.datetime

    class Config:
        from_attributes = True


class CheckinPromptResponse(BaseModel):
    should_prompt: bool
    yesterday: YesterdaySummary
