"""
User preference schemas.

Preferences feed the engine with the user's bedtime, daily limit and
sensitivity override.  ``timezone`` defines what a "local calendar day"
is for every windowed computation.
"""

import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from app.schemas.profile import SensitivityOverride


def _check_timezone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone: '{value}'")
    return value


class PreferencesUpdate(BaseModel):
    """Schema for updating preferences (all fields optional)."""

    bedtime: Optional[datetime.time] = Field(None, description="Bedtime (HH:MM, 24h)")
    daily_limit_mg: Optional[float] = Field(None, gt=0.0, le=2000.0)
    sensitivity: Optional[SensitivityOverride] = Field(
        None,
        description="'auto' infers sensitivity from sleep check-ins",
    )
    timezone: Optional[str] = Field(None, max_length=64, description="IANA timezone name")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        return _check_timezone(value)


class PreferencesResponse(BaseModel):
    bedtime: datetime.time
    daily_limit_mg: float
    sensitivity: SensitivityOverride
    timezone: str
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
