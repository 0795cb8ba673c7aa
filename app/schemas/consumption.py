"""
Consumption event schemas.

A consumption event is one logged dose.  ``consumed_at`` is when the drink
was actually ingested and is distinct from ``logged_at`` (retroactive logs
are common).

:class:`ConsumptionEvent` is the read-only value object the kinetics engine
consumes.  It is permissive: a negative or non-finite
``caffeine_mg`` and a missing ``consumed_at`` are accepted here and
neutralised by the engine, so one bad record never blanks a dashboard.
The request schemas (``Create`` / ``Update``) are strict.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Catalog drinks use their catalog id; manually entered drinks are prefixed.
CUSTOM_SUBSTANCE_PREFIX = "custom_"


class ConsumptionEvent(BaseModel):
    """One logged dose, as seen by the kinetics engine."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique event identifier")
    substance_id: str = Field(..., description="Catalog drink id, or 'custom_*' for manual entries")
    display_name: str = Field("", description="Drink name for display")
    caffeine_mg: float = Field(0.0, description="Caffeine in the dose (mg)")
    consumed_at: Optional[datetime.datetime] = Field(
        None,
        description="When the dose was ingested (None if the stored timestamp was unparsable)",
    )
    logged_at: Optional[datetime.datetime] = Field(None, description="When the dose was logged")

    @property
    def is_custom(self) -> bool:
        return self.substance_id.startswith(CUSTOM_SUBSTANCE_PREFIX)


# ---------------------------------------------------------------------------
# API schemas
# ---------------------------------------------------------------------------

class ConsumptionEventCreate(BaseModel):
    """Schema for logging a dose."""

    substance_id: str = Field(
        ..., min_length=1, max_length=100,
        description="Catalog drink id, or 'custom_<slug>' for a manually entered drink",
    )
    display_name: str = Field(..., min_length=1, max_length=200)
    caffeine_mg: float = Field(..., ge=0.0, le=2000.0, description="Caffeine in the dose (mg)")
    consumed_at: Optional[datetime.datetime] = Field(
        None,
        description="When the dose was ingested (defaults to now)",
    )


class ConsumptionEventUpdate(BaseModel):
    """Schema for editing a dose.

    Only the ``caffeine_mg`` / ``consumed_at`` pair may change.
    """

    caffeine_mg: Optional[float] = Field(None, ge=0.0, le=2000.0)
    consumed_at: Optional[datetime.datetime] = None


class ConsumptionEventResponse(BaseModel):
    """Schema for a logged dose in API responses."""

    id: int
    substance_id: str
    display_name: str
    caffeine_mg: float
    consumed_at: datetime.datetime
    logged_at: datetime.datetime
    is_custom: bool

    class Config:
        from_attributes = True
