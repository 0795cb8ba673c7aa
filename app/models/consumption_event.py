"""
Consumption event database model.

Defines the consumption_events table: one row per logged drink.
"""

import datetime
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class ConsumptionEvent(SQLModel, table=True):
    """
    A single logged dose.

    ``substance_id`` references a catalog drink, or starts with
    ``custom_`` for a manually entered one.  ``consumed_at`` is stored
    timezone-aware so local-day grouping follows the user's timezone.
    """
    __tablename__ = "consumption_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    substance_id: str = Field(nullable=False, max_length=100, index=True)
    display_name: str = Field(default="", max_length=255)
    caffeine_mg: float = Field(nullable=False, ge=0)

    consumed_at: datetime.datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )

    # Timestamps
    logged_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime.datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
