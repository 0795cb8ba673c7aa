"""
Sleep check-in database model.

Defines the sleep_checkins table.  One check-in per local calendar date
(enforced by unique constraint).
"""

import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


class SleepCheckin(SQLModel, table=True):
    """
    Morning report of the previous night's sleep quality.

    The previous day's caffeine context is frozen at submission time.
    """
    __tablename__ = "sleep_checkins"
    __table_args__ = (
        UniqueConstraint("date", name="uq_sleep_checkin_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    date: datetime.date = Field(nullable=False, index=True)
    quality: str = Field(nullable=False, max_length=10)

    # Previous-day caffeine context
    yesterday_caffeine_mg: float = Field(default=0.0, nullable=False)
    yesterday_last_coffee_hour: int = Field(default=0, nullable=False)

    recorded_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
