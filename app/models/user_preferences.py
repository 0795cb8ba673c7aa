"""
User preferences model.

Single-row table holding the bedtime, daily limit, sensitivity override
and timezone, plus the set of badge ids the user has already been
notified about.
"""

import datetime
from typing import Optional

from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSON
from sqlmodel import Field, SQLModel


class UserPreferences(SQLModel, table=True):
    """User preferences.

    One row for the whole installation; the
    :class:`PreferencesService` creates it with defaults on first read.
    """

    __tablename__ = "user_preferences"

    id: Optional[int] = Field(default=None, primary_key=True)

    bedtime: datetime.time = Field(default=datetime.time(23, 0), nullable=False)
    daily_limit_mg: float = Field(default=400.0, nullable=False)

    # "auto" uses the value inferred from sleep check-ins
    sensitivity: str = Field(default="auto", max_length=10, nullable=False)
    timezone: str = Field(default="UTC", max_length=64, nullable=False)

    # Badge ids already announced (diffed against each evaluation)
    seen_badge_ids: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False), )

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
