"""
Sleep check-in repository.

Handles database operations for the SleepCheckin model.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.sleep_checkin import SleepCheckin


class SleepCheckinRepository:
    """Repository for SleepCheckin database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, checkin: SleepCheckin) -> SleepCheckin:
        self.session.add(checkin)
        self.session.commit()
        self.session.refresh(checkin)
        return checkin

    def get_by_id(self, checkin_id: int) -> Optional[SleepCheckin]:
        return self.session.get(SleepCheckin, checkin_id)

    def get_by_date(self, date: datetime.date) -> Optional[SleepCheckin]:
        statement = select(SleepCheckin).where(SleepCheckin.date == date)
        return self.session.exec(statement).first()

    def get_all(self) -> list[SleepCheckin]:
        statement = select(SleepCheckin).order_by(SleepCheckin.date)
        return list(self.session.exec(statement).all())

    def get_latest(self, limit: int = 14) -> list[SleepCheckin]:
        """Most recent check-ins, ordered by date descending."""
        statement = (
            select(SleepCheckin)
            .order_by(SleepCheckin.date.desc())
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def update(self, checkin: SleepCheckin) -> SleepCheckin:
        self.session.add(checkin)
        self.session.commit()
        self.session.refresh(checkin)
        return checkin

    def delete(self, checkin_id: int) -> bool:
        checkin = self.get_by_id(checkin_id)
        if checkin:
            self.session.delete(checkin)
            self.session.commit()
            return True
        return False
