"""
Consumption event repository.

Handles database operations for the ConsumptionEvent model.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.consumption_event import ConsumptionEvent


class ConsumptionEventRepository:
    """Repository for ConsumptionEvent database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, event: ConsumptionEvent) -> ConsumptionEvent:
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        return event

    def get_by_id(self, event_id: int) -> Optional[ConsumptionEvent]:
        return self.session.get(ConsumptionEvent, event_id)

    def get_in_range(
        self, start: datetime.datetime, end: Optional[datetime.datetime] = None,
    ) -> list[ConsumptionEvent]:
        """Events consumed at or after ``start`` (and at or before ``end``)."""
        statement = select(ConsumptionEvent).where(ConsumptionEvent.consumed_at >= start)
        if end is not None:
            statement = statement.where(ConsumptionEvent.consumed_at <= end)
        statement = statement.order_by(ConsumptionEvent.consumed_at)
        return list(self.session.exec(statement).all())

    def get_latest(self, skip: int = 0, limit: int = 100) -> list[ConsumptionEvent]:
        """Most recent events first, with pagination."""
        statement = (
            select(ConsumptionEvent)
            .order_by(ConsumptionEvent.consumed_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def get_all(self) -> list[ConsumptionEvent]:
        statement = select(ConsumptionEvent).order_by(ConsumptionEvent.consumed_at)
        return list(self.session.exec(statement).all())

    def update(self, event: ConsumptionEvent) -> ConsumptionEvent:
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        return event

    def delete(self, event_id: int) -> bool:
        event = self.get_by_id(event_id)
        if event:
            self.session.delete(event)
            self.session.commit()
            return True
        return False
