"""
Consumption event service.

Business logic for logging, editing and deleting doses, and for handing
stored events to the kinetics engine as read-only value objects.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.consumption_event import ConsumptionEventRepository
from app.models.consumption_event import ConsumptionEvent
from app.schemas.consumption import (
    CUSTOM_SUBSTANCE_PREFIX,
    ConsumptionEvent as EngineEvent,
    ConsumptionEventCreate,
    ConsumptionEventResponse,
    ConsumptionEventUpdate,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def to_engine_event(row: ConsumptionEvent) -> EngineEvent:
    """Map a stored row to the engine's immutable event."""
    return EngineEvent(
        id=str(row.id),
        substance_id=row.substance_id,
        display_name=row.display_name,
        caffeine_mg=row.caffeine_mg,
        consumed_at=row.consumed_at,
        logged_at=row.logged_at,
    )


class ConsumptionService:
    """Service for consumption event business logic."""

    def __init__(self, session: Session):
        self.repository = ConsumptionEventRepository(session)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, data: ConsumptionEventCreate) -> ConsumptionEventResponse:
        now = _utcnow()
        event = ConsumptionEvent(
            substance_id=data.substance_id,
            display_name=data.display_name,
            caffeine_mg=data.caffeine_mg,
            consumed_at=data.consumed_at or now,
            logged_at=now,
            updated_at=now,
        )
        event = self.repository.create(event)
        logger.info("Logged %s (%.0f mg) at %s", event.substance_id, event.caffeine_mg, event.consumed_at)
        return self._to_response(event)

    def get_by_id(self, event_id: int) -> ConsumptionEventResponse:
        return self._to_response(self._get_event(event_id))

    def get_latest(self, skip: int = 0, limit: int = 100) -> list[ConsumptionEventResponse]:
        return [self._to_response(e) for e in self.repository.get_latest(skip, limit)]

    def get_range(
        self, start: datetime.datetime, end: Optional[datetime.datetime] = None,
    ) -> list[ConsumptionEventResponse]:
        return [self._to_response(e) for e in self.repository.get_in_range(start, end)]

    def update(self, event_id: int, data: ConsumptionEventUpdate) -> ConsumptionEventResponse:
        """Replace the ``caffeine_mg`` / ``consumed_at`` pair of a dose."""
        event = self._get_event(event_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Nothing to update: provide caffeine_mg and/or consumed_at",
            )
        for key, value in changes.items():
            setattr(event, key, value)
        event.updated_at = _utcnow()
        event = self.repository.update(event)
        logger.info("Updated event %s: %s", event_id, ", ".join(sorted(changes)))
        return self._to_response(event)

    def delete(self, event_id: int) -> None:
        self._get_event(event_id)
        self.repository.delete(event_id)
        logger.info("Deleted event %s", event_id)

    # ------------------------------------------------------------------
    # Engine snapshots
    # ------------------------------------------------------------------

    def events_since(self, start: datetime.datetime) -> list[EngineEvent]:
        return [to_engine_event(e) for e in self.repository.get_in_range(start)]

    def all_events(self) -> list[EngineEvent]:
        return [to_engine_event(e) for e in self.repository.get_all()]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _get_event(self, event_id: int) -> ConsumptionEvent:
        event = self.repository.get_by_id(event_id)
        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Consumption event {event_id} not found",
            )
        return event

    @staticmethod
    def _to_response(event: ConsumptionEvent) -> ConsumptionEventResponse:
        return ConsumptionEventResponse(
            id=event.id,
            substance_id=event.substance_id,
            display_name=event.display_name,
            caffeine_mg=event.caffeine_mg,
            consumed_at=event.consumed_at,
            logged_at=event.logged_at,
            is_custom=event.substance_id.startswith(CUSTOM_SUBSTANCE_PREFIX),
        )
