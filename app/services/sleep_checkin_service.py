"""
Sleep check-in service.

Stores one check-in per local date together with the previous day's
caffeine context, and decides whether the morning prompt should show.
"""

import datetime
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.sleep_checkin import SleepCheckinRepository
from app.kinetics.checkin import needs_sleep_checkin, yesterday_summary
from app.kinetics.clock import start_of_local_day
from app.models.sleep_checkin import SleepCheckin
from app.schemas.sleep_checkin import (
    CheckinPromptResponse,
    SleepCheckin as EngineCheckin,
    SleepCheckinCreate,
    SleepCheckinResponse,
)
from app.services.consumption_service import ConsumptionService

logger = logging.getLogger(__name__)


def to_engine_checkin(row: SleepCheckin) -> EngineCheckin:
    return EngineCheckin(
        date=row.date,
        quality=row.quality,
        yesterday_caffeine_mg=row.yesterday_caffeine_mg,
        yesterday_last_coffee_hour=row.yesterday_last_coffee_hour,
        recorded_at=row.recorded_at,
    )


class SleepCheckinService:
    """Service for sleep check-in business logic."""

    def __init__(self, session: Session):
        self.repository = SleepCheckinRepository(session)
        self.consumption = ConsumptionService(session)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit(
        self, data: SleepCheckinCreate, now: datetime.datetime, replace: bool = True,
    ) -> tuple[SleepCheckinResponse, bool]:
        """Record today's check-in.

        Returns:
            Tuple of (response, created) where created is True if new entry.

        Raises:
            HTTPException 409 if today already has a check-in and
            ``replace`` is false.
        """
        today = now.date()
        summary = yesterday_summary(self._recent_events(now), now)
        existing = self.repository.get_by_date(today)

        if existing:
            if not replace:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"A sleep check-in for {today} already exists",
                )
            existing.quality = data.quality
            existing.yesterday_caffeine_mg = summary.total_mg
            existing.yesterday_last_coffee_hour = summary.last_hour
            existing.recorded_at = now
            checkin = self.repository.update(existing)
            logger.info("Replaced sleep check-in for %s (%s)", today, data.quality)
            return SleepCheckinResponse.model_validate(checkin), False

        checkin = SleepCheckin(
            date=today,
            quality=data.quality,
            yesterday_caffeine_mg=summary.total_mg,
            yesterday_last_coffee_hour=summary.last_hour,
            recorded_at=now,
        )
        checkin = self.repository.create(checkin)
        logger.info("Recorded sleep check-in for %s (%s)", today, data.quality)
        return SleepCheckinResponse.model_validate(checkin), True

    def get_all(self) -> list[SleepCheckinResponse]:
        return [SleepCheckinResponse.model_validate(c) for c in self.repository.get_all()]

    def get_by_date(self, date: datetime.date) -> SleepCheckinResponse:
        checkin = self.repository.get_by_date(date)
        if not checkin:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No sleep check-in for {date}",
            )
        return SleepCheckinResponse.model_validate(checkin)

    def delete(self, checkin_id: int) -> None:
        if not self.repository.delete(checkin_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Sleep check-in {checkin_id} not found",
            )
        logger.info("Deleted sleep check-in %s", checkin_id)

    def prompt(self, now: datetime.datetime) -> CheckinPromptResponse:
        events = self._recent_events(now)
        return CheckinPromptResponse(
            should_prompt=needs_sleep_checkin(events, self.engine_checkins(), now),
            yesterday=yesterday_summary(events, now),
        )

    # ------------------------------------------------------------------
    # Engine snapshots
    # ------------------------------------------------------------------

    def engine_checkins(self) -> list[EngineCheckin]:
        return [to_engine_checkin(c) for c in self.repository.get_all()]

    def _recent_events(self, now: datetime.datetime):
        """Events from the start of yesterday onward."""
        start = start_of_local_day(now) - datetime.timedelta(days=1)
        return self.consumption.events_since(start)
