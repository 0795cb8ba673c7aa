"""
User preferences service.

Creates the preferences row from settings defaults on first access and
provides the user's local "now" for every engine computation.
"""

import datetime
import logging
from typing import Iterable
from zoneinfo import ZoneInfo

from sqlmodel import Session

from app.core.config import settings
from app.db.repositories.user_preferences import UserPreferencesRepository
from app.kinetics.clock import parse_hhmm
from app.models.user_preferences import UserPreferences
from app.schemas.preferences import PreferencesResponse, PreferencesUpdate

logger = logging.getLogger(__name__)


class PreferencesService:
    """Service for user preferences."""

    def __init__(self, session: Session):
        self.repository = UserPreferencesRepository(session)

    def get(self) -> UserPreferences:
        defaults = UserPreferences(
            bedtime=parse_hhmm(settings.DEFAULT_BEDTIME),
            daily_limit_mg=settings.DEFAULT_DAILY_LIMIT_MG,
            timezone=settings.DEFAULT_TIMEZONE,
        )
        return self.repository.get_or_create(defaults)

    def get_response(self) -> PreferencesResponse:
        return PreferencesResponse.model_validate(self.get())

    def update(self, data: PreferencesUpdate) -> PreferencesResponse:
        preferences = self.get()
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in changes.items():
            setattr(preferences, key, value)
        preferences.updated_at = datetime.datetime.utcnow()
        preferences = self.repository.update(preferences)
        if changes:
            logger.info("Preferences updated: %s", ", ".join(sorted(changes)))
        return PreferencesResponse.model_validate(preferences)

    def now(self) -> datetime.datetime:
        """Current instant in the user's timezone."""
        return datetime.datetime.now(ZoneInfo(self.get().timezone))

    def localize(self, moment: datetime.datetime) -> datetime.datetime:
        """Express a caller-supplied instant in the user's timezone.

        Naive values are taken as already local.
        """
        zone = ZoneInfo(self.get().timezone)
        if moment.tzinfo is None:
            return moment.replace(tzinfo=zone)
        return moment.astimezone(zone)

    def mark_badges_seen(self, badge_ids: Iterable[str]) -> None:
        preferences = self.get()
        seen = list(preferences.seen_badge_ids or [])
        added = [b for b in badge_ids if b not in seen]
        if not added:
            return
        # Reassign so the JSON column is flagged dirty
        preferences.seen_badge_ids = seen + added
        preferences.updated_at = datetime.datetime.utcnow()
        self.repository.update(preferences)
        logger.info("Badges announced: %s", ", ".join(added))
