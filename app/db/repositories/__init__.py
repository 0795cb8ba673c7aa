"""Database repositories."""

from app.db.repositories.consumption_event import ConsumptionEventRepository
from app.db.repositories.sleep_checkin import SleepCheckinRepository
from app.db.repositories.user_preferences import UserPreferencesRepository

__all__ = [
    "ConsumptionEventRepository",
    "SleepCheckinRepository",
    "UserPreferencesRepository",
]
