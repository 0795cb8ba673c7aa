"""SQLModel database models."""

from app.models.consumption_event import ConsumptionEvent
from app.models.sleep_checkin import SleepCheckin
from app.models.user_preferences import UserPreferences

__all__ = [
    "ConsumptionEvent",
    "SleepCheckin",
    "UserPreferences",
]
