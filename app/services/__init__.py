"""Business logic services."""

from app.services.consumption_service import ConsumptionService
from app.services.sleep_checkin_service import SleepCheckinService
from app.services.preferences_service import PreferencesService
from app.services.caffeine_service import CaffeineService

__all__ = [
    "ConsumptionService",
    "SleepCheckinService",
    "PreferencesService",
    "CaffeineService",
]
