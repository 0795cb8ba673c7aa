"""Pydantic schemas for request/response validation."""

from app.schemas.consumption import (
    ConsumptionEvent,
    ConsumptionEventCreate,
    ConsumptionEventUpdate,
    ConsumptionEventResponse,
)
from app.schemas.sleep_checkin import (
    SleepCheckin,
    SleepCheckinCreate,
    SleepCheckinResponse,
    CheckinPromptResponse,
    YesterdaySummary,
)
from app.schemas.caffeine import (
    CaffeineStatus,
    GuidanceState,
    SleepVerdict,
    StatusGuidanceResponse,
    DecayResponse,
)
from app.schemas.pattern import ConsumptionPattern, EnergyPrediction, LogStats, WeeklyInsight
from app.schemas.profile import (
    Badge,
    CaffeineProfile,
    PersonalityResult,
    ProfileResponse,
    SensitivityResult,
)
from app.schemas.preferences import PreferencesUpdate, PreferencesResponse

__all__ = [
    "ConsumptionEvent",
    "ConsumptionEventCreate",
    "ConsumptionEventUpdate",
    "ConsumptionEventResponse",
    "SleepCheckin",
    "SleepCheckinCreate",
    "SleepCheckinResponse",
    "CheckinPromptResponse",
    "YesterdaySummary",
    "CaffeineStatus",
    "GuidanceState",
    "SleepVerdict",
    "StatusGuidanceResponse",
    "DecayResponse",
    "ConsumptionPattern",
    "LogStats",
    "WeeklyInsight",
    "EnergyPrediction",
    "Badge",
    "CaffeineProfile",
    "PersonalityResult",
    "ProfileResponse",
    "SensitivityResult",
    "PreferencesUpdate",
    "PreferencesResponse",
]
