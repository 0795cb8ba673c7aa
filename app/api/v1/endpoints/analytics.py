"""
Analytics endpoints — caffeine status, guidance, patterns, and profile.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_caffeine_service, get_now
from app.schemas.caffeine import CaffeineStatus, DecayResponse, StatusGuidanceResponse
from app.schemas.pattern import ConsumptionPattern, EnergyPrediction, LogStats, WeeklyInsight
from app.schemas.profile import ProfileResponse, SensitivityResult
from app.services.caffeine_service import CaffeineService

router = APIRouter()


@router.get(
    "/status",
    summary="Get the current caffeine status (level, peak, bedtime projection).",
    response_model=CaffeineStatus,
)
def get_status(
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.status(now)


@router.get(
    "/guidance",
    summary="Get status plus next-dose guidance (jitter and sleep axes).",
    response_model=StatusGuidanceResponse,
)
def get_guidance(
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.status_and_guidance(now)


@router.get(
    "/patterns",
    summary="Get rolling-window consumption patterns.",
    response_model=ConsumptionPattern,
)
def get_patterns(
    window_days: Optional[int] = Query(
        None, ge=1, le=365, description="Window length in days (defaults to 30)"
    ),
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.patterns(now, window_days)


@router.get(
    "/insights",
    summary="Get weekly insights.",
    response_model=list[WeeklyInsight],
)
def get_insights(
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.insights(now)


@router.get(
    "/energy",
    summary="Forecast caffeine level and energy for the next six hours.",
    response_model=list[EnergyPrediction],
)
def get_energy_forecast(
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.energy_forecast(now)


@router.get(
    "/recommendations",
    summary="Get up to three personalized tips for right now.",
    response_model=list[str],
)
def get_recommendations(
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.recommendations(now)


@router.get(
    "/stats",
    summary="Get today / 7-day / 30-day log statistics.",
    response_model=LogStats,
)
def get_stats(
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.stats(now)


@router.get(
    "/profile",
    summary="Get the caffeine profile (personality, badges, sensitivity).",
    response_model=ProfileResponse,
)
def get_profile(
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.profile(now)


@router.get(
    "/sensitivity",
    summary="Get the caffeine sensitivity inferred from sleep check-ins.",
    response_model=SensitivityResult,
)
def get_sensitivity(service: CaffeineService = Depends(get_caffeine_service)):
    return service.sensitivity()


@router.get(
    "/decay",
    summary="Preview how a single dose decays and what it leaves at bedtime.",
    response_model=DecayResponse,
)
def get_decay(
    caffeine_mg: float = Query(..., ge=0, le=2000, description="Dose size (mg)"),
    consumed_at: Optional[datetime.datetime] = Query(
        None, description="When the dose is/was taken (defaults to now)"
    ),
    now: datetime.datetime = Depends(get_now),
    service: CaffeineService = Depends(get_caffeine_service),
):
    return service.decay_preview(caffeine_mg, now, consumed_at)
