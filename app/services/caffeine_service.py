"""
Caffeine analytics service.

Loads a snapshot (events, check-ins, preferences), runs the kinetics
engine and returns its value objects.  The only state written here is the
set of announced badge ids used to report newly earned badges once.

Thresholds come from settings and are tightened or relaxed by the user's
effective sensitivity (explicit override, or inferred from check-ins).
"""

import datetime
import logging
from typing import Optional

from sqlmodel import Session

from app.core.config import settings
from app.kinetics.clock import hours_between, next_bedtime
from app.kinetics.config import KineticsConfig, config_for_sensitivity
from app.kinetics.decay import energy_curve, milestones, peak_energy
from app.kinetics.guidance import compute_guidance, sleep_verdict
from app.kinetics.patterns import (
    analyze_patterns,
    generate_weekly_insights,
    personalized_recommendations,
    predict_energy,
)
from app.kinetics.profile import compute_profile, newly_earned_badges
from app.kinetics.sensitivity import infer_sensitivity
from app.kinetics.stats import MONTH_DAYS, compute_log_stats
from app.kinetics.status import compute_status
from app.schemas.caffeine import CaffeineStatus, DecayResponse, StatusGuidanceResponse
from app.schemas.consumption import ConsumptionEvent
from app.schemas.pattern import ConsumptionPattern, EnergyPrediction, LogStats, WeeklyInsight
from app.schemas.profile import ProfileResponse, SensitivityResult
from app.services.consumption_service import ConsumptionService
from app.services.preferences_service import PreferencesService
from app.services.sleep_checkin_service import SleepCheckinService

logger = logging.getLogger(__name__)


class CaffeineService:
    """Service running the kinetics engine over stored data."""

    def __init__(self, session: Session):
        self.consumption = ConsumptionService(session)
        self.checkins = SleepCheckinService(session)
        self.preferences = PreferencesService(session)

    # ------------------------------------------------------------------
    # Snapshot helpers
    # ------------------------------------------------------------------

    def resolve_now(self, as_of: Optional[datetime.datetime] = None) -> datetime.datetime:
        """``as_of`` in the user's timezone, or the current instant."""
        if as_of is None:
            return self.preferences.now()
        return self.preferences.localize(as_of)

    def sensitivity(self) -> SensitivityResult:
        prefs = self.preferences.get()
        return infer_sensitivity(self.checkins.engine_checkins(), prefs.sensitivity)

    def kinetics_config(self) -> KineticsConfig:
        """Settings thresholds adjusted to the effective sensitivity tier."""
        return config_for_sensitivity(self.sensitivity().level, settings.kinetics_config())

    def _events_for_window(self, now: datetime.datetime, days: float) -> list[ConsumptionEvent]:
        return self.consumption.events_since(now - datetime.timedelta(days=days))

    # ------------------------------------------------------------------
    # Real-time path
    # ------------------------------------------------------------------

    def status(self, now: datetime.datetime) -> CaffeineStatus:
        prefs = self.preferences.get()
        cfg = self.kinetics_config()
        # Whole of yesterday is needed for the start-of-day residue.
        lookback_days = max(cfg.status_lookback_hours / 24.0, 2.0)
        events = self._events_for_window(now, lookback_days)
        return compute_status(events, now, prefs.bedtime, prefs.daily_limit_mg, config=cfg)

    def status_and_guidance(self, now: datetime.datetime) -> StatusGuidanceResponse:
        cfg = self.kinetics_config()
        status = self.status(now)
        return StatusGuidanceResponse(status=status, guidance=compute_guidance(status, config=cfg))

    # ------------------------------------------------------------------
    # Longitudinal path
    # ------------------------------------------------------------------

    def patterns(self, now: datetime.datetime, window_days: Optional[int] = None) -> ConsumptionPattern:
        cfg = self.kinetics_config()
        days = window_days or cfg.pattern_window_days
        return analyze_patterns(self._events_for_window(now, days), now, window_days=days, config=cfg)

    def insights(self, now: datetime.datetime) -> list[WeeklyInsight]:
        prefs = self.preferences.get()
        events = self._events_for_window(now, 8)
        return generate_weekly_insights(events, now, prefs.bedtime, config=self.kinetics_config())

    def energy_forecast(self, now: datetime.datetime) -> list[EnergyPrediction]:
        cfg = self.kinetics_config()
        lookback_days = max(cfg.status_lookback_hours / 24.0, 2.0)
        return predict_energy(self._events_for_window(now, lookback_days), now, config=cfg)

    def recommendations(self, now: datetime.datetime) -> list[str]:
        """Tips for right now, from the pattern window and the live level."""
        prefs = self.preferences.get()
        cfg = self.kinetics_config()
        events = self._events_for_window(now, cfg.pattern_window_days)
        current = self.status(now).current_level_mg
        return personalized_recommendations(events, now, current, prefs.bedtime, config=cfg)

    def stats(self, now: datetime.datetime) -> LogStats:
        return compute_log_stats(self._events_for_window(now, MONTH_DAYS + 1), now)

    def profile(self, now: datetime.datetime) -> ProfileResponse:
        """Full profile plus the badges earned since the last call.

        Newly earned badge ids are persisted so each one is reported once.
        """
        prefs = self.preferences.get()
        cfg = self.kinetics_config()
        events = self.consumption.all_events()
        checkins = self.checkins.engine_checkins()

        profile = compute_profile(
            checkins,
            events,
            compute_log_stats(events, now),
            analyze_patterns(events, now, config=cfg),
            now,
            sensitivity_override=prefs.sensitivity,
            config=cfg,
        )
        newly_earned = newly_earned_badges(profile.badges, prefs.seen_badge_ids or [])
        if newly_earned:
            self.preferences.mark_badges_seen(b.id for b in newly_earned)
        return ProfileResponse(profile=profile, newly_earned=newly_earned)

    # ------------------------------------------------------------------
    # Single-dose preview
    # ------------------------------------------------------------------

    def decay_preview(
        self, caffeine_mg: float, now: datetime.datetime,
        consumed_at: Optional[datetime.datetime] = None,
    ) -> DecayResponse:
        prefs = self.preferences.get()
        cfg = self.kinetics_config()
        consumed = self.preferences.localize(consumed_at) if consumed_at else now
        hours_until_bed = hours_between(consumed, next_bedtime(consumed, prefs.bedtime))
        return DecayResponse(
            caffeine_mg=caffeine_mg,
            half_life_hours=cfg.half_life_hours,
            milestones=milestones(caffeine_mg, cfg.half_life_hours),
            curve=energy_curve(caffeine_mg, consumed, cfg.half_life_hours),
            peak_energy=peak_energy(consumed, now),
            verdict=sleep_verdict(caffeine_mg, hours_until_bed, config=cfg),
        )
