"""
Caffeine profile schemas — personality, badges, sensitivity.

The profile is *gated*: it is only considered unlocked once the user has
logged on at least 7 distinct local calendar dates (not necessarily
consecutive).

Badges carry an ``earned`` flag that is recomputed from scratch on every
evaluation.  It is not authoritative storage: the caller keeps its own set
of previously-seen badge ids and diffs against it to fire one-time
notifications.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PersonalityTag = Literal["early-bird", "power-drinker", "night-owl", "weekend-warrior", "steady-sipper"]
BadgeId = Literal[
    "power-caffeinator",
    "sleep-guardian",
    "morning-ritual",
    "streak-master",
    "mindful-sipper",
    "custom-blend",
]
SensitivityLevel = Literal["low", "moderate", "high", "unknown"]
SensitivityOverride = Literal["auto", "low", "moderate", "high"]
TimingPattern = Literal["early-bird", "steady-sipper", "afternoon-booster", "unknown"]
ConsumptionLevel = Literal["light", "moderate", "heavy", "unknown"]


class PersonalityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: PersonalityTag
    name: str
    description: str
    traits: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class Badge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: BadgeId
    name: str
    description: str
    icon: str
    earned: bool


class SensitivityResult(BaseModel):
    """Sensitivity tag plus the statistically computed value.

    When the user set an explicit preference, ``level`` / ``description``
    reflect it and ``is_override`` is true; ``computed_level`` always holds
    the value inferred from sleep check-ins.
    """

    model_config = ConfigDict(frozen=True)

    level: SensitivityLevel
    description: str
    computed_level: SensitivityLevel
    computed_description: str
    is_override: bool = False
    checkins_needed: int = Field(0, ge=0, description="Check-ins still missing before inference is possible")


class CaffeineProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    sensitivity: SensitivityResult
    timing_pattern: TimingPattern
    timing_description: str
    consumption_level: ConsumptionLevel
    consumption_description: str
    personality: PersonalityResult
    badges: list[Badge]
    days_tracked: int = Field(..., ge=0)
    is_unlocked: bool

    @property
    def sensitivity_level(self) -> SensitivityLevel:
        return self.sensitivity.level


class ProfileResponse(BaseModel):
    """Profile plus the badges that became earned since the last evaluation."""

    profile: CaffeineProfile
    newly_earned: list[Badge] = Field(default_factory=list)
