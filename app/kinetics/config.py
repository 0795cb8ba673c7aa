"""
Kinetics configuration — every threshold the engine uses, in one struct.

Nothing in the engine reads a module-level threshold directly: each
computation takes an optional :class:`KineticsConfig` and falls back to
``DEFAULT_CONFIG``.  This keeps thresholds independently testable and
swappable per sensitivity tier.

Calibration reference (single 95 mg cup, 5h half-life):
    after 5h  → 48 mg
    after 10h → 24 mg
so a cup finished ~10h before bed lands under the 50 mg ``sleep_safe_mg``
line, and one finished ~5h before bed lands in the ``medium`` band.

Misordered thresholds are programmer errors and fail at construction time
(``pydantic.ValidationError``), never at computation time.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Per-sensitivity-tier multipliers on the configured sleep and jitter
# thresholds.  ``moderate`` is the configured baseline; with the defaults
# ``low`` gives 75/150/400 mg and ``high`` gives 25/50/200 mg.
_SENSITIVITY_SCALES: dict[str, dict[str, float]] = {
    "low": {"sleep_safe_mg": 1.5, "sleep_caution_mg": 1.5, "jitter_threshold_mg": 4 / 3},
    "moderate": {"sleep_safe_mg": 1.0, "sleep_caution_mg": 1.0, "jitter_threshold_mg": 1.0},
    "high": {"sleep_safe_mg": 0.5, "sleep_caution_mg": 0.5, "jitter_threshold_mg": 2 / 3},
}


class KineticsConfig(BaseModel):
    """Thresholds and windows for the kinetics engine."""

    model_config = ConfigDict(frozen=True)

    half_life_hours: float = Field(5.0, gt=0.0, le=24.0)

    # Sleep axis: projected level at bedtime.
    sleep_safe_mg: float = Field(50.0, gt=0.0)
    sleep_caution_mg: float = Field(100.0, gt=0.0)

    # Jitter axis: short-term stacking ceiling, distinct from the daily limit.
    jitter_threshold_mg: float = Field(300.0, gt=0.0)
    next_dose_estimate_mg: float = Field(95.0, gt=0.0, description="A typical single serving")

    # Behavioural cutoffs (local hour of day).
    optimal_cutoff_hour: int = Field(14, ge=0, le=23)
    morning_cutoff_hour: int = Field(12, ge=0, le=23)

    # Windows.
    pattern_window_days: int = Field(30, ge=1, le=365)
    status_lookback_hours: float = Field(24.0, ge=24.0)

    @model_validator(mode="after")
    def check_ordering(self) -> "KineticsConfig":
        if self.sleep_safe_mg >= self.sleep_caution_mg:
            raise ValueError(
                f"sleep_safe_mg ({self.sleep_safe_mg}) must be below "
                f"sleep_caution_mg ({self.sleep_caution_mg})"
            )
        if self.next_dose_estimate_mg >= self.jitter_threshold_mg:
            raise ValueError(
                f"next_dose_estimate_mg ({self.next_dose_estimate_mg}) must be below "
                f"jitter_threshold_mg ({self.jitter_threshold_mg})"
            )
        return self

    @property
    def jitter_headroom_mg(self) -> float:
        """Level below which one more typical dose stays under the jitter ceiling."""
        return self.jitter_threshold_mg - self.next_dose_estimate_mg


# Singleton default config
DEFAULT_CONFIG = KineticsConfig()


def config_for_sensitivity(level: str, base: KineticsConfig | None = None) -> KineticsConfig:
    """Return ``base`` with its sleep/jitter thresholds scaled to a tier.

    ``moderate``, ``unknown`` and any unrecognised level keep ``base``
    unchanged.  Raises ``pydantic.ValidationError`` if the scaled
    thresholds are misordered; :func:`validate_sensitivity_tiers` runs that
    check for every tier at startup.
    """
    cfg = base or DEFAULT_CONFIG
    scale = _SENSITIVITY_SCALES.get(level)
    if scale is None:
        return cfg
    scaled = {field: getattr(cfg, field) * factor for field, factor in scale.items()}
    return KineticsConfig(**{**cfg.model_dump(), **scaled})


def validate_sensitivity_tiers(base: KineticsConfig) -> dict[str, KineticsConfig]:
    """Build the config of every sensitivity tier from ``base``.

    Raises ``pydantic.ValidationError`` if any tier's scaled thresholds are
    misordered.
    """
    return {level: config_for_sensitivity(level, base) for level in _SENSITIVITY_SCALES}
