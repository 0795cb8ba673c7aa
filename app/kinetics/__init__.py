"""Caffeine kinetics core — decay, status, guidance, patterns, profile."""

from app.kinetics.config import DEFAULT_CONFIG, KineticsConfig, config_for_sensitivity
from app.kinetics.decay import remaining
from app.kinetics.guidance import compute_guidance
from app.kinetics.patterns import analyze_patterns
from app.kinetics.profile import classify_personality, evaluate_badges
from app.kinetics.sensitivity import infer_sensitivity
from app.kinetics.status import compute_status

__all__ = [
    "DEFAULT_CONFIG",
    "KineticsConfig",
    "analyze_patterns",
    "classify_personality",
    "compute_guidance",
    "compute_status",
    "config_for_sensitivity",
    "evaluate_badges",
    "infer_sensitivity",
    "remaining",
]
