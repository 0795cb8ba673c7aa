"""
Unit tests for the decay model.

Tests single-dose exponential decay, the inverse (time to reach a level),
milestones, the peak-energy phase and the single-dose energy curve.
"""

import datetime
import math

import pytest

from app.kinetics.decay import (
    PEAK_MINUTES,
    energy_curve,
    hours_to_reach,
    milestones,
    peak_energy,
    remaining,
    round_half_up,
    safe_mg,
)

T0 = datetime.datetime(2026, 10, 19, 10, 0)


# ======================================================================
# round_half_up / safe_mg
# ======================================================================


class TestRounding:

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.49, 2),
        (151.57, 152),
        (0.0, 0),
    ])
    def test_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestSafeMg:

    @pytest.mark.parametrize("raw", [None, -1.0, 0.0, float("nan"), float("inf"), float("-inf"), "abc"])
    def test_unusable_amounts_become_zero(self, raw):
        assert safe_mg(raw) == 0.0

    def test_positive_amount_kept(self):
        assert safe_mg(95.5) == 95.5


# ======================================================================
# remaining
# ======================================================================


class TestRemaining:
    """Test single-dose decay."""

    @pytest.mark.parametrize("mg", [0.0, 1.0, 63.0, 95.5, 200.0, 1000.0])
    @pytest.mark.parametrize("half_life", [1.0, 5.0, 9.5])
    def test_no_elapsed_time_returns_dose(self, mg, half_life):
        assert remaining(mg, 0, half_life) == mg

    @pytest.mark.parametrize("elapsed,expected", [
        (5, 100),
        (10, 50),
        (15, 25),
    ])
    def test_half_life_multiples(self, elapsed, expected):
        assert remaining(200, elapsed, 5) == expected

    @pytest.mark.parametrize("mg", [95, 150, 201])
    def test_one_half_life_halves(self, mg):
        assert remaining(mg, 5, 5) == round_half_up(mg / 2)

    def test_partial_half_life(self):
        """2h at a 5h half-life: 200 × 0.5^0.4 ≈ 151.6 → 152."""
        assert remaining(200, 2, 5) == 152

    def test_monotonically_non_increasing(self):
        values = [remaining(250, t / 4, 5) for t in range(0, 200)]
        assert all(a >= b for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("elapsed", [0, 1, 5, 100])
    def test_zero_dose(self, elapsed):
        assert remaining(0, elapsed, 5) == 0

    @pytest.mark.parametrize("mg", [-100, float("nan"), float("inf")])
    def test_malformed_dose_is_zero(self, mg):
        assert remaining(mg, 3, 5) == 0

    def test_negative_elapsed_does_not_grow(self):
        assert remaining(120, -2, 5) == 120

    def test_infinite_elapsed_fully_decayed(self):
        assert remaining(120, float("inf"), 5) == 0

    def test_never_negative(self):
        assert remaining(1, 1000, 5) == 0

    @pytest.mark.parametrize("mg,elapsed,expected", [
        (95.5, 0, 95.5),
        (200, 8, 66.0),
        (0, 3, 0.0),
    ])
    def test_always_float(self, mg, elapsed, expected):
        value = remaining(mg, elapsed, 5)
        assert type(value) is float
        assert value == expected


# ======================================================================
# hours_to_reach
# ======================================================================


class TestHoursToReach:

    def test_two_half_lives(self):
        assert hours_to_reach(200, 50, 5) == pytest.approx(10.0)

    def test_already_below_target(self):
        assert hours_to_reach(100, 200, 5) == 0.0

    def test_at_target(self):
        assert hours_to_reach(205, 205, 5) == 0.0

    def test_non_positive_target_uses_one_mg(self):
        assert hours_to_reach(200, 0, 5) == pytest.approx(5 * math.log2(200))

    def test_inverse_of_remaining(self):
        hours = hours_to_reach(300, 205, 5)
        assert remaining(300, hours, 5) == 205


# ======================================================================
# milestones / peak energy / curve
# ======================================================================


class TestMilestones:

    def test_half_and_quarter_life(self):
        half, quarter = milestones(200, 5)
        assert (half.label, half.hours, half.remaining_mg) == ("Half-life", 5, 100)
        assert (quarter.label, quarter.hours, quarter.remaining_mg) == ("Quarter-life", 10, 50)


class TestPeakEnergy:

    @pytest.mark.parametrize("minutes_after,phase,past_peak", [
        (5, "absorbing", False),
        (30, "peak", False),
        (PEAK_MINUTES, "peak", True),
        (120, "sustained", True),
        (240, "declining", True),
    ])
    def test_phases(self, minutes_after, phase, past_peak):
        info = peak_energy(T0, T0 + datetime.timedelta(minutes=minutes_after))
        assert info.phase == phase
        assert info.is_past_peak is past_peak

    def test_peak_time_and_countdown(self):
        info = peak_energy(T0, T0 + datetime.timedelta(minutes=5))
        assert info.peak_at == T0 + datetime.timedelta(minutes=PEAK_MINUTES)
        assert info.minutes_to_peak == 40


class TestEnergyCurve:

    def test_shape(self):
        points = energy_curve(200, T0, 5)
        assert len(points) == 17
        assert points[0].at == T0
        assert points[0].level_mg == 0
        assert points[-1].at == T0 + datetime.timedelta(hours=8)
        # Rising during absorption, then decaying
        assert points[1].level_mg > points[0].level_mg
        levels = [p.level_mg for p in points[2:]]
        assert all(a >= b for a, b in zip(levels, levels[1:]))

    def test_malformed_dose_is_flat_zero(self):
        assert all(p.level_mg == 0 for p in energy_curve(-10, T0))
