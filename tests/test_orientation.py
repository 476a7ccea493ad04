"""Tests for the orientation transform and level classification.

This module tests the pure helpers and the OrientationState record.
"""

from __future__ import annotations

import math

import pytest

from clinometer.orientation import (
    LEVEL_TOLERANCE_RADIANS,
    OrientationState,
    derive_state,
    is_level,
    pitch_degrees_from_raw,
)
from clinometer.sensors.attitude_source import AttitudeSample


# ============================================================================
# Level Classification Tests
# ============================================================================


class TestIsLevel:
    """Tests for the is_level roll band."""

    def test_tolerance_constant(self) -> None:
        """Tolerance should be 0.4 radians."""
        assert LEVEL_TOLERANCE_RADIANS == 0.4

    def test_zero_roll_is_level(self) -> None:
        """Flat device should be level."""
        assert is_level(0.0) is True

    def test_upside_down_is_level(self) -> None:
        """Roll of pi (upside down) should be level."""
        assert is_level(math.pi) is True

    def test_boundary_is_not_level(self) -> None:
        """Exactly 0.4 is outside the strict band."""
        assert is_level(0.4) is False
        assert is_level(-0.4) is False

    def test_inside_band_near_zero(self) -> None:
        """Values just inside the band around 0 are level."""
        assert is_level(0.399) is True
        assert is_level(-0.399) is True

    def test_inside_band_near_pi(self) -> None:
        """Values just inside the band around pi are level."""
        assert is_level(math.pi - 0.399) is True
        assert is_level(math.pi + 0.399) is True

    def test_outside_band_near_pi(self) -> None:
        """Values outside the band around pi are not level."""
        assert is_level(math.pi - 0.41) is False
        assert is_level(math.pi + 0.41) is False

    def test_vertical_is_not_level(self) -> None:
        """Device on its side (roll pi/2) is not level."""
        assert is_level(math.pi / 2) is False

    def test_sweep_matches_definition(self) -> None:
        """Sweep [0, 2pi) and compare with the band definition."""
        steps = 2000
        for i in range(steps):
            r = 2 * math.pi * i / steps
            expected = abs(r) < 0.4 or abs(r - math.pi) < 0.4
            assert is_level(r) is expected, f"mismatch at r={r}"

    def test_near_two_pi_is_not_level(self) -> None:
        """Only 0 and pi are centers; 2pi - small is not level."""
        assert is_level(2 * math.pi - 0.1) is False

    def test_custom_tolerance(self) -> None:
        """A wider tolerance widens the band."""
        assert is_level(0.5, tolerance=0.6) is True


# ============================================================================
# Pitch Transform Tests
# ============================================================================


class TestPitchDegreesFromRaw:
    """Tests for the raw pitch correction."""

    def test_upright_is_zero(self) -> None:
        """Raw pi/2 maps to 0 degrees."""
        assert pitch_degrees_from_raw(math.pi / 2) == pytest.approx(0.0)

    def test_raw_zero_is_ninety(self) -> None:
        """Raw 0 maps to 90 degrees."""
        assert pitch_degrees_from_raw(0.0) == pytest.approx(90.0)

    def test_raw_pi_is_minus_ninety(self) -> None:
        """Raw pi maps to -90 degrees."""
        assert pitch_degrees_from_raw(math.pi) == pytest.approx(-90.0)

    def test_linear_slope(self) -> None:
        """One radian of raw pitch is -57.29... degrees."""
        a = pitch_degrees_from_raw(1.0)
        b = pitch_degrees_from_raw(2.0)
        assert b - a == pytest.approx(-180 / math.pi)

    def test_invertible(self) -> None:
        """The raw value can be recovered from the degrees."""
        raw = 0.73
        degrees = pitch_degrees_from_raw(raw)
        assert math.pi / 2 - math.radians(degrees) == pytest.approx(raw)


# ============================================================================
# OrientationState Tests
# ============================================================================


class TestOrientationState:
    """Tests for the OrientationState record."""

    def test_from_roll_pitch_level(self) -> None:
        """Factory derives is_level from roll."""
        state = OrientationState.from_roll_pitch(0.1, 12.0)
        assert state.is_level is True
        assert state.roll_radians == 0.1
        assert state.pitch_degrees == 12.0

    def test_from_roll_pitch_not_level(self) -> None:
        """Factory marks large roll as not level."""
        state = OrientationState.from_roll_pitch(1.0, 0.0)
        assert state.is_level is False

    def test_is_immutable(self) -> None:
        """OrientationState should be frozen."""
        state = OrientationState.from_roll_pitch(0.0, 0.0)
        with pytest.raises(AttributeError):
            state.is_level = False  # type: ignore

    def test_equality(self) -> None:
        """Two states from the same inputs are equal."""
        assert OrientationState.from_roll_pitch(0.2, 5.0) == OrientationState.from_roll_pitch(0.2, 5.0)


class TestDeriveState:
    """Tests for the per-sample transform."""

    def test_roll_passes_through(self) -> None:
        """Roll is not modified."""
        state = derive_state(AttitudeSample(roll_radians=0.25, raw_pitch_radians=math.pi / 2))
        assert state.roll_radians == 0.25

    def test_pitch_is_converted(self) -> None:
        """Pitch is converted to degrees from horizontal."""
        state = derive_state(AttitudeSample(roll_radians=0.0, raw_pitch_radians=0.0))
        assert state.pitch_degrees == pytest.approx(90.0)

    def test_level_follows_roll(self) -> None:
        """is_level agrees with is_level(roll) for a range of samples."""
        for roll in (-1.0, -0.39, 0.0, 0.4, 2.9, math.pi, 3.6):
            state = derive_state(AttitudeSample(roll_radians=roll, raw_pitch_radians=1.0))
            assert state.is_level is is_level(roll)
