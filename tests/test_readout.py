"""Tests for the display text helpers."""

from __future__ import annotations

from clinometer.orientation import OrientationState, TrackerStatus
from clinometer.readout import (
    ALIGNED_TEXT,
    NOT_ALIGNED_TEXT,
    UNAVAILABLE_TEXT,
    WAITING_TEXT,
    LevelColor,
    alignment_text,
    height_text,
    level_color,
    pitch_text,
)

LEVEL = OrientationState.from_roll_pitch(0.0, 12.345)
TILTED = OrientationState.from_roll_pitch(1.0, -3.0)


class TestAlignmentText:
    """Tests for alignment_text."""

    def test_level(self) -> None:
        assert alignment_text(LEVEL, TrackerStatus.RUNNING) == ALIGNED_TEXT == "Aligned"

    def test_not_level(self) -> None:
        assert alignment_text(TILTED, TrackerStatus.RUNNING) == NOT_ALIGNED_TEXT == "Align the device"

    def test_unavailable_overrides_state(self) -> None:
        """Unavailable never reads as aligned."""
        assert alignment_text(LEVEL, TrackerStatus.UNAVAILABLE) == UNAVAILABLE_TEXT
        assert alignment_text(None, TrackerStatus.UNAVAILABLE) == UNAVAILABLE_TEXT

    def test_no_state_yet(self) -> None:
        assert alignment_text(None, TrackerStatus.RUNNING) == WAITING_TEXT


class TestLevelColor:
    """Tests for level_color."""

    def test_level_is_green(self) -> None:
        assert level_color(LEVEL, TrackerStatus.RUNNING) is LevelColor.LEVEL

    def test_tilted_is_red(self) -> None:
        assert level_color(TILTED, TrackerStatus.RUNNING) is LevelColor.NOT_LEVEL

    def test_unknown_without_state(self) -> None:
        assert level_color(None, TrackerStatus.IDLE) is LevelColor.UNKNOWN

    def test_unavailable_is_never_green(self) -> None:
        assert level_color(LEVEL, TrackerStatus.UNAVAILABLE) is LevelColor.UNKNOWN


class TestNumericText:
    """Tests for pitch_text and height_text."""

    def test_pitch_one_decimal(self) -> None:
        assert pitch_text(LEVEL) == "Pitch: 12.3 Degrees"

    def test_pitch_placeholder(self) -> None:
        assert pitch_text(None) == "Pitch: -- Degrees"

    def test_height_two_decimals(self) -> None:
        assert height_text(15.07432) == "Calculated Height: 15.07 units"

    def test_height_placeholder(self) -> None:
        """No phantom zero before the first calculation."""
        assert height_text(None) == "Calculated Height: -- units"

    def test_height_infinite(self) -> None:
        assert height_text(float("inf")) == "Calculated Height: inf units"

    def test_pitch_negative_zero(self) -> None:
        """A level reading never shows a minus sign."""
        assert pitch_text(OrientationState.from_roll_pitch(0.0, -0.0)) == "Pitch: 0.0 Degrees"
        assert pitch_text(OrientationState.from_roll_pitch(0.0, -0.04)) == "Pitch: 0.0 Degrees"
