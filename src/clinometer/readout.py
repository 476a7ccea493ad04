"""Display text and colors for the level indicator and height readout."""

from __future__ import annotations

from enum import Enum

from clinometer.orientation import OrientationState, TrackerStatus

ALIGNED_TEXT = "Aligned"
NOT_ALIGNED_TEXT = "Align the device"
UNAVAILABLE_TEXT = "Orientation unavailable"
WAITING_TEXT = "Waiting for orientation"
PLACEHOLDER_TEXT = "--"


class LevelColor(Enum):
    """Level line color; values are Qt color names."""

    LEVEL = "#22c55e"
    NOT_LEVEL = "#ef4444"
    UNKNOWN = "#94a3b8"


def level_color(state: OrientationState | None, status: TrackerStatus) -> LevelColor:
    if status is TrackerStatus.UNAVAILABLE or state is None:
        return LevelColor.UNKNOWN
    return LevelColor.LEVEL if state.is_level else LevelColor.NOT_LEVEL


def alignment_text(state: OrientationState | None, status: TrackerStatus) -> str:
    if status is TrackerStatus.UNAVAILABLE:
        return UNAVAILABLE_TEXT
    if state is None:
        return WAITING_TEXT
    return ALIGNED_TEXT if state.is_level else NOT_ALIGNED_TEXT


def pitch_text(state: OrientationState | None) -> str:
    if state is None:
        return f"Pitch: {PLACEHOLDER_TEXT} Degrees"
    # Adding 0.0 turns a rounded -0.0 into 0.0.
    pitch = round(state.pitch_degrees, 1) + 0.0
    return f"Pitch: {pitch:.1f} Degrees"


def height_text(height: float | None) -> str:
    """Format the last valid height; None means nothing has been calculated yet."""
    if height is None:
        return f"Calculated Height: {PLACEHOLDER_TEXT} units"
    return f"Calculated Height: {height:.2f} units"
