"""Object height from a baseline distance and two sighting angles.

Both angles are measured from horizontal at the observer, in degrees,
positive upward. The height is the sum of the rises along both sighting
lines over the baseline::

    height = d * tan(top) + d * tan(bottom)

The bottom term is added, so a base below eye level must be entered as a
positive angle for the result to be the full object height.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


class InvalidInput(ValueError):
    """A height field could not be parsed as a finite number."""

    def __init__(self, field: str, text: str) -> None:
        super().__init__(f"{field} must be a number, got {text!r}")
        self.field = field
        self.text = text


@dataclass(frozen=True, slots=True)
class SightingInput:
    """Raw text as typed into the height form."""

    distance: str
    angle_to_top: str
    angle_to_bottom: str


@dataclass(frozen=True, slots=True)
class HeightResult:
    height_units: float


def parse_measurement(text: str, field: str) -> float:
    """Parse one field; empty, non-numeric, NaN and infinite values are rejected."""
    stripped = text.strip()
    # float() also takes digit separators and non-ASCII digits.
    if not stripped.isascii() or "_" in stripped:
        raise InvalidInput(field, text)
    try:
        value = float(stripped)
    except ValueError:
        raise InvalidInput(field, text) from None
    if not math.isfinite(value):
        raise InvalidInput(field, text)
    return value


def calculate_height(distance: str, angle_top: str, angle_bottom: str) -> float:
    """Return the object height in the distance's units.

    All three fields are parsed before anything is computed. Angles close to
    +/-90 degrees give very large or infinite results rather than an error.

    Raises:
        InvalidInput: If any field is not a finite number.
    """
    d = parse_measurement(distance, "distance")
    top = parse_measurement(angle_top, "angle to top")
    bottom = parse_measurement(angle_bottom, "angle to bottom")

    top_radians = top * (math.pi / 180)
    bottom_radians = bottom * (math.pi / 180)
    return d * math.tan(top_radians) + d * math.tan(bottom_radians)


def calculate(sighting: SightingInput) -> HeightResult:
    """Structured variant of :func:`calculate_height`."""
    return HeightResult(
        height_units=calculate_height(sighting.distance, sighting.angle_to_top, sighting.angle_to_bottom)
    )
