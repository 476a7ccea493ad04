"""Orientation tracking: raw attitude samples to display-ready level state.

The tracker consumes already-fused attitude samples from an
:class:`~clinometer.sensors.attitude_source.AttitudeSource`, converts each one
into an :class:`OrientationState` and publishes it through a
:class:`~clinometer.channel.LatestValue` slot that the UI polls.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from enum import Enum

from clinometer.channel import LatestValue
from clinometer.sensors.attitude_source import (
    AttitudeSample,
    AttitudeSource,
    ReferenceFrame,
)

logger = logging.getLogger(__name__)

# Roll band (radians) around 0 and pi that counts as level (~22.9 degrees).
LEVEL_TOLERANCE_RADIANS: float = 0.4
DEFAULT_SAMPLE_RATE_HZ: float = 60.0


class SensorUnavailable(RuntimeError):
    """The orientation sensor could not be started."""


class TrackerStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    UNAVAILABLE = "unavailable"


def pitch_degrees_from_raw(raw_pitch_radians: float) -> float:
    """Convert the platform pitch to degrees from horizontal.

    Under a z-vertical reference frame the raw pitch reads pi/2 when the
    device is held upright and level, so the value is shifted by pi/2 and
    inverted: 0 is level and tilting the top edge up increases the angle.
    """
    return -(raw_pitch_radians - math.pi / 2) * (180 / math.pi)


def is_level(roll_radians: float, tolerance: float = LEVEL_TOLERANCE_RADIANS) -> bool:
    """Return True when roll is within ``tolerance`` of 0 or of pi (upside down)."""
    return abs(roll_radians) < tolerance or abs(roll_radians - math.pi) < tolerance


@dataclass(frozen=True, slots=True)
class OrientationState:
    """Latest derived orientation, ready for display.

    Build instances with :meth:`from_roll_pitch` so that ``is_level`` always
    follows ``roll_radians``.
    """

    roll_radians: float
    pitch_degrees: float
    is_level: bool

    @classmethod
    def from_roll_pitch(cls, roll_radians: float, pitch_degrees: float) -> OrientationState:
        return cls(
            roll_radians=roll_radians,
            pitch_degrees=pitch_degrees,
            is_level=is_level(roll_radians),
        )


def derive_state(sample: AttitudeSample) -> OrientationState:
    """Apply the per-sample transform; roll is passed through unchanged."""
    return OrientationState.from_roll_pitch(
        sample.roll_radians,
        pitch_degrees_from_raw(sample.raw_pitch_radians),
    )


class OrientationTracker:
    """Turn an attitude stream into published :class:`OrientationState` records.

    The source calls back on its own thread; each sample is transformed and
    published on that same thread, so states reach the channel strictly in
    arrival order. Consumers read with :meth:`latest` or :meth:`poll`.
    """

    def __init__(
        self,
        source: AttitudeSource,
        *,
        channel: LatestValue[OrientationState] | None = None,
    ) -> None:
        self._source = source
        self._channel: LatestValue[OrientationState] = channel if channel is not None else LatestValue()
        self._status = TrackerStatus.IDLE
        self._sample_rate_hz = DEFAULT_SAMPLE_RATE_HZ
        # Never held across source calls.
        self._lock = threading.Lock()
        self._source_started = False

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def status(self) -> TrackerStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status is TrackerStatus.RUNNING

    @property
    def is_available(self) -> bool:
        """False once the source has been found unavailable."""
        return self._status is not TrackerStatus.UNAVAILABLE

    @property
    def sample_rate_hz(self) -> float:
        return self._sample_rate_hz

    @property
    def channel(self) -> LatestValue[OrientationState]:
        return self._channel

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    def configure(self, sample_rate_hz: float) -> None:
        """Set the sampling rate.

        When the source cannot deliver samples the rate is left unchanged and
        any running stream is halted before the tracker reports unavailable.

        Raises:
            ValueError: If the rate is not a positive finite number.
        """
        rate = float(sample_rate_hz)
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"sample rate must be a positive finite number, got {sample_rate_hz!r}")
        if not self._source.is_available():
            self._halt_source()
            self._mark_unavailable("orientation sensor unavailable; sample rate not applied")
            return
        self._sample_rate_hz = rate
        self._source.set_update_interval(1.0 / rate)

    def start(self, reference_frame: ReferenceFrame = ReferenceFrame.X_MAGNETIC_NORTH_Z_VERTICAL) -> None:
        """Begin receiving samples in ``reference_frame``.

        Calling while running is a no-op. Calling after a failure retries.

        Raises:
            SensorUnavailable: If the source is missing or cannot use the frame.
        """
        if self._status is TrackerStatus.RUNNING:
            return
        if not self._source.is_available():
            self._mark_unavailable("orientation sensor unavailable")
            raise SensorUnavailable("Device motion is not available")
        if reference_frame not in self._source.available_reference_frames():
            self._mark_unavailable(f"reference frame {reference_frame.name} not supported")
            raise SensorUnavailable(f"Reference frame {reference_frame.name} is not available")

        with self._lock:
            previous = self._status
            self._status = TrackerStatus.RUNNING
            self._source_started = True
        try:
            self._source.start_updates(reference_frame, self._handle_sample)
        except OSError as exc:
            with self._lock:
                self._source_started = False
            self._mark_unavailable(f"orientation sensor failed to start: {exc}")
            raise SensorUnavailable(str(exc)) from exc
        except Exception:
            with self._lock:
                self._source_started = False
                self._status = previous
            raise
        logger.info(
            "Orientation updates started at %.1f Hz (%s)", self._sample_rate_hz, reference_frame.name
        )

    def stop(self) -> None:
        """Halt the stream. Safe to call repeatedly."""
        if self._halt_source():
            logger.info("Orientation updates stopped")

    def _halt_source(self) -> bool:
        """Stop the source if it was started; returns True when it was."""
        with self._lock:
            was_started = self._source_started
            self._source_started = False
            if self._status is TrackerStatus.RUNNING:
                self._status = TrackerStatus.STOPPED
        if was_started:
            self._source.stop_updates()
        return was_started

    # -------------------------------------------------------------------------
    # Samples
    # -------------------------------------------------------------------------

    def on_sample(self, raw: AttitudeSample) -> OrientationState:
        """Transform ``raw`` and publish the resulting state.

        Raises:
            RuntimeError: If the tracker is not running.
        """
        with self._lock:
            if self._status is not TrackerStatus.RUNNING:
                raise RuntimeError("OrientationTracker is not running")
            state = derive_state(raw)
            self._channel.publish(state)
        return state

    def _handle_sample(self, raw: AttitudeSample) -> None:
        # In-flight samples that race a stop() are dropped.
        with self._lock:
            if self._status is not TrackerStatus.RUNNING:
                return
            self._channel.publish(derive_state(raw))

    def latest(self) -> OrientationState | None:
        return self._channel.get()

    def poll(self, since_version: int) -> tuple[int, OrientationState] | None:
        """Return ``(version, state)`` if a newer state was published."""
        return self._channel.poll(since_version)

    def _mark_unavailable(self, reason: str) -> None:
        with self._lock:
            first = self._status is not TrackerStatus.UNAVAILABLE
            self._status = TrackerStatus.UNAVAILABLE
        if first:
            logger.warning("%s", reason)
