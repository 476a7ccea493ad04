"""Attitude sources feeding the orientation tracker.

A source wraps whatever produces fused device attitude and pushes
:class:`AttitudeSample` records to a handler registered with
:meth:`AttitudeSource.start_updates`. The handler may be called from a
background thread; sources guarantee one producer thread per run so samples
arrive in order.
"""

from __future__ import annotations

import logging
import math
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_UPDATE_INTERVAL_S: float = 1.0 / 60.0


class ReferenceFrame(Enum):
    """Attitude reference frames; all are gravity aligned (z vertical)."""

    X_ARBITRARY_Z_VERTICAL = "x_arbitrary_z_vertical"
    X_ARBITRARY_CORRECTED_Z_VERTICAL = "x_arbitrary_corrected_z_vertical"
    X_MAGNETIC_NORTH_Z_VERTICAL = "x_magnetic_north_z_vertical"
    X_TRUE_NORTH_Z_VERTICAL = "x_true_north_z_vertical"


ALL_REFERENCE_FRAMES: frozenset[ReferenceFrame] = frozenset(ReferenceFrame)


@dataclass(frozen=True, slots=True)
class AttitudeSample:
    """One fused attitude reading, as reported by the platform (radians)."""

    roll_radians: float
    raw_pitch_radians: float


SampleHandler = Callable[[AttitudeSample], None]


class AttitudeSource(ABC):
    """Producer side of the attitude stream."""

    def __init__(self) -> None:
        self._update_interval = DEFAULT_UPDATE_INTERVAL_S

    @property
    def update_interval(self) -> float:
        """Seconds between samples."""
        return self._update_interval

    def set_update_interval(self, seconds: float) -> None:
        self._update_interval = float(seconds)

    @abstractmethod
    def is_available(self) -> bool:
        """Return True when the source can deliver samples."""

    def available_reference_frames(self) -> frozenset[ReferenceFrame]:
        return ALL_REFERENCE_FRAMES

    @abstractmethod
    def start_updates(self, reference_frame: ReferenceFrame, handler: SampleHandler) -> None:
        """Start pushing samples to ``handler``."""

    @abstractmethod
    def stop_updates(self) -> None:
        """Stop pushing samples. Safe to call when not started."""


class ManualAttitudeSource(AttitudeSource):
    """Source whose samples are pushed by the caller, on the caller's thread.

    Used for replaying recorded samples and for tests.
    """

    def __init__(
        self,
        *,
        available: bool = True,
        reference_frames: Iterable[ReferenceFrame] = ALL_REFERENCE_FRAMES,
    ) -> None:
        super().__init__()
        self._available = available
        self._frames = frozenset(reference_frames)
        self._handler: SampleHandler | None = None
        self.reference_frame: ReferenceFrame | None = None
        self.start_count = 0

    @property
    def is_started(self) -> bool:
        return self._handler is not None

    def set_available(self, available: bool) -> None:
        self._available = available

    def is_available(self) -> bool:
        return self._available

    def available_reference_frames(self) -> frozenset[ReferenceFrame]:
        return self._frames

    def start_updates(self, reference_frame: ReferenceFrame, handler: SampleHandler) -> None:
        self.reference_frame = reference_frame
        self._handler = handler
        self.start_count += 1

    def stop_updates(self) -> None:
        self._handler = None

    def push(self, sample: AttitudeSample) -> bool:
        """Deliver ``sample``; returns False if the source is not started."""
        handler = self._handler
        if handler is None:
            return False
        handler(sample)
        return True

    def replay(self, samples: Iterable[AttitudeSample]) -> int:
        """Push samples in order and return how many were delivered."""
        delivered = 0
        for sample in samples:
            if not self.push(sample):
                break
            delivered += 1
        return delivered


class SimulatedAttitudeSource(AttitudeSource):
    """Background-thread source that sways the device around level.

    Stands in for a platform motion sensor on machines without one. Roll
    oscillates around 0 with amplitude ``sway_degrees``; pitch oscillates
    around the upright reading (pi/2) at a slower rate.
    """

    def __init__(
        self,
        *,
        sway_degrees: float = 12.0,
        sway_period_s: float = 8.0,
        available: bool = True,
    ) -> None:
        super().__init__()
        self._sway = math.radians(sway_degrees)
        self._period = max(0.1, float(sway_period_s))
        self._available = available
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    def is_available(self) -> bool:
        return self._available

    @property
    def is_started(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sample_at(self, t: float) -> AttitudeSample:
        """Return the simulated attitude ``t`` seconds into the run."""
        phase = 2.0 * math.pi * t / self._period
        roll = self._sway * math.sin(phase)
        pitch = math.pi / 2 + 0.5 * self._sway * math.sin(phase * 0.5)
        return AttitudeSample(roll_radians=roll, raw_pitch_radians=pitch)

    def start_updates(self, reference_frame: ReferenceFrame, handler: SampleHandler) -> None:
        if self.is_started:
            return
        if not self._available:
            raise OSError("simulated sensor disabled")
        # Each run owns its stop event; a late producer from an earlier run stays stopped.
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(handler, self._stop_event),
            name="attitude-simulator",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Simulated attitude source started (%s)", reference_frame.name)

    def stop_updates(self) -> None:
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        if thread is not threading.current_thread():
            thread.join(timeout=max(1.0, self._update_interval * 4))
            if thread.is_alive():
                logger.warning("Simulated attitude thread did not stop within the join timeout")
        self._thread = None

    def _run(self, handler: SampleHandler, stop_event: threading.Event) -> None:
        index = 0
        while not stop_event.is_set():
            handler(self.sample_at(index * self._update_interval))
            index += 1
            stop_event.wait(self._update_interval)
