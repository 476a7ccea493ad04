from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class LatestValue(Generic[T]):
    """Single-slot, latest-value-wins hand-off between one writer and its readers.

    The slot holds a ``(version, value)`` tuple that the writer replaces in a
    single assignment, so readers never see a version paired with another
    publish's value. Versions start at 0 (nothing published) and increase by
    one per publish. Values should be immutable.
    """

    def __init__(self) -> None:
        self._slot: tuple[int, T | None] = (0, None)

    @property
    def version(self) -> int:
        return self._slot[0]

    def publish(self, value: T) -> int:
        """Replace the current value and return its version. Single writer only."""
        version = self._slot[0] + 1
        self._slot = (version, value)
        return version

    def get(self) -> T | None:
        return self._slot[1]

    def snapshot(self) -> tuple[int, T | None]:
        return self._slot

    def poll(self, since_version: int) -> tuple[int, T] | None:
        """Return ``(version, value)`` when something newer than ``since_version`` exists."""
        version, value = self._slot
        if version <= since_version or value is None:
            return None
        return version, value
