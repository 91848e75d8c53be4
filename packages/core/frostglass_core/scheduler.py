"""Single-slot frame scheduler that coalesces rapid parameter changes."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class FrameScheduler(Generic[T]):
    """Holds at most one pending task; requesting a new one cancels the old.

    The owner calls :meth:`run_pending` once per display frame. Tasks
    replaced before that tick never run and are counted in ``dropped``.
    """

    def __init__(self) -> None:
        self._pending: Callable[[], T] | None = None
        self.dropped = 0
        self.executed = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def request(self, task: Callable[[], T]) -> bool:
        """Schedule ``task``; returns True when it replaced a pending one."""
        replaced = self.cancel()
        self._pending = task
        return replaced

    def cancel(self) -> bool:
        if self._pending is None:
            return False
        self._pending = None
        self.dropped += 1
        return True

    def run_pending(self) -> T | None:
        task, self._pending = self._pending, None
        if task is None:
            return None
        self.executed += 1
        return task()
