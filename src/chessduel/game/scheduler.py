"""Virtual-time scheduler for headless sessions and tests."""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable

from chessduel.game.interfaces import IScheduler, ITaskHandle


class _ManualTask(ITaskHandle):
    __slots__ = ("due", "interval", "callback", "_active")

    def __init__(
        self, due: int, interval: int | None, callback: Callable[[], None]
    ) -> None:
        self.due = due
        self.interval = interval
        self.callback = callback
        self._active = True

    def cancel(self) -> None:
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active


class ManualScheduler(IScheduler):
    """Runs callbacks only when :meth:`advance` moves virtual time forward.

    Tasks due at the same instant run in scheduling order.
    """

    __slots__ = ("_now", "_queue", "_seq")

    def __init__(self) -> None:
        self._now = 0
        self._queue: list[tuple[int, int, _ManualTask]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> int:
        return self._now

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, task in self._queue if task.is_active)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ITaskHandle:
        return self._push(_ManualTask(self._now + max(0, delay_ms), None, callback))

    def call_every(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> ITaskHandle:
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive: {interval_ms}")
        return self._push(_ManualTask(self._now + interval_ms, interval_ms, callback))

    def advance(self, ms: int) -> None:
        """Move time forward by *ms*, running every task that falls due."""
        target = self._now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            if not task.is_active:
                continue
            self._now = due
            if task.interval is None:
                task.cancel()
            else:
                task.due = due + task.interval
                self._push(task)
            task.callback()
        self._now = target

    def _push(self, task: _ManualTask) -> _ManualTask:
        heapq.heappush(self._queue, (task.due, next(self._seq), task))
        return task
