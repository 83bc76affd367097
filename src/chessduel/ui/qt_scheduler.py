"""QtScheduler — deferred session work on the Qt event loop."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer

from chessduel.game.interfaces import IScheduler, ITaskHandle

_LOGGER = logging.getLogger(__name__)


class _QtTaskHandle(ITaskHandle):
    __slots__ = ("_timer", "_single_shot")

    def __init__(self, timer: QTimer, single_shot: bool) -> None:
        self._timer: QTimer | None = timer
        self._single_shot = single_shot

    def cancel(self) -> None:
        timer = self._timer
        if timer is None:
            return
        self._timer = None
        timer.stop()
        timer.deleteLater()

    @property
    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def _fire(self, callback: Callable[[], None]) -> None:
        if self._timer is None:
            return
        if self._single_shot:
            self.cancel()
        callback()


class QtScheduler(IScheduler):
    """Backs :class:`IScheduler` with ``QTimer`` objects parented to *parent*."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ITaskHandle:
        return self._start(max(0, delay_ms), callback, single_shot=True)

    def call_every(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> ITaskHandle:
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive: {interval_ms}")
        return self._start(interval_ms, callback, single_shot=False)

    def _start(
        self, interval_ms: int, callback: Callable[[], None], *, single_shot: bool
    ) -> ITaskHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(single_shot)
        timer.setInterval(interval_ms)
        handle = _QtTaskHandle(timer, single_shot)
        timer.timeout.connect(lambda: handle._fire(callback))
        timer.start()
        _LOGGER.debug(
            "Scheduled %s task in %d ms",
            "one-shot" if single_shot else "repeating",
            interval_ms,
        )
        return handle
