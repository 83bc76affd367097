"""Chess clock: two countdown timers driven by discrete ticks.

The clock is an immutable value. Every operation returns a new
:class:`Clock`, so a session can swap it in atomically together with the
rest of its state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessduel.core.enums import Color
from chessduel.game.interfaces import TimeControl


@dataclass(frozen=True, slots=True)
class ClockState:
    """Remaining time and running flag for one side.

    ``remaining`` is ``None`` for an unlimited clock. ``expired`` latches
    once the clock has fired so it can never fire twice.
    """

    remaining: int | None
    running: bool = False
    expired: bool = False


@dataclass(frozen=True, slots=True)
class Clock:
    """Dual chess clock. At most one side runs at any time."""

    white: ClockState
    black: ClockState
    increment: int = 0

    @classmethod
    def from_time_control(cls, time_control: TimeControl) -> Clock:
        start = ClockState(time_control.initial_seconds)
        return cls(start, start, time_control.increment_seconds)

    # ── Queries ──────────────────────────────────────────────────────────

    def state(self, color: Color) -> ClockState:
        return self.white if color == Color.WHITE else self.black

    def remaining(self, color: Color) -> int | None:
        return self.state(color).remaining

    def is_running(self, color: Color) -> bool:
        return self.state(color).running

    @property
    def active_color(self) -> Color | None:
        """The side whose clock is running, if any."""
        if self.white.running:
            return Color.WHITE
        if self.black.running:
            return Color.BLACK
        return None

    @property
    def any_running(self) -> bool:
        return self.white.running or self.black.running

    @property
    def is_unlimited(self) -> bool:
        return self.white.remaining is None

    # ── Transitions ──────────────────────────────────────────────────────

    def set_running(self, color: Color, running: bool) -> Clock:
        """Start or stop *color*'s clock. Idempotent.

        Starting one side stops the other. An expired clock cannot restart.
        """
        if running:
            if self.state(color).expired:
                return self
            clock = self._with(color, replace(self.state(color), running=True))
            other = color.opposite
            return clock._with(other, replace(clock.state(other), running=False))
        return self._with(color, replace(self.state(color), running=False))

    def stop(self) -> Clock:
        """Stop both clocks."""
        return replace(
            self,
            white=replace(self.white, running=False),
            black=replace(self.black, running=False),
        )

    def add_increment(self, color: Color) -> Clock:
        """Credit the Fischer increment to *color* after a move."""
        state = self.state(color)
        if not self.increment or state.remaining is None:
            return self
        return self._with(color, replace(state, remaining=state.remaining + self.increment))

    def reset_both(self, duration: int | None) -> Clock:
        """Stop both clocks and set each to *duration*."""
        fresh = ClockState(duration)
        return replace(self, white=fresh, black=fresh)

    def tick(self) -> tuple[Clock, Color | None]:
        """Take one unit off the running clock.

        Returns the new clock and the color whose time ran out on this
        tick, if any. An expired clock is stopped and never fires again.
        """
        color = self.active_color
        if color is None:
            return self, None
        state = self.state(color)
        if state.remaining is None:
            return self, None

        remaining = max(0, state.remaining - 1)
        if remaining > 0:
            return self._with(color, replace(state, remaining=remaining)), None
        expired = ClockState(0, running=False, expired=True)
        return self._with(color, expired), color

    # ── Internal ─────────────────────────────────────────────────────────

    def _with(self, color: Color, state: ClockState) -> Clock:
        if color == Color.WHITE:
            return replace(self, white=state)
        return replace(self, black=state)
