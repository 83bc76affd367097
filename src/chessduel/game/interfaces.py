"""Abstract interfaces and small enums for the match layer.

Follows Dependency Inversion: the SessionController depends on these
ABCs, not on a concrete mover, scheduler or timer implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessduel.core.enums import Color

if TYPE_CHECKING:
    from chessduel.core.move import Move


# ── Match configuration enums ───────────────────────────────────────────────


class Actor(IntEnum):
    """Who is asking the controller to act."""

    HUMAN = auto()
    MOVER = auto()


class PlayerMode(IntEnum):
    """Which sides are played by humans and which by the mover."""

    HUMAN_VS_HUMAN = auto()
    HUMAN_WHITE_VS_MOVER = auto()
    HUMAN_BLACK_VS_MOVER = auto()

    @property
    def mover_color(self) -> Color | None:
        if self == PlayerMode.HUMAN_WHITE_VS_MOVER:
            return Color.BLACK
        if self == PlayerMode.HUMAN_BLACK_VS_MOVER:
            return Color.WHITE
        return None

    @property
    def human_color(self) -> Color | None:
        """The single human side, or ``None`` when both sides are human."""
        mover = self.mover_color
        return None if mover is None else mover.opposite

    def controller_of(self, color: Color) -> Actor:
        return Actor.MOVER if color == self.mover_color else Actor.HUMAN

    def is_allowed(self, actor: Actor, color: Color) -> bool:
        """Whether *actor* may act on behalf of *color*."""
        return self.controller_of(color) == actor


class DrawClockPolicy(IntEnum):
    """Which clock runs while a draw offer awaits a response."""

    RESPONDER_RUNS = auto()  # offerer stopped, responder's clock keeps running
    PAUSE_BOTH = auto()


# ── Time control presets ─────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player, ``None`` for no limit.
        increment_seconds: Per-move increment (Fischer).
    """

    __slots__ = ("initial_seconds", "increment_seconds")

    def __init__(
        self, initial_seconds: int | None, increment_seconds: int = 0
    ) -> None:
        if initial_seconds is not None and initial_seconds <= 0:
            raise ValueError(f"Initial time must be positive: {initial_seconds!r}")
        if increment_seconds < 0:
            raise ValueError(f"Increment must be >= 0: {increment_seconds!r}")
        self.initial_seconds = initial_seconds
        self.increment_seconds = increment_seconds

    # Presets offered by the timer menu
    @classmethod
    def one_minute(cls) -> TimeControl:
        return cls(60)

    @classmethod
    def three_minutes(cls) -> TimeControl:
        return cls(180)

    @classmethod
    def five_minutes(cls) -> TimeControl:
        return cls(300)

    @classmethod
    def ten_minutes(cls) -> TimeControl:
        return cls(600)

    @classmethod
    def fifteen_minutes(cls) -> TimeControl:
        return cls(900)

    @classmethod
    def unlimited(cls) -> TimeControl:
        """No time limit."""
        return cls(None)

    @property
    def is_unlimited(self) -> bool:
        return self.initial_seconds is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeControl):
            return NotImplemented
        return (self.initial_seconds, self.increment_seconds) == (
            other.initial_seconds,
            other.increment_seconds,
        )

    def __hash__(self) -> int:
        return hash((self.initial_seconds, self.increment_seconds))

    def __repr__(self) -> str:
        if self.initial_seconds is None:
            return "TimeControl(unlimited)"
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"TimeControl({mins:.0f}m+{self.increment_seconds}s)"
        return f"TimeControl({mins:.0f}m)"


TIMER_PRESETS: tuple[TimeControl, ...] = (
    TimeControl.one_minute(),
    TimeControl.three_minutes(),
    TimeControl.five_minutes(),
    TimeControl.ten_minutes(),
    TimeControl.fifteen_minutes(),
)


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IMover(ABC):
    """Interface for a non-human move-selection strategy."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def choose_move(self, legal_moves: Sequence[Move]) -> Move | None:
        """Pick one of *legal_moves*, fully specified, or ``None`` to abstain."""


class ITaskHandle(ABC):
    """Handle to a scheduled callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running again. Idempotent."""

    @property
    @abstractmethod
    def is_active(self) -> bool: ...


class IScheduler(ABC):
    """Source of deferred and periodic callbacks on the controller's thread."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ITaskHandle:
        """Run *callback* once after *delay_ms*."""

    @abstractmethod
    def call_every(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> ITaskHandle:
        """Run *callback* every *interval_ms* until cancelled."""
