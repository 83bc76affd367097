"""Session state aggregate — everything a match consists of, in one value.

All types here are frozen. Transitions build a new :class:`SessionState`
with :func:`dataclasses.replace`; the controller swaps it in as a whole.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chessduel.core.enums import CAPTURE_ORDER, Color, PieceType
from chessduel.core.move import Move, MoveResult
from chessduel.core.types import Square
from chessduel.game.clock import Clock
from chessduel.game.interfaces import TimeControl
from chessduel.game.outcome import MatchOutcome
from chessduel.rules.interfaces import STARTING_FEN, PositionSnapshot


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    color: Color
    san: str
    uci: str
    origin: Square
    destination: Square
    captured: PieceType | None = None
    promotion: PieceType | None = None

    @classmethod
    def from_result(cls, result: MoveResult) -> MoveRecord:
        return cls(
            color=result.color,
            san=result.san,
            uci=result.move.uci,
            origin=result.move.origin,
            destination=result.move.destination,
            captured=result.captured,
            promotion=result.move.promotion,
        )

    @property
    def move(self) -> Move:
        return Move(self.origin, self.destination, self.promotion)


@dataclass(frozen=True, slots=True)
class CaptureLedger:
    """Pieces captured so far, keyed by the capturing side."""

    by_white: tuple[PieceType, ...] = ()
    by_black: tuple[PieceType, ...] = ()

    def captured_by(self, color: Color) -> tuple[PieceType, ...]:
        return self.by_white if color == Color.WHITE else self.by_black

    def add(self, capturer: Color, piece_type: PieceType) -> CaptureLedger:
        if capturer == Color.WHITE:
            return CaptureLedger((*self.by_white, piece_type), self.by_black)
        return CaptureLedger(self.by_white, (*self.by_black, piece_type))

    def sorted_by(self, color: Color) -> list[PieceType]:
        """Captured pieces for display, most valuable first."""
        return sorted(self.captured_by(color), key=CAPTURE_ORDER.__getitem__, reverse=True)


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn move waiting for the promotion piece to be chosen."""

    origin: Square
    destination: Square
    color: Color

    @property
    def move(self) -> Move:
        return Move(self.origin, self.destination)


def _side_from_fen(fen: str) -> Color:
    parts = fen.split()
    if len(parts) < 2 or parts[1] not in ("w", "b"):
        raise ValueError(f"Invalid FEN side-to-move field: {fen!r}")
    return Color.WHITE if parts[1] == "w" else Color.BLACK


@dataclass(frozen=True, slots=True)
class SessionState:
    """Aggregate state of one match.

    ``generation`` identifies the match; deferred callbacks carry the
    generation they were scheduled for and are ignored once it changes.
    """

    generation: int
    position: PositionSnapshot
    fen: str
    clock: Clock
    history: tuple[MoveRecord, ...] = ()
    captures: CaptureLedger = field(default_factory=CaptureLedger)
    draw_offer: Color | None = None
    outcome: MatchOutcome = field(default_factory=MatchOutcome.in_progress)
    pending_promotion: PendingPromotion | None = None
    selected_square: Square | None = None
    in_check: bool = False

    @classmethod
    def initial(
        cls,
        time_control: TimeControl,
        *,
        generation: int = 0,
        start_fen: str = STARTING_FEN,
    ) -> SessionState:
        """Fresh match: initial setup, full clocks, side to move running."""
        clock = Clock.from_time_control(time_control)
        clock = clock.set_running(_side_from_fen(start_fen), True)
        return cls(
            generation=generation,
            position=PositionSnapshot.from_fen(start_fen),
            fen=start_fen,
            clock=clock,
        )

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return _side_from_fen(self.fen)

    @property
    def is_terminal(self) -> bool:
        return self.outcome.is_terminal

    @property
    def draw_responder(self) -> Color | None:
        """The side that must answer the pending draw offer."""
        return None if self.draw_offer is None else self.draw_offer.opposite

    @property
    def last_move(self) -> MoveRecord | None:
        return self.history[-1] if self.history else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def move_pairs(self) -> list[tuple[int, str, str | None]]:
        """History as ``(number, white_san, black_san)`` rows."""
        sans = [record.san for record in self.history]
        return [
            (i // 2 + 1, sans[i], sans[i + 1] if i + 1 < len(sans) else None)
            for i in range(0, len(sans), 2)
        ]
