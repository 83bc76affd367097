"""Move value objects exchanged between the match layer and the rules engine."""

from __future__ import annotations

from dataclasses import dataclass

from chessduel.core.enums import Color, PieceType
from chessduel.core.types import Square, parse_square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable origin/destination pair with an optional promotion piece."""

    origin: Square
    destination: Square
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.origin)}{square_name(self.destination)}"
        if self.promotion is not None:
            base += self.promotion.symbol
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @classmethod
    def from_uci(cls, uci: str) -> Move:
        if len(uci) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {uci!r}")
        promotion = PieceType.from_symbol(uci[4]) if len(uci) == 5 else None
        return cls(parse_square(uci[:2]), parse_square(uci[2:4]), promotion)

    def with_promotion(self, promotion: PieceType | None) -> Move:
        return Move(self.origin, self.destination, promotion)


@dataclass(frozen=True, slots=True)
class MoveResult:
    """What the rules engine reports after applying a legal move."""

    move: Move
    san: str
    color: Color
    captured: PieceType | None = None
    fen_after: str = ""

    @property
    def promotion(self) -> PieceType | None:
        return self.move.promotion

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
