"""Core enumerations shared by the rules adapter and the match layer."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value.

    Values match ``chess.PAWN`` … ``chess.KING`` so they can be passed to
    python-chess unchanged.
    """

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def symbol(self) -> str:
        return "pnbrqk"[self.value - 1]

    @classmethod
    def from_symbol(cls, symbol: str) -> PieceType:
        idx = "pnbrqk".find(symbol.lower())
        if len(symbol) != 1 or idx < 0:
            raise ValueError(f"Invalid piece symbol: {symbol!r}")
        return cls(idx + 1)


PROMOTION_CHOICES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Display rank of captured pieces, most valuable first.
CAPTURE_ORDER: dict[PieceType, int] = {
    PieceType.QUEEN: 5,
    PieceType.ROOK: 4,
    PieceType.BISHOP: 3,
    PieceType.KNIGHT: 2,
    PieceType.PAWN: 1,
    PieceType.KING: 0,
}
