"""Core value types: colors, piece kinds, squares and moves.

Quick start::

    from chessduel.core import Move, parse_square

    move = Move(parse_square("e2"), parse_square("e4"))
    print(move.uci)  # e2e4
"""

from chessduel.core.enums import CAPTURE_ORDER, PROMOTION_CHOICES, Color, PieceType
from chessduel.core.move import Move, MoveResult
from chessduel.core.types import (
    Square,
    file_of,
    is_light_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "CAPTURE_ORDER",
    "PROMOTION_CHOICES",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "is_light_square",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Value objects
    "Move",
    "MoveResult",
]
