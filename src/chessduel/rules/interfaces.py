"""Rules-engine contract consumed by the match layer.

The match layer never owns a long-lived mutable board. It stores
:class:`PositionSnapshot` values and asks an engine factory for a fresh
instance whenever it needs to query or extend a position.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from chessduel.core.enums import Color, PieceType
from chessduel.core.move import Move, MoveResult
from chessduel.core.types import Square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


@dataclass(frozen=True, slots=True)
class PositionSnapshot:
    """Persistent position handle: a start FEN plus the UCI moves played."""

    start_fen: str = STARTING_FEN
    moves: tuple[str, ...] = ()

    @classmethod
    def from_fen(cls, fen: str) -> PositionSnapshot:
        """Snapshot of a bare position, without any history."""
        return cls(start_fen=fen)

    def with_move(self, uci: str) -> PositionSnapshot:
        return PositionSnapshot(self.start_fen, (*self.moves, uci))

    @property
    def ply_count(self) -> int:
        return len(self.moves)


class IRulesEngine(ABC):
    """Interface for a chess rules engine bound to one position."""

    @abstractmethod
    def legal_moves(self, from_square: Square | None = None) -> list[Move]:
        """Legal moves, optionally restricted to one origin square."""

    @abstractmethod
    def apply_move(self, move: Move) -> MoveResult | None:
        """Play *move* if legal and describe it; ``None`` when illegal."""

    @abstractmethod
    def requires_promotion(self, origin: Square, destination: Square) -> bool:
        """Whether *origin*→*destination* is legal only with a promotion piece."""

    @abstractmethod
    def is_check(self) -> bool: ...

    @abstractmethod
    def is_checkmate(self) -> bool: ...

    @abstractmethod
    def is_stalemate(self) -> bool: ...

    @abstractmethod
    def is_draw(self) -> bool:
        """Any automatic draw, stalemate included."""

    @abstractmethod
    def is_threefold_repetition(self) -> bool: ...

    @abstractmethod
    def is_insufficient_material(self) -> bool: ...

    @abstractmethod
    def turn_color(self) -> Color: ...

    @abstractmethod
    def serialize_position(self) -> PositionSnapshot:
        """Full position and history as an immutable snapshot."""

    @abstractmethod
    def restore_position(self, snapshot: PositionSnapshot) -> None:
        """Rebuild the position by replaying *snapshot* from its start FEN."""

    @abstractmethod
    def unit_at(self, square: Square) -> tuple[Color, PieceType] | None: ...

    @abstractmethod
    def fen(self) -> str: ...

    @abstractmethod
    def king_square(self, color: Color) -> Square | None: ...


EngineFactory: TypeAlias = Callable[[], IRulesEngine]


def engine_at(factory: EngineFactory, snapshot: PositionSnapshot) -> IRulesEngine:
    """Create a fresh engine from *factory* positioned at *snapshot*."""
    engine = factory()
    engine.restore_position(snapshot)
    return engine
