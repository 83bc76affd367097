"""Rules-engine seam: the contract and its python-chess implementation."""

from chessduel.rules.chess_engine import ChessRulesEngine
from chessduel.rules.interfaces import (
    STARTING_FEN,
    EngineFactory,
    IRulesEngine,
    PositionSnapshot,
    engine_at,
)

__all__ = [
    "STARTING_FEN",
    "ChessRulesEngine",
    "EngineFactory",
    "IRulesEngine",
    "PositionSnapshot",
    "engine_at",
]
