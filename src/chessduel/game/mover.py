"""Concrete mover strategies."""

from __future__ import annotations

import random
from collections.abc import Sequence

from chessduel.core.enums import PieceType
from chessduel.core.move import Move
from chessduel.game.interfaces import IMover


class RandomMover(IMover):
    """Picks a uniformly random legal move.

    Promotion moves arrive from the rules engine once per promotion piece;
    they are collapsed to a single candidate so that promoting is not four
    times as likely as any other move, and *default_promotion* is used.

    Args:
        rng: Random source, injectable for reproducible games.
        default_promotion: Piece chosen whenever the picked move promotes.
    """

    __slots__ = ("_rng", "_default_promotion")

    def __init__(
        self,
        rng: random.Random | None = None,
        default_promotion: PieceType = PieceType.QUEEN,
    ) -> None:
        self._rng = rng or random.Random()
        self._default_promotion = default_promotion

    @property
    def name(self) -> str:
        return "Random"

    def choose_move(self, legal_moves: Sequence[Move]) -> Move | None:
        candidates = list(dict.fromkeys(m.with_promotion(None) for m in legal_moves))
        if not candidates:
            return None
        choice = self._rng.choice(candidates)
        promotes = any(
            m.promotion is not None and m.with_promotion(None) == choice
            for m in legal_moves
        )
        if promotes:
            return choice.with_promotion(self._default_promotion)
        return choice
