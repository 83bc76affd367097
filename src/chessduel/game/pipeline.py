"""Move pipeline: validate on a throwaway position, commit on replayed history.

The two phases never share an engine instance. The trial phase works on
a bare copy of the current FEN; the commit phase rebuilds the position by
replaying the whole recorded history, so a commit is always based on the
same logical state that was validated.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from chessduel.core.enums import PROMOTION_CHOICES, PieceType
from chessduel.core.move import Move
from chessduel.game.config import MatchSettings
from chessduel.game.events import MoveOutcome, RejectReason
from chessduel.game.interfaces import Actor
from chessduel.game.outcome import apply_resolution
from chessduel.game.state import MoveRecord, PendingPromotion, SessionState
from chessduel.rules.interfaces import EngineFactory, PositionSnapshot, engine_at

_LOGGER = logging.getLogger(__name__)


class EngineInconsistencyError(RuntimeError):
    """A move passed trial validation but could not be committed."""


class MovePipeline:
    """Validates and commits moves against a :class:`SessionState`."""

    __slots__ = ("_engine_factory",)

    def __init__(self, engine_factory: EngineFactory) -> None:
        self._engine_factory = engine_factory

    def submit(
        self,
        state: SessionState,
        settings: MatchSettings,
        move: Move,
        actor: Actor = Actor.HUMAN,
    ) -> tuple[SessionState, MoveOutcome]:
        """Run *move* through the pipeline.

        Rejections return *state* unchanged. Raises
        :class:`EngineInconsistencyError` when the commit phase disagrees
        with the trial phase.
        """
        if state.is_terminal:
            return state, MoveOutcome.rejected(RejectReason.GAME_OVER)
        if state.draw_offer is not None:
            return state, MoveOutcome.rejected(RejectReason.DRAW_OFFER_PENDING)

        trial = engine_at(self._engine_factory, PositionSnapshot.from_fen(state.fen))
        unit = trial.unit_at(move.origin)
        if unit is None:
            return state, MoveOutcome.rejected(RejectReason.ILLEGAL_MOVE)
        color = unit[0]
        if color != state.side_to_move:
            return state, MoveOutcome.rejected(RejectReason.WRONG_SIDE)
        if not settings.mode.is_allowed(actor, color):
            return state, MoveOutcome.rejected(RejectReason.NOT_AUTHORIZED)

        if move.promotion is None and trial.requires_promotion(
            move.origin, move.destination
        ):
            pending = PendingPromotion(move.origin, move.destination, color)
            _LOGGER.debug("Awaiting promotion choice for %s", move)
            return (
                replace(state, pending_promotion=pending),
                MoveOutcome.needs_promotion(pending),
            )

        if trial.apply_move(move) is None:
            return state, MoveOutcome.rejected(RejectReason.ILLEGAL_MOVE)

        return self._commit(state, move)

    def resolve_promotion(
        self,
        state: SessionState,
        settings: MatchSettings,
        choice: PieceType,
        actor: Actor = Actor.HUMAN,
    ) -> tuple[SessionState, MoveOutcome]:
        """Complete the pending promotion move with *choice*."""
        if state.is_terminal:
            return state, MoveOutcome.rejected(RejectReason.GAME_OVER)
        pending = state.pending_promotion
        if pending is None:
            return state, MoveOutcome.rejected(RejectReason.NO_PENDING_PROMOTION)
        if choice not in PROMOTION_CHOICES:
            return state, MoveOutcome.rejected(RejectReason.ILLEGAL_MOVE)

        cleared = replace(state, pending_promotion=None)
        return self.submit(cleared, settings, pending.move.with_promotion(choice), actor)

    # ── Internal ─────────────────────────────────────────────────────────

    def _commit(
        self, state: SessionState, move: Move
    ) -> tuple[SessionState, MoveOutcome]:
        try:
            engine = engine_at(self._engine_factory, state.position)
            result = engine.apply_move(move)
        except Exception as exc:
            raise EngineInconsistencyError(
                f"Replaying {state.position.ply_count} plies failed for {move}: {exc}"
            ) from exc
        if result is None:
            raise EngineInconsistencyError(
                f"Move {move} was legal on {state.fen!r} "
                f"but refused after replaying {state.position.ply_count} plies"
            )

        captures = state.captures
        if result.captured is not None:
            captures = captures.add(result.color, result.captured)
        clock = state.clock.add_increment(result.color).set_running(
            result.color.opposite, True
        )

        committed = replace(
            state,
            position=engine.serialize_position(),
            fen=engine.fen(),
            history=(*state.history, MoveRecord.from_result(result)),
            captures=captures,
            clock=clock,
            pending_promotion=None,
            selected_square=None,
        )
        _LOGGER.debug("Committed %s (%s)", result.san, move)
        return apply_resolution(committed, engine), MoveOutcome.accepted(result)
