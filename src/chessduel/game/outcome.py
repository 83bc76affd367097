"""Match outcome variants and the resolver that derives them.

The resolver is re-run after every change of position or draw-offer
state. Terminal outcomes are sticky: once set, only a new match clears
them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessduel.core.enums import Color
from chessduel.i18n import t

if TYPE_CHECKING:
    from chessduel.game.state import SessionState
    from chessduel.rules.interfaces import IRulesEngine

_LOGGER = logging.getLogger(__name__)


class OutcomeKind(IntEnum):
    IN_PROGRESS = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    DRAW = auto()
    RESIGNATION = auto()
    TIME_EXPIRED = auto()
    ERROR_ABORT = auto()


class DrawReason(IntEnum):
    AGREEMENT = auto()
    STALEMATE = auto()
    THREEFOLD_REPETITION = auto()
    INSUFFICIENT_MATERIAL = auto()
    AUTOMATIC = auto()  # 50/75-move rule, fivefold repetition


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    """Tagged match status. ``winner`` is set only for decisive results."""

    kind: OutcomeKind = OutcomeKind.IN_PROGRESS
    winner: Color | None = None
    draw_reason: DrawReason | None = None
    detail: str = ""

    @classmethod
    def in_progress(cls) -> MatchOutcome:
        return cls()

    @classmethod
    def checkmate(cls, winner: Color) -> MatchOutcome:
        return cls(OutcomeKind.CHECKMATE, winner=winner)

    @classmethod
    def stalemate(cls) -> MatchOutcome:
        return cls(OutcomeKind.STALEMATE, draw_reason=DrawReason.STALEMATE)

    @classmethod
    def draw(cls, reason: DrawReason) -> MatchOutcome:
        return cls(OutcomeKind.DRAW, draw_reason=reason)

    @classmethod
    def resignation(cls, winner: Color) -> MatchOutcome:
        return cls(OutcomeKind.RESIGNATION, winner=winner)

    @classmethod
    def time_expired(cls, winner: Color) -> MatchOutcome:
        return cls(OutcomeKind.TIME_EXPIRED, winner=winner)

    @classmethod
    def error_abort(cls, detail: str = "") -> MatchOutcome:
        return cls(OutcomeKind.ERROR_ABORT, detail=detail)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.draw_reason is not None


# ── Resolution ───────────────────────────────────────────────────────────────


def resolve_outcome(
    state: SessionState, engine: IRulesEngine
) -> tuple[MatchOutcome, bool]:
    """Derive ``(outcome, in_check)`` for *state* from *engine*'s position.

    *engine* must be positioned at ``state.position`` with full history so
    that repetition can be detected. Any engine failure aborts the match.
    """
    if state.outcome.is_terminal:
        return state.outcome, state.in_check
    if state.draw_offer is not None:
        # Offer pending: not terminal, position unchanged since last pass.
        return state.outcome, state.in_check

    try:
        if engine.is_checkmate():
            return MatchOutcome.checkmate(engine.turn_color().opposite), True
        if engine.is_stalemate():
            return MatchOutcome.stalemate(), False
        if engine.is_draw():
            if engine.is_threefold_repetition():
                reason = DrawReason.THREEFOLD_REPETITION
            elif engine.is_insufficient_material():
                reason = DrawReason.INSUFFICIENT_MATERIAL
            else:
                reason = DrawReason.AUTOMATIC
            return MatchOutcome.draw(reason), engine.is_check()
        return MatchOutcome.in_progress(), engine.is_check()
    except Exception as exc:
        _LOGGER.exception("Rules engine failed while resolving match outcome")
        return MatchOutcome.error_abort(f"{type(exc).__name__}: {exc}"), False


def finish(state: SessionState, outcome: MatchOutcome) -> SessionState:
    """Enter terminal *outcome*: stop clocks, drop offers and pending input."""
    return replace(
        state,
        outcome=outcome,
        clock=state.clock.stop(),
        draw_offer=None,
        pending_promotion=None,
        selected_square=None,
    )


def apply_resolution(state: SessionState, engine: IRulesEngine) -> SessionState:
    """Run the resolver and fold its verdict into *state*."""
    outcome, in_check = resolve_outcome(state, engine)
    if outcome.is_terminal and not state.outcome.is_terminal:
        _LOGGER.info("Match over: %s", outcome)
        return replace(finish(state, outcome), in_check=in_check)
    if in_check != state.in_check:
        return replace(state, in_check=in_check)
    return state


# ── Text ─────────────────────────────────────────────────────────────────────


def _color_name(color: Color) -> str:
    s = t()
    return s.color_white if color == Color.WHITE else s.color_black


def describe_outcome(outcome: MatchOutcome) -> str:
    """One-line description of a terminal outcome."""
    s = t()
    kind = outcome.kind
    if kind == OutcomeKind.CHECKMATE and outcome.winner is not None:
        return s.wins_checkmate.format(color=_color_name(outcome.winner))
    if kind == OutcomeKind.RESIGNATION and outcome.winner is not None:
        return s.wins_resign.format(
            loser=_color_name(outcome.winner.opposite),
            color=_color_name(outcome.winner),
        )
    if kind == OutcomeKind.TIME_EXPIRED and outcome.winner is not None:
        return s.wins_time.format(color=_color_name(outcome.winner))
    if kind == OutcomeKind.STALEMATE:
        return s.draw_stalemate
    if kind == OutcomeKind.DRAW:
        if outcome.draw_reason == DrawReason.AGREEMENT:
            return s.draw_agreed
        if outcome.draw_reason == DrawReason.THREEFOLD_REPETITION:
            return s.draw_repetition
        if outcome.draw_reason == DrawReason.INSUFFICIENT_MATERIAL:
            return s.draw_insufficient
        return s.draw_automatic
    if kind == OutcomeKind.ERROR_ABORT:
        return s.error_abort
    return ""


def describe_status(state: SessionState) -> str:
    """Status line for the current session state."""
    s = t()
    if state.outcome.is_terminal:
        return describe_outcome(state.outcome)
    if state.draw_offer is not None:
        return s.status_draw_offer.format(
            offerer=_color_name(state.draw_offer),
            responder=_color_name(state.draw_offer.opposite),
        )
    text = s.status_to_move.format(color=_color_name(state.side_to_move))
    if state.in_check:
        text += s.status_check_suffix
    return text + "."
