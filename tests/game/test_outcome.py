"""Tests for the outcome resolver and its status text."""

from __future__ import annotations

from dataclasses import replace

import pytest

from chessduel.core.enums import Color
from chessduel.core.move import Move
from chessduel.game.interfaces import TimeControl
from chessduel.game.outcome import (
    DrawReason,
    MatchOutcome,
    OutcomeKind,
    apply_resolution,
    describe_outcome,
    describe_status,
    finish,
    resolve_outcome,
)
from chessduel.game.state import SessionState
from chessduel.i18n import set_language
from chessduel.rules.chess_engine import ChessRulesEngine


def _state_for(engine: ChessRulesEngine) -> SessionState:
    state = SessionState.initial(TimeControl.five_minutes())
    return replace(state, position=engine.serialize_position(), fen=engine.fen())


def _engine_after(*ucis: str, fen: str | None = None) -> ChessRulesEngine:
    engine = ChessRulesEngine(fen)
    for uci in ucis:
        assert engine.apply_move(Move.from_uci(uci)) is not None
    return engine


class _ExplodingEngine(ChessRulesEngine):
    def is_checkmate(self) -> bool:
        raise RuntimeError("boom")


class TestResolveOutcome:
    def test_in_progress(self) -> None:
        engine = _engine_after("e2e4")
        outcome, in_check = resolve_outcome(_state_for(engine), engine)
        assert outcome.kind == OutcomeKind.IN_PROGRESS
        assert not in_check

    def test_check_is_reported(self) -> None:
        engine = _engine_after("e2e4", "f7f6", "d1h5")
        outcome, in_check = resolve_outcome(_state_for(engine), engine)
        assert not outcome.is_terminal
        assert in_check

    def test_checkmate_winner_is_side_not_to_move(self) -> None:
        engine = _engine_after("f2f3", "e7e5", "g2g4", "d8h4")
        outcome, in_check = resolve_outcome(_state_for(engine), engine)
        assert outcome == MatchOutcome.checkmate(Color.BLACK)
        assert in_check

    def test_stalemate(self) -> None:
        engine = ChessRulesEngine("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        outcome, _ = resolve_outcome(_state_for(engine), engine)
        assert outcome.kind == OutcomeKind.STALEMATE
        assert outcome.winner is None
        assert outcome.is_draw

    def test_repetition_reason(self) -> None:
        engine = _engine_after(
            "g1f3", "g8f6", "f3g1", "f6g8", "g1f3", "g8f6", "f3g1", "f6g8"
        )
        outcome, _ = resolve_outcome(_state_for(engine), engine)
        assert outcome == MatchOutcome.draw(DrawReason.THREEFOLD_REPETITION)

    def test_insufficient_material_reason(self) -> None:
        engine = ChessRulesEngine("8/8/8/4k3/8/8/8/4K3 w - - 0 1")
        outcome, _ = resolve_outcome(_state_for(engine), engine)
        assert outcome == MatchOutcome.draw(DrawReason.INSUFFICIENT_MATERIAL)

    def test_fifty_move_rule_is_generic_draw(self) -> None:
        engine = ChessRulesEngine("8/8/8/4k3/8/8/8/R3K3 w - - 100 80")
        outcome, _ = resolve_outcome(_state_for(engine), engine)
        assert outcome == MatchOutcome.draw(DrawReason.AUTOMATIC)

    def test_pending_offer_is_not_terminal(self) -> None:
        engine = _engine_after("f2f3", "e7e5", "g2g4", "d8h4")
        state = replace(_state_for(engine), draw_offer=Color.WHITE)
        outcome, _ = resolve_outcome(state, engine)
        assert not outcome.is_terminal

    def test_terminal_is_sticky(self) -> None:
        engine = ChessRulesEngine()
        state = finish(_state_for(engine), MatchOutcome.resignation(Color.WHITE))
        outcome, _ = resolve_outcome(state, engine)
        assert outcome == MatchOutcome.resignation(Color.WHITE)

    def test_engine_failure_aborts(self) -> None:
        engine = _ExplodingEngine()
        outcome, in_check = resolve_outcome(_state_for(engine), engine)
        assert outcome.kind == OutcomeKind.ERROR_ABORT
        assert "boom" in outcome.detail
        assert not in_check


class TestApplyResolution:
    def test_terminal_stops_clocks(self) -> None:
        engine = _engine_after("f2f3", "e7e5", "g2g4", "d8h4")
        state = apply_resolution(_state_for(engine), engine)
        assert state.is_terminal
        assert not state.clock.any_running
        assert state.in_check

    def test_unchanged_state_is_returned_as_is(self) -> None:
        engine = ChessRulesEngine()
        state = _state_for(engine)
        assert apply_resolution(state, engine) is state

    def test_finish_clears_transient_fields(self) -> None:
        state = replace(
            SessionState.initial(TimeControl.five_minutes()),
            draw_offer=Color.WHITE,
            selected_square=12,
        )
        done = finish(state, MatchOutcome.draw(DrawReason.AGREEMENT))
        assert done.draw_offer is None
        assert done.selected_square is None
        assert done.pending_promotion is None
        assert not done.clock.any_running


class TestDescribe:
    @pytest.mark.parametrize(
        "outcome, text",
        [
            (MatchOutcome.checkmate(Color.WHITE), "Checkmate! White wins."),
            (MatchOutcome.resignation(Color.BLACK), "White resigned. Black wins."),
            (MatchOutcome.time_expired(Color.BLACK), "Black wins on time!"),
            (MatchOutcome.stalemate(), "Stalemate! Game is a draw."),
            (MatchOutcome.draw(DrawReason.AGREEMENT), "Game drawn by agreement."),
            (
                MatchOutcome.draw(DrawReason.THREEFOLD_REPETITION),
                "Draw by threefold repetition.",
            ),
            (
                MatchOutcome.draw(DrawReason.INSUFFICIENT_MATERIAL),
                "Draw by insufficient material.",
            ),
            (MatchOutcome.error_abort("x"), "Error evaluating game state. Game over."),
        ],
    )
    def test_outcome_text(self, outcome: MatchOutcome, text: str) -> None:
        assert describe_outcome(outcome) == text

    def test_status_to_move(self) -> None:
        state = SessionState.initial(TimeControl.five_minutes())
        assert describe_status(state) == "White to move."

    def test_status_check(self) -> None:
        state = replace(SessionState.initial(TimeControl.five_minutes()), in_check=True)
        assert describe_status(state) == "White to move (Check!)."

    def test_status_draw_offer(self) -> None:
        state = replace(
            SessionState.initial(TimeControl.five_minutes()), draw_offer=Color.WHITE
        )
        assert describe_status(state) == "White offered a draw. Black to respond."

    def test_status_localised(self) -> None:
        set_language("Russian")
        state = SessionState.initial(TimeControl.five_minutes())
        assert describe_status(state) == "Ход: Белые."
