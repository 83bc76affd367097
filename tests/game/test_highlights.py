"""Tests for the highlight projection."""

from __future__ import annotations

from dataclasses import replace

from chessduel.core.enums import Color
from chessduel.core.move import Move
from chessduel.core.types import parse_square
from chessduel.game.config import MatchSettings
from chessduel.game.highlights import HighlightStyle, compute_highlights
from chessduel.game.interfaces import TimeControl
from chessduel.game.outcome import MatchOutcome, finish
from chessduel.game.pipeline import MovePipeline
from chessduel.game.state import SessionState
from chessduel.rules.chess_engine import ChessRulesEngine
from chessduel.rules.interfaces import engine_at


def _play(*ucis: str) -> SessionState:
    pipeline = MovePipeline(ChessRulesEngine)
    state = SessionState.initial(TimeControl.five_minutes())
    for uci in ucis:
        state, outcome = pipeline.submit(state, MatchSettings(), Move.from_uci(uci))
        assert outcome.is_accepted
    return state


def _marks(state: SessionState) -> dict[int, HighlightStyle]:
    return compute_highlights(state, engine_at(ChessRulesEngine, state.position))


class TestHighlights:
    def test_fresh_board_has_none(self) -> None:
        assert _marks(SessionState.initial(TimeControl.five_minutes())) == {}

    def test_last_move(self) -> None:
        marks = _marks(_play("e2e4"))
        assert marks == {
            parse_square("e2"): HighlightStyle.LAST_MOVE,
            parse_square("e4"): HighlightStyle.LAST_MOVE,
        }

    def test_selection_shows_destinations(self) -> None:
        state = replace(
            SessionState.initial(TimeControl.five_minutes()),
            selected_square=parse_square("g1"),
        )
        marks = _marks(state)
        assert marks[parse_square("g1")] == HighlightStyle.SELECTED
        assert marks[parse_square("f3")] == HighlightStyle.LEGAL_DESTINATION
        assert marks[parse_square("h3")] == HighlightStyle.LEGAL_DESTINATION
        assert len(marks) == 3

    def test_capture_destination(self) -> None:
        state = replace(_play("e2e4", "d7d5"), selected_square=parse_square("e4"))
        marks = _marks(state)
        assert marks[parse_square("d5")] == HighlightStyle.CAPTURE_DESTINATION
        assert marks[parse_square("e5")] == HighlightStyle.LEGAL_DESTINATION

    def test_check_marks_king(self) -> None:
        state = _play("e2e4", "f7f6", "d1h5")
        assert state.in_check
        assert state.side_to_move == Color.BLACK
        assert _marks(state)[parse_square("e8")] == HighlightStyle.CHECK

    def test_no_destinations_when_terminal(self) -> None:
        over = finish(
            SessionState.initial(TimeControl.five_minutes()),
            MatchOutcome.resignation(Color.BLACK),
        )
        state = replace(
            over,
            selected_square=parse_square("g1"),
        )
        assert parse_square("f3") not in _marks(state)
