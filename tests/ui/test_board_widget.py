"""Tests for the board widget."""

from __future__ import annotations

from chessduel.core.types import parse_square
from chessduel.game.highlights import HighlightStyle
from chessduel.rules.interfaces import STARTING_FEN
from chessduel.ui.board.board_widget import BoardWidget


class TestBoardWidget:
    def test_renders_pieces(self) -> None:
        widget = BoardWidget()
        widget.set_position(STARTING_FEN)
        assert widget.square_text(parse_square("e1")) == "♔"
        assert widget.square_text(parse_square("e8")) == "♚"
        assert widget.square_text(parse_square("e4")) == ""

    def test_click_emits_square(self) -> None:
        widget = BoardWidget()
        clicked: list[int] = []
        widget.square_clicked.connect(clicked.append)
        widget.button(parse_square("e2")).click()
        assert clicked == [parse_square("e2")]

    def test_non_interactive_board_ignores_clicks(self) -> None:
        widget = BoardWidget()
        clicked: list[int] = []
        widget.square_clicked.connect(clicked.append)
        widget.set_interactive(False)
        widget.button(parse_square("e2")).click()
        assert clicked == []

    def test_highlights(self) -> None:
        widget = BoardWidget()
        e4 = parse_square("e4")
        widget.set_highlights({e4: HighlightStyle.LAST_MOVE})
        assert widget.square_style(e4) == HighlightStyle.LAST_MOVE
        assert "#cdd26a" in widget.button(e4).styleSheet()
        widget.set_highlights({})
        assert widget.square_style(e4) is None

    def test_flip(self) -> None:
        widget = BoardWidget()
        widget.set_flipped(True)
        assert widget.flipped
        index = widget._grid.indexOf(widget.button(parse_square("a1")))
        assert widget._grid.getItemPosition(index)[:2] == (0, 7)
