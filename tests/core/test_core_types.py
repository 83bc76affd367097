"""Tests for squares, enums and move value objects."""

from __future__ import annotations

import pytest

from chessduel.core.enums import CAPTURE_ORDER, PROMOTION_CHOICES, Color, PieceType
from chessduel.core.move import Move, MoveResult
from chessduel.core.types import (
    file_of,
    is_light_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
)


class TestSquares:
    def test_corners(self) -> None:
        assert parse_square("a1") == 0
        assert parse_square("h1") == 7
        assert parse_square("a8") == 56
        assert parse_square("h8") == 63

    def test_name_matches_parse(self) -> None:
        assert square_name(parse_square("e4")) == "e4"
        assert square_name(make_square(4, 3)) == "e4"

    def test_file_and_rank(self) -> None:
        e4 = parse_square("e4")
        assert file_of(e4) == 4
        assert rank_of(e4) == 3

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e44", "E4"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)

    def test_square_colors(self) -> None:
        assert not is_light_square(parse_square("a1"))
        assert is_light_square(parse_square("h1"))
        assert is_light_square(parse_square("a8"))


class TestEnums:
    def test_color_opposite(self) -> None:
        assert Color.WHITE.opposite == Color.BLACK
        assert Color.BLACK.opposite == Color.WHITE
        assert str(Color.WHITE) == "white"

    def test_piece_symbols(self) -> None:
        assert PieceType.KNIGHT.symbol == "n"
        assert PieceType.from_symbol("Q") == PieceType.QUEEN
        with pytest.raises(ValueError):
            PieceType.from_symbol("x")

    def test_promotion_choices(self) -> None:
        assert PROMOTION_CHOICES == (
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        )

    def test_capture_order_ranks_queen_first_king_last(self) -> None:
        ranked = sorted(CAPTURE_ORDER, key=CAPTURE_ORDER.__getitem__, reverse=True)
        assert ranked == [
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
            PieceType.PAWN,
            PieceType.KING,
        ]


class TestMove:
    def test_uci(self) -> None:
        move = Move(parse_square("e2"), parse_square("e4"))
        assert move.uci == "e2e4"
        assert str(move) == "e2e4"

    def test_promotion_uci(self) -> None:
        move = Move(parse_square("a7"), parse_square("a8"), PieceType.QUEEN)
        assert move.uci == "a7a8q"

    def test_from_uci(self) -> None:
        assert Move.from_uci("g7g8n") == Move(
            parse_square("g7"), parse_square("g8"), PieceType.KNIGHT
        )
        with pytest.raises(ValueError):
            Move.from_uci("e2")

    def test_with_promotion(self) -> None:
        base = Move(parse_square("b7"), parse_square("b8"))
        assert base.with_promotion(PieceType.ROOK).promotion == PieceType.ROOK
        assert base.with_promotion(PieceType.ROOK).with_promotion(None) == base

    def test_result_capture_flag(self) -> None:
        move = Move(parse_square("e4"), parse_square("d5"))
        quiet = MoveResult(move, "e5", Color.WHITE)
        capture = MoveResult(move, "exd5", Color.WHITE, captured=PieceType.PAWN)
        assert not quiet.is_capture
        assert capture.is_capture
        assert quiet.promotion is None
