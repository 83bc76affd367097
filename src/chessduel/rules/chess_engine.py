"""python-chess implementation of :class:`IRulesEngine`."""

from __future__ import annotations

import chess

from chessduel.core.enums import Color, PieceType
from chessduel.core.move import Move, MoveResult
from chessduel.core.types import Square
from chessduel.rules.interfaces import IRulesEngine, PositionSnapshot


def _to_color(turn: chess.Color) -> Color:
    return Color.WHITE if turn == chess.WHITE else Color.BLACK


def _to_chess_move(move: Move) -> chess.Move:
    promotion = int(move.promotion) if move.promotion is not None else None
    return chess.Move(move.origin, move.destination, promotion=promotion)


def _from_chess_move(move: chess.Move) -> Move:
    promotion = PieceType(move.promotion) if move.promotion else None
    return Move(move.from_square, move.to_square, promotion)


def check_fen(fen: str) -> None:
    """Raise ``ValueError`` unless python-chess accepts *fen*."""
    try:
        chess.Board(fen)
    except ValueError as exc:
        raise ValueError(f"Invalid FEN: {fen!r}") from exc


def placement(fen: str) -> dict[Square, tuple[Color, PieceType]]:
    """Piece placement field of *fen* as ``{square: (color, type)}``."""
    board = chess.BaseBoard(fen.split(" ", 1)[0])
    return {
        sq: (_to_color(piece.color), PieceType(piece.piece_type))
        for sq, piece in board.piece_map().items()
    }


class ChessRulesEngine(IRulesEngine):
    """Rules engine backed by a private :class:`chess.Board`.

    Each instance owns its board; callers that need an independent position
    create another instance and :meth:`restore_position` it.
    """

    __slots__ = ("_board",)

    def __init__(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen or chess.STARTING_FEN)

    # ── Moves ────────────────────────────────────────────────────────────

    def legal_moves(self, from_square: Square | None = None) -> list[Move]:
        return [
            _from_chess_move(m)
            for m in self._board.legal_moves
            if from_square is None or m.from_square == from_square
        ]

    def apply_move(self, move: Move) -> MoveResult | None:
        cm = _to_chess_move(move)
        board = self._board
        if not board.is_legal(cm):
            return None

        color = _to_color(board.turn)
        captured: PieceType | None = None
        if board.is_capture(cm):
            if board.is_en_passant(cm):
                captured = PieceType.PAWN
            else:
                piece_type = board.piece_type_at(cm.to_square)
                captured = PieceType(piece_type) if piece_type else None

        san = board.san(cm)
        board.push(cm)
        return MoveResult(
            move=move,
            san=san,
            color=color,
            captured=captured,
            fen_after=board.fen(),
        )

    def requires_promotion(self, origin: Square, destination: Square) -> bool:
        return any(
            m.from_square == origin
            and m.to_square == destination
            and m.promotion is not None
            for m in self._board.legal_moves
        )

    # ── Terminal-condition queries ───────────────────────────────────────

    def is_check(self) -> bool:
        return self._board.is_check()

    def is_checkmate(self) -> bool:
        return self._board.is_checkmate()

    def is_stalemate(self) -> bool:
        return self._board.is_stalemate()

    def is_draw(self) -> bool:
        board = self._board
        return (
            board.is_stalemate()
            or board.is_insufficient_material()
            or board.is_repetition(3)
            or board.is_fifty_moves()
        )

    def is_threefold_repetition(self) -> bool:
        return self._board.is_repetition(3)

    def is_insufficient_material(self) -> bool:
        return self._board.is_insufficient_material()

    # ── Position ─────────────────────────────────────────────────────────

    def turn_color(self) -> Color:
        return _to_color(self._board.turn)

    def serialize_position(self) -> PositionSnapshot:
        return PositionSnapshot(
            start_fen=self._board.root().fen(),
            moves=tuple(m.uci() for m in self._board.move_stack),
        )

    def restore_position(self, snapshot: PositionSnapshot) -> None:
        try:
            board = chess.Board(snapshot.start_fen)
        except ValueError as exc:
            raise ValueError(f"Invalid FEN: {snapshot.start_fen!r}") from exc
        for uci in snapshot.moves:
            cm = chess.Move.from_uci(uci)
            if not board.is_legal(cm):
                raise ValueError(f"Illegal move in history: {uci}")
            board.push(cm)
        self._board = board

    def unit_at(self, square: Square) -> tuple[Color, PieceType] | None:
        piece = self._board.piece_at(square)
        if piece is None:
            return None
        return _to_color(piece.color), PieceType(piece.piece_type)

    def fen(self) -> str:
        return self._board.fen()

    def king_square(self, color: Color) -> Square | None:
        return self._board.king(chess.WHITE if color == Color.WHITE else chess.BLACK)
