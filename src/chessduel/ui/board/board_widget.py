"""BoardWidget — 8×8 grid of square buttons.

Renders piece placement from a FEN string and colours squares from the
highlight projection. Clicks are reported as square indices; the widget
never decides anything about moves itself.
"""

from __future__ import annotations

from PyQt6.QtCore import QSize, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QGridLayout, QPushButton, QSizePolicy, QWidget

from chessduel.core.enums import Color, PieceType
from chessduel.core.types import (
    Square,
    file_of,
    is_light_square,
    rank_of,
    square_name,
)
from chessduel.game.highlights import HighlightStyle
from chessduel.rules.chess_engine import placement

_GLYPHS: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.KING): "♔",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.BLACK, PieceType.KING): "♚",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.PAWN): "♟",
}

_LIGHT = "#f0d9b5"  # tan
_DARK = "#b58863"  # brown
_HIGHLIGHT_COLORS: dict[HighlightStyle, str] = {
    HighlightStyle.LAST_MOVE: "#cdd26a",
    HighlightStyle.LEGAL_DESTINATION: "#a9c97a",
    HighlightStyle.CAPTURE_DESTINATION: "#e08a6c",
    HighlightStyle.SELECTED: "#f6f669",
    HighlightStyle.CHECK: "#e05050",
}


def glyph(color: Color, piece_type: PieceType) -> str:
    return _GLYPHS[(color, piece_type)]


class BoardWidget(QWidget):
    """Clickable chessboard."""

    square_clicked = pyqtSignal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._flipped = False
        self._interactive = True
        self._highlights: dict[Square, HighlightStyle] = {}
        self._placement: dict[Square, tuple[Color, PieceType]] = {}
        self._buttons: dict[Square, QPushButton] = {}

        self._grid = QGridLayout(self)
        self._grid.setContentsMargins(0, 0, 0, 0)
        self._grid.setSpacing(0)

        font = QFont("Adwaita Sans", 28)
        for sq in range(64):
            btn = QPushButton()
            btn.setFont(font)
            btn.setMinimumSize(QSize(56, 56))
            btn.setSizePolicy(
                QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding
            )
            btn.setToolTip(square_name(sq))
            btn.clicked.connect(lambda checked, s=sq: self._on_click(s))
            self._buttons[sq] = btn

        self._layout_squares()
        self._refresh()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def flipped(self) -> bool:
        return self._flipped

    def button(self, square: Square) -> QPushButton:
        return self._buttons[square]

    def set_position(self, fen: str) -> None:
        self._placement = placement(fen)
        self._refresh()

    def set_highlights(self, highlights: dict[Square, HighlightStyle]) -> None:
        self._highlights = dict(highlights)
        self._refresh()

    def set_flipped(self, flipped: bool) -> None:
        """Show the board from Black's side when *flipped*."""
        if flipped == self._flipped:
            return
        self._flipped = flipped
        self._layout_squares()

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive

    def square_text(self, square: Square) -> str:
        return self._buttons[square].text()

    def square_style(self, square: Square) -> HighlightStyle | None:
        return self._highlights.get(square)

    # ── Internal ─────────────────────────────────────────────────────────

    def _layout_squares(self) -> None:
        for sq, btn in self._buttons.items():
            self._grid.removeWidget(btn)
            file, rank = file_of(sq), rank_of(sq)
            row = rank if self._flipped else 7 - rank
            col = 7 - file if self._flipped else file
            self._grid.addWidget(btn, row, col)

    def _refresh(self) -> None:
        for sq, btn in self._buttons.items():
            unit = self._placement.get(sq)
            btn.setText(glyph(*unit) if unit is not None else "")
            style = self._highlights.get(sq)
            if style is not None:
                background = _HIGHLIGHT_COLORS[style]
            else:
                background = _LIGHT if is_light_square(sq) else _DARK
            btn.setStyleSheet(
                f"QPushButton {{ background-color: {background}; color: #111;"
                " border: none; }"
            )

    def _on_click(self, square: Square) -> None:
        if self._interactive:
            self.square_clicked.emit(square)
