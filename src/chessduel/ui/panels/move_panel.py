"""MovePanel — numbered move list and captured-pieces lines."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QLabel, QListWidget, QVBoxLayout, QWidget

from chessduel.core.enums import Color, PieceType
from chessduel.game.state import SessionState
from chessduel.i18n import t
from chessduel.ui.board.board_widget import glyph


def format_move_pairs(state: SessionState) -> list[str]:
    """History rows such as ``"1. e4 e5"``."""
    rows = []
    for number, white_san, black_san in state.move_pairs():
        row = f"{number}. {white_san}"
        if black_san is not None:
            row += f" {black_san}"
        rows.append(row)
    return rows


def format_captures(capturer: Color, pieces: list[PieceType]) -> str:
    """Captured line for *capturer*; *pieces* are already sorted by value."""
    s = t()
    name = s.color_white if capturer == Color.WHITE else s.color_black
    if not pieces:
        return s.captured_none.format(color=name)
    symbols = " ".join(glyph(capturer.opposite, pt) for pt in pieces)
    return f"{s.captured_by.format(color=name)} {symbols}"


class MovePanel(QWidget):
    """Displays the match's move history and material captured so far."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()
        self.retranslate_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._header = QLabel()
        self._header.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        self._header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._header)

        self._list = QListWidget()
        self._list.setAlternatingRowColors(True)
        self._list.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self._list.setFont(QFont("AdwaitaMono Nerd Font", 12))
        layout.addWidget(self._list)

        self._captured: dict[Color, QLabel] = {}
        for color in (Color.WHITE, Color.BLACK):
            label = QLabel()
            label.setWordWrap(True)
            self._captured[color] = label
            layout.addWidget(label)

    def retranslate_ui(self) -> None:
        self._header.setText(t().moves_header)

    def rows(self) -> list[str]:
        return [self._list.item(i).text() for i in range(self._list.count())]

    def captured_text(self, color: Color) -> str:
        return self._captured[color].text()

    def update_from_state(self, state: SessionState) -> None:
        self._list.clear()
        rows = format_move_pairs(state)
        if rows:
            self._list.addItems(rows)
            self._list.scrollToBottom()
        else:
            self._list.addItem(t().moves_empty)
        for color, label in self._captured.items():
            label.setText(format_captures(color, state.captures.sorted_by(color)))
