"""Promotion dialog — asks which piece a pawn on the last rank becomes."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QKeySequence
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessduel.core.enums import PROMOTION_CHOICES, Color, PieceType
from chessduel.i18n import t
from chessduel.ui.board.board_widget import glyph


class PromotionDialog(QDialog):
    """Modal picker over :data:`PROMOTION_CHOICES`.

    Each choice is a glyph button with its piece letter as shortcut
    (Q, R, B, N). Cancelling leaves :attr:`selected` at ``None``.
    """

    def __init__(self, color: Color, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._color = color
        self._selected: PieceType | None = None
        self._buttons: dict[PieceType, QPushButton] = {}

        self.setModal(True)
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        layout = QVBoxLayout(self)
        self._label = QLabel()
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setFont(QFont("Adwaita Sans", 11))
        layout.addWidget(self._label)

        row = QHBoxLayout()
        piece_font = QFont("Adwaita Sans", 30)
        for piece_type in PROMOTION_CHOICES:
            btn = QPushButton(glyph(color, piece_type))
            btn.setFont(piece_font)
            btn.setFixedSize(68, 68)
            btn.setShortcut(QKeySequence(piece_type.symbol.upper()))
            btn.setToolTip(piece_type.name.capitalize())
            btn.clicked.connect(lambda checked, p=piece_type: self._choose(p))
            self._buttons[piece_type] = btn
            row.addWidget(btn)
        layout.addLayout(row)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Cancel)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.retranslate_ui()

    def retranslate_ui(self) -> None:
        s = t()
        side = s.color_white if self._color == Color.WHITE else s.color_black
        self.setWindowTitle(f"{s.promote_title} ({side})")
        self._label.setText(s.promote_label)

    @property
    def selected(self) -> PieceType | None:
        return self._selected

    def button(self, piece_type: PieceType) -> QPushButton:
        return self._buttons[piece_type]

    def _choose(self, piece_type: PieceType) -> None:
        self._selected = piece_type
        self.accept()

    @staticmethod
    def ask(color: Color, parent: QWidget | None = None) -> PieceType | None:
        """Run the dialog; ``None`` when the user cancels."""
        dlg = PromotionDialog(color, parent)
        if dlg.exec() != QDialog.DialogCode.Accepted:
            return None
        return dlg.selected
