"""ControlPanel — match settings selectors and action buttons."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessduel.game.interfaces import TIMER_PRESETS, PlayerMode, TimeControl
from chessduel.i18n import t

_MODES = (
    PlayerMode.HUMAN_VS_HUMAN,
    PlayerMode.HUMAN_WHITE_VS_MOVER,
    PlayerMode.HUMAN_BLACK_VS_MOVER,
)


def timer_label(time_control: TimeControl) -> str:
    s = t()
    if time_control.initial_seconds is None:
        return s.timer_unlimited
    minutes = time_control.initial_seconds // 60
    if minutes == 1:
        return s.timer_one_minute
    return s.timer_minutes.format(n=minutes)


class ControlPanel(QWidget):
    """Mode and timer selectors plus new match / draw / resign buttons."""

    mode_changed = pyqtSignal(object)  # PlayerMode
    time_control_changed = pyqtSignal(object)  # TimeControl
    new_game_clicked = pyqtSignal()
    resign_clicked = pyqtSignal()
    draw_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()
        self.retranslate_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        form = QFormLayout()
        self._mode_combo = QComboBox()
        self._timer_combo = QComboBox()
        form.addRow("", self._mode_combo)
        form.addRow("", self._timer_combo)
        self._form = form
        layout.addLayout(form)

        btn_font = QFont("Adwaita Sans", 10)

        row1 = QHBoxLayout()
        self._btn_new = QPushButton()
        self._btn_new.setFont(btn_font)
        self._btn_new.setMinimumHeight(36)
        self._btn_new.clicked.connect(self.new_game_clicked)
        row1.addWidget(self._btn_new)
        layout.addLayout(row1)

        row2 = QHBoxLayout()
        self._btn_draw = QPushButton()
        self._btn_draw.setFont(btn_font)
        self._btn_draw.setMinimumHeight(36)
        self._btn_draw.clicked.connect(self.draw_clicked)
        row2.addWidget(self._btn_draw)

        self._btn_resign = QPushButton()
        self._btn_resign.setFont(btn_font)
        self._btn_resign.setMinimumHeight(36)
        self._btn_resign.setStyleSheet(
            "QPushButton { background-color: #6b2020; }"
            "QPushButton:hover { background-color: #8b2020; }"
        )
        self._btn_resign.clicked.connect(self.resign_clicked)
        row2.addWidget(self._btn_resign)
        layout.addLayout(row2)

        self._mode_combo.activated.connect(self._on_mode_activated)
        self._timer_combo.activated.connect(self._on_timer_activated)

    def retranslate_ui(self) -> None:
        s = t()
        mode_index = max(0, self._mode_combo.currentIndex())
        timer_index = self._timer_combo.currentIndex()

        self._mode_combo.clear()
        for text in (s.mode_pvp, s.mode_play_white, s.mode_play_black):
            self._mode_combo.addItem(text)
        self._timer_combo.clear()
        for preset in TIMER_PRESETS:
            self._timer_combo.addItem(timer_label(preset))

        self._mode_combo.setCurrentIndex(mode_index)
        if timer_index < 0:
            timer_index = TIMER_PRESETS.index(TimeControl.five_minutes())
        self._timer_combo.setCurrentIndex(timer_index)

        self._form.labelForField(self._mode_combo).setText(s.label_mode)
        self._form.labelForField(self._timer_combo).setText(s.label_timer)
        self._btn_new.setText(s.btn_new_game)
        self._btn_draw.setText(s.btn_offer_draw)
        self._btn_resign.setText(s.btn_resign)

    def select(self, mode: PlayerMode, time_control: TimeControl) -> None:
        """Show *mode* and *time_control* without emitting change signals."""
        self._mode_combo.setCurrentIndex(_MODES.index(mode))
        if time_control in TIMER_PRESETS:
            self._timer_combo.setCurrentIndex(TIMER_PRESETS.index(time_control))

    def set_game_active(self, active: bool, *, can_act: bool = True) -> None:
        """Enable/disable draw and resign; *can_act* is false off-turn."""
        self._btn_resign.setEnabled(active and can_act)
        self._btn_draw.setEnabled(active and can_act)

    def actions_enabled(self) -> tuple[bool, bool]:
        """``(offer_draw, resign)`` button states."""
        return self._btn_draw.isEnabled(), self._btn_resign.isEnabled()

    def _on_mode_activated(self, index: int) -> None:
        self.mode_changed.emit(_MODES[index])

    def _on_timer_activated(self, index: int) -> None:
        self.time_control_changed.emit(TIMER_PRESETS[index])
