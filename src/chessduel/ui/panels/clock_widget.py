"""ClockWidget — dual countdown clock display."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QSizePolicy, QVBoxLayout, QWidget

from chessduel.core.enums import Color
from chessduel.game.clock import Clock
from chessduel.i18n import t

LOW_TIME_SECONDS = 30


def format_seconds(seconds: int | None) -> str:
    """``mm:ss`` display; ``None`` means no time limit."""
    if seconds is None:
        return "∞"
    s = max(0, seconds)
    return f"{s // 60:02d}:{s % 60:02d}"


class _SingleClock(QLabel):
    """Display for one side's time."""

    def __init__(self, color: Color, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._color = color
        self._active = False
        self._is_low_time = False
        self._expired = False

        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setFont(QFont("Adwaita Sans", 22, QFont.Weight.Bold))
        self.setMinimumWidth(110)
        self.setSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Fixed)
        self.setText(format_seconds(None))
        self._apply_style()

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_low_time(self) -> bool:
        return self._is_low_time

    def show_state(self, seconds: int | None, *, active: bool, expired: bool) -> None:
        self.setText(format_seconds(seconds))
        self._active = active
        self._expired = expired
        self._is_low_time = seconds is not None and seconds < LOW_TIME_SECONDS
        self._apply_style()

    def _apply_style(self) -> None:
        if self._expired:
            self.setStyleSheet(
                "background-color: #8b2020; color: #ddd; "
                "padding: 6px 12px; border-radius: 4px;"
            )
            return
        if not self._active:
            self.setStyleSheet(
                "background-color: #2b2b2b; color: #aaa; "
                "padding: 6px 12px; border-radius: 4px;"
            )
            return
        if self._is_low_time:
            self.setStyleSheet(
                "background-color: #8b2020; color: white; "
                "padding: 6px 12px; border-radius: 4px;"
            )
            return
        self.setStyleSheet(
            "background-color: #3a7d44; color: white; "
            "padding: 6px 12px; border-radius: 4px;"
        )


class ClockWidget(QWidget):
    """Both clocks side by side; redrawn from each committed :class:`Clock`."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        self._white_clock = _SingleClock(Color.WHITE)
        self._black_clock = _SingleClock(Color.BLACK)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(8)

        self._w_label = QLabel()
        self._b_label = QLabel()
        for label, display in (
            (self._w_label, self._white_clock),
            (self._b_label, self._black_clock),
        ):
            box = QVBoxLayout()
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            label.setFont(QFont("Adwaita Sans", 9))
            box.addWidget(label)
            box.addWidget(display)
            layout.addLayout(box)

        self.retranslate_ui()

    def retranslate_ui(self) -> None:
        s = t()
        self._w_label.setText(s.clock_white)
        self._b_label.setText(s.clock_black)

    def display(self, color: Color) -> _SingleClock:
        return self._white_clock if color == Color.WHITE else self._black_clock

    def update_clock(self, clock: Clock) -> None:
        for color in (Color.WHITE, Color.BLACK):
            side = clock.state(color)
            self.display(color).show_state(
                side.remaining, active=side.running, expired=side.expired
            )
