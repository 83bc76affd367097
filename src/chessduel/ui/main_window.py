"""MainWindow — top-level window assembling all UI components."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QFont
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from chessduel.core.enums import Color
from chessduel.core.types import Square
from chessduel.game.config import MatchSettings
from chessduel.game.controller import Notification, SessionController, Severity
from chessduel.game.events import MoveOutcome
from chessduel.game.interfaces import Actor, IMover, IScheduler, PlayerMode, TimeControl
from chessduel.game.outcome import describe_status
from chessduel.game.state import SessionState
from chessduel.i18n import set_language, t
from chessduel.ui.board.board_widget import BoardWidget
from chessduel.ui.dialogs.promotion_dialog import PromotionDialog
from chessduel.ui.panels.clock_widget import ClockWidget
from chessduel.ui.panels.control_panel import ControlPanel
from chessduel.ui.panels.move_panel import MovePanel
from chessduel.ui.qt_scheduler import QtScheduler

_LOGGER = logging.getLogger(__name__)

_STATUS_TIMEOUT_MS = 4000


class MainWindow(QMainWindow):
    """Main application window for Chessduel."""

    def __init__(
        self,
        settings: MatchSettings | None = None,
        *,
        scheduler: IScheduler | None = None,
        mover: IMover | None = None,
    ) -> None:
        super().__init__()
        settings = settings if settings is not None else MatchSettings()
        set_language(settings.language)
        self.setMinimumSize(760, 560)
        self.resize(980, 680)

        self._scheduler = scheduler if scheduler is not None else QtScheduler(self)
        self._controller = SessionController(
            settings, scheduler=self._scheduler, mover=mover
        )

        self._setup_ui()
        self._connect_signals()
        self._connect_game_events()
        self.retranslate_ui()

        self._controller.new_match()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        left = QVBoxLayout()
        self._status_label = QLabel()
        self._status_label.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        left.addWidget(self._status_label)

        self._board = BoardWidget()
        left.addWidget(self._board, stretch=1)
        root.addLayout(left, stretch=3)

        right = QVBoxLayout()
        right.setSpacing(6)

        self._clock_widget = ClockWidget()
        right.addWidget(self._clock_widget)

        self._control_panel = ControlPanel()
        right.addWidget(self._control_panel)

        self._move_panel = MovePanel()
        right.addWidget(self._move_panel, stretch=1)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(300)
        root.addWidget(right_widget)

        self.setStatusBar(QStatusBar())

    def _connect_signals(self) -> None:
        self._board.square_clicked.connect(self._on_square_clicked)
        cp = self._control_panel
        cp.new_game_clicked.connect(self._on_new_game)
        cp.draw_clicked.connect(self._on_offer_draw)
        cp.resign_clicked.connect(self._on_resign)
        cp.mode_changed.connect(self._on_mode_changed)
        cp.time_control_changed.connect(self._on_time_control_changed)

    def _connect_game_events(self) -> None:
        events = self._controller.events
        events.on_state_changed.append(self._on_state_changed)
        events.on_notification.append(self._on_notification)
        events.on_draw_offered.append(self._on_draw_offered)

    def retranslate_ui(self) -> None:
        self.setWindowTitle(t().app_title)
        self._clock_widget.retranslate_ui()
        self._control_panel.retranslate_ui()
        self._move_panel.retranslate_ui()
        settings = self._controller.settings
        self._control_panel.select(settings.mode, settings.time_control)
        self._refresh(self._controller.state)

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def controller(self) -> SessionController:
        return self._controller

    @property
    def board(self) -> BoardWidget:
        return self._board

    @property
    def clock_widget(self) -> ClockWidget:
        return self._clock_widget

    @property
    def move_panel(self) -> MovePanel:
        return self._move_panel

    @property
    def control_panel(self) -> ControlPanel:
        return self._control_panel

    def status_text(self) -> str:
        return self._status_label.text()

    # ── User actions ─────────────────────────────────────────────────────

    def _on_square_clicked(self, square: Square) -> None:
        result = self._controller.select_square(square)
        if isinstance(result, MoveOutcome) and result.needs_promotion_choice:
            self._ask_promotion()

    def _ask_promotion(self) -> None:
        pending = self._controller.state.pending_promotion
        if pending is None:
            return
        choice = PromotionDialog.ask(pending.color, self)
        if choice is None:
            self._controller.cancel_promotion()
        else:
            self._controller.resolve_promotion(choice)

    def _on_new_game(self) -> None:
        self._controller.new_match()

    def _on_mode_changed(self, mode: PlayerMode) -> None:
        self._controller.configure(mode=mode)

    def _on_time_control_changed(self, time_control: TimeControl) -> None:
        self._controller.configure(time_control=time_control)

    def _on_offer_draw(self) -> None:
        self._controller.offer_draw()

    def _on_resign(self) -> None:
        if self._controller.state.is_terminal:
            return
        reply = QMessageBox.question(
            self,
            t().resign_title,
            t().resign_confirm,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply == QMessageBox.StandardButton.Yes:
            self._controller.resign()

    # ── Controller events ────────────────────────────────────────────────

    def _on_state_changed(self, state: SessionState) -> None:
        self._refresh(state)

    def _on_notification(self, note: Notification) -> None:
        self.statusBar().showMessage(
            f"{note.title}: {note.message}", _STATUS_TIMEOUT_MS
        )
        if note.severity == Severity.ERROR:
            self._scheduler.call_later(
                0, lambda: QMessageBox.critical(self, note.title, note.message)
            )

    def _on_draw_offered(self, offerer: Color) -> None:
        responder = offerer.opposite
        if self._controller.settings.mode.controller_of(responder) != Actor.HUMAN:
            return
        # Asked after the offer has been committed, outside the dispatch.
        generation = self._controller.generation
        self._scheduler.call_later(0, lambda: self._ask_draw_response(generation))

    def _ask_draw_response(self, generation: int) -> None:
        state = self._controller.state
        if generation != self._controller.generation or state.draw_offer is None:
            return
        s = t()
        offerer = s.color_white if state.draw_offer == Color.WHITE else s.color_black
        reply = QMessageBox.question(
            self,
            s.draw_offer_title,
            s.draw_offer_question.format(color=offerer),
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply == QMessageBox.StandardButton.Yes:
            self._controller.accept_draw()
        else:
            self._controller.reject_draw()

    # ── Rendering ────────────────────────────────────────────────────────

    def _refresh(self, state: SessionState) -> None:
        mode = self._controller.settings.mode
        human_to_move = mode.is_allowed(Actor.HUMAN, state.side_to_move)

        self._board.set_flipped(mode.human_color == Color.BLACK)
        self._board.set_position(state.fen)
        self._board.set_highlights(self._controller.highlights())
        self._board.set_interactive(
            not state.is_terminal and state.draw_offer is None and human_to_move
        )
        self._clock_widget.update_clock(state.clock)
        self._move_panel.update_from_state(state)
        self._status_label.setText(describe_status(state))
        self._control_panel.set_game_active(
            not state.is_terminal,
            can_act=state.draw_offer is None and human_to_move,
        )

    def closeEvent(self, event: QCloseEvent | None) -> None:
        _LOGGER.debug("Main window closing")
        self._controller.shutdown()
        super().closeEvent(event)
