"""Tests for MainWindow wiring between widgets and the session controller."""

from __future__ import annotations

import random

import pytest
from PyQt6.QtWidgets import QMessageBox

from chessduel.core.enums import Color, PieceType
from chessduel.core.types import parse_square as sq
from chessduel.game.config import MatchSettings
from chessduel.game.controller import Notification, Severity
from chessduel.game.interfaces import PlayerMode, TimeControl
from chessduel.game.mover import RandomMover
from chessduel.game.outcome import DrawReason, MatchOutcome, describe_outcome
from chessduel.game.scheduler import ManualScheduler
from chessduel.ui.dialogs.promotion_dialog import PromotionDialog
from chessduel.ui.main_window import MainWindow

PROMOTION_FEN = "8/P7/8/8/8/7k/8/4K3 w - - 0 1"


def _answer(
    monkeypatch: pytest.MonkeyPatch, button: QMessageBox.StandardButton
) -> list[str]:
    asked: list[str] = []

    def question(parent, title, text, *args, **kwargs):
        asked.append(title)
        return button

    monkeypatch.setattr(QMessageBox, "question", question)
    return asked


@pytest.fixture
def make_window(scheduler: ManualScheduler):
    def _make(**settings_kwargs: object) -> MainWindow:
        settings = MatchSettings(**settings_kwargs)  # type: ignore[arg-type]
        return MainWindow(
            settings, scheduler=scheduler, mover=RandomMover(random.Random(3))
        )

    return _make


def _click(window: MainWindow, *names: str) -> None:
    for name in names:
        window.board.button(sq(name)).click()


class TestInitialRender:
    def test_fresh_window(self, make_window) -> None:
        window = make_window()
        assert window.windowTitle() == "Chessduel"
        assert window.status_text() == "White to move."
        assert window.board.square_text(sq("e1")) == "♔"
        assert window.move_panel.rows() == ["No moves yet."]
        assert window.clock_widget.display(Color.WHITE).text() == "05:00"
        assert window.control_panel.actions_enabled() == (True, True)

    def test_russian_window(self, make_window) -> None:
        window = make_window(language="Russian")
        assert window.status_text() == "Ход: Белые."
        assert window.control_panel._btn_resign.text() == "Сдаться"


class TestBoardInteraction:
    def test_click_to_move(self, make_window) -> None:
        window = make_window()
        _click(window, "e2", "e4")
        assert window.controller.state.ply_count == 1
        assert window.move_panel.rows() == ["1. e4"]
        assert window.status_text() == "Black to move."
        assert window.board.square_text(sq("e4")) == "♙"

    def test_promotion_choice(self, make_window, monkeypatch) -> None:
        monkeypatch.setattr(
            PromotionDialog,
            "ask",
            staticmethod(lambda color, parent=None: PieceType.KNIGHT),
        )
        window = make_window(start_fen=PROMOTION_FEN)
        _click(window, "a7", "a8")
        assert window.controller.state.history[-1].promotion == PieceType.KNIGHT
        assert window.board.square_text(sq("a8")) == "♘"

    def test_promotion_cancelled(self, make_window, monkeypatch) -> None:
        monkeypatch.setattr(
            PromotionDialog, "ask", staticmethod(lambda color, parent=None: None)
        )
        window = make_window(start_fen=PROMOTION_FEN)
        _click(window, "a7", "a8")
        state = window.controller.state
        assert state.pending_promotion is None
        assert state.history == ()

    def test_board_locked_on_mover_turn(
        self, make_window, scheduler: ManualScheduler
    ) -> None:
        window = make_window(mode=PlayerMode.HUMAN_BLACK_VS_MOVER)
        assert window.board.flipped
        assert window.control_panel.actions_enabled() == (False, False)
        _click(window, "e2", "e4")
        assert window.controller.state.ply_count == 0

        scheduler.advance(500)
        assert window.controller.state.ply_count == 1
        assert window.control_panel.actions_enabled() == (True, True)


class TestControls:
    def test_resign_confirmed(self, make_window, monkeypatch) -> None:
        _answer(monkeypatch, QMessageBox.StandardButton.Yes)
        window = make_window()
        window.control_panel.resign_clicked.emit()
        outcome = window.controller.state.outcome
        assert outcome == MatchOutcome.resignation(Color.BLACK)
        assert window.status_text() == describe_outcome(outcome)
        assert window.control_panel.actions_enabled() == (False, False)

    def test_resign_declined(self, make_window, monkeypatch) -> None:
        _answer(monkeypatch, QMessageBox.StandardButton.No)
        window = make_window()
        window.control_panel.resign_clicked.emit()
        assert not window.controller.state.is_terminal

    def test_draw_accepted_by_human(
        self, make_window, scheduler: ManualScheduler, monkeypatch
    ) -> None:
        asked = _answer(monkeypatch, QMessageBox.StandardButton.Yes)
        window = make_window()
        window.control_panel.draw_clicked.emit()
        assert window.controller.state.draw_offer == Color.WHITE
        assert asked == []

        scheduler.advance(0)
        assert asked == ["Draw Offer"]
        assert window.controller.state.outcome == MatchOutcome.draw(
            DrawReason.AGREEMENT
        )

    def test_draw_declined_by_human(
        self, make_window, scheduler: ManualScheduler, monkeypatch
    ) -> None:
        _answer(monkeypatch, QMessageBox.StandardButton.No)
        window = make_window()
        window.control_panel.draw_clicked.emit()
        scheduler.advance(0)
        state = window.controller.state
        assert state.draw_offer is None
        assert not state.is_terminal

    def test_mover_answers_draw_without_dialog(
        self, make_window, scheduler: ManualScheduler, monkeypatch
    ) -> None:
        asked = _answer(monkeypatch, QMessageBox.StandardButton.Yes)
        window = make_window(mode=PlayerMode.HUMAN_WHITE_VS_MOVER)
        window.control_panel.draw_clicked.emit()
        scheduler.advance(1000)
        assert asked == []
        assert window.controller.state.draw_offer is None

    def test_mode_change_starts_new_match(self, make_window) -> None:
        window = make_window()
        _click(window, "e2", "e4")
        generation = window.controller.generation
        window.control_panel.mode_changed.emit(PlayerMode.HUMAN_WHITE_VS_MOVER)
        assert window.controller.generation == generation + 1
        assert window.controller.settings.mode == PlayerMode.HUMAN_WHITE_VS_MOVER
        assert window.controller.state.history == ()

    def test_time_control_change(self, make_window) -> None:
        window = make_window()
        window.control_panel.time_control_changed.emit(TimeControl.one_minute())
        assert window.clock_widget.display(Color.WHITE).text() == "01:00"

    def test_new_game(self, make_window) -> None:
        window = make_window()
        _click(window, "e2", "e4")
        window.control_panel.new_game_clicked.emit()
        assert window.move_panel.rows() == ["No moves yet."]


class TestNotifications:
    def test_warning_goes_to_status_bar(self, make_window) -> None:
        window = make_window()
        window.controller.submit_move(sq("e7"), sq("e5"))
        assert window.statusBar().currentMessage() == (
            "Not Your Turn: It is White's turn to move."
        )

    def test_error_opens_dialog_outside_dispatch(
        self, make_window, scheduler: ManualScheduler, monkeypatch
    ) -> None:
        shown: list[str] = []
        monkeypatch.setattr(
            QMessageBox,
            "critical",
            lambda parent, title, text, *args, **kwargs: shown.append(text),
        )
        window = make_window()
        window._on_notification(Notification("Oops", "broken", Severity.ERROR))
        assert shown == []
        scheduler.advance(0)
        assert shown == ["broken"]


class TestClose:
    def test_close_stops_scheduled_work(
        self, make_window, scheduler: ManualScheduler
    ) -> None:
        window = make_window(mode=PlayerMode.HUMAN_BLACK_VS_MOVER)
        window.show()
        window.close()
        scheduler.advance(10_000)
        assert window.controller.state.ply_count == 0
        assert scheduler.pending_count == 0
