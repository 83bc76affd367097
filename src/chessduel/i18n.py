"""Internationalisation strings for chessduel.

Usage::

    from chessduel.i18n import t, set_language

    set_language("Russian")
    print(t().btn_resign)          # "Сдаться"
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Main window ──────────────────────────────────────────────────────
    app_title: str
    label_mode: str
    label_timer: str
    mode_pvp: str
    mode_play_white: str
    mode_play_black: str
    timer_one_minute: str
    timer_minutes: str  # "{n} Minutes"
    timer_unlimited: str
    btn_new_game: str
    btn_offer_draw: str
    btn_resign: str
    moves_header: str
    moves_empty: str
    captured_by: str  # "Captured by {color}:"
    captured_none: str  # "No pieces captured by {color}"
    clock_white: str
    clock_black: str

    # ── Status line ──────────────────────────────────────────────────────
    status_to_move: str  # "{color} to move"
    status_check_suffix: str
    status_draw_offer: str  # "{offerer} offered a draw. {responder} to respond."
    status_draw_declined: str

    # ── Outcomes ─────────────────────────────────────────────────────────
    game_over_title: str
    wins_checkmate: str  # "Checkmate! {color} wins."
    wins_resign: str  # "{loser} resigned. {color} wins."
    wins_time: str  # "{color} wins on time!"
    draw_stalemate: str
    draw_agreed: str
    draw_repetition: str
    draw_insufficient: str
    draw_automatic: str
    error_abort: str
    color_white: str
    color_black: str

    # ── Notifications ────────────────────────────────────────────────────
    note_illegal_title: str
    note_illegal_message: str
    note_draw_pending_title: str
    note_draw_pending_message: str
    note_game_over_title: str
    note_game_over_message: str
    note_wrong_side_title: str
    note_wrong_side_message: str  # "It is {color}'s turn to move."
    note_not_authorized_message: str
    note_internal_title: str
    note_internal_message: str
    note_status_error_title: str
    note_move_error_message: str

    # ── Dialogs ──────────────────────────────────────────────────────────
    resign_title: str
    resign_confirm: str
    draw_offer_title: str
    draw_offer_question: str  # "{color} offers a draw. Accept?"
    promote_title: str
    promote_label: str


# ── Built-in locales ─────────────────────────────────────────────────────────

_EN = Strings(
    app_title="Chessduel",
    label_mode="Mode:",
    label_timer="Timer:",
    mode_pvp="Player vs Player",
    mode_play_white="Play as White (vs Computer)",
    mode_play_black="Play as Black (vs Computer)",
    timer_one_minute="1 Minute",
    timer_minutes="{n} Minutes",
    timer_unlimited="Unlimited",
    btn_new_game="New Game",
    btn_offer_draw="½ Offer Draw",
    btn_resign="Resign",
    moves_header="Moves",
    moves_empty="No moves yet.",
    captured_by="Captured by {color}:",
    captured_none="No pieces captured by {color}",
    clock_white="White",
    clock_black="Black",
    status_to_move="{color} to move",
    status_check_suffix=" (Check!)",
    status_draw_offer="{offerer} offered a draw. {responder} to respond.",
    status_draw_declined="Draw offer declined.",
    game_over_title="Game Over",
    wins_checkmate="Checkmate! {color} wins.",
    wins_resign="{loser} resigned. {color} wins.",
    wins_time="{color} wins on time!",
    draw_stalemate="Stalemate! Game is a draw.",
    draw_agreed="Game drawn by agreement.",
    draw_repetition="Draw by threefold repetition.",
    draw_insufficient="Draw by insufficient material.",
    draw_automatic="Draw (e.g. 50-move rule).",
    error_abort="Error evaluating game state. Game over.",
    color_white="White",
    color_black="Black",
    note_illegal_title="Illegal Move",
    note_illegal_message="That move is not allowed.",
    note_draw_pending_title="Draw Offer Pending",
    note_draw_pending_message="Please respond to the draw offer before making a move.",
    note_game_over_title="Game Over",
    note_game_over_message="Cannot make moves, the game has ended.",
    note_wrong_side_title="Not Your Turn",
    note_wrong_side_message="It is {color}'s turn to move.",
    note_not_authorized_message="That side is played by the computer.",
    note_internal_title="Internal Error",
    note_internal_message="Move failed unexpectedly after validation. Please start a new game.",
    note_status_error_title="Game Error",
    note_move_error_message="An unexpected error occurred while validating the move.",
    resign_title="Resign",
    resign_confirm="Are you sure you want to resign?",
    draw_offer_title="Draw Offer",
    draw_offer_question="{color} offers a draw. Accept?",
    promote_title="Promote pawn",
    promote_label="Choose promotion piece:",
)

_RU = Strings(
    app_title="Chessduel",
    label_mode="Режим:",
    label_timer="Время:",
    mode_pvp="Игрок против игрока",
    mode_play_white="Играть белыми (против компьютера)",
    mode_play_black="Играть чёрными (против компьютера)",
    timer_one_minute="1 минута",
    timer_minutes="{n} минут",
    timer_unlimited="Без ограничения",
    btn_new_game="Новая игра",
    btn_offer_draw="½ Предложить ничью",
    btn_resign="Сдаться",
    moves_header="Ходы",
    moves_empty="Ходов пока нет.",
    captured_by="Взято {color}:",
    captured_none="{color} пока ничего не взяли",
    clock_white="Белые",
    clock_black="Чёрные",
    status_to_move="Ход: {color}",
    status_check_suffix=" (Шах!)",
    status_draw_offer="{offerer} предлагают ничью. Отвечают {responder}.",
    status_draw_declined="Предложение ничьей отклонено.",
    game_over_title="Игра окончена",
    wins_checkmate="Мат! {color} побеждают.",
    wins_resign="{loser} сдались. {color} побеждают.",
    wins_time="{color} побеждают по времени!",
    draw_stalemate="Пат! Ничья.",
    draw_agreed="Ничья по соглашению.",
    draw_repetition="Ничья: троекратное повторение.",
    draw_insufficient="Ничья: недостаточно материала.",
    draw_automatic="Ничья (например, правило 50 ходов).",
    error_abort="Ошибка при оценке позиции. Игра окончена.",
    color_white="Белые",
    color_black="Чёрные",
    note_illegal_title="Недопустимый ход",
    note_illegal_message="Такой ход невозможен.",
    note_draw_pending_title="Ожидается ответ на ничью",
    note_draw_pending_message="Сначала ответьте на предложение ничьей.",
    note_game_over_title="Игра окончена",
    note_game_over_message="Ходы невозможны: игра завершена.",
    note_wrong_side_title="Не ваш ход",
    note_wrong_side_message="Сейчас ходят {color}.",
    note_not_authorized_message="Этой стороной играет компьютер.",
    note_internal_title="Внутренняя ошибка",
    note_internal_message="Ход неожиданно не удался после проверки. Начните новую игру.",
    note_status_error_title="Ошибка игры",
    note_move_error_message="Непредвиденная ошибка при проверке хода.",
    resign_title="Сдаться",
    resign_confirm="Вы уверены, что хотите сдаться?",
    draw_offer_title="Предложение ничьей",
    draw_offer_question="{color} предлагают ничью. Принять?",
    promote_title="Превращение пешки",
    promote_label="Выберите фигуру:",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Russian": _RU,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active string table."""
    return _current


def set_language(language: str) -> None:
    """Switch the active language; unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
