"""Match settings — the configuration surface of a session."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessduel.game.interfaces import DrawClockPolicy, PlayerMode, TimeControl
from chessduel.rules.chess_engine import check_fen
from chessduel.rules.interfaces import STARTING_FEN


@dataclass
class MatchSettings:
    """All user-configurable match settings.

    Changing ``mode`` or ``time_control`` through the controller starts a
    new match.
    """

    mode: PlayerMode = PlayerMode.HUMAN_VS_HUMAN
    time_control: TimeControl = field(default_factory=TimeControl.five_minutes)
    start_fen: str = STARTING_FEN

    # Timing of the asynchronous sources
    tick_interval_ms: int = 1000
    mover_delay_ms: int = 500
    mover_draw_reply_delay_ms: int = 1000

    draw_clock_policy: DrawClockPolicy = DrawClockPolicy.RESPONDER_RUNS
    language: str = "English"

    def validate(self) -> None:
        """Raise ``ValueError`` when a setting is out of range."""
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be > 0: {self.tick_interval_ms}")
        if self.mover_delay_ms < 0:
            raise ValueError(f"mover_delay_ms must be >= 0: {self.mover_delay_ms}")
        if self.mover_draw_reply_delay_ms < 0:
            raise ValueError(
                "mover_draw_reply_delay_ms must be >= 0: "
                f"{self.mover_draw_reply_delay_ms}"
            )
        if not self.start_fen.strip():
            raise ValueError("start_fen must not be empty")
        check_fen(self.start_fen)
