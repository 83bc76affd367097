"""Match management layer — controller, clock, negotiation, mover.

Quick start::

    from chessduel.core import parse_square
    from chessduel.game import ManualScheduler, MatchSettings, SessionController

    ctrl = SessionController(MatchSettings(), scheduler=ManualScheduler())
    ctrl.new_match()
    ctrl.submit_move(parse_square("e2"), parse_square("e4"))
"""

from chessduel.game.clock import Clock, ClockState
from chessduel.game.config import MatchSettings
from chessduel.game.controller import (
    MatchEvents,
    Notification,
    SessionController,
    Severity,
)
from chessduel.game.events import (
    ActionResult,
    MatchEvent,
    MoveOutcome,
    RejectReason,
)
from chessduel.game.highlights import HighlightStyle
from chessduel.game.interfaces import (
    TIMER_PRESETS,
    Actor,
    DrawClockPolicy,
    IMover,
    IScheduler,
    ITaskHandle,
    PlayerMode,
    TimeControl,
)
from chessduel.game.mover import RandomMover
from chessduel.game.outcome import DrawReason, MatchOutcome, OutcomeKind
from chessduel.game.pipeline import EngineInconsistencyError
from chessduel.game.scheduler import ManualScheduler
from chessduel.game.state import MoveRecord, SessionState

__all__ = [
    # Interfaces
    "IMover",
    "IScheduler",
    "ITaskHandle",
    "TimeControl",
    "TIMER_PRESETS",
    # Values
    "ActionResult",
    "Actor",
    "DrawClockPolicy",
    "DrawReason",
    "HighlightStyle",
    "MatchEvent",
    "MatchOutcome",
    "MoveOutcome",
    "MoveRecord",
    "Notification",
    "OutcomeKind",
    "PlayerMode",
    "RejectReason",
    "SessionState",
    "Severity",
    # Concrete
    "Clock",
    "ClockState",
    "EngineInconsistencyError",
    "ManualScheduler",
    "MatchEvents",
    "MatchSettings",
    "RandomMover",
    "SessionController",
]
