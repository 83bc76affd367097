"""SessionController — the single owner of a match.

Coordinates: MovePipeline, Clock, draw negotiation, the random mover.
Every trigger goes through :meth:`SessionController.dispatch` and runs to
completion before the next one; deferred work (clock ticks, mover moves,
mover draw replies) is scheduled on an :class:`IScheduler` and carries the
generation of the match it belongs to.

Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import IntEnum, auto

from chessduel.core.enums import Color, PieceType
from chessduel.core.move import Move
from chessduel.core.types import Square
from chessduel.game.config import MatchSettings
from chessduel.game.events import (
    AcceptDraw,
    ActionResult,
    CancelPromotion,
    DispatchResult,
    DropPiece,
    MatchEvent,
    MoveOutcome,
    MoverDrawReply,
    MoverTurn,
    NewMatch,
    OfferDraw,
    RejectDraw,
    RejectReason,
    Resign,
    ResolvePromotion,
    SelectSquare,
    SubmitMove,
    Tick,
)
from chessduel.game.highlights import HighlightStyle, compute_highlights
from chessduel.game.interfaces import (
    Actor,
    IMover,
    IScheduler,
    ITaskHandle,
    PlayerMode,
    TimeControl,
)
from chessduel.game.mover import RandomMover
from chessduel.game.negotiation import (
    Transition,
    accept_draw,
    offer_draw,
    reject_draw,
    resign,
)
from chessduel.game.outcome import (
    MatchOutcome,
    OutcomeKind,
    apply_resolution,
    describe_outcome,
    finish,
)
from chessduel.game.pipeline import EngineInconsistencyError, MovePipeline
from chessduel.game.state import MoveRecord, SessionState
from chessduel.i18n import t
from chessduel.rules.chess_engine import ChessRulesEngine
from chessduel.rules.interfaces import (
    EngineFactory,
    IRulesEngine,
    PositionSnapshot,
    engine_at,
)

_LOGGER = logging.getLogger(__name__)


# ── Notifications ────────────────────────────────────────────────────────────


class Severity(IntEnum):
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class Notification:
    """A transient, user-facing message."""

    title: str
    message: str
    severity: Severity = Severity.INFO


# ── Event definitions ────────────────────────────────────────────────────────

StateCallback = Callable[[SessionState], None]
MoveCallback = Callable[[MoveRecord, SessionState], None]
GameOverCallback = Callable[[MatchOutcome], None]
NotificationCallback = Callable[[Notification], None]
DrawOfferCallback = Callable[[Color], None]  # offerer


@dataclass
class MatchEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_state_changed: list[StateCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_notification: list[NotificationCallback] = field(default_factory=list)
    on_draw_offered: list[DrawOfferCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class SessionController:
    """Owns the session state and serialises every change to it.

    Single-threaded: all calls, including scheduler callbacks, must arrive
    on the same thread (the Qt main thread in the application).
    Nothing runs until :meth:`new_match` starts the first match.
    """

    __slots__ = (
        "_settings",
        "_scheduler",
        "_engine_factory",
        "_pipeline",
        "_mover",
        "_state",
        "_generation",
        "_ticker",
        "_mover_task",
        "_draw_reply_task",
        "_query_engine",
        "events",
    )

    def __init__(
        self,
        settings: MatchSettings | None = None,
        *,
        scheduler: IScheduler,
        engine_factory: EngineFactory = ChessRulesEngine,
        mover: IMover | None = None,
    ) -> None:
        self._settings = settings if settings is not None else MatchSettings()
        self._settings.validate()
        self._scheduler = scheduler
        self._engine_factory = engine_factory
        self._pipeline = MovePipeline(engine_factory)
        self._mover: IMover = mover if mover is not None else RandomMover()
        self._generation = 0
        self._ticker: ITaskHandle | None = None
        self._mover_task: ITaskHandle | None = None
        self._draw_reply_task: ITaskHandle | None = None
        self._query_engine: tuple[PositionSnapshot, IRulesEngine] | None = None
        self._state = SessionState.initial(
            self._settings.time_control, start_fen=self._settings.start_fen
        )
        self.events = MatchEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def settings(self) -> MatchSettings:
        return self._settings

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def mover(self) -> IMover:
        return self._mover

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_match(self, settings: MatchSettings | None = None) -> SessionState:
        """Discard the current match and start a fresh one."""
        self._dispatch(NewMatch(settings))
        return self._state

    def configure(
        self,
        *,
        mode: PlayerMode | None = None,
        time_control: TimeControl | None = None,
    ) -> SessionState:
        """Change player mode and/or time control; always starts a new match."""
        changes: dict[str, object] = {}
        if mode is not None:
            changes["mode"] = mode
        if time_control is not None:
            changes["time_control"] = time_control
        return self.new_match(replace(self._settings, **changes))

    def shutdown(self) -> None:
        """Cancel all scheduled work; late callbacks become no-ops."""
        self._generation += 1
        self._cancel_scheduled()
        _LOGGER.debug("Session controller shut down")

    # ── Event entry point ────────────────────────────────────────────────

    def dispatch(self, event: MatchEvent) -> SessionState:
        """Run *event* to completion and return the resulting state."""
        self._dispatch(event)
        return self._state

    # ── Named operations ─────────────────────────────────────────────────

    def submit_move(
        self,
        origin: Square,
        destination: Square,
        promotion: PieceType | None = None,
        actor: Actor = Actor.HUMAN,
    ) -> MoveOutcome:
        return self._as_move_outcome(
            self._dispatch(SubmitMove(origin, destination, promotion, actor))
        )

    def resolve_promotion(
        self, choice: PieceType, actor: Actor = Actor.HUMAN
    ) -> MoveOutcome:
        return self._as_move_outcome(self._dispatch(ResolvePromotion(choice, actor)))

    def cancel_promotion(self) -> DispatchResult:
        return self._dispatch(CancelPromotion())

    def select_square(self, square: Square) -> DispatchResult:
        return self._dispatch(SelectSquare(square))

    def drop_piece(self, origin: Square, destination: Square) -> MoveOutcome:
        return self._as_move_outcome(self._dispatch(DropPiece(origin, destination)))

    def offer_draw(self, actor: Actor = Actor.HUMAN) -> DispatchResult:
        return self._dispatch(OfferDraw(actor))

    def accept_draw(self, actor: Actor = Actor.HUMAN) -> DispatchResult:
        return self._dispatch(AcceptDraw(actor))

    def reject_draw(self, actor: Actor = Actor.HUMAN) -> DispatchResult:
        return self._dispatch(RejectDraw(actor))

    def resign(self, actor: Actor = Actor.HUMAN) -> DispatchResult:
        return self._dispatch(Resign(actor))

    def tick(self) -> DispatchResult:
        """Advance the running clock by one second."""
        return self._dispatch(Tick(self._generation))

    # ── Queries ──────────────────────────────────────────────────────────

    def highlights(self) -> dict[Square, HighlightStyle]:
        return compute_highlights(self._state, self._engine())

    def unit_at(self, square: Square) -> tuple[Color, PieceType] | None:
        return self._engine().unit_at(square)

    def legal_moves(self, from_square: Square | None = None) -> list[Move]:
        if self._state.is_terminal:
            return []
        return self._engine().legal_moves(from_square)

    def sorted_captures(self, color: Color) -> list[PieceType]:
        """Pieces *color* has captured, most valuable first."""
        return self._state.captures.sorted_by(color)

    # ── Dispatch ─────────────────────────────────────────────────────────

    def _dispatch(self, event: MatchEvent) -> DispatchResult:
        if isinstance(event, NewMatch):
            (event.settings or self._settings).validate()
        try:
            return self._handle(event)
        except Exception as exc:
            _LOGGER.exception("Unhandled error while processing %r", event)
            self._abort(f"{type(exc).__name__}: {exc}")
            return ActionResult.refused(RejectReason.ENGINE_INCONSISTENCY)

    def _handle(self, event: MatchEvent) -> DispatchResult:
        if isinstance(event, NewMatch):
            self._start(event.settings)
            return ActionResult.done()
        if isinstance(event, SubmitMove):
            move = Move(event.origin, event.destination, event.promotion)
            return self._run_pipeline(
                lambda: self._pipeline.submit(
                    self._state, self._settings, move, event.actor
                ),
                event.actor,
            )
        if isinstance(event, ResolvePromotion):
            return self._run_pipeline(
                lambda: self._pipeline.resolve_promotion(
                    self._state, self._settings, event.choice, event.actor
                ),
                event.actor,
            )
        if isinstance(event, CancelPromotion):
            return self._cancel_promotion()
        if isinstance(event, SelectSquare):
            return self._select(event.square)
        if isinstance(event, DropPiece):
            return self._handle(SubmitMove(event.origin, event.destination))
        if isinstance(event, OfferDraw):
            return self._offer(event.actor)
        if isinstance(event, AcceptDraw):
            return self._apply_transition(
                accept_draw(self._state, self._settings, event.actor)
            )
        if isinstance(event, RejectDraw):
            return self._reject(event.actor)
        if isinstance(event, Resign):
            return self._apply_transition(
                resign(self._state, self._settings, event.actor)
            )
        if isinstance(event, Tick):
            return self._tick(event.generation)
        if isinstance(event, MoverTurn):
            return self._mover_turn(event.generation)
        if isinstance(event, MoverDrawReply):
            return self._mover_draw_reply(event.generation)
        raise TypeError(f"Unknown event: {event!r}")

    # ── Handlers ─────────────────────────────────────────────────────────

    def _start(self, settings: MatchSettings | None) -> None:
        settings = settings if settings is not None else self._settings
        generation = self._generation + 1
        fresh = SessionState.initial(
            settings.time_control,
            generation=generation,
            start_fen=settings.start_fen,
        )

        self._settings = settings
        self._generation = generation
        self._cancel_scheduled()
        self._state = fresh
        fresh = apply_resolution(fresh, self._engine())
        self._state = fresh
        _LOGGER.info(
            "New match #%d: %s, %r",
            generation,
            self._settings.mode.name,
            self._settings.time_control,
        )

        if not fresh.is_terminal and not fresh.clock.is_unlimited:
            self._ticker = self._scheduler.call_every(
                self._settings.tick_interval_ms,
                lambda: self._dispatch(Tick(generation)),
            )
        self._emit_state()
        if fresh.is_terminal:
            self._emit_game_over(fresh.outcome)
        self._schedule_mover()

    def _run_pipeline(
        self,
        run: Callable[[], tuple[SessionState, MoveOutcome]],
        actor: Actor,
    ) -> MoveOutcome:
        try:
            new_state, outcome = run()
        except EngineInconsistencyError as exc:
            _LOGGER.error("Engine inconsistency: %s", exc)
            self._abort(str(exc))
            return MoveOutcome.rejected(RejectReason.ENGINE_INCONSISTENCY)
        except Exception:
            _LOGGER.exception("Rules engine failed while validating a move")
            s = t()
            self._notify(
                s.note_status_error_title, s.note_move_error_message, Severity.ERROR
            )
            return MoveOutcome.rejected(RejectReason.ILLEGAL_MOVE)

        if outcome.is_rejected:
            _LOGGER.debug("%s move rejected: %s", actor.name, outcome.reason)
            if actor == Actor.HUMAN and outcome.reason is not None:
                self._notify_rejection(outcome.reason)
            return outcome

        record = None
        if outcome.is_accepted and outcome.result is not None:
            record = MoveRecord.from_result(outcome.result)
        self._commit(new_state, record)
        self._after_change()
        return outcome

    def _cancel_promotion(self) -> ActionResult:
        state = self._state
        if state.pending_promotion is None:
            return ActionResult.refused(RejectReason.NO_PENDING_PROMOTION)
        self._commit(replace(state, pending_promotion=None, selected_square=None))
        return ActionResult.done()

    def _select(self, square: Square) -> DispatchResult:
        state = self._state
        if not 0 <= square < 64:
            return ActionResult.refused(RejectReason.ILLEGAL_MOVE)
        if state.is_terminal:
            return ActionResult.refused(RejectReason.GAME_OVER)
        if state.draw_offer is not None:
            return ActionResult.refused(RejectReason.DRAW_OFFER_PENDING)
        if state.pending_promotion is not None:
            return ActionResult.refused(RejectReason.ILLEGAL_MOVE)
        side = state.side_to_move
        if not self._settings.mode.is_allowed(Actor.HUMAN, side):
            return ActionResult.refused(RejectReason.NOT_AUTHORIZED)

        unit = self._engine().unit_at(square)
        own_piece = unit is not None and unit[0] == side
        selected = state.selected_square

        if selected is None:
            if not own_piece:
                return ActionResult.refused(RejectReason.WRONG_SIDE)
            self._commit(replace(state, selected_square=square))
            return ActionResult.done()
        if square == selected:
            self._commit(replace(state, selected_square=None))
            return ActionResult.done()
        if own_piece:
            self._commit(replace(state, selected_square=square))
            return ActionResult.done()

        outcome = self._handle(SubmitMove(selected, square))
        if isinstance(outcome, MoveOutcome) and outcome.is_rejected:
            current = self._state
            if current.selected_square is not None:
                self._commit(replace(current, selected_square=None))
        return outcome

    def _offer(self, actor: Actor) -> ActionResult:
        result = self._apply_transition(offer_draw(self._state, self._settings, actor))
        if result.ok and self._state.draw_offer is not None:
            offerer = self._state.draw_offer
            for cb in self.events.on_draw_offered:
                cb(offerer)
        return result

    def _reject(self, actor: Actor) -> ActionResult:
        result = self._apply_transition(reject_draw(self._state, self._settings, actor))
        if result.ok:
            self._notify(t().draw_offer_title, t().status_draw_declined)
        return result

    def _apply_transition(self, transition: Transition) -> ActionResult:
        new_state, result = transition
        if not result.ok:
            _LOGGER.debug("Action refused: %s", result.reason)
            return result
        self._commit(new_state)
        self._after_change()
        return result

    def _tick(self, generation: int) -> ActionResult:
        if generation != self._generation:
            return ActionResult.refused(RejectReason.STALE)
        state = self._state
        if state.is_terminal:
            return ActionResult.refused(RejectReason.GAME_OVER)
        clock, expired = state.clock.tick()
        if expired is None:
            if clock != state.clock:
                self._commit(replace(state, clock=clock))
            return ActionResult.done()
        _LOGGER.info("%s flag fell", expired)
        expired_state = replace(state, clock=clock)
        self._commit(finish(expired_state, MatchOutcome.time_expired(expired.opposite)))
        return ActionResult.done()

    def _mover_turn(self, generation: int) -> DispatchResult:
        state = self._state
        mover_color = self._settings.mode.mover_color
        if (
            generation != self._generation
            or mover_color is None
            or state.is_terminal
            or state.draw_offer is not None
            or state.side_to_move != mover_color
        ):
            _LOGGER.debug("Dropping stale mover turn for match #%d", generation)
            return ActionResult.refused(RejectReason.STALE)

        try:
            move = self._mover.choose_move(self._engine().legal_moves())
        except Exception:
            _LOGGER.exception("%s mover failed to choose a move", self._mover.name)
            return ActionResult.refused(RejectReason.ILLEGAL_MOVE)
        if move is None:
            _LOGGER.warning("%s mover has no legal move to play", self._mover.name)
            return ActionResult.refused(RejectReason.ILLEGAL_MOVE)

        _LOGGER.debug("%s mover plays %s", self._mover.name, move)
        outcome = self._handle(
            SubmitMove(move.origin, move.destination, move.promotion, Actor.MOVER)
        )
        if isinstance(outcome, MoveOutcome) and outcome.needs_promotion_choice:
            outcome = self._handle(ResolvePromotion(PieceType.QUEEN, Actor.MOVER))
        return outcome

    def _mover_draw_reply(self, generation: int) -> DispatchResult:
        state = self._state
        mover_color = self._settings.mode.mover_color
        if (
            generation != self._generation
            or mover_color is None
            or state.draw_responder != mover_color
        ):
            return ActionResult.refused(RejectReason.STALE)
        _LOGGER.debug("%s mover declines the draw offer", self._mover.name)
        return self._reject(Actor.MOVER)

    # ── Internal ─────────────────────────────────────────────────────────

    def _engine(self) -> IRulesEngine:
        """Query engine for the current position, rebuilt when it changes."""
        position = self._state.position
        cached = self._query_engine
        if cached is None or cached[0] != position:
            cached = (position, engine_at(self._engine_factory, position))
            self._query_engine = cached
        return cached[1]

    def _commit(
        self, new_state: SessionState, record: MoveRecord | None = None
    ) -> None:
        previous = self._state
        self._state = new_state
        if record is not None:
            for cb in self.events.on_move:
                cb(record, new_state)
        self._emit_state()
        if new_state.is_terminal and not previous.is_terminal:
            self._cancel_scheduled()
            self._emit_game_over(new_state.outcome)

    def _abort(self, detail: str) -> None:
        s = t()
        if not self._state.is_terminal:
            self._commit(finish(self._state, MatchOutcome.error_abort(detail)))
        self._notify(s.note_internal_title, s.note_internal_message, Severity.ERROR)

    def _after_change(self) -> None:
        self._schedule_mover()

    def _schedule_mover(self) -> None:
        state = self._state
        mover_color = self._settings.mode.mover_color
        if mover_color is None or state.is_terminal:
            return
        generation = self._generation

        if state.draw_offer is not None:
            if state.draw_responder == mover_color and not _active(self._draw_reply_task):
                self._draw_reply_task = self._scheduler.call_later(
                    self._settings.mover_draw_reply_delay_ms,
                    lambda: self._dispatch(MoverDrawReply(generation)),
                )
            return

        if state.side_to_move == mover_color and not _active(self._mover_task):
            self._mover_task = self._scheduler.call_later(
                self._settings.mover_delay_ms,
                lambda: self._dispatch(MoverTurn(generation)),
            )

    def _cancel_scheduled(self) -> None:
        for task in (self._ticker, self._mover_task, self._draw_reply_task):
            if task is not None:
                task.cancel()
        self._ticker = None
        self._mover_task = None
        self._draw_reply_task = None

    def _as_move_outcome(self, result: DispatchResult) -> MoveOutcome:
        if isinstance(result, MoveOutcome):
            return result
        return MoveOutcome.rejected(result.reason or RejectReason.ILLEGAL_MOVE)

    # ── Emission ─────────────────────────────────────────────────────────

    def _emit_state(self) -> None:
        for cb in self.events.on_state_changed:
            cb(self._state)

    def _emit_game_over(self, outcome: MatchOutcome) -> None:
        severity = (
            Severity.ERROR if outcome.kind == OutcomeKind.ERROR_ABORT else Severity.INFO
        )
        self._notify(t().game_over_title, describe_outcome(outcome), severity)
        for cb in self.events.on_game_over:
            cb(outcome)

    def _notify(
        self, title: str, message: str, severity: Severity = Severity.INFO
    ) -> None:
        note = Notification(title, message, severity)
        for cb in self.events.on_notification:
            cb(note)

    def _notify_rejection(self, reason: RejectReason) -> None:
        s = t()
        if reason == RejectReason.ILLEGAL_MOVE:
            self._notify(s.note_illegal_title, s.note_illegal_message, Severity.WARNING)
        elif reason == RejectReason.DRAW_OFFER_PENDING:
            self._notify(
                s.note_draw_pending_title, s.note_draw_pending_message, Severity.WARNING
            )
        elif reason == RejectReason.GAME_OVER:
            self._notify(
                s.note_game_over_title, s.note_game_over_message, Severity.WARNING
            )
        elif reason == RejectReason.WRONG_SIDE:
            side = self._state.side_to_move
            color = s.color_white if side == Color.WHITE else s.color_black
            self._notify(
                s.note_wrong_side_title,
                s.note_wrong_side_message.format(color=color),
                Severity.WARNING,
            )
        elif reason == RejectReason.NOT_AUTHORIZED:
            self._notify(
                s.note_wrong_side_title, s.note_not_authorized_message, Severity.WARNING
            )


def _active(task: ITaskHandle | None) -> bool:
    return task is not None and task.is_active
