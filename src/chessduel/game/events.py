"""Events accepted by ``SessionController.dispatch`` and the results they yield.

Every external trigger (gesture, button, timer tick, deferred mover call)
is expressed as one of these frozen events, so the controller has a single
entry point that runs each event to completion.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TypeAlias

from chessduel.core.enums import PieceType
from chessduel.core.move import MoveResult
from chessduel.core.types import Square
from chessduel.game.config import MatchSettings
from chessduel.game.interfaces import Actor
from chessduel.game.state import PendingPromotion

# ── Events ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class NewMatch:
    settings: MatchSettings | None = None


@dataclass(frozen=True, slots=True)
class SubmitMove:
    origin: Square
    destination: Square
    promotion: PieceType | None = None
    actor: Actor = Actor.HUMAN


@dataclass(frozen=True, slots=True)
class ResolvePromotion:
    choice: PieceType
    actor: Actor = Actor.HUMAN


@dataclass(frozen=True, slots=True)
class CancelPromotion:
    pass


@dataclass(frozen=True, slots=True)
class SelectSquare:
    """Board click: select an origin, change selection, or move there."""

    square: Square


@dataclass(frozen=True, slots=True)
class DropPiece:
    """Drag-and-drop gesture from *origin* onto *destination*."""

    origin: Square
    destination: Square


@dataclass(frozen=True, slots=True)
class OfferDraw:
    actor: Actor = Actor.HUMAN


@dataclass(frozen=True, slots=True)
class AcceptDraw:
    actor: Actor = Actor.HUMAN


@dataclass(frozen=True, slots=True)
class RejectDraw:
    actor: Actor = Actor.HUMAN


@dataclass(frozen=True, slots=True)
class Resign:
    actor: Actor = Actor.HUMAN


@dataclass(frozen=True, slots=True)
class Tick:
    generation: int


@dataclass(frozen=True, slots=True)
class MoverTurn:
    generation: int


@dataclass(frozen=True, slots=True)
class MoverDrawReply:
    generation: int


MatchEvent: TypeAlias = (
    NewMatch
    | SubmitMove
    | ResolvePromotion
    | CancelPromotion
    | SelectSquare
    | DropPiece
    | OfferDraw
    | AcceptDraw
    | RejectDraw
    | Resign
    | Tick
    | MoverTurn
    | MoverDrawReply
)


# ── Results ──────────────────────────────────────────────────────────────────


class RejectReason(IntEnum):
    ILLEGAL_MOVE = auto()
    GAME_OVER = auto()
    DRAW_OFFER_PENDING = auto()
    NO_DRAW_OFFER = auto()
    WRONG_SIDE = auto()
    NOT_AUTHORIZED = auto()
    NO_PENDING_PROMOTION = auto()
    ENGINE_INCONSISTENCY = auto()
    STALE = auto()

    @property
    def is_protocol_violation(self) -> bool:
        """Attempted while terminal or while a draw offer blocks play."""
        return self in (RejectReason.GAME_OVER, RejectReason.DRAW_OFFER_PENDING)


class MoveStatus(IntEnum):
    ACCEPTED = auto()
    REJECTED = auto()
    NEEDS_PROMOTION = auto()


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What the move pipeline did with a submission."""

    status: MoveStatus
    result: MoveResult | None = None
    reason: RejectReason | None = None
    pending: PendingPromotion | None = None

    @classmethod
    def accepted(cls, result: MoveResult) -> MoveOutcome:
        return cls(MoveStatus.ACCEPTED, result=result)

    @classmethod
    def rejected(cls, reason: RejectReason) -> MoveOutcome:
        return cls(MoveStatus.REJECTED, reason=reason)

    @classmethod
    def needs_promotion(cls, pending: PendingPromotion) -> MoveOutcome:
        return cls(MoveStatus.NEEDS_PROMOTION, pending=pending)

    @property
    def is_accepted(self) -> bool:
        return self.status == MoveStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == MoveStatus.REJECTED

    @property
    def needs_promotion_choice(self) -> bool:
        return self.status == MoveStatus.NEEDS_PROMOTION


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of a non-move operation (draw handshake, resignation, ticks)."""

    ok: bool
    reason: RejectReason | None = None

    @classmethod
    def done(cls) -> ActionResult:
        return cls(True)

    @classmethod
    def refused(cls, reason: RejectReason) -> ActionResult:
        return cls(False, reason)


DispatchResult: TypeAlias = MoveOutcome | ActionResult
