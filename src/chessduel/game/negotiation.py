"""Draw negotiation and resignation transitions.

Draw offer states are ``None`` and ``Offered(by=color)``, stored as
``SessionState.draw_offer``. While an offer is pending no move may be
made, and only the side that did not offer may answer it.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from chessduel.game.config import MatchSettings
from chessduel.game.events import ActionResult, RejectReason
from chessduel.game.interfaces import Actor, DrawClockPolicy
from chessduel.game.outcome import DrawReason, MatchOutcome, finish
from chessduel.game.state import SessionState

_LOGGER = logging.getLogger(__name__)

Transition = tuple[SessionState, ActionResult]


def offer_draw(
    state: SessionState, settings: MatchSettings, actor: Actor = Actor.HUMAN
) -> Transition:
    """Side to move offers a draw; its clock stops."""
    if state.is_terminal:
        return state, ActionResult.refused(RejectReason.GAME_OVER)
    if state.draw_offer is not None:
        return state, ActionResult.refused(RejectReason.DRAW_OFFER_PENDING)
    offerer = state.side_to_move
    if not settings.mode.is_allowed(actor, offerer):
        return state, ActionResult.refused(RejectReason.NOT_AUTHORIZED)

    if settings.draw_clock_policy == DrawClockPolicy.PAUSE_BOTH:
        clock = state.clock.stop()
    else:
        clock = state.clock.set_running(offerer.opposite, True)

    _LOGGER.debug("%s offers a draw", offerer)
    return (
        replace(
            state,
            draw_offer=offerer,
            clock=clock,
            pending_promotion=None,
            selected_square=None,
        ),
        ActionResult.done(),
    )


def _check_response(
    state: SessionState, settings: MatchSettings, actor: Actor
) -> RejectReason | None:
    if state.is_terminal:
        return RejectReason.GAME_OVER
    responder = state.draw_responder
    if responder is None:
        return RejectReason.NO_DRAW_OFFER
    if not settings.mode.is_allowed(actor, responder):
        return RejectReason.NOT_AUTHORIZED
    return None


def accept_draw(
    state: SessionState, settings: MatchSettings, actor: Actor = Actor.HUMAN
) -> Transition:
    """Responder accepts: the match ends drawn by agreement."""
    reason = _check_response(state, settings, actor)
    if reason is not None:
        return state, ActionResult.refused(reason)
    return finish(state, MatchOutcome.draw(DrawReason.AGREEMENT)), ActionResult.done()


def reject_draw(
    state: SessionState, settings: MatchSettings, actor: Actor = Actor.HUMAN
) -> Transition:
    """Responder declines: the offer is cleared and play resumes."""
    reason = _check_response(state, settings, actor)
    if reason is not None:
        return state, ActionResult.refused(reason)
    return (
        replace(
            state,
            draw_offer=None,
            clock=state.clock.set_running(state.side_to_move, True),
        ),
        ActionResult.done(),
    )


def resign(
    state: SessionState, settings: MatchSettings, actor: Actor = Actor.HUMAN
) -> Transition:
    """Side to move concedes the match irrevocably."""
    if state.is_terminal:
        return state, ActionResult.refused(RejectReason.GAME_OVER)
    if state.draw_offer is not None:
        return state, ActionResult.refused(RejectReason.DRAW_OFFER_PENDING)
    loser = state.side_to_move
    if not settings.mode.is_allowed(actor, loser):
        return state, ActionResult.refused(RejectReason.NOT_AUTHORIZED)
    _LOGGER.debug("%s resigns", loser)
    return finish(state, MatchOutcome.resignation(loser.opposite)), ActionResult.done()
