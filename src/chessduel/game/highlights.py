"""Square highlight projection for the board surface.

Highlights are derived from a :class:`SessionState` on demand and never
stored as match state.
"""

from __future__ import annotations

from enum import IntEnum, auto

from chessduel.core.types import Square
from chessduel.game.state import SessionState
from chessduel.rules.interfaces import IRulesEngine


class HighlightStyle(IntEnum):
    """Style tags, later members drawn over earlier ones."""

    LAST_MOVE = auto()
    LEGAL_DESTINATION = auto()
    CAPTURE_DESTINATION = auto()
    SELECTED = auto()
    CHECK = auto()


def compute_highlights(
    state: SessionState, engine: IRulesEngine
) -> dict[Square, HighlightStyle]:
    """Map squares to the style they should be drawn with.

    *engine* must be positioned at ``state.position``.
    """
    marks: dict[Square, HighlightStyle] = {}

    last = state.last_move
    if last is not None:
        marks[last.origin] = HighlightStyle.LAST_MOVE
        marks[last.destination] = HighlightStyle.LAST_MOVE

    selected = state.selected_square
    if selected is not None and not state.is_terminal and state.draw_offer is None:
        mover = state.side_to_move
        for move in engine.legal_moves(selected):
            target = engine.unit_at(move.destination)
            capture = target is not None and target[0] != mover
            marks[move.destination] = (
                HighlightStyle.CAPTURE_DESTINATION
                if capture
                else HighlightStyle.LEGAL_DESTINATION
            )
        marks[selected] = HighlightStyle.SELECTED

    if state.in_check:
        king = engine.king_square(state.side_to_move)
        if king is not None:
            marks[king] = HighlightStyle.CHECK

    return marks
