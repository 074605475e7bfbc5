"""
Action System - Moves and the results of asking an actor to move.

An actor's turn ends in exactly one of:
1. TookAction: a single piece moved from one point to another
2. NoPiecesLeft: the side has no legal move, which means it lost
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .state import Point


@dataclass(frozen=True, order=True)
class Action:
    """
    One turn's move for one piece.

    Ordered by (from_point, to_point) so equally good candidates
    can be broken deterministically.
    """
    from_point: Point
    to_point: Point

    def __str__(self) -> str:
        return f"{self.from_point}->{self.to_point}"


class ActionResultType(Enum):
    TOOK_ACTION = "took_action"
    NO_PIECES_LEFT = "no_pieces_left"


@dataclass(frozen=True)
class ActionResult:
    """
    Outcome of Actor.act().

    Use the factories rather than the constructor:
        ActionResult.took(action)
        ActionResult.no_pieces_left()
    """
    result_type: ActionResultType
    action: Action | None = None

    @classmethod
    def took(cls, action: Action) -> ActionResult:
        return cls(result_type=ActionResultType.TOOK_ACTION, action=action)

    @classmethod
    def no_pieces_left(cls) -> ActionResult:
        return cls(result_type=ActionResultType.NO_PIECES_LEFT)

    @property
    def took_action(self) -> bool:
        return self.result_type == ActionResultType.TOOK_ACTION
