"""
Engine Core - Board rules for the diagonal-capture game.

The engine:
1. Builds the starting layout
2. Generates legal destinations and per-side move maps
3. Applies moves (promotion, relocation, capture sweep)
"""

from .state import Board, Cell, Piece, Point, Side
from .action import Action, ActionResult, ActionResultType
from .errors import ChannelClosed, ConfigurationError, DraughtsimError, InvariantViolation

__all__ = [
    "Board",
    "Cell",
    "Piece",
    "Point",
    "Side",
    "Action",
    "ActionResult",
    "ActionResultType",
    "ChannelClosed",
    "ConfigurationError",
    "DraughtsimError",
    "InvariantViolation",
]
