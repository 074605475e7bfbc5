"""
Session Module - Running games.

A game is either:
- Interactive: a collaborator renders the board and supplies selections
- Headless: no collaborator, used for simulations and batch runs

Headless games never touch the input channel, so simulations are
fully isolated from the player.
"""

from .game_loop import Game, GameResult, LoopState
from .interactive import InteractiveCollaborator, QueueCollaborator, SelectionChannel
from .console import ConsoleCollaborator, console_session, render_text

__all__ = [
    "Game",
    "GameResult",
    "LoopState",
    "InteractiveCollaborator",
    "QueueCollaborator",
    "SelectionChannel",
    "ConsoleCollaborator",
    "console_session",
    "render_text",
]
