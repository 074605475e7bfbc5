"""
Game Loop - Turn sequencing and termination.

The loop:
1. (Interactive only) stop if an exit was requested
2. Stop if a winner has been recorded
3. Ask the side to move for an action
4. NoPiecesLeft -> the other side wins
5. Otherwise validate, apply, count the move, render
6. Hand the turn to the other side

A game is either interactive (a collaborator is attached, humans
may play, AI moves are paced) or headless (used for simulations,
never touches any input or display).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
import asyncio
import logging
import random

from ..bots.actor import Actor, create_actor
from ..config import DEFAULT_SETTINGS, GameSettings
from ..engine_core.errors import ChannelClosed, ConfigurationError
from ..engine_core.state import Board, Side

if TYPE_CHECKING:
    from ..bots.policy import ActorType
    from .interactive import InteractiveCollaborator

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of a game."""
    CREATED = "created"
    RUNNING = "running"
    DECIDED = "decided"  # A winner was recorded
    CANCELLED = "cancelled"  # Exit requested in an interactive game
    LIMITED = "limited"  # settings.max_moves reached without a winner


@dataclass(frozen=True)
class GameResult:
    """
    How a game ended.

    winner is None only when the game was stopped by the move limit.
    """
    moves: int
    winner: Side | None


class Game:
    """
    One board, two actors, strict alternation.

    Usage:
        game = Game(8, 8)
        result = await game.play(ActorType.random(), ActorType.random())
        print(result.winner, result.moves)
    """

    def __init__(
        self,
        width: int,
        height: int,
        collaborator: InteractiveCollaborator | None = None,
        *,
        settings: GameSettings | None = None,
        board: Board | None = None,
        exit_requested: asyncio.Event | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        if board is None:
            board = Board(width, height)
        elif (board.width, board.height) != (width, height):
            raise ConfigurationError(
                f"Board is {board.width}x{board.height}, expected {width}x{height}"
            )
        self.board = board
        self.collaborator = collaborator
        self.exit_requested = exit_requested or asyncio.Event()
        self.rng = rng or random.Random()

        self.state = LoopState.CREATED
        self.moves = 0
        self.result: GameResult | None = None

    @property
    def is_interactive(self) -> bool:
        return self.collaborator is not None

    def request_exit(self) -> None:
        """Stop an interactive game before its next turn."""
        self.exit_requested.set()

    async def play(
        self,
        red_type: ActorType,
        blue_type: ActorType,
        *,
        first: Side = Side.RED,
    ) -> GameResult | None:
        """
        Play until a side has no legal move.

        Args:
            red_type: Policy for Side.RED
            blue_type: Policy for Side.BLUE
            first: Side that moves first

        Returns:
            GameResult, or None if an interactive game was cancelled

        Raises:
            ConfigurationError: a human actor was requested on a headless game
        """
        if not self.is_interactive and (red_type.is_human or blue_type.is_human):
            raise ConfigurationError("Cannot have a human actor on a headless board")

        actors: dict[Side, Actor] = {
            Side.RED: create_actor(red_type, Side.RED, self.rng),
            Side.BLUE: create_actor(blue_type, Side.BLUE, self.rng),
        }
        log = logger.info if self.is_interactive else logger.debug
        log("Game started: red=%s blue=%s first=%s", red_type.name, blue_type.name, first.value)

        self.state = LoopState.RUNNING
        if self.is_interactive:
            await self.collaborator.render(self.board)

        side = first
        while True:
            if self.is_interactive and self.exit_requested.is_set():
                self.state = LoopState.CANCELLED
                logger.info("Game cancelled after %d moves", self.moves)
                return None

            if self.result is not None:
                return self.result

            limit = self.settings.max_moves
            if limit is not None and self.moves >= limit:
                self.state = LoopState.LIMITED
                self.result = GameResult(moves=self.moves, winner=None)
                log("Game stopped at the %d move limit", limit)
                return self.result

            try:
                outcome = await actors[side].act(self)
            except ChannelClosed:
                # Closing input is how an exit interrupts a pending selection
                if self.is_interactive and self.exit_requested.is_set():
                    continue
                raise
            if not outcome.took_action:
                self._decide(side.opponent)
                log("%s won after %d moves!", side.opponent.value.capitalize(), self.moves)
                continue

            action = outcome.action
            self.board.validate(action, side)
            self.board.apply(action)
            self.moves += 1
            logger.debug("Move %d: %s %s", self.moves, actors[side].get_name(), action)

            if self.is_interactive:
                await self.collaborator.render(self.board)
            else:
                await asyncio.sleep(0)

            side = side.opponent

    def _decide(self, winner: Side) -> None:
        self.state = LoopState.DECIDED
        self.result = GameResult(moves=self.moves, winner=winner)
