"""
Actors - Per-side decision makers.

Every actor follows the same turn protocol (Actor.act):
1. Compute the legal-move map for its side
2. Empty map -> NoPiecesLeft (the side lost)
3. AI actors watched by a human pause briefly before deciding
4. The concrete policy picks one (origin, destination) pair

Concrete actors:
- HumanActor: asks the interactive collaborator for two selections
- RandomActor: uniform random origin, then uniform random destination
- MostKillsActor: not implemented, fails on first use
- SimulatedActor: plays every candidate out in a headless sub-game
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import asyncio
import logging
import random

from ..engine_core.action import Action, ActionResult
from ..engine_core.errors import ConfigurationError
from ..engine_core.state import Point, Side
from .policy import ActorKind, ActorType, SimulationPolicy

if TYPE_CHECKING:
    from ..session.game_loop import Game

logger = logging.getLogger(__name__)

MoveMap = dict[Point, set[Point]]


class Actor(ABC):
    """
    Abstract base class for actors.

    Subclasses implement select_action(); act() handles the parts
    every policy shares.
    """

    is_human = False

    def __init__(self, side: Side, rng: random.Random | None = None):
        self.side = side
        self.rng = rng or random.Random()

    async def act(self, game: Game) -> ActionResult:
        """Take one turn against game.board."""
        moves = game.board.legal_move_map(self.side)
        if not moves:
            logger.debug("%s has no legal move", self.side.value)
            return ActionResult.no_pieces_left()

        if not self.is_human and game.is_interactive:
            await asyncio.sleep(game.settings.ai_delay)

        action = await self.select_action(game, moves)
        return ActionResult.took(action)

    @abstractmethod
    async def select_action(self, game: Game, moves: MoveMap) -> Action:
        """
        Choose a move from a non-empty legal-move map.

        Args:
            game: The game being played (board, collaborator, settings)
            moves: Legal-move map for this actor's side

        Returns:
            An action drawn from moves
        """

    def get_name(self) -> str:
        return f"{self.__class__.__name__}({self.side.value})"


class HumanActor(Actor):
    """
    Moves chosen by a person through the interactive collaborator.

    Selections that are not usable are discarded and re-requested:
    first until a movable friendly piece is picked, then until one
    of its destinations is picked.
    """

    is_human = True

    async def select_action(self, game: Game, moves: MoveMap) -> Action:
        collaborator = game.collaborator
        if collaborator is None:
            raise ConfigurationError("Human actor needs an interactive collaborator")
        board = game.board

        board.highlight(moves)
        await collaborator.render(board)
        logger.info("%s: select which piece you want to move", self.side.value)
        while True:
            origin = await collaborator.await_next_selection(board)
            destinations = moves.get(origin)
            if destinations:
                break

        board.highlight(destinations)
        await collaborator.render(board)
        logger.info("%s: select where you'd like to move %s", self.side.value, origin)
        while True:
            target = await collaborator.await_next_selection(board)
            if target in destinations:
                break

        board.clear_highlights()
        return Action(origin, target)


class RandomActor(Actor):
    """Uniformly random piece, then uniformly random destination."""

    async def select_action(self, game: Game, moves: MoveMap) -> Action:
        origin = self.rng.choice(list(moves))
        target = self.rng.choice(sorted(moves[origin]))
        return Action(origin, target)


class MostKillsActor(Actor):
    """Greedy capture-maximizing policy. No evaluation logic exists yet."""

    async def select_action(self, game: Game, moves: MoveMap) -> Action:
        raise NotImplementedError("The most-kills policy is not implemented")


class SimulatedActor(Actor):
    """
    Self-play lookahead.

    Every candidate move is applied to a copy of the board and the
    resulting position is played to the end by sub_policy on both
    sides. See simulation.choose_candidate for how results rank.
    """

    def __init__(
        self,
        side: Side,
        sub_policy: SimulationPolicy,
        rng: random.Random | None = None,
    ):
        super().__init__(side, rng)
        self.sub_policy = sub_policy

    async def select_action(self, game: Game, moves: MoveMap) -> Action:
        from .simulation import SimulationOrchestrator

        orchestrator = SimulationOrchestrator(
            side=self.side,
            sub_policy=self.sub_policy,
            settings=game.settings,
            rng=self.rng,
        )
        return await orchestrator.select(game.board, moves)


def create_actor(
    actor_type: ActorType,
    side: Side,
    rng: random.Random | None = None,
) -> Actor:
    """Instantiate the actor for a policy selection."""
    if actor_type.kind == ActorKind.HUMAN:
        return HumanActor(side, rng)
    if actor_type.kind == ActorKind.RANDOM:
        return RandomActor(side, rng)
    if actor_type.kind == ActorKind.MOST_KILLS:
        return MostKillsActor(side, rng)
    return SimulatedActor(side, actor_type.sub_policy, rng)
