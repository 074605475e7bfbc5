"""
Simulation Orchestrator - Fork-join self-play used by SimulatedActor.

For one turn:
1. Enumerate every (origin, destination) candidate, in sorted order
2. Fork: one headless sub-game per candidate, each on its own deep
   copy of the board with the candidate already applied
3. Join: wait for every sub-game before looking at any result
4. Choose: fastest win for our side, else the longest game

Sub-games are played by a non-simulated sub-policy on both sides, so
the task tree is one level deep. A failing child cancels and awaits
its siblings before the error propagates.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence
import asyncio
import logging
import random

from ..engine_core.action import Action
from ..engine_core.state import Board, Point, Side
from .policy import SimulationPolicy

if TYPE_CHECKING:
    from ..config import GameSettings
    from ..session.game_loop import GameResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateOutcome:
    """A candidate move and how its simulated game ended."""
    action: Action
    result: GameResult


def enumerate_candidates(moves: dict[Point, set[Point]]) -> list[Action]:
    """All (origin, destination) pairs of a legal-move map, sorted."""
    return sorted(
        Action(origin, target)
        for origin, targets in moves.items()
        for target in targets
    )


def choose_candidate(outcomes: Sequence[CandidateOutcome], side: Side) -> CandidateOutcome:
    """
    Pick the best outcome for side.

    - Any wins: the one with the fewest moves
    - No wins: the one with the most moves (slowest loss)
    - Ties: lowest action in (origin, destination) order
    """
    if not outcomes:
        raise ValueError("No candidates to choose from")

    wins = [o for o in outcomes if o.result.winner is side]
    if wins:
        return min(wins, key=lambda o: (o.result.moves, o.action))
    return min(outcomes, key=lambda o: (-o.result.moves, o.action))


class SimulationOrchestrator:
    """
    Runs one headless sub-game per candidate and ranks the results.

    Usage:
        orchestrator = SimulationOrchestrator(Side.RED, SimulationPolicy.RANDOM, settings)
        action = await orchestrator.select(board, board.legal_move_map(Side.RED))
    """

    def __init__(
        self,
        side: Side,
        sub_policy: SimulationPolicy,
        settings: GameSettings,
        rng: random.Random | None = None,
    ):
        self.side = side
        self.sub_policy = sub_policy
        self.settings = settings
        self.rng = rng or random.Random()

    async def select(self, board: Board, moves: dict[Point, set[Point]]) -> Action:
        candidates = enumerate_candidates(moves)
        outcomes = await self.run_all(board, candidates)
        best = choose_candidate(outcomes, self.side)
        logger.info(
            "%s chose %s after %d simulations (winner=%s, moves=%d)",
            self.side.value,
            best.action,
            len(outcomes),
            best.result.winner.value if best.result.winner else None,
            best.result.moves,
        )
        return best.action

    async def run_all(self, board: Board, candidates: Sequence[Action]) -> list[CandidateOutcome]:
        """
        Simulate every candidate concurrently and return once all finished.

        Outcomes are returned in candidate order.
        """
        cap = self.settings.max_concurrency
        semaphore = asyncio.Semaphore(cap) if cap else None

        # One private board and seed per candidate, taken before any sub-game runs
        jobs = [(action, board.copy(), self.rng.random()) for action in candidates]

        async def run_limited(action: Action, copy: Board, seed: float) -> GameResult:
            if semaphore is None:
                return await self.simulate(copy, action, seed)
            async with semaphore:
                return await self.simulate(copy, action, seed)

        tasks = [asyncio.ensure_future(run_limited(*job)) for job in jobs]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return [
            CandidateOutcome(action=action, result=result)
            for action, result in zip(candidates, results)
        ]

    async def simulate(self, board: Board, action: Action, seed: float) -> GameResult:
        """Apply action to board (a private copy) and play it out headless."""
        from ..session.game_loop import Game

        board.clear_highlights()
        board.apply(action)
        game = Game(
            board.width,
            board.height,
            None,
            settings=self.settings,
            board=board,
            rng=random.Random(seed),
        )
        sub_type = self.sub_policy.to_actor_type()
        # The candidate was our move, so the sub-game resumes with the opponent
        return await game.play(sub_type, sub_type, first=self.side.opponent)
