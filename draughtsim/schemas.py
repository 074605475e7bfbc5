"""
Pydantic Schemas - JSON reports printed by the CLI.

These models define the machine-readable output of
`draughtsim simulate --json`.
"""

from typing import Optional

from pydantic import BaseModel, Field


class GameReport(BaseModel):
    """Result of one headless game."""
    index: int
    moves: int
    winner: Optional[str] = Field(None, description="red, blue, or null when the move limit stopped the game")


class MatchSummary(BaseModel):
    """Aggregate of a batch of headless games."""
    red: str
    blue: str
    width: int
    height: int
    games: list[GameReport] = Field(default_factory=list)
    red_wins: int = 0
    blue_wins: int = 0
    undecided: int = 0

    def add(self, report: GameReport) -> None:
        self.games.append(report)
        if report.winner == "red":
            self.red_wins += 1
        elif report.winner == "blue":
            self.blue_wins += 1
        else:
            self.undecided += 1

    @property
    def average_moves(self) -> float:
        if not self.games:
            return 0.0
        return sum(g.moves for g in self.games) / len(self.games)
