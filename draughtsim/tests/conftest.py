"""
Pytest fixtures for Draughtsim tests.
"""

import random

import pytest

from ..config import GameSettings
from ..engine_core.state import Board, Piece, Point, Side
from ..session.interactive import QueueCollaborator, SelectionChannel


@pytest.fixture
def board() -> Board:
    """Standard 8x8 board in the starting layout."""
    return Board(8, 8)


@pytest.fixture
def empty_board() -> Board:
    """8x8 board with no pieces."""
    return Board.empty(8, 8)


@pytest.fixture
def capture_board(empty_board: Board) -> Board:
    """Red piece at (2,2) facing a lone blue piece at (3,3)."""
    empty_board.place(Point(2, 2), Piece(Side.RED))
    empty_board.place(Point(3, 3), Piece(Side.BLUE))
    return empty_board


@pytest.fixture
def settings() -> GameSettings:
    """Settings for fast tests: no pacing, generous move limit."""
    return GameSettings(ai_delay=0.0, max_moves=5000)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def collaborator() -> QueueCollaborator:
    """Collaborator whose selections are offered by the test."""
    return QueueCollaborator(SelectionChannel(capacity=32))


def offer_all(collaborator: QueueCollaborator, *points) -> None:
    for x, y in points:
        assert collaborator.channel.offer(Point(x, y))
