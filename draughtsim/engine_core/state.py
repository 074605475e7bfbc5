"""
Board State - Points, sides, pieces and the board itself.

The board is a plain value aggregate:
- Mutated in place by applied actions
- Deep-copied for every simulated game (no sharing between simulations)
- Queried for legal destinations and per-side legal-move maps

Movement rule:
- A piece may land on ANY empty cell of its diagonals, at any distance
- Intermediate cells are never inspected, so pieces jump over anything
- Non-crowned pieces only move toward their far edge
- Every opposing piece on the travelled diagonal is captured
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, NamedTuple
import logging

from .errors import ConfigurationError, InvariantViolation

if TYPE_CHECKING:
    from .action import Action

logger = logging.getLogger(__name__)

# Rows of starting pieces per side
HOME_ROWS = 3

DIAGONALS = ((1, 1), (1, -1), (-1, 1), (-1, -1))


class Point(NamedTuple):
    """Board coordinate (0-based). Ordered by (x, y)."""
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Side(Enum):
    """The two players. RED starts at the low rows, BLUE at the high rows."""
    RED = "red"
    BLUE = "blue"

    @property
    def opponent(self) -> Side:
        return Side.BLUE if self is Side.RED else Side.RED

    def far_edge(self, height: int) -> int:
        """Row on which this side's pieces are crowned."""
        return height - 1 if self is Side.RED else 0

    def is_forward(self, from_y: int, to_y: int) -> bool:
        """Whether moving from row from_y to row to_y goes toward the far edge."""
        if self is Side.RED:
            return to_y >= from_y
        return to_y <= from_y

    def is_friendly(self, piece: Piece | None) -> bool:
        return piece is not None and piece.side is self

    def is_hostile(self, piece: Piece | None) -> bool:
        return piece is not None and piece.side is not self


@dataclass(frozen=True)
class Piece:
    """A side's token. Crowned pieces move along both diagonal directions."""
    side: Side
    crowned: bool = False

    def crown(self) -> Piece:
        return Piece(side=self.side, crowned=True)


@dataclass
class Cell:
    """
    One square of the board.

    highlighted is presentation-only; the interactive collaborator
    uses it to show valid origins and destinations.
    """
    piece: Piece | None = None
    highlighted: bool = False


@dataclass
class Board:
    """
    The grid of cells, indexed cells[x][y].

    Usage:
        board = Board(8, 8)
        moves = board.legal_move_map(Side.RED)
        board.apply(Action(Point(0, 2), Point(1, 3)))
    """
    width: int
    height: int
    cells: list[list[Cell]] = field(default_factory=list)

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ConfigurationError(
                f"Board dimensions must be positive, got {self.width}x{self.height}"
            )
        if not self.cells:
            self.cells = [
                [Cell(piece=self._starting_piece(x, y)) for y in range(self.height)]
                for x in range(self.width)
            ]

    @classmethod
    def empty(cls, width: int, height: int) -> Board:
        """Create a board with no pieces on it."""
        cells = [[Cell() for _ in range(height)] for _ in range(width)]
        return cls(width=width, height=height, cells=cells)

    def _starting_piece(self, x: int, y: int) -> Piece | None:
        if not is_dark(x, y):
            return None
        if y < HOME_ROWS:
            return Piece(Side.RED)
        if y >= self.height - HOME_ROWS:
            return Piece(Side.BLUE)
        return None

    # =========================================================================
    # Cell access
    # =========================================================================

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def cell(self, point: Point) -> Cell:
        return self.cells[point.x][point.y]

    def piece_at(self, point: Point) -> Piece | None:
        return self.cells[point.x][point.y].piece

    def place(self, point: Point, piece: Piece) -> None:
        self.cells[point.x][point.y].piece = piece

    def remove(self, point: Point) -> Piece | None:
        cell = self.cells[point.x][point.y]
        piece, cell.piece = cell.piece, None
        return piece

    def points(self) -> Iterator[Point]:
        """All board points, column by column."""
        for x in range(self.width):
            for y in range(self.height):
                yield Point(x, y)

    def pieces(self, side: Side) -> Iterator[tuple[Point, Piece]]:
        for point in self.points():
            piece = self.piece_at(point)
            if side.is_friendly(piece):
                yield point, piece

    def count(self, side: Side) -> int:
        return sum(1 for _ in self.pieces(side))

    def highlight(self, points: Iterable[Point]) -> None:
        """Highlight exactly the given points."""
        wanted = set(points)
        for point in self.points():
            self.cell(point).highlighted = point in wanted

    def clear_highlights(self) -> None:
        self.highlight(())

    def copy(self) -> Board:
        """Independent deep copy for simulation."""
        return deepcopy(self)

    # =========================================================================
    # Rules
    # =========================================================================

    def legal_destinations(self, origin: Point, piece: Piece) -> set[Point]:
        """
        Every empty cell on origin's diagonals the piece may land on.

        Cells in between are not inspected. Non-crowned pieces are
        limited to the forward direction of their side.
        """
        destinations: set[Point] = set()
        for dx, dy in DIAGONALS:
            if not piece.crowned and not piece.side.is_forward(origin.y, origin.y + dy):
                continue
            x, y = origin.x + dx, origin.y + dy
            while 0 <= x < self.width and 0 <= y < self.height:
                if self.cells[x][y].piece is None:
                    destinations.add(Point(x, y))
                x += dx
                y += dy
        return destinations

    def legal_move_map(self, side: Side) -> dict[Point, set[Point]]:
        """
        Map each of side's pieces that can move to its destination set.

        An empty map means the side has lost.
        """
        moves: dict[Point, set[Point]] = {}
        for point, piece in self.pieces(side):
            destinations = self.legal_destinations(point, piece)
            if destinations:
                moves[point] = destinations
        return moves

    def validate(self, action: Action, side: Side) -> None:
        """Raise InvariantViolation unless action is in side's legal-move map."""
        piece = self.piece_at(action.from_point)
        if not side.is_friendly(piece):
            raise InvariantViolation(
                f"{side.value} has no piece at {action.from_point}"
            )
        if action.to_point not in self.legal_destinations(action.from_point, piece):
            raise InvariantViolation(f"Illegal move for {side.value}: {action}")

    def apply(self, action: Action) -> list[Point]:
        """
        Execute a move: promote, relocate, then capture along the diagonal.

        Returns the points whose pieces were captured.
        """
        origin, target = action.from_point, action.to_point
        piece = self.piece_at(origin)
        if piece is None:
            raise InvariantViolation(f"No piece at {origin} to move")

        if not piece.crowned and target.y == piece.side.far_edge(self.height):
            piece = piece.crown()
            logger.debug("%s piece crowned at %s", piece.side.value, target)

        self.remove(origin)
        self.place(target, piece)

        captured: list[Point] = []
        for x in range(min(origin.x, target.x), max(origin.x, target.x) + 1):
            for y in range(min(origin.y, target.y), max(origin.y, target.y) + 1):
                if abs(x - origin.x) != abs(y - origin.y):
                    continue
                if piece.side.is_hostile(self.cells[x][y].piece):
                    self.cells[x][y].piece = None
                    captured.append(Point(x, y))

        if captured:
            logger.debug("%s captured %s", action, ", ".join(map(str, captured)))
        return captured


def is_dark(x: int, y: int) -> bool:
    """Dark squares are the playable ones."""
    return x % 2 == y % 2
