"""
Tests for the board rules.

Tests:
- Starting layout
- Legal destinations (diagonal, empty, forward, path-blind)
- Legal-move maps
- Move application (promotion, capture sweep)
- Invariant violations
"""

import pytest

from ..engine_core.action import Action
from ..engine_core.errors import ConfigurationError, InvariantViolation
from ..engine_core.state import Board, Piece, Point, Side, is_dark


class TestInitialLayout:
    """Tests for the starting position."""

    def test_piece_counts(self, board):
        """Each side starts with three rows of pieces on dark squares."""
        assert board.count(Side.RED) == 12
        assert board.count(Side.BLUE) == 12

    def test_pieces_on_dark_squares_only(self, board):
        for point in board.points():
            if board.piece_at(point) is not None:
                assert is_dark(point.x, point.y)

    def test_home_rows(self, board):
        """Red holds rows 0-2, blue holds the last three rows."""
        for point, piece in board.pieces(Side.RED):
            assert point.y <= 2
            assert not piece.crowned
        for point, piece in board.pieces(Side.BLUE):
            assert point.y >= 5
            assert not piece.crowned

    def test_neutral_rows_empty(self, board):
        for x in range(8):
            assert board.piece_at(Point(x, 3)) is None
            assert board.piece_at(Point(x, 4)) is None

    def test_taller_board_uses_last_rows_for_blue(self):
        board = Board(4, 10)
        assert {p.y for p, _ in board.pieces(Side.BLUE)} == {7, 8, 9}

    def test_non_positive_dimensions_rejected(self):
        with pytest.raises(ConfigurationError):
            Board(0, 8)
        with pytest.raises(ConfigurationError):
            Board.empty(8, 0)


class TestLegalDestinations:
    """Tests for per-piece destination generation."""

    def test_destinations_are_diagonal_empty_forward(self, board):
        """Holds for every piece of both sides in the opening."""
        for side in Side:
            for origin, piece in board.pieces(side):
                for dest in board.legal_destinations(origin, piece):
                    assert abs(dest.x - origin.x) == abs(dest.y - origin.y) != 0
                    assert board.piece_at(dest) is None
                    assert side.is_forward(origin.y, dest.y)

    def test_unlimited_distance(self, empty_board):
        piece = Piece(Side.RED)
        dests = empty_board.legal_destinations(Point(0, 0), piece)
        assert dests == {Point(i, i) for i in range(1, 8)}

    def test_path_blind(self, empty_board):
        """Occupied intermediate cells do not block farther cells."""
        empty_board.place(Point(1, 1), Piece(Side.RED))
        empty_board.place(Point(2, 2), Piece(Side.BLUE))
        dests = empty_board.legal_destinations(Point(0, 0), Piece(Side.RED))
        assert Point(1, 1) not in dests
        assert Point(2, 2) not in dests
        assert Point(3, 3) in dests
        assert Point(7, 7) in dests

    def test_blue_moves_toward_row_zero(self, empty_board):
        dests = empty_board.legal_destinations(Point(3, 3), Piece(Side.BLUE))
        assert dests
        assert all(d.y < 3 for d in dests)

    def test_crowned_moves_both_ways(self, empty_board):
        dests = empty_board.legal_destinations(Point(3, 3), Piece(Side.RED, crowned=True))
        assert any(d.y < 3 for d in dests)
        assert any(d.y > 3 for d in dests)
        assert len(dests) == 13


class TestLegalMoveMap:
    """Tests for per-side move maps."""

    def test_opening_move_map(self, board):
        """Every red piece can reach some empty dark cell in the opening."""
        moves = board.legal_move_map(Side.RED)
        assert len(moves) == 12
        assert moves[Point(0, 2)] == {Point(1, 3), Point(2, 4)}
        assert moves[Point(2, 2)] == {Point(3, 3), Point(4, 4), Point(1, 3), Point(0, 4)}

    def test_opening_is_symmetric_for_blue(self, board):
        assert len(board.legal_move_map(Side.BLUE)) == 12

    def test_side_without_pieces_has_empty_map(self, empty_board):
        empty_board.place(Point(0, 0), Piece(Side.RED))
        assert empty_board.legal_move_map(Side.BLUE) == {}

    def test_blocked_piece_excluded(self, empty_board):
        """A piece with no empty forward cell has no entry."""
        empty_board.place(Point(0, 6), Piece(Side.RED))
        empty_board.place(Point(1, 7), Piece(Side.BLUE))
        assert empty_board.legal_move_map(Side.RED) == {}


class TestApply:
    """Tests for move application."""

    def test_capture_between(self, capture_board):
        """Jumping over an opposing piece removes it."""
        assert Point(4, 4) in capture_board.legal_destinations(Point(2, 2), Piece(Side.RED))

        captured = capture_board.apply(Action(Point(2, 2), Point(4, 4)))

        assert captured == [Point(3, 3)]
        assert capture_board.piece_at(Point(2, 2)) is None
        assert capture_board.piece_at(Point(3, 3)) is None
        assert capture_board.piece_at(Point(4, 4)) == Piece(Side.RED, crowned=False)

    def test_long_capture_removes_every_opponent(self, empty_board):
        empty_board.place(Point(0, 0), Piece(Side.RED))
        empty_board.place(Point(2, 2), Piece(Side.BLUE))
        empty_board.place(Point(4, 4), Piece(Side.BLUE, crowned=True))
        empty_board.apply(Action(Point(0, 0), Point(6, 6)))
        assert empty_board.count(Side.BLUE) == 0

    def test_friendly_piece_untouched(self, empty_board):
        empty_board.place(Point(2, 2), Piece(Side.RED))
        empty_board.place(Point(3, 3), Piece(Side.RED))
        empty_board.apply(Action(Point(2, 2), Point(4, 4)))
        assert empty_board.piece_at(Point(3, 3)) == Piece(Side.RED)
        assert empty_board.piece_at(Point(4, 4)) == Piece(Side.RED)

    def test_capture_limited_to_travelled_diagonal(self, empty_board):
        """Opponents inside the rectangle but off the diagonal survive."""
        empty_board.place(Point(4, 4), Piece(Side.BLUE))
        empty_board.place(Point(3, 3), Piece(Side.RED))
        empty_board.place(Point(2, 4), Piece(Side.RED))
        empty_board.place(Point(4, 2), Piece(Side.RED))
        empty_board.apply(Action(Point(4, 4), Point(2, 2)))
        assert empty_board.piece_at(Point(3, 3)) is None
        assert empty_board.piece_at(Point(2, 4)) == Piece(Side.RED)
        assert empty_board.piece_at(Point(4, 2)) == Piece(Side.RED)

    def test_red_promotes_on_last_row(self, empty_board):
        empty_board.place(Point(1, 6), Piece(Side.RED))
        empty_board.apply(Action(Point(1, 6), Point(2, 7)))
        assert empty_board.piece_at(Point(2, 7)).crowned

    def test_blue_promotes_on_row_zero(self, empty_board):
        empty_board.place(Point(1, 1), Piece(Side.BLUE))
        empty_board.apply(Action(Point(1, 1), Point(0, 0)))
        assert empty_board.piece_at(Point(0, 0)).crowned

    def test_no_promotion_short_of_edge(self, empty_board):
        empty_board.place(Point(1, 1), Piece(Side.RED))
        empty_board.apply(Action(Point(1, 1), Point(5, 5)))
        assert not empty_board.piece_at(Point(5, 5)).crowned

    def test_crowned_piece_stays_crowned(self, empty_board):
        empty_board.place(Point(4, 7), Piece(Side.RED, crowned=True))
        empty_board.apply(Action(Point(4, 7), Point(1, 4)))
        assert empty_board.piece_at(Point(1, 4)) == Piece(Side.RED, crowned=True)

    def test_empty_origin_is_invariant_violation(self, empty_board):
        with pytest.raises(InvariantViolation):
            empty_board.apply(Action(Point(0, 0), Point(1, 1)))

    def test_validate_rejects_illegal_action(self, board):
        with pytest.raises(InvariantViolation):
            board.validate(Action(Point(0, 2), Point(0, 3)), Side.RED)
        with pytest.raises(InvariantViolation):
            board.validate(Action(Point(1, 5), Point(2, 4)), Side.RED)
        board.validate(Action(Point(0, 2), Point(1, 3)), Side.RED)


class TestCopy:
    """Tests for simulation isolation."""

    def test_copy_is_independent(self, board):
        clone = board.copy()
        clone.apply(Action(Point(0, 2), Point(1, 3)))
        clone.highlight([Point(0, 0)])
        assert board.piece_at(Point(0, 2)) == Piece(Side.RED)
        assert board.piece_at(Point(1, 3)) is None
        assert not board.cell(Point(0, 0)).highlighted
