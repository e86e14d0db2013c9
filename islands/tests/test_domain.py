"""
Tests for the domain model.

Tests:
- Coordinate validation
- Island shapes, overlap and hits
- Board placement and guess resolution
- Guess log
"""

import pytest

from ..engine_core import (
    Board,
    Coordinate,
    GuessLog,
    InvalidCoordinate,
    InvalidShape,
    Island,
    Outcome,
    OutOfBounds,
    OverlappingIsland,
    ShapeKind,
    WinStatus,
)


def island(shape: str, row: int, col: int) -> Island:
    return Island.new(shape, Coordinate(row, col))


class TestCoordinate:
    """Tests for Coordinate."""

    def test_every_cell_on_the_board_is_valid(self):
        for row in range(1, 11):
            for col in range(1, 11):
                coordinate = Coordinate(row, col)
                assert (coordinate.row, coordinate.col) == (row, col)

    @pytest.mark.parametrize("row,col", [(0, 1), (1, 0), (11, 5), (5, 11), (-1, -1), (0, 11)])
    def test_off_board_values_fail(self, row, col):
        with pytest.raises(InvalidCoordinate):
            Coordinate(row, col)

    @pytest.mark.parametrize("row,col", [("1", 1), (1.0, 1), (True, 1), (None, 2)])
    def test_non_integer_values_fail(self, row, col):
        with pytest.raises(InvalidCoordinate):
            Coordinate(row, col)

    def test_equality_is_structural(self):
        assert Coordinate(3, 4) == Coordinate(3, 4)
        assert len({Coordinate(3, 4), Coordinate(3, 4)}) == 1

    def test_coordinates_are_immutable(self):
        coordinate = Coordinate(1, 1)
        with pytest.raises(AttributeError):
            coordinate.row = 2


class TestIsland:
    """Tests for Island."""

    @pytest.mark.parametrize("shape,size", [
        ("square", 4), ("atoll", 5), ("dot", 1), ("l_shape", 4), ("s_shape", 4),
    ])
    def test_shape_sizes(self, shape, size):
        assert len(island(shape, 1, 1).cells) == size

    def test_cells_are_anchor_shifted(self):
        l_shape = island("l_shape", 3, 3)
        assert l_shape.cells == {
            Coordinate(3, 3), Coordinate(4, 3), Coordinate(5, 3), Coordinate(5, 4),
        }

    def test_s_shape_leaves_anchor_empty(self):
        s_shape = island("s_shape", 1, 1)
        assert Coordinate(1, 1) not in s_shape.cells
        assert Coordinate(1, 3) in s_shape.cells

    def test_unknown_shape_fails(self):
        with pytest.raises(InvalidShape):
            island("triangle", 1, 1)

    def test_accepts_shape_kind(self):
        assert island(ShapeKind.DOT, 2, 2).shape is ShapeKind.DOT

    @pytest.mark.parametrize("shape,row,col", [
        ("square", 10, 1), ("square", 1, 10), ("atoll", 9, 1), ("s_shape", 1, 9), ("l_shape", 9, 10),
    ])
    def test_shape_falling_off_the_board_fails(self, shape, row, col):
        with pytest.raises(OutOfBounds):
            island(shape, row, col)

    def test_overlaps(self):
        assert island("square", 1, 1).overlaps(island("dot", 2, 2))
        assert not island("square", 1, 1).overlaps(island("dot", 3, 3))

    def test_guess_hit_returns_new_island(self):
        dot = island("dot", 4, 4)
        hit = dot.guess(Coordinate(4, 4))

        assert hit is not None
        assert hit.hit_cells == {Coordinate(4, 4)}
        assert dot.hit_cells == frozenset()

    def test_guess_miss_returns_none(self):
        assert island("dot", 4, 4).guess(Coordinate(4, 5)) is None

    def test_hitting_same_cell_twice_is_idempotent(self):
        square = island("square", 1, 1)
        once = square.guess(Coordinate(1, 1))
        twice = once.guess(Coordinate(1, 1))
        assert once.hit_cells == twice.hit_cells

    def test_forested_when_every_cell_hit(self):
        square = island("square", 1, 1)
        for cell in sorted(square.cells):
            assert not square.forested
            square = square.guess(cell)
        assert square.forested


class TestBoard:
    """Tests for Board."""

    def test_new_board_is_empty(self):
        board = Board()
        assert len(board.islands) == 0
        assert not board.all_positioned()

    def test_position_island(self):
        board = Board().position_island(island("dot", 1, 1))
        assert board.get(ShapeKind.DOT) == island("dot", 1, 1)

    def test_overlapping_island_fails_and_board_unchanged(self):
        board = Board().position_island(island("square", 1, 1))
        with pytest.raises(OverlappingIsland):
            board.position_island(island("dot", 2, 2))
        assert board.get(ShapeKind.DOT) is None
        assert list(board.islands) == [ShapeKind.SQUARE]

    def test_repositioning_replaces_previous_placement(self):
        board = Board().position_island(island("square", 1, 1))
        board = board.position_island(island("square", 5, 5))

        assert len(board.islands) == 1
        assert board.get(ShapeKind.SQUARE) == island("square", 5, 5)

    def test_repositioning_may_overlap_own_previous_placement(self):
        board = Board().position_island(island("square", 1, 1))
        board = board.position_island(island("square", 2, 2))
        assert board.get(ShapeKind.SQUARE) == island("square", 2, 2)

    def test_all_positioned(self):
        board = Board()
        for shape, row, col in [("square", 1, 1), ("atoll", 1, 4), ("dot", 5, 5), ("l_shape", 6, 1)]:
            board = board.position_island(island(shape, row, col))
        assert not board.all_positioned()
        board = board.position_island(island("s_shape", 9, 7))
        assert board.all_positioned()

    def test_board_is_not_mutated(self):
        board = Board()
        board.position_island(island("dot", 1, 1))
        assert len(board.islands) == 0

    def test_guess_miss(self):
        board = Board().position_island(island("dot", 1, 1))
        result = board.guess(Coordinate(2, 2))

        assert result.outcome is Outcome.MISS
        assert result.forested is None
        assert result.win is WinStatus.NO_WIN
        assert result.board == board

    def test_guess_hit_without_forest(self):
        board = Board().position_island(island("square", 1, 1))
        result = board.guess(Coordinate(1, 1))

        assert result.outcome is Outcome.HIT
        assert result.forested is None
        assert result.win is WinStatus.NO_WIN
        assert result.board.get(ShapeKind.SQUARE).hit_cells == {Coordinate(1, 1)}

    def test_guess_forests_island_and_wins_only_when_all_forested(self):
        board = Board().position_island(island("dot", 1, 1)).position_island(island("dot", 1, 1))
        board = board.position_island(island("square", 5, 5))

        result = board.guess(Coordinate(1, 1))
        assert result.forested is ShapeKind.DOT
        assert result.win is WinStatus.NO_WIN

        board = result.board
        for cell in [(5, 5), (5, 6), (6, 5)]:
            result = board.guess(Coordinate(*cell))
            assert result.win is WinStatus.NO_WIN
            board = result.board

        result = board.guess(Coordinate(6, 6))
        assert result.forested is ShapeKind.SQUARE
        assert result.win is WinStatus.WIN


class TestGuessLog:
    """Tests for GuessLog."""

    def test_add_hit_and_miss(self):
        log = GuessLog().add(Outcome.HIT, Coordinate(1, 1)).add(Outcome.MISS, Coordinate(2, 2))
        assert log.hits == {Coordinate(1, 1)}
        assert log.misses == {Coordinate(2, 2)}

    def test_re_adding_is_idempotent(self):
        log = GuessLog().add(Outcome.HIT, Coordinate(1, 1))
        assert log.add(Outcome.HIT, Coordinate(1, 1)) == log

    def test_log_is_not_mutated(self):
        log = GuessLog()
        log.add(Outcome.MISS, Coordinate(1, 1))
        assert log.misses == frozenset()
