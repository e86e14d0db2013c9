"""
Coordinate - A validated (row, col) position on the 10x10 grid.
"""

from __future__ import annotations
from dataclasses import dataclass

from .errors import InvalidCoordinate

BOARD_SIZE = 10
BOARD_RANGE = range(1, BOARD_SIZE + 1)


@dataclass(frozen=True, order=True)
class Coordinate:
    """
    An immutable grid position. Both axes are 1-based and lie in [1, 10].

    Construction with an out-of-range or non-integer value raises
    InvalidCoordinate, so every Coordinate in the system is on the board.
    """
    row: int
    col: int

    def __post_init__(self):
        for value in (self.row, self.col):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidCoordinate(f"Coordinate values must be integers, got {value!r}")
            if value not in BOARD_RANGE:
                raise InvalidCoordinate(f"({self.row}, {self.col}) is off the board")

    def shifted(self, row_offset: int, col_offset: int) -> Coordinate:
        """Return the coordinate offset from this one. Raises if it leaves the board."""
        return Coordinate(self.row + row_offset, self.col + col_offset)

    def to_list(self) -> list[int]:
        return [self.row, self.col]

    @classmethod
    def from_list(cls, data: list[int]) -> Coordinate:
        row, col = data
        return cls(row, col)
