"""
Board - One player's placed islands.

The board maps each shape kind to at most one placed island. Islands on a
board never overlap; this is enforced when an island is positioned, so a
coordinate belongs to at most one island and guesses resolve unambiguously.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .coordinate import Coordinate
from .errors import OverlappingIsland
from .island import Island, Outcome, ShapeKind


class WinStatus(str, Enum):
    WIN = "win"
    NO_WIN = "no_win"


@dataclass(frozen=True)
class BoardGuess:
    """Outcome of resolving a guess against a board."""
    outcome: Outcome
    forested: ShapeKind | None
    win: WinStatus
    board: Board


@dataclass(frozen=True)
class Board:
    """
    Immutable mapping of shape kind to placed island.

    Every mutation returns a new Board.
    """
    islands: Mapping[ShapeKind, Island] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "islands", MappingProxyType(dict(self.islands)))

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return dict(self.islands) == dict(other.islands)

    def __hash__(self):
        return hash(frozenset(self.islands.items()))

    def get(self, shape: ShapeKind) -> Island | None:
        return self.islands.get(shape)

    def position_island(self, island: Island) -> Board:
        """
        Return a new board with island placed.

        A previous placement of the same shape is replaced and excluded from
        the overlap check.

        Raises:
            OverlappingIsland: island shares a cell with another shape's island.
        """
        for shape, existing in self.islands.items():
            if shape != island.shape and existing.overlaps(island):
                raise OverlappingIsland(
                    f"{island.shape.value} overlaps the {shape.value} island"
                )
        new_islands = dict(self.islands)
        new_islands[island.shape] = island
        return Board(new_islands)

    def all_positioned(self) -> bool:
        """True once every shape kind has been placed."""
        return all(shape in self.islands for shape in ShapeKind)

    def all_forested(self) -> bool:
        return all(island.forested for island in self.islands.values())

    def guess(self, coordinate: Coordinate) -> BoardGuess:
        """Resolve a guess against every placed island."""
        for island in self.islands.values():
            hit_island = island.guess(coordinate)
            if hit_island is None:
                continue
            new_islands = dict(self.islands)
            new_islands[hit_island.shape] = hit_island
            board = Board(new_islands)
            return BoardGuess(
                outcome=Outcome.HIT,
                forested=hit_island.shape if hit_island.forested else None,
                win=WinStatus.WIN if board.all_forested() else WinStatus.NO_WIN,
                board=board,
            )
        return BoardGuess(outcome=Outcome.MISS, forested=None, win=WinStatus.NO_WIN, board=self)

    def to_dict(self) -> dict:
        return {
            shape.value: self.islands[shape].to_dict()
            for shape in ShapeKind
            if shape in self.islands
        }

    @classmethod
    def from_dict(cls, data: dict) -> Board:
        return cls({ShapeKind(key): Island.from_dict(value) for key, value in data.items()})
