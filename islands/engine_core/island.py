"""
Island - A named shape placed on the grid at an anchor coordinate.

Each shape kind is a fixed set of (row-offset, col-offset) pairs relative to
its upper-left anchor. An island tracks which of its cells have been hit;
once every cell is hit the island is "forested".

Islands are immutable: a hit returns a new Island.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .coordinate import Coordinate
from .errors import InvalidCoordinate, InvalidShape, OutOfBounds


class ShapeKind(str, Enum):
    """The five island geometries."""
    SQUARE = "square"
    ATOLL = "atoll"
    DOT = "dot"
    L_SHAPE = "l_shape"
    S_SHAPE = "s_shape"

    @classmethod
    def parse(cls, value: ShapeKind | str) -> ShapeKind:
        """Resolve a shape name. Raises InvalidShape for unknown names."""
        if isinstance(value, ShapeKind):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidShape(f"Unknown island type: {value!r}") from None


class Outcome(str, Enum):
    """Result of a single guess."""
    HIT = "hit"
    MISS = "miss"


SHAPE_OFFSETS: dict[ShapeKind, tuple[tuple[int, int], ...]] = {
    ShapeKind.SQUARE: ((0, 0), (0, 1), (1, 0), (1, 1)),
    ShapeKind.ATOLL: ((0, 0), (0, 1), (1, 1), (2, 0), (2, 1)),
    ShapeKind.DOT: ((0, 0),),
    ShapeKind.L_SHAPE: ((0, 0), (1, 0), (2, 0), (2, 1)),
    ShapeKind.S_SHAPE: ((0, 1), (0, 2), (1, 0), (1, 1)),
}


@dataclass(frozen=True)
class Island:
    """
    A placed island.

    Invariant: hit_cells is a subset of cells.
    """
    shape: ShapeKind
    cells: frozenset[Coordinate]
    hit_cells: frozenset[Coordinate] = field(default_factory=frozenset)

    @classmethod
    def new(cls, shape: ShapeKind | str, anchor: Coordinate) -> Island:
        """
        Create an island of the given shape with its upper-left at anchor.

        Raises:
            InvalidShape: shape is not one of the five kinds.
            OutOfBounds: any cell of the shape falls off the board.
        """
        kind = ShapeKind.parse(shape)
        cells = set()
        for row_offset, col_offset in SHAPE_OFFSETS[kind]:
            try:
                cells.add(anchor.shifted(row_offset, col_offset))
            except InvalidCoordinate:
                raise OutOfBounds(
                    f"{kind.value} at ({anchor.row}, {anchor.col}) does not fit on the board"
                ) from None
        return cls(shape=kind, cells=frozenset(cells))

    def overlaps(self, other: Island) -> bool:
        """True if the two islands share any cell."""
        return not self.cells.isdisjoint(other.cells)

    def guess(self, coordinate: Coordinate) -> Island | None:
        """
        Check a guess against this island.

        Returns the updated island on a hit, None on a miss.
        Hitting an already-hit cell is a no-op hit.
        """
        if coordinate not in self.cells:
            return None
        return replace(self, hit_cells=self.hit_cells | {coordinate})

    @property
    def forested(self) -> bool:
        """True once every cell has been hit."""
        return self.hit_cells == self.cells

    def to_dict(self) -> dict:
        return {
            "shape": self.shape.value,
            "cells": [c.to_list() for c in sorted(self.cells)],
            "hit_cells": [c.to_list() for c in sorted(self.hit_cells)],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Island:
        return cls(
            shape=ShapeKind(data["shape"]),
            cells=frozenset(Coordinate.from_list(c) for c in data["cells"]),
            hit_cells=frozenset(Coordinate.from_list(c) for c in data["hit_cells"]),
        )
