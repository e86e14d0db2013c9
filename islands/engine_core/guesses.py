"""
Guess Log - Record of the coordinates a player has guessed.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from .coordinate import Coordinate
from .island import Outcome


@dataclass(frozen=True)
class GuessLog:
    """Hits and misses guessed so far. Append-only, set semantics."""
    hits: frozenset[Coordinate] = field(default_factory=frozenset)
    misses: frozenset[Coordinate] = field(default_factory=frozenset)

    def add(self, outcome: Outcome, coordinate: Coordinate) -> GuessLog:
        """Return a new log with coordinate recorded under outcome."""
        if outcome == Outcome.HIT:
            return replace(self, hits=self.hits | {coordinate})
        return replace(self, misses=self.misses | {coordinate})

    def to_dict(self) -> dict:
        return {
            "hits": [c.to_list() for c in sorted(self.hits)],
            "misses": [c.to_list() for c in sorted(self.misses)],
        }

    @classmethod
    def from_dict(cls, data: dict) -> GuessLog:
        return cls(
            hits=frozenset(Coordinate.from_list(c) for c in data["hits"]),
            misses=frozenset(Coordinate.from_list(c) for c in data["misses"]),
        )
