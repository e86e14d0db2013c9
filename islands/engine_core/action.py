"""
Action System - The actions the rules state machine understands.

Actions represent:
1. Setup actions (add the second player, position and set islands)
2. Turn actions (guess a coordinate)
3. System checks (win check after a guess)

Every state transition is requested through an Action.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Types of actions in the system."""
    ADD_PLAYER = "add_player"
    POSITION_ISLAND = "position_island"
    SET_ISLANDS = "set_islands"
    GUESS_COORDINATE = "guess_coordinate"
    WIN_CHECK = "win_check"


@dataclass(frozen=True)
class Action:
    """
    A request to move the rules state machine.

    player is the raw player identifier ("player1" / "player2"); it is
    validated by the rules, not here. win is only used by WIN_CHECK.
    """
    action_type: ActionType
    player: str | None = None
    win: bool = False

    @classmethod
    def add_player(cls) -> Action:
        return cls(action_type=ActionType.ADD_PLAYER)

    @classmethod
    def position_island(cls, player: str) -> Action:
        return cls(action_type=ActionType.POSITION_ISLAND, player=player)

    @classmethod
    def set_islands(cls, player: str) -> Action:
        return cls(action_type=ActionType.SET_ISLANDS, player=player)

    @classmethod
    def guess_coordinate(cls, player: str) -> Action:
        return cls(action_type=ActionType.GUESS_COORDINATE, player=player)

    @classmethod
    def win_check(cls, win: bool) -> Action:
        return cls(action_type=ActionType.WIN_CHECK, win=win)
