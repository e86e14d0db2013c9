"""
Engine Core - Pure game state and rules.

The engine:
1. Validates coordinates and island placement
2. Resolves guesses against hidden boards
3. Enforces the phase/turn protocol via Rules
4. Produces new SessionState values; nothing is mutated in place
"""

from .coordinate import Coordinate, BOARD_SIZE
from .island import Island, ShapeKind, Outcome, SHAPE_OFFSETS
from .board import Board, BoardGuess, WinStatus
from .guesses import GuessLog
from .action import Action, ActionType
from .rules import Rules, GamePhase, IslandsState, Player
from .state import SessionState, PlayerRecord, GuessResult
from .errors import (
    GameError,
    InvalidCoordinate,
    InvalidShape,
    OutOfBounds,
    OverlappingIsland,
    InvalidActionForState,
    InvalidPlayerName,
    NotYourTurn,
    IslandsAlreadySet,
    NotAllIslandsPositioned,
    PersistenceError,
    SessionNotFound,
)

__all__ = [
    "Coordinate",
    "BOARD_SIZE",
    "Island",
    "ShapeKind",
    "Outcome",
    "SHAPE_OFFSETS",
    "Board",
    "BoardGuess",
    "WinStatus",
    "GuessLog",
    "Action",
    "ActionType",
    "Rules",
    "GamePhase",
    "IslandsState",
    "Player",
    "SessionState",
    "PlayerRecord",
    "GuessResult",
    "GameError",
    "InvalidCoordinate",
    "InvalidShape",
    "OutOfBounds",
    "OverlappingIsland",
    "InvalidActionForState",
    "InvalidPlayerName",
    "NotYourTurn",
    "IslandsAlreadySet",
    "NotAllIslandsPositioned",
    "PersistenceError",
    "SessionNotFound",
]
