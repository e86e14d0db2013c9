"""
API Module - Request/response interface to game sessions.

Exposes add_player, position_island, set_islands and guess_coordinate
over HTTP. Games are addressed by player 1's name.
"""

from .schemas import (
    CreateGameRequest,
    AddPlayerRequest,
    PositionIslandRequest,
    SetIslandsRequest,
    GuessRequest,
    GameResponse,
    BoardResponse,
    GuessResponse,
    ErrorResponse,
)
from .service import APIService
from .app import create_app

__all__ = [
    "CreateGameRequest",
    "AddPlayerRequest",
    "PositionIslandRequest",
    "SetIslandsRequest",
    "GuessRequest",
    "GameResponse",
    "BoardResponse",
    "GuessResponse",
    "ErrorResponse",
    "APIService",
    "create_app",
]
