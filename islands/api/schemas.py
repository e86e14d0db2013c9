"""
Pydantic Schemas for API - Request/response models for the game API.

These models define the contract between clients and the engine.

Player, shape and coordinate values are accepted as given and validated by
the engine, so a bad value comes back as the engine's own error code rather
than a generic validation error.

Error Codes:
- session_not_found: no live session by that name (create it again)
- invalid_action_for_state, invalid_player_name, not_your_turn,
  islands_already_set, not_all_islands_positioned: protocol errors
- invalid_coordinate, invalid_island_type, island_out_of_bounds,
  overlapping_island: validation errors
- persistence_error: the snapshot could not be written
"""

from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Shared Models
# =============================================================================

class IslandInfo(BaseModel):
    """One placed island."""
    shape: str
    cells: list[tuple[int, int]]
    hit_cells: list[tuple[int, int]] = Field(default_factory=list)
    forested: bool = False


class PlayerInfo(BaseModel):
    """Public player information."""
    player: str = Field(description="player1 or player2")
    name: Optional[str] = None
    islands_set: bool = False
    hits: int = 0
    misses: int = 0


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Start (or resume) a game under player1's name."""
    name: str = Field(..., min_length=1, description="Player 1's name; also the game's name")


class AddPlayerRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Player 2's name")


class PositionIslandRequest(BaseModel):
    """Place an island with its upper-left cell at (row, col)."""
    player: str
    shape: str = Field(..., description="square, atoll, dot, l_shape or s_shape")
    row: int
    col: int


class SetIslandsRequest(BaseModel):
    player: str


class GuessRequest(BaseModel):
    player: str
    row: int
    col: int


# =============================================================================
# Response Models
# =============================================================================

class GameResponse(BaseModel):
    """Public view of a game."""
    name: str
    phase: str
    players: list[PlayerInfo]
    api_version: str = "v1"


class OkResponse(BaseModel):
    success: bool = True
    name: str


class BoardResponse(BaseModel):
    """A player's finished board, returned when they set their islands."""
    name: str
    player: str
    islands: list[IslandInfo]


class GuessResponse(BaseModel):
    name: str
    player: str
    outcome: str = Field(description="hit or miss")
    forested: Optional[str] = Field(None, description="Shape forested by this guess, if any")
    win: str = Field(description="win or no_win")


class GameListResponse(BaseModel):
    games: list[str]
    count: int


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: str
    retryable: bool = False


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
