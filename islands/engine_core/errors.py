"""
Game Errors - Exception hierarchy for the engine and session layer.

Hierarchy:
- GameError (base, carries a stable error code)
  - Structural validation: InvalidCoordinate, InvalidShape, OutOfBounds,
    OverlappingIsland
  - Protocol: InvalidActionForState, InvalidPlayerName, NotYourTurn,
    IslandsAlreadySet, NotAllIslandsPositioned
  - Resource: PersistenceError, SessionNotFound

Every error is surfaced verbatim to the caller. A failed operation never
leaves a partially applied state behind.
"""


class GameError(Exception):
    """Base exception for all game errors."""
    code: str = "game_error"
    retryable: bool = False

    def __init__(self, message: str | None = None):
        self.message = message or self.code.replace("_", " ")
        super().__init__(self.message)


# =========================
# Structural validation
# =========================

class InvalidCoordinate(GameError):
    code = "invalid_coordinate"


class InvalidShape(GameError):
    code = "invalid_island_type"


class OutOfBounds(GameError):
    code = "island_out_of_bounds"


class OverlappingIsland(GameError):
    code = "overlapping_island"


# =========================
# Protocol
# =========================

class InvalidActionForState(GameError):
    code = "invalid_action_for_state"


class InvalidPlayerName(GameError):
    code = "invalid_player_name"


class NotYourTurn(GameError):
    code = "not_your_turn"


class IslandsAlreadySet(GameError):
    code = "islands_already_set"


class NotAllIslandsPositioned(GameError):
    code = "not_all_islands_positioned"


# =========================
# Resource
# =========================

class PersistenceError(GameError):
    code = "persistence_error"
    retryable = True
    # snapshot could not be written or read


class SessionNotFound(GameError):
    code = "session_not_found"
    retryable = True

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No live session named {name!r}")
