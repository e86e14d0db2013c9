"""
API Service - Business logic layer between the API and the sessions.

The service:
1. Translates API requests to session operations
2. Turns engine errors into ErrorResponse values
3. Formats public views of a game

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core import Board, GameError, Player, SessionState
from ..engine_core.rules import IslandsState
from ..session import SessionManager
from .schemas import (
    AddPlayerRequest,
    BoardResponse,
    CreateGameRequest,
    ErrorResponse,
    GameListResponse,
    GameResponse,
    GuessRequest,
    GuessResponse,
    IslandInfo,
    OkResponse,
    PlayerInfo,
    PositionIslandRequest,
    SetIslandsRequest,
)


def error_response(error: GameError) -> ErrorResponse:
    return ErrorResponse(error=error.message, error_code=error.code, retryable=error.retryable)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        service.create_game(CreateGameRequest(name="alice"))
        service.add_player("alice", AddPlayerRequest(name="bob"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self, request: CreateGameRequest) -> GameResponse | ErrorResponse:
        """Start a game, or return the live one under that name."""
        try:
            session = self.session_manager.start_session(request.name)
            return self._game_to_response(session.get_state())
        except GameError as e:
            return error_response(e)

    def get_game(self, name: str) -> GameResponse | ErrorResponse:
        try:
            return self._game_to_response(self.session_manager.get_state(name))
        except GameError as e:
            return error_response(e)

    def end_game(self, name: str) -> bool:
        return self.session_manager.stop_session(name)

    def list_games(self) -> GameListResponse:
        games = self.session_manager.list_sessions()
        return GameListResponse(games=games, count=len(games))

    def add_player(self, name: str, request: AddPlayerRequest) -> OkResponse | ErrorResponse:
        try:
            self.session_manager.add_player(name, request.name)
        except GameError as e:
            return error_response(e)
        return OkResponse(name=name)

    def position_island(self, name: str, request: PositionIslandRequest) -> OkResponse | ErrorResponse:
        try:
            self.session_manager.position_island(
                name, request.player, request.shape, request.row, request.col
            )
        except GameError as e:
            return error_response(e)
        return OkResponse(name=name)

    def set_islands(self, name: str, request: SetIslandsRequest) -> BoardResponse | ErrorResponse:
        try:
            board = self.session_manager.set_islands(name, request.player)
        except GameError as e:
            return error_response(e)
        return BoardResponse(name=name, player=request.player, islands=self._board_to_info(board))

    def guess_coordinate(self, name: str, request: GuessRequest) -> GuessResponse | ErrorResponse:
        try:
            result = self.session_manager.guess_coordinate(
                name, request.player, request.row, request.col
            )
        except GameError as e:
            return error_response(e)
        return GuessResponse(
            name=name,
            player=request.player,
            outcome=result.outcome.value,
            forested=result.forested.value if result.forested else None,
            win=result.win.value,
        )

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _game_to_response(self, state: SessionState) -> GameResponse:
        players = []
        for player in Player:
            record = state.player(player)
            players.append(PlayerInfo(
                player=player.value,
                name=record.name,
                islands_set=state.rules.islands_state(player) is IslandsState.SET,
                hits=len(record.guesses.hits),
                misses=len(record.guesses.misses),
            ))
        return GameResponse(name=state.name, phase=state.rules.phase.value, players=players)

    def _board_to_info(self, board: Board) -> list[IslandInfo]:
        return [
            IslandInfo(
                shape=island.shape.value,
                cells=[(c.row, c.col) for c in sorted(island.cells)],
                hit_cells=[(c.row, c.col) for c in sorted(island.hit_cells)],
                forested=island.forested,
            )
            for island in board.islands.values()
        ]
