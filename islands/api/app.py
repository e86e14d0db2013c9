"""
FastAPI Application - REST API for island games.

Endpoints:
    POST   /api/v1/games                        Create (or resume) a game
    GET    /api/v1/games                        List live games
    GET    /api/v1/games/{name}                 Get game status
    DELETE /api/v1/games/{name}                 Stop a game (snapshot kept)
    POST   /api/v1/games/{name}/players         Add player 2
    POST   /api/v1/games/{name}/islands         Position an island
    POST   /api/v1/games/{name}/islands/set     Lock in a player's islands
    POST   /api/v1/games/{name}/guesses         Guess a coordinate
    GET    /api/v1/health                       Health check

A game is addressed by player 1's name. Games idle for a day are discarded;
requests for a discarded game return 404 session_not_found and the client
must create the game again.
"""

from contextlib import asynccontextmanager
from typing import Union

from .. import __version__
from ..config import Settings

ERROR_STATUS = {
    "session_not_found": 404,
    "persistence_error": 503,
}


def create_app(service=None, settings: Settings | None = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..session import SessionManager
    from .service import APIService
    from .schemas import (
        AddPlayerRequest,
        BoardResponse,
        CreateGameRequest,
        ErrorResponse,
        GameListResponse,
        GameResponse,
        GuessRequest,
        GuessResponse,
        HealthResponse,
        OkResponse,
        PositionIslandRequest,
        SetIslandsRequest,
    )

    settings = settings or Settings.from_env()
    api_service = service or APIService(session_manager=SessionManager.from_settings(settings))

    @asynccontextmanager
    async def lifespan(app):
        yield
        api_service.session_manager.shutdown()

    app = FastAPI(
        title="Islands Engine API",
        description="Two-player island hunting game sessions.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def respond(response):
        """Pass models through; turn ErrorResponse into a JSON error with a status."""
        if isinstance(response, ErrorResponse):
            return JSONResponse(
                status_code=ERROR_STATUS.get(response.error_code, 400),
                content=response.model_dump(),
            )
        return response

    error_responses = {
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    }

    # =========================================================================
    # Games
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        responses=error_responses,
        tags=["Games"],
        summary="Create or resume a game",
    )
    def create_game(request: CreateGameRequest) -> Union[GameResponse, JSONResponse]:
        """
        Start a game named after player 1.

        If a live game or a crash-recovery snapshot exists for the name,
        that game is returned instead of a new one.
        """
        return respond(api_service.create_game(request))

    @app.get("/api/v1/games", response_model=GameListResponse, tags=["Games"])
    def list_games() -> GameListResponse:
        return api_service.list_games()

    @app.get(
        "/api/v1/games/{name}",
        response_model=GameResponse,
        responses=error_responses,
        tags=["Games"],
    )
    def get_game(name: str) -> Union[GameResponse, JSONResponse]:
        return respond(api_service.get_game(name))

    @app.delete("/api/v1/games/{name}", response_model=OkResponse, tags=["Games"])
    def end_game(name: str) -> OkResponse:
        return OkResponse(success=api_service.end_game(name), name=name)

    # =========================================================================
    # Game actions
    # =========================================================================

    @app.post(
        "/api/v1/games/{name}/players",
        response_model=OkResponse,
        responses=error_responses,
        tags=["Actions"],
    )
    def add_player(name: str, request: AddPlayerRequest) -> Union[OkResponse, JSONResponse]:
        return respond(api_service.add_player(name, request))

    @app.post(
        "/api/v1/games/{name}/islands",
        response_model=OkResponse,
        responses=error_responses,
        tags=["Actions"],
    )
    def position_island(name: str, request: PositionIslandRequest) -> Union[OkResponse, JSONResponse]:
        """Place or move one island. Allowed until the player sets their islands."""
        return respond(api_service.position_island(name, request))

    @app.post(
        "/api/v1/games/{name}/islands/set",
        response_model=BoardResponse,
        responses=error_responses,
        tags=["Actions"],
    )
    def set_islands(name: str, request: SetIslandsRequest) -> Union[BoardResponse, JSONResponse]:
        """Lock in all five islands. Returns the player's own board."""
        return respond(api_service.set_islands(name, request))

    @app.post(
        "/api/v1/games/{name}/guesses",
        response_model=GuessResponse,
        responses=error_responses,
        tags=["Actions"],
    )
    def guess_coordinate(name: str, request: GuessRequest) -> Union[GuessResponse, JSONResponse]:
        return respond(api_service.guess_coordinate(name, request))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    def health_check() -> HealthResponse:
        return HealthResponse(status="healthy", service="islands-engine", version=__version__)

    return app
