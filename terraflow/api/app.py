"""
FastAPI Application - REST API over game sessions.

Endpoints:
    POST   /api/v1/sessions                     Create game session
    GET    /api/v1/sessions                     List active sessions
    GET    /api/v1/sessions/{id}                Get session summary
    DELETE /api/v1/sessions/{id}                End session
    GET    /api/v1/sessions/{id}/state          Get full game state
    GET    /api/v1/sessions/{id}/status         Get status line
    POST   /api/v1/sessions/{id}/actions        Act for the current player
    POST   /api/v1/sessions/{id}/next-player    Hand the turn on

Rule failures (not enough coins, terrain not adjacent, ...) are HTTP 200
with success=false and the outcome code. Unknown sessions are 404,
invalid request values are 400, and an action that corrupts the
resource pools is 500.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Union

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ALLOWED_ORIGINS
from .service import APIService
from .schemas import (
    # Request models
    ActionRequest,
    CreateSessionRequest,
    # Response models
    ActionResponse,
    EndSessionResponse,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    SessionListResponse,
    SessionResponse,
    StatusResponse,
    # Enums
    ErrorCode,
)

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Terraflow API",
        description="""
Turn engine for a territory-settlement board game.

## Outcome codes

| Code | Meaning |
|------|---------|
| 0 | Success |
| 1 | Not enough coins |
| 2 | Not enough workers |
| 3 | Not enough priests |
| 4 | Terrain is not available |
| 5 | Terrain is not adjacent |
| 6 | Improvement limit has been reached |
| 7 | Cult track is blocked |
| 8 | Action is not allowed in this phase |

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `VALIDATION_ERROR` | Missing or unknown ids, invalid players |
| `INTERNAL_ERROR` | An action corrupted the resource pools (HTTP 500) |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Turn an ErrorResponse into a JSON response with its HTTP status."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report malformed request bodies as VALIDATION_ERROR."""
        return make_error_response(ErrorResponse(
            error="Invalid request",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": [
                {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
        ))

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid players or factions"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        request: CreateSessionRequest | None = None,
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session.

        Without a body a four player game with the default factions is set up.
        """
        try:
            return api_service.create_session(request or CreateSessionRequest())
        except ValueError as e:
            return make_error_response(
                ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)
            )

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session summary",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and release its state."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get full game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game_state(session_id))

    @app.get(
        "/api/v1/sessions/{session_id}/status",
        response_model=StatusResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get the session's status line",
    )
    async def get_status(session_id: str) -> Union[StatusResponse, JSONResponse]:
        return respond(api_service.get_status(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Missing or unknown ids"},
            404: {"model": ErrorResponse, "description": "Session not found"},
            500: {"model": ErrorResponse, "description": "Resource pools corrupted"},
        },
        tags=["Game"],
        summary="Perform an action for the current player",
    )
    async def perform_action(
        session_id: str, request: ActionRequest
    ) -> Union[ActionResponse, JSONResponse]:
        """
        Perform one action for the current player.

        The turn does not move on by itself; call `/next-player` afterwards.
        """
        return respond(api_service.perform_action(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/next-player",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Hand the turn to the next player",
    )
    async def next_player(session_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.next_player(session_id))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="terraflow",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Terraflow API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn terraflow.api.app:app
app = create_app()
