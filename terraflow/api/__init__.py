"""
API Module - HTTP interface.

Exposes the engine via REST API. A client:
1. Creates a game session
2. Places the free setup dwellings
3. Sends one action per turn and hands the turn on
4. Reads status and state between turns

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    ActionKind,
    ActionRequest,
    CreateSessionRequest,
    # Responses
    ActionResponse,
    ErrorResponse,
    GameStateResponse,
    SessionResponse,
    StatusResponse,
    # Shared
    PlayerInfo,
    TerrainInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "ActionKind",
    "ActionRequest",
    "CreateSessionRequest",
    # Responses
    "ActionResponse",
    "ErrorResponse",
    "GameStateResponse",
    "SessionResponse",
    "StatusResponse",
    # Shared
    "PlayerInfo",
    "TerrainInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
