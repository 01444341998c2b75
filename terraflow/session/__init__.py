"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when a caller starts a game
- Holds the game state, engine and facade
- Destroyed when the caller ends it or it goes stale

Sessions are EPHEMERAL:
- No persistence to database
- Nothing is shared between sessions
"""

from .facade import GameFacade, INITIAL_STATUS, STATUS_MESSAGES
from .manager import SessionManager, Session, SessionState

__all__ = [
    "GameFacade",
    "INITIAL_STATUS",
    "STATUS_MESSAGES",
    "SessionManager",
    "Session",
    "SessionState",
]
