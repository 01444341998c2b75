"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller creates a session -> state, engine and facade are built
2. During the game every request goes through the session's facade
3. The session ends when the caller deletes it or it goes stale

PERSISTENCE RULES:
- NO database
- Sessions are in-memory only and independent of each other
- Ending a session drops all of its state
"""

from __future__ import annotations
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config import TERRAFLOW_SESSION_TTL
from ..engine_core.state import GameState
from ..games.standard.setup import create_standard_engine, setup_standard_game
from .facade import GameFacade

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Round 6 reached
    ENDED = "ended"  # Removed by the caller
    ABANDONED = "abandoned"  # Removed as stale


@dataclass
class Session:
    """
    An in-memory game session.

    Contains:
    - The game state
    - The facade (which owns the engine)
    - Session metadata
    """
    session_id: str
    facade: GameFacade
    created_at: float
    last_activity: float = 0.0

    state: SessionState = SessionState.ACTIVE

    # Session metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def game_state(self) -> GameState:
        return self.facade.state

    def is_active(self) -> bool:
        """Check if session is still being played."""
        return self.state is SessionState.ACTIVE and not self.facade.is_game_over

    def record_game_over(self) -> None:
        """Move an active session to GAME_OVER once its game has finished."""
        if self.state is SessionState.ACTIVE and self.facade.is_game_over:
            self.state = SessionState.GAME_OVER
            logger.info("Session %s game over", self.session_id)

    def touch(self) -> None:
        self.last_activity = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their own engine and facade
    - Track active sessions
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        player_names: list[str] | None = None,
        factions: list[str] | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            player_names: Names in seating order
            factions: One faction name per player
            seed: Shuffles map and scoring tiles

        Returns:
            New Session in the setup phase

        Raises:
            ValueError: if the players or factions are invalid
        """
        session_id = str(uuid.uuid4())
        state = setup_standard_game(
            player_names=player_names,
            factions=factions,
            seed=seed,
            game_id=session_id,
        )
        now = time.time()
        session = Session(
            session_id=session_id,
            facade=GameFacade(create_standard_engine(state)),
            created_at=now,
            last_activity=now,
        )

        with self._lock:
            self._sessions[session_id] = session
        logger.info("Session %s created", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "ended") -> bool:
        """
        End a session and remove it from memory.

        Returns False if the session did not exist.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        session.state = SessionState.ABANDONED if reason == "stale" else SessionState.ENDED
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose game is still running."""
        return [
            sid for sid, session in list(self._sessions.items())
            if session.is_active()
        ]

    def list_sessions(self) -> list[str]:
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = TERRAFLOW_SESSION_TTL) -> list[str]:
        """
        Remove sessions idle for longer than max_age_seconds.

        Returns the removed session ids.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in list(self._sessions.items())
            if current_time - session.last_activity > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove
