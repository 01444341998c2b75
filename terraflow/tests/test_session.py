"""
Tests for session management.

Tests:
- Session lifecycle
- Stale session cleanup
"""

import pytest
import time

from ..session import SessionManager, SessionState


class TestSessionManager:
    """Tests for SessionManager."""

    @pytest.fixture
    def manager(self):
        return SessionManager()

    def test_create_session(self, manager):
        session = manager.create_session()

        assert session.session_id
        assert session.state == SessionState.ACTIVE
        assert session.game_state.game_id == session.session_id
        assert len(session.game_state.players) == 4
        assert manager.get_session(session.session_id) is session

    def test_invalid_players(self, manager):
        with pytest.raises(ValueError):
            manager.create_session(player_names=["Solo"], factions=["witches"])
        assert manager.list_sessions() == []

    def test_sessions_are_independent(self, manager):
        first = manager.create_session()
        second = manager.create_session()

        assert first.session_id != second.session_id
        assert first.facade is not second.facade
        assert first.game_state.board is not second.game_state.board

    def test_end_session(self, manager):
        session = manager.create_session()

        assert manager.end_session(session.session_id)
        assert manager.get_session(session.session_id) is None
        assert session.state == SessionState.ENDED
        assert manager.end_session(session.session_id) is False

    def test_list_active_excludes_finished_games(self, manager):
        running = manager.create_session()
        finished = manager.create_session()
        finished.game_state.tracker.round_index = 6

        assert manager.list_active_sessions() == [running.session_id]
        assert finished.state == SessionState.ACTIVE

    def test_record_game_over(self, manager):
        session = manager.create_session()
        session.record_game_over()
        assert session.state == SessionState.ACTIVE

        session.game_state.tracker.round_index = 6
        session.record_game_over()
        assert session.state == SessionState.GAME_OVER

    def test_cleanup_stale_sessions(self, manager):
        stale = manager.create_session()
        fresh = manager.create_session()
        stale.last_activity = time.time() - 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == [stale.session_id]
        assert stale.state == SessionState.ABANDONED
        assert manager.get_session(fresh.session_id) is fresh
