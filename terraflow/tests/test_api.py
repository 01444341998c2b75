"""
Tests for API layer.

Tests:
- API service methods
- HTTP endpoints through the FastAPI test client
- Session lifecycle via API
- Error handling

The standard map starts "F D P L M W S F D": terrain 0 is forest
(Witches, p1) and terrain 1 is desert (Nomads, p2).
"""

import time

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.schemas import (
    ActionRequest,
    ActionResponse,
    CreateSessionRequest,
    ErrorCode,
    ErrorResponse,
    SessionStatus,
)
from ..api.service import APIService
from ..engine_core.errors import ResourcePoolError
from ..session import SessionState


class TestAPIService:
    """Tests for APIService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return APIService()

    @pytest.fixture
    def session_id(self, service):
        return service.create_session(CreateSessionRequest()).session_id

    def test_create_session(self, service):
        response = service.create_session(
            CreateSessionRequest(player_names=["Ann", "Bo"], factions=["witches", "nomads"])
        )

        assert response.status == SessionStatus.SETUP
        assert [p.name for p in response.players] == ["Ann", "Bo"]
        assert response.players[0].is_current_turn
        assert response.last_status == "Game has started."

    def test_get_nonexistent_session(self, service):
        response = service.get_session("nonexistent-id")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_perform_action(self, service, session_id):
        response = service.perform_action(
            session_id, ActionRequest(kind="build_dwelling", terrain_id=0)
        )

        assert isinstance(response, ActionResponse)
        assert response.success
        assert response.outcome_code == 0
        assert response.current_player_id == "p1"
        assert response.changes == ["Player 1 built a dwelling on terrain 0"]

    def test_rule_failure_is_not_an_error(self, service, session_id):
        response = service.perform_action(session_id, ActionRequest(kind="pass"))

        assert isinstance(response, ActionResponse)
        assert not response.success
        assert response.outcome_code == 8
        assert response.status == "Failed: Action is not allowed in this phase"

    def test_missing_ids(self, service, session_id):
        response = service.perform_action(session_id, ActionRequest(kind="transform_terrain", terrain_id=0))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.VALIDATION_ERROR
        assert response.details == {"missing": ["terrain_type_id"]}

    def test_unknown_ids(self, service, session_id):
        response = service.perform_action(
            session_id, ActionRequest(kind="build_dwelling", terrain_id=999)
        )

        assert isinstance(response, ErrorResponse)
        assert response.error == "Failed: Unknown terrain: 999"

    def test_next_player(self, service, session_id):
        response = service.next_player(session_id)
        assert response.success
        assert response.current_player_id == "p2"

    def test_game_state(self, service, session_id):
        service.perform_action(session_id, ActionRequest(kind="build_dwelling", terrain_id=0))
        state = service.get_game_state(session_id)

        assert state.phase == "setup"
        assert state.setup_dwellings == 7
        assert len(state.terrains) == 45
        assert state.terrains[0].structure.owner_id == "p1"
        assert len(state.scoring_tiles) == 6
        assert state.action_count == 1

    def test_end_session(self, service, session_id):
        assert service.end_session(session_id)
        assert session_id not in service.list_sessions()
        assert isinstance(service.get_status(session_id), ErrorResponse)

    def test_stale_sessions_are_cleaned_up(self, service, session_id):
        stale = service.session_manager.get_session(session_id)
        stale.last_activity = time.time() - 10**6

        assert session_id not in service.list_sessions()
        assert service.session_manager.get_session(session_id) is None
        assert stale.state == SessionState.ABANDONED

    def test_reads_keep_session_alive(self, service, session_id):
        session = service.session_manager.get_session(session_id)
        session.last_activity = 0.0

        service.get_status(session_id)
        assert session.last_activity > 0.0

        session.last_activity = 0.0
        service.get_game_state(session_id)
        assert session.last_activity > 0.0

    def test_game_over_is_recorded_by_actions(self, service, session_id):
        session = service.session_manager.get_session(session_id)
        session.game_state.tracker.round_index = 6

        response = service.perform_action(session_id, ActionRequest(kind="pass"))

        assert response.outcome_code == 8
        assert response.game_over
        assert session.state == SessionState.GAME_OVER
        assert session_id not in service.list_sessions()

    def test_corrupted_pool_is_internal_error(self, service, session_id, monkeypatch):
        facade = service.session_manager.get_session(session_id).facade

        def broken():
            raise ResourcePoolError("Cannot spend 4 coins: only 0 available")

        monkeypatch.setattr(facade, "improve_shipping", broken)
        response = service.perform_action(session_id, ActionRequest(kind="improve_shipping"))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INTERNAL_ERROR


class TestHTTPEndpoints:
    """Tests for the FastAPI routes."""

    @pytest.fixture
    def service(self):
        return APIService()

    @pytest.fixture
    def client(self, service):
        return TestClient(create_app(service))

    @pytest.fixture
    def session_id(self, client):
        response = client.post("/api/v1/sessions")
        assert response.status_code == 200
        return response.json()["session_id"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_with_body(self, client):
        response = client.post(
            "/api/v1/sessions",
            json={"player_names": ["Ann", "Bo"], "factions": ["giants", "dwarves"], "seed": 5},
        )
        assert response.status_code == 200
        data = response.json()
        assert [p["faction"] for p in data["players"]] == ["Giants", "Dwarves"]

    def test_create_invalid_players(self, client):
        response = client.post("/api/v1/sessions", json={"player_names": ["Solo"], "factions": ["giants"]})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_setup_turns(self, client, session_id):
        """p1 builds, hands over, p2 builds."""
        url = f"/api/v1/sessions/{session_id}"

        response = client.post(f"{url}/actions", json={"kind": "build_dwelling", "terrain_id": 0})
        assert response.status_code == 200
        assert response.json()["success"] is True

        response = client.post(f"{url}/next-player")
        assert response.json()["current_player_id"] == "p2"

        response = client.post(f"{url}/actions", json={"kind": "build_dwelling", "terrain_id": 1})
        assert response.json()["outcome_code"] == 0

        status = client.get(f"{url}/status").json()
        assert status["status"] == "Action is done successfully"
        assert status["phase"] == "setup"

    def test_rule_failure_returns_200(self, client, session_id):
        response = client.post(
            f"/api/v1/sessions/{session_id}/actions",
            json={"kind": "build_dwelling", "terrain_id": 1},
        )
        assert response.status_code == 200
        assert response.json()["outcome_code"] == 4
        assert response.json()["status"] == "Failed: Terrain is not available"

    def test_unknown_id_returns_400(self, client, session_id):
        response = client.post(
            f"/api/v1/sessions/{session_id}/actions",
            json={"kind": "send_priest_to_cult", "track_id": 7},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_invalid_body_returns_400(self, client, session_id):
        response = client.post(f"/api/v1/sessions/{session_id}/actions", json={"kind": "burn"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_unknown_session_returns_404(self, client):
        for response in [
            client.get("/api/v1/sessions/missing"),
            client.get("/api/v1/sessions/missing/state"),
            client.post("/api/v1/sessions/missing/actions", json={"kind": "pass"}),
        ]:
            assert response.status_code == 404
            assert response.json()["error_code"] == "SESSION_NOT_FOUND"

    def test_session_lifecycle(self, client, session_id):
        assert session_id in client.get("/api/v1/sessions").json()["sessions"]

        response = client.delete(f"/api/v1/sessions/{session_id}")
        assert response.json()["success"] is True

        assert client.get(f"/api/v1/sessions/{session_id}").status_code == 404

    def test_stale_session_removed_on_create(self, client, service, session_id):
        service.session_manager.get_session(session_id).last_activity = time.time() - 10**6

        assert client.post("/api/v1/sessions").status_code == 200
        assert client.get(f"/api/v1/sessions/{session_id}").status_code == 404

    def test_internal_error_returns_500(self, client, service, session_id, monkeypatch):
        facade = service.session_manager.get_session(session_id).facade

        def broken():
            raise ResourcePoolError("Cannot spend 1 priests: only 0 available")

        monkeypatch.setattr(facade, "improve_terraforming", broken)
        response = client.post(
            f"/api/v1/sessions/{session_id}/actions", json={"kind": "improve_terraforming"}
        )
        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"
