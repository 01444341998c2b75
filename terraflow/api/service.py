"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to facade calls
2. Manages sessions
3. Formats responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable

from ..engine_core.errors import ResourcePoolError
from ..engine_core.state import GameState, Player, Resources, RoundPhase
from ..session import GameFacade, Session, SessionManager
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
    ResourcesInfo,
    ScoringTileInfo,
    StructureInfo,
    TerrainInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)

logger = logging.getLogger(__name__)

# Request fields each action kind cannot do without
REQUIRED_FIELDS: dict[ActionKind, tuple[str, ...]] = {
    ActionKind.TRANSFORM_TERRAIN: ("terrain_id", "terrain_type_id"),
    ActionKind.BUILD_DWELLING: ("terrain_id",),
    ActionKind.IMPROVE_SHIPPING: (),
    ActionKind.IMPROVE_TERRAFORMING: (),
    ActionKind.UPGRADE_STRUCTURE: ("terrain_id",),
    ActionKind.SEND_PRIEST_TO_CULT: ("track_id",),
    ActionKind.PASS: (),
}

ACTION_CALLS: dict[ActionKind, Callable[[GameFacade, ActionRequest], bool]] = {
    ActionKind.TRANSFORM_TERRAIN: lambda f, r: f.transform_terrain(r.terrain_id, r.terrain_type_id),
    ActionKind.BUILD_DWELLING: lambda f, r: f.build_dwelling(r.terrain_id),
    ActionKind.IMPROVE_SHIPPING: lambda f, r: f.improve_shipping(),
    ActionKind.IMPROVE_TERRAFORMING: lambda f, r: f.improve_terraforming(),
    ActionKind.UPGRADE_STRUCTURE: lambda f, r: f.upgrade_structure(r.terrain_id, r.structure_type_id),
    ActionKind.SEND_PRIEST_TO_CULT: lambda f, r: f.send_priest_to_cult(r.track_id),
    ActionKind.PASS: lambda f, r: f.pass_turn(),
}


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(CreateSessionRequest())

        # Act for the current player
        result = service.perform_action(session_id, ActionRequest(kind="build_dwelling", terrain_id=3))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        Idle sessions are cleaned up first.
        Raises ValueError for invalid players or factions.
        """
        self.session_manager.cleanup_stale_sessions()
        session = self.session_manager.create_session(
            player_names=request.player_names,
            factions=request.factions,
            seed=request.seed,
        )
        return self._session_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        self.session_manager.cleanup_stale_sessions()
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Game
    # =========================================================================

    def perform_action(
        self, session_id: str, request: ActionRequest
    ) -> ActionResponse | ErrorResponse:
        """
        Apply one action for the session's current player.

        Rule failures come back as ActionResponse with success=False.
        Missing or unknown ids come back as a VALIDATION_ERROR.
        A corrupted resource pool comes back as an INTERNAL_ERROR.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        missing = [name for name in REQUIRED_FIELDS[request.kind] if getattr(request, name) is None]
        if missing:
            return ErrorResponse(
                error=f"{request.kind.value} needs {', '.join(missing)}",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"missing": missing},
            )

        session.touch()
        facade = session.facade
        try:
            success = ACTION_CALLS[request.kind](facade, request)
        except ResourcePoolError as e:
            logger.exception("Session %s: %s corrupted the resource pools", session_id, request.kind.value)
            return ErrorResponse(error=str(e), error_code=ErrorCode.INTERNAL_ERROR)
        session.record_game_over()
        logger.debug("Session %s: %s -> %s", session_id, request.kind.value, facade.status)

        if not success and facade.last_outcome is None:
            return ErrorResponse(error=facade.status, error_code=ErrorCode.VALIDATION_ERROR)

        result = facade.last_result
        return ActionResponse(
            session_id=session_id,
            success=success,
            outcome_code=int(facade.last_outcome),
            status=facade.status,
            changes=list(result.changes) if result else [],
            round_index=facade.round_index,
            round_ended=result.round_ended if result else False,
            game_over=facade.is_game_over,
            current_player_id=facade.current_player.player_id,
        )

    def next_player(self, session_id: str) -> ActionResponse | ErrorResponse:
        """Hand the turn to the next player who has not passed."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        session.touch()
        facade = session.facade
        success = facade.next_player()
        session.record_game_over()
        return ActionResponse(
            session_id=session_id,
            success=success,
            outcome_code=None if success else int(facade.last_outcome),
            status=facade.status,
            round_index=facade.round_index,
            game_over=facade.is_game_over,
            current_player_id=facade.current_player.player_id,
        )

    def get_status(self, session_id: str) -> StatusResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        session.touch()
        facade = session.facade
        return StatusResponse(
            session_id=session_id,
            status=facade.status,
            outcome_code=None if facade.last_outcome is None else int(facade.last_outcome),
            phase=facade.phase.value,
            round_index=facade.round_index,
            current_player_id=facade.current_player.player_id,
            game_over=facade.is_game_over,
        )

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        session.touch()
        state = session.game_state
        return GameStateResponse(
            session_id=session_id,
            phase=state.tracker.phase.value,
            round_index=state.round_index,
            setup_dwellings=state.tracker.setup_dwellings,
            current_player_id=state.current_player.player_id,
            players=self._player_infos(state),
            terrains=[
                TerrainInfo(
                    terrain_id=t.terrain_id,
                    terrain_type=t.terrain_type.value,
                    neighbors=list(t.neighbors),
                    structure=StructureInfo(
                        structure_type=t.structure.structure_type.value,
                        owner_id=t.structure.owner_id,
                    ) if t.structure else None,
                )
                for t in sorted(state.board.get_terrain_list(), key=lambda t: t.terrain_id)
            ],
            scoring_tiles=[
                ScoringTileInfo(
                    round_index=tile.round_index,
                    name=tile.name,
                    structure_type=tile.structure_type.value,
                    build_points=tile.build_points,
                    end_of_round_income=_resources_info(tile.end_of_round_income),
                )
                for tile in state.scoring_tiles
            ],
            action_count=len(state.action_history),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_response(self, session: Session) -> SessionResponse:
        state = session.game_state
        phase = state.tracker.phase
        if phase is RoundPhase.SETUP:
            status = SessionStatus.SETUP
        elif phase is RoundPhase.TERMINAL:
            status = SessionStatus.GAME_OVER
        else:
            status = SessionStatus.ACTIVE

        return SessionResponse(
            session_id=session.session_id,
            status=status,
            created_at=session.created_at,
            round_index=state.round_index,
            current_player_id=state.current_player.player_id,
            players=self._player_infos(state),
            last_status=session.facade.status,
        )

    def _player_infos(self, state: GameState) -> list[PlayerInfo]:
        current_id = state.current_player.player_id
        return [_player_info(state, p, p.player_id == current_id) for p in state.players]


def _resources_info(resources: Resources) -> ResourcesInfo:
    return ResourcesInfo(**resources.as_dict())


def _player_info(state: GameState, player: Player, is_current: bool) -> PlayerInfo:
    return PlayerInfo(
        player_id=player.player_id,
        name=player.name,
        faction=player.faction.name,
        home_terrain=player.faction.home_terrain.value,
        is_current_turn=is_current,
        has_passed=player.has_passed,
        shipping=player.shipping,
        spade_rate=player.spade_rate,
        resources=_resources_info(player.resources),
        cult_positions=state.cult_board.positions_of(player.player_id),
    )
