"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.
Rule failures are not errors: they come back as ActionResponse with
success=false and the outcome code.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- VALIDATION_ERROR: Request values are invalid (unknown ids, bad players)
- INTERNAL_ERROR: An action left the resource pools inconsistent
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ActionKind(str, Enum):
    """Action kinds accepted by the actions endpoint."""
    TRANSFORM_TERRAIN = "transform_terrain"
    BUILD_DWELLING = "build_dwelling"
    IMPROVE_SHIPPING = "improve_shipping"
    IMPROVE_TERRAFORMING = "improve_terraforming"
    UPGRADE_STRUCTURE = "upgrade_structure"
    SEND_PRIEST_TO_CULT = "send_priest_to_cult"
    PASS = "pass"


class SessionStatus(str, Enum):
    """Session status values."""
    SETUP = "setup"
    ACTIVE = "active"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ResourcesInfo(BaseModel):
    """A resource pool."""
    workers: int = 0
    coins: int = 0
    priests: int = 0
    power: int = 0
    victory_points: int = 0


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    faction: str
    home_terrain: str
    is_current_turn: bool = False
    has_passed: bool = False
    shipping: int = 0
    spade_rate: int = 3
    resources: ResourcesInfo = Field(default_factory=ResourcesInfo)
    cult_positions: dict[str, int] = Field(default_factory=dict)

    model_config = {"from_attributes": True}


class StructureInfo(BaseModel):
    """A structure on a terrain."""
    structure_type: str
    owner_id: str


class TerrainInfo(BaseModel):
    """A single map hex."""
    terrain_id: int
    terrain_type: str
    neighbors: list[int] = Field(default_factory=list)
    structure: Optional[StructureInfo] = None


class ScoringTileInfo(BaseModel):
    """Scoring tile of one round."""
    round_index: int
    name: str
    structure_type: str
    build_points: int
    end_of_round_income: ResourcesInfo


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    player_names: Optional[list[str]] = Field(
        None, description="Names in seating order (defaults to four players)"
    )
    factions: Optional[list[str]] = Field(
        None, description="One faction name per player"
    )
    seed: Optional[int] = Field(
        None, description="Shuffles the map and scoring tiles"
    )


class ActionRequest(BaseModel):
    """
    A single action for the current player.

    Which id fields are needed depends on the kind:
    - transform_terrain: terrain_id, terrain_type_id
    - build_dwelling: terrain_id
    - upgrade_structure: terrain_id, optional structure_type_id
    - send_priest_to_cult: track_id
    """
    kind: ActionKind
    terrain_id: Optional[int] = None
    terrain_type_id: Optional[int] = Field(None, description="0-6 land types, 7 river")
    structure_type_id: Optional[int] = Field(None, description="0-4 dwelling..sanctuary")
    track_id: Optional[int] = Field(None, description="0 fire, 1 water, 2 earth, 3 air")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class ActionResponse(BaseModel):
    """Result of an action or a turn change."""
    session_id: str
    success: bool
    outcome_code: Optional[int] = Field(
        None, description="0 success, 1-8 failure reason; null for unknown ids"
    )
    status: str
    changes: list[str] = Field(default_factory=list)
    round_index: int
    round_ended: bool = False
    game_over: bool = False
    current_player_id: str


class StatusResponse(BaseModel):
    """Status line of a session."""
    session_id: str
    status: str
    outcome_code: Optional[int] = None
    phase: str
    round_index: int
    current_player_id: str
    game_over: bool = False


class GameStateResponse(BaseModel):
    """Full game state."""
    session_id: str
    phase: str
    round_index: int
    setup_dwellings: int
    current_player_id: str
    players: list[PlayerInfo]
    terrains: list[TerrainInfo]
    scoring_tiles: list[ScoringTileInfo] = Field(default_factory=list)
    action_count: int = 0


class SessionResponse(BaseModel):
    """Response with session information."""
    session_id: str
    status: SessionStatus
    created_at: float
    round_index: int
    current_player_id: str
    players: list[PlayerInfo]
    last_status: str
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
