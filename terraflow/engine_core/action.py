"""
Action System - Actions, payloads, outcome codes and results.

Actions represent the seven player action kinds. Every action resolves
to an OutcomeCode: 0 means success, positive values enumerate the
reason a precondition failed. Codes are stable and caller-visible.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from .state import TerrainType, StructureType


class OutcomeCode(IntEnum):
    """Result of resolving an action."""
    SUCCESS = 0
    NOT_ENOUGH_COINS = 1
    NOT_ENOUGH_WORKERS = 2
    NOT_ENOUGH_PRIESTS = 3
    TERRAIN_UNAVAILABLE = 4  # Also: type mismatch, no structure to upgrade
    NOT_ADJACENT = 5
    LIMIT_REACHED = 6
    CULT_TRACK_BLOCKED = 7
    WRONG_PHASE = 8  # Setup only allows dwellings; nothing is allowed once the game is over

    @property
    def is_success(self) -> bool:
        return self is OutcomeCode.SUCCESS


# Ledger shortfall name -> outcome code
SHORTFALL_CODES = {
    "coins": OutcomeCode.NOT_ENOUGH_COINS,
    "workers": OutcomeCode.NOT_ENOUGH_WORKERS,
    "priests": OutcomeCode.NOT_ENOUGH_PRIESTS,
}


class ActionType(Enum):
    """Types of player actions."""
    TRANSFORM_TERRAIN = "transform_terrain"
    BUILD_DWELLING = "build_dwelling"
    IMPROVE_SHIPPING = "improve_shipping"
    IMPROVE_TERRAFORMING = "improve_terraforming"
    UPGRADE_STRUCTURE = "upgrade_structure"
    SEND_PRIEST_TO_CULT = "send_priest_to_cult"
    PASS = "pass"


@dataclass
class ActionPayload:
    """
    Parameters of an action.

    Different action types use different fields; the engine ignores
    the ones it does not need.
    """
    terrain_id: int | None = None
    terrain_type: TerrainType | None = None
    structure_type: StructureType | None = None
    track_name: str | None = None


@dataclass
class Action:
    """
    A complete action to be resolved against the current player.

    Actions are:
    - Validated before application
    - Applied atomically by the engine
    - Logged for replay when they succeed
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)
    player_id: str | None = None  # Filled in by the engine when applied
    round_index: int | None = None

    @classmethod
    def transform_terrain(cls, terrain_id: int, terrain_type: TerrainType) -> Action:
        return cls(
            action_type=ActionType.TRANSFORM_TERRAIN,
            payload=ActionPayload(terrain_id=terrain_id, terrain_type=terrain_type),
        )

    @classmethod
    def build_dwelling(cls, terrain_id: int) -> Action:
        return cls(
            action_type=ActionType.BUILD_DWELLING,
            payload=ActionPayload(terrain_id=terrain_id),
        )

    @classmethod
    def improve_shipping(cls) -> Action:
        return cls(action_type=ActionType.IMPROVE_SHIPPING)

    @classmethod
    def improve_terraforming(cls) -> Action:
        return cls(action_type=ActionType.IMPROVE_TERRAFORMING)

    @classmethod
    def upgrade_structure(
        cls, terrain_id: int, structure_type: StructureType | None = None
    ) -> Action:
        """Factory for upgrade; structure_type None means the default next tier."""
        return cls(
            action_type=ActionType.UPGRADE_STRUCTURE,
            payload=ActionPayload(terrain_id=terrain_id, structure_type=structure_type),
        )

    @classmethod
    def send_priest_to_cult(cls, track_name: str) -> Action:
        return cls(
            action_type=ActionType.SEND_PRIEST_TO_CULT,
            payload=ActionPayload(track_name=track_name),
        )

    @classmethod
    def pass_turn(cls) -> Action:
        return cls(action_type=ActionType.PASS)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - The outcome code
    - Human-readable changes (for UI/logs) when the action succeeded
    """
    outcome: OutcomeCode
    changes: list[str] = field(default_factory=list)
    round_ended: bool = False
    game_over: bool = False

    @property
    def success(self) -> bool:
        return self.outcome.is_success

    @classmethod
    def failure(cls, outcome: OutcomeCode) -> ActionResult:
        return cls(outcome=outcome)
