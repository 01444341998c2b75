"""
Action Executor - Applies already validated actions to board and players.

Nothing here checks rules. Callers (the engine) must have validated the
action and paid its cost before calling in.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod

from .state import Player, Structure, StructureType, Terrain, TerrainType

logger = logging.getLogger(__name__)


class ActionExecutor(ABC):
    """Contract for board and player mutations."""

    @abstractmethod
    def transform_terrain(self, terrain: Terrain, new_type: TerrainType) -> None:
        """Set the terrain's type."""

    @abstractmethod
    def build(self, player: Player, terrain: Terrain) -> Structure:
        """Place a dwelling owned by the player."""

    @abstractmethod
    def upgrade_structure(
        self, player: Player, terrain: Terrain, structure_type: StructureType
    ) -> Structure:
        """Replace the terrain's structure with a new tier."""

    @abstractmethod
    def improve_shipping(self, player: Player) -> None:
        """Raise shipping by one level."""

    @abstractmethod
    def improve_terraforming(self, player: Player) -> None:
        """Lower the workers needed per spade by one."""


class BoardActionExecutor(ActionExecutor):
    """Executor over the in-memory board arena."""

    def transform_terrain(self, terrain, new_type) -> None:
        logger.debug(
            "Terrain %d: %s -> %s",
            terrain.terrain_id, terrain.terrain_type.value, new_type.value,
        )
        terrain.terrain_type = new_type

    def build(self, player, terrain) -> Structure:
        structure = Structure(StructureType.DWELLING, owner_id=player.player_id)
        terrain.structure = structure
        return structure

    def upgrade_structure(self, player, terrain, structure_type) -> Structure:
        # The old tier is discarded, which returns it to the player's supply
        structure = Structure(structure_type, owner_id=player.player_id)
        terrain.structure = structure
        return structure

    def improve_shipping(self, player) -> None:
        player.shipping += 1

    def improve_terraforming(self, player) -> None:
        player.spade_rate -= 1
