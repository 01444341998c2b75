"""
Game State - Board, players and session state for one game.

Design principles:
- Arena layout: terrains are indexed by id, structures name their owner
  by player_id, so there are no object back-references
- Mutable in place: only the ledger and the executor change these objects
- Clonable: clone() returns a deep copy for comparisons and what-ifs
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
from copy import deepcopy
from enum import Enum

from .errors import UnknownTerrainError, UnknownTypeError, ResourcePoolError

if TYPE_CHECKING:
    from .tracker import TurnTracker
    from ..games.standard.cults import CultBoard
    from ..games.standard.scoring import ScoringTile


class TerrainType(Enum):
    """Terrain types. The first seven form the terraforming cycle."""
    PLAINS = "plains"
    SWAMP = "swamp"
    LAKES = "lakes"
    FOREST = "forest"
    MOUNTAINS = "mountains"
    WASTELAND = "wasteland"
    DESERT = "desert"
    RIVER = "river"

    @property
    def is_land(self) -> bool:
        return self is not TerrainType.RIVER


LAND_CYCLE = [t for t in TerrainType if t.is_land]

# External ids used by callers (UI, API, CLI)
TERRAIN_TYPE_IDS = {i: t for i, t in enumerate(TerrainType)}


def _cycle_distance(a: TerrainType, b: TerrainType) -> int:
    step = abs(LAND_CYCLE.index(a) - LAND_CYCLE.index(b))
    return min(step, len(LAND_CYCLE) - step)


# Spades needed to turn one land type into another
SPADE_DISTANCE: dict[tuple[TerrainType, TerrainType], int] = {
    (a, b): _cycle_distance(a, b) for a in LAND_CYCLE for b in LAND_CYCLE
}


def terrain_type_from_id(type_id: int) -> TerrainType:
    """Map an external terrain type id to a TerrainType."""
    try:
        return TERRAIN_TYPE_IDS[int(type_id)]
    except (KeyError, TypeError, ValueError):
        raise UnknownTypeError("terrain", type_id) from None


class StructureType(Enum):
    """Structure tiers."""
    DWELLING = "dwelling"
    TRADING_HOUSE = "trading_house"
    TEMPLE = "temple"
    STRONGHOLD = "stronghold"
    SANCTUARY = "sanctuary"


STRUCTURE_TYPE_IDS = {i: s for i, s in enumerate(StructureType)}

# Legal upgrades; the first entry is the default next tier
UPGRADE_PATHS: dict[StructureType, list[StructureType]] = {
    StructureType.DWELLING: [StructureType.TRADING_HOUSE],
    StructureType.TRADING_HOUSE: [StructureType.TEMPLE, StructureType.STRONGHOLD],
    StructureType.TEMPLE: [StructureType.SANCTUARY],
    StructureType.STRONGHOLD: [],
    StructureType.SANCTUARY: [],
}

# Pieces each player owns of every tier
STRUCTURE_SUPPLY: dict[StructureType, int] = {
    StructureType.DWELLING: 8,
    StructureType.TRADING_HOUSE: 4,
    StructureType.TEMPLE: 3,
    StructureType.STRONGHOLD: 1,
    StructureType.SANCTUARY: 1,
}


def structure_type_from_id(type_id: int) -> StructureType:
    """Map an external structure type id to a StructureType."""
    try:
        return STRUCTURE_TYPE_IDS[int(type_id)]
    except (KeyError, TypeError, ValueError):
        raise UnknownTypeError("structure", type_id) from None


class RoundPhase(Enum):
    """Round lifecycle."""
    SETUP = "setup"
    ROUND = "round"
    TERMINAL = "terminal"


@dataclass
class Resources:
    """
    A bundle of resources.

    Used both as a player's pool and as a cost or income amount.
    """
    workers: int = 0
    coins: int = 0
    priests: int = 0
    power: int = 0
    victory_points: int = 0

    # Shortfalls are reported in this order
    CHECK_ORDER = ("coins", "workers", "priests", "power", "victory_points")

    def shortfall(self, cost: Resources) -> str | None:
        """Return the first resource this pool cannot cover, or None."""
        for name in self.CHECK_ORDER:
            if getattr(self, name) < getattr(cost, name):
                return name
        return None

    def can_afford(self, cost: Resources) -> bool:
        return self.shortfall(cost) is None

    def spend(self, cost: Resources) -> None:
        """Deduct a cost. Raises ResourcePoolError instead of going negative."""
        missing = self.shortfall(cost)
        if missing is not None:
            raise ResourcePoolError(
                f"Cannot spend {getattr(cost, missing)} {missing}: "
                f"only {getattr(self, missing)} available"
            )
        for name in self.CHECK_ORDER:
            setattr(self, name, getattr(self, name) - getattr(cost, name))

    def gain(self, income: Resources) -> None:
        for name in self.CHECK_ORDER:
            setattr(self, name, getattr(self, name) + getattr(income, name))

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in self.CHECK_ORDER}


@dataclass(frozen=True)
class Faction:
    """
    Per-player trait set.

    Determines the home terrain (the only type a player may build on),
    starting resources and the stronghold's round income.
    """
    name: str
    home_terrain: TerrainType
    starting_resources: Resources = field(
        default_factory=lambda: Resources(workers=3, coins=15, priests=0, power=5, victory_points=20)
    )
    stronghold_income: Resources = field(default_factory=lambda: Resources(power=2))


@dataclass
class Player:
    """State for a single player."""
    player_id: str
    name: str
    faction: Faction
    resources: Resources = field(default_factory=Resources)
    shipping: int = 0
    spade_rate: int = 3  # Workers per spade, 1 is best
    has_passed: bool = False

    @classmethod
    def create(cls, player_id: str, name: str, faction: Faction) -> Player:
        """Factory that seeds the pool from the faction's starting resources."""
        return cls(
            player_id=player_id,
            name=name,
            faction=faction,
            resources=deepcopy(faction.starting_resources),
        )


@dataclass
class Structure:
    """A building on exactly one terrain, owned by exactly one player."""
    structure_type: StructureType
    owner_id: str


@dataclass
class Terrain:
    """A single map hex."""
    terrain_id: int
    terrain_type: TerrainType
    neighbors: list[int] = field(default_factory=list)
    structure: Structure | None = None

    @property
    def is_available(self) -> bool:
        return self.structure is None

    def is_owned_by(self, player_id: str) -> bool:
        return self.structure is not None and self.structure.owner_id == player_id


@dataclass
class Board:
    """
    Arena of terrains indexed by id.

    Terrains reference their neighbours by id.
    """
    terrains: dict[int, Terrain] = field(default_factory=dict)

    def get_terrain(self, terrain_id: int) -> Terrain:
        """Get terrain by id. Raises UnknownTerrainError if absent."""
        try:
            return self.terrains[terrain_id]
        except KeyError:
            raise UnknownTerrainError(terrain_id) from None

    def get_terrain_list(self) -> list[Terrain]:
        return list(self.terrains.values())

    def neighbors_of(self, terrain: Terrain) -> list[Terrain]:
        return [self.terrains[n] for n in terrain.neighbors if n in self.terrains]

    def structures_of(self, player_id: str) -> list[Terrain]:
        """Terrains carrying a structure owned by the player."""
        return [t for t in self.terrains.values() if t.is_owned_by(player_id)]

    def count_structures(self, player_id: str, structure_type: StructureType) -> int:
        return sum(
            1 for t in self.structures_of(player_id)
            if t.structure.structure_type == structure_type
        )


@dataclass
class GameState:
    """
    Complete session state.

    One instance per game; never shared between sessions.
    """
    game_id: str
    board: Board
    players: list[Player]
    cult_board: CultBoard
    scoring_tiles: list[ScoringTile]
    tracker: TurnTracker

    # Successful actions, for replay and logging
    action_history: list[Any] = field(default_factory=list)

    # Metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def current_player(self) -> Player:
        return self.tracker.current_player

    @property
    def round_index(self) -> int:
        return self.tracker.round_index

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def scoring_tile_for(self, round_index: int) -> ScoringTile | None:
        for tile in self.scoring_tiles:
            if tile.round_index == round_index:
                return tile
        return None

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
