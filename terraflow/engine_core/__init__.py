"""
Engine Core - Deterministic action resolution for one game session.

The engine is the runtime that:
1. Holds a GameState (board, players, cult board, scoring tiles, tracker)
2. Validates an action against the current player
3. Pays for it through the ResourceLedger
4. Applies it through the ActionExecutor
5. Advances round bookkeeping in the TurnTracker
"""

from .state import (
    Board,
    Faction,
    GameState,
    Player,
    Resources,
    RoundPhase,
    Structure,
    StructureType,
    Terrain,
    TerrainType,
    SPADE_DISTANCE,
    STRUCTURE_SUPPLY,
    UPGRADE_PATHS,
    structure_type_from_id,
    terrain_type_from_id,
)
from .action import Action, ActionType, ActionPayload, ActionResult, OutcomeCode
from .tracker import TurnTracker
from .ledger import ResourceLedger, TableResourceLedger, CostTable
from .adjacency import AdjacencyOracle, HexAdjacencyOracle
from .executor import ActionExecutor, BoardActionExecutor
from .engine import ActionEngine
from .errors import (
    TerraflowError,
    UnknownTerrainError,
    UnknownCultTrackError,
    UnknownTypeError,
    ResourcePoolError,
)

__all__ = [
    "Board",
    "Faction",
    "GameState",
    "Player",
    "Resources",
    "RoundPhase",
    "Structure",
    "StructureType",
    "Terrain",
    "TerrainType",
    "SPADE_DISTANCE",
    "STRUCTURE_SUPPLY",
    "UPGRADE_PATHS",
    "structure_type_from_id",
    "terrain_type_from_id",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "OutcomeCode",
    "TurnTracker",
    "ResourceLedger",
    "TableResourceLedger",
    "CostTable",
    "AdjacencyOracle",
    "HexAdjacencyOracle",
    "ActionExecutor",
    "BoardActionExecutor",
    "ActionEngine",
    "TerraflowError",
    "UnknownTerrainError",
    "UnknownCultTrackError",
    "UnknownTypeError",
    "ResourcePoolError",
]
