"""
Scoring Tiles - One tile per round.

A tile rewards:
- Building (or upgrading into) its structure type with victory points
- Passing with a fixed end-of-round income
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field, replace

from ...engine_core.state import Resources, StructureType

ROUNDS = 6


@dataclass(frozen=True)
class ScoringTile:
    """Scoring tile of a single round."""
    name: str
    structure_type: StructureType
    build_points: int
    end_of_round_income: Resources = field(default_factory=Resources)
    round_index: int = -1  # Assigned when the tiles are drawn


SCORING_TILE_POOL = [
    ScoringTile("dwelling_priest", StructureType.DWELLING, 2, Resources(priests=1)),
    ScoringTile("dwelling_power", StructureType.DWELLING, 2, Resources(power=4)),
    ScoringTile("trading_house_workers", StructureType.TRADING_HOUSE, 3, Resources(workers=1)),
    ScoringTile("trading_house_coins", StructureType.TRADING_HOUSE, 3, Resources(coins=2)),
    ScoringTile("temple_coins", StructureType.TEMPLE, 4, Resources(coins=2)),
    ScoringTile("stronghold_workers", StructureType.STRONGHOLD, 5, Resources(workers=2)),
    ScoringTile("sanctuary_priest", StructureType.SANCTUARY, 5, Resources(priests=1)),
    ScoringTile("dwelling_workers", StructureType.DWELLING, 2, Resources(workers=1)),
]


def draw_scoring_tiles(seed: int | None = None) -> list[ScoringTile]:
    """
    Pick one tile per round.

    Without a seed the first six tiles of the pool are used in order.
    """
    pool = list(SCORING_TILE_POOL)
    if seed is not None:
        random.Random(seed).shuffle(pool)
    return [replace(tile, round_index=i) for i, tile in enumerate(pool[:ROUNDS])]
