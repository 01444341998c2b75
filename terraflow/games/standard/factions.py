"""
Standard Factions - One faction per land type.

A faction fixes the only terrain type its player may build on, plus
its starting pool and stronghold income.
"""

from ...engine_core.state import Faction, Resources, TerrainType


def _start(**overrides) -> Resources:
    base = dict(workers=3, coins=15, priests=0, power=5, victory_points=20)
    base.update(overrides)
    return Resources(**base)


HALFLINGS = Faction(
    name="Halflings",
    home_terrain=TerrainType.PLAINS,
    starting_resources=_start(),
    stronghold_income=Resources(power=2),
)

ALCHEMISTS = Faction(
    name="Alchemists",
    home_terrain=TerrainType.SWAMP,
    starting_resources=_start(),
    stronghold_income=Resources(coins=6),
)

MERMAIDS = Faction(
    name="Mermaids",
    home_terrain=TerrainType.LAKES,
    starting_resources=_start(),
    stronghold_income=Resources(power=4),
)

WITCHES = Faction(
    name="Witches",
    home_terrain=TerrainType.FOREST,
    starting_resources=_start(),
    stronghold_income=Resources(power=2),
)

DWARVES = Faction(
    name="Dwarves",
    home_terrain=TerrainType.MOUNTAINS,
    starting_resources=_start(),
    stronghold_income=Resources(power=2),
)

GIANTS = Faction(
    name="Giants",
    home_terrain=TerrainType.WASTELAND,
    starting_resources=_start(),
    stronghold_income=Resources(power=4),
)

NOMADS = Faction(
    name="Nomads",
    home_terrain=TerrainType.DESERT,
    starting_resources=_start(workers=2),
    stronghold_income=Resources(power=2),
)

FACTIONS: dict[str, Faction] = {
    f.name.lower(): f
    for f in [HALFLINGS, ALCHEMISTS, MERMAIDS, WITCHES, DWARVES, GIANTS, NOMADS]
}

# Default picks in seating order; a game without factions takes the first N
DEFAULT_FACTIONS = ["witches", "nomads", "halflings", "mermaids", "dwarves"]


def get_faction(name: str) -> Faction:
    """Look up a faction by name (case-insensitive)."""
    try:
        return FACTIONS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown faction: {name}") from None
