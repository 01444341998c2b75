"""
Standard Costs - Build costs and income of the base game.

Build income is credited the moment a structure is placed; round income
is credited for every owned structure when its owner passes.
"""

from ...engine_core.ledger import CostTable
from ...engine_core.state import Resources, StructureType

STRUCTURE_COSTS = {
    StructureType.DWELLING: Resources(workers=1, coins=2),
    StructureType.TRADING_HOUSE: Resources(workers=2, coins=3),
    StructureType.TEMPLE: Resources(workers=2, coins=5),
    StructureType.STRONGHOLD: Resources(workers=4, coins=6),
    StructureType.SANCTUARY: Resources(workers=4, coins=6),
}

STRUCTURE_BUILD_INCOME = {
    StructureType.DWELLING: Resources(power=1),
    StructureType.TRADING_HOUSE: Resources(power=1),
    StructureType.TEMPLE: Resources(priests=1),
    StructureType.STRONGHOLD: Resources(power=2),
    StructureType.SANCTUARY: Resources(priests=1),
}

# Stronghold income is faction specific
STRUCTURE_ROUND_INCOME = {
    StructureType.DWELLING: Resources(workers=1),
    StructureType.TRADING_HOUSE: Resources(coins=2, power=1),
    StructureType.TEMPLE: Resources(priests=1),
    StructureType.SANCTUARY: Resources(priests=1),
}

BASE_ROUND_INCOME = Resources(workers=1)

SHIPPING_COST = Resources(coins=4, priests=1)
SHIPPING_INCOME = {
    1: Resources(victory_points=2),
    2: Resources(victory_points=3),
    3: Resources(victory_points=4),
}

TERRAFORMING_COST = Resources(workers=2, coins=5, priests=1)
TERRAFORMING_INCOME = Resources(victory_points=6)


def create_standard_costs() -> CostTable:
    """Cost table of the base game."""
    return CostTable(
        structure_costs=STRUCTURE_COSTS,
        structure_build_income=STRUCTURE_BUILD_INCOME,
        structure_round_income=STRUCTURE_ROUND_INCOME,
        base_round_income=BASE_ROUND_INCOME,
        shipping_cost=SHIPPING_COST,
        shipping_income=SHIPPING_INCOME,
        terraforming_cost=TERRAFORMING_COST,
        terraforming_income=TERRAFORMING_INCOME,
    )
