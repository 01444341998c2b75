"""
Tests for resources and the table-driven ledger.
"""

import pytest

from ..engine_core.action import OutcomeCode
from ..engine_core.errors import ResourcePoolError
from ..engine_core.ledger import TableResourceLedger, outcome_for
from ..engine_core.state import (
    Resources,
    SPADE_DISTANCE,
    StructureType,
    TerrainType,
)
from ..games.standard.costs import create_standard_costs
from .conftest import place


class TestResources:
    """Tests for the Resources bundle."""

    def test_shortfall_order(self):
        pool = Resources(workers=0, coins=0, priests=0)
        assert pool.shortfall(Resources(workers=1, coins=1, priests=1)) == "coins"
        assert pool.shortfall(Resources(workers=1, priests=1)) == "workers"
        assert pool.shortfall(Resources(priests=1)) == "priests"
        assert pool.shortfall(Resources()) is None

    def test_spend_and_gain(self):
        pool = Resources(workers=3, coins=10)
        pool.spend(Resources(workers=1, coins=4))
        pool.gain(Resources(power=2))
        assert pool == Resources(workers=2, coins=6, power=2)

    def test_overspend_raises(self):
        pool = Resources(coins=1)
        with pytest.raises(ResourcePoolError):
            pool.spend(Resources(coins=2))
        assert pool.coins == 1

    def test_outcome_for(self):
        pool = Resources(workers=5, coins=1)
        assert outcome_for(pool, Resources(coins=2)) is OutcomeCode.NOT_ENOUGH_COINS
        assert outcome_for(pool, Resources(priests=1)) is OutcomeCode.NOT_ENOUGH_PRIESTS
        assert outcome_for(pool, Resources(workers=5)) is OutcomeCode.SUCCESS


class TestSpadeDistance:
    """Tests for the terraforming cycle table."""

    def test_symmetric(self):
        for (a, b), distance in SPADE_DISTANCE.items():
            assert SPADE_DISTANCE[(b, a)] == distance

    def test_values(self):
        assert SPADE_DISTANCE[(TerrainType.PLAINS, TerrainType.PLAINS)] == 0
        assert SPADE_DISTANCE[(TerrainType.PLAINS, TerrainType.SWAMP)] == 1
        assert SPADE_DISTANCE[(TerrainType.PLAINS, TerrainType.DESERT)] == 1
        assert SPADE_DISTANCE[(TerrainType.PLAINS, TerrainType.FOREST)] == 3
        assert max(SPADE_DISTANCE.values()) == 3

    def test_river_not_in_cycle(self):
        assert not any(TerrainType.RIVER in pair for pair in SPADE_DISTANCE)


class TestTableResourceLedger:
    """Tests for TableResourceLedger with the standard costs."""

    @pytest.fixture
    def ledger(self, state):
        return TableResourceLedger(state, create_standard_costs())

    def test_spade_cost(self, ledger, witch):
        witch.spade_rate = 2
        cost = ledger.spade_cost(witch, TerrainType.DESERT, TerrainType.FOREST)
        assert cost == Resources(workers=6)

    def test_obtain_spade_unaffordable(self, ledger, witch):
        assert ledger.obtain_spade(witch, TerrainType.DESERT, TerrainType.FOREST) is False
        assert witch.resources.workers == 3

    def test_structure_income(self, ledger, state, witch):
        """Base, dwelling, trading house and faction stronghold income."""
        place(state, 1, "p1", StructureType.TRADING_HOUSE)
        place(state, 4, "p1", StructureType.STRONGHOLD)

        ledger.get_income_of_structures(witch)

        # base 1 + dwelling 1 workers; trading house 2 coins 1 power; stronghold 2 power
        assert witch.resources.workers == 5
        assert witch.resources.coins == 17
        assert witch.resources.power == 8

    def test_scoring_tile_only_for_matching_type(self, ledger, witch):
        ledger.obtain_income_of_scoring_tile(witch, 0, StructureType.TRADING_HOUSE)
        assert witch.resources.victory_points == 20
        ledger.obtain_income_of_scoring_tile(witch, 0, StructureType.DWELLING)
        assert witch.resources.victory_points == 22

    def test_no_tile_outside_rounds(self, ledger, witch):
        ledger.obtain_income_of_scoring_tile(witch, -1, StructureType.DWELLING)
        ledger.get_end_of_round_income_of_scoring_tile(witch, 6)
        assert witch.resources.victory_points == 20

    def test_shipping_income_per_level(self, ledger, witch):
        witch.shipping = 2
        ledger.obtain_income_for_shipping(witch)
        assert witch.resources.victory_points == 23
