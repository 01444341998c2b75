"""
Resource Ledger - Affordability checks, deductions and income.

The ledger is the only component that changes player resource pools.
Every obtain_* method checks first and deducts only when the whole cost
can be paid, so a failed call leaves the pool untouched.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .action import OutcomeCode, SHORTFALL_CODES
from .state import (
    Player,
    Resources,
    SPADE_DISTANCE,
    StructureType,
    TerrainType,
)

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)


class ResourceLedger(ABC):
    """
    Contract the engine uses to pay for actions and collect income.

    Cost methods return an OutcomeCode (SUCCESS when paid) except the
    spade pair, which answers with a bool like the board game's rules do:
    a spade is either affordable or not, and only workers buy spades.
    """

    @abstractmethod
    def can_afford_spade(self, player: Player, from_type: TerrainType, to_type: TerrainType) -> bool:
        """Check whether the player can pay for turning from_type into to_type."""

    @abstractmethod
    def obtain_spade(self, player: Player, from_type: TerrainType, to_type: TerrainType) -> bool:
        """Pay for the spades. Returns False, and deducts nothing, if unaffordable."""

    @abstractmethod
    def obtain_resource_of_structure(self, player: Player, structure_type: StructureType) -> OutcomeCode:
        """Pay the build cost of a structure."""

    @abstractmethod
    def obtain_income_of_structure(self, player: Player, structure_type: StructureType) -> None:
        """Credit the immediate reward for building a structure."""

    @abstractmethod
    def obtain_income_of_scoring_tile(
        self, player: Player, round_index: int, structure_type: StructureType
    ) -> None:
        """Credit the round's scoring tile bonus for building structure_type."""

    @abstractmethod
    def obtain_resource_for_shipping(self, player: Player) -> OutcomeCode:
        """Pay for one shipping level."""

    @abstractmethod
    def obtain_income_for_shipping(self, player: Player) -> None:
        """Credit the reward for the shipping level just reached."""

    @abstractmethod
    def obtain_resource_for_improvement(self, player: Player) -> OutcomeCode:
        """Pay for one terraforming improvement."""

    @abstractmethod
    def obtain_income_for_improvement(self, player: Player) -> None:
        """Credit the reward for a terraforming improvement."""

    @abstractmethod
    def get_end_of_round_income_of_scoring_tile(self, player: Player, round_index: int) -> None:
        """Credit the round's scoring tile income on pass."""

    @abstractmethod
    def get_income_of_structures(self, player: Player) -> None:
        """Credit the income of every structure the player owns."""

    @abstractmethod
    def spend_priest(self, player: Player) -> None:
        """Consume one priest (caller has checked there is one)."""


@dataclass
class CostTable:
    """
    Cost and income tables of a ruleset.

    Structure round income for a stronghold comes from the faction,
    not from this table.
    """
    structure_costs: dict[StructureType, Resources]
    structure_build_income: dict[StructureType, Resources]
    structure_round_income: dict[StructureType, Resources]
    base_round_income: Resources = field(default_factory=Resources)
    shipping_cost: Resources = field(default_factory=Resources)
    shipping_income: dict[int, Resources] = field(default_factory=dict)  # new level -> income
    terraforming_cost: Resources = field(default_factory=Resources)
    terraforming_income: Resources = field(default_factory=Resources)


def outcome_for(pool: Resources, cost: Resources) -> OutcomeCode:
    """Map the first shortfall of a pool to its outcome code."""
    missing = pool.shortfall(cost)
    if missing is None:
        return OutcomeCode.SUCCESS
    # Power and victory points never appear in costs of the standard game
    return SHORTFALL_CODES.get(missing, OutcomeCode.NOT_ENOUGH_COINS)


class TableResourceLedger(ResourceLedger):
    """
    Ledger driven by a CostTable.

    Needs the session state to count structures and look up the
    scoring tile of a round.
    """

    def __init__(self, state: GameState, costs: CostTable):
        self.state = state
        self.costs = costs

    # -------------------------------------------------------------------------
    # Spades
    # -------------------------------------------------------------------------

    def spade_cost(self, player: Player, from_type: TerrainType, to_type: TerrainType) -> Resources:
        spades = SPADE_DISTANCE[(from_type, to_type)]
        return Resources(workers=spades * player.spade_rate)

    def can_afford_spade(self, player, from_type, to_type) -> bool:
        return player.resources.can_afford(self.spade_cost(player, from_type, to_type))

    def obtain_spade(self, player, from_type, to_type) -> bool:
        cost = self.spade_cost(player, from_type, to_type)
        if not player.resources.can_afford(cost):
            return False
        player.resources.spend(cost)
        logger.debug("%s paid %d workers for spades", player.player_id, cost.workers)
        return True

    # -------------------------------------------------------------------------
    # Structures
    # -------------------------------------------------------------------------

    def obtain_resource_of_structure(self, player, structure_type) -> OutcomeCode:
        cost = self.costs.structure_costs[structure_type]
        outcome = outcome_for(player.resources, cost)
        if outcome.is_success:
            player.resources.spend(cost)
        return outcome

    def obtain_income_of_structure(self, player, structure_type) -> None:
        income = self.costs.structure_build_income.get(structure_type)
        if income:
            player.resources.gain(income)

    def obtain_income_of_scoring_tile(self, player, round_index, structure_type) -> None:
        tile = self.state.scoring_tile_for(round_index)
        if tile is None or tile.structure_type != structure_type:
            return
        player.resources.gain(Resources(victory_points=tile.build_points))
        logger.debug(
            "%s scored %d points from tile %s",
            player.player_id, tile.build_points, tile.name,
        )

    # -------------------------------------------------------------------------
    # Tracks
    # -------------------------------------------------------------------------

    def obtain_resource_for_shipping(self, player) -> OutcomeCode:
        outcome = outcome_for(player.resources, self.costs.shipping_cost)
        if outcome.is_success:
            player.resources.spend(self.costs.shipping_cost)
        return outcome

    def obtain_income_for_shipping(self, player) -> None:
        income = self.costs.shipping_income.get(player.shipping)
        if income:
            player.resources.gain(income)

    def obtain_resource_for_improvement(self, player) -> OutcomeCode:
        outcome = outcome_for(player.resources, self.costs.terraforming_cost)
        if outcome.is_success:
            player.resources.spend(self.costs.terraforming_cost)
        return outcome

    def obtain_income_for_improvement(self, player) -> None:
        player.resources.gain(self.costs.terraforming_income)

    # -------------------------------------------------------------------------
    # Round income
    # -------------------------------------------------------------------------

    def get_end_of_round_income_of_scoring_tile(self, player, round_index) -> None:
        tile = self.state.scoring_tile_for(round_index)
        if tile is not None:
            player.resources.gain(tile.end_of_round_income)

    def get_income_of_structures(self, player) -> None:
        income = Resources()
        income.gain(self.costs.base_round_income)
        for terrain in self.state.board.structures_of(player.player_id):
            structure_type = terrain.structure.structure_type
            if structure_type == StructureType.STRONGHOLD:
                income.gain(player.faction.stronghold_income)
            else:
                income.gain(self.costs.structure_round_income.get(structure_type, Resources()))
        player.resources.gain(income)
        logger.debug("%s collected structure income %s", player.player_id, income.as_dict())

    def spend_priest(self, player) -> None:
        player.resources.spend(Resources(priests=1))
