"""
Action Engine - Validates and applies the seven player actions.

The engine is the single entry point for rule-governed state changes.
Every action follows the same protocol:

1. Check the round phase allows the action
2. Check every precondition (terrain, adjacency, limits, resources)
3. Pay the cost through the ledger (all or nothing)
4. Apply the effect through the executor
5. Credit income and scoring tile bonuses

Steps 1-2 never mutate anything, so a failure leaves the session
exactly as it was. Failures are OutcomeCode values, not exceptions.
The engine never moves the turn to the next player; callers do that
explicitly through the tracker.
"""

from __future__ import annotations
import logging
from typing import Callable

from .action import Action, ActionResult, ActionType, OutcomeCode
from .adjacency import AdjacencyOracle
from .executor import ActionExecutor
from .ledger import ResourceLedger
from .state import (
    GameState,
    Player,
    RoundPhase,
    STRUCTURE_SUPPLY,
    StructureType,
    TerrainType,
    UPGRADE_PATHS,
)

logger = logging.getLogger(__name__)

MAX_SHIPPING = 3
BEST_SPADE_RATE = 1


class ActionEngine:
    """
    Resolves actions for the current player of one session.

    Usage:
        engine = ActionEngine(state, ledger, adjacency, executor)
        outcome = engine.build_dwelling(12)
        if outcome is OutcomeCode.SUCCESS:
            state.tracker.advance_to_next_player()
    """

    def __init__(
        self,
        state: GameState,
        ledger: ResourceLedger,
        adjacency: AdjacencyOracle,
        executor: ActionExecutor,
    ):
        self.state = state
        self.ledger = ledger
        self.adjacency = adjacency
        self.executor = executor

    @property
    def tracker(self):
        return self.state.tracker

    @property
    def current_player(self) -> Player:
        return self.state.tracker.current_player

    # =========================================================================
    # Dispatch
    # =========================================================================

    def apply(self, action: Action) -> ActionResult:
        """
        Apply an action and describe what happened.

        Successful actions are appended to the session's history.
        Unknown terrain ids or track names raise a LookupError subclass.
        """
        handler = self._get_handler(action.action_type)
        player = self.current_player
        round_before = self.tracker.round_index

        outcome = handler(action)
        if not outcome.is_success:
            logger.info(
                "%s: %s failed with %s",
                player.player_id, action.action_type.value, outcome.name,
            )
            return ActionResult.failure(outcome)

        action.player_id = player.player_id
        action.round_index = round_before
        self.state.action_history.append(action)

        round_ended = self.tracker.round_index != round_before
        return ActionResult(
            outcome=outcome,
            changes=[self._describe(action, player)],
            round_ended=round_ended and round_before >= 0,
            game_over=self.tracker.is_game_over,
        )

    def _get_handler(self, action_type: ActionType) -> Callable[[Action], OutcomeCode]:
        handlers = {
            ActionType.TRANSFORM_TERRAIN: lambda a: self.transform_terrain(
                a.payload.terrain_id, a.payload.terrain_type
            ),
            ActionType.BUILD_DWELLING: lambda a: self.build_dwelling(a.payload.terrain_id),
            ActionType.IMPROVE_SHIPPING: lambda a: self.improve_shipping(),
            ActionType.IMPROVE_TERRAFORMING: lambda a: self.improve_terraforming(),
            ActionType.UPGRADE_STRUCTURE: lambda a: self.upgrade_structure(
                a.payload.terrain_id, a.payload.structure_type
            ),
            ActionType.SEND_PRIEST_TO_CULT: lambda a: self.send_priest_to_cult(a.payload.track_name),
            ActionType.PASS: lambda a: self.pass_turn(),
        }
        return handlers[action_type]

    def _check_phase(self, action_type: ActionType) -> OutcomeCode | None:
        """Setup only allows dwellings; the terminal phase allows nothing."""
        phase = self.tracker.phase
        if phase is RoundPhase.TERMINAL:
            return OutcomeCode.WRONG_PHASE
        if self.tracker.in_setup and action_type != ActionType.BUILD_DWELLING:
            return OutcomeCode.WRONG_PHASE
        return None

    # =========================================================================
    # Actions
    # =========================================================================

    def transform_terrain(self, terrain_id: int, new_type: TerrainType) -> OutcomeCode:
        """Terraform an empty terrain into new_type, paying spades in workers."""
        blocked = self._check_phase(ActionType.TRANSFORM_TERRAIN)
        if blocked is not None:
            return blocked

        terrain = self.state.board.get_terrain(terrain_id)
        player = self.current_player
        current_type = terrain.terrain_type

        if (
            not terrain.is_available
            or not current_type.is_land
            or not new_type.is_land
            or current_type == new_type
        ):
            return OutcomeCode.TERRAIN_UNAVAILABLE

        if not self.ledger.can_afford_spade(player, current_type, new_type):
            return OutcomeCode.NOT_ENOUGH_WORKERS
        self.ledger.obtain_spade(player, current_type, new_type)

        self.executor.transform_terrain(terrain, new_type)
        return OutcomeCode.SUCCESS

    def build_dwelling(self, terrain_id: int) -> OutcomeCode:
        """
        Build a dwelling on a terrain of the player's home type.

        During setup the placement is free and needs no adjacency.
        """
        blocked = self._check_phase(ActionType.BUILD_DWELLING)
        if blocked is not None:
            return blocked

        terrain = self.state.board.get_terrain(terrain_id)
        player = self.current_player
        in_setup = self.tracker.in_setup

        if not terrain.is_available or terrain.terrain_type != player.faction.home_terrain:
            return OutcomeCode.TERRAIN_UNAVAILABLE

        if self._supply_exhausted(player, StructureType.DWELLING):
            return OutcomeCode.LIMIT_REACHED

        if not in_setup:
            if not self.adjacency.is_adjacent(player, terrain, self.state.board):
                return OutcomeCode.NOT_ADJACENT
            outcome = self.ledger.obtain_resource_of_structure(player, StructureType.DWELLING)
            if not outcome.is_success:
                return outcome

        self.executor.build(player, terrain)
        self.ledger.obtain_income_of_structure(player, StructureType.DWELLING)
        self.ledger.obtain_income_of_scoring_tile(
            player, self.tracker.round_index, StructureType.DWELLING
        )

        if in_setup:
            self.tracker.consume_setup_dwelling()
        return OutcomeCode.SUCCESS

    def improve_shipping(self) -> OutcomeCode:
        blocked = self._check_phase(ActionType.IMPROVE_SHIPPING)
        if blocked is not None:
            return blocked

        player = self.current_player
        if player.shipping >= MAX_SHIPPING:
            return OutcomeCode.LIMIT_REACHED

        outcome = self.ledger.obtain_resource_for_shipping(player)
        if not outcome.is_success:
            return outcome

        self.executor.improve_shipping(player)
        self.ledger.obtain_income_for_shipping(player)
        return OutcomeCode.SUCCESS

    def improve_terraforming(self) -> OutcomeCode:
        blocked = self._check_phase(ActionType.IMPROVE_TERRAFORMING)
        if blocked is not None:
            return blocked

        player = self.current_player
        if player.spade_rate <= BEST_SPADE_RATE:
            return OutcomeCode.LIMIT_REACHED

        outcome = self.ledger.obtain_resource_for_improvement(player)
        if not outcome.is_success:
            return outcome

        self.executor.improve_terraforming(player)
        self.ledger.obtain_income_for_improvement(player)
        return OutcomeCode.SUCCESS

    def upgrade_structure(
        self, terrain_id: int, new_type: StructureType | None = None
    ) -> OutcomeCode:
        """
        Replace the player's structure on a terrain with a higher tier.

        new_type picks a branch (trading house -> temple or stronghold);
        None takes the first legal upgrade.
        """
        blocked = self._check_phase(ActionType.UPGRADE_STRUCTURE)
        if blocked is not None:
            return blocked

        terrain = self.state.board.get_terrain(terrain_id)
        player = self.current_player
        structure = terrain.structure

        if structure is None or structure.owner_id != player.player_id:
            return OutcomeCode.TERRAIN_UNAVAILABLE

        paths = UPGRADE_PATHS[structure.structure_type]
        if not paths:
            return OutcomeCode.LIMIT_REACHED

        target = new_type if new_type is not None else paths[0]
        if target not in paths:
            return OutcomeCode.TERRAIN_UNAVAILABLE
        if self._supply_exhausted(player, target):
            return OutcomeCode.LIMIT_REACHED

        outcome = self.ledger.obtain_resource_of_structure(player, target)
        if not outcome.is_success:
            return outcome

        self.executor.upgrade_structure(player, terrain, target)
        self.ledger.obtain_income_of_structure(player, target)
        self.ledger.obtain_income_of_scoring_tile(player, self.tracker.round_index, target)
        return OutcomeCode.SUCCESS

    def send_priest_to_cult(self, track_name: str) -> OutcomeCode:
        blocked = self._check_phase(ActionType.SEND_PRIEST_TO_CULT)
        if blocked is not None:
            return blocked

        player = self.current_player
        if player.resources.priests == 0:
            return OutcomeCode.NOT_ENOUGH_PRIESTS

        track = self.state.cult_board.get_track(track_name)
        if not track.advance_with_priest(player):
            return OutcomeCode.CULT_TRACK_BLOCKED

        self.ledger.spend_priest(player)
        return OutcomeCode.SUCCESS

    def pass_turn(self) -> OutcomeCode:
        """
        Pass for the rest of the round and collect round income.

        When every player has passed the round advances. A player who
        already passed this round passes again as a no-op.
        """
        blocked = self._check_phase(ActionType.PASS)
        if blocked is not None:
            return blocked

        player = self.current_player
        if player.has_passed:
            logger.warning("%s already passed in round %d", player.player_id, self.tracker.round_index)
            return OutcomeCode.SUCCESS

        round_index = self.tracker.round_index
        self.ledger.get_end_of_round_income_of_scoring_tile(player, round_index)
        self.ledger.get_income_of_structures(player)
        self.tracker.record_pass(player)
        return OutcomeCode.SUCCESS

    # =========================================================================
    # Helpers
    # =========================================================================

    def _supply_exhausted(self, player: Player, structure_type: StructureType) -> bool:
        built = self.state.board.count_structures(player.player_id, structure_type)
        return built >= STRUCTURE_SUPPLY[structure_type]

    def _describe(self, action: Action, player: Player) -> str:
        payload = action.payload
        if action.action_type == ActionType.TRANSFORM_TERRAIN:
            return f"{player.name} transformed terrain {payload.terrain_id} into {payload.terrain_type.value}"
        if action.action_type == ActionType.BUILD_DWELLING:
            return f"{player.name} built a dwelling on terrain {payload.terrain_id}"
        if action.action_type == ActionType.IMPROVE_SHIPPING:
            return f"{player.name} improved shipping to level {player.shipping}"
        if action.action_type == ActionType.IMPROVE_TERRAFORMING:
            return f"{player.name} now needs {player.spade_rate} worker(s) per spade"
        if action.action_type == ActionType.UPGRADE_STRUCTURE:
            built = self.state.board.get_terrain(payload.terrain_id).structure
            return f"{player.name} upgraded terrain {payload.terrain_id} to {built.structure_type.value}"
        if action.action_type == ActionType.SEND_PRIEST_TO_CULT:
            return f"{player.name} sent a priest to the {payload.track_name} cult"
        return f"{player.name} passed"
