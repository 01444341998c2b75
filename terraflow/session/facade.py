"""
Game Facade - Status-reporting front of one session's engine.

The facade:
1. Resolves raw identifiers (terrain ids, type ids, cult track ids)
2. Hands the resulting Action to the engine
3. Keeps the outcome and a human readable status line

Every call returns a bool. Unknown identifiers never reach the engine:
they yield False and a "Failed: Unknown ..." status.
"""

from __future__ import annotations
import logging
import threading
from typing import Callable

from ..engine_core.action import Action, ActionResult, OutcomeCode
from ..engine_core.engine import ActionEngine
from ..engine_core.errors import UnknownCultTrackError, UnknownTerrainError, UnknownTypeError
from ..engine_core.state import (
    GameState,
    Player,
    RoundPhase,
    structure_type_from_id,
    terrain_type_from_id,
)

logger = logging.getLogger(__name__)

INITIAL_STATUS = "Game has started."

STATUS_MESSAGES = {
    OutcomeCode.SUCCESS: "Action is done successfully",
    OutcomeCode.NOT_ENOUGH_COINS: "Failed: Not enough coins",
    OutcomeCode.NOT_ENOUGH_WORKERS: "Failed: Not enough workers",
    OutcomeCode.NOT_ENOUGH_PRIESTS: "Failed: Not enough priests",
    OutcomeCode.TERRAIN_UNAVAILABLE: "Failed: Terrain is not available",
    OutcomeCode.NOT_ADJACENT: "Failed: Terrain is not adjacent",
    OutcomeCode.LIMIT_REACHED: "Failed: Improvement limit has been reached",
    OutcomeCode.CULT_TRACK_BLOCKED: "Failed: Cult track is blocked",
    OutcomeCode.WRONG_PHASE: "Failed: Action is not allowed in this phase",
}

_UNKNOWN_ID_ERRORS = (UnknownTerrainError, UnknownTypeError, UnknownCultTrackError)


class GameFacade:
    """
    Caller-facing API of a single session.

    Usage:
        facade = GameFacade(create_standard_engine(state))
        if facade.build_dwelling(12):
            facade.next_player()
        print(facade.status)

    Calls are serialised with a per-session lock.
    """

    def __init__(self, engine: ActionEngine):
        self.engine = engine
        self.status = INITIAL_STATUS
        self.last_outcome: OutcomeCode | None = None
        self.last_result: ActionResult | None = None
        self._lock = threading.Lock()

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self.engine.state

    @property
    def current_player(self) -> Player:
        return self.engine.state.tracker.current_player

    @property
    def round_index(self) -> int:
        return self.engine.state.tracker.round_index

    @property
    def phase(self) -> RoundPhase:
        return self.engine.state.tracker.phase

    @property
    def is_game_over(self) -> bool:
        return self.engine.state.tracker.is_game_over

    # =========================================================================
    # Actions
    # =========================================================================

    def transform_terrain(self, terrain_id: int, terrain_type_id: int) -> bool:
        return self._run(lambda: Action.transform_terrain(
            self._check_terrain(terrain_id), terrain_type_from_id(terrain_type_id)
        ))

    def build_dwelling(self, terrain_id: int) -> bool:
        return self._run(lambda: Action.build_dwelling(self._check_terrain(terrain_id)))

    def improve_shipping(self) -> bool:
        return self._run(Action.improve_shipping)

    def improve_terraforming(self) -> bool:
        return self._run(Action.improve_terraforming)

    def upgrade_structure(self, terrain_id: int, structure_type_id: int | None = None) -> bool:
        """Upgrade; without a structure type id the default next tier is built."""
        def build():
            target = None
            if structure_type_id is not None:
                target = structure_type_from_id(structure_type_id)
            return Action.upgrade_structure(self._check_terrain(terrain_id), target)
        return self._run(build)

    def send_priest_to_cult(self, track_id: int) -> bool:
        return self._run(lambda: Action.send_priest_to_cult(
            self.engine.state.cult_board.get_track_by_id(track_id).name
        ))

    def pass_turn(self) -> bool:
        return self._run(Action.pass_turn)

    def next_player(self) -> bool:
        """Hand the turn to the next player who has not passed."""
        with self._lock:
            if self.is_game_over:
                self._record(OutcomeCode.WRONG_PHASE)
                return False
            player = self.engine.state.tracker.advance_to_next_player()
            logger.debug("Turn passes to %s", player.player_id)
            return True

    # =========================================================================
    # Helpers
    # =========================================================================

    def _check_terrain(self, terrain_id: int) -> int:
        return self.engine.state.board.get_terrain(terrain_id).terrain_id

    def _run(self, make_action: Callable[[], Action]) -> bool:
        with self._lock:
            try:
                action = make_action()
            except _UNKNOWN_ID_ERRORS as e:
                self.last_outcome = None
                self.last_result = None
                self.status = f"Failed: {e}"
                logger.info("Rejected request: %s", e)
                return False

            result = self.engine.apply(action)
            self.last_result = result
            self._record(result.outcome)
            return result.success

    def _record(self, outcome: OutcomeCode) -> None:
        self.last_outcome = outcome
        self.status = STATUS_MESSAGES[outcome]
