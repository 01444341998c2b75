"""
Turn Tracker - Current player, round index, setup allowance, pass count.

Round lifecycle:
    SETUP (round -1, free dwellings remaining)
      -> ROUND 0..5 (when the last free dwelling is placed)
      -> TERMINAL (round 6, after the sixth round's passes)

The tracker never decides what an action costs; it only keeps the
counters consistent.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .state import Player, RoundPhase

logger = logging.getLogger(__name__)

SETUP_ROUND = -1
FINAL_ROUND = 6
DWELLINGS_PER_PLAYER_IN_SETUP = 2


@dataclass
class TurnTracker:
    """
    Turn and round bookkeeping for one session.

    Players are kept in seating order. The pass threshold is the number
    of players: the round ends once each of them has passed.
    """
    players: list[Player]
    current_index: int = 0
    round_index: int = SETUP_ROUND
    setup_dwellings: int = 0
    total_passes: int = 0
    final_round: int = FINAL_ROUND

    def __post_init__(self):
        if not self.players:
            raise ValueError("A game needs at least one player")
        if self.setup_dwellings == 0 and self.round_index == SETUP_ROUND:
            self.setup_dwellings = DWELLINGS_PER_PLAYER_IN_SETUP * len(self.players)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_index]

    @property
    def pass_threshold(self) -> int:
        return len(self.players)

    @property
    def phase(self) -> RoundPhase:
        if self.round_index >= self.final_round:
            return RoundPhase.TERMINAL
        if self.round_index == SETUP_ROUND:
            return RoundPhase.SETUP
        return RoundPhase.ROUND

    @property
    def in_setup(self) -> bool:
        return self.setup_dwellings > 0

    @property
    def is_game_over(self) -> bool:
        return self.phase is RoundPhase.TERMINAL

    def advance_to_next_player(self) -> Player:
        """
        Move to the next player in seating order who has not passed.

        If every player has passed the current player is kept.
        """
        n = len(self.players)
        for offset in range(1, n + 1):
            idx = (self.current_index + offset) % n
            if not self.players[idx].has_passed:
                self.current_index = idx
                break
        return self.current_player

    def consume_setup_dwelling(self) -> bool:
        """
        Use one free setup placement.

        Returns True when this was the last one, which starts round 0.
        """
        if self.setup_dwellings <= 0:
            return False
        self.setup_dwellings -= 1
        if self.setup_dwellings == 0:
            self.round_index = 0
            logger.info("Setup complete, round 0 begins")
            return True
        return False

    def record_pass(self, player: Player) -> bool:
        """
        Count a pass and flag the player.

        Returns True when this pass ended the round.
        """
        player.has_passed = True
        self.total_passes += 1
        if self.total_passes < self.pass_threshold:
            return False

        self.total_passes = 0
        self.round_index += 1
        for p in self.players:
            p.has_passed = False

        if self.is_game_over:
            logger.info("Round %d finished, game over", self.round_index - 1)
        else:
            logger.info("Round %d begins", self.round_index)
        return True
