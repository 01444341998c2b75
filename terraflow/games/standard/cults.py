"""
Cult Board - Four bounded advancement tracks.

Each track has:
- A marker per player, from 0 to the ceiling (10)
- Priest order slots worth 3, 2, 2, 2 steps; afterwards a priest
  advances a single step
- An exclusive top: only one player may stand on the ceiling, everyone
  else stops one step below
- Power rewards for reaching positions 3, 5, 7 and 10
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ...engine_core.errors import UnknownCultTrackError
from ...engine_core.state import Player, Resources

logger = logging.getLogger(__name__)

CULT_CEILING = 10
ORDER_SLOTS = [3, 2, 2, 2]
POWER_BONUSES = {3: 1, 5: 2, 7: 2, 10: 3}

CULT_TRACK_NAMES = ["fire", "water", "earth", "air"]

# External ids used by callers (UI, API, CLI)
CULT_TRACK_IDS = {i: name for i, name in enumerate(CULT_TRACK_NAMES)}


@dataclass
class CultTrack:
    """A single cult track."""
    name: str
    ceiling: int = CULT_CEILING
    positions: dict[str, int] = field(default_factory=dict)
    order_slots: list[int] = field(default_factory=lambda: list(ORDER_SLOTS))

    def position_of(self, player_id: str) -> int:
        return self.positions.get(player_id, 0)

    def limit_for(self, player_id: str) -> int:
        """Highest position the player may reach right now."""
        top_taken = any(
            pos >= self.ceiling
            for pid, pos in self.positions.items()
            if pid != player_id
        )
        return self.ceiling - 1 if top_taken else self.ceiling

    def can_advance(self, player: Player) -> bool:
        return self.position_of(player.player_id) < self.limit_for(player.player_id)

    def advance_with_priest(self, player: Player) -> bool:
        """
        Advance the player's marker with one priest.

        Returns False, changing nothing, when the marker cannot move.
        The priest itself is paid by the caller.
        """
        if not self.can_advance(player):
            return False

        start = self.position_of(player.player_id)
        steps = self.order_slots.pop(0) if self.order_slots else 1
        end = min(start + steps, self.limit_for(player.player_id))
        self.positions[player.player_id] = end

        power = sum(bonus for pos, bonus in POWER_BONUSES.items() if start < pos <= end)
        if power:
            player.resources.gain(Resources(power=power))

        logger.debug("%s advanced on %s: %d -> %d", player.player_id, self.name, start, end)
        return True


@dataclass
class CultBoard:
    """The four cult tracks of a session."""
    tracks: dict[str, CultTrack] = field(
        default_factory=lambda: {name: CultTrack(name=name) for name in CULT_TRACK_NAMES}
    )

    def get_track(self, name: str) -> CultTrack:
        """Get a track by name. Raises UnknownCultTrackError if absent."""
        try:
            return self.tracks[name.lower()]
        except (KeyError, AttributeError):
            raise UnknownCultTrackError(name) from None

    def get_track_by_id(self, track_id: int) -> CultTrack:
        if track_id not in CULT_TRACK_IDS:
            raise UnknownCultTrackError(track_id)
        return self.get_track(CULT_TRACK_IDS[track_id])

    def positions_of(self, player_id: str) -> dict[str, int]:
        return {name: track.position_of(player_id) for name, track in self.tracks.items()}
