"""
Adjacency Oracle - Is a terrain connected to a player's network?

A terrain is directly adjacent when one of its neighbours carries a
structure of the player. It is indirectly adjacent when such a structure
can be reached by crossing at most `shipping` river hexes.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import deque

from .state import Board, Player, Terrain, TerrainType


class AdjacencyOracle(ABC):
    """Contract for network adjacency checks."""

    @abstractmethod
    def is_adjacent(self, player: Player, terrain: Terrain, terrains: Board) -> bool:
        """Return True if terrain touches the player's network."""


class HexAdjacencyOracle(AdjacencyOracle):
    """Adjacency over the board's neighbour graph, with shipping across rivers."""

    def is_adjacent(self, player: Player, terrain: Terrain, terrains: Board) -> bool:
        for neighbor in terrains.neighbors_of(terrain):
            if neighbor.is_owned_by(player.player_id):
                return True
        if player.shipping <= 0:
            return False
        return self._reachable_by_ship(player, terrain, terrains)

    def _reachable_by_ship(self, player: Player, start: Terrain, board: Board) -> bool:
        """Breadth-first search through river hexes, at most `shipping` deep."""
        queue: deque[tuple[Terrain, int]] = deque()
        seen = {start.terrain_id}

        for neighbor in board.neighbors_of(start):
            if neighbor.terrain_type == TerrainType.RIVER:
                queue.append((neighbor, 1))
                seen.add(neighbor.terrain_id)

        while queue:
            river, depth = queue.popleft()
            for neighbor in board.neighbors_of(river):
                if neighbor.terrain_id in seen:
                    continue
                seen.add(neighbor.terrain_id)
                if neighbor.terrain_type == TerrainType.RIVER:
                    if depth < player.shipping:
                        queue.append((neighbor, depth + 1))
                elif neighbor.is_owned_by(player.player_id):
                    return True
        return False
