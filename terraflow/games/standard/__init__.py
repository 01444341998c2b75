"""
Standard - The base ruleset.

Key mechanics:
- Seven factions, each bound to one land type
- Terraforming along the cycle of land types, paid in workers
- Dwellings spread by adjacency, or across rivers with shipping
- Four cult tracks advanced with priests
- Six rounds, one scoring tile each

This module contains:
- The standard map and its hex neighbourhood
- Faction definitions
- Cost and income tables
- Cult board and scoring tiles
- Game setup
"""

from .board import STANDARD_LAYOUT, board_from_layout, create_standard_board, render_board
from .costs import create_standard_costs
from .cults import CULT_TRACK_IDS, CultBoard, CultTrack
from .factions import DEFAULT_FACTIONS, FACTIONS, get_faction
from .scoring import SCORING_TILE_POOL, ScoringTile, draw_scoring_tiles
from .setup import create_standard_engine, setup_standard_game

__all__ = [
    "STANDARD_LAYOUT",
    "board_from_layout",
    "create_standard_board",
    "render_board",
    "create_standard_costs",
    "CULT_TRACK_IDS",
    "CultBoard",
    "CultTrack",
    "DEFAULT_FACTIONS",
    "FACTIONS",
    "get_faction",
    "SCORING_TILE_POOL",
    "ScoringTile",
    "draw_scoring_tiles",
    "create_standard_engine",
    "setup_standard_game",
]
