"""
Standard Game Setup - Creates the initial session state.

This module handles:
- Creating players from names and faction picks
- Building the (optionally shuffled) map
- Drawing scoring tiles
- Wiring the tracker to the same player list
- Assembling an engine with the default collaborators

The setup follows base game rules for 2-5 players.
"""

from __future__ import annotations
import logging
import uuid

from ...engine_core.adjacency import HexAdjacencyOracle
from ...engine_core.engine import ActionEngine
from ...engine_core.executor import BoardActionExecutor
from ...engine_core.ledger import TableResourceLedger
from ...engine_core.state import Board, GameState, Player
from ...engine_core.tracker import TurnTracker
from .board import create_standard_board
from .costs import create_standard_costs
from .cults import CultBoard
from .factions import DEFAULT_FACTIONS, get_faction
from .scoring import draw_scoring_tiles

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 5
DEFAULT_PLAYER_COUNT = 4


def setup_standard_game(
    player_names: list[str] | None = None,
    factions: list[str] | None = None,
    seed: int | None = None,
    game_id: str | None = None,
    board: Board | None = None,
) -> GameState:
    """
    Set up a new standard game.

    Args:
        player_names: Names in seating order (defaults to Player 1..4)
        factions: Faction names, one per player (defaults to DEFAULT_FACTIONS)
        seed: Shuffles the map and the scoring tiles; None keeps both fixed
        game_id: Session id (a new uuid if not given)
        board: Use this board instead of the standard map

    Returns:
        GameState in the setup phase, first player to place a dwelling
    """
    if factions is None:
        count = len(player_names) if player_names else DEFAULT_PLAYER_COUNT
        factions = DEFAULT_FACTIONS[:count]
    if player_names is None:
        player_names = [f"Player {i}" for i in range(1, len(factions) + 1)]

    if not MIN_PLAYERS <= len(player_names) <= MAX_PLAYERS:
        raise ValueError(f"The game supports {MIN_PLAYERS}-{MAX_PLAYERS} players")
    if len(player_names) != len(factions):
        raise ValueError("Every player needs exactly one faction")

    picked = [get_faction(name) for name in factions]
    homes = [f.home_terrain for f in picked]
    if len(set(homes)) != len(homes):
        raise ValueError("Factions must have distinct home terrains")

    players = [
        Player.create(player_id=f"p{i}", name=name, faction=faction)
        for i, (name, faction) in enumerate(zip(player_names, picked), start=1)
    ]

    state = GameState(
        game_id=game_id or str(uuid.uuid4()),
        board=board or create_standard_board(seed),
        players=players,
        cult_board=CultBoard(),
        scoring_tiles=draw_scoring_tiles(seed),
        tracker=TurnTracker(players=players),
        metadata={"seed": seed},
    )
    logger.info(
        "Created game %s with %s",
        state.game_id, ", ".join(f"{p.name} ({p.faction.name})" for p in players),
    )
    return state


def create_standard_engine(state: GameState) -> ActionEngine:
    """Engine wired to the standard cost table and hex adjacency."""
    return ActionEngine(
        state=state,
        ledger=TableResourceLedger(state, create_standard_costs()),
        adjacency=HexAdjacencyOracle(),
        executor=BoardActionExecutor(),
    )
