"""
Pytest fixtures for Terraflow tests.

Most tests run on a small 3x5 map whose neighbourhood is easy to check
by hand (odd rows are shifted right):

     0F   1F   2D   3~   4F
        5P   6~   7~   8F   9D
    10L  11D  12F  13L  14P

Players in seating order: p1 Witches (forest), p2 Nomads (desert),
p3 Halflings (plains), p4 Mermaids (lakes).
"""

import pytest

from ..engine_core.engine import ActionEngine
from ..engine_core.state import GameState, Structure, StructureType
from ..games.standard.board import board_from_layout
from ..games.standard.setup import create_standard_engine, setup_standard_game
from ..session.facade import GameFacade

TEST_LAYOUT = [
    "F F D ~ F",
    "P ~ ~ F D",
    "L D F L P",
]

PLAYER_NAMES = ["Wanda", "Nico", "Hal", "Mira"]
FACTION_NAMES = ["witches", "nomads", "halflings", "mermaids"]


def place(state: GameState, terrain_id: int, owner_id: str,
          structure_type: StructureType = StructureType.DWELLING) -> None:
    """Put a structure on the board without going through the engine."""
    state.board.get_terrain(terrain_id).structure = Structure(structure_type, owner_id)


@pytest.fixture
def setup_state() -> GameState:
    """A fresh 4-player game on the test map, still in the setup phase."""
    return setup_standard_game(
        player_names=PLAYER_NAMES,
        factions=FACTION_NAMES,
        game_id="test_game",
        board=board_from_layout(TEST_LAYOUT),
    )


@pytest.fixture
def state(setup_state: GameState) -> GameState:
    """
    Game in round 0 with one witch dwelling on terrain 0.

    Witches (p1) are the current player with the starting pool:
    3 workers, 15 coins, 0 priests, 5 power, 20 victory points.
    """
    setup_state.tracker.setup_dwellings = 0
    setup_state.tracker.round_index = 0
    place(setup_state, 0, "p1")
    return setup_state


@pytest.fixture
def witch(state):
    return state.get_player("p1")


@pytest.fixture
def engine(state) -> ActionEngine:
    return create_standard_engine(state)


@pytest.fixture
def setup_engine(setup_state) -> ActionEngine:
    return create_standard_engine(setup_state)


@pytest.fixture
def facade(engine) -> GameFacade:
    return GameFacade(engine)
