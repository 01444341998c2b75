"""
Tests for network adjacency, direct and across rivers.
"""

import pytest

from ..engine_core.adjacency import HexAdjacencyOracle
from .conftest import place


@pytest.fixture
def oracle():
    return HexAdjacencyOracle()


class TestDirectAdjacency:

    def test_neighbour_of_own_structure(self, oracle, state, witch):
        assert oracle.is_adjacent(witch, state.board.get_terrain(1), state.board)

    def test_far_terrain(self, oracle, state, witch):
        assert not oracle.is_adjacent(witch, state.board.get_terrain(12), state.board)

    def test_other_players_structures_do_not_count(self, oracle, state, witch):
        place(state, 11, "p2")
        assert not oracle.is_adjacent(witch, state.board.get_terrain(12), state.board)


class TestShipping:
    """12 touches rivers 6 and 7; 6 touches 1, 7 touches river 3, 3 touches 4."""

    def test_one_river_needs_shipping(self, oracle, state, witch):
        place(state, 1, "p1")
        terrain = state.board.get_terrain(12)

        assert not oracle.is_adjacent(witch, terrain, state.board)
        witch.shipping = 1
        assert oracle.is_adjacent(witch, terrain, state.board)

    def test_two_rivers_need_shipping_two(self, oracle, setup_state):
        witch = setup_state.get_player("p1")
        place(setup_state, 4, "p1")
        terrain = setup_state.board.get_terrain(12)

        witch.shipping = 1
        assert not oracle.is_adjacent(witch, terrain, setup_state.board)
        witch.shipping = 2
        assert oracle.is_adjacent(witch, terrain, setup_state.board)

    def test_shipping_build_through_engine(self, engine, state, witch):
        place(state, 1, "p1")
        witch.shipping = 1
        assert engine.build_dwelling(12) == 0
