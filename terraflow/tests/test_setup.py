"""
Tests for the standard map and game setup.

Tests:
- Hex neighbourhood of layouts
- Standard map contents and shuffling
- Setup validation
"""

import pytest

from ..engine_core.errors import UnknownTerrainError
from ..engine_core.state import RoundPhase, TerrainType
from ..games.standard.board import (
    STANDARD_LAYOUT,
    board_from_layout,
    create_standard_board,
    render_board,
    shuffle_layout,
)
from ..games.standard.scoring import draw_scoring_tiles
from ..games.standard.setup import setup_standard_game
from .conftest import TEST_LAYOUT


class TestBoard:
    """Tests for layout parsing and neighbours."""

    def test_neighbours_of_test_layout(self):
        board = board_from_layout(TEST_LAYOUT)
        assert sorted(board.get_terrain(0).neighbors) == [1, 5]
        assert sorted(board.get_terrain(6).neighbors) == [1, 2, 5, 7, 11, 12]
        assert sorted(board.get_terrain(12).neighbors) == [6, 7, 11, 13]

    def test_neighbours_are_symmetric(self):
        board = create_standard_board()
        for terrain in board.get_terrain_list():
            for n in terrain.neighbors:
                assert terrain.terrain_id in board.get_terrain(n).neighbors

    def test_unknown_code(self):
        with pytest.raises(ValueError):
            board_from_layout(["F X"])

    def test_unknown_terrain(self):
        with pytest.raises(UnknownTerrainError):
            create_standard_board().get_terrain(500)

    def test_every_land_type_has_room(self):
        board = create_standard_board()
        for land in (t for t in TerrainType if t.is_land):
            count = sum(1 for t in board.get_terrain_list() if t.terrain_type == land)
            assert count >= 2

    def test_shuffle_keeps_rivers_and_counts(self):
        shuffled = shuffle_layout(STANDARD_LAYOUT, seed=7)
        for original, row in zip(STANDARD_LAYOUT, shuffled):
            original_codes, codes = original.split(), row.split()
            assert [c == "~" for c in original_codes] == [c == "~" for c in codes]
        assert sorted(" ".join(shuffled).split()) == sorted(" ".join(STANDARD_LAYOUT).split())
        assert shuffle_layout(STANDARD_LAYOUT, seed=7) == shuffled

    def test_render(self):
        text = render_board(board_from_layout(TEST_LAYOUT), columns=5)
        assert len(text.splitlines()) == 3
        assert " 3~" in text


class TestScoringTiles:

    def test_one_tile_per_round(self):
        tiles = draw_scoring_tiles()
        assert [t.round_index for t in tiles] == [0, 1, 2, 3, 4, 5]

    def test_seeded_draw_is_deterministic(self):
        assert draw_scoring_tiles(3) == draw_scoring_tiles(3)


class TestSetupStandardGame:
    """Tests for setup_standard_game."""

    def test_defaults(self):
        state = setup_standard_game()
        assert [p.faction.name for p in state.players] == ["Witches", "Nomads", "Halflings", "Mermaids"]
        assert state.tracker.phase is RoundPhase.SETUP
        assert state.tracker.setup_dwellings == 8
        assert state.tracker.pass_threshold == 4
        assert state.current_player.player_id == "p1"

    def test_five_players_with_default_factions(self):
        state = setup_standard_game(["A", "B", "C", "D", "E"])
        assert [p.faction.name for p in state.players][-1] == "Dwarves"
        assert state.tracker.setup_dwellings == 10
        assert state.tracker.pass_threshold == 5

    def test_too_many_players(self):
        with pytest.raises(ValueError, match="2-5 players"):
            setup_standard_game(["A", "B", "C", "D", "E", "F"])

    def test_tracker_shares_players(self):
        state = setup_standard_game()
        assert state.tracker.players is state.players

    def test_starting_resources_are_copies(self):
        state = setup_standard_game(["A", "B"], ["witches", "giants"])
        state.players[0].resources.coins = 0
        assert state.players[1].resources.coins == 15

    def test_mismatched_factions(self):
        with pytest.raises(ValueError):
            setup_standard_game(["A", "B"], ["witches"])

    def test_too_few_players(self):
        with pytest.raises(ValueError):
            setup_standard_game(["A"], ["witches"])

    def test_unknown_faction(self):
        with pytest.raises(ValueError):
            setup_standard_game(["A", "B"], ["witches", "elves"])

    def test_duplicate_home_terrain(self):
        with pytest.raises(ValueError):
            setup_standard_game(["A", "B"], ["witches", "witches"])

    def test_seed_is_recorded(self):
        state = setup_standard_game(seed=11)
        assert state.metadata["seed"] == 11
