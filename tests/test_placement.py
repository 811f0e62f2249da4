"""Tests for the staged troop placement transaction."""

from conquest.game.placement import PlacementCache
from conquest.game.state import Marker

from conftest import make_game


class TestPlacementCache:

    def test_stage_accumulates(self):
        cache = PlacementCache()
        assert cache.stage(2, 1, allowance=5) == 1
        assert cache.stage(2, 1, allowance=5) == 1
        assert cache.staged(2) == 2
        assert 2 in cache
        assert cache.total() == 2

    def test_stage_clamps_to_allowance(self):
        cache = PlacementCache()
        assert cache.stage(0, 4, allowance=5) == 4
        assert cache.stage(1, 4, allowance=5) == 1
        assert cache.stage(1, 1, allowance=5) == 0
        assert cache.total() == 5

    def test_drain_empties(self):
        cache = PlacementCache()
        cache.stage(3, 2, allowance=5)
        cache.stage(1, 1, allowance=5)
        assert cache.drain() == [(1, 1), (3, 2)]
        assert len(cache) == 0
        assert cache.total() == 0


class TestGamePlacement:

    def test_staged_total_never_exceeds_allowance(self, game):
        assert game.troops_available_for_placement() == 5
        results = [game.stage_placement(0) for _ in range(7)]
        assert results == [True] * 5 + [False] * 2
        assert game.troops_staged_for_placement() == 5
        assert game.hit_troop_placement_limit()

    def test_commit_applies_and_reduces_allowance(self, game):
        for territory in (0, 0, 0, 2, 2):
            game.stage_placement(territory)
        assert game.commit_placement()
        assert game.troops(0) == 4
        assert game.troops(2) == 3
        assert game.troops_available_for_placement() == 0
        assert game.troops_staged_for_placement() == 0
        assert all(marker is Marker.DORMANT for marker in game.state.markers)

    def test_partial_commit_keeps_remaining_allowance(self, game):
        game.stage_placement(0)
        game.stage_placement(2)
        game.commit_placement()
        assert game.troops_available_for_placement() == 3
        assert not game.hit_troop_placement_limit()
        assert game.stage_placement(0)

    def test_clear_discards_staged_troops(self, game):
        for _ in range(3):
            game.stage_placement(0)
        assert game.clear_placement()
        assert game.troops_staged_for_placement() == 0
        assert all(marker is Marker.DORMANT for marker in game.state.markers)
        assert game.troops(0) == 1
        assert game.troops_available_for_placement() == 5

    def test_commit_with_nothing_staged(self, game):
        assert not game.commit_placement()
        assert game.troops_available_for_placement() == 5

    def test_enemy_territory_rejected(self, game):
        assert not game.stage_placement(1)
        assert game.troops_staged_for_placement() == 0

    def test_only_in_place_phase(self, game):
        game.goto_attack()
        assert not game.stage_placement(0)

    def test_troops_to_display_includes_staged(self, game):
        game.stage_placement(2)
        game.stage_placement(2)
        assert game.troops_to_display() == [1, 1, 3, 1]

    def test_step_size(self, game):
        assert game.set_troops_to_place(2)
        assert game.troops_to_place() == 2
        assert game.handle_click(0)
        assert game.handle_click(0)
        assert game.handle_click(2)
        assert not game.handle_click(2)
        assert game.placement.staged(0) == 4
        assert game.placement.staged(2) == 1

    def test_invalid_step_size(self, game):
        assert not game.set_troops_to_place(0)
        assert game.troops_to_place() == 1

    def test_zero_troop_bonus(self):
        game = make_game(troop_bonus=0)
        assert game.hit_troop_placement_limit()
        assert not game.handle_click(0)
