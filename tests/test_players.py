"""Tests for PlayerRegistry ownership bookkeeping and elimination."""

from conquest.game.players import PlayerRegistry

from conftest import make_game


class TestPlayerRegistry:

    def test_transfer_moves_territory_between_sets(self):
        registry = PlayerRegistry([0xAA1111, 0x11AA11])
        registry.transfer(4, 0)
        previous = registry.transfer(4, 1)
        assert previous == 0
        assert 4 not in registry[0].territories
        assert registry[1].territories == {4}
        assert registry.owner_of(4) == 1

    def test_transfer_to_same_owner_is_stable(self):
        registry = PlayerRegistry([1, 2])
        registry.transfer(0, 0)
        registry.transfer(0, 0)
        assert registry[0].territories == {0}
        assert registry.total_owned() == 1

    def test_unowned_territory(self):
        registry = PlayerRegistry([1, 2])
        assert registry.owner_of(3) is None

    def test_elimination_and_game_over(self):
        registry = PlayerRegistry([1, 2, 3])
        registry.transfer(0, 0)
        registry.transfer(1, 1)
        registry.transfer(2, 2)
        assert registry.active_players() == [0, 1, 2]
        assert not registry.is_over()

        registry.transfer(1, 0)
        assert registry[1].is_eliminated()
        assert registry.active_players() == [0, 2]
        assert not registry.is_over()

        registry.transfer(2, 0)
        assert registry.active_players() == [0]
        assert registry.is_over()


class TestRoundRobinAssignment:

    def test_territories_dealt_in_turn(self):
        game = make_game()
        assert game.players[0].territories == {0, 2}
        assert game.players[1].territories == {1, 3}
        assert [game.owner(t) for t in range(4)] == [0, 1, 0, 1]

    def test_every_territory_starts_with_troops(self):
        game = make_game(initial_troops=3)
        assert [game.troops(t) for t in range(4)] == [3, 3, 3, 3]

    def test_colors_follow_owner(self):
        game = make_game()
        assert game.color_for(0) == game.players[0].color
        assert game.color_for(1) == game.players[1].color

    def test_three_players(self):
        game = make_game(num_players=3)
        assert game.players[0].territories == {0, 3}
        assert game.players[1].territories == {1}
        assert game.players[2].territories == {2}
        assert game.active_players() == [0, 1, 2]
