"""Tests for fortify troop transfers."""

import numpy as np

from conquest.game.fortify import FortifyEngine
from conquest.game.state import Marker, Phase

from conftest import select_pair, set_troops


class TestFortifyEngine:

    def test_transfer(self):
        troops = np.array([4, 1])
        assert FortifyEngine(troops).transfer(0, 1, 2)
        assert troops.tolist() == [2, 3]

    def test_never_empties_source(self):
        troops = np.array([4, 1])
        engine = FortifyEngine(troops)
        assert not engine.transfer(0, 1, 4)
        assert not engine.transfer(0, 1, 5)
        assert not engine.transfer(0, 1, 0)
        assert not engine.transfer(0, 1, -1)
        assert troops.tolist() == [4, 1]

    def test_single_troop_cannot_move(self):
        troops = np.array([1, 1])
        engine = FortifyEngine(troops)
        assert engine.max_transfer(0) == 0
        assert not engine.transfer(0, 1, 1)


class TestGameFortify:

    def test_fortify_all_leaves_one_behind(self, game):
        set_troops(game, {0: 4})
        game.goto_fortify()
        select_pair(game, 0, 2)
        assert game.fortify_all()
        assert game.troops(0) == 1
        assert game.troops(2) == 4
        assert all(marker is Marker.DORMANT for marker in game.state.markers)
        assert game.phase() is Phase.FORTIFY

    def test_fortify_troops(self, game):
        set_troops(game, {2: 5})
        game.goto_fortify()
        select_pair(game, 2, 0)
        assert game.fortify_troops(2)
        assert game.troops(2) == 3
        assert game.troops(0) == 3

    def test_overdraw_rejected(self, game):
        set_troops(game, {0: 4})
        game.goto_fortify()
        select_pair(game, 0, 2)
        assert not game.fortify_troops(4)
        assert game.troops(0) == 4
        assert game.movement_pending()

    def test_requires_target(self, game):
        set_troops(game, {0: 4})
        game.goto_fortify()
        game.handle_click(0)
        assert not game.fortify_all()
        assert not game.fortify_troops(1)

    def test_requires_fortify_phase(self, game):
        set_troops(game, {0: 4})
        game.goto_fortify()
        select_pair(game, 0, 2)
        game.goto_attack()
        assert not game.fortify_troops(1)
        assert game.troops(0) == 4

    def test_fortify_all_with_single_troop(self, game):
        game.goto_fortify()
        select_pair(game, 0, 2)
        assert not game.fortify_all()
