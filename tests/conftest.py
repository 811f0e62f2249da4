"""Shared helpers for the conquest test suite.

The standard board is a four territory diamond dealt round-robin to two
players:

    0 -- 1        player 0 owns 0 and 2
    |  / |        player 1 owns 1 and 3
    2 -- 3
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable

import numpy as np
import pytest

from conquest.config import GameConfig
from conquest.game.engine import Game
from conquest.game.map import TerritoryGraph


DIAMOND = {
    0: (1, 2),
    1: (0, 2, 3),
    2: (0, 1, 3),
    3: (1, 2),
}


class ScriptedDice:
    """Stands in for ``numpy.random.Generator`` and hands out fixed rolls."""

    def __init__(self, rolls: Iterable[int] = ()):
        self.rolls = deque(rolls)

    def push(self, *rolls: int) -> None:
        self.rolls.extend(rolls)

    def integers(self, low, high, size=None):
        count = 1 if size is None else size
        if len(self.rolls) < count:
            raise AssertionError("Scripted dice ran out of rolls")
        values = [self.rolls.popleft() for _ in range(count)]
        for value in values:
            assert low <= value < high
        return np.array(values) if size is not None else values[0]


def diamond_graph() -> TerritoryGraph:
    return TerritoryGraph.from_adjacency(DIAMOND)


def make_game(rng=None, graph=None, **config) -> Game:
    config.setdefault("seed", 0)
    return Game(graph=graph or diamond_graph(), config=GameConfig(**config), rng=rng)


def set_troops(game: Game, troops: Dict[int, int]) -> None:
    for territory, count in troops.items():
        game.state.troops[territory] = count


def select_pair(game: Game, source: int, target: int) -> None:
    assert game.handle_click(source)
    assert game.handle_click(target)


@pytest.fixture
def dice() -> ScriptedDice:
    return ScriptedDice()


@pytest.fixture
def game(dice) -> Game:
    return make_game(rng=dice)
