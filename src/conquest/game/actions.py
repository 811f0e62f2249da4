from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Tuple

import numpy as np

from ..config import GameConfig
from .engine import Game
from .map import TerritoryGraph


@dataclass(frozen=True)
class Action:
    kind: str
    params: Dict[str, int] = field(default_factory=dict)


def click(territory: int) -> Action:
    return Action("click", {"territory": territory})


def stage(territory: int) -> Action:
    return Action("stage", {"territory": territory})


def attack(troops: int) -> Action:
    return Action("attack", {"troops": troops})


def fortify(troops: int) -> Action:
    return Action("fortify", {"troops": troops})


def simple(kind: str) -> Action:
    if kind not in _DISPATCH:
        raise ValueError(f"Unknown action kind: {kind}")
    return Action(kind)


_DISPATCH: Dict[str, Callable[[Game, Dict[str, int]], bool]] = {
    "click": lambda game, p: game.handle_click(p["territory"]),
    "stage": lambda game, p: game.stage_placement(p["territory"]),
    "commit": lambda game, p: game.commit_placement(),
    "clear": lambda game, p: game.clear_placement(),
    "place_phase": lambda game, p: game.goto_place(),
    "attack_phase": lambda game, p: game.goto_attack(),
    "fortify_phase": lambda game, p: game.goto_fortify(),
    "attack": lambda game, p: game.attack_with(p["troops"]),
    "attack_all": lambda game, p: game.attack_all(),
    "attack_advance": lambda game, p: game.attack_all_and_advance(),
    "fortify": lambda game, p: game.fortify_troops(p["troops"]),
    "fortify_all": lambda game, p: game.fortify_all(),
    "end_turn": lambda game, p: game.end_turn(),
}

ACTION_KINDS: Tuple[str, ...] = tuple(_DISPATCH)


def apply_action(game: Game, action: Action) -> bool:
    handler = _DISPATCH.get(action.kind)
    if handler is None:
        raise ValueError(f"Unknown action kind: {action.kind}")
    return handler(game, action.params)


def replay(
    actions: Iterable[Action],
    graph: TerritoryGraph | None = None,
    config: GameConfig | None = None,
    rng: np.random.Generator | None = None,
) -> Tuple[Game, List[bool]]:
    """Build a fresh game and apply ``actions`` in order."""
    game = Game(graph=graph, config=config, rng=rng)
    results = [apply_action(game, action) for action in actions]
    return game, results
