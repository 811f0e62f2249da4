from .actions import Action, apply_action, replay
from .combat import BattleOutcome, CombatResolver, RoundResult, capture_split
from .engine import Game, new_game
from .map import BACKGROUND_INDEX, Territory, TerritoryGraph, default_graph
from .players import Player, PlayerRegistry
from .state import GameState, Marker, Phase, Turn

__all__ = [
    "Action",
    "apply_action",
    "replay",
    "BattleOutcome",
    "CombatResolver",
    "RoundResult",
    "capture_split",
    "Game",
    "new_game",
    "BACKGROUND_INDEX",
    "Territory",
    "TerritoryGraph",
    "default_graph",
    "Player",
    "PlayerRegistry",
    "GameState",
    "Marker",
    "Phase",
    "Turn",
]
