from .config import GameConfig
from .game import Game, Marker, Phase, TerritoryGraph, new_game

__all__ = [
    "GameConfig",
    "Game",
    "Marker",
    "Phase",
    "TerritoryGraph",
    "new_game",
]
