from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Set

logger = logging.getLogger(__name__)


@dataclass
class Player:
    index: int
    color: int
    territories: Set[int] = field(default_factory=set)

    def is_eliminated(self) -> bool:
        return not self.territories


class PlayerRegistry:
    """Ordered players and the territory ids each of them owns.

    ``transfer`` is the only place a territory id moves between player sets;
    the game pairs it with the matching update of its ``owners`` array.
    """

    def __init__(self, colors: Iterable[int]):
        self.players: List[Player] = [
            Player(index=index, color=color) for index, color in enumerate(colors)
        ]

    def __len__(self) -> int:
        return len(self.players)

    def __getitem__(self, index: int) -> Player:
        return self.players[index]

    def owner_of(self, territory: int) -> int | None:
        for player in self.players:
            if territory in player.territories:
                return player.index
        return None

    def transfer(self, territory: int, new_owner: int) -> int | None:
        previous = self.owner_of(territory)
        if previous == new_owner:
            return previous
        if previous is not None:
            self.players[previous].territories.discard(territory)
            if self.players[previous].is_eliminated():
                logger.info("Player %d has been eliminated", previous)
        self.players[new_owner].territories.add(territory)
        return previous

    def owns(self, player: int, territory: int) -> bool:
        return territory in self.players[player].territories

    def active_players(self) -> List[int]:
        return [player.index for player in self.players if not player.is_eliminated()]

    def is_over(self) -> bool:
        return len(self.active_players()) <= 1

    def total_owned(self) -> int:
        return sum(len(player.territories) for player in self.players)
