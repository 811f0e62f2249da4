from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

import numpy as np


UNOWNED = -1


class Phase(Enum):
    PLACE = "place"
    ATTACK = "attack"
    FORTIFY = "fortify"
    POST_ATTACK_FORTIFY = "post_attack_fortify"


class Marker(Enum):
    DORMANT = "dormant"
    SELECTED = "selected"
    HIGHLIGHTED = "highlighted"
    TARGETED = "targeted"


@dataclass
class Turn:
    player_index: int = 0
    phase: Phase = Phase.PLACE
    new_troops: int = 0
    number: int = 0


@dataclass
class GameState:
    owners: np.ndarray
    troops: np.ndarray
    markers: List[Marker]
    turn: Turn = field(default_factory=Turn)

    def clone(self) -> "GameState":
        return GameState(
            owners=self.owners.copy(),
            troops=self.troops.copy(),
            markers=list(self.markers),
            turn=Turn(
                player_index=self.turn.player_index,
                phase=self.turn.phase,
                new_troops=self.turn.new_troops,
                number=self.turn.number,
            ),
        )

    def is_highlighted(self, index: int) -> bool:
        # Selected and targeted territories also count as highlighted.
        return self.markers[index] is not Marker.DORMANT

    def indices_with(self, marker: Marker) -> List[int]:
        return [index for index, value in enumerate(self.markers) if value is marker]

    def same_board(self, other: "GameState") -> bool:
        return (
            np.array_equal(self.owners, other.owners)
            and np.array_equal(self.troops, other.troops)
            and self.markers == other.markers
            and self.turn == other.turn
        )


def initial_state(num_territories: int) -> GameState:
    owners = np.full(num_territories, fill_value=UNOWNED, dtype=np.int64)
    troops = np.zeros(num_territories, dtype=np.int64)
    return GameState(
        owners=owners,
        troops=troops,
        markers=[Marker.DORMANT] * num_territories,
        turn=Turn(),
    )


def count_territories(owners: np.ndarray, player: int) -> int:
    return int(np.sum(owners == player))
