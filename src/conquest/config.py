from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


DEFAULT_PLAYER_COLORS: Tuple[int, ...] = (0xAA1111, 0x11AA11, 0x1111AA, 0xAAAA11)


@dataclass(frozen=True)
class GameConfig:
    num_players: int = 2
    seed: int | None = None
    troop_bonus: int = 5
    initial_troops: int = 1
    player_colors: Tuple[int, ...] = DEFAULT_PLAYER_COLORS
    max_attack_dice: int = 3
    max_defend_dice: int = 2

    def validate(self) -> None:
        if self.num_players < 1:
            raise ValueError(f"num_players must be at least 1, got {self.num_players}.")
        if len(self.player_colors) < self.num_players:
            raise ValueError(
                f"{self.num_players} players need {self.num_players} colors, "
                f"only {len(self.player_colors)} configured."
            )
        if self.troop_bonus < 0:
            raise ValueError(f"troop_bonus must be non-negative, got {self.troop_bonus}.")
        if self.initial_troops < 1:
            raise ValueError(f"initial_troops must be at least 1, got {self.initial_troops}.")
        if self.max_attack_dice < 1 or self.max_defend_dice < 1:
            raise ValueError("Both sides need at least one die per round.")
