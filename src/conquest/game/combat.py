from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

logger = logging.getLogger(__name__)

DIE_FACES = 6


@dataclass(frozen=True)
class RoundResult:
    attack_rolls: Tuple[int, ...]
    defend_rolls: Tuple[int, ...]
    attacker_losses: int
    defender_losses: int


@dataclass
class BattleOutcome:
    attacker_survivors: int
    defender_survivors: int
    rounds: List[RoundResult] = field(default_factory=list)

    @property
    def captured(self) -> bool:
        return self.defender_survivors == 0

    @property
    def attacker_losses(self) -> int:
        return sum(r.attacker_losses for r in self.rounds)

    @property
    def defender_losses(self) -> int:
        return sum(r.defender_losses for r in self.rounds)


class CombatResolver:
    """Dice combat drawn from an injected, seedable generator.

    Each round rolls up to three attacker dice and up to two defender dice,
    compares them highest against highest and removes one troop from the
    loser of every pair. Ties go to the defender. Rounds repeat until either
    the committed attack pool or the defending troops are used up.
    """

    def __init__(
        self,
        rng: np.random.Generator,
        max_attack_dice: int = 3,
        max_defend_dice: int = 2,
    ):
        self.rng = rng
        self.max_attack_dice = max_attack_dice
        self.max_defend_dice = max_defend_dice

    def roll(self, count: int) -> Tuple[int, ...]:
        rolls = self.rng.integers(1, DIE_FACES + 1, size=count)
        return tuple(sorted((int(value) for value in rolls), reverse=True))

    def play_round(self, attackers: int, defenders: int) -> RoundResult:
        attack_rolls = self.roll(min(attackers, self.max_attack_dice))
        defend_rolls = self.roll(min(defenders, self.max_defend_dice))
        attacker_losses = 0
        defender_losses = 0
        for attack_die, defend_die in zip(attack_rolls, defend_rolls):
            if defend_die >= attack_die:
                attacker_losses += 1
            else:
                defender_losses += 1
        return RoundResult(attack_rolls, defend_rolls, attacker_losses, defender_losses)

    def resolve(self, attack_pool: int, defenders: int) -> BattleOutcome:
        outcome = BattleOutcome(attacker_survivors=attack_pool, defender_survivors=defenders)
        while outcome.attacker_survivors > 0 and outcome.defender_survivors > 0:
            result = self.play_round(outcome.attacker_survivors, outcome.defender_survivors)
            logger.debug(
                "Round %d: attack %s vs defend %s -> losses %d/%d",
                len(outcome.rounds) + 1,
                result.attack_rolls,
                result.defend_rolls,
                result.attacker_losses,
                result.defender_losses,
            )
            outcome.rounds.append(result)
            outcome.attacker_survivors -= result.attacker_losses
            outcome.defender_survivors -= result.defender_losses
        return outcome


def capture_split(survivors: int, reserve: int) -> Tuple[int, int]:
    """Troops for (origin, captured territory) after a successful attack."""
    adjusted = survivors - 2 if survivors > 3 else 1
    return reserve + adjusted, min(survivors, 3)
