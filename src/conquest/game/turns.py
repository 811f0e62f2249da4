from __future__ import annotations

import logging

from .state import Phase, Turn

logger = logging.getLogger(__name__)


class TurnController:
    """Phase changes and turn advancement for a single ``Turn`` record.

    Explicit phase changes are accepted from any phase except
    ``POST_ATTACK_FORTIFY``, which is only entered after a capture and only
    left through a fortify move or the end of the turn.
    """

    def __init__(self, turn: Turn, troop_bonus: int = 5):
        self.turn = turn
        self.troop_bonus = troop_bonus

    @property
    def phase(self) -> Phase:
        return self.turn.phase

    def goto(self, phase: Phase) -> bool:
        if self.turn.phase is Phase.POST_ATTACK_FORTIFY or phase is Phase.POST_ATTACK_FORTIFY:
            return False
        self.turn.phase = phase
        return True

    def enter_post_attack_fortify(self) -> None:
        self.turn.phase = Phase.POST_ATTACK_FORTIFY

    def resume_attack(self) -> None:
        if self.turn.phase is Phase.POST_ATTACK_FORTIFY:
            self.turn.phase = Phase.ATTACK

    def calc_troop_bonus(self) -> int:
        # Flat bonus; no territory or continent bonuses.
        return self.troop_bonus

    def start_first_turn(self) -> None:
        self.turn.phase = Phase.PLACE
        self.turn.new_troops = self.calc_troop_bonus()

    def advance(self, player_count: int) -> int:
        self.turn.player_index = (self.turn.player_index + 1) % player_count
        self.turn.phase = Phase.PLACE
        self.turn.new_troops = self.calc_troop_bonus()
        self.turn.number += 1
        logger.info(
            "Turn %d: player %d places %d troops",
            self.turn.number,
            self.turn.player_index,
            self.turn.new_troops,
        )
        return self.turn.player_index
