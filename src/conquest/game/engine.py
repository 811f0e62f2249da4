from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

import numpy as np

from ..config import GameConfig
from .combat import BattleOutcome, CombatResolver, capture_split
from .fortify import FortifyEngine
from .map import TerritoryGraph, default_graph
from .placement import PlacementCache
from .players import PlayerRegistry
from .selection import SelectionStateMachine
from .state import UNOWNED, GameState, Phase, initial_state
from .turns import TurnController

logger = logging.getLogger(__name__)


class Game:
    """Aggregate root of a match and the command/query surface for hosts.

    Commands return ``True`` when they changed the game and ``False`` when
    they were not legal right now; illegal play never raises.
    """

    def __init__(
        self,
        graph: TerritoryGraph | None = None,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config or GameConfig()
        self.config.validate()
        self.graph = graph or default_graph()
        if len(self.graph) < self.config.num_players:
            raise ValueError(
                f"{len(self.graph)} territories cannot be shared by "
                f"{self.config.num_players} players."
            )
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        self.state: GameState = initial_state(len(self.graph))
        self.players = PlayerRegistry(self.config.player_colors[: self.config.num_players])
        self.turns = TurnController(self.state.turn, self.config.troop_bonus)
        self.selection = SelectionStateMachine(self.graph, self.state)
        self.placement = PlacementCache()
        self.fortifier = FortifyEngine(self.state.troops)
        self.combat = CombatResolver(
            self.rng, self.config.max_attack_dice, self.config.max_defend_dice
        )
        self._troops_to_place = 1
        self.last_battle: Optional[BattleOutcome] = None

        self._assign_territories()
        self.turns.start_first_turn()
        self._click_handlers: Dict[Phase, Callable[[int], bool]] = {
            Phase.PLACE: self.stage_placement,
            Phase.ATTACK: lambda index: self.selection.click_attack(index, self._owned()),
            Phase.FORTIFY: lambda index: self.selection.click_fortify(index, self._owned()),
            Phase.POST_ATTACK_FORTIFY: lambda index: False,
        }

    def _assign_territories(self) -> None:
        for counter, territory in enumerate(self.graph):
            self._transfer_territory(territory.id, counter % len(self.players))
            self.state.troops[territory.id] = self.config.initial_troops

    def _transfer_territory(self, territory: int, player: int) -> Optional[int]:
        previous = self.players.transfer(territory, player)
        self.state.owners[territory] = player
        return previous

    def _capture(self, attacker: int, defender: int) -> None:
        previous = self._transfer_territory(defender, self.current_player())
        logger.info(
            "Player %d captured %s from player %s, attacking from %s",
            self.current_player(),
            self.graph.name(defender),
            previous,
            self.graph.name(attacker),
        )

    def _owned(self) -> frozenset:
        return frozenset(self.players[self.current_player()].territories)

    # Queries

    def current_player(self) -> int:
        return self.state.turn.player_index

    def phase(self) -> Phase:
        return self.state.turn.phase

    def is_place_phase(self) -> bool:
        return self.phase() is Phase.PLACE

    def is_attack_phase(self) -> bool:
        return self.phase() is Phase.ATTACK

    def is_fortify_phase(self) -> bool:
        return self.phase() in (Phase.FORTIFY, Phase.POST_ATTACK_FORTIFY)

    def is_over(self) -> bool:
        return self.players.is_over()

    def active_players(self) -> List[int]:
        return self.players.active_players()

    def winner(self) -> Optional[int]:
        active = self.active_players()
        return active[0] if len(active) == 1 else None

    def troops(self, index: int) -> int:
        return int(self.state.troops[index])

    def owner(self, index: int) -> Optional[int]:
        owner = int(self.state.owners[index])
        return None if owner == UNOWNED else owner

    def color_for(self, index: int) -> Optional[int]:
        owner = self.owner(index)
        return None if owner is None else self.players[owner].color

    def troops_available_for_placement(self) -> int:
        return self.state.turn.new_troops

    def troops_staged_for_placement(self) -> int:
        return self.placement.total()

    def hit_troop_placement_limit(self) -> bool:
        return self.troops_staged_for_placement() >= self.troops_available_for_placement()

    def troops_to_place(self) -> int:
        return self._troops_to_place

    def set_troops_to_place(self, troops: int) -> bool:
        if troops < 1:
            return False
        self._troops_to_place = troops
        return True

    def troops_to_display(self) -> List[int]:
        return [
            self.troops(index) + self.placement.staged(index) for index in range(len(self.graph))
        ]

    def troops_available_for_movement(self) -> int:
        selected = self.selection.selected_index()
        return 0 if selected is None else self.troops(selected)

    def selected_index(self) -> Optional[int]:
        return self.selection.selected_index()

    def targeted_index(self) -> Optional[int]:
        return self.selection.targeted_index()

    def target_selected(self) -> bool:
        return self.selection.target_selected()

    def movement_pending(self) -> bool:
        return self.selection.movement_pending()

    def snapshot(self) -> GameState:
        return self.state.clone()

    # Clicks and placement

    def handle_click(self, index: int) -> bool:
        if not self.graph.contains(index):
            return False
        return self._click_handlers[self.phase()](index)

    def stage_placement(self, index: int) -> bool:
        if not self.is_place_phase() or not self.graph.contains(index):
            return False
        if not self.players.owns(self.current_player(), index):
            return False
        if self.hit_troop_placement_limit():
            return False
        staged = self.placement.stage(
            index, self._troops_to_place, self.troops_available_for_placement()
        )
        if not staged:
            return False
        self.selection.mark_selected(index)
        return True

    def clear_placement(self) -> bool:
        self.placement.clear()
        self.selection.unselect_all()
        return True

    def commit_placement(self) -> bool:
        entries = self.placement.drain()
        if not entries:
            return False
        placed = sum(count for _, count in entries)
        for territory, count in entries:
            self.state.troops[territory] += count
        self.state.turn.new_troops -= placed
        self.selection.unselect_all()
        logger.info("Player %d placed %d troops", self.current_player(), placed)
        return True

    # Phases and turns

    def goto_place(self) -> bool:
        return self._change_phase(Phase.PLACE)

    def goto_attack(self) -> bool:
        return self._change_phase(Phase.ATTACK)

    def goto_fortify(self) -> bool:
        return self._change_phase(Phase.FORTIFY)

    def _change_phase(self, phase: Phase) -> bool:
        previous = self.phase()
        if not self.turns.goto(phase):
            return False
        if phase is not previous:
            # Markers belong to the phase that set them; staged troops stay
            # marked while placing.
            self.selection.unselect_all()
            if phase is Phase.PLACE:
                for territory, _ in self.placement.entries():
                    self.selection.mark_selected(territory)
        return True

    def unselect_all(self) -> None:
        self.selection.unselect_all()

    def end_turn(self) -> bool:
        if self.placement.total():
            logger.debug("Discarding %d staged troops", self.placement.total())
        self.placement.clear()
        self.selection.unselect_all()
        self.turns.advance(len(self.players))
        return True

    # Attack

    def _attack_pair(self) -> Optional[tuple]:
        if not self.is_attack_phase():
            return None
        pair = self.selection.movement_pair()
        if pair is None:
            return None
        attacker, defender = pair
        player = self.current_player()
        if not self.players.owns(player, attacker) or self.players.owns(player, defender):
            return None
        if not self.graph.are_adjacent(attacker, defender):
            return None
        return attacker, defender

    def attack_with(self, troops: int) -> bool:
        pair = self._attack_pair()
        if pair is None:
            logger.debug("Attack rejected: no attacker/defender pair in attack phase")
            return False
        attacker, defender = pair
        if not 1 <= troops <= self.troops(attacker) - 1:
            logger.debug("Attack rejected: %d troops from %d", troops, self.troops(attacker))
            return False

        reserve = self.troops(attacker) - troops
        outcome = self._battle(defender, troops)
        if outcome.captured:
            origin_troops, captured_troops = capture_split(outcome.attacker_survivors, reserve)
            self.state.troops[attacker] = origin_troops
            self.state.troops[defender] = captured_troops
            self._capture(attacker, defender)
            if origin_troops <= 1:
                self.selection.unselect_all()
            else:
                self.turns.enter_post_attack_fortify()
        else:
            self.state.troops[attacker] = reserve + outcome.attacker_survivors
            self.state.troops[defender] = outcome.defender_survivors
        return True

    def attack_all(self) -> bool:
        pair = self._attack_pair()
        if pair is None:
            return False
        return self.attack_with(self.troops(pair[0]) - 1)

    def attack_all_and_advance(self) -> bool:
        """Attack with everything and move every survivor into a capture."""
        pair = self._attack_pair()
        if pair is None:
            return False
        attacker, defender = pair
        troops = self.troops(attacker) - 1
        if troops < 1:
            return False

        outcome = self._battle(defender, troops)
        if outcome.captured:
            self.state.troops[attacker] = 1
            self.state.troops[defender] = outcome.attacker_survivors
            self._capture(attacker, defender)
        else:
            self.state.troops[attacker] = 1 + outcome.attacker_survivors
            self.state.troops[defender] = outcome.defender_survivors
        self.selection.unselect_all()
        return True

    def _battle(self, defender: int, troops: int) -> BattleOutcome:
        outcome = self.combat.resolve(troops, self.troops(defender))
        self.last_battle = outcome
        if not outcome.captured:
            logger.info(
                "Attack on %s failed; %d defenders remain",
                self.graph.name(defender),
                outcome.defender_survivors,
            )
        return outcome

    # Fortify

    def _fortify_pair(self) -> Optional[tuple]:
        if not self.is_fortify_phase():
            return None
        pair = self.selection.movement_pair()
        if pair is None:
            return None
        source, destination = pair
        player = self.current_player()
        if not (self.players.owns(player, source) and self.players.owns(player, destination)):
            return None
        if not self.graph.are_adjacent(source, destination):
            return None
        return source, destination

    def fortify_troops(self, troops: int) -> bool:
        pair = self._fortify_pair()
        if pair is None:
            return False
        source, destination = pair
        if not self.fortifier.transfer(source, destination, troops):
            logger.debug("Fortify rejected: %d troops from %d", troops, self.troops(source))
            return False
        self.turns.resume_attack()
        self.selection.unselect_all()
        return True

    def fortify_all(self) -> bool:
        pair = self._fortify_pair()
        if pair is None:
            return False
        return self.fortify_troops(self.fortifier.max_transfer(pair[0]))


def new_game(seed: int | None, graph: TerritoryGraph | None = None, num_players: int = 2) -> Game:
    return Game(graph=graph, config=GameConfig(num_players=num_players, seed=seed))
