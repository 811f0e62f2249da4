from __future__ import annotations

from typing import AbstractSet, Optional, Tuple

from .map import TerritoryGraph
from .state import GameState, Marker


class SelectionStateMachine:
    """Per-territory selection markers driven by map clicks.

    Attack and fortify share one set of rules: the first click on an owned
    territory selects it and highlights the neighbors that are valid targets,
    a second click on the selected territory cancels, and a click on a
    highlighted territory makes it the single target. The two phases differ
    only in which neighbors are targets (enemy ones for attack, owned ones
    for fortify).

    A territory counts as highlighted when its marker is HIGHLIGHTED,
    SELECTED or TARGETED, so clicking the current target again simply
    re-targets it.
    """

    def __init__(self, graph: TerritoryGraph, state: GameState):
        self.graph = graph
        self.state = state

    def unselect_all(self) -> None:
        markers = self.state.markers
        for index in range(len(markers)):
            markers[index] = Marker.DORMANT

    def mark_selected(self, index: int) -> None:
        self.state.markers[index] = Marker.SELECTED

    def selected_index(self) -> Optional[int]:
        return self._first(Marker.SELECTED)

    def targeted_index(self) -> Optional[int]:
        return self._first(Marker.TARGETED)

    def target_selected(self) -> bool:
        return self.targeted_index() is not None

    def movement_pending(self) -> bool:
        return self.movement_pair() is not None

    def movement_pair(self) -> Optional[Tuple[int, int]]:
        """The (source, target) pair, only when exactly one of each is marked."""
        selected = self.state.indices_with(Marker.SELECTED)
        targeted = self.state.indices_with(Marker.TARGETED)
        if len(selected) != 1 or len(targeted) != 1:
            return None
        return selected[0], targeted[0]

    def click_attack(self, index: int, owned: AbstractSet[int]) -> bool:
        return self._click(index, owned, attack=True)

    def click_fortify(self, index: int, owned: AbstractSet[int]) -> bool:
        return self._click(index, owned, attack=False)

    def _click(self, index: int, owned: AbstractSet[int], attack: bool) -> bool:
        markers = self.state.markers
        if index in owned:
            if not any(markers[t] is Marker.SELECTED for t in owned):
                self._select_source(index, owned, attack)
                return True
            if markers[index] is Marker.SELECTED:
                self.unselect_all()
                return True
            if not attack and self.state.is_highlighted(index):
                self._target(index, owned, attack)
                return True
            return False
        if attack and self.state.is_highlighted(index):
            self._target(index, owned, attack)
            return True
        return False

    def _select_source(self, index: int, owned: AbstractSet[int], attack: bool) -> None:
        markers = self.state.markers
        markers[index] = Marker.SELECTED
        for neighbor in self.graph.neighbors(index):
            if (neighbor in owned) != attack:
                markers[neighbor] = Marker.HIGHLIGHTED

    def _target(self, index: int, owned: AbstractSet[int], attack: bool) -> None:
        markers = self.state.markers
        for territory in range(len(markers)):
            if markers[territory] is Marker.SELECTED:
                continue
            if (territory in owned) != attack:
                markers[territory] = Marker.DORMANT
        markers[index] = Marker.TARGETED

    def _first(self, marker: Marker) -> Optional[int]:
        for index, value in enumerate(self.state.markers):
            if value is marker:
                return index
        return None
