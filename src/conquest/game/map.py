from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple


# Index hosts report for clicks that land outside every territory.
BACKGROUND_INDEX = -1


@dataclass(frozen=True)
class Territory:
    id: int
    name: str
    neighbors: Tuple[int, ...]


class TerritoryGraph:
    """Static territory adjacency, stored as a contiguous arena keyed by id.

    Ids run from ``0`` to ``len(graph) - 1`` and every component refers to
    territories by id only. The adjacency must be symmetric; anything else is
    rejected at construction time.
    """

    def __init__(self, territories: Iterable[Territory]):
        self.territories: Tuple[Territory, ...] = tuple(sorted(territories, key=lambda t: t.id))
        self._validate()
        self._neighbor_sets = tuple(frozenset(t.neighbors) for t in self.territories)

    @classmethod
    def from_adjacency(
        cls,
        adjacency: Mapping[int, Sequence[int]],
        names: Mapping[int, str] | None = None,
    ) -> "TerritoryGraph":
        names = names or {}
        return cls(
            Territory(tid, names.get(tid, f"Territory {tid}"), tuple(neighbors))
            for tid, neighbors in adjacency.items()
        )

    def _validate(self) -> None:
        if not self.territories:
            raise ValueError("A territory graph needs at least one territory.")
        ids = [territory.id for territory in self.territories]
        if len(set(ids)) != len(ids):
            duplicates = sorted({tid for tid in ids if ids.count(tid) > 1})
            raise ValueError(f"Duplicate territory ids: {duplicates}")
        if ids != list(range(len(ids))):
            raise ValueError(f"Territory ids must be contiguous from 0, got {ids}")
        for territory in self.territories:
            if len(set(territory.neighbors)) != len(territory.neighbors):
                raise ValueError(f"Territory {territory.id} lists a neighbor twice.")
            for neighbor in territory.neighbors:
                if neighbor == territory.id:
                    raise ValueError(f"Territory {territory.id} lists itself as a neighbor.")
                if not 0 <= neighbor < len(ids):
                    raise ValueError(
                        f"Territory {territory.id} has unknown neighbor {neighbor}."
                    )
                if territory.id not in self.territories[neighbor].neighbors:
                    raise ValueError(
                        f"Asymmetric adjacency: {territory.id} -> {neighbor} "
                        f"has no matching {neighbor} -> {territory.id}."
                    )

    def __len__(self) -> int:
        return len(self.territories)

    def __iter__(self) -> Iterator[Territory]:
        return iter(self.territories)

    def __getitem__(self, index: int) -> Territory:
        return self.territories[index]

    def contains(self, index: int) -> bool:
        return 0 <= index < len(self.territories)

    def neighbors(self, index: int) -> Tuple[int, ...]:
        return self.territories[index].neighbors

    def are_adjacent(self, a: int, b: int) -> bool:
        return self.contains(a) and b in self._neighbor_sets[a]

    def name(self, index: int) -> str:
        return self.territories[index].name

    def edge_list(self) -> List[Tuple[int, int]]:
        return [
            (territory.id, neighbor)
            for territory in self.territories
            for neighbor in territory.neighbors
        ]


TERRITORY_NAMES: Dict[int, str] = {
    0: "Nord",
    1: "Ost",
    2: "Sued",
    3: "West",
    4: "Delta",
    5: "Echo",
    6: "Fjord",
    7: "Gulf",
}

ADJACENCY: Dict[int, Tuple[int, ...]] = {
    0: (1, 3),
    1: (0, 2, 4),
    2: (1, 3, 5),
    3: (0, 2, 6),
    4: (1, 5, 7),
    5: (2, 4, 7),
    6: (3, 7),
    7: (4, 5, 6),
}


def default_graph() -> TerritoryGraph:
    return TerritoryGraph.from_adjacency(ADJACENCY, TERRITORY_NAMES)
