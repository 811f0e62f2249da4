from __future__ import annotations

from typing import Dict, List, Tuple


class PlacementCache:
    """Troops staged for placement this turn but not yet applied.

    Nothing here touches the board until the game drains the cache on
    commit; clearing simply forgets the staged entries.
    """

    def __init__(self) -> None:
        self._staged: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._staged)

    def __contains__(self, territory: int) -> bool:
        return territory in self._staged

    def staged(self, territory: int) -> int:
        return self._staged.get(territory, 0)

    def total(self) -> int:
        return sum(self._staged.values())

    def stage(self, territory: int, count: int, allowance: int) -> int:
        """Stage up to ``count`` troops without exceeding ``allowance``.

        Returns the number of troops actually staged, ``0`` when the
        allowance is already used up.
        """
        count = min(count, allowance - self.total())
        if count <= 0:
            return 0
        self._staged[territory] = self._staged.get(territory, 0) + count
        return count

    def clear(self) -> None:
        self._staged.clear()

    def entries(self) -> List[Tuple[int, int]]:
        return sorted(self._staged.items())

    def drain(self) -> List[Tuple[int, int]]:
        entries = self.entries()
        self._staged.clear()
        return entries
