from __future__ import annotations

import numpy as np


class FortifyEngine:
    """Moves troops between two territories without emptying the source."""

    def __init__(self, troops: np.ndarray):
        self.troops = troops

    def max_transfer(self, source: int) -> int:
        return max(int(self.troops[source]) - 1, 0)

    def can_transfer(self, source: int, troops: int) -> bool:
        return 1 <= troops <= self.max_transfer(source)

    def transfer(self, source: int, destination: int, troops: int) -> bool:
        if source == destination or not self.can_transfer(source, troops):
            return False
        self.troops[source] -= troops
        self.troops[destination] += troops
        return True
