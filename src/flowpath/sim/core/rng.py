from __future__ import annotations

import random


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_open01(self) -> float:
        # random() may return exactly 0.0; the open interval excludes it
        value = self._random.random()
        while value == 0.0:
            value = self._random.random()
        return value
