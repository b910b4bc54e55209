from __future__ import annotations

import math
import random

from pygame.math import Vector2

from ..utils.vector import from_angle


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_float(self) -> float:
        return self._random.random()

    def next_int(self, max_value: int) -> int:
        return self._random.randrange(max_value)

    def next_index(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high)`` drawn from a single float sample."""
        # rounding can land exactly on high when the span is tiny
        return min(high - 1, int(math.floor(self._random.random() * (high - low) + low)))

    def next_angle(self) -> float:
        return self._random.random() * (2 * math.pi)

    def next_unit_circle(self) -> Vector2:
        return from_angle(self.next_angle())


def derive_stream_seed(seed: int, salt: int) -> int:
    return (int(seed) ^ int(salt)) & 0xFFFFFFFFFFFFFFFF
