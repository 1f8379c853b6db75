# ==============================================================================
# FLAG VIEWER - RANDOM SELECTOR
# ==============================================================================
# Uniform random index selection over the catalog.
#
# Selection is memoryless: the same index may come up twice in a row.
# The generator is seeded once per run; pass a fixed seed to reproduce a
# sequence of picks.
#
# Usage:
#   selector = Selector()
#   selector.seed()          # time + entropy
#   index = selector.next(len(catalog))
# ==============================================================================

import os
import random
import time
from typing import Optional

from .errors import EmptyPopulation


def entropy_seed() -> int:
    """Seed derived from the clock and the OS entropy pool."""
    return time.time_ns() ^ int.from_bytes(os.urandom(8), 'little')


class Selector:
    """Seeded pseudo-random index source."""

    def __init__(self):
        self._random = random.Random()
        self._seed: Optional[int] = None

    @property
    def is_seeded(self) -> bool:
        return self._seed is not None

    @property
    def seed_value(self) -> Optional[int]:
        """The seed in use, so a run can be replayed."""
        return self._seed

    def seed(self, value: Optional[int] = None):
        """
        Seed the generator. Only allowed once.

        Args:
            value: Fixed seed, or None to derive one from time and entropy

        Raises:
            RuntimeError: The selector was already seeded
        """
        if self._seed is not None:
            raise RuntimeError("Selector is already seeded")
        self._seed = entropy_seed() if value is None else int(value)
        self._random.seed(self._seed)

    def next(self, population_size: int) -> int:
        """
        Pick an index uniformly from [0, population_size).

        Raises:
            EmptyPopulation: population_size is 0
            ValueError: population_size is negative
        """
        if population_size < 0:
            raise ValueError(f"population_size must be >= 0, got {population_size}")
        if population_size == 0:
            raise EmptyPopulation("Nothing to select from")
        if self._seed is None:
            self.seed()
        return self._random.randrange(population_size)
