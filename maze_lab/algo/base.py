import random
from abc import ABC, abstractmethod
from typing import Iterator

import numpy as np

from maze_lab.core.grid import Grid


class Generator(ABC):
    def __init__(self, size: int, seed: int = None, rng: random.Random = None):
        if size % 2 == 0:
            size += 1
        if size < 5:
            raise ValueError(f"Maze size must be at least 5, got {size}")

        self.size = size
        self.seed = seed
        # A shared rng lets later phases continue the same random stream
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0
        # All walls to begin with
        self.cells = np.full((size, size), Grid.WALL, dtype=np.uint8)

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual carving happens in-place on self.cells.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
