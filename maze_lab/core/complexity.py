import random
from typing import Dict, List, Tuple

import numpy as np

from maze_lab.core.grid import Grid

# Share of removable walls knocked out after carving
LOOP_FACTOR = 0.30


class MazePostProcessor:
    @staticmethod
    def removable_walls(cells: np.ndarray) -> List[Tuple[int, int]]:
        """
        Interior walls that separate two opposite path cells, in row-major order.
        A wall with path on its left and right is taken first; the above/below
        test only runs when that one fails.
        """
        size = cells.shape[0]
        found = []
        for r in range(1, size - 1):
            for c in range(1, size - 1):
                if cells[r, c] != Grid.WALL:
                    continue
                # Horizontal: path left and right
                if cells[r, c - 1] == Grid.PATH and cells[r, c + 1] == Grid.PATH:
                    found.append((r, c))
                # Vertical: path above and below
                elif cells[r - 1, c] == Grid.PATH and cells[r + 1, c] == Grid.PATH:
                    found.append((r, c))
        return found

    @staticmethod
    def open_walls(cells: np.ndarray, factor: float = LOOP_FACTOR,
                   rng: random.Random = None, seed: int = None) -> Tuple[int, int]:
        """
        Turns a share of the removable walls into path to create loops and branches.
        factor: 0.0 = keep the perfect maze
                1.0 = open every removable wall
        Returns (removed, candidates).
        """
        if rng is None:
            rng = random.Random(seed)

        walls = MazePostProcessor.removable_walls(cells)
        rng.shuffle(walls)

        to_remove = int(len(walls) * factor)
        for r, c in walls[:to_remove]:
            cells[r, c] = Grid.PATH

        return to_remove, len(walls)

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        dead_ends = 0
        corridors = 0
        junctions = 0 # 3 or 4 exits

        for r in range(grid.size):
            for c in range(grid.size):
                if grid.cells[r, c] != Grid.PATH:
                    continue
                exits = sum(1 for _ in grid.open_neighbors((r, c)))
                if exits <= 1: dead_ends += 1
                elif exits == 2: corridors += 1
                else: junctions += 1

        open_cells = dead_ends + corridors + junctions
        total = grid.size * grid.size
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "open_percent": (open_cells / total) * 100 if total > 0 else 0
        }
