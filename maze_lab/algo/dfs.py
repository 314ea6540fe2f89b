import logging
from typing import Iterator, List, Tuple

from maze_lab.core.complexity import LOOP_FACTOR, MazePostProcessor
from maze_lab.core.grid import GenerationStats, Grid
from maze_lab.algo.base import Generator

logger = logging.getLogger(__name__)

# Two-cell hops between rooms: right, left, down, up
CARVE_DIRS = ((0, 2), (0, -2), (2, 0), (-2, 0))


class RecursiveBacktracker(Generator):
    def run(self) -> Iterator[str]:
        cells = self.cells
        limit = self.size - 1

        # Start in the top-left room
        cells[1, 1] = Grid.PATH

        # Stack of (row, col)
        stack: List[Tuple[int, int]] = [(1, 1)]

        while stack:
            cr, cc = stack[-1]

            # Rooms two steps away that are still solid
            unvisited = []
            for dr, dc in CARVE_DIRS:
                nr, nc = cr + dr, cc + dc
                if 0 < nr < limit and 0 < nc < limit and cells[nr, nc] == Grid.WALL:
                    unvisited.append((dr, dc))

            if unvisited:
                dr, dc = unvisited[self.rng.randrange(len(unvisited))]

                # Carve the bridge and the room behind it
                cells[cr + dr // 2, cc + dc // 2] = Grid.PATH
                cells[cr + dr, cc + dc] = Grid.PATH

                stack.append((cr + dr, cc + dc))
                self.step_count += 1

                if self.step_count % 100 == 0:
                    yield f"Carving... Stack: {len(stack)}"
            else:
                # Backtrack
                stack.pop()

        yield "Done"


def generate(size: int, seed: int = None, loop_factor: float = LOOP_FACTOR) -> Grid:
    """
    Builds a maze: a perfect maze from the backtracker, then loop injection.
    Both phases draw from one Random(seed), so (size, seed) fully determines the grid.
    Even sizes are bumped to the next odd value.
    """
    carver = RecursiveBacktracker(size, seed=seed)
    carver.run_all()
    logger.debug(f"Carved {carver.size}x{carver.size} perfect maze in {carver.step_count} steps")

    removed, candidates = MazePostProcessor.open_walls(carver.cells, factor=loop_factor, rng=carver.rng)
    logger.debug(f"Opened {removed} of {candidates} removable walls")

    return Grid(carver.cells, stats=GenerationStats(candidates, removed))
