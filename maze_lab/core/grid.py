from collections import deque
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Set

import numpy as np


class Coordinate(NamedTuple):
    row: int
    col: int


class GenerationStats(NamedTuple):
    removable_walls: int
    removed_walls: int


class Grid:
    # Cell values
    WALL = 0
    PATH = 1

    # Neighbor order used by every solver: up, down, left, right
    DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

    __slots__ = ('size', 'cells', 'start', 'end', 'stats')

    def __init__(self, cells: np.ndarray, start: Coordinate = None, end: Coordinate = None,
                 stats: Optional[GenerationStats] = None):
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"Grid must be square, got shape {cells.shape}")

        self.size = cells.shape[0]
        # Freeze a private copy; engines share the grid read-only
        self.cells = np.array(cells, dtype=np.uint8, copy=True)
        self.cells.flags.writeable = False
        self.start = Coordinate(*start) if start is not None else Coordinate(1, 1)
        self.end = Coordinate(*end) if end is not None else Coordinate(self.size - 2, self.size - 2)
        self.stats = stats

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], start=None, end=None) -> "Grid":
        """Builds a grid from nested lists of 0 (wall) / 1 (path)."""
        return cls(np.array(rows, dtype=np.uint8), start, end)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_open(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.cells[row, col] == self.PATH

    def open_neighbors(self, cell: Coordinate) -> Iterator[Coordinate]:
        """
        Yields in-bounds PATH neighbors of cell in the fixed order up, down, left, right.
        Does NOT look at visited state (that's the solver's job).
        """
        row, col = cell
        for dr, dc in self.DIRECTIONS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.size and 0 <= nc < self.size and self.cells[nr, nc] == self.PATH:
                yield Coordinate(nr, nc)

    def count(self, value: int) -> int:
        return int(np.count_nonzero(self.cells == value))

    def reachable(self, source: Coordinate = None) -> Set[Coordinate]:
        """Flood fill over PATH cells from source (defaults to start)."""
        source = Coordinate(*source) if source is not None else self.start
        if not self.is_open(*source):
            return set()

        seen = {source}
        queue = deque([source])
        while queue:
            cell = queue.popleft()
            for nxt in self.open_neighbors(cell):
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)
        return seen

    def is_adjacent_step(self, a: Coordinate, b: Coordinate) -> bool:
        return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1

    def validate_path(self, path: Iterable[Coordinate]) -> bool:
        """True when path runs start -> end over orthogonally adjacent PATH cells."""
        cells: List[Coordinate] = list(path)
        if not cells or cells[0] != self.start or cells[-1] != self.end:
            return False
        for cell in cells:
            if not self.is_open(*cell):
                return False
        return all(self.is_adjacent_step(a, b) for a, b in zip(cells, cells[1:]))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.start == other.start and self.end == other.end
                and np.array_equal(self.cells, other.cells))

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, start={self.start}, end={self.end})"
