from enum import IntEnum
from typing import Iterable, Optional

import numpy as np

from maze_lab.core.grid import Coordinate, Grid


class CellTag(IntEnum):
    WALL = 0
    OPEN = 1
    START = 2
    END = 3
    VISITED = 4
    SOLVED_PATH = 5
    FINAL_PATH = 6


def _base(grid: Grid) -> np.ndarray:
    return np.where(grid.cells == Grid.WALL, CellTag.WALL, CellTag.OPEN).astype(np.uint8)


def build_display(grid: Grid, visited: Iterable[Coordinate],
                  path: Optional[Iterable[Coordinate]] = None) -> np.ndarray:
    """Live frame: maze, cells explored so far, and the path once one is known."""
    display = _base(grid)

    for r, c in visited:
        if grid.cells[r, c] == Grid.PATH:
            display[r, c] = CellTag.VISITED

    if path:
        for cell in path:
            if cell != grid.start and cell != grid.end:
                display[cell[0], cell[1]] = CellTag.SOLVED_PATH

    # Start and end always win
    display[grid.start.row, grid.start.col] = CellTag.START
    display[grid.end.row, grid.end.col] = CellTag.END
    return display


def build_final_display(grid: Grid, path: Optional[Iterable[Coordinate]] = None) -> np.ndarray:
    """Reveal frame: only the maze skeleton and the solved path, visited overlay dropped."""
    display = _base(grid)

    if path:
        for r, c in path:
            display[r, c] = CellTag.FINAL_PATH

    display[grid.start.row, grid.start.col] = CellTag.START
    display[grid.end.row, grid.end.col] = CellTag.END
    return display
