import unittest
import sys
import os
import random

import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.algo.dfs import RecursiveBacktracker, generate
from maze_lab.core.complexity import LOOP_FACTOR, MazePostProcessor
from maze_lab.core.grid import Grid


class TestComplexity(unittest.TestCase):
    def test_loop_injection_bound(self):
        for seed in (1, 42, 777):
            size = 25
            # Phase one alone, from the same seed
            carver = RecursiveBacktracker(size, seed=seed)
            carver.run_all()
            candidates = len(MazePostProcessor.removable_walls(carver.cells))
            perfect_paths = int(np.count_nonzero(carver.cells == Grid.PATH))

            grid = generate(size, seed)
            expected = int(candidates * LOOP_FACTOR)

            self.assertEqual(grid.stats.removable_walls, candidates)
            self.assertEqual(grid.stats.removed_walls, expected)
            self.assertEqual(grid.count(Grid.PATH) - perfect_paths, expected)

    def test_horizontal_checked_first(self):
        # (2, 2) has path on both axes; it must be listed once
        cells = np.array([
            [0, 0, 0, 0, 0],
            [0, 1, 1, 1, 0],
            [0, 1, 0, 1, 0],
            [0, 1, 1, 1, 0],
            [0, 0, 0, 0, 0],
        ], dtype=np.uint8)
        self.assertEqual(MazePostProcessor.removable_walls(cells), [(2, 2)])

    def test_removable_scan_order(self):
        cells = np.array([
            [0, 0, 0, 0, 0, 0, 0],
            [0, 1, 0, 1, 0, 1, 0],
            [0, 0, 0, 0, 0, 1, 0],
            [0, 1, 1, 1, 0, 1, 0],
            [0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0],
        ], dtype=np.uint8)
        # Row-major: horizontal gaps in row 1, vertical ones in row 2, then row 3
        self.assertEqual(MazePostProcessor.removable_walls(cells), [(1, 2), (1, 4), (2, 1), (2, 3), (3, 4)])

    def test_open_walls_factor(self):
        carver = RecursiveBacktracker(21, seed=3)
        carver.run_all()
        cells = carver.cells.copy()

        removed, candidates = MazePostProcessor.open_walls(cells, factor=1.0, rng=random.Random(0))
        self.assertEqual(removed, candidates)
        self.assertEqual(MazePostProcessor.open_walls(carver.cells.copy(), factor=0.0, seed=0), (0, candidates))

    def test_stats(self):
        perfect = generate(21, seed=4, loop_factor=0.0)
        braided = generate(21, seed=4)

        s1 = MazePostProcessor.calculate_stats(perfect)
        s2 = MazePostProcessor.calculate_stats(braided)
        self.assertGreater(s1["dead_ends"], 0)
        self.assertLessEqual(s2["dead_ends"], s1["dead_ends"])
        self.assertGreater(s2["open_percent"], s1["open_percent"])
        self.assertEqual(s1["dead_ends"] + s1["corridors"] + s1["junctions"], perfect.count(Grid.PATH))


if __name__ == '__main__':
    unittest.main()
