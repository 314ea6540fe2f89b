import io
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.grid import Grid
from maze_lab.run.driver import Frame, RunResult
from maze_lab.viz.display import CellTag, build_display, build_final_display
from maze_lab.viz.terminal import TerminalRenderer, compare_verdict, path_label

OPEN_ROOM = [
    [0, 0, 0, 0, 0],
    [0, 1, 1, 1, 0],
    [0, 1, 1, 1, 0],
    [0, 1, 1, 1, 0],
    [0, 0, 0, 0, 0],
]
PATH = [(1, 1), (2, 1), (3, 1), (3, 2), (3, 3)]


class TestDisplay(unittest.TestCase):
    def test_live_tags(self):
        grid = Grid.from_rows(OPEN_ROOM)
        display = build_display(grid, {(1, 1), (1, 2), (2, 2)})

        self.assertEqual(display[0, 0], CellTag.WALL)
        self.assertEqual(display[1, 1], CellTag.START)
        self.assertEqual(display[3, 3], CellTag.END)
        self.assertEqual(display[1, 2], CellTag.VISITED)
        self.assertEqual(display[2, 2], CellTag.VISITED)
        self.assertEqual(display[2, 3], CellTag.OPEN)

    def test_live_path_overlay(self):
        grid = Grid.from_rows(OPEN_ROOM)
        display = build_display(grid, set(PATH) | {(1, 2)}, PATH)

        self.assertEqual(display[2, 1], CellTag.SOLVED_PATH)
        self.assertEqual(display[3, 2], CellTag.SOLVED_PATH)
        self.assertEqual(display[1, 2], CellTag.VISITED)
        # Endpoints keep their own tags
        self.assertEqual(display[1, 1], CellTag.START)
        self.assertEqual(display[3, 3], CellTag.END)

    def test_final_reveal(self):
        grid = Grid.from_rows(OPEN_ROOM)
        display = build_final_display(grid, PATH)

        self.assertEqual(display[2, 1], CellTag.FINAL_PATH)
        self.assertEqual(display[1, 2], CellTag.OPEN)
        self.assertEqual(display[1, 1], CellTag.START)
        self.assertEqual(display[3, 3], CellTag.END)

        empty = build_final_display(grid, [])
        self.assertNotIn(CellTag.FINAL_PATH, empty)


class TestTerminalRenderer(unittest.TestCase):
    def make_frame(self, name="BFS (Queue)", path_length=None):
        grid = Grid.from_rows(OPEN_ROOM)
        return Frame(name, build_display(grid, {(1, 2)}), 3, path_length, path_length is not None)

    def test_path_label(self):
        self.assertEqual(path_label(self.make_frame()), "...")
        self.assertEqual(path_label(self.make_frame(path_length=0)), "none")
        self.assertEqual(path_label(self.make_frame(path_length=7)), "7")

    def test_plain_single(self):
        term = TerminalRenderer(use_color=False, stream=io.StringIO())
        term.render([self.make_frame()])
        out = term.stream.getvalue()

        # Cursor control stays, color does not
        self.assertTrue(out.startswith("\033[H"))
        self.assertNotIn("\033", out[len("\033[H"):])
        self.assertIn("BFS (Queue)", out)
        self.assertIn("S ", out)
        self.assertIn("E ", out)
        self.assertIn("Steps: 3  |  Path: ...", out)
        # Header, five maze rows, blank line, stats
        self.assertEqual(len(out.rstrip("\n").split("\n")), 8)

    def test_side_by_side(self):
        term = TerminalRenderer(use_color=False, stream=io.StringIO())
        out = term.format_frames([self.make_frame(), self.make_frame("DFS (Stack)", 5)])
        self.assertIn("DFS (Stack)", out)
        self.assertIn("Path: 5", out)
        maze_row = out.split("\n")[1]
        self.assertEqual(len(maze_row), 5 * 2 * 2 + 4)

    def test_color(self):
        term = TerminalRenderer(use_color=True, stream=io.StringIO())
        term.clear()
        term.render([self.make_frame()])
        out = term.stream.getvalue()
        self.assertTrue(out.startswith("\033[2J\033[H"))
        self.assertIn("\033[48;5;33m", out)

    def test_plain_still_redraws_in_place(self):
        term = TerminalRenderer(use_color=False, stream=io.StringIO())
        term.clear()
        term.render([self.make_frame()])
        out = term.stream.getvalue()
        self.assertTrue(out.startswith("\033[2J\033[H"))
        self.assertNotIn("\033[48;5", out)
        self.assertNotIn("\033[1m", out)

    def test_summary(self):
        term = TerminalRenderer(use_color=False, stream=io.StringIO())
        results = [
            RunResult("BFS (Queue)", 40, PATH, 40),
            RunResult("DFS (Stack)", 12, PATH + [(9, 9)], 12),
        ]
        term.summary(results)
        out = term.stream.getvalue()
        self.assertIn("RESULTS", out)
        self.assertIn("Path length: 5", out)
        self.assertIn("BFS (Queue) found a shorter path!", out)

    def test_verdict(self):
        a = RunResult("A", 1, PATH, 1)
        b = RunResult("B", 1, list(PATH), 1)
        none = RunResult("C", 1, [], 1)
        self.assertEqual(compare_verdict([a, b]), "Both found paths of equal length.")
        self.assertIsNone(compare_verdict([a, none]))
        self.assertIsNone(compare_verdict([a]))


if __name__ == '__main__':
    unittest.main()
