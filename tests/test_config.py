import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.config import RunConfig, coerce_delay, coerce_size
from maze_lab.core.errors import ConfigurationError


class TestConfig(unittest.TestCase):
    def test_coerce_size(self):
        self.assertEqual(coerce_size(21), 21)
        self.assertEqual(coerce_size(20), 21)
        self.assertEqual(coerce_size(4), 11)
        self.assertEqual(coerce_size(100), 51)
        self.assertEqual(coerce_size(50), 51)

    def test_coerce_delay(self):
        self.assertEqual(coerce_delay(5), 10)
        self.assertEqual(coerce_delay(250), 250)
        self.assertEqual(coerce_delay(9000), 2000)

    def test_normalized_in_range(self):
        config, issues = RunConfig(size=31, delay_ms=50).normalized()
        self.assertEqual(issues, [])
        self.assertEqual((config.size, config.delay_ms), (31, 50))

    def test_even_size_is_not_an_issue(self):
        config, issues = RunConfig(size=30).normalized()
        self.assertEqual(config.size, 31)
        self.assertEqual(issues, [])

    def test_out_of_range_is_clamped(self):
        config, issues = RunConfig(size=99, delay_ms=1).normalized()
        self.assertEqual((config.size, config.delay_ms), (51, 10))
        self.assertEqual([i.field for i in issues], ["size", "delay"])
        for issue in issues:
            self.assertIsInstance(issue, ConfigurationError)
            self.assertIsInstance(issue, ValueError)
        self.assertEqual((issues[0].given, issues[0].used), (99, 51))

    def test_record_implies_visual(self):
        config, _ = RunConfig(record=True).normalized()
        self.assertTrue(config.visual)

    def test_derived(self):
        config = RunConfig(delay_ms=250, solvers=("bfs", "dfs"))
        self.assertAlmostEqual(config.delay_seconds, 0.25)
        self.assertTrue(config.compare)
        self.assertFalse(RunConfig().compare)


if __name__ == '__main__':
    unittest.main()
