import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_walker.algo.dfs import RecursiveBacktracker
from maze_walker.algo.hunt_and_kill import HuntAndKill
from maze_walker.core.grid import Grid
from maze_walker.core.random_source import RandomSource
from maze_walker.core.stats import MazeInspector, popcount_walls


class TestStats(unittest.TestCase):
    def test_popcount(self):
        self.assertEqual(popcount_walls(Grid.ALL_WALLS), 4)
        self.assertEqual(popcount_walls(Grid.NORTH | Grid.SOUTH), 2)
        # Flags above the wall bits are ignored
        self.assertEqual(popcount_walls(Grid.EAST | Grid.VISITED | Grid.PATH), 1)

    def test_fresh_grid(self):
        grid = Grid(4, 4)
        stats = MazeInspector.calculate_stats(grid)
        self.assertEqual(stats["passages"], 0)
        self.assertEqual(stats["components"], 16)
        self.assertEqual(stats["dead_ends"], 0)
        self.assertFalse(MazeInspector.is_perfect(grid))

    def test_generated_maze(self):
        w, h = 20, 20
        grid = Grid(w, h)
        RecursiveBacktracker(grid, RandomSource(42)).run_all()

        stats = MazeInspector.calculate_stats(grid)
        self.assertEqual(stats["passages"], w * h - 1)
        self.assertEqual(stats["components"], 1)
        self.assertGreater(stats["dead_ends"], 0)
        self.assertEqual(stats["dead_ends"] + stats["corridors"] + stats["intersections"], w * h)
        self.assertAlmostEqual(stats["dead_end_percent"], stats["dead_ends"] / (w * h) * 100)

    def test_cycle_is_not_perfect(self):
        grid = Grid(2, 2)
        for a, b in list(grid.walls()):
            grid.remove_wall(a, b)
        # 4 passages on 4 cells: a loop
        self.assertEqual(MazeInspector.count_passages(grid), 4)
        self.assertFalse(MazeInspector.is_perfect(grid))

    def test_components(self):
        grid = Grid(3, 1)
        grid.remove_wall((0, 0), (1, 0))
        regions = MazeInspector.components(grid)
        self.assertEqual(sorted(len(r) for r in regions), [1, 2])

        grid = Grid(6, 6)
        HuntAndKill(grid, RandomSource(4)).run_all()
        self.assertEqual(len(MazeInspector.components(grid)), 1)


if __name__ == '__main__':
    unittest.main()
