import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_walker.algo.dfs import RecursiveBacktracker
from maze_walker.algo.eller import EllersAlgorithm
from maze_walker.algo.hunt_and_kill import HuntAndKill
from maze_walker.algo.kruskal import RandomizedKruskal
from maze_walker.algo.prim import PrimsAlgorithm
from maze_walker.core.disjoint_set import DisjointSet
from maze_walker.core.grid import Grid
from maze_walker.core.random_source import RandomSource
from maze_walker.core.stats import MazeInspector

PERFECT_GENERATORS = [RecursiveBacktracker, PrimsAlgorithm, EllersAlgorithm, HuntAndKill]
SIZES = [(1, 1), (1, 7), (7, 1), (2, 2), (10, 8), (15, 15)]


def generate(cls, w, h, seed, **options):
    grid = Grid(w, h)
    algo = cls(grid, RandomSource(seed), **options)
    steps = list(algo)
    return grid, algo, steps


class TestGenerators(unittest.TestCase):
    def test_spanning_tree(self):
        for cls in PERFECT_GENERATORS:
            for w, h in SIZES:
                for seed in (1, 42, 2024):
                    with self.subTest(algo=cls.name, size=(w, h), seed=seed):
                        grid, algo, _ = generate(cls, w, h, seed)
                        self.assertTrue(algo.finished)
                        self.assertEqual(MazeInspector.count_passages(grid), w * h - 1)
                        self.assertEqual(len(grid.reachable_from((0, 0))), w * h)
                        self.assertTrue(MazeInspector.is_perfect(grid))

    def test_coverage(self):
        for cls in PERFECT_GENERATORS:
            with self.subTest(algo=cls.name):
                w, h = 20, 20
                grid, _, _ = generate(cls, w, h, 42)

                # 1. Total Coverage Check
                visited_count = 0
                for i in range(w * h):
                    if (grid.cells[i] & Grid.VISITED):
                        visited_count += 1

                self.assertEqual(visited_count, w * h, f"{cls.name} should visit every cell")

    def test_determinism(self):
        for cls in PERFECT_GENERATORS:
            with self.subTest(algo=cls.name):
                grid1, algo1, steps1 = generate(cls, 12, 9, 12345)
                grid2, algo2, steps2 = generate(cls, 12, 9, 12345)

                self.assertEqual(algo1.removed_walls, algo2.removed_walls)
                self.assertEqual([s.removed for s in steps1], [s.removed for s in steps2])
                self.assertEqual(grid1.cells.tobytes(), grid2.cells.tobytes())

    def test_seed_changes_layout(self):
        for cls in PERFECT_GENERATORS:
            with self.subTest(algo=cls.name):
                grid1, _, _ = generate(cls, 12, 12, 1)
                grid2, _, _ = generate(cls, 12, 12, 2)
                self.assertNotEqual(grid1.cells.tobytes(), grid2.cells.tobytes())

    def test_steps_report_removed_walls(self):
        for cls in PERFECT_GENERATORS + [RandomizedKruskal]:
            with self.subTest(algo=cls.name):
                grid, algo, steps = generate(cls, 8, 6, 7)
                reported = [wall for step in steps for wall in step.removed]
                self.assertEqual(reported, algo.removed_walls)
                self.assertEqual([s.index for s in steps], list(range(len(steps))))
                for a, b in reported:
                    self.assertTrue(grid.is_open(a, b))

    def test_trivial_grid(self):
        for cls in PERFECT_GENERATORS + [RandomizedKruskal]:
            with self.subTest(algo=cls.name):
                grid, algo, _ = generate(cls, 1, 1, 42)
                self.assertTrue(algo.finished)
                self.assertEqual(algo.removed_walls, [])
                self.assertEqual(grid.cells[0] & Grid.ALL_WALLS, Grid.ALL_WALLS)

    def test_lazy_steps(self):
        grid = Grid(10, 10)
        algo = RecursiveBacktracker(grid, RandomSource(42))
        first = next(algo)
        self.assertEqual(first.cell, (0, 0))
        self.assertEqual(first.removed, ())
        visited = sum(1 for v in grid.cells if v & Grid.VISITED)
        self.assertEqual(visited, 1)

        second = next(algo)
        self.assertEqual(len(second.removed), 1)
        self.assertEqual(MazeInspector.count_passages(grid), 1)

    def test_not_restartable(self):
        grid = Grid(5, 5)
        algo = PrimsAlgorithm(grid, RandomSource(3)).run_all()
        self.assertTrue(algo.finished)
        with self.assertRaises(StopIteration):
            next(algo)
        self.assertEqual(list(algo), [])

    def test_close_releases_grid(self):
        grid = Grid(6, 6)
        algo = HuntAndKill(grid, RandomSource(5))
        next(algo)
        next(algo)
        self.assertIs(grid.owner, algo)
        algo.close()
        self.assertIsNone(grid.owner)
        self.assertEqual(list(algo), [])

    def test_regenerate_after_clear(self):
        grid = Grid(9, 9)
        RecursiveBacktracker(grid, RandomSource(8)).run_all()
        first = grid.snapshot()

        grid.clear()
        RecursiveBacktracker(grid, RandomSource(8)).run_all()
        self.assertEqual(grid.snapshot(), first)


class TestKruskal(unittest.TestCase):
    def test_completes(self):
        grid = Grid(6, 6)
        algo = RandomizedKruskal(grid, RandomSource(42)).run_all()
        self.assertTrue(algo.finished)
        self.assertEqual(algo.unions, len(algo.removed_walls))
        self.assertLessEqual(len(algo.removed_walls), 6 * 6 - 1)
        self.assertTrue(MazeInspector.is_perfect(grid))

    def test_repeated_runs_are_valid(self):
        # Layouts of two runs with the same seed may differ, each must still be usable
        for _ in range(2):
            grid = Grid(6, 6)
            RandomizedKruskal(grid, RandomSource(42)).run_all()
            stats = MazeInspector.calculate_stats(grid)
            self.assertEqual(stats["passages"], 36 - stats["components"])

    def test_skipped_edges_remove_nothing(self):
        grid = Grid(10, 10)
        algo = RandomizedKruskal(grid, RandomSource(9))
        steps = list(algo)
        skipped = [s for s in steps if not s.removed]
        self.assertEqual(len(steps) - len(skipped), 99)
        for step in steps:
            self.assertLessEqual(len(step.removed), 1)


class TestEller(unittest.TestCase):
    def test_merge_chance_extremes(self):
        for chance in (0.0, 1.0):
            with self.subTest(merge_chance=chance):
                grid, _, _ = generate(EllersAlgorithm, 9, 7, 11, merge_chance=chance)
                self.assertTrue(MazeInspector.is_perfect(grid))

    def test_always_merging_opens_first_row(self):
        grid, _, _ = generate(EllersAlgorithm, 6, 4, 3, merge_chance=1.0)
        for x in range(5):
            self.assertTrue(grid.is_open((x, 0), (x + 1, 0)))

    def test_invalid_merge_chance(self):
        with self.assertRaises(ValueError):
            EllersAlgorithm(Grid(3, 3), RandomSource(1), merge_chance=1.5)


class TestHuntAndKill(unittest.TestCase):
    def test_every_step_after_start_adds_one_cell(self):
        grid = Grid(12, 12)
        steps = list(HuntAndKill(grid, RandomSource(21)))
        self.assertEqual(len(steps), 12 * 12)
        self.assertTrue(all(len(s.removed) == 1 for s in steps[1:]))
        self.assertTrue(any(s.message.startswith("Hunting") for s in steps))


class TestRandomSource(unittest.TestCase):
    def test_same_seed_same_stream(self):
        a, b = RandomSource(99), RandomSource(99)
        self.assertEqual([a.next_in_range(0, 1000) for _ in range(20)],
                         [b.next_in_range(0, 1000) for _ in range(20)])

    def test_range_is_half_open(self):
        rng = RandomSource(5)
        values = {rng.next_in_range(3, 6) for _ in range(500)}
        self.assertEqual(values, {3, 4, 5})

    def test_shuffle_in_place(self):
        rng = RandomSource(5)
        items = list(range(30))
        self.assertIsNone(rng.shuffle(items))
        self.assertEqual(sorted(items), list(range(30)))

    def test_entropy_seed_is_recorded(self):
        rng = RandomSource()
        self.assertTrue(0 <= rng.seed < 2 ** 64)
        replay = RandomSource(rng.seed)
        self.assertEqual(rng.next_in_range(0, 10 ** 9), replay.next_in_range(0, 10 ** 9))

    def test_seed_is_masked_to_64_bits(self):
        self.assertEqual(RandomSource(2 ** 64 + 7).seed, 7)
        with self.assertRaises(TypeError):
            RandomSource("42")


class TestDisjointSet(unittest.TestCase):
    def test_union_find(self):
        ds = DisjointSet(6)
        self.assertEqual(ds.sets, 6)
        self.assertTrue(ds.union(0, 1))
        self.assertTrue(ds.union(2, 3))
        self.assertFalse(ds.union(1, 0))
        self.assertTrue(ds.connected(0, 1))
        self.assertFalse(ds.connected(1, 2))

        self.assertTrue(ds.union(1, 3))
        self.assertTrue(ds.connected(0, 2))
        self.assertEqual(ds.sets, 3)

    def test_path_compression(self):
        ds = DisjointSet(64)
        for i in range(63):
            ds.union(i, i + 1)
        root = ds.find(63)
        self.assertEqual(ds.parent[63], root)
        self.assertEqual(ds.sets, 1)


if __name__ == '__main__':
    unittest.main()
