import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_walker.core.stats import MazeInspector
from maze_walker.engine import GeneratorKind, SolverKind, new_grid, start_generation, start_solving


def time_generators(width, height, seed):
    print(f"{'GENERATOR':<15} | {'TIME (s)':<10} | {'STEPS':<10} | {'PERFECT':<8}")
    print("-" * 52)
    for kind in GeneratorKind:
        grid = new_grid(width, height)
        gen = start_generation(kind, grid, seed=seed)

        t_start = time.time()
        gen.run_all()
        duration = time.time() - t_start

        # Kruskal spends most of its late steps rejecting edges, visible in STEPS
        perfect = MazeInspector.is_perfect(grid)
        print(f"{kind.value:<15} | {duration:<10.4f} | {gen.step_count:<10} | {str(perfect):<8}")


def time_solvers(width, height, seed):
    grid = new_grid(width, height)
    start_generation(GeneratorKind.DFS, grid, seed=seed).run_all()

    results = []
    for kind in SolverKind:
        solver = start_solving(kind, grid)

        t_start = time.time()
        solver.run_all()
        duration = time.time() - t_start

        path_len = solver.outcome.length if solver.outcome else -1
        results.append((kind.value, duration, path_len, solver.visited_count))

    # Sort by Time
    results.sort(key=lambda x: x[1])

    print(f"\n{'RANK':<5} | {'SOLVER':<10} | {'TIME (s)':<10} | {'PATH':<8} | {'VISITED':<8}")
    print("-" * 52)
    for i, (name, duration, path_len, visited) in enumerate(results):
        print(f"{i+1:<5} | {name.upper():<10} | {duration:<10.4f} | {path_len:<8} | {visited:<8}")


def run_benchmark():
    parser = argparse.ArgumentParser(description="Generator and solver benchmark")
    parser.add_argument("--width", type=int, default=200, help="Maze Width")
    parser.add_argument("--height", type=int, default=200, help="Maze Height")
    parser.add_argument("--seed", type=int, default=123, help="Random Seed")
    args = parser.parse_args()

    print(f"=== MAZE WALKER BENCHMARK ===")
    print(f"Size: {args.width}x{args.height} | Seed: {args.seed}")
    print("=" * 52)
    time_generators(args.width, args.height, args.seed)
    time_solvers(args.width, args.height, args.seed)


if __name__ == "__main__":
    run_benchmark()
