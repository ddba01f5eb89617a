"""
Entry points shared by the CLI, the renderer and the benchmark script.

Algorithm choice is a closed enumeration; `start_generation` and
`start_solving` are the only places that map a kind onto its implementation.
"""
import logging
from enum import Enum
from typing import Optional, Union

from maze_walker.algo.base import Generator
from maze_walker.algo.dfs import RecursiveBacktracker
from maze_walker.algo.eller import EllersAlgorithm
from maze_walker.algo.hunt_and_kill import HuntAndKill
from maze_walker.algo.kruskal import RandomizedKruskal
from maze_walker.algo.prim import PrimsAlgorithm
from maze_walker.algo.solvers import AStar, BFS, DepthFirst, Dijkstra, Greedy, Solver
from maze_walker.core.errors import UnknownAlgorithm
from maze_walker.core.grid import Cell, Grid
from maze_walker.core.random_source import RandomSource

logger = logging.getLogger(__name__)


class GeneratorKind(Enum):
    DFS = "dfs"
    KRUSKAL = "kruskal"
    PRIM = "prim"
    ELLER = "eller"
    HUNT_AND_KILL = "hunt-and-kill"

    @classmethod
    def parse(cls, value: Union[str, "GeneratorKind"]) -> "GeneratorKind":
        return _parse(cls, "generator", value)

    def __str__(self):
        return self.value


class SolverKind(Enum):
    DFS = "dfs"
    BFS = "bfs"
    DIJKSTRA = "dijkstra"
    GREEDY = "greedy"
    ASTAR = "astar"

    @classmethod
    def parse(cls, value: Union[str, "SolverKind"]) -> "SolverKind":
        return _parse(cls, "solver", value)

    def __str__(self):
        return self.value


def _parse(kind_cls, family: str, value):
    if isinstance(value, kind_cls):
        return value
    try:
        return kind_cls(str(value).strip().lower())
    except ValueError:
        raise UnknownAlgorithm(family, str(value), [k.value for k in kind_cls]) from None


def new_grid(width: int, height: int) -> Grid:
    """Fresh grid with every wall in place. Raises InvalidDimensions below 1x1."""
    return Grid(width, height)


def start_generation(kind: Union[str, GeneratorKind], grid: Grid,
                     random: Optional[RandomSource] = None, seed: Optional[int] = None,
                     **options) -> Generator:
    """
    Returns the step sequence that carves `grid`. Pass either a RandomSource
    or a seed (a fresh entropy-seeded source is made when both are omitted).
    Extra options go to the algorithm (Eller: merge_chance).
    """
    kind = GeneratorKind.parse(kind)
    if random is None:
        random = RandomSource(seed)
    elif seed is not None:
        raise ValueError("Pass either random or seed, not both")

    logger.info("Generating %dx%d maze with %s (seed=%d)", grid.width, grid.height, kind, random.seed)

    if kind is GeneratorKind.DFS:
        return RecursiveBacktracker(grid, random, **options)
    elif kind is GeneratorKind.KRUSKAL:
        return RandomizedKruskal(grid, random, **options)
    elif kind is GeneratorKind.PRIM:
        return PrimsAlgorithm(grid, random, **options)
    elif kind is GeneratorKind.ELLER:
        return EllersAlgorithm(grid, random, **options)
    elif kind is GeneratorKind.HUNT_AND_KILL:
        return HuntAndKill(grid, random, **options)
    raise UnknownAlgorithm("generator", str(kind), [k.value for k in GeneratorKind])


def start_solving(kind: Union[str, SolverKind], grid: Grid,
                  start: Optional[Cell] = None, goal: Optional[Cell] = None,
                  **options) -> Solver:
    """
    Returns the step sequence that searches `grid` from start (default top-left)
    to goal (default bottom-right). Extra options go to the algorithm
    (Greedy: heuristic="manhattan" | "euclidean").
    """
    kind = SolverKind.parse(kind)
    if kind is SolverKind.DFS:
        solver = DepthFirst(grid, start, goal, **options)
    elif kind is SolverKind.BFS:
        solver = BFS(grid, start, goal, **options)
    elif kind is SolverKind.DIJKSTRA:
        solver = Dijkstra(grid, start, goal, **options)
    elif kind is SolverKind.GREEDY:
        solver = Greedy(grid, start, goal, **options)
    elif kind is SolverKind.ASTAR:
        solver = AStar(grid, start, goal, **options)
    else:
        raise UnknownAlgorithm("solver", str(kind), [k.value for k in SolverKind])

    logger.info("Solving with %s from %s to %s", kind, solver.start, solver.goal)
    return solver
