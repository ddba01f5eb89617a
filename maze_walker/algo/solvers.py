import heapq
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional, Set, Tuple

from maze_walker.core.grid import Cell, Grid
from maze_walker.core.steps import Step, StepSequence

logger = logging.getLogger(__name__)


class Path(tuple):
    """Cells from start to goal, both included."""

    @property
    def length(self) -> int:
        # Edges walked, so start == goal gives 0
        return max(len(self) - 1, 0)


@dataclass(frozen=True)
class NoPathFound:
    """Returned instead of a Path when the frontier runs dry before the goal."""
    start: Cell
    goal: Cell
    expanded: int

    def __bool__(self):
        return False


def manhattan(a: Cell, b: Cell) -> float:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean(a: Cell, b: Cell) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


HEURISTICS = {"manhattan": manhattan, "euclidean": euclidean}


class Solver(StepSequence):
    """
    Searches a finished grid from `start` to `goal`, expanding one cell per step.

    Only the solver flags and the transient arrays on the grid are written;
    walls are never touched. Parents are recorded on first discovery, as
    direction bits pointing back towards the start; priority searches also
    re-parent a queued cell when a strictly cheaper route turns up.

    After each expansion the route from the start to the expanded cell is
    flagged PATH, so a renderer can show the search's current guess.
    """
    name = "solver"

    def __init__(self, grid: Grid, start: Optional[Cell] = None, goal: Optional[Cell] = None):
        super().__init__(grid)
        self.start = tuple(start) if start is not None else (0, 0)
        self.goal = tuple(goal) if goal is not None else (grid.width - 1, grid.height - 1)
        # Raises IndexError for cells outside the grid
        grid.get_index(*self.start)
        grid.get_index(*self.goal)

        self.path: List[Cell] = []
        self.outcome = None
        self.visited_count = 0
        # Last expanded cell and the route to it currently flagged PATH on the grid
        self.current: Optional[Cell] = None
        self.live_path: List[Cell] = []

    # Frontier discipline, provided by each variant
    def _push(self, cell: Cell, cost: int):
        raise NotImplementedError

    def _pop(self) -> Optional[Cell]:
        raise NotImplementedError

    def _frontier_size(self) -> int:
        raise NotImplementedError

    def heuristic(self, a: Cell, b: Cell) -> float:
        return 0

    def edge_cost(self, a: Cell, b: Cell) -> int:
        return 1

    # Only priority searches re-queue a cell whose cost dropped
    updates_priority = False

    def _begin(self):
        grid = self.grid
        grid.reset_transient()
        logger.debug("%s: solving %r from %s to %s", self.name, grid, self.start, self.goal)

        idx = grid.get_index(*self.start)
        grid.distance[idx] = 0
        grid.heuristic[idx] = self.heuristic(self.start, self.goal)
        grid.cells[idx] |= Grid.FRONTIER
        self._push(self.start, 0)

    def _advance(self) -> Optional[Step]:
        grid = self.grid
        current = self._pop()
        if current is None:
            self.highlight_path([])
            self.outcome = NoPathFound(self.start, self.goal, self.visited_count)
            logger.info("%s: no path from %s to %s (%d cells expanded)",
                        self.name, self.start, self.goal, self.visited_count)
            return None

        idx = grid.get_index(*current)
        grid.cells[idx] = (grid.cells[idx] & ~Grid.FRONTIER) | Grid.SOLVER_VISITED
        self.visited_count += 1
        self.current = current

        if current == self.goal:
            self.reconstruct_path()
            step = self._step(cell=current, visited=(current,), frontier=self._frontier_size(),
                              path=tuple(self.path), message=f"Solved: {self.outcome.length}")
            self._finish()
            return step

        cx, cy = current
        for neighbor in grid.get_open_neighbors(cx, cy):
            self._relax(current, idx, neighbor)

        route = self.current_path()
        self.highlight_path(route)
        return self._step(cell=current, visited=(current,), frontier=self._frontier_size(),
                          path=tuple(route), message=f"Visited: {self.visited_count}")

    def _relax(self, current: Cell, current_idx: int, neighbor: Cell):
        grid = self.grid
        n_idx = grid.get_index(*neighbor)
        if grid.cells[n_idx] & Grid.SOLVER_VISITED:
            return

        new_cost = grid.distance[current_idx] + self.edge_cost(current, neighbor)
        old_cost = grid.distance[n_idx]
        if old_cost != -1 and not (self.updates_priority and new_cost < old_cost):
            return

        grid.distance[n_idx] = new_cost
        grid.heuristic[n_idx] = self.heuristic(neighbor, self.goal)
        # Store Parent Direction (neighbor -> current)
        grid.parents[n_idx] = grid.direction_between(neighbor, current)
        grid.cells[n_idx] |= Grid.FRONTIER
        self._push(neighbor, new_cost)

    def current_path(self, cell: Optional[Cell] = None) -> List[Cell]:
        """
        Start -> `cell` by following parent links; defaults to the last expanded
        cell. Empty before the first expansion or for an undiscovered cell.
        """
        grid = self.grid
        curr = cell if cell is not None else self.current
        if curr is None or grid.distance[grid.get_index(*curr)] == -1:
            return []
        cells = [curr]
        while curr != self.start:
            p_dir = grid.parents[grid.get_index(*curr)]
            curr = (curr[0] + Grid.DX[p_dir], curr[1] + Grid.DY[p_dir])
            cells.append(curr)
        cells.reverse()
        return cells

    def highlight_path(self, cells: List[Cell]):
        """Moves the PATH flag from the previously shown route onto `cells`."""
        grid = self.grid
        for cell in self.live_path:
            grid.cells[grid.get_index(*cell)] &= ~Grid.PATH
        for cell in cells:
            grid.cells[grid.get_index(*cell)] |= Grid.PATH
        self.live_path = cells

    def reconstruct_path(self):
        cells = self.current_path(self.goal)
        self.highlight_path(cells)

        self.path = cells
        self.outcome = Path(cells)
        logger.debug("%s: path of length %d after expanding %d cells",
                     self.name, self.outcome.length, self.visited_count)


class DepthFirst(Solver):
    name = "dfs"

    def __init__(self, grid, start=None, goal=None):
        super().__init__(grid, start, goal)
        self.stack: List[Cell] = []

    def _push(self, cell, cost):
        self.stack.append(cell)

    def _pop(self):
        return self.stack.pop() if self.stack else None

    def _frontier_size(self):
        return len(self.stack)


class BFS(Solver):
    name = "bfs"

    def __init__(self, grid, start=None, goal=None):
        super().__init__(grid, start, goal)
        self.queue: Deque[Cell] = deque()

    def _push(self, cell, cost):
        self.queue.append(cell)

    def _pop(self):
        return self.queue.popleft() if self.queue else None

    def _frontier_size(self):
        return len(self.queue)


class AStar(Solver):
    """Priority by accumulated cost plus the Manhattan estimate to the goal."""
    name = "astar"
    updates_priority = True

    def __init__(self, grid, start=None, goal=None):
        super().__init__(grid, start, goal)
        # Priority Queue: (priority, h, counter, x, y). Stale entries are skipped on pop.
        self.open_set: List[Tuple[float, float, int, int, int]] = []
        self.counter = 0
        # Cells with at least one live heap entry
        self.queued: Set[Cell] = set()

    def heuristic(self, a, b):
        return manhattan(a, b)

    def priority(self, cost: int, h: float) -> float:
        return cost + h

    def _push(self, cell, cost):
        h = self.grid.heuristic[self.grid.get_index(*cell)]
        self.counter += 1
        heapq.heappush(self.open_set, (self.priority(cost, h), h, self.counter, cell[0], cell[1]))
        self.queued.add(cell)

    def _pop(self):
        while self.open_set:
            _, _, _, x, y = heapq.heappop(self.open_set)
            if not (self.grid.cells[self.grid.get_index(x, y)] & Grid.SOLVER_VISITED):
                self.queued.discard((x, y))
                return (x, y)
        return None

    def _frontier_size(self):
        return len(self.queued)


class Dijkstra(AStar):
    """ Dijkstra is just A* with h(n) = 0. """
    name = "dijkstra"

    def heuristic(self, a, b):
        return 0


class Greedy(AStar):
    """Best-first on the heuristic alone. Fast, but the path is not guaranteed shortest."""
    name = "greedy"
    updates_priority = False

    def __init__(self, grid, start=None, goal=None, heuristic: str = "manhattan"):
        super().__init__(grid, start, goal)
        if heuristic not in HEURISTICS:
            raise ValueError(f"Unknown heuristic '{heuristic}' (choose from: {', '.join(HEURISTICS)})")
        self.estimate: Callable[[Cell, Cell], float] = HEURISTICS[heuristic]

    def heuristic(self, a, b):
        return self.estimate(a, b)

    def priority(self, cost, h):
        return h
