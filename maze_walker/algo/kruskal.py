import logging
from typing import List, Optional, Tuple

from maze_walker.algo.base import Generator
from maze_walker.core.disjoint_set import DisjointSet
from maze_walker.core.grid import Cell, Grid
from maze_walker.core.steps import Step

logger = logging.getLogger(__name__)


class RandomizedKruskal(Generator):
    """
    Shuffles every internal wall and removes it when the two cells are still
    in different sets.

    Late in a large grid nearly every remaining edge is rejected, so the run
    spends most of its steps skipping.

    Not part of its contract: repeating the same steps for a given seed (the
    current code does, callers must not rely on it), and checking the cell
    size the caller draws with (the CLI only warns about odd sizes).
    """
    name = "kruskal"

    def __init__(self, grid, random=None):
        super().__init__(grid, random)
        # (cell, direction) pairs, only EAST/SOUTH so each wall appears once
        self.edges: List[Tuple[Cell, int]] = []
        self.cursor = 0
        self.sets = DisjointSet(grid.width * grid.height)
        self.unions = 0

    def _begin(self):
        super()._begin()
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                if x < self.grid.width - 1:
                    self.edges.append(((x, y), Grid.EAST))
                if y < self.grid.height - 1:
                    self.edges.append(((x, y), Grid.SOUTH))
        self.random.shuffle(self.edges)

    def _advance(self) -> Optional[Step]:
        target = self.grid.width * self.grid.height - 1
        if self.unions >= target:
            return None
        if self.cursor >= len(self.edges):
            logger.warning("kruskal: edge list exhausted with %d separate regions", self.sets.sets)
            return None

        (x, y), dir_bit = self.edges[self.cursor]
        self.cursor += 1
        nx, ny = x + Grid.DX[dir_bit], y + Grid.DY[dir_bit]

        a = self.grid.get_index(x, y)
        b = self.grid.get_index(nx, ny)
        remaining = len(self.edges) - self.cursor

        if not self.sets.union(a, b):
            return self._step(cell=(x, y), frontier=remaining,
                              message=f"Skipping... Sets: {self.sets.sets}")

        self.unions += 1
        wall = self.carve((x, y), dir_bit)
        visited = tuple(self.visit(c) for c in ((x, y), (nx, ny)))
        return self._step(cell=(nx, ny), removed=(wall,), visited=visited, frontier=remaining,
                          message=f"Joining... Sets: {self.sets.sets}")
