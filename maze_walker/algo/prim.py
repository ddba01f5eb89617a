from typing import List, Optional, Set

from maze_walker.algo.base import Generator
from maze_walker.core.grid import Cell
from maze_walker.core.steps import Step


class PrimsAlgorithm(Generator):
    name = "prim"

    def __init__(self, grid, random=None):
        super().__init__(grid, random)
        # Set for O(1) membership, list for O(1) random pick + swap-remove
        self.frontier_set: Set[Cell] = set()
        self.frontier_list: List[Cell] = []
        self.started = False

    def _add_frontier(self, cx: int, cy: int):
        for nx, ny, _ in self.grid.get_neighbors(cx, cy):
            if not self.grid.is_visited(nx, ny) and (nx, ny) not in self.frontier_set:
                self.frontier_set.add((nx, ny))
                self.frontier_list.append((nx, ny))

    def _advance(self) -> Optional[Step]:
        if not self.started:
            # Start at (0,0) for consistency with the other walkers
            self.started = True
            start = self.visit((0, 0))
            self._add_frontier(*start)
            return self._step(cell=start, visited=(start,), frontier=len(self.frontier_list),
                              message="Start")

        if not self.frontier_list:
            return None

        # Pick random cell from frontier, swap remove
        idx = self.random.next_in_range(0, len(self.frontier_list))
        cx, cy = self.frontier_list[idx]
        self.frontier_list[idx] = self.frontier_list[-1]
        self.frontier_list.pop()
        self.frontier_set.remove((cx, cy))

        # A frontier cell always touches the tree, connect it to one random tree neighbor
        in_tree = [(nx, ny, dir_bit) for nx, ny, dir_bit in self.grid.get_neighbors(cx, cy)
                   if self.grid.is_visited(nx, ny)]
        _, _, dir_bit = self.random.choice(in_tree)

        wall = self.carve((cx, cy), dir_bit)
        cell = self.visit((cx, cy))
        self._add_frontier(cx, cy)

        return self._step(cell=cell, removed=(wall,), visited=(cell,), frontier=len(self.frontier_list),
                          message=f"Frontier: {len(self.frontier_list)}")
