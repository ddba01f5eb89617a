from typing import List, Optional

from maze_walker.algo.base import Generator
from maze_walker.core.grid import Cell
from maze_walker.core.steps import Step


class RecursiveBacktracker(Generator):
    name = "dfs"

    def __init__(self, grid, random=None):
        super().__init__(grid, random)
        # Stack of (x, y); empty until the first step visits (0,0)
        self.stack: List[Cell] = []
        self.started = False

    def _advance(self) -> Optional[Step]:
        if not self.started:
            self.started = True
            start = self.visit((0, 0))
            self.stack.append(start)
            return self._step(cell=start, visited=(start,), frontier=1, message="Start")

        if not self.stack:
            return None

        cx, cy = self.stack[-1]

        # Find unvisited neighbors
        neighbors = [(nx, ny, dir_bit) for nx, ny, dir_bit in self.grid.get_neighbors(cx, cy)
                     if not self.grid.is_visited(nx, ny)]

        if neighbors:
            self.random.shuffle(neighbors)
            nx, ny, dir_bit = neighbors[0]

            wall = self.carve((cx, cy), dir_bit)
            nxt = self.visit((nx, ny))
            self.stack.append(nxt)
            return self._step(cell=nxt, removed=(wall,), visited=(nxt,),
                              frontier=len(self.stack), message=f"Carving... Stack: {len(self.stack)}")

        # Backtrack
        self.stack.pop()
        current = self.stack[-1] if self.stack else None
        return self._step(cell=current, frontier=len(self.stack),
                          message=f"Backtracking... Stack: {len(self.stack)}")
