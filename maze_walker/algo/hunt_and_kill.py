from typing import Optional

from maze_walker.algo.base import Generator
from maze_walker.core.grid import Cell
from maze_walker.core.steps import Step


class HuntAndKill(Generator):
    """
    Random walk without a stack. When the walk is boxed in, scan row-major for
    the first unvisited cell touching the tree, attach it, and walk on from it.
    """
    name = "hunt-and-kill"

    def __init__(self, grid, random=None):
        super().__init__(grid, random)
        self.current: Optional[Cell] = None
        self.started = False
        # Rows above this one are fully visited and never rescanned
        self.scan_row = 0

    def _advance(self) -> Optional[Step]:
        if not self.started:
            self.started = True
            self.current = self.visit((0, 0))
            return self._step(cell=self.current, visited=(self.current,), message="Start")

        if self.current is not None:
            step = self._walk()
            if step is not None:
                return step
            self.current = None
        return self._hunt()

    def _walk(self) -> Optional[Step]:
        cx, cy = self.current
        neighbors = [(nx, ny, dir_bit) for nx, ny, dir_bit in self.grid.get_neighbors(cx, cy)
                     if not self.grid.is_visited(nx, ny)]
        if not neighbors:
            return None

        nx, ny, dir_bit = self.random.choice(neighbors)
        wall = self.carve((cx, cy), dir_bit)
        self.current = self.visit((nx, ny))
        return self._step(cell=self.current, removed=(wall,), visited=(self.current,), message="Walking")

    def _hunt(self) -> Optional[Step]:
        grid = self.grid
        for y in range(self.scan_row, grid.height):
            row_done = True
            for x in range(grid.width):
                if grid.is_visited(x, y):
                    continue
                row_done = False

                in_tree = [(nx, ny, dir_bit) for nx, ny, dir_bit in grid.get_neighbors(x, y)
                           if grid.is_visited(nx, ny)]
                if not in_tree:
                    continue

                _, _, dir_bit = self.random.choice(in_tree)
                wall = self.carve((x, y), dir_bit)
                self.current = self.visit((x, y))
                return self._step(cell=self.current, removed=(wall,), visited=(self.current,),
                                  message=f"Hunting... Row: {y}")

            if row_done and y == self.scan_row:
                self.scan_row += 1
        return None
