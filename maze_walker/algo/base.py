import logging
from typing import List, Optional

from maze_walker.core.grid import Cell, Grid, Wall
from maze_walker.core.random_source import RandomSource
from maze_walker.core.steps import Step, StepSequence

logger = logging.getLogger(__name__)


class Generator(StepSequence):
    """
    Carves a spanning tree into a fresh Grid, one step per pull.
    The actual grid modifications happen in-place on self.grid.
    """
    name = "generator"
    writes_walls = True

    def __init__(self, grid: Grid, random: Optional[RandomSource] = None):
        super().__init__(grid)
        self.random = random if random is not None else RandomSource()
        # Ordered log of every wall removed so far
        self.removed_walls: List[Wall] = []

    def _begin(self):
        logger.debug("%s: generating %dx%d maze (seed=%d)",
                     self.name, self.grid.width, self.grid.height, self.random.seed)

    def _finish(self):
        if not self.finished:
            logger.debug("%s: done after %d steps, %d walls removed",
                         self.name, self.step_count, len(self.removed_walls))
        super()._finish()

    def carve(self, cell: Cell, dir_bit: int) -> Wall:
        x, y = cell
        self.grid.carve_path(x, y, dir_bit)
        wall = (cell, (x + Grid.DX[dir_bit], y + Grid.DY[dir_bit]))
        self.removed_walls.append(wall)
        return wall

    def visit(self, cell: Cell) -> Cell:
        self.grid.set_visited(*cell)
        return cell

    def _advance(self) -> Optional[Step]:
        raise NotImplementedError
