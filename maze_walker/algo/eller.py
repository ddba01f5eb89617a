from typing import Dict, List, Optional

from maze_walker.algo.base import Generator
from maze_walker.core.grid import Grid
from maze_walker.core.steps import Step

JOIN = "join"
CARRY = "carry"


class EllersAlgorithm(Generator):
    """
    Row-by-row generation that only ever tracks set ids for the current row.

    Per row:
    1. Walk left to right, randomly joining neighbours that sit in different
       sets (the last row joins every such pair).
    2. For every set, carry at least one randomly chosen cell down into the
       next row.
    3. Cells of the next row that received no passage start a fresh set.

    One step is one cell during the join pass, or one set during the carry pass.
    """
    name = "eller"

    def __init__(self, grid, random=None, merge_chance: float = 0.5):
        super().__init__(grid, random)
        if not 0.0 <= merge_chance <= 1.0:
            raise ValueError(f"merge_chance must be within [0, 1], got {merge_chance}")
        self.merge_chance = merge_chance

        self.row = 0
        self.col = 0
        self.phase = JOIN
        self.sets: List[int] = list(range(grid.width))
        self.next_id = grid.width

        # Carry pass state
        self.groups: List[List[int]] = []
        self.next_sets: List[int] = []

    def _advance(self) -> Optional[Step]:
        if self.row >= self.grid.height:
            return None
        if self.phase == JOIN:
            return self._join()
        return self._carry()

    def _join(self) -> Step:
        width = self.grid.width
        last_row = self.row == self.grid.height - 1
        x, y = self.col, self.row

        cell = self.visit((x, y))
        removed = ()
        if x < width - 1 and self.sets[x] != self.sets[x + 1]:
            if last_row or self.random.chance(self.merge_chance):
                removed = (self.carve(cell, Grid.EAST),)
                old, new = self.sets[x + 1], self.sets[x]
                self.sets = [new if s == old else s for s in self.sets]

        self.col += 1
        if self.col >= width:
            if last_row:
                self.row += 1
            else:
                self._start_carry()

        return self._step(cell=cell, removed=removed, visited=(cell,), frontier=len(set(self.sets)),
                          message=f"Row {y}: joining")

    def _start_carry(self):
        members: Dict[int, List[int]] = {}
        for col, set_id in enumerate(self.sets):
            members.setdefault(set_id, []).append(col)
        self.groups = list(members.values())
        self.next_sets = [-1] * self.grid.width
        self.phase = CARRY

    def _carry(self) -> Step:
        y = self.row
        cols = self.groups.pop(0)
        set_id = self.sets[cols[0]]

        self.random.shuffle(cols)
        count = self.random.next_in_range(1, len(cols) + 1)
        removed = []
        for col in cols[:count]:
            removed.append(self.carve((col, y), Grid.SOUTH))
            self.next_sets[col] = set_id

        if not self.groups:
            # Unconnected cells of the next row start their own sets
            for col in range(self.grid.width):
                if self.next_sets[col] == -1:
                    self.next_sets[col] = self.next_id
                    self.next_id += 1
            self.sets = self.next_sets
            self.row += 1
            self.col = 0
            self.phase = JOIN

        return self._step(cell=(cols[0], y), removed=tuple(removed), frontier=len(self.groups),
                          message=f"Row {y}: carrying set {set_id} down")
