import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from maze_walker.core.grid import Cell, Grid, Wall

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """One observable unit of work from a generator or solver."""
    index: int
    cell: Optional[Cell] = None
    removed: Tuple[Wall, ...] = ()
    visited: Tuple[Cell, ...] = ()
    frontier: int = 0
    message: str = ""
    # Solvers: tentative route from the start to `cell`
    path: Tuple[Cell, ...] = ()


class StepSequence:
    """
    Pull-based, finite, non-restartable iterator over algorithm steps.

    Subclasses keep all of their state (stacks, queues, sets) as plain
    attributes and compute exactly one step per `_advance()` call, returning
    None once there is nothing left to do. The grid is claimed on the first
    pull and released when the sequence runs out or is closed.

    Cancelling is just not pulling any more: the first pull of a new sequence
    on the same grid finishes the abandoned one. The exception is a
    half-carved grid, which a read-only sequence (a solver) may not take
    over; it gets GridBusy until the generator finishes or is closed.
    """
    # Carves walls, as opposed to only touching transient solver state
    writes_walls = False

    def __init__(self, grid: Grid):
        self.grid = grid
        self.step_count = 0
        self.finished = False

    def __iter__(self):
        return self

    def __next__(self) -> Step:
        if self.finished:
            raise StopIteration
        if self.step_count == 0:
            self._take_over()
        self.grid.claim(self)
        if self.step_count == 0:
            self._begin()
        step = self._advance()
        if step is None:
            self._finish()
            raise StopIteration
        self.step_count += 1
        return step

    def __repr__(self):
        state = "finished" if self.finished else f"step {self.step_count}"
        return f"<{type(self).__name__} on {self.grid!r}, {state}>"

    def supersedes(self, other: "StepSequence") -> bool:
        return self.writes_walls or not other.writes_walls

    def _take_over(self):
        owner = self.grid.owner
        if owner is None or owner is self or not self.supersedes(owner):
            return
        logger.debug("%r abandoned, %r takes over", owner, self)
        owner.close()

    def _begin(self):
        """Hook run once, right after the grid is claimed."""

    def _advance(self) -> Optional[Step]:
        raise NotImplementedError

    def _finish(self):
        self.finished = True
        self.grid.release(self)

    def _step(self, **fields) -> Step:
        return Step(index=self.step_count, **fields)

    def close(self):
        """Stops the sequence early and hands the grid back."""
        self._finish()

    def run_all(self):
        """Helper to run the sequence to completion."""
        for _ in self:
            pass
        return self
