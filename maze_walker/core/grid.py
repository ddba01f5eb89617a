import weakref
from array import array
from collections import deque
from typing import Iterator, List, Set, Tuple

from maze_walker.core.errors import GridBusy, InvalidDimensions, InvalidEdge

Cell = Tuple[int, int]
Wall = Tuple[Cell, Cell]


class Grid:
    # Bitmask Constants
    NORTH = 0b00000001
    EAST  = 0b00000010
    SOUTH = 0b00000100
    WEST  = 0b00001000

    # Flags
    VISITED        = 0b00010000 # In-tree marker, set by generators
    PATH           = 0b00100000
    SOLVER_VISITED = 0b01000000 # Expanded by a solver
    FRONTIER       = 0b10000000 # Queued by a solver, not yet expanded

    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST
    SOLVER_FLAGS = PATH | SOLVER_VISITED | FRONTIER

    # Direction Helpers
    DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

    __slots__ = ('width', 'height', 'cells', 'distance', 'heuristic', 'parents', '_owner')

    def __init__(self, width: int, height: int):
        for dim in (width, height):
            # bool is an int subclass, Grid(True, True) is still a mistake
            if isinstance(dim, bool) or not isinstance(dim, int) or dim < 1:
                raise InvalidDimensions(width, height)
        self.width = width
        self.height = height
        # 1 byte per cell: wall bits + flags
        self.cells = array('B', [self.ALL_WALLS] * (width * height))

        # Solver-only fields, see reset_transient()
        self.distance = array('i', [-1] * (width * height))
        self.heuristic = array('d', [0.0] * (width * height))
        # Direction bit pointing from a cell back to its parent, 0 = none
        self.parents = array('B', [0] * (width * height))

        self._owner = None

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def cell_at(self, index: int) -> Cell:
        return (index % self.width, index // self.width)

    # ------------------------------------------------------------------
    # Walls
    # ------------------------------------------------------------------

    def carve_path(self, x1: int, y1: int, dir_bit: int) -> bool:
        """
        Removes the wall between current cell (x,y) and the neighbor in 'dir_bit'.
        Also removes the OPPOSITE wall from the neighbor.
        Returns False (and changes nothing) when the neighbor is outside the grid.
        """
        x2 = x1 + self.DX[dir_bit]
        y2 = y1 + self.DY[dir_bit]

        if not (0 <= x2 < self.width and 0 <= y2 < self.height):
            return False # Cannot carve into void

        self.cells[y1 * self.width + x1] &= ~dir_bit
        self.cells[y2 * self.width + x2] &= ~self.OPPOSITE[dir_bit]
        return True

    def add_wall(self, x: int, y: int, dir_bit: int):
        self.cells[y * self.width + x] |= dir_bit

        # Handle neighbor (strict consistency)
        nx, ny = x + self.DX[dir_bit], y + self.DY[dir_bit]
        if 0 <= nx < self.width and 0 <= ny < self.height:
            self.cells[ny * self.width + nx] |= self.OPPOSITE[dir_bit]

    def has_wall(self, x: int, y: int, dir_bit: int) -> bool:
        return (self.cells[y * self.width + x] & dir_bit) != 0

    def direction_between(self, a: Cell, b: Cell) -> int:
        """Direction bit leading from a to b. Raises InvalidEdge unless they are adjacent."""
        if not (self.in_bounds(*a) and self.in_bounds(*b)):
            raise InvalidEdge(a, b)
        dx, dy = b[0] - a[0], b[1] - a[1]
        if (dx, dy) == (0, -1):
            return self.NORTH
        if (dx, dy) == (0, 1):
            return self.SOUTH
        if (dx, dy) == (1, 0):
            return self.EAST
        if (dx, dy) == (-1, 0):
            return self.WEST
        raise InvalidEdge(a, b)

    def remove_wall(self, a: Cell, b: Cell):
        self.carve_path(a[0], a[1], self.direction_between(a, b))

    def is_open(self, a: Cell, b: Cell) -> bool:
        return not self.has_wall(a[0], a[1], self.direction_between(a, b))

    def walls(self) -> Iterator[Wall]:
        """Yields every internal wall (present or removed) once, row-major, east before south."""
        for y in range(self.height):
            for x in range(self.width):
                if x < self.width - 1:
                    yield ((x, y), (x + 1, y))
                if y < self.height - 1:
                    yield ((x, y), (x, y + 1))

    def open_walls(self) -> Iterator[Wall]:
        for a, b in self.walls():
            if self.is_open(a, b):
                yield (a, b)

    # ------------------------------------------------------------------
    # Generation flag
    # ------------------------------------------------------------------

    def set_visited(self, x: int, y: int, visited: bool = True):
        idx = y * self.width + x
        if visited:
            self.cells[idx] |= self.VISITED
        else:
            self.cells[idx] &= ~self.VISITED

    def is_visited(self, x: int, y: int) -> bool:
        return (self.cells[y * self.width + x] & self.VISITED) != 0

    # ------------------------------------------------------------------
    # Topology queries
    # ------------------------------------------------------------------

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction_to_neighbor) for all valid grid neighbors.
        Does NOT check walls (that's for pathfinding).
        """
        # North
        if y > 0:
            yield (x, y - 1, self.NORTH)
        # South
        if y < self.height - 1:
            yield (x, y + 1, self.SOUTH)
        # East
        if x < self.width - 1:
            yield (x + 1, y, self.EAST)
        # West
        if x > 0:
            yield (x - 1, y, self.WEST)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """
        Yields (nx, ny) for neighbors that are NOT blocked by a wall.
        """
        val = self.cells[y * self.width + x]

        if not (val & self.NORTH) and y > 0:
            yield (x, y - 1)
        if not (val & self.SOUTH) and y < self.height - 1:
            yield (x, y + 1)
        if not (val & self.EAST) and x < self.width - 1:
            yield (x + 1, y)
        if not (val & self.WEST) and x > 0:
            yield (x - 1, y)

    def neighbors(self, cell: Cell) -> Set[Cell]:
        self.get_index(*cell)
        return {(nx, ny) for nx, ny, _ in self.get_neighbors(*cell)}

    def reachable_from(self, cell: Cell) -> Set[Cell]:
        """All cells connected to `cell` through removed walls (including itself)."""
        self.get_index(*cell)
        seen = {cell}
        queue = deque([cell])
        while queue:
            cx, cy = queue.popleft()
            for n in self.get_open_neighbors(cx, cy):
                if n not in seen:
                    seen.add(n)
                    queue.append(n)
        return seen

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def snapshot(self) -> bytes:
        """Read-only copy of the cell bytes for renderers."""
        return self.cells.tobytes()

    def reset_transient(self):
        """Clears solver-only state. Wall bits and the VISITED flag are untouched."""
        keep = 0xFF & ~self.SOLVER_FLAGS
        cells = self.cells
        for i in range(len(cells)):
            cells[i] &= keep
        n = self.width * self.height
        self.distance = array('i', [-1] * n)
        self.heuristic = array('d', [0.0] * n)
        self.parents = array('B', [0] * n)

    def clear(self):
        """Restores every wall and drops all flags so the grid can be generated again."""
        self.cells = array('B', [self.ALL_WALLS] * (self.width * self.height))
        self.reset_transient()

    # ------------------------------------------------------------------
    # Ownership (one advancing step sequence at a time)
    # ------------------------------------------------------------------

    @property
    def owner(self):
        owner = self._owner() if self._owner is not None else None
        if owner is not None and owner.finished:
            return None
        return owner

    def claim(self, sequence):
        owner = self.owner
        if owner is not None and owner is not sequence:
            raise GridBusy(f"{self!r} is being advanced by {owner!r}")
        self._owner = weakref.ref(sequence)

    def release(self, sequence):
        if self._owner is not None and self._owner() is sequence:
            self._owner = None

    def path_cells(self) -> List[Cell]:
        return [self.cell_at(i) for i, v in enumerate(self.cells) if v & self.PATH]

    def frontier_cells(self) -> List[Cell]:
        return [self.cell_at(i) for i, v in enumerate(self.cells) if v & self.FRONTIER]

    def expanded_cells(self) -> List[Cell]:
        return [self.cell_at(i) for i, v in enumerate(self.cells) if v & self.SOLVER_VISITED]
