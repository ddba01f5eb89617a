from typing import Any, Dict, List, Set

from maze_walker.core.grid import Cell, Grid


def popcount_walls(val: int) -> int:
    c = 0
    if val & Grid.NORTH: c += 1
    if val & Grid.EAST: c += 1
    if val & Grid.SOUTH: c += 1
    if val & Grid.WEST: c += 1
    return c


class MazeInspector:
    @staticmethod
    def count_passages(grid: Grid) -> int:
        """Number of removed internal walls, i.e. edges of the maze graph."""
        return sum(1 for _ in grid.open_walls())

    @staticmethod
    def components(grid: Grid) -> List[Set[Cell]]:
        seen: Set[Cell] = set()
        found = []
        for i in range(grid.width * grid.height):
            cell = grid.cell_at(i)
            if cell in seen:
                continue
            region = grid.reachable_from(cell)
            seen |= region
            found.append(region)
        return found

    @staticmethod
    def is_perfect(grid: Grid) -> bool:
        """
        Spanning tree check: every cell reachable from (0,0) and exactly
        width*height - 1 passages, which together rule out cycles.
        """
        total = grid.width * grid.height
        if MazeInspector.count_passages(grid) != total - 1:
            return False
        return len(grid.reachable_from((0, 0))) == total

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, Any]:
        dead_ends = 0
        intersections = 0 # 0, 1 walls
        corridors = 0 # 2 walls

        # Outer boundary walls count, so a corner corridor cell has 2 walls like any other
        for i in range(grid.width * grid.height):
            walls = popcount_walls(grid.cells[i])
            if walls == 3: dead_ends += 1
            elif walls == 2: corridors += 1
            elif walls <= 1: intersections += 1

        total = grid.width * grid.height
        return {
            "passages": MazeInspector.count_passages(grid),
            "components": len(MazeInspector.components(grid)),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
