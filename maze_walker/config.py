import argparse
from dataclasses import dataclass
from typing import List, Optional, Tuple

from maze_walker.engine import GeneratorKind, SolverKind

COLOR_BACKGROUND = (7, 16, 19)
COLOR_START = (149, 198, 35)
COLOR_END = (229, 88, 18)

COLOR_WALL = (239, 231, 218)

COLOR_EXPLORED = (14, 71, 73)
COLOR_HIGHLIGHT_BRIGHT = (163, 187, 173)
COLOR_HIGHLIGHT_MEDIUM = (53, 114, 102)
COLOR_HIGHLIGHT_DARK = (57, 104, 106)

CELL_WALL_WIDTH = 1


def parse_coord(text: str) -> Tuple[int, int]:
    """'x,y' -> (x, y)"""
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a coordinate like '3,4', got '{text}'") from None
    return (x, y)


def parse_generator(text: str) -> GeneratorKind:
    try:
        return GeneratorKind.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def parse_solver(text: str) -> SolverKind:
    try:
        return SolverKind.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


@dataclass
class Config:
    generator: GeneratorKind = GeneratorKind.DFS
    solver: SolverKind = SolverKind.ASTAR
    ups: int = 60
    cell_size: int = 40
    width: int = 32
    height: int = 18
    start: Optional[Tuple[int, int]] = None
    end: Optional[Tuple[int, int]] = None
    interactive_gen: bool = True
    interactive_solve: bool = True
    print_fps: bool = True
    seed: Optional[int] = None
    verbose: bool = False

    @property
    def window_size(self) -> Tuple[int, int]:
        return (self.cell_size * self.width, self.cell_size * self.height)

    @property
    def start_cell(self) -> Tuple[int, int]:
        return self.start if self.start is not None else (0, 0)

    @property
    def end_cell(self) -> Tuple[int, int]:
        return self.end if self.end is not None else (self.width - 1, self.height - 1)

    @classmethod
    def from_args(cls, argv: Optional[List[str]] = None) -> "Config":
        args = build_parser().parse_args(argv)
        return cls(
            generator=args.generator,
            solver=args.solver,
            ups=args.ups,
            cell_size=args.cell_size,
            width=args.width,
            height=args.height,
            start=args.start,
            end=args.end,
            interactive_gen=not args.no_interactive_gen,
            interactive_solve=not args.no_interactive_solve,
            print_fps=not args.no_print_fps,
            seed=args.seed,
            verbose=args.verbose,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="maze-walker",
                                     description="Maze Walker: step-by-step maze generation and solving")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--generator", "-g", type=parse_generator, default=GeneratorKind.DFS,
                        metavar="{" + ",".join(k.value for k in GeneratorKind) + "}",
                        help="The algorithm to use when generating the maze")
    parser.add_argument("--solver", "-s", type=parse_solver, default=SolverKind.ASTAR,
                        metavar="{" + ",".join(k.value for k in SolverKind) + "}",
                        help="The algorithm to use when solving the maze")
    parser.add_argument("--ups", type=int, default=60, help="Updates (algorithm steps) per second")
    parser.add_argument("--cell-size", type=int, default=40, help="The size of each cell in pixels")
    parser.add_argument("--width", "-W", type=int, default=32, help="The width of the maze in cells")
    parser.add_argument("--height", "-H", type=int, default=18, help="The height of the maze in cells")
    parser.add_argument("--start", type=parse_coord, default=None, help="The starting cell, as x,y")
    parser.add_argument("--end", type=parse_coord, default=None, help="The goal cell, as x,y")
    parser.add_argument("--no-interactive-gen", action="store_true",
                        help="Generate the maze without any visualization")
    parser.add_argument("--no-interactive-solve", action="store_true",
                        help="Solve the maze without any visualization")
    parser.add_argument("--no-print-fps", action="store_true", help="Do not print average FPS")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    return parser
