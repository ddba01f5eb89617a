import logging
import sys
from typing import List, Optional

from maze_walker.config import Config
from maze_walker.core.errors import MazeError
from maze_walker.core.stats import MazeInspector
from maze_walker.engine import GeneratorKind, new_grid, start_generation, start_solving

logger = logging.getLogger("maze_walker")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def run(config: Config) -> int:
    grid = new_grid(config.width, config.height)

    if config.generator is GeneratorKind.KRUSKAL and config.cell_size % 2:
        logger.warning(f"Kruskal is meant to be drawn with an even cell size, got {config.cell_size}")

    generator = start_generation(config.generator, grid, seed=config.seed)
    solver = start_solving(config.solver, grid, start=config.start_cell, goal=config.end_cell)

    if config.interactive_gen or config.interactive_solve:
        from maze_walker.viz.renderer import Renderer

        if not config.interactive_gen:
            logger.info("Headless generation...")
            generator.run_all()
        renderer = Renderer(grid, config, generator=generator if config.interactive_gen else None,
                            solver=solver if config.interactive_solve else None)
        renderer.init_window()
        renderer.run_loop()
        if generator.finished and not config.interactive_solve:
            solver.run_all()
    else:
        logger.info("Headless generation...")
        generator.run_all()
        logger.info("Headless solving...")
        solver.run_all()

    if generator.finished:
        stats = MazeInspector.calculate_stats(grid)
        logger.info(f"Stats: {stats}")
        if stats["components"] > 1:
            logger.warning(f"{config.generator} left {stats['components']} disconnected regions")

    if solver.outcome is None:
        logger.info("No solution (visualization closed early).")
    elif solver.outcome:
        print(f"Done. Path Length: {solver.outcome.length} (expanded {solver.visited_count} cells)")
    else:
        print(f"No path from {solver.start} to {solver.goal} (expanded {solver.visited_count} cells)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    config = Config.from_args(argv)
    setup_logging(config.verbose)
    logger.debug(f"Config: {config}")

    try:
        return run(config)
    except (MazeError, IndexError) as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
