import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

try:
    import pygame
except ImportError:
    pygame = None

from maze_walker.config import (
    COLOR_BACKGROUND, COLOR_END, COLOR_HIGHLIGHT_MEDIUM, COLOR_START, Config,
)
from maze_walker.core.grid import Grid
from maze_walker.engine import start_generation, start_solving


@unittest.skipIf(pygame is None, "pygame not installed")
class TestRenderer(unittest.TestCase):
    def make(self, w=6, h=4, size=10):
        from maze_walker.viz.renderer import Renderer

        config = Config(width=w, height=h, cell_size=size, ups=1000, print_fps=False)
        grid = Grid(w, h)
        gen = start_generation("dfs", grid, seed=42)
        solver = start_solving("bfs", grid)
        return Renderer(grid, config, generator=gen, solver=solver)

    def pixel(self, surface, x, y):
        return tuple(surface.get_at((x, y)))[:3]

    def test_advance_runs_both_sequences(self):
        renderer = self.make()
        self.assertIs(renderer.active_sequence(), renderer.generator)
        renderer.advance(10000)
        self.assertTrue(renderer.generator.finished)
        self.assertTrue(renderer.solver.finished)
        self.assertIsNone(renderer.active_sequence())
        self.assertTrue(renderer.solver.outcome)
        self.assertEqual(renderer.advance(5), 0)

    def test_draw_endpoints(self):
        renderer = self.make()
        renderer.advance(10000)
        surface = pygame.Surface((renderer.screen_width, renderer.screen_height))
        renderer.draw_grid(surface)

        self.assertEqual(self.pixel(surface, 5, 5), COLOR_START)
        self.assertEqual(self.pixel(surface, 55, 35), COLOR_END)

    def test_untouched_cell_is_background(self):
        renderer = self.make()
        renderer.generator = None
        renderer.solver = None
        surface = pygame.Surface((renderer.screen_width, renderer.screen_height))
        renderer.draw_grid(surface)
        self.assertEqual(self.pixel(surface, 25, 15), COLOR_BACKGROUND)

    def test_draw_route_while_solving(self):
        renderer = self.make()
        renderer.generator.run_all()
        while len(renderer.solver.current_path()) < 3:
            renderer.advance(1)
        self.assertFalse(renderer.solver.finished)

        surface = pygame.Surface((renderer.screen_width, renderer.screen_height))
        renderer.draw_grid(surface)
        x, y = renderer.solver.current_path()[1]
        self.assertEqual(self.pixel(surface, x * 10 + 5, y * 10 + 5), COLOR_HIGHLIGHT_MEDIUM)


if __name__ == '__main__':
    unittest.main()
