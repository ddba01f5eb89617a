import pygame

from maze_walker.config import (
    CELL_WALL_WIDTH, COLOR_BACKGROUND, COLOR_END, COLOR_EXPLORED, COLOR_HIGHLIGHT_BRIGHT,
    COLOR_HIGHLIGHT_DARK, COLOR_HIGHLIGHT_MEDIUM, COLOR_START, COLOR_WALL, Config,
)
from maze_walker.core.grid import Grid


class Renderer:
    """
    Draws the grid and pulls steps from a generator and then a solver.
    All algorithm state lives in the step sequences; the renderer only reads
    the grid between steps.
    """
    FPS = 60
    HUD_COLOR = (255, 255, 255)

    def __init__(self, grid: Grid, config: Config, generator=None, solver=None):
        self.grid = grid
        self.config = config
        self.generator = generator
        self.solver = solver
        self.cell_size = config.cell_size
        self.screen_width = grid.width * self.cell_size
        self.screen_height = grid.height * self.cell_size

        self.focus = None
        self.status = ""
        self.pending = 0.0
        self.fps_samples = []

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Walker - {self.grid.width}x{self.grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

    def active_sequence(self):
        if self.generator is not None and not self.generator.finished:
            return self.generator
        if self.solver is not None and not self.solver.finished:
            return self.solver
        return None

    def advance(self, steps: int) -> int:
        """Pulls up to `steps` steps, moving on to the solver once generation ends."""
        taken = 0
        while taken < steps:
            sequence = self.active_sequence()
            if sequence is None:
                break
            try:
                step = next(sequence)
            except StopIteration:
                continue
            self.focus = step.cell
            self.status = step.message
            taken += 1
        return taken

    def cell_color(self, x: int, y: int, cell: int):
        if (x, y) == self.focus and self.active_sequence() is not None:
            return COLOR_HIGHLIGHT_BRIGHT
        if self.solver is not None:
            if (x, y) == self.solver.start:
                return COLOR_START
            if (x, y) == self.solver.goal:
                return COLOR_END
        if cell & Grid.PATH:
            return COLOR_HIGHLIGHT_MEDIUM
        if cell & Grid.FRONTIER:
            return COLOR_HIGHLIGHT_DARK
        if cell & Grid.SOLVER_VISITED:
            return COLOR_EXPLORED
        if cell & Grid.VISITED and self.generator is not None and not self.generator.finished:
            return COLOR_EXPLORED
        return None

    def draw_grid(self, surface=None):
        surface = surface if surface is not None else self.surface
        surface.fill(COLOR_BACKGROUND)
        size = self.cell_size
        cells = self.grid.snapshot()

        # 1. Cell backgrounds
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                color = self.cell_color(x, y, cells[y * self.grid.width + x])
                if color is not None:
                    pygame.draw.rect(surface, color, (x * size, y * size, size, size))

        # 2. Walls, each shared wall drawn once from its west/north cell
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                cell = cells[y * self.grid.width + x]
                px, py = x * size, y * size
                if cell & Grid.SOUTH:
                    pygame.draw.line(surface, COLOR_WALL, (px, py + size), (px + size, py + size), CELL_WALL_WIDTH)
                if cell & Grid.EAST:
                    pygame.draw.line(surface, COLOR_WALL, (px + size, py), (px + size, py + size), CELL_WALL_WIDTH)
                if y == 0 and (cell & Grid.NORTH):
                    pygame.draw.line(surface, COLOR_WALL, (px, py), (px + size, py), CELL_WALL_WIDTH)
                if x == 0 and (cell & Grid.WEST):
                    pygame.draw.line(surface, COLOR_WALL, (px, py), (px, py + size), CELL_WALL_WIDTH)

    def draw_hud(self):
        if self.font is None:
            return
        lbl = self.font.render(self.status, True, self.HUD_COLOR)
        self.surface.blit(lbl, (10, 10))

    def run_loop(self):
        while self.running:
            self.handle_input()

            # Spread `ups` steps over the frames of one second
            self.pending += self.config.ups / self.FPS
            steps = int(self.pending)
            self.pending -= steps
            self.advance(steps)

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            self.clock.tick(self.FPS)
            self.fps_samples.append(self.clock.get_fps())

        if self.config.print_fps and self.fps_samples:
            print(f"Average FPS: {sum(self.fps_samples) / len(self.fps_samples):.1f}")
        pygame.quit()
