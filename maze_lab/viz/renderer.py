import logging
from typing import List

import pygame

from maze_lab.run.driver import Frame, RunDriver
from maze_lab.viz.display import CellTag
from maze_lab.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)


class Renderer:
    """
    pygame window that drives a RunDriver and paints its frames side by side.
    Ticks are paced by delay_ms; once every engine is done the reveal frames stay up
    until the window is closed.
    """
    COLOR_BG = (10, 10, 10)
    COLOR_TEXT = (255, 255, 255)
    TAG_COLORS = {
        CellTag.WALL: (38, 38, 38),
        CellTag.OPEN: (238, 238, 238),
        CellTag.START: (0, 170, 0),
        CellTag.END: (200, 0, 0),
        CellTag.FINAL_PATH: (0, 255, 0),
    }
    # Per-engine (visited, solved path)
    ENGINE_COLORS = (
        ((0, 135, 255), (0, 0, 255)),    # Blue
        ((255, 135, 0), (255, 95, 0)),   # Orange
    )

    def __init__(self, driver: RunDriver, delay_ms: int = 100, width=1280, height=720, record=False,
                 output_file=None):
        self.driver = driver
        self.delay_ms = delay_ms
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1
        self.gap_cells = 2

        self.recorder = VideoRecorder(active=record, output_file=output_file)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.frames: List[Frame] = driver.frames()
        self.revealed = False

    @property
    def span_cells(self) -> int:
        count = len(self.driver.slots)
        return self.driver.grid.size * count + self.gap_cells * (count - 1)

    def fit_to_screen(self):
        """Auto-adjust zoom and pan so every maze fits on screen with padding."""
        padding = 40
        hud = 60
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2) - hud

        self.cell_size = min(available_w / self.span_cells, available_h / self.driver.grid.size)

        self.offset_x = (self.screen_width - self.span_cells * self.cell_size) / 2
        self.offset_y = hud + (self.screen_height - hud - self.driver.grid.size * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        names = " vs ".join(slot.name for slot in self.driver.slots)
        pygame.display.set_caption(f"Maze Lab - {names}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(100.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def color_for(self, tag: int, slot: int):
        if tag == CellTag.VISITED:
            return self.ENGINE_COLORS[slot % 2][0]
        if tag == CellTag.SOLVED_PATH:
            return self.ENGINE_COLORS[slot % 2][1]
        return self.TAG_COLORS[CellTag(tag)]

    def draw_frames(self):
        self.surface.fill(self.COLOR_BG)
        size = int(self.cell_size) + 1
        grid_size = self.driver.grid.size

        for i, frame in enumerate(self.frames):
            origin = i * (grid_size + self.gap_cells)
            for r in range(grid_size):
                for c in range(grid_size):
                    px = int((origin + c) * self.cell_size + self.offset_x)
                    py = int(r * self.cell_size + self.offset_y)
                    pygame.draw.rect(self.surface, self.color_for(int(frame.display[r, c]), i), (px, py, size, size))

    def draw_hud(self):
        for i, frame in enumerate(self.frames):
            if frame.path_length is None:
                path = "..."
            else:
                path = str(frame.path_length) if frame.path_length else "none"
            text = f"{frame.name}  Steps: {frame.steps}  Path: {path}"
            color = self.ENGINE_COLORS[i % 2][0]
            lbl = self.font.render(text, True, color)
            self.surface.blit(lbl, (10, 10 + i * 20))

        status = "REC" if self.recorder.active else ""
        lbl = self.font.render(f"FPS: {int(self.clock.get_fps())} {status}", True, self.COLOR_TEXT)
        self.surface.blit(lbl, (self.screen_width - 120, 10))

    def run_loop(self):
        last_tick = 0

        try:
            while self.running:
                self.handle_input()

                now = pygame.time.get_ticks()
                if not self.driver.finished and now - last_tick >= self.delay_ms:
                    self.driver.tick()
                    self.frames = self.driver.frames()
                    last_tick = now
                elif self.driver.finished and not self.revealed:
                    self.frames = self.driver.final_frames()
                    self.revealed = True
                    logger.info("All engines finished")

                self.draw_frames()
                self.draw_hud()
                pygame.display.flip()

                if self.recorder.active:
                    self.recorder.capture_frame(self.surface)

                self.clock.tick(60)
        finally:
            # Flush the video even when the loop dies or Ctrl+C lands mid-frame
            self.recorder.stop()
            pygame.quit()
