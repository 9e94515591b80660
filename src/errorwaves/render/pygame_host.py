from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Sequence, Tuple

import pygame

from errorwaves.orchestrator.sketch import SketchState
from errorwaves.utils.logging import get_logger

from .canvas import Canvas, Color, Point
from .frame import render_frame

logger = get_logger(__name__)


class PygameCanvas(Canvas):
    """Canvas backed by a pygame Surface (window or off-screen)."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self._fonts: Dict[Tuple[int, bool], pygame.font.Font] = {}
        if not pygame.font.get_init():
            pygame.font.init()

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def _font(self, size: int, bold: bool) -> pygame.font.Font:
        key = (size, bold)
        if key not in self._fonts:
            font = pygame.font.Font(None, size)
            font.set_bold(bold)
            self._fonts[key] = font
        return self._fonts[key]

    def _alpha_layer(self, x: float, y: float, w: float, h: float):
        """Off-screen layer for translucent shapes, clipped to the current clip rect."""
        rect = pygame.Rect(int(x), int(y), max(0, int(round(w))), max(0, int(round(h))))
        return rect, pygame.Surface(rect.size, pygame.SRCALPHA)

    def clear(self, color: Color) -> None:
        self.surface.fill(color[:3])

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color, radius: int = 0) -> None:
        if len(color) == 4 and color[3] < 255:
            rect, layer = self._alpha_layer(x, y, w, h)
            pygame.draw.rect(layer, color, layer.get_rect(), border_radius=radius)
            self.surface.blit(layer, rect.topleft)
            return
        rect = pygame.Rect(int(x), int(y), int(round(w)), int(round(h)))
        pygame.draw.rect(self.surface, color[:3], rect, border_radius=radius)

    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color: Color, width: int, radius: int = 0
    ) -> None:
        if len(color) == 4 and color[3] < 255:
            rect, layer = self._alpha_layer(x, y, w, h)
            pygame.draw.rect(layer, color, layer.get_rect(), width, border_radius=radius)
            self.surface.blit(layer, rect.topleft)
            return
        rect = pygame.Rect(int(x), int(y), int(round(w)), int(round(h)))
        pygame.draw.rect(self.surface, color[:3], rect, width, border_radius=radius)

    def polyline(self, points: Sequence[Point], color: Color, width: int) -> None:
        if len(points) < 2:
            return
        pygame.draw.lines(self.surface, color[:3], False, points, width)

    def set_clip(self, x: float, y: float, w: float, h: float) -> None:
        # Round edges outward so adjacent strips leave no unpainted seam
        top = int(y)
        bottom = int(round(y + h + 0.5))
        self.surface.set_clip(pygame.Rect(int(x), top, int(round(w)), bottom - top))

    def reset_clip(self) -> None:
        self.surface.set_clip(None)

    def text_width(self, text: str, size: int, bold: bool = False) -> float:
        return float(self._font(size, bold).size(text)[0])

    def text(
        self,
        text: str,
        x: float,
        y: float,
        size: int,
        color: Color,
        bold: bool = False,
        align: str = "left",
        baseline: str = "center",
    ) -> None:
        rendered = self._font(size, bold).render(text, True, color[:3])
        if len(color) == 4:
            rendered.set_alpha(color[3])
        anchor = {
            ("left", "center"): "midleft",
            ("right", "center"): "midright",
            ("left", "bottom"): "bottomleft",
            ("right", "bottom"): "bottomright",
        }[(align, baseline)]
        rect = rendered.get_rect(**{anchor: (int(x), int(y))})
        self.surface.blit(rendered, rect)


def run_window(state: SketchState, max_frames: int | None = None) -> int:
    """
    Open a resizable window and animate until closed (or ``max_frames``).

    Returns the number of frames drawn.
    """
    cfg = state.config
    pygame.init()
    try:
        screen = pygame.display.set_mode((state.width, state.height), pygame.RESIZABLE)
        pygame.display.set_caption(cfg.title)
        canvas = PygameCanvas(screen)
        clock = pygame.time.Clock()
        drawn = 0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in (pygame.K_q, pygame.K_ESCAPE):
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    # Use the actual surface; the next frame picks up its size
                    surf = pygame.display.get_surface()
                    if surf is not None:
                        canvas = PygameCanvas(surf)
                    logger.info("Window resized to %dx%d", *canvas.size)
            if not running:
                break

            render_frame(state, canvas)
            pygame.display.flip()
            drawn += 1
            if max_frames is not None and drawn >= max_frames:
                break
            clock.tick(cfg.fps)
        return drawn
    finally:
        pygame.quit()


def render_snapshot(state: SketchState, out_path: Path, frames: int = 1) -> Path:
    """Render ``frames`` frames off-screen and save the last one as an image."""
    # Headless: no window is opened
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    try:
        surface = pygame.Surface((state.width, state.height))
        canvas = PygameCanvas(surface)
        for _ in range(max(1, frames)):
            render_frame(state, canvas)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        pygame.image.save(surface, str(out_path))
        logger.info("Saved frame %d to %s", state.frame, out_path)
        return out_path
    finally:
        pygame.quit()
