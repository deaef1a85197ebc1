# MIT License (see LICENSE)
"""
pygame renderer: filled red circles on a white background.

Requires the optional "viewer" dependency (pygame).
"""
from __future__ import annotations

import pygame

from .adapter import RendererAdapter

BACKGROUND = (255, 255, 255)
PARTICLE_COLOR = (255, 0, 0)


class PygameRenderer(RendererAdapter):
    """Draws onto a pygame display surface and flips it at end_frame()."""

    def __init__(self, screen: pygame.Surface, color=PARTICLE_COLOR, background=BACKGROUND):
        self.screen = screen
        self.color = color
        self.background = background

    def begin_frame(self, frame: int) -> None:
        self.screen.fill(self.background)

    def draw_particle(self, index: int, x: int, y: int, radius: int) -> None:
        pygame.draw.circle(self.screen, self.color, (x, y), radius)

    def end_frame(self) -> None:
        pygame.display.flip()
