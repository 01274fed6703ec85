"""
Frame drawing: background, gauges, landing pad, and the lander.

Responsibilities:
- Fuel gauge
- Two-tone speed gauge (green up to the allowed speed, olive beyond it)
- Landing pad line
- Compose a full frame for the render loop
"""
from typing import Optional

import pygame

from . import config as C
from .game_state import GameState
from .lander import LanderSprites
from .starfield import Starfield


def gauge_rect(slot: int, width: int) -> pygame.Rect:
    """Rect for the gauge in `slot` (0 = fuel, 1 = speed) filled to `width` px."""
    x = C.UI_MARGIN + slot * (C.UI_BAR + C.UI_MARGIN)
    return pygame.Rect(x, C.UI_MARGIN, max(0, width), C.UI_BAR_HEIGHT)


def draw_fuel_gauge(screen, fuel):
    width = int(C.UI_BAR * fuel / C.FUEL_MAX)
    pygame.draw.rect(screen, C.GAUGE_GOOD, gauge_rect(0, width))


def draw_speed_gauge(screen, speed, goal_speed):
    width = int(C.UI_BAR * speed / C.SPEED_MAX)
    if speed <= goal_speed:
        pygame.draw.rect(screen, C.GAUGE_GOOD, gauge_rect(1, width))
        return

    # bad color in back, good color up to the allowed speed in front
    pygame.draw.rect(screen, C.GAUGE_BAD, gauge_rect(1, width))
    goal_width = int(C.UI_BAR * goal_speed / C.SPEED_MAX)
    pygame.draw.rect(screen, C.GAUGE_GOOD, gauge_rect(1, goal_width))


def draw_pad(screen, goal_x, goal_width, canvas_height):
    y = 1 + canvas_height - C.TARGET_PAD_HEIGHT
    pygame.draw.line(screen, C.GAUGE_GOOD, (goal_x, y), (goal_x + goal_width, y))


class LanderRenderer:
    """Draws a GameState onto whatever canvas the render loop hands over."""

    def __init__(self, sprites: Optional[LanderSprites] = None, background: Optional[Starfield] = None):
        self.sprites = sprites or LanderSprites()
        self.background = background or Starfield()

    def set_surface_size(self, width: int, height: int) -> None:
        self.background.resize(width, height)

    def draw(self, canvas: pygame.Surface, state: GameState) -> None:
        snap = state.snapshot()
        self.background.draw(canvas)
        draw_fuel_gauge(canvas, snap.fuel)
        draw_speed_gauge(canvas, snap.speed, snap.goal_speed)
        draw_pad(canvas, snap.goal_x, snap.goal_width, snap.canvas_height)
        self.sprites.draw(canvas, snap)
