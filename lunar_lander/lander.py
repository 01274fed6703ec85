"""
Lander sprites.

Responsibilities:
- Build the plain / firing / crashed lander images
- Pick the image that matches the game state
- Draw it rotated about the lander center
"""
import pygame

from . import config as C
from .game_state import Mode, Snapshot

# Outlines in unit coordinates: (0, 0) top-left, (1, 1) bottom-right.
# The gear touches down at 0.65; the flame hangs below it.
BODY = [(0.5, 0.02), (0.8, 0.18), (0.8, 0.42), (0.2, 0.42), (0.2, 0.18)]
WINDOW = [(0.5, 0.1), (0.64, 0.2), (0.5, 0.3), (0.36, 0.2)]
NOZZLE = [(0.42, 0.42), (0.58, 0.42), (0.62, 0.5), (0.38, 0.5)]
LEGS = [((0.28, 0.42), (0.08, 0.65)), ((0.72, 0.42), (0.92, 0.65))]
FLAME = [(0.4, 0.5), (0.6, 0.5), (0.5, 0.98)]
FLAME_CORE = [(0.45, 0.5), (0.55, 0.5), (0.5, 0.8)]

HULL = (220, 220, 220)
OUTLINE = (80, 80, 80)
GLASS = (0, 200, 255)
FLAME_OUTER = (255, 140, 0)
FLAME_INNER = (255, 230, 120)
WRECK = (150, 60, 50)


class LanderSprites:
    def __init__(self, width: int = C.LANDER_WIDTH, height: int = C.LANDER_HEIGHT):
        self.width = int(width)
        self.height = int(height)
        self.plain = self._build(firing=False)
        self.firing = self._build(firing=True)
        self.crashed = self._build_crashed()

    def _scale(self, points):
        return [(x * (self.width - 1), y * (self.height - 1)) for x, y in points]

    def _draw_legs(self, surface, color):
        for top, foot in LEGS:
            pygame.draw.line(surface, color, *self._scale([top, foot]), 2)
            fx, fy = self._scale([foot])[0]
            pygame.draw.line(surface, color, (fx - 3, fy), (fx + 3, fy), 2)

    def _build(self, firing: bool) -> pygame.Surface:
        surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        if firing:
            pygame.draw.polygon(surface, FLAME_OUTER, self._scale(FLAME))
            pygame.draw.polygon(surface, FLAME_INNER, self._scale(FLAME_CORE))
        self._draw_legs(surface, HULL)
        pygame.draw.polygon(surface, OUTLINE, self._scale(NOZZLE))
        pygame.draw.polygon(surface, HULL, self._scale(BODY))
        pygame.draw.polygon(surface, OUTLINE, self._scale(BODY), 2)
        pygame.draw.polygon(surface, GLASS, self._scale(WINDOW))
        return surface

    def _build_crashed(self) -> pygame.Surface:
        surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        # squashed hull lying on its gear
        wreck = [(x, 0.2 + y * 0.6) for x, y in BODY]
        self._draw_legs(surface, OUTLINE)
        pygame.draw.polygon(surface, WRECK, self._scale(wreck))
        pygame.draw.polygon(surface, OUTLINE, self._scale(wreck), 2)
        cx, cy = self._scale([(0.5, 0.35)])[0]
        pygame.draw.line(surface, OUTLINE, (cx - 6, cy - 6), (cx + 6, cy + 6), 2)
        pygame.draw.line(surface, OUTLINE, (cx - 6, cy + 6), (cx + 6, cy - 6), 2)
        return surface

    def image_for(self, snap: Snapshot) -> pygame.Surface:
        if snap.mode is Mode.LOSE:
            return self.crashed
        if snap.engine_firing:
            return self.firing
        return self.plain

    def draw(self, screen: pygame.Surface, snap: Snapshot) -> None:
        # heading is clockwise; pygame rotates counter-clockwise
        rotated = pygame.transform.rotate(self.image_for(snap), -snap.heading)
        center = (snap.x, snap.canvas_height - snap.y)
        screen.blit(rotated, rotated.get_rect(center=(round(center[0]), round(center[1]))))
