import random
from typing import Optional, Tuple

import pygame

from . import config as C


class Starfield:
    """Background image: stars over a planet rising from the horizon.

    The picture is generated once at the source size and rescaled from that
    source whenever the surface changes size.
    """

    def __init__(
        self,
        width: int = C.WIDTH,
        height: int = C.HEIGHT,
        count: int = C.STAR_COUNT,
        size_range: Tuple[int, int] = C.STAR_SIZES,
        seed: Optional[int] = None,
    ) -> None:
        self.seed = random.randint(0, 999_999) if seed is None else seed
        self.count = count
        self.size_range = size_range
        self.source = self._generate(max(1, width), max(1, height))
        self.image = self.source

    def _generate(self, width: int, height: int) -> pygame.Surface:
        rng = random.Random(self.seed)
        surface = pygame.Surface((width, height), 0, 32)
        surface.fill((0, 0, 0))

        min_size, max_size = self.size_range
        min_size = max(1, min_size)
        max_size = max(min_size, max_size)

        for _ in range(self.count):
            brightness = rng.randint(120, 255)
            pygame.draw.circle(
                surface,
                (brightness, brightness, brightness),
                (rng.randrange(width), rng.randrange(height)),
                rng.randint(min_size, max_size),
            )

        # planet low on the horizon, night side shaded
        radius = max(1, int(width * 0.45))
        center = (int(width * 0.7), height + radius // 3)
        pygame.draw.circle(surface, C.PLANET_COLOR, center, radius)
        pygame.draw.circle(surface, C.PLANET_SHADE, (center[0] + radius // 5, center[1] + radius // 8), radius)
        return surface

    def resize(self, width: int, height: int) -> None:
        size = (max(1, int(width)), max(1, int(height)))
        if size == self.image.get_size():
            return
        self.image = pygame.transform.smoothscale(self.source, size)

    def draw(self, target: pygame.Surface) -> None:
        target.blit(self.image, (0, 0))
