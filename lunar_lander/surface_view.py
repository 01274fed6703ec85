"""
Host-side glue between pygame and the game core.

Responsibilities:
- StatusLabel: the text overlay the game state talks to
- PygameSurfaceHolder: hands the display surface to the render loop, paces and
  presents frames
- SurfaceView: surface lifecycle callbacks (ready / resized / destroyed) and
  key forwarding
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

import pygame

from . import config as C
from .game_state import Control, GameState
from .hud import LanderRenderer
from .render_loop import RenderLoop, RenderLoopError

logger = logging.getLogger(__name__)


class StatusLabel:
    """Centered multi-line text shown over the game while it is not running."""

    def __init__(self, font_size: int = C.STATUS_FONT_SIZE, color=C.STATUS_COLOR):
        self._lock = threading.Lock()
        self._font: Optional[pygame.font.Font] = None
        self.font_size = font_size
        self.color = color
        self.text = ""
        self.visible = False

    def __call__(self, text: str, visible: bool) -> None:
        with self._lock:
            self.text = text
            self.visible = visible

    def draw(self, screen: pygame.Surface) -> None:
        with self._lock:
            text, visible = self.text, self.visible
        if not visible or not text:
            return

        if self._font is None:
            self._font = pygame.font.SysFont(None, self.font_size)

        lines = text.split("\n")
        line_h = self._font.get_linesize()
        y = (screen.get_height() - line_h * len(lines)) // 2
        for line in lines:
            img = self._font.render(line, True, self.color)
            screen.blit(img, (screen.get_width() // 2 - img.get_width() // 2, y))
            y += line_h


class PygameSurfaceHolder:
    """Lends the display surface to the render loop one frame at a time.

    Drawing and `pygame.display.flip()` happen on the render thread while the
    main thread pumps events. SDL allows that with the X11, Wayland, Windows and
    dummy drivers; on macOS video calls must stay on the main thread, so this
    holder is not usable there.
    """

    def __init__(self, fps: int = C.FPS, overlays: Iterable = ()):
        self._clock = pygame.time.Clock()
        self._fps = fps
        self._overlays = list(overlays)

    def lock_canvas(self) -> Optional[pygame.Surface]:
        self._clock.tick(self._fps)
        try:
            return pygame.display.get_surface()
        except pygame.error as ex:
            logger.debug("No display surface this frame: %s", ex)
            return None

    def unlock_canvas_and_post(self, canvas: pygame.Surface) -> None:
        for overlay in self._overlays:
            overlay.draw(canvas)
        pygame.display.flip()


class SurfaceView:
    """Runs a render loop for as long as the drawing surface exists."""

    def __init__(
        self,
        state: GameState,
        holder,
        renderer: LanderRenderer,
        join_poll_seconds: float = C.JOIN_POLL_SECONDS,
        join_max_attempts: int = C.JOIN_MAX_ATTEMPTS,
    ):
        self.state = state
        self.holder = holder
        self.renderer = renderer
        self.join_poll_seconds = join_poll_seconds
        self.join_max_attempts = join_max_attempts
        self._loop: Optional[RenderLoop] = None

    @property
    def loop(self) -> Optional[RenderLoop]:
        return self._loop

    def on_surface_ready(self) -> None:
        if self._loop is not None and self._loop.is_alive():
            return
        self._loop = RenderLoop(self.holder, self.state, self.renderer)
        self._loop.set_running(True)
        self._loop.start()

    def on_surface_resized(self, width: int, height: int) -> None:
        with self.state.lock:
            self.state.set_surface_size(width, height)
            self.renderer.set_surface_size(width, height)
        logger.debug("Surface resized to %dx%d", width, height)

    def on_surface_destroyed(self) -> None:
        # the surface must not be touched once this returns
        if self._loop is None:
            return
        while True:
            try:
                self._loop.shutdown(self.join_poll_seconds, self.join_max_attempts)
                break
            except RenderLoopError as ex:
                logger.warning("Still waiting for the render loop: %s", ex)
        self._loop = None

    def on_key_down(self, control: Control) -> bool:
        return self.state.do_key_down(control)

    def on_key_up(self, control: Control) -> bool:
        return self.state.do_key_up(control)
