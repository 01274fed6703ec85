"""
Render loop worker.

Responsibilities:
- Run on its own thread while the drawing surface exists
- Per frame: acquire the surface, advance the game under its lock, draw, release
- Always hand the surface back, even when drawing fails
- Stop after the in-flight frame and let the host wait for that
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional, Protocol

from . import config as C
from .game_state import GameState, Mode

logger = logging.getLogger(__name__)


class RenderLoopError(RuntimeError):
    """The render worker did not stop within the allotted joins."""


class SurfaceHolder(Protocol):
    def lock_canvas(self) -> Optional[Any]:
        """Return a drawable canvas, or None if none is available this frame."""

    def unlock_canvas_and_post(self, canvas: Any) -> None:
        ...


class Renderer(Protocol):
    def draw(self, canvas: Any, state: GameState) -> None:
        ...


class RenderLoop:
    """Advances and draws a GameState once per frame on a worker thread.

    A RenderLoop runs once; build a new one for every new surface.
    """

    def __init__(
        self,
        holder: SurfaceHolder,
        state: GameState,
        renderer: Renderer,
        clock: Callable[[], float] = time.time,
        name: str = "render-loop",
    ) -> None:
        self._holder = holder
        self._state = state
        self._renderer = renderer
        self._clock = clock
        self._running = threading.Event()
        self._thread = threading.Thread(target=self.run, name=name, daemon=True)
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._running.is_set()

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def set_running(self, running: bool) -> None:
        """Allow (True) or stop (False) the loop; checked once per frame."""
        if running:
            self._running.set()
        else:
            self._running.clear()

    def start(self) -> None:
        self._thread.start()
        logger.info("Render loop started")

    def run(self) -> None:
        try:
            while self._running.is_set():
                self.render_frame()
        except Exception:
            logger.exception("Render loop stopped by an error after %d frames", self.frames)
            raise
        logger.debug("Render loop exited after %d frames", self.frames)

    def render_frame(self) -> None:
        canvas = None
        try:
            canvas = self._holder.lock_canvas()
            with self._state.lock:
                if self._state.mode is Mode.RUNNING:
                    self._state.advance(self._clock())
                if canvas is not None:
                    self._renderer.draw(canvas, self._state)
        finally:
            # never leave the surface locked
            if canvas is not None:
                self._holder.unlock_canvas_and_post(canvas)
        self.frames += 1

    def shutdown(
        self,
        poll_seconds: float = C.JOIN_POLL_SECONDS,
        max_attempts: int = C.JOIN_MAX_ATTEMPTS,
    ) -> None:
        """Stop the loop and wait for the in-flight frame to finish.

        The surface must not be torn down before this returns.
        """
        self.set_running(False)
        if self._thread.ident is None:
            return

        for attempt in range(1, max_attempts + 1):
            self._thread.join(poll_seconds)
            if not self._thread.is_alive():
                logger.info("Render loop stopped after %d frames", self.frames)
                return
            logger.debug("Render loop still busy, join attempt %d/%d", attempt, max_attempts)

        raise RenderLoopError(
            f"render loop still running after {max_attempts} joins of {poll_seconds}s"
        )
