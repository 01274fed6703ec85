import logging

import pygame

from . import config as C
from .checkpoint import load_checkpoint, save_checkpoint
from .game_state import Control, Difficulty, GameState, Mode
from .hud import LanderRenderer
from .lander import LanderSprites
from .starfield import Starfield
from .surface_view import PygameSurfaceHolder, StatusLabel, SurfaceView

logger = logging.getLogger(__name__)

KEY_CONTROLS = {
    pygame.K_LEFT: Control.LEFT,
    pygame.K_a: Control.LEFT,
    pygame.K_RIGHT: Control.RIGHT,
    pygame.K_d: Control.RIGHT,
    pygame.K_UP: Control.FIRE,
    pygame.K_w: Control.FIRE,
    pygame.K_SPACE: Control.FIRE,
    pygame.K_p: Control.PAUSE,
    pygame.K_s: Control.STOP,
}

DIFFICULTY_KEYS = {
    pygame.K_1: Difficulty.EASY,
    pygame.K_2: Difficulty.MEDIUM,
    pygame.K_3: Difficulty.HARD,
}


def resume_or_ready(state: GameState, bundle) -> bool:
    """Restore a saved game if there is a usable one; otherwise show READY."""
    if bundle is not None:
        try:
            state.restore_state(bundle)
            return True
        except (KeyError, TypeError, ValueError) as ex:
            print(f"⚠️ Saved game is incomplete, starting fresh: {ex}")
    state.set_mode(Mode.READY)
    return False


def handle_key(view: SurfaceView, key: int, pressed: bool) -> bool:
    """Route a pygame key to the game. Returns False when the player quits."""
    state = view.state
    if pressed and key == pygame.K_ESCAPE:
        return False

    if pressed and key in DIFFICULTY_KEYS:
        state.set_difficulty(DIFFICULTY_KEYS[key])
        logger.info("Difficulty set to %s (applies to the next game)", DIFFICULTY_KEYS[key].value)
    elif pressed and key == pygame.K_n:
        state.start_game()
    elif key in KEY_CONTROLS:
        if pressed:
            view.on_key_down(KEY_CONTROLS[key])
        else:
            view.on_key_up(KEY_CONTROLS[key])
    return True


def build_view(state: GameState, label: StatusLabel, width, height, fps=C.FPS) -> SurfaceView:
    """Wire renderer and holder to `state`. Call after any restore so the sprites match its lander size."""
    renderer = LanderRenderer(
        sprites=LanderSprites(state.lander_width, state.lander_height),
        background=Starfield(width, height),
    )
    return SurfaceView(state, PygameSurfaceHolder(fps=fps, overlays=[label]), renderer)


def close_game(state: GameState, view: SurfaceView, state_path) -> None:
    """Stop rendering and save. The save and pygame.quit() run even if stopping fails."""
    state.pause()
    try:
        view.on_surface_destroyed()
    finally:
        try:
            save_checkpoint(state.save_state(), state_path)
            print(f"✅ Saved game to {state_path}")
        except OSError as ex:
            print(f"⚠️ Failed to save game to {state_path}: {ex}")
        pygame.quit()


def run(difficulty=None, width=C.WIDTH, height=C.HEIGHT, fps=C.FPS, state_path=C.STATE_PATH, fresh=False):
    pygame.init()
    pygame.display.set_caption(C.WINDOW_TITLE)
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    clock = pygame.time.Clock()

    label = StatusLabel()
    state = GameState(status_listener=label)
    if resume_or_ready(state, None if fresh else load_checkpoint(state_path)):
        print(f"Resumed saved game from {state_path} | mode={state.mode.value} | wins={state.wins_in_a_row}")
    if difficulty is not None:
        state.set_difficulty(difficulty)

    view = build_view(state, label, width, height, fps)
    view.on_surface_resized(*screen.get_size())

    view.on_surface_ready()
    running = True
    try:
        while running:
            clock.tick(fps)
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False
                elif e.type == pygame.VIDEORESIZE:
                    view.on_surface_resized(e.w, e.h)
                elif e.type == pygame.WINDOWFOCUSLOST:
                    state.pause()
                elif e.type in (pygame.KEYDOWN, pygame.KEYUP):
                    running = handle_key(view, e.key, e.type == pygame.KEYDOWN) and running
    finally:
        close_game(state, view, state_path)
