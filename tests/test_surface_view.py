import threading
from unittest.mock import Mock

import pytest

from lunar_lander import config as C
from lunar_lander.game_state import Control, Mode
from lunar_lander.hud import LanderRenderer, draw_fuel_gauge, draw_pad, draw_speed_gauge, gauge_rect
from lunar_lander.lander import LanderSprites
from lunar_lander.starfield import Starfield
from lunar_lander.surface_view import PygameSurfaceHolder, StatusLabel, SurfaceView


def rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


def any_lit(surface):
    w, h = surface.get_size()
    return any(rgb(surface, (x, y)) != (0, 0, 0) for x in range(w) for y in range(h))


@pytest.fixture()
def canvas(pygame_ready):
    surface = pygame_ready.Surface((480, 720), 0, 32)
    surface.fill((0, 0, 0))
    return surface


def test_fuel_gauge_width_tracks_fuel(canvas):
    draw_fuel_gauge(canvas, C.FUEL_MAX / 2)

    y = C.UI_MARGIN + 1
    assert rgb(canvas, (C.UI_MARGIN + 10, y)) == C.GAUGE_GOOD
    assert rgb(canvas, (C.UI_MARGIN + C.UI_BAR // 2 + 10, y)) == (0, 0, 0)


def test_speed_gauge_is_two_tone_when_too_fast(canvas):
    draw_speed_gauge(canvas, speed=60, goal_speed=28)

    x0 = gauge_rect(1, 0).x
    y = C.UI_MARGIN + 1
    assert rgb(canvas, (x0 + 2, y)) == C.GAUGE_GOOD
    assert rgb(canvas, (x0 + 35, y)) == C.GAUGE_BAD
    assert rgb(canvas, (x0 + 80, y)) == (0, 0, 0)


def test_speed_gauge_is_green_under_the_limit(canvas):
    draw_speed_gauge(canvas, speed=20, goal_speed=28)

    x0 = gauge_rect(1, 0).x
    assert rgb(canvas, (x0 + 10, C.UI_MARGIN + 1)) == C.GAUGE_GOOD


def test_pad_sits_near_the_bottom(canvas):
    draw_pad(canvas, goal_x=100, goal_width=57, canvas_height=720)
    assert rgb(canvas, (128, 1 + 720 - C.TARGET_PAD_HEIGHT)) == C.GAUGE_GOOD


def test_sprites_match_state(state, pygame_ready):
    sprites = LanderSprites(36, 48)
    assert sprites.plain.get_size() == (36, 48)

    assert sprites.image_for(state.snapshot()) is sprites.plain
    state.engine_firing = True
    assert sprites.image_for(state.snapshot()) is sprites.firing
    state.mode = Mode.LOSE
    assert sprites.image_for(state.snapshot()) is sprites.crashed


def test_sprite_is_drawn_around_the_lander_center(canvas, state):
    state.x, state.y = 240.0, 360.0

    LanderSprites().draw(canvas, state.snapshot())

    # hull sits in the upper part of the sprite, which is centered on (x, H - y)
    assert rgb(canvas, (240, 360 - C.LANDER_HEIGHT // 2 + 12)) != (0, 0, 0)
    assert rgb(canvas, (10, 700)) == (0, 0, 0)


def test_starfield_rescales_from_its_source(pygame_ready):
    field = Starfield(200, 100, seed=5)

    field.resize(400, 300)
    assert field.image.get_size() == (400, 300)
    assert field.source.get_size() == (200, 100)

    image = field.image
    field.resize(400, 300)
    assert field.image is image


def test_renderer_draws_a_full_frame(canvas, state):
    state.start_game()
    renderer = LanderRenderer(background=Starfield(480, 720, seed=1))

    renderer.draw(canvas, state)

    assert rgb(canvas, (state.goal_x + state.goal_width // 2, 1 + 720 - C.TARGET_PAD_HEIGHT)) == C.GAUGE_GOOD
    assert rgb(canvas, (C.UI_MARGIN + 1, C.UI_MARGIN + 1)) == C.GAUGE_GOOD


def test_status_label_draws_only_when_visible(pygame_ready):
    surface = pygame_ready.Surface((200, 120), 0, 32)
    label = StatusLabel(font_size=24)

    label("Game Over\nPress Up To Play", False)
    surface.fill((0, 0, 0))
    label.draw(surface)
    assert not any_lit(surface)

    label("Game Over\nPress Up To Play", True)
    label.draw(surface)
    assert any_lit(surface)


def test_holder_without_display_yields_no_canvas(pygame_ready):
    assert PygameSurfaceHolder(fps=1000).lock_canvas() is None


def test_resize_reaches_state_and_renderer(state):
    renderer = Mock()
    view = SurfaceView(state, Mock(), renderer)

    view.on_surface_resized(320, 240)

    assert (state.canvas_width, state.canvas_height) == (320, 240)
    renderer.set_surface_size.assert_called_once_with(320, 240)


def test_surface_lifecycle_starts_and_stops_the_loop(state):
    holder = Mock()
    holder.lock_canvas.return_value = None
    view = SurfaceView(state, holder, Mock())

    view.on_surface_ready()
    loop = view.loop
    assert loop.is_alive()

    view.on_surface_ready()
    assert view.loop is loop

    view.on_surface_destroyed()
    assert not loop.is_alive()
    assert view.loop is None

    view.on_surface_destroyed()


def test_destroy_keeps_waiting_for_a_stuck_frame(state):
    release = threading.Event()
    entered = threading.Event()

    def stuck():
        entered.set()
        release.wait(5.0)
        return None

    holder = Mock()
    holder.lock_canvas.side_effect = stuck
    view = SurfaceView(state, holder, Mock(), join_poll_seconds=0.01, join_max_attempts=2)
    view.on_surface_ready()
    loop = view.loop
    assert entered.wait(5.0)

    # outlasts several rounds of bounded joins before the frame finishes
    timer = threading.Timer(0.2, release.set)
    timer.start()
    view.on_surface_destroyed()
    timer.join()

    assert release.is_set()
    assert not loop.is_alive()
    assert view.loop is None


def test_keys_are_forwarded(state):
    view = SurfaceView(state, Mock(), Mock())

    assert view.on_key_down(Control.FIRE)
    assert state.mode is Mode.RUNNING
    assert view.on_key_down(Control.RIGHT)
    assert state.rotating == 1
    assert view.on_key_up(Control.RIGHT)
    assert state.rotating == 0
