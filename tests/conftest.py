import os
import random
from unittest.mock import Mock

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from lunar_lander.game_state import GameState, Mode


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def listener():
    return Mock()


@pytest.fixture()
def state(listener, clock):
    s = GameState(status_listener=listener, rng=random.Random(1234), clock=clock)
    s.set_surface_size(480, 720)
    return s


@pytest.fixture()
def flying(state):
    """A running game high above the ground with zero elapsed time so far."""
    state.mode = Mode.RUNNING
    state.x, state.y = 240.0, 1e9
    state.dx = state.dy = 0.0
    state.heading = 0.0
    state.last_time = 100.0
    return state


@pytest.fixture(scope="session")
def pygame_ready():
    import pygame

    pygame.init()
    yield pygame
    pygame.quit()
