import json
from unittest.mock import Mock

import pygame
import pytest

from lunar_lander.checkpoint import load_checkpoint, save_checkpoint
from lunar_lander.game_loop import build_view, close_game, handle_key, resume_or_ready
from lunar_lander.game_state import Control, Difficulty, GameState, Mode
from lunar_lander.surface_view import StatusLabel


def test_checkpoint_round_trip(tmp_path, state):
    state.start_game()
    path = tmp_path / "saves" / "game.json"

    save_checkpoint(state.save_state(), path)

    assert load_checkpoint(path) == state.save_state()


def test_missing_checkpoint_is_none(tmp_path):
    assert load_checkpoint(tmp_path / "nope.json") is None


def test_corrupt_checkpoint_is_ignored(tmp_path, capsys):
    path = tmp_path / "game.json"
    path.write_text("{not json")

    assert load_checkpoint(path) is None
    assert "Failed to load saved game" in capsys.readouterr().out


def test_non_object_checkpoint_is_ignored(tmp_path):
    path = tmp_path / "game.json"
    path.write_text(json.dumps([1, 2, 3]))

    assert load_checkpoint(path) is None


def test_resume_restores_a_saved_game(state):
    state.start_game()
    bundle = state.save_state()
    state.set_mode(Mode.READY)

    assert resume_or_ready(state, bundle) is True
    assert state.mode is Mode.PAUSE


def test_without_a_save_the_game_is_ready(state, listener):
    assert resume_or_ready(state, None) is False
    assert state.mode is Mode.READY
    assert listener.call_args[0][1] is True


def test_incomplete_save_falls_back_to_ready(state, capsys):
    assert resume_or_ready(state, {"mode": "RUNNING"}) is False
    assert state.mode is Mode.READY
    assert "starting fresh" in capsys.readouterr().out


def test_escape_quits():
    assert handle_key(Mock(), pygame.K_ESCAPE, pressed=True) is False


def test_number_keys_pick_difficulty():
    view = Mock()
    assert handle_key(view, pygame.K_3, pressed=True)
    view.state.set_difficulty.assert_called_once_with(Difficulty.HARD)


def test_new_game_key():
    view = Mock()
    handle_key(view, pygame.K_n, pressed=True)
    view.state.start_game.assert_called_once_with()


def test_control_keys_go_to_the_view():
    view = Mock()

    handle_key(view, pygame.K_LEFT, pressed=True)
    handle_key(view, pygame.K_LEFT, pressed=False)
    handle_key(view, pygame.K_SPACE, pressed=True)

    view.on_key_down.assert_any_call(Control.LEFT)
    view.on_key_up.assert_called_once_with(Control.LEFT)
    view.on_key_down.assert_any_call(Control.FIRE)


def test_unbound_keys_are_ignored():
    view = Mock()
    assert handle_key(view, pygame.K_F12, pressed=True) is True
    view.on_key_down.assert_not_called()


def test_sprites_follow_the_restored_state(pygame_ready):
    state = GameState(lander_width=24, lander_height=32)
    state.restore_state(GameState().save_state())

    view = build_view(state, StatusLabel(), 480, 720)

    assert view.renderer.sprites.plain.get_size() == (24, 32)


def test_close_game_saves_even_when_the_loop_will_not_stop(tmp_path, state, monkeypatch):
    quit_ = Mock()
    monkeypatch.setattr(pygame, "quit", quit_)
    view = Mock()
    view.on_surface_destroyed.side_effect = RuntimeError("render loop stuck")
    state.start_game()
    path = tmp_path / "game.json"

    with pytest.raises(RuntimeError):
        close_game(state, view, path)

    saved = load_checkpoint(path)
    assert saved["mode"] == Mode.PAUSE.value
    assert saved["goal_x"] == state.goal_x
    quit_.assert_called_once_with()


def test_close_game_stops_rendering_before_saving(tmp_path, state, monkeypatch):
    monkeypatch.setattr(pygame, "quit", Mock())
    order = []
    view = Mock()
    view.on_surface_destroyed.side_effect = lambda: order.append("destroyed")
    monkeypatch.setattr("lunar_lander.game_loop.save_checkpoint", lambda bundle, path: order.append("saved"))

    close_game(state, view, tmp_path / "game.json")

    assert order == ["destroyed", "saved"]
