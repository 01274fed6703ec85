"""
Entrypoint for Lunar Lander.

Rotate with Left/Right (or A/D), fire with Up/Space/W; Up also starts a game
or resumes a paused one. P pauses, S gives up, 1/2/3 pick the difficulty for
the next game, N starts one right away, Esc quits (the game is saved).
"""
import argparse
import logging
from pathlib import Path

from lunar_lander import config as C
from lunar_lander.game_loop import run
from lunar_lander.game_state import Difficulty


def main():
    parser = argparse.ArgumentParser(description="Lunar Lander")
    parser.add_argument("--difficulty", type=str.upper, default=None, choices=[d.value for d in Difficulty], help="Difficulty for the next game")
    parser.add_argument("--width", type=int, default=C.WIDTH, help="Window width in pixels")
    parser.add_argument("--height", type=int, default=C.HEIGHT, help="Window height in pixels")
    parser.add_argument("--fps", type=int, default=C.FPS, help="Frame rate cap")
    parser.add_argument("--state-file", type=Path, default=C.STATE_PATH, dest="state_file", help="Where the game is saved on exit")
    parser.add_argument("--fresh", action="store_true", help="Ignore any saved game")
    parser.add_argument("--log-level", type=str.upper, default="WARNING", dest="log_level", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    run(
        difficulty=args.difficulty,
        width=args.width,
        height=args.height,
        fps=args.fps,
        state_path=args.state_file,
        fresh=args.fresh,
    )


if __name__ == "__main__":
    main()
