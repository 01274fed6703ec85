"""
Lander simulation state, physics, and landing evaluation.

Responsibilities:
- Hold every simulation variable (x, y, dx, dy, heading, fuel, mode, goal)
- Start an attempt for the current difficulty and place the landing pad
- Advance physics by elapsed wall-clock time
- Evaluate touchdowns (WIN / LOSE / hyperspace restart)
- Relay status text to whoever displays it
- Save / restore the flat bundle needed to resume a game

All fields are guarded by `GameState.lock`. The render loop holds it for a
whole frame; input handlers take it per call.
"""
from __future__ import annotations

import logging
import math
import random
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from . import config as C

logger = logging.getLogger(__name__)

StatusListener = Callable[[str, bool], None]


class Mode(str, Enum):
    READY = "READY"
    RUNNING = "RUNNING"
    PAUSE = "PAUSE"
    LOSE = "LOSE"
    WIN = "WIN"


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class Control(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FIRE = "FIRE"
    PAUSE = "PAUSE"
    STOP = "STOP"


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of what the renderer and host look at."""

    x: float
    y: float
    dx: float
    dy: float
    heading: float
    fuel: float
    engine_firing: bool
    mode: Mode
    goal_x: int
    goal_width: int
    goal_speed: float
    canvas_width: int
    canvas_height: int
    lander_width: int
    lander_height: int
    wins_in_a_row: int

    @property
    def speed(self) -> float:
        return math.hypot(self.dx, self.dy)


def normalize_heading(heading: float) -> float:
    heading %= 360.0
    # a tiny negative heading rounds up to exactly 360.0
    if heading >= 360.0:
        heading -= 360.0
    return heading


class GameState:
    def __init__(
        self,
        status_listener: Optional[StatusListener] = None,
        lander_width: int = C.LANDER_WIDTH,
        lander_height: int = C.LANDER_HEIGHT,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.lock = threading.RLock()
        self._status_listener = status_listener
        self._rng = rng or random.Random()
        self._clock = clock

        self.lander_width = int(lander_width)
        self.lander_height = int(lander_height)
        self.canvas_width = 1
        self.canvas_height = 1

        self.mode = Mode.READY
        self.difficulty = Difficulty(C.DEFAULT_DIFFICULTY)
        self.wins_in_a_row = 0
        self.last_time = 0.0

        # parked in the corner until the first start
        self.x = float(self.lander_width)
        self.y = float(self.lander_height * 2)
        self.dx = 0.0
        self.dy = 0.0
        self.heading = 0.0
        self.fuel = float(C.FUEL_INIT)
        self.engine_firing = False
        self.rotating = 0

        self.goal_x = 0
        self.goal_width = int(self.lander_width * C.TARGET_WIDTH)
        self.goal_speed = float(C.TARGET_SPEED)
        self.goal_angle = float(C.TARGET_ANGLE)

    def set_status_listener(self, listener: Optional[StatusListener]) -> None:
        with self.lock:
            self._status_listener = listener

    def _notify_status(self, text: str, visible: bool) -> None:
        if self._status_listener is not None:
            self._status_listener(text, visible)

    def landing_floor(self) -> float:
        """Lowest y the lander center can reach; touching it ends the attempt."""
        return C.TARGET_PAD_HEIGHT + self.lander_height / 2 - C.TARGET_BOTTOM_PADDING

    # -- controls --

    def set_difficulty(self, difficulty) -> None:
        with self.lock:
            self.difficulty = Difficulty(difficulty)

    def set_surface_size(self, width: int, height: int) -> None:
        with self.lock:
            self.canvas_width = max(1, int(width))
            self.canvas_height = max(1, int(height))

    def set_firing(self, firing: bool) -> None:
        with self.lock:
            self.engine_firing = bool(firing)

    def set_rotating(self, rotating: int) -> None:
        if rotating not in (-1, 0, 1):
            raise ValueError(f"rotating must be -1, 0 or 1, got {rotating!r}")
        with self.lock:
            self.rotating = rotating

    def do_key_down(self, control: Control) -> bool:
        """Apply a pressed control. Returns True if it was consumed."""
        with self.lock:
            if control is Control.FIRE:
                if self.mode is Mode.RUNNING:
                    self.engine_firing = True
                elif self.mode is Mode.PAUSE:
                    self.unpause()
                else:
                    self.start_game()
                return True

            if control is Control.PAUSE:
                if self.mode is Mode.RUNNING:
                    self.pause()
                    return True
                if self.mode is Mode.PAUSE:
                    self.unpause()
                    return True
                return False

            if self.mode is not Mode.RUNNING:
                return False

            if control is Control.LEFT:
                self.rotating = -1
            elif control is Control.RIGHT:
                self.rotating = 1
            elif control is Control.STOP:
                self.set_mode(Mode.LOSE, C.MESSAGE_STOPPED)
            else:
                return False
            return True

    def do_key_up(self, control: Control) -> bool:
        """Apply a released control. Returns True if it was consumed."""
        with self.lock:
            if self.mode is not Mode.RUNNING:
                return False
            if control is Control.FIRE:
                self.engine_firing = False
            elif control in (Control.LEFT, Control.RIGHT):
                self.rotating = 0
            else:
                return False
            return True

    # -- lifecycle --

    def start_game(self, now: Optional[float] = None) -> None:
        """Begin a fresh attempt using the parameters of the current difficulty."""
        with self.lock:
            fuel_k, width_k, speed_k, angle_k, init_k = C.DIFFICULTY_FACTORS[self.difficulty.value]

            self.fuel = float(min(C.FUEL_MAX, C.FUEL_INIT * fuel_k))
            self.engine_firing = False
            self.rotating = 0
            self.goal_width = int(int(self.lander_width * C.TARGET_WIDTH) * width_k)
            self.goal_speed = float(C.TARGET_SPEED * speed_k)
            self.goal_angle = float(C.TARGET_ANGLE * angle_k)
            init_speed = C.INIT_SPEED * init_k

            self.x = self.canvas_width / 2
            self.y = self.canvas_height - self.lander_height / 2

            # start with a little random motion
            self.dy = self._rng.random() * -init_speed
            self.dx = self._rng.random() * 2 * init_speed - init_speed
            self.heading = 0.0

            self.goal_x = self._place_goal()

            now = self._clock() if now is None else now
            self.last_time = now + C.START_DELAY
            logger.debug(
                "Start %s: goal_x=%d goal_width=%d dx=%.1f dy=%.1f",
                self.difficulty.value, self.goal_x, self.goal_width, self.dx, self.dy,
            )
            self.set_mode(Mode.RUNNING)

    def _place_goal(self) -> int:
        """Pick a pad x farther than canvas_height / 6 from the lander's left edge.

        The valid integers in [0, span) form at most two runs either side of
        the lander; one uniform draw over their union picks the pad.
        """
        span = self.canvas_width - self.goal_width
        lander_left = self.x - self.lander_width / 2
        min_gap = self.canvas_height / 6

        below = max(0, min(span, math.ceil(lander_left - min_gap)))
        above_start = max(0, math.floor(lander_left + min_gap) + 1)
        above = max(0, span - above_start)

        if below + above == 0:
            edges = [0] if span <= 1 else [0, span - 1]
            goal_x = max(edges, key=lambda g: abs(g - lander_left))
            logger.warning(
                "Canvas %dx%d too narrow to keep the pad clear of the lander; using goal_x=%d",
                self.canvas_width, self.canvas_height, goal_x,
            )
            return goal_x

        pick = self._rng.randrange(below + above)
        if pick < below:
            return pick
        return above_start + (pick - below)

    def set_mode(self, mode: Mode, message: Optional[str] = None) -> None:
        """Switch mode and tell the listener what (if anything) to show."""
        with self.lock:
            self.mode = Mode(mode)

            if self.mode is Mode.RUNNING:
                self._notify_status("", False)
                return

            self.rotating = 0
            self.engine_firing = False
            text = C.STATUS_TEXT[self.mode.value].format(wins=self.wins_in_a_row)
            if message:
                text = f"{message}\n{text}"
            if self.mode is Mode.LOSE:
                self.wins_in_a_row = 0
            self._notify_status(text, True)

    def pause(self) -> None:
        with self.lock:
            if self.mode is Mode.RUNNING:
                self.set_mode(Mode.PAUSE)

    def unpause(self, now: Optional[float] = None) -> None:
        with self.lock:
            if self.mode is not Mode.PAUSE:
                return
            now = self._clock() if now is None else now
            self.last_time = now + C.START_DELAY
            self.set_mode(Mode.RUNNING)

    # -- physics --

    def advance(self, now: Optional[float] = None) -> None:
        """Move the lander forward to `now` (seconds) and judge any touchdown."""
        with self.lock:
            now = self._clock() if now is None else now

            # last_time lies in the future right after a (re)start
            if self.last_time > now:
                return

            elapsed = now - self.last_time

            if self.rotating != 0:
                self.heading = normalize_heading(
                    self.heading + self.rotating * C.SLEW_DEG_PER_SEC * elapsed
                )

            ddx = 0.0
            ddy = -C.GRAVITY_ACCEL * elapsed

            if self.engine_firing:
                # 0 is up, 90 is right: sin drives ddx, cos drives ddy
                elapsed_firing = elapsed
                fuel_used = elapsed_firing * C.FUEL_BURN_RATE

                # ran dry partway through the frame
                if fuel_used > self.fuel:
                    elapsed_firing = self.fuel / C.FUEL_BURN_RATE
                    fuel_used = self.fuel
                    self.engine_firing = False

                self.fuel = max(0.0, self.fuel - fuel_used)

                accel = C.FIRE_ACCEL * elapsed_firing
                radians = math.radians(self.heading)
                ddx += math.sin(radians) * accel
                ddy += math.cos(radians) * accel

            dx_old, dy_old = self.dx, self.dy
            self.dx += ddx
            self.dy += ddy

            # position from the average speed over the period
            self.x += elapsed * (self.dx + dx_old) / 2
            self.y += elapsed * (self.dy + dy_old) / 2

            self.last_time = now

            floor = self.landing_floor()
            if self.y <= floor:
                self.y = floor
                self._evaluate_landing(now)

    def _evaluate_landing(self, now: float) -> None:
        speed = math.hypot(self.dx, self.dy)
        half_width = self.lander_width / 2
        on_goal = (
            self.goal_x <= self.x - half_width
            and self.x + half_width <= self.goal_x + self.goal_width
        )

        # upside down and fast on the pad: straight back to the top
        if (
            on_goal
            and abs(self.heading - 180) < self.goal_angle
            and speed > C.HYPERSPACE_SPEED
        ):
            self.wins_in_a_row += 1
            logger.info("Hyperspace landing at %.1f px/s, %d in a row", speed, self.wins_in_a_row)
            self.start_game(now)
            return

        result = Mode.LOSE
        message = None
        if not on_goal:
            message = C.MESSAGE_OFF_PAD
        elif not (self.heading <= self.goal_angle or self.heading >= 360 - self.goal_angle):
            message = C.MESSAGE_BAD_ANGLE
        elif speed > self.goal_speed:
            message = C.MESSAGE_TOO_FAST
        else:
            result = Mode.WIN
            self.wins_in_a_row += 1

        logger.info(
            "Touchdown: %s%s speed=%.1f heading=%.1f",
            result.value, f" ({message})" if message else "", speed, self.heading,
        )
        self.set_mode(result, message)

    # -- accessors / persistence --

    def snapshot(self) -> Snapshot:
        with self.lock:
            return Snapshot(
                x=self.x,
                y=self.y,
                dx=self.dx,
                dy=self.dy,
                heading=self.heading,
                fuel=self.fuel,
                engine_firing=self.engine_firing,
                mode=self.mode,
                goal_x=self.goal_x,
                goal_width=self.goal_width,
                goal_speed=self.goal_speed,
                canvas_width=self.canvas_width,
                canvas_height=self.canvas_height,
                lander_width=self.lander_width,
                lander_height=self.lander_height,
                wins_in_a_row=self.wins_in_a_row,
            )

    def save_state(self) -> Dict[str, object]:
        with self.lock:
            return {
                "x": self.x,
                "y": self.y,
                "dx": self.dx,
                "dy": self.dy,
                "heading": self.heading,
                "fuel": self.fuel,
                "mode": self.mode.value,
                "difficulty": self.difficulty.value,
                "goal_x": self.goal_x,
                "goal_width": self.goal_width,
                "goal_speed": self.goal_speed,
                "goal_angle": self.goal_angle,
                "wins_in_a_row": self.wins_in_a_row,
            }

    def restore_state(self, bundle: Dict[str, object]) -> None:
        """Load a bundle from save_state(). A game saved mid-flight comes back paused.

        Every field is parsed before any is assigned, so a rejected bundle
        leaves the state as it was.
        """
        mode = Mode(bundle["mode"])
        fields = dict(
            difficulty=Difficulty(bundle["difficulty"]),
            x=float(bundle["x"]),
            y=float(bundle["y"]),
            dx=float(bundle["dx"]),
            dy=float(bundle["dy"]),
            heading=normalize_heading(float(bundle["heading"])),
            fuel=min(float(C.FUEL_MAX), max(0.0, float(bundle["fuel"]))),
            goal_x=int(bundle["goal_x"]),
            goal_width=int(bundle["goal_width"]),
            goal_speed=float(bundle["goal_speed"]),
            goal_angle=float(bundle["goal_angle"]),
            wins_in_a_row=max(0, int(bundle["wins_in_a_row"])),
        )
        with self.lock:
            for name, value in fields.items():
                setattr(self, name, value)
            self.set_mode(Mode.PAUSE if mode is Mode.RUNNING else mode)
