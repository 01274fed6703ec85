"""
Central configuration for physics, landing targets, HUD layout, and the window.

Keep ALL constants here so tuning doesn't require hunting through code.
"""
from pathlib import Path

# Window
WIDTH, HEIGHT = 480, 720
FPS = 60
WINDOW_TITLE = "Lunar Lander"

# Physics (per second)
GRAVITY_ACCEL = 35
FIRE_ACCEL = 80
FUEL_INIT = 60
FUEL_MAX = 100
FUEL_BURN_RATE = 10
SLEW_DEG_PER_SEC = 120
HYPERSPACE_SPEED = 180
INIT_SPEED = 30
SPEED_MAX = 120  # full scale of the speed gauge

# Physics waits this long after (re)starting before the first step
START_DELAY = 0.1

# Landing targets
TARGET_ANGLE = 18         # > this angle means crash
TARGET_BOTTOM_PADDING = 17  # px below gear
TARGET_PAD_HEIGHT = 8     # how high above ground
TARGET_SPEED = 28         # > this speed means crash
TARGET_WIDTH = 1.6        # pad width as a multiple of the lander width

# Difficulty multipliers: (fuel, goal_width, goal_speed, goal_angle, init_speed)
DIFFICULTY_FACTORS = {
    "EASY": (3 / 2, 4 / 3, 3 / 2, 4 / 3, 3 / 4),
    "MEDIUM": (1, 1, 1, 1, 1),
    "HARD": (7 / 8, 3 / 4, 7 / 8, 1, 4 / 3),
}
DEFAULT_DIFFICULTY = "MEDIUM"

# Lander sprite
LANDER_WIDTH = 36
LANDER_HEIGHT = 48

# HUD
UI_BAR = 100         # width of the bar(s)
UI_BAR_HEIGHT = 10   # height of the bar(s)
UI_MARGIN = 4
GAUGE_GOOD = (0, 255, 0)
GAUGE_BAD = (120, 180, 0)
STATUS_FONT_SIZE = 30
STATUS_COLOR = (255, 255, 255)

# Background
STAR_COUNT = 160
STAR_SIZES = (1, 2)
PLANET_COLOR = (60, 110, 190)
PLANET_SHADE = (10, 20, 45)
GROUND_COLOR = (90, 90, 90)

# Render loop shutdown: join(timeout) is re-polled this many times
JOIN_POLL_SECONDS = 0.1
JOIN_MAX_ATTEMPTS = 50

# Status text, keyed by mode
STATUS_TEXT = {
    "READY": "Lunar Lander\nPress Up To Play",
    "PAUSE": "Paused\nPress Up To Resume",
    "LOSE": "Game Over\nPress Up To Play",
    "WIN": "Success!\n{wins} in a row\nPress Up To Play",
}
MESSAGE_OFF_PAD = "Off Pad"
MESSAGE_BAD_ANGLE = "Bad Angle"
MESSAGE_TOO_FAST = "Too Fast"
MESSAGE_STOPPED = "Stopped"

# Saved game
STATE_PATH = Path("lunar_lander_state.json")
