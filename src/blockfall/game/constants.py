from __future__ import annotations

GRID_WIDTH = 10
GRID_HEIGHT = 20
EMPTY = ""

INITIAL_SPEED = 1000  # ms between gravity steps at level 1
MIN_SPEED = 100
SPEED_STEP = 50
TIME_ATTACK_TICK_MS = 1000

MAX_HISTORY = 10

DEFAULT_COLORS = (
    "#FF0000",  # red
    "#00FF00",  # green
    "#0000FF",  # blue
    "#FFFF00",  # yellow
    "#FF00FF",  # magenta
    "#00FFFF",  # cyan
    "#FFA500",  # orange
)
DEFAULT_SELECTED_COLORS = 4
MIN_COLORS = 2
MAX_COLORS = 7

# Wall-kick offsets tried, in order, after a clockwise rotation fails in place
WALL_KICKS = ((-1, 0), (1, 0), (0, -1), (-2, 0), (2, 0), (0, -2))
