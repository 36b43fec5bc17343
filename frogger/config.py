"""
Simulation settings for the crossing game.

All pixel values refer to the unscaled board: a 4 x 6 grid of 101 x 83 cells.
Rendering-only settings (window size, colors, FPS) live in frogger.game.
"""

from dataclasses import dataclass
from typing import Dict


# ----------------------------- Grid -----------------------------

CELL_WIDTH = 101
CELL_HEIGHT = 83
SPRITE_PADDING = 20  # sprites sit 20px above their cell's top edge

GRID_COLS = 4
LANE_ROWS = (1, 2, 3)  # enemy / collectible lanes
START_COL, START_ROW = 2, 5

VISIBLE_WIDTH = GRID_COLS * CELL_WIDTH

MIN_X = 0
MAX_X = (GRID_COLS - 1) * CELL_WIDTH
MIN_Y = -SPRITE_PADDING
MAX_Y = START_ROW * CELL_HEIGHT - SPRITE_PADDING

# ----------------------------- Entities -----------------------------

ENEMY_WIDTH = 99
ENEMY_PADDING = 1

PLAYER_WIDTH = 65
PLAYER_PADDING = 18

# Shrinks the player's span only; the enemy keeps its full width.
OVERLAP_TOLERANCE = 4

# Speeds are in pixels/second
ROAMING_SPEED_RANGE = (150.0, 450.0)

COLLECTIBLE_POINTS = 100
WIN_BONUS = 500

# Victory bounce
JUMP_HEIGHT = 10
JUMP_SPEED = 70.0

# Bounded rejection sampling before the deterministic scan kicks in
MAX_PLACEMENT_ATTEMPTS = 64

# ----------------------------- Timing (seconds) -----------------------------

COLLISION_RESET_DELAY = 0.06
VICTORY_POPUP_DELAY = 0.1

# ----------------------------- Sprites -----------------------------

ENEMY_SPRITE = "enemy-bug"
ROCK_SPRITE = "rock"
GEM_SPRITE = "gem-orange"
CHARACTER_SPRITES = (
    "char-boy",
    "char-cat-girl",
    "char-horn-girl",
    "char-pink-girl",
    "char-princess-girl",
)

# ----------------------------- Levels -----------------------------


@dataclass(frozen=True)
class LevelPlan:
    roaming: int  # new roaming enemies created for the level
    rocks: int  # total static enemies the level wants on the board
    gems: int


MAX_LEVEL = 3

DEFAULT_LEVEL_PLAN = LevelPlan(roaming=3, rocks=0, gems=0)

LEVEL_PLANS: Dict[int, LevelPlan] = {
    1: DEFAULT_LEVEL_PLAN,
    2: LevelPlan(roaming=0, rocks=1, gems=1),
    3: LevelPlan(roaming=0, rocks=2, gems=2),
}


def level_plan(level: int) -> LevelPlan:
    return LEVEL_PLANS.get(level, DEFAULT_LEVEL_PLAN)

