from typing import List, Tuple

from .config import (
    CELL_HEIGHT,
    CELL_WIDTH,
    GRID_COLS,
    LANE_ROWS,
    MAX_X,
    MAX_Y,
    MIN_X,
    MIN_Y,
    SPRITE_PADDING,
    START_COL,
    START_ROW,
)


def clamp(v, lo, hi):
    return lo if v < lo else hi if v > hi else v


def cell_to_px(col: int, row: int) -> Tuple[int, int]:
    # Sprites are drawn SPRITE_PADDING above the cell so they sit on the tile.
    return col * CELL_WIDTH, row * CELL_HEIGHT - SPRITE_PADDING


def px_to_cell(x: float, y: float) -> Tuple[int, int]:
    return int(round(x / CELL_WIDTH)), int(round((y + SPRITE_PADDING) / CELL_HEIGHT))


def clamp_to_board(x: float, y: float) -> Tuple[float, float]:
    return clamp(x, MIN_X, MAX_X), clamp(y, MIN_Y, MAX_Y)


def lane_y(row: int) -> int:
    return cell_to_px(0, row)[1]


def start_position() -> Tuple[int, int]:
    return cell_to_px(START_COL, START_ROW)


def lane_cells() -> List[Tuple[int, int]]:
    """Every on-board lane cell, row-major from the top lane."""
    return [cell_to_px(col, row) for row in LANE_ROWS for col in range(GRID_COLS)]


def entry_cells() -> List[Tuple[int, int]]:
    """Cells just off the left edge where roaming enemies re-enter."""
    return [(-CELL_WIDTH, lane_y(row)) for row in LANE_ROWS]
