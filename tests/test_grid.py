from frogger.config import CELL_HEIGHT, CELL_WIDTH, GRID_COLS, LANE_ROWS, MAX_X, MAX_Y, MIN_Y
from frogger.grid import (
    cell_to_px,
    clamp,
    clamp_to_board,
    entry_cells,
    lane_cells,
    lane_y,
    px_to_cell,
    start_position,
)


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_cell_to_px_and_back():
    assert cell_to_px(2, 5) == (202, 395)
    assert cell_to_px(0, 1) == (0, 63)
    for col in range(GRID_COLS):
        for row in range(6):
            assert px_to_cell(*cell_to_px(col, row)) == (col, row)


def test_start_position():
    assert start_position() == (202, 395)


def test_board_bounds():
    assert MAX_X == 3 * CELL_WIDTH
    assert MAX_Y == 5 * CELL_HEIGHT - 20
    assert MIN_Y == -20
    assert clamp_to_board(-101, -103) == (0, -20)
    assert clamp_to_board(404, 478) == (303, 395)


def test_lane_and_entry_cells():
    cells = lane_cells()
    assert len(cells) == GRID_COLS * len(LANE_ROWS)
    assert len(set(cells)) == len(cells)
    assert {y for _, y in cells} == {lane_y(r) for r in LANE_ROWS} == {63, 146, 229}
    assert entry_cells() == [(-101, 63), (-101, 146), (-101, 229)]
