import random

import pytest

from frogger.config import CHARACTER_SPRITES, ROCK_SPRITE
from frogger.entities import (
    Collectible,
    PlacementError,
    RoamingEnemy,
    StaticEnemy,
    find_free_cell,
    random_speed,
)
from frogger.grid import entry_cells, lane_cells
from frogger.player import Player


def occupied_by(entities):
    return lambda x, y: any(e.occupies(x, y) for e in entities)


def test_spawned_entities_never_share_a_cell():
    for seed in range(20):
        rng = random.Random(seed)
        placed = []
        for i in range(12):
            cls = (RoamingEnemy, StaticEnemy, Collectible)[i % 3]
            placed.append(cls.spawn(rng, occupied_by(placed)))
        coords = [(e.x, e.y) for e in placed]
        assert len(set(coords)) == 12
        assert set(coords) == set(lane_cells())


def test_full_board_raises():
    with pytest.raises(PlacementError):
        find_free_cell(random.Random(0), lambda x, y: True)
    with pytest.raises(PlacementError):
        find_free_cell(random.Random(0), lambda x, y: True, entering=True)


def test_scan_finds_the_last_free_cell():
    free = lane_cells()[-1]
    cell = find_free_cell(random.Random(3), lambda x, y: (x, y) != free)
    assert cell == free


def test_entering_cells_are_off_the_left_edge():
    rng = random.Random(7)
    for _ in range(20):
        assert find_free_cell(rng, lambda x, y: False, entering=True) in entry_cells()


def test_random_speed_range():
    rng = random.Random(1)
    speeds = [random_speed(rng) for _ in range(500)]
    assert all(150 <= s < 450 for s in speeds)


def test_roaming_enemy_moves_and_reenters():
    rng = random.Random(5)
    enemy = RoamingEnemy(x=0, y=63, velocity=200.0)
    enemy.tick(0.5, rng, lambda x, y: False, 404)
    assert enemy.x == 100
    assert enemy.speed == 200.0

    enemy.x = 400
    enemy.tick(0.1, rng, lambda x, y: False, 404)
    assert enemy.x == -101
    assert enemy.y in (63, 146, 229)
    assert 150 <= enemy.speed < 450


def test_static_enemy_never_moves():
    rock = StaticEnemy(x=101, y=146)
    rock.tick(10.0, random.Random(0), lambda x, y: False, 404)
    assert (rock.x, rock.y) == (101, 146)
    assert rock.speed == 0
    assert rock.sprite == ROCK_SPRITE
    assert rock.blocks(101, 146)
    assert not rock.blocks(202, 146)


def test_relocate_moves_rock_to_another_cell():
    rng = random.Random(2)
    rock = StaticEnemy(x=101, y=146)
    rock.relocate(rng, occupied_by([rock]))
    assert (rock.x, rock.y) != (101, 146)
    assert (rock.x, rock.y) in lane_cells()


def test_roaming_enemy_does_not_block():
    assert not RoamingEnemy(x=101, y=146).blocks(101, 146)


def test_collectible_defaults():
    gem = Collectible.spawn(random.Random(0), lambda x, y: False)
    assert gem.points == 100
    assert (gem.x, gem.y) in lane_cells()


# Player at column 1 of the middle lane: span is [123, 180] after the 4px tolerance.
@pytest.fixture
def player():
    return Player(x=101, y=146, sprite=CHARACTER_SPRITES[0])


@pytest.mark.parametrize("depth", [0, 5, 20])
def test_collision_is_symmetric(player, depth):
    from_left = RoamingEnemy(x=23 + depth, y=146)  # nose inside the span
    from_right = RoamingEnemy(x=180 - depth, y=146)  # tail inside the span
    assert from_left.hits(player)
    assert from_right.hits(player)


def test_collision_tolerance_band(player):
    assert not RoamingEnemy(x=22, y=146).hits(player)
    assert not RoamingEnemy(x=181, y=146).hits(player)


def test_collision_needs_same_lane(player):
    assert not RoamingEnemy(x=101, y=63).hits(player)


def test_static_enemy_never_hits(player):
    assert not StaticEnemy(x=101, y=146).hits(player)
