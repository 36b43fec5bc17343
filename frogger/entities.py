"""
Enemies and collectibles, plus the shared placement routine.

Placement only guarantees that nothing spawns on an exact (x, y) that is already
taken. Roaming enemies move continuously afterwards and may overlap each other.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Tuple

from .config import (
    CELL_WIDTH,
    COLLECTIBLE_POINTS,
    ENEMY_PADDING,
    ENEMY_SPRITE,
    ENEMY_WIDTH,
    GEM_SPRITE,
    GRID_COLS,
    LANE_ROWS,
    MAX_PLACEMENT_ATTEMPTS,
    OVERLAP_TOLERANCE,
    ROAMING_SPEED_RANGE,
    ROCK_SPRITE,
)
from .grid import entry_cells, lane_cells, lane_y

if TYPE_CHECKING:
    from .player import Player

logger = logging.getLogger(__name__)

OccupiedFn = Callable[[float, float], bool]


class PlacementError(RuntimeError):
    """Raised when every candidate cell is already taken."""


def find_free_cell(rng: random.Random, occupied: OccupiedFn, *, entering: bool = False) -> Tuple[int, int]:
    """
    Pick a random lane cell that `occupied` reports as free.

    With entering=True the column is fixed just off the left edge so a roaming
    enemy can drive back onto the board.
    """
    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        y = lane_y(rng.choice(LANE_ROWS))
        x = -CELL_WIDTH if entering else rng.randrange(GRID_COLS) * CELL_WIDTH
        if not occupied(x, y):
            return x, y

    candidates = entry_cells() if entering else lane_cells()
    logger.debug("random placement exhausted, scanning %d cells", len(candidates))
    for x, y in candidates:
        if not occupied(x, y):
            return x, y

    raise PlacementError(f"no free {'entry' if entering else 'lane'} cell left")


def random_speed(rng: random.Random) -> float:
    lo, hi = ROAMING_SPEED_RANGE
    return lo + rng.random() * (hi - lo)


# ----------------------------- Enemies -----------------------------

@dataclass(eq=False)
class Enemy:
    x: float
    y: float
    sprite: str = ENEMY_SPRITE

    width: ClassVar[int] = ENEMY_WIDTH
    padding: ClassVar[int] = ENEMY_PADDING
    blocking: ClassVar[bool] = False

    @property
    def speed(self) -> float:
        return 0.0

    def occupies(self, x: float, y: float) -> bool:
        return self.x == x and self.y == y

    def blocks(self, x: float, y: float) -> bool:
        return self.blocking and self.occupies(x, y)

    def tick(self, dt: float, rng: random.Random, occupied: OccupiedFn, visible_width: float):
        pass

    def hits(self, player: Player) -> bool:
        return False


@dataclass(eq=False)
class RoamingEnemy(Enemy):
    velocity: float = ROAMING_SPEED_RANGE[0]  # px/sec, always rightwards

    @classmethod
    def spawn(cls, rng: random.Random, occupied: OccupiedFn, sprite: str = ENEMY_SPRITE) -> RoamingEnemy:
        x, y = find_free_cell(rng, occupied)
        return cls(x=x, y=y, sprite=sprite, velocity=random_speed(rng))

    @property
    def speed(self) -> float:
        return self.velocity

    def tick(self, dt: float, rng: random.Random, occupied: OccupiedFn, visible_width: float):
        self.x += self.velocity * dt
        if self.x > visible_width:
            self.respawn(rng, occupied)

    def respawn(self, rng: random.Random, occupied: OccupiedFn):
        self.velocity = random_speed(rng)
        self.x, self.y = find_free_cell(rng, occupied, entering=True)

    def hits(self, player: Player) -> bool:
        if self.y != player.y:
            return False

        min_x, max_x = player.hit_span(OVERLAP_TOLERANCE)
        nose = self.x + self.padding + self.width
        tail = self.x

        # Either edge of the enemy inside the player's span counts as a hit.
        return min_x <= nose <= max_x or min_x <= tail <= max_x


@dataclass(eq=False)
class StaticEnemy(Enemy):
    sprite: str = ROCK_SPRITE

    blocking: ClassVar[bool] = True

    @classmethod
    def spawn(cls, rng: random.Random, occupied: OccupiedFn, sprite: str = ROCK_SPRITE) -> StaticEnemy:
        x, y = find_free_cell(rng, occupied)
        return cls(x=x, y=y, sprite=sprite)

    def relocate(self, rng: random.Random, occupied: OccupiedFn):
        self.x, self.y = find_free_cell(rng, occupied)


# ----------------------------- Collectibles -----------------------------

@dataclass(eq=False)
class Collectible:
    x: float
    y: float
    points: int = COLLECTIBLE_POINTS
    sprite: str = GEM_SPRITE

    @classmethod
    def spawn(
        cls,
        rng: random.Random,
        occupied: OccupiedFn,
        points: int = COLLECTIBLE_POINTS,
        sprite: str = GEM_SPRITE,
    ) -> Collectible:
        x, y = find_free_cell(rng, occupied)
        return cls(x=x, y=y, points=points, sprite=sprite)

    def occupies(self, x: float, y: float) -> bool:
        return self.x == x and self.y == y
