from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Sequence, Tuple

from .config import (
    CELL_HEIGHT,
    CELL_WIDTH,
    CHARACTER_SPRITES,
    JUMP_HEIGHT,
    JUMP_SPEED,
    PLAYER_PADDING,
    PLAYER_WIDTH,
)
from .grid import clamp_to_board, start_position

# direction -> (dx, dy) in cells
STEPS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


@dataclass(eq=False)
class Player:
    x: float = start_position()[0]
    y: float = start_position()[1]
    sprite: str = CHARACTER_SPRITES[0]
    won: bool = False
    direction: str = "up"  # victory bounce phase
    jump_min_y: Optional[float] = None
    jump_max_y: Optional[float] = None

    width: ClassVar[int] = PLAYER_WIDTH
    padding: ClassVar[int] = PLAYER_PADDING

    def target(self, direction: str) -> Optional[Tuple[float, float]]:
        """Cell one step away in `direction`, clamped to the board. None for unknown input."""
        step = STEPS.get(direction)
        if step is None:
            return None
        dc, dr = step
        return clamp_to_board(self.x + dc * CELL_WIDTH, self.y + dr * CELL_HEIGHT)

    def hit_span(self, tolerance: float = 0) -> Tuple[float, float]:
        left = self.x + self.padding
        return left + tolerance, left + self.width - tolerance

    def update(self, dt: float):
        if self.won:
            self.jump(dt)

    def jump(self, dt: float):
        # Bounce between jump_min_y and jump_min_y + JUMP_HEIGHT until reset.
        if self.jump_min_y is None:
            self.jump_min_y = self.y
            self.jump_max_y = self.y + JUMP_HEIGHT

        if self.y < self.jump_max_y and self.direction == "up":
            self.y += JUMP_SPEED * dt
        else:
            self.direction = "down"

        if self.direction == "down" and self.y > self.jump_min_y:
            self.y -= JUMP_SPEED * dt
        else:
            self.direction = "up"

    def reset(self):
        self.x, self.y = start_position()
        self.won = False
        self.direction = "up"
        self.jump_min_y = None
        self.jump_max_y = None

    def set_character(self, sprite: str = CHARACTER_SPRITES[0]):
        self.sprite = sprite


class CharacterSwitch:
    """Cycles through the available player sprites, wrapping at both ends."""

    def __init__(self, sprites: Sequence[str] = CHARACTER_SPRITES, current: Optional[str] = None):
        self.sprites = tuple(sprites)
        self.index = self.sprites.index(current) if current in self.sprites else 0

    @property
    def current(self) -> str:
        return self.sprites[self.index]

    def switch(self, previous: bool = False) -> str:
        step = -1 if previous else 1
        self.index = (self.index + step) % len(self.sprites)
        return self.current
