"""
The game world: entities, session counters and the rules that tie them together.

A World is a plain object with no module-level state, so several games (or
tests) can run side by side. The host drives it with update(dt) once per frame
and feeds it directions through handle_input().
"""

from __future__ import annotations

import heapq
import itertools
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Tuple

from .config import (
    COLLISION_RESET_DELAY,
    MAX_LEVEL,
    VICTORY_POPUP_DELAY,
    VISIBLE_WIDTH,
    WIN_BONUS,
    level_plan,
)
from .entities import Collectible, Enemy, RoamingEnemy, StaticEnemy
from .player import CharacterSwitch, Player

logger = logging.getLogger(__name__)


class Display(Protocol):
    def set_points(self, value: int) -> None: ...

    def set_level(self, value: int) -> None: ...


@dataclass
class Session:
    level: int = 1
    max_level: int = MAX_LEVEL
    points: int = 0
    collision_detected: bool = False
    popup_visible: bool = False


@dataclass
class Popup:
    title: str
    content: Any = ""
    on_close: Optional[Callable[[], None]] = None


class Scheduler:
    """Fire-once deferred actions keyed by a clock that only advances with update()."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._queue)

    def call_later(self, delay: float, action: Callable[[], None]) -> float:
        due = self.now + delay
        heapq.heappush(self._queue, (due, next(self._seq), action))
        return due

    def advance(self, dt: float) -> int:
        self.now += dt
        ran = 0
        while self._queue and self._queue[0][0] <= self.now:
            _, _, action = heapq.heappop(self._queue)
            action()
            ran += 1
        return ran


class World:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        display: Optional[Display] = None,
        *,
        max_level: int = MAX_LEVEL,
        visible_width: float = VISIBLE_WIDTH,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.display = display
        self.visible_width = visible_width

        self.session = Session(max_level=max_level)
        self.player = Player()
        self.enemies: List[Enemy] = []
        self.collectibles: List[Collectible] = []
        self.scheduler = Scheduler()
        self.popup: Optional[Popup] = None

    # ---------------- queries ----------------

    def position_occupied(self, x: float, y: float) -> bool:
        return any(e.occupies(x, y) for e in self.enemies) or any(
            c.occupies(x, y) for c in self.collectibles
        )

    # ---------------- per-frame ----------------

    def update(self, dt: float):
        self.scheduler.advance(dt)

        for enemy in self.enemies:
            enemy.tick(dt, self.rng, self.position_occupied, self.visible_width)

        self.player.update(dt)
        self.check_collisions()

    def check_collisions(self) -> bool:
        if self.session.collision_detected:
            return False

        for enemy in self.enemies:
            if enemy.hits(self.player):
                self.session.collision_detected = True
                logger.info("collision at (%.0f, %.0f)", self.player.x, self.player.y)
                # Grace period before snapping back to the start cell.
                self.scheduler.call_later(COLLISION_RESET_DELAY, self.reset_player)
                return True
        return False

    # ---------------- input ----------------

    def handle_input(self, direction: str) -> bool:
        """Move the player one cell. Returns True if the move was committed."""
        if self.session.popup_visible or self.player.won:
            return False

        target = self.player.target(direction)
        if target is None:
            return False

        new_x, new_y = target
        if any(e.blocks(new_x, new_y) for e in self.enemies):
            logger.debug("move %s blocked at (%.0f, %.0f)", direction, new_x, new_y)
            return False

        for item in self.collectibles:
            if item.occupies(new_x, new_y):
                self.pick_up(item)
                break

        self.player.x, self.player.y = new_x, new_y
        self.check_win()
        return True

    def pick_up(self, item: Collectible):
        if item not in self.collectibles:
            return
        self.collectibles.remove(item)
        self.add_points(item.points)

    def check_win(self) -> bool:
        if self.player.y >= 0:
            return False

        self.add_points(WIN_BONUS)

        if self.session.level >= self.session.max_level:
            logger.info("game won with %d points", self.session.points)
            self.player.won = True
            self.scheduler.call_later(VICTORY_POPUP_DELAY, self._show_victory)
        else:
            self.set_level(self.session.level + 1)
            logger.info("advanced to level %d", self.session.level)
            self.reset_player()
            self.prepare_level()
        return True

    def _show_victory(self):
        self.show_popup("You Won!", "Congratulations you won!", on_close=self.reset_game)

    # ---------------- session ----------------

    def add_points(self, delta: int):
        self.session.points += delta
        if self.display is not None:
            self.display.set_points(self.session.points)

    def set_level(self, level: int):
        self.session.level = level
        if self.display is not None:
            self.display.set_level(level)

    def reset_player(self):
        self.player.reset()
        self.session.collision_detected = False

    def prepare_level(self):
        self.collectibles.clear()
        occupied = self.position_occupied

        rocks = [e for e in self.enemies if isinstance(e, StaticEnemy)]
        if self.session.level > 1:
            for rock in rocks:
                rock.relocate(self.rng, occupied)

        plan = level_plan(self.session.level)

        for _ in range(plan.roaming):
            self.enemies.append(RoamingEnemy.spawn(self.rng, occupied))

        for _ in range(plan.rocks - len(rocks)):
            self.enemies.append(StaticEnemy.spawn(self.rng, occupied))

        for _ in range(plan.gems):
            self.collectibles.append(Collectible.spawn(self.rng, occupied))

    def reset_game(self):
        # Drops a pending victory popup or collision reset from the old game.
        self.scheduler = Scheduler()
        self.reset_player()
        self.session.points = 0
        self.add_points(0)
        self.set_level(1)
        self.enemies.clear()
        self.prepare_level()
        logger.info("new game")

    # ---------------- popups ----------------

    def show_popup(self, title: str, content: Any = "", on_close: Optional[Callable[[], None]] = None) -> bool:
        if self.popup is not None:
            logger.warning("popup %r refused, %r is still open", title, self.popup.title)
            return False
        self.popup = Popup(title=title, content=content, on_close=on_close)
        self.session.popup_visible = True
        return True

    def close_popup(self):
        popup = self.popup
        if popup is None:
            return
        self.popup = None
        self.session.popup_visible = False
        if popup.on_close is not None:
            popup.on_close()

    def open_character_switch(self) -> Optional[CharacterSwitch]:
        if self.session.popup_visible or self.player.won:
            return None
        switch = CharacterSwitch(current=self.player.sprite)
        self.show_popup(
            "Change Character",
            switch,
            on_close=lambda: self.player.set_character(switch.current),
        )
        return switch
