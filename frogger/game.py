"""
Frogger-style crossing game (pygame front end)

Cross three lanes of bugs to reach the water on the far side. From level 2
rocks block some cells and gems are worth 100 points each; crossing is worth
500. Clear level 3 to win.

Controls:
- Arrow keys: move
- C: change character
- Enter / Space / click OK: close popup
- R: restart
- Esc: quit

Run:
    python -m frogger [--seed N] [--headless --frames N]
"""

import argparse
import logging
import os
import random
from typing import Dict, List, Optional, Sequence

import pygame

from .config import (
    CELL_HEIGHT,
    CELL_WIDTH,
    CHARACTER_SPRITES,
    ENEMY_SPRITE,
    GEM_SPRITE,
    ROCK_SPRITE,
    START_ROW,
    VISIBLE_WIDTH,
)
from .player import CharacterSwitch
from .world import World

logger = logging.getLogger(__name__)


# ----------------------------- Config -----------------------------

FPS = 60

HUD_HEIGHT = 60
TILE_TOP = 50  # sprite images keep 50px of headroom above the tile they stand on
SPRITE_H = 171
FIGURE_TOP = TILE_TOP + 20  # where the figure starts inside a sprite surface

WINDOW_W = VISIBLE_WIDTH
WINDOW_H = HUD_HEIGHT + TILE_TOP + (START_ROW + 1) * CELL_HEIGHT + 40

POPUP_W, POPUP_H = 300, 220

KEY_DIRECTIONS = {
    pygame.K_LEFT: "left",
    pygame.K_UP: "up",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
}
CLOSE_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)

CONTROLS_HINT = "Arrows Move  |  C Character  |  R Restart  |  Esc Quit"

# Colors
COL_BG = (30, 30, 30)
COL_WATER = (64, 164, 223)
COL_WATER_LIGHT = (100, 190, 240)
COL_STONE = (150, 150, 150)
COL_STONE_EDGE = (120, 120, 120)
COL_GRASS = (102, 204, 102)
COL_GRASS_DARK = (85, 180, 85)
COL_SHADOW = (0, 0, 0, 80)
COL_TEXT = (255, 255, 255)
COL_UI_BG = (30, 30, 30, 200)
COL_BUG = (232, 80, 84)
COL_ROCK = (128, 120, 110)
COL_GEM = (255, 170, 55)

CHARACTER_COLORS = {
    "char-boy": (255, 220, 60),
    "char-cat-girl": (245, 245, 245),
    "char-horn-girl": (170, 110, 255),
    "char-pink-girl": (255, 150, 190),
    "char-princess-girl": (90, 220, 140),
}


# ----------------------------- Sprites -----------------------------

def _figure_rect(surf: pygame.Surface, inset: int = 6) -> pygame.Rect:
    return pygame.Rect(inset, FIGURE_TOP + inset, surf.get_width() - inset * 2, CELL_HEIGHT - inset * 2)


def _shadow(surf: pygame.Surface, r: pygame.Rect):
    shadow = pygame.Surface((r.w + 4, 12), pygame.SRCALPHA)
    pygame.draw.ellipse(shadow, COL_SHADOW, shadow.get_rect())
    surf.blit(shadow, (r.x - 2, r.bottom - 6))


def paint_bug(surf: pygame.Surface):
    r = _figure_rect(surf).inflate(0, -24)
    _shadow(surf, r)

    pygame.draw.rect(surf, COL_BUG, r, border_radius=14)
    bottom = pygame.Rect(r.x, r.centery, r.w, r.h // 2)
    dark = tuple(max(0, c - 40) for c in COL_BUG)
    pygame.draw.rect(surf, dark, bottom, border_radius=14)

    # Eyes face right, the direction of travel
    for dy in (-7, 7):
        eye = (r.right - 14, r.centery + dy)
        pygame.draw.circle(surf, (255, 255, 255), eye, 5)
        pygame.draw.circle(surf, (40, 40, 40), (eye[0] + 2, eye[1]), 2)

    hl = pygame.Rect(r.x + 8, r.y + 4, max(0, r.w - 30), 4)
    pygame.draw.rect(surf, (255, 255, 255, 120), hl, border_radius=2)


def paint_rock(surf: pygame.Surface):
    r = _figure_rect(surf, inset=10)
    _shadow(surf, r)
    pygame.draw.ellipse(surf, COL_ROCK, r)
    dark = tuple(max(0, c - 30) for c in COL_ROCK)
    pygame.draw.ellipse(surf, dark, r.inflate(-20, -30).move(6, 10))
    pygame.draw.ellipse(surf, (200, 195, 185), (r.x + 16, r.y + 10, 22, 8))


def paint_gem(surf: pygame.Surface):
    r = _figure_rect(surf, inset=22)
    _shadow(surf, r)
    points = [
        (r.centerx, r.top),
        (r.right, r.top + r.h // 3),
        (r.centerx, r.bottom),
        (r.left, r.top + r.h // 3),
    ]
    pygame.draw.polygon(surf, COL_GEM, points)
    light = tuple(min(255, c + 50) for c in COL_GEM)
    pygame.draw.polygon(surf, light, [points[0], points[1], (r.centerx, r.top + r.h // 3)])
    pygame.draw.polygon(surf, (120, 70, 0), points, width=2)


def paint_character(color):
    def paint(surf: pygame.Surface):
        r = _figure_rect(surf).inflate(-36, -8)
        _shadow(surf, r)

        body = pygame.Rect(r.x, r.y + 22, r.w, r.h - 22)
        pygame.draw.ellipse(surf, color, body)

        head_r = r.w // 2 - 2
        head = (r.centerx, r.y + head_r)
        pygame.draw.circle(surf, color, head, head_r)

        for dx in (-6, 6):
            eye = (head[0] + dx, head[1] - 2)
            pygame.draw.circle(surf, (50, 50, 50), eye, 3)
            pygame.draw.circle(surf, (255, 255, 255), (eye[0] - 1, eye[1] - 1), 1)

        arm_color = tuple(max(0, c - 30) for c in color)
        pygame.draw.ellipse(surf, arm_color, (r.x - 2, body.y + 6, 8, 14))
        pygame.draw.ellipse(surf, arm_color, (r.right - 6, body.y + 6, 8, 14))

    return paint


PAINTERS = {
    ENEMY_SPRITE: paint_bug,
    ROCK_SPRITE: paint_rock,
    GEM_SPRITE: paint_gem,
    **{name: paint_character(CHARACTER_COLORS[name]) for name in CHARACTER_SPRITES},
}


class SpriteCache:
    """Draws each sprite once and hands out the cached surface by identifier."""

    def __init__(self, painters=PAINTERS):
        self._painters = painters
        self._surfaces: Dict[str, pygame.Surface] = {}

    def load(self, identifiers: Sequence[str]):
        for identifier in identifiers:
            self.get(identifier)

    def get(self, identifier: str) -> pygame.Surface:
        surf = self._surfaces.get(identifier)
        if surf is None:
            surf = pygame.Surface((CELL_WIDTH, SPRITE_H), pygame.SRCALPHA)
            self._painters[identifier](surf)
            self._surfaces[identifier] = surf
        return surf


# ----------------------------- HUD -----------------------------

class Hud:
    """Points and level labels; the World pushes changes through set_points/set_level."""

    def __init__(self, font: pygame.font.Font, small_font: Optional[pygame.font.Font] = None):
        self.font = font
        self.controls_label = (small_font or font).render(CONTROLS_HINT, True, (200, 200, 200))
        self.points_label: Optional[pygame.Surface] = None
        self.level_label: Optional[pygame.Surface] = None
        self.set_points(0)
        self.set_level(1)

    def set_points(self, value: int) -> None:
        self.points_label = self.font.render(f"Points: {value}", True, COL_TEXT)

    def set_level(self, value: int) -> None:
        self.level_label = self.font.render(f"Level {value}", True, (255, 230, 80))

    def draw(self, surf: pygame.Surface):
        pygame.draw.rect(surf, COL_BG, (0, 0, WINDOW_W, HUD_HEIGHT))
        y = (HUD_HEIGHT - self.points_label.get_height()) // 2
        surf.blit(self.points_label, (12, y))
        surf.blit(self.level_label, (WINDOW_W - self.level_label.get_width() - 12, y))

        hint = self.controls_label
        surf.blit(hint, ((WINDOW_W - hint.get_width()) // 2, WINDOW_H - 28))


# ----------------------------- Game -----------------------------

class Game:
    def __init__(self, seed: Optional[int] = None, fps: int = FPS):
        pygame.init()
        pygame.display.set_caption("Frogger")
        self.screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        self.clock = pygame.time.Clock()
        self.fps = fps

        self.font = pygame.font.SysFont("consolas", 22)
        self.font_big = pygame.font.SysFont("consolas", 30, bold=True)

        self.sprites = SpriteCache()
        self.sprites.load(list(PAINTERS))

        self.font_small = pygame.font.SysFont("consolas", 13)
        self.hud = Hud(self.font, self.font_small)
        self.world = World(rng=random.Random(seed), display=self.hud)
        self.running = True
        self._ok_rect: Optional[pygame.Rect] = None

        self.reset()

    def reset(self):
        self.world.reset_game()

    def run(self, max_frames: Optional[int] = None):
        frames = 0
        while self.running:
            dt = self.clock.tick(self.fps) / 1000.0
            self.step(dt)
            frames += 1
            if max_frames is not None and frames >= max_frames:
                break
        pygame.quit()

    def step(self, dt: float):
        self._handle_events()
        self.world.update(dt)
        self._draw()

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self._ok_rect is not None and self._ok_rect.collidepoint(event.pos):
                    self.world.close_popup()

            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key: int):
        if key == pygame.K_ESCAPE:
            self._quit()
            return

        popup = self.world.popup
        if popup is not None:
            # Only the popup's own controls work while it is open.
            if key in CLOSE_KEYS:
                self.world.close_popup()
            elif isinstance(popup.content, CharacterSwitch) and key in (pygame.K_LEFT, pygame.K_RIGHT):
                popup.content.switch(previous=key == pygame.K_LEFT)
            return

        if key == pygame.K_r:
            self.reset()
        elif key == pygame.K_c:
            self.world.open_character_switch()
        elif key in KEY_DIRECTIONS:
            self.world.handle_input(KEY_DIRECTIONS[key])

    # ---------------- drawing ----------------

    def _draw(self):
        self.screen.fill(COL_BG)
        self._draw_board()

        world = self.world
        for item in world.collectibles:
            self._blit_sprite(item.sprite, item.x, item.y)
        for enemy in world.enemies:
            self._blit_sprite(enemy.sprite, enemy.x, enemy.y)
        self._blit_sprite(world.player.sprite, world.player.x, world.player.y)

        self.hud.draw(self.screen)
        self._draw_popup()

        pygame.display.flip()

    def _blit_sprite(self, identifier: str, x: float, y: float):
        self.screen.blit(self.sprites.get(identifier), (int(x), HUD_HEIGHT + int(y)))

    def _draw_board(self):
        for row in range(START_ROW + 1):
            y = HUD_HEIGHT + TILE_TOP + row * CELL_HEIGHT
            band = pygame.Rect(0, y, WINDOW_W, CELL_HEIGHT)
            if row == 0:
                pygame.draw.rect(self.screen, COL_WATER, band)
                for x in range(0, WINDOW_W, CELL_WIDTH // 2):
                    pygame.draw.ellipse(self.screen, COL_WATER_LIGHT, (x + 8, y + 30, CELL_WIDTH // 3, 6))
            elif row <= 3:
                pygame.draw.rect(self.screen, COL_STONE, band)
                pygame.draw.rect(self.screen, COL_STONE_EDGE, (0, y, WINDOW_W, 3))
            else:
                pygame.draw.rect(self.screen, COL_GRASS, band)
                for col in range(0, WINDOW_W, CELL_WIDTH):
                    if (col // CELL_WIDTH + row) % 2:
                        pygame.draw.rect(self.screen, COL_GRASS_DARK, (col, y, CELL_WIDTH, CELL_HEIGHT))

    def _draw_popup(self):
        popup = self.world.popup
        if popup is None:
            self._ok_rect = None
            return

        shade = pygame.Surface((WINDOW_W, WINDOW_H), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 120))
        self.screen.blit(shade, (0, 0))

        x = (WINDOW_W - POPUP_W) // 2
        y = (WINDOW_H - POPUP_H) // 2
        card = pygame.Surface((POPUP_W, POPUP_H), pygame.SRCALPHA)
        pygame.draw.rect(card, (40, 40, 60, 230), card.get_rect(), border_radius=20)
        pygame.draw.rect(card, (100, 200, 255, 60), card.get_rect(), width=3, border_radius=20)

        title = self.font_big.render(popup.title, True, (255, 230, 80))
        card.blit(title, ((POPUP_W - title.get_width()) // 2, 16))

        if isinstance(popup.content, CharacterSwitch):
            self._draw_character_switch(card, popup.content)
        else:
            lines: List[str] = str(popup.content).splitlines() or [""]
            for i, line in enumerate(lines):
                txt = self.font.render(line, True, COL_TEXT)
                card.blit(txt, ((POPUP_W - txt.get_width()) // 2, 80 + i * 26))

        ok = self.font.render("OK", True, (150, 255, 150))
        ok_rect = pygame.Rect(0, 0, 80, 36)
        ok_rect.midbottom = (POPUP_W // 2, POPUP_H - 14)
        pygame.draw.rect(card, (70, 70, 100), ok_rect, border_radius=8)
        card.blit(ok, ok.get_rect(center=ok_rect.center))

        self.screen.blit(card, (x, y))
        self._ok_rect = ok_rect.move(x, y)

    def _draw_character_switch(self, card: pygame.Surface, switch: CharacterSwitch):
        sprite = self.sprites.get(switch.current)
        figure = sprite.subsurface(pygame.Rect(0, FIGURE_TOP - 10, CELL_WIDTH, CELL_HEIGHT))
        card.blit(figure, ((POPUP_W - CELL_WIDTH) // 2, 60))

        prev = self.font_big.render("<", True, COL_TEXT)
        nxt = self.font_big.render(">", True, COL_TEXT)
        card.blit(prev, (40, 90))
        card.blit(nxt, (POPUP_W - 40 - nxt.get_width(), 90))

    def _quit(self):
        self.running = False


# ----------------------------- CLI -----------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frogger",
        description="Cross the road, dodge the bugs, collect the gems.",
    )
    parser.add_argument("--seed", type=int, help="Seed for enemy and item placement.")
    parser.add_argument("--fps", type=int, default=FPS, help="Frame rate cap.")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Force the SDL dummy video driver (for CI) and stop after --frames frames.",
    )
    parser.add_argument("--frames", type=int, help="Exit after this many frames.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level name.")
    return parser


def main(argv=None):
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    frames = args.frames
    if args.headless:
        os.environ["SDL_VIDEODRIVER"] = "dummy"
        if frames is None:
            frames = args.fps * 2

    logger.info("starting seed=%s fps=%d", args.seed, args.fps)
    Game(seed=args.seed, fps=args.fps).run(max_frames=frames)
    return 0


if __name__ == "__main__":
    main()
