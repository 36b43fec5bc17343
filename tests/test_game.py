import pygame
import pytest

from frogger.config import CHARACTER_SPRITES, ENEMY_SPRITE, GEM_SPRITE, ROCK_SPRITE
from frogger.game import CONTROLS_HINT, Game, SpriteCache, main
from frogger.player import CharacterSwitch


@pytest.fixture
def game():
    g = Game(seed=42)
    yield g
    pygame.quit()


def press(game, key):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key))
    game.step(0.0)


def test_sprite_cache_returns_same_surface(game):
    cache = SpriteCache()
    for identifier in (ENEMY_SPRITE, ROCK_SPRITE, GEM_SPRITE) + CHARACTER_SPRITES:
        surf = cache.get(identifier)
        assert surf is cache.get(identifier)
        assert surf.get_width() == 101


def test_arrow_keys_move_the_player(game):
    game.world.enemies.clear()
    press(game, pygame.K_UP)
    assert game.world.player.y == 312
    press(game, pygame.K_LEFT)
    assert game.world.player.x == 101


def test_hud_tracks_world(game):
    game.world.add_points(100)
    assert game.hud.points_label is not None
    game.step(1 / 60)


def test_character_popup_flow(game):
    press(game, pygame.K_c)
    popup = game.world.popup
    assert isinstance(popup.content, CharacterSwitch)

    press(game, pygame.K_UP)  # ignored while the popup is open
    assert game.world.player.y == 395

    press(game, pygame.K_RIGHT)
    press(game, pygame.K_RETURN)
    assert game.world.popup is None
    assert game.world.player.sprite == CHARACTER_SPRITES[1]


def test_restart_and_quit(game):
    game.world.add_points(250)
    press(game, pygame.K_r)
    assert game.world.session.points == 0
    press(game, pygame.K_ESCAPE)
    assert not game.running


def test_run_a_few_frames(game):
    game.run(max_frames=5)


def test_cli_headless():
    assert main(["--headless", "--frames", "3", "--seed", "1"]) == 0


def test_restart_right_after_final_win_shows_no_victory_popup(game):
    world = game.world
    world.enemies.clear()
    world.set_level(3)
    world.player.x, world.player.y = 202, 63
    assert world.handle_input("up")
    assert world.player.won

    press(game, pygame.K_r)
    game.step(0.2)
    assert world.session.level == 1
    assert not world.player.won
    assert world.popup is None


def test_controls_hint_lists_every_key(game):
    for key in ("Arrows", "C Character", "R Restart", "Esc Quit"):
        assert key in CONTROLS_HINT
    assert game.hud.controls_label.get_width() > 0
    game.step(0.0)
