# dinorun/tests/controls_unit.py
import pygame

from dinorun.game.controls import InputAdapter, Intent, apply_intents
from dinorun.game.world import World, Phase


def key_down(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)

def key_up(key):
    return pygame.event.Event(pygame.KEYUP, key=key)


def test_jump_is_edge_triggered():
    ia = InputAdapter()
    assert ia.translate(key_down(pygame.K_SPACE)) == [Intent.JUMP]
    # OS key-repeat while held
    assert ia.translate(key_down(pygame.K_SPACE)) == []
    # the other jump key while space is held is still the same press
    assert ia.translate(key_down(pygame.K_UP)) == []
    assert ia.translate(key_up(pygame.K_SPACE)) == []
    assert ia.translate(key_up(pygame.K_UP)) == []
    assert ia.translate(key_down(pygame.K_UP)) == [Intent.JUMP]


def test_duck_is_level_triggered():
    ia = InputAdapter()
    assert ia.translate(key_down(pygame.K_DOWN)) == [Intent.DUCK_ON]
    assert ia.translate(key_down(pygame.K_DOWN)) == []
    assert ia.translate(key_down(pygame.K_s)) == []
    assert ia.translate(key_up(pygame.K_DOWN)) == []      # 's' still held
    assert ia.translate(key_up(pygame.K_s)) == [Intent.DUCK_OFF]


def test_pointer_and_touch_always_jump():
    ia = InputAdapter()
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10))
    tap = pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5, finger_id=0, touch_id=0)
    assert ia.translate(click) == [Intent.JUMP]
    assert ia.translate(click) == [Intent.JUMP]
    assert ia.translate(tap) == [Intent.JUMP]


def test_quit_and_unknown_events():
    ia = InputAdapter()
    assert ia.translate(pygame.event.Event(pygame.QUIT)) == [Intent.QUIT]
    assert ia.translate(key_down(pygame.K_ESCAPE)) == [Intent.QUIT]
    assert ia.translate(key_down(pygame.K_a)) == []
    assert ia.translate(pygame.event.Event(pygame.MOUSEMOTION, pos=(1, 1), rel=(1, 1), buttons=(0, 0, 0))) == []


def test_intents_apply_immediately():
    world = World(seed=5)
    assert apply_intents(world, [Intent.JUMP]) is True
    assert world.phase is Phase.PLAYING

    apply_intents(world, [Intent.JUMP])
    assert world.dino.jumping and world.dino.vy < 0   # impulse applied before any tick

    apply_intents(world, [Intent.DUCK_ON])
    assert world.dino.ducking
    apply_intents(world, [Intent.DUCK_OFF])
    assert not world.dino.ducking

    assert apply_intents(world, [Intent.QUIT]) is False
