# dinorun/tests/render_unit.py
import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from dinorun.game.config import WIDTH, HEIGHT, COLOR_SKY_TOP, COLOR_DINO, COLOR_DINO_BODY, COLOR_CACTUS
from dinorun.game.obstacles import Bird, Cactus
from dinorun.game.render import Renderer, leg_offset, make_sky, particle_color
from dinorun.game.effects import Particle
from dinorun.game.world import World


def rgb(surf, pos):
    return tuple(surf.get_at(pos))[:3]


def test_sky_gradient_ends():
    sky = make_sky((8, 50))
    assert rgb(sky, (0, 0)) == COLOR_SKY_TOP
    top, bottom = rgb(sky, (0, 0)), rgb(sky, (0, 49))
    assert all(b >= t for t, b in zip(top, bottom))


def test_draw_world_every_phase():
    surf = pygame.Surface((WIDTH, HEIGHT), 0, 32)
    renderer = Renderer(surf)
    world = World(seed=11)

    renderer.draw(world)                    # waiting, hint shown
    world.handle_jump()
    for _ in range(300):
        world.step()
        renderer.draw(world)
    world.obstacles.append(Cactus(x=world.dino.x + world.game_speed))
    world.step()
    renderer.draw(world)                    # game over banner + explosion


def test_dino_and_cactus_pixels():
    surf = pygame.Surface((WIDTH, HEIGHT), 0, 32)
    renderer = Renderer(surf)
    world = World(seed=2)
    world.obstacles.append(Cactus(x=400))
    renderer.draw(world, hud=False)

    assert rgb(surf, (0, 0)) == COLOR_SKY_TOP
    # head block of the dino, left of the eye
    assert rgb(surf, (80 + 27, 300 + 2)) == COLOR_DINO
    # belly is drawn over the bottom of the head
    assert rgb(surf, (80 + 27, 300 + 22)) == COLOR_DINO_BODY
    # cactus trunk
    assert rgb(surf, (400 + 10, 310 + 2)) == COLOR_CACTUS


def test_bird_wings_flap_only_visually():
    surf = pygame.Surface((WIDTH, HEIGHT), 0, 32)
    renderer = Renderer(surf)
    world = World(seed=4)
    bird = Bird(x=400, y=250, initial_y=250)
    world.obstacles.append(bird)
    renderer.draw(world, hud=False)
    renderer.draw(world, hud=False)
    assert bird.wing_phase > 0
    assert (bird.x, bird.y) == (400, 250)
    assert bird.hitbox().y == 252


def test_leg_offset_alternates():
    assert leg_offset(0, 8) == 0
    assert leg_offset(6, 8) == 3        # period max(10, 12) = 12
    assert leg_offset(12, 8) == 0
    assert leg_offset(5, 24) == 3       # period floored at 10


def test_particle_alpha_fades():
    p = Particle(x=0, y=0, vx=0, vy=0, life=15, max_life=30, size=2)
    assert particle_color(p)[3] == 127
    red = Particle(x=0, y=0, vx=0, vy=0, life=1, max_life=60, size=2, color=(239, 68, 68))
    assert particle_color(red) == (239, 68, 68)
