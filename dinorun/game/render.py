# dinorun/game/render.py
from __future__ import annotations
import math
from typing import Tuple
import pygame
from .config import (
    WIDTH, HEIGHT, GROUND_Y, BASE_SPEED,
    COLOR_SKY_TOP, COLOR_SKY_BOTTOM, COLOR_CLOUD, COLOR_GROUND_DASH, COLOR_GROUND_LINE,
    COLOR_DINO, COLOR_DINO_BODY, COLOR_DINO_SPOT, COLOR_DINO_EYE, COLOR_DINO_CLAW,
    COLOR_WHITE, COLOR_BLACK, COLOR_CACTUS, COLOR_CACTUS_SPIKE, COLOR_BIRD, COLOR_BEAK,
    COLOR_PARTICLE, COLOR_HUD, COLOR_HUD_DIM
)
from .dino import Dino
from .effects import Cloud, Particle
from .obstacles import Bird, Cactus

Color = Tuple[int, ...]


def _fill(surf: pygame.Surface, color: Color, x: float, y: float, w: float, h: float):
    """Filled rect from float coords (nothing drawn for empty sizes)."""
    if w <= 0 or h <= 0:
        return
    pygame.draw.rect(surf, color, pygame.Rect(int(x), int(y), int(w), int(h)))


def make_sky(size: Tuple[int, int] = (WIDTH, HEIGHT)) -> pygame.Surface:
    """Vertical gradient from COLOR_SKY_TOP to COLOR_SKY_BOTTOM, one line per row."""
    w, h = size
    sky = pygame.Surface(size, 0, 32)
    for row in range(h):
        t = row / max(1, h - 1)
        color = tuple(int(a + (b - a) * t) for a, b in zip(COLOR_SKY_TOP, COLOR_SKY_BOTTOM))
        pygame.draw.line(sky, color, (0, row), (w, row))
    return sky


# ---------------- Background ----------------

def draw_clouds(layer: pygame.Surface, clouds):
    for c in clouds:
        draw_cloud(layer, c)


def draw_cloud(layer: pygame.Surface, c: Cloud):
    _fill(layer, COLOR_CLOUD, c.x, c.y, c.width, c.height)
    _fill(layer, COLOR_CLOUD, c.x + 10, c.y - 8, c.width * 0.6, c.height * 0.6)
    _fill(layer, COLOR_CLOUD, c.x + c.width * 0.3, c.y - 5, c.width * 0.4, c.height * 0.4)


def draw_ground(surf: pygame.Surface, frame: int, speed: float):
    """Dashes below the ground line; their offset scrolls with frame count and speed."""
    for x in range(0, WIDTH, 20):
        offset = (x + frame * speed * 0.8) % 40
        _fill(surf, COLOR_GROUND_DASH, x - offset, GROUND_Y + 30, 10, 5)


def draw_ground_line(surf: pygame.Surface):
    pygame.draw.line(surf, COLOR_GROUND_LINE, (0, GROUND_Y), (WIDTH, GROUND_Y), 2)


# ---------------- Dino parts ----------------
# Offsets are relative to the sprite's top-left (dino.x, dino.top).

def _dino_tail(surf, x, y):
    _fill(surf, COLOR_DINO, x - 15, y + 15, 20, 12)
    _fill(surf, COLOR_DINO, x - 25, y + 20, 15, 8)


def _dino_body(surf, x, y, w, h):
    _fill(surf, COLOR_DINO_BODY, x + 8, y + 8, w - 16, h - 16)


def _dino_torso(surf, x, y, h):
    """Drawn after the head; the belly covers its lower edge."""
    _fill(surf, COLOR_DINO, x + 5, y + 12, 30, h - 20)
    _fill(surf, COLOR_DINO_BODY, x + 10, y + 20, 20, h - 30)  # belly


def _dino_head(surf, x, y):
    _fill(surf, COLOR_DINO, x + 25, y, 20, 25)
    _fill(surf, COLOR_DINO_BODY, x + 40, y + 8, 8, 10)        # snout


def _dino_face(surf, x, y):
    _fill(surf, COLOR_WHITE, x + 30, y + 6, 8, 8)
    _fill(surf, COLOR_DINO_EYE, x + 32, y + 8, 4, 4)
    _fill(surf, COLOR_BLACK, x + 44, y + 12, 2, 2)            # nostril


def _dino_spots(surf, x, y):
    for dx, dy, s in ((12, 16, 3), (20, 25, 2), (8, 30, 2)):
        _fill(surf, COLOR_DINO_SPOT, x + dx, y + dy, s, s)


def _dino_arms(surf, x, y):
    _fill(surf, COLOR_DINO, x + 8, y + 18, 6, 3)
    _fill(surf, COLOR_DINO, x + 6, y + 20, 4, 6)


def _dino_leg(surf, x, y):
    """One leg with foot and three claws; (x, y) is the top of the leg."""
    _fill(surf, COLOR_DINO, x, y, 8, 12)
    _fill(surf, COLOR_DINO_CLAW, x - 2, y + 10, 12, 4)
    for dx in (-4, 0, 4):
        _fill(surf, COLOR_BLACK, x + dx, y + 12, 2, 3)


def leg_offset(frame: int, speed: float) -> int:
    """Two-phase stride: legs swap every half period, faster at higher speed."""
    period = max(10, 20 - speed)
    return 0 if frame % period < period / 2 else 3


def _dino_back_spikes(surf, x, y):
    for i in range(3):
        sx = x + 15 + i * 6
        _fill(surf, COLOR_DINO_SPOT, sx, y + 8, 3, 8)
        _fill(surf, COLOR_DINO_SPOT, sx + 1, y + 6, 1, 4)


def draw_dino(surf: pygame.Surface, dino: Dino, frame: int, speed: float):
    x, y = dino.x, dino.top
    _dino_body(surf, x, y, dino.width, dino.height)
    _dino_head(surf, x, y)
    _dino_torso(surf, x, y, dino.height)
    _dino_tail(surf, x, y)
    _dino_face(surf, x, y)
    _dino_spots(surf, x, y)
    _dino_arms(surf, x, y)
    if not dino.jumping:
        off = leg_offset(frame, speed)
        feet_y = y + dino.height
        _dino_leg(surf, x + 12 + off, feet_y)
        _dino_leg(surf, x + 25 - off, feet_y)
    _dino_back_spikes(surf, x, y)


# ---------------- Obstacles ----------------

def draw_cactus(surf: pygame.Surface, c: Cactus):
    _fill(surf, COLOR_CACTUS, c.x + 5, c.y, 10, c.height)     # trunk
    _fill(surf, COLOR_CACTUS, c.x, c.y + 10, 8, 6)            # left arm
    _fill(surf, COLOR_CACTUS, c.x + 12, c.y + 15, 8, 6)       # right arm
    for i in range(3):
        _fill(surf, COLOR_CACTUS_SPIKE, c.x + 3, c.y + i * 12 + 5, 2, 2)
        _fill(surf, COLOR_CACTUS_SPIKE, c.x + 15, c.y + i * 12 + 8, 2, 2)


def draw_bird(surf: pygame.Surface, b: Bird, speed: float):
    # flapping is cosmetic: wing_phase never feeds back into collisions
    b.wing_phase += 0.3 + (speed / BASE_SPEED) * 0.2
    wing = math.sin(b.wing_phase) * 3
    _fill(surf, COLOR_BIRD, b.x + 8, b.y + 8, 20, 10)         # body
    _fill(surf, COLOR_BIRD, b.x + 20, b.y + 5, 12, 8)         # head
    _fill(surf, COLOR_BIRD, b.x + 5, b.y + 6 + wing, 15, 4)   # upper wing
    _fill(surf, COLOR_BIRD, b.x + 5, b.y + 12 - wing, 15, 4)  # lower wing
    _fill(surf, COLOR_BEAK, b.x + 32, b.y + 8, 4, 3)


def draw_obstacles(surf: pygame.Surface, obstacles, speed: float):
    for o in obstacles:
        if o.kind == "cactus":
            draw_cactus(surf, o)
        elif o.kind == "bird":
            draw_bird(surf, o, speed)


# ---------------- Particles ----------------

def particle_color(p: Particle) -> Color:
    if p.color is not None:
        return p.color
    return (*COLOR_PARTICLE, int(255 * p.alpha))


def draw_particles(layer: pygame.Surface, particles):
    for p in particles:
        _fill(layer, particle_color(p), p.x - p.size / 2, p.y - p.size / 2, p.size, p.size)


# ---------------- Renderer ----------------

class Renderer:
    """Paints a World onto a surface, back to front. Only reads the world (bird wings aside)."""
    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self.size = surface.get_size()
        self.sky = make_sky(self.size)
        self._font = None
        self._font_big = None

    def _fonts(self):
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont("jetbrainsmono", 18)
            self._font_big = pygame.font.SysFont("jetbrainsmono", 36, bold=True)
        return self._font, self._font_big

    def draw(self, world, hud: bool = True):
        surf = self.surface
        surf.blit(self.sky, (0, 0))

        layer = pygame.Surface(self.size, pygame.SRCALPHA)
        draw_clouds(layer, world.clouds)
        surf.blit(layer, (0, 0))

        draw_ground(surf, world.frame, world.game_speed)
        draw_dino(surf, world.dino, world.frame, world.game_speed)
        draw_obstacles(surf, world.obstacles, world.game_speed)

        layer = pygame.Surface(self.size, pygame.SRCALPHA)
        draw_particles(layer, world.particles)
        surf.blit(layer, (0, 0))

        draw_ground_line(surf)
        if hud:
            self.draw_hud(world)

    def draw_hud(self, world):
        font, font_big = self._fonts()
        surf = self.surface
        w, h = self.size

        txt = font.render(f"HI {world.best_text}   {world.score_text}", True, COLOR_HUD)
        surf.blit(txt, (w - txt.get_width() - 16, 12))

        if world.show_hint:
            hint = font.render("SPACE / click to start  |  DOWN to duck", True, COLOR_HUD_DIM)
            surf.blit(hint, (w // 2 - hint.get_width() // 2, h // 3))

        if world.show_game_over:
            banner = font_big.render("GAME OVER", True, COLOR_HUD)
            surf.blit(banner, (w // 2 - banner.get_width() // 2, h // 3 - banner.get_height()))
            sub = font.render("SPACE / click to restart", True, COLOR_HUD_DIM)
            surf.blit(sub, (w // 2 - sub.get_width() // 2, h // 3 + 8))
