# dinorun/game/effects.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple
from .config import (
    WIDTH, BASE_SPEED, CLOUD_COUNT_START, CLOUD_MAX, CLOUD_SPAWN_TICKS,
    PARTICLE_GRAVITY, PUFF_COUNT, PUFF_LIFE, EXPLOSION_COUNT, EXPLOSION_LIFE,
    COLOR_EXPLOSION
)


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: int
    max_life: int
    size: float
    color: Optional[Tuple[int, int, int]] = None   # None -> fading grey puff

    @property
    def alpha(self) -> float:
        return max(0.0, self.life / self.max_life)

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.vy += PARTICLE_GRAVITY
        self.life -= 1


@dataclass
class Cloud:
    x: float
    y: float
    width: float
    height: float
    speed: float


class ParticleSystem:
    """Short-lived puffs (jump) and bursts (death). Expired particles are dropped every tick."""
    def __init__(self, rng: random.Random):
        self.rng = rng
        self.particles: List[Particle] = []

    def reset(self):
        self.particles = []

    def puff(self, x: float, y: float):
        for _ in range(PUFF_COUNT):
            self.particles.append(Particle(
                x=x + (self.rng.random() - 0.5) * 20,
                y=y,
                vx=(self.rng.random() - 0.5) * 4,
                vy=self.rng.random() * -3,
                life=PUFF_LIFE,
                max_life=PUFF_LIFE,
                size=self.rng.random() * 3 + 1,
            ))

    def explode(self, x: float, y: float):
        for _ in range(EXPLOSION_COUNT):
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=(self.rng.random() - 0.5) * 8,
                vy=(self.rng.random() - 0.5) * 8,
                life=EXPLOSION_LIFE,
                max_life=EXPLOSION_LIFE,
                size=self.rng.random() * 4 + 2,
                color=COLOR_EXPLOSION,
            ))

    def update(self):
        for p in self.particles:
            p.update()
        self.particles = [p for p in self.particles if p.life > 0]


class CloudLayer:
    """Background clouds. They wrap around instead of being destroyed, capped at CLOUD_MAX."""
    def __init__(self, rng: random.Random):
        self.rng = rng
        self.clouds: List[Cloud] = []
        self.timer = 0
        for _ in range(CLOUD_COUNT_START):
            self.clouds.append(self._make_cloud(self.rng.random() * WIDTH))

    def _rand_y(self) -> float:
        return self.rng.random() * 100 + 20

    def _make_cloud(self, x: float) -> Cloud:
        return Cloud(
            x=x,
            y=self._rand_y(),
            width=60 + self.rng.random() * 40,
            height=30 + self.rng.random() * 20,
            speed=0.5 + self.rng.random() * 0.5,
        )

    def update(self, game_speed: float):
        self.timer += 1

        ratio = game_speed / BASE_SPEED
        for cloud in self.clouds:
            cloud.x -= cloud.speed * ratio
            if cloud.x + cloud.width < 0:
                cloud.x = WIDTH + self.rng.random() * 200
                cloud.y = self._rand_y()

        if self.timer > CLOUD_SPAWN_TICKS:
            self.clouds.append(self._make_cloud(WIDTH + self.rng.random() * 200))
            self.timer = 0
            if len(self.clouds) > CLOUD_MAX:
                self.clouds.pop(0)
