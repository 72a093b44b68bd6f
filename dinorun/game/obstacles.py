# dinorun/game/obstacles.py
from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import List, Union
from .config import (
    WIDTH, OBSTACLE_INSET,
    CACTUS_Y, CACTUS_W, CACTUS_H,
    BIRD_W, BIRD_H, BIRD_HEIGHTS, BIRD_MOVE_SCORE, BIRD_MOVE_STEP, BIRD_MOVE_RANGE,
    SPAWN_FREQ_BASE, SPAWN_FREQ_PER_SPEED, SPAWN_FREQ_MIN
)
from .hitbox import Box


@dataclass
class Cactus:
    x: float
    y: float = float(CACTUS_Y)
    width: int = CACTUS_W
    height: int = CACTUS_H
    kind: str = "cactus"

    def update_movement(self):
        pass

    def hitbox(self) -> Box:
        return Box(self.x, self.y, self.width, self.height).inset(OBSTACLE_INSET, OBSTACLE_INSET)


@dataclass
class Bird:
    x: float
    y: float
    initial_y: float
    width: int = BIRD_W
    height: int = BIRD_H
    wing_phase: float = 0.0       # visual only, advanced by the renderer
    movement_phase: float = 0.0   # radians
    should_move: bool = False     # fixed at spawn time
    kind: str = "bird"

    def update_movement(self):
        """Bob around initial_y when this bird was spawned past the movement score."""
        if self.should_move:
            self.movement_phase += BIRD_MOVE_STEP
            self.y = self.initial_y + math.sin(self.movement_phase) * BIRD_MOVE_RANGE

    def hitbox(self) -> Box:
        return Box(self.x, self.y, self.width, self.height).inset(OBSTACLE_INSET, OBSTACLE_INSET)


Obstacle = Union[Cactus, Bird]


def spawn_frequency(speed: float) -> float:
    """Ticks between spawns: shrinks as the game speeds up, floored at SPAWN_FREQ_MIN."""
    return max(SPAWN_FREQ_MIN, SPAWN_FREQ_BASE - SPAWN_FREQ_PER_SPEED * speed)


def is_offscreen(obstacle: Obstacle) -> bool:
    return obstacle.x + obstacle.width < 0


class ObstacleField:
    """
    Endless stream of cacti and birds entering from the right edge.
    All randomness goes through self.rng so a seed reproduces a run.
    """
    def __init__(self, rng: random.Random):
        self.rng = rng
        self.obstacles: List[Obstacle] = []
        self.timer = 0

    def reset(self):
        self.obstacles = []
        self.timer = 0

    def make_obstacle(self, score: float) -> Obstacle:
        kind = self.rng.choice(("cactus", "bird"))
        if kind == "cactus":
            return Cactus(x=float(WIDTH))
        bird_y = float(self.rng.choice(BIRD_HEIGHTS))
        return Bird(
            x=float(WIDTH),
            y=bird_y,
            initial_y=bird_y,
            # random starting phase so birds don't bob in sync
            movement_phase=self.rng.random() * math.pi * 2,
            should_move=score >= BIRD_MOVE_SCORE,
        )

    def update(self, speed: float, score: float):
        """Spawn when due, scroll everything left by `speed`, drop what left the screen."""
        self.timer += 1
        if self.timer > spawn_frequency(speed):
            self.obstacles.append(self.make_obstacle(score))
            self.timer = 0

        for obstacle in self.obstacles:
            obstacle.x -= speed
            obstacle.update_movement()

        self.obstacles = [o for o in self.obstacles if not is_offscreen(o)]
