# dinorun/env/observations.py
from __future__ import annotations
from typing import Iterable, List, Sequence
import numpy as np

from dinorun.game.config import (
    WIDTH, HEIGHT, DINO_GROUND_Y, DINO_DUCK_H, JUMP_POWER, BASE_SPEED, MAX_SPEED_MULT
)

# How many upcoming obstacles are described in the observation
N_AHEAD: int = 2
# Score at which score_norm saturates
SCORE_NORM: float = 1000.0
# Sentinel for an empty obstacle slot: far away, zero height, not a bird
EMPTY_SLOT = (1.0, 0.0, 0.0, 0.0)

OBS_SIZE = 4 + 4 * N_AHEAD + 1
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0] + [0.0, 0.0, 0.0, 0.0] * N_AHEAD + [0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0] + [1.0, 1.0, 1.0, 1.0] * N_AHEAD + [1.0], dtype=np.float32)


def _clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return lo if x < lo else (hi if x > hi else x)


def obstacles_ahead(dino, obstacles: Iterable, n: int = N_AHEAD) -> List:
    """The n nearest obstacles whose hitbox has not yet fully passed the dino's hitbox."""
    left = dino.hitbox().x
    ahead = [o for o in obstacles if o.hitbox().right > left]
    ahead.sort(key=lambda o: o.x)
    return ahead[:n]


def _slot(dino, obstacle) -> Sequence[float]:
    hb = obstacle.hitbox()
    dx = (hb.x - dino.hitbox().right) / float(WIDTH)
    return (
        _clamp(dx),
        _clamp(hb.y / float(HEIGHT)),
        _clamp(hb.bottom / float(HEIGHT)),
        1.0 if obstacle.kind == "bird" else 0.0,
    )


def build_observation(world) -> np.ndarray:
    """
    Returns a fixed (13,) float32 vector:
      [ y_norm, vy_norm, ducking, speed_norm,
        dx#1, top#1, bottom#1, bird#1,
        dx#2, top#2, bottom#2, bird#2,
        score_norm ]
    - y_norm     = dino.y / ground y, in [0,1] (1 = standing on the ground)
    - vy_norm    = vy / jump power, clipped to [-1,1]
    - ducking    = 1.0 while crouched on the ground
    - speed_norm = speed / max speed
    - obstacle slots use hitbox coords; dx is the gap to the dino's hitbox / WIDTH
      (0 when overlapping); empty slots read (1, 0, 0, 0)
    """
    dino = world.dino
    feats: List[float] = [
        _clamp(dino.y / float(DINO_GROUND_Y)),
        _clamp(dino.vy / JUMP_POWER, -1.0, 1.0),
        1.0 if dino.height == DINO_DUCK_H else 0.0,
        _clamp(world.game_speed / (BASE_SPEED * MAX_SPEED_MULT)),
    ]

    ahead = obstacles_ahead(dino, world.obstacles)
    for i in range(N_AHEAD):
        feats.extend(_slot(dino, ahead[i]) if i < len(ahead) else EMPTY_SLOT)

    feats.append(_clamp(world.score / SCORE_NORM))
    return np.asarray(feats, dtype=np.float32)
