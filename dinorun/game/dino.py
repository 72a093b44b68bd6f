# dinorun/game/dino.py
from __future__ import annotations
from dataclasses import dataclass
from .config import (
    DINO_X, DINO_GROUND_Y, DINO_DUCK_Y, DINO_W, DINO_H, DINO_DUCK_H,
    GRAVITY, JUMP_POWER, HITBOX_INSET_X, HITBOX_INSET_Y
)
from .hitbox import Box


@dataclass
class Dino:
    """
    The runner. x never changes, the world scrolls past it.
    - y is the standing top edge; it is clamped to DINO_GROUND_Y whenever grounded
    - while ducking on the ground the sprite shrinks to DINO_DUCK_H and its
      top drops to DINO_DUCK_Y so the feet stay on the ground
    """
    x: float = float(DINO_X)
    y: float = float(DINO_GROUND_Y)
    vy: float = 0.0
    width: int = DINO_W
    height: int = DINO_H
    jumping: bool = False
    ducking: bool = False

    @property
    def top(self) -> float:
        """Top edge of the sprite as drawn (differs from y only while crouched)."""
        if self.height == DINO_DUCK_H:
            return float(DINO_DUCK_Y)
        return self.y

    @property
    def box(self) -> Box:
        return Box(self.x, self.top, self.width, self.height)

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.top + self.height / 2

    @property
    def feet(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.top + self.height

    def hitbox(self) -> Box:
        """Sprite box inset 8px left/right and 5px top/bottom."""
        return self.box.inset(HITBOX_INSET_X, HITBOX_INSET_Y)

    def try_jump(self) -> bool:
        """Start a jump unless already airborne. Returns True if performed."""
        if self.jumping:
            return False
        self.vy = -JUMP_POWER
        self.jumping = True
        return True

    def update_physics(self):
        """One tick: gravity, integrate, ground clamp, then crouch geometry."""
        self.vy += GRAVITY
        self.y += self.vy

        if self.y >= DINO_GROUND_Y:
            self.y = float(DINO_GROUND_Y)
            self.vy = 0.0
            self.jumping = False

        if self.ducking and not self.jumping:
            self.height = DINO_DUCK_H
        else:
            self.height = DINO_H

    def reset(self):
        self.x = float(DINO_X)
        self.y = float(DINO_GROUND_Y)
        self.vy = 0.0
        self.height = DINO_H
        self.jumping = False
        self.ducking = False
