# dinorun/game/world.py
from __future__ import annotations
import logging
import random
from enum import Enum
from typing import List, Optional

from .config import (
    BASE_SPEED, SPEED_STEP, SCORE_PER_LEVEL, MAX_SPEED_MULT, SCORE_PER_TICK
)
from .dino import Dino
from .effects import CloudLayer, ParticleSystem, Particle, Cloud
from .highscore import BestScore, MemoryStore
from .hitbox import first_hit
from .obstacles import ObstacleField, Obstacle

logger = logging.getLogger(__name__)


class Phase(Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    GAME_OVER = "game_over"


def speed_for_score(score: float) -> float:
    """+15% of base speed per 100 points, capped at 3x base."""
    mult = 1 + (score // SCORE_PER_LEVEL) * SPEED_STEP
    return BASE_SPEED * min(mult, MAX_SPEED_MULT)


def pad_score(value: float) -> str:
    return f"{int(value):05d}"


class World:
    """
    Everything one game needs: the dino, obstacles, clouds, particles, score and phase.
    The loop (or the Gym env) owns one World and calls step() once per tick.
    """
    def __init__(self, best: Optional[BestScore] = None, seed: int | None = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.best = best if best is not None else BestScore(MemoryStore())

        self.dino = Dino()
        self.field = ObstacleField(self.rng)
        self.fx = ParticleSystem(self.rng)
        self.sky = CloudLayer(self.rng)

        self.phase = Phase.WAITING
        self.score = 0.0
        self.game_speed = BASE_SPEED
        self.frame = 0
        self.death_cause: Optional[str] = None

    # --- views used by the renderer / env ---

    @property
    def obstacles(self) -> List[Obstacle]:
        return self.field.obstacles

    @property
    def particles(self) -> List[Particle]:
        return self.fx.particles

    @property
    def clouds(self) -> List[Cloud]:
        return self.sky.clouds

    @property
    def score_text(self) -> str:
        return pad_score(self.score)

    @property
    def best_text(self) -> str:
        return pad_score(self.best.value)

    @property
    def show_hint(self) -> bool:
        return self.phase is Phase.WAITING

    @property
    def show_game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    # --- intents ---

    def handle_jump(self):
        """Jump intent: start, jump, or restart depending on the phase."""
        if self.phase is Phase.WAITING:
            self.start()
        elif self.phase is Phase.PLAYING:
            if self.dino.try_jump():
                self.fx.puff(*self.dino.feet)
        elif self.phase is Phase.GAME_OVER:
            self.reset()

    def set_ducking(self, ducking: bool):
        self.dino.ducking = ducking

    # --- phase transitions ---

    def start(self):
        self.phase = Phase.PLAYING
        logger.debug("phase -> %s", self.phase.value)

    def reset(self):
        """Back to WAITING with a fresh run. Clouds keep drifting where they are."""
        self.phase = Phase.WAITING
        self.score = 0.0
        self.game_speed = BASE_SPEED
        self.field.reset()
        self.fx.reset()
        self.dino.reset()
        self.frame = 0
        self.death_cause = None
        logger.debug("phase -> %s", self.phase.value)

    def game_over(self, obstacle: Optional[Obstacle] = None):
        self.phase = Phase.GAME_OVER
        self.death_cause = obstacle.kind if obstacle is not None else None
        logger.info("Game over: score=%d hit=%s", int(self.score), self.death_cause)
        self.best.submit(self.score)
        self.fx.explode(*self.dino.center)

    # --- simulation ---

    def step(self) -> bool:
        """Advance one tick. Returns False (and does nothing) outside PLAYING."""
        if self.phase is not Phase.PLAYING:
            return False

        self.frame += 1
        self.dino.update_physics()
        self.field.update(self.game_speed, self.score)
        self.fx.update()
        self.sky.update(self.game_speed)

        hit = first_hit(self.dino.hitbox(), self.field.obstacles)
        if hit is not None:
            self.game_over(hit)

        self.score += SCORE_PER_TICK
        self.game_speed = speed_for_score(self.score)
        return True
