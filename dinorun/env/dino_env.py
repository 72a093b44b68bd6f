# dinorun/env/dino_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from dinorun.game.config import WIDTH, HEIGHT, FPS
from dinorun.game.render import Renderer
from dinorun.game.world import World, Phase
from dinorun.env.observations import build_observation, OBS_LOW, OBS_HIGH

NOOP, JUMP, DUCK = 0, 1, 2


class DinoEnv(gym.Env):
    """
    Dino Run Gymnasium environment (vector observations).
    - One game tick per simulated frame (60 ticks/s of game time).
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Actions: 0 = NOOP, 1 = JUMP, 2 = DUCK (held for the whole decision step).
    - Observation: shape (13,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.sim_fps = FPS

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(3)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.world: Optional[World] = None
        self.timestep: int = 0        # decision steps
        self.ticks: int = 0           # simulated game ticks
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen: Optional[pygame.Surface] = None
        self.renderer: Optional[Renderer] = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # A given seed drives the world directly; otherwise draw one from np_random
        world_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
        self.world = World(seed=world_seed)
        self.world.start()

        self.timestep = 0
        self.ticks = 0
        self.current_seed = world_seed

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.world is not None, "Call reset() before step()"
        world = self.world

        # Apply the action once at the start of the decision step
        world.set_ducking(int(action) == DUCK)
        if int(action) == JUMP:
            world.handle_jump()

        ticks_run = 0
        for _ in range(self.frame_skip):
            world.step()
            ticks_run += 1
            if world.phase is Phase.GAME_OVER:
                break
        self.ticks += ticks_run
        self.timestep += 1

        terminated = world.phase is Phase.GAME_OVER
        reward = -1.0 if terminated else 0.1 * ticks_run
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), float(reward), terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.world is not None
        return build_observation(self.world)

    def _info(self) -> Dict[str, Any]:
        assert self.world is not None
        return {
            "score": int(self.world.score),
            "speed": float(self.world.game_speed),
            "ticks": self.ticks,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": self.world.death_cause,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.world is None:
            return None

        if self.screen is None:
            if self.render_mode == "human":
                pygame.init()
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Dino Run — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT), 0, 32)
            self.renderer = Renderer(self.screen)

        self.renderer.draw(self.world, hud=self.render_mode == "human")

        if self.render_mode == "human":
            # Pump the queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)   # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None and self.render_mode == "human":
            pygame.display.quit()
            pygame.quit()
        self.screen = None
        self.renderer = None
        self.clock = None
