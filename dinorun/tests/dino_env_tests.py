# dinorun/tests/dino_env_tests.py
"""
Quick tests for DinoEnv (Gymnasium environment).

Usage (from repo root):
  python -m pytest dinorun/tests/dino_env_tests.py
  python -m dinorun.tests.dino_env_tests
  python -m dinorun.tests.dino_env_tests --render
  python -m dinorun.tests.dino_env_tests --no-api-check --no-determinism
"""

from __future__ import annotations
import argparse
import os
import sys
from typing import List, Tuple

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
from gymnasium.utils.env_checker import check_env

from dinorun.env.dino_env import DinoEnv, NOOP, JUMP, DUCK
from dinorun.env.observations import OBS_SIZE, EMPTY_SLOT, build_observation
from dinorun.game.obstacles import Bird, Cactus
from dinorun.game.world import Phase


def api_check(frame_skip: int = 4) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = DinoEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def smoke_test(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = DinoEnv(frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert obs.shape == (OBS_SIZE,)
        assert env.world.phase is Phase.PLAYING

        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def determinism_test(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = DinoEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    # Fixed action sequence using a local RNG (not numpy global)
    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 3)) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run a short NOOP demo so you can visually verify behavior."""
    env = DinoEnv(render_mode="human", frame_skip=frame_skip)
    try:
        env.reset(seed=seed)
        for _ in range(steps):
            _obs, _r, term, trunc, _info = env.step(NOOP)
            if term or trunc:
                break
    finally:
        env.close()


# ------------------------ pytest entry points ------------------------

def test_api_check():
    api_check()


def test_smoke():
    smoke_test()


def test_determinism():
    determinism_test()


def test_noop_dies_on_first_cactus_and_reports_cause():
    env = DinoEnv(frame_skip=4)
    try:
        env.reset(seed=0)
        env.world.obstacles.append(Cactus(x=env.world.dino.x + env.world.game_speed))
        _obs, r, term, trunc, info = env.step(NOOP)
        assert term and not trunc
        assert r == -1.0
        assert info["death_cause"] == "cactus"
        assert info["ticks"] == 1
    finally:
        env.close()


def test_actions_drive_dino():
    env = DinoEnv(frame_skip=2)
    try:
        env.reset(seed=1)
        obs, r, term, _, _ = env.step(DUCK)
        assert not term and r == 0.1 * 2
        assert obs[2] == 1.0 and env.world.dino.ducking

        obs, _, _, _, _ = env.step(JUMP)
        assert env.world.dino.jumping and not env.world.dino.ducking
        assert obs[1] < 0.0 and obs[0] < 1.0
    finally:
        env.close()


def test_time_limit_truncates():
    env = DinoEnv(frame_skip=4, time_limit_seconds=0.2)   # 3 decisions
    try:
        env.reset(seed=2)
        flags = [env.step(NOOP)[3] for _ in range(3)]
        assert flags == [False, False, True]
    finally:
        env.close()


def test_observation_slots():
    env = DinoEnv()
    try:
        obs, _ = env.reset(seed=3)
        assert tuple(obs[4:8]) == EMPTY_SLOT and tuple(obs[8:12]) == EMPTY_SLOT

        world = env.world
        world.obstacles.extend([Bird(x=500, y=200, initial_y=200), Cactus(x=300), Cactus(x=-100)])
        obs = build_observation(world)
        # nearest first; the cactus behind the dino is ignored
        assert obs[7] == 0.0 and obs[11] == 1.0
        assert obs[4] == np.float32((302 - 122) / 800)
        assert obs[5] == np.float32(312 / 400) and obs[6] == np.float32(348 / 400)
    finally:
        env.close()


def test_rgb_array_render():
    env = DinoEnv(render_mode="rgb_array")
    try:
        env.reset(seed=4)
        env.step(NOOP)
        frame = env.render()
        assert frame.shape == (400, 800, 3) and frame.dtype == np.uint8
    finally:
        env.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=4, help="Sim ticks per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            api_check(frame_skip=args.frame_skip)
            print("✓ API check ok")
        if not args.no_smoke:
            smoke_test(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Smoke test ok")
        if not args.no_determinism:
            determinism_test(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Determinism ok")
        if args.render:
            # Keep the render short; you can bump steps if you want to watch longer.
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Render demo finished")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
