# dinorun/env/quickcheck_env.py
#command is python -m dinorun.env.quickcheck_env
from __future__ import annotations
import random
from .dino_env import DinoEnv, NOOP, JUMP, DUCK
from .observations import OBS_SIZE


def run_once(seed=None, steps=600, jump_prob=0.05, duck_prob=0.05):
    env = DinoEnv(frame_skip=4, time_limit_seconds=20.0)
    obs, info = env.reset(seed=seed)
    assert obs.shape == (OBS_SIZE,), f"Obs shape must be ({OBS_SIZE},)"
    total_r = 0.0
    jumps = 0

    for t in range(steps):
        roll = random.random()
        a = JUMP if roll < jump_prob else (DUCK if roll < jump_prob + duck_prob else NOOP)
        if a == JUMP:
            jumps += 1
        obs, r, term, trunc, info = env.step(a)

        # --- invariants / sanity ---
        assert env.observation_space.contains(obs), f"obs out of bounds at t={t}: {obs}"
        assert env.world.dino.y <= 300.0, f"dino below ground: {env.world.dino.y}"

        if t % 100 == 0:
            print(f"t={t} y={obs[0]:.2f} vy={obs[1]:+.2f} speed={obs[3]:.2f} "
                  f"next dx={obs[4]:.2f} bird={int(obs[7])}")

        total_r += r
        if term or trunc:
            print(f"[DONE] score={info['score']} ticks={info['ticks']} seed={info['seed']} "
                  f"cause={info['death_cause']} truncated={trunc}")
            break

    env.close()
    print(f"steps={t+1} jumps={jumps} total_r={total_r:.3f}")


if __name__ == "__main__":
    # same seed should be reproducible for the world (actions still use the global RNG)
    run_once(seed=12345)
    # different layout each time with seed=None
    run_once(seed=None)

    run_once(seed=12345, steps=2000)
