# /experiments/sanity_rollout.py
"""
Baseline rollouts for DinoEnv: a random policy and a small rule-based one,
run over fixed seeds. Each episode adds a row to episodes.csv; with
--save-traces the action sequence is kept for experiments/replay.py.

  python -m experiments.sanity_rollout --policies both --save-traces
  python -m experiments.sanity_rollout --policies rules --seeds 111,222,333 --save-traces --save-obs
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/dino
"""

from __future__ import annotations
import argparse
import csv
from collections import Counter
from dataclasses import dataclass, astuple, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from dinorun.env.dino_env import DinoEnv, NOOP, JUMP, DUCK
from dinorun.game.config import WIDTH, FPS, BASE_SPEED, MAX_SPEED_MULT

Policy = Callable[[np.ndarray], int]


def random_policy(seed: int, p_jump: float = 0.05, p_duck: float = 0.05) -> Policy:
    rng = np.random.RandomState(10_000 + seed)
    probs = [1.0 - p_jump - p_duck, p_jump, p_duck]
    def act(_obs: np.ndarray) -> int:
        return int(rng.choice(3, p=probs))
    return act


def rules_policy(lead_ticks: float = 10.0) -> Policy:
    """
    Jump a cactus once it is within `lead_ticks` of travel; stay low
    (duck) while a bird is that close, since jumping into one is the only
    way a bird kills.
    """
    def act(obs: np.ndarray) -> int:
        speed = obs[3] * BASE_SPEED * MAX_SPEED_MULT
        dx, is_bird = obs[4] * WIDTH, obs[7]
        if obs[4] >= 1.0 or dx >= speed * lead_ticks:
            return NOOP
        return DUCK if is_bird else JUMP
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_policy,
    "rules": lambda _seed: rules_policy(),
}


@dataclass
class EpisodeRow:
    policy: str
    seed: int
    frame_skip: int
    decisions: int
    ret: float
    score: int
    ticks: int
    terminated: int
    truncated: int
    death_cause: str
    jump_ratio: float
    duck_ratio: float


def rollout(policy_name: str, seed: int, frame_skip: int, max_steps: int,
            trace_dir: Optional[Path] = None, save_obs: bool = False) -> EpisodeRow:
    policy = POLICIES[policy_name](seed)
    env = DinoEnv(frame_skip=frame_skip)
    actions: List[int] = []
    observations: List[np.ndarray] = []
    ret = 0.0
    term = trunc = False
    try:
        obs, info = env.reset(seed=seed)
        observations.append(obs)
        for _ in range(max_steps):
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            ret += r
            observations.append(obs)
            if term or trunc:
                break
    finally:
        env.close()

    if trace_dir is not None:
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        if save_obs:
            np.save(trace_dir / f"{seed}_obs.npy", np.stack(observations))
        (trace_dir / f"{seed}_meta.txt").write_text(
            f"seed={seed}\nframe_skip={frame_skip}\npolicy={policy_name}\nmax_steps={max_steps}",
            encoding="utf-8")

    counts = Counter(actions)
    n = max(1, len(actions))
    return EpisodeRow(
        policy=policy_name, seed=seed, frame_skip=frame_skip,
        decisions=len(actions), ret=round(ret, 3),
        score=int(info.get("score", 0)), ticks=int(info.get("ticks", 0)),
        terminated=int(term), truncated=int(trunc),
        death_cause=info.get("death_cause") or "",
        jump_ratio=round(counts[JUMP] / n, 3), duck_ratio=round(counts[DUCK] / n, 3),
    )


def append_rows(csv_path: Path, rows: List[EpisodeRow]):
    new_file = not csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if new_file:
            w.writerow([fl.name for fl in fields(EpisodeRow)])
        w.writerows(astuple(r) for r in rows)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Baseline DinoEnv rollouts")
    ap.add_argument("--policies", default="both", choices=["random", "rules", "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000, help="Cap on decision steps")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    ap.add_argument("--save-obs", action="store_true", help="Also keep per-step observations")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    names = ["random", "rules"] if args.policies == "both" else [args.policies]
    print(f"{names} x {len(seeds)} seeds, frame_skip={args.frame_skip} "
          f"({FPS / max(1, args.frame_skip):.1f} decisions/s)")

    for name in names:
        rows = []
        for seed in seeds:
            trace_dir = out_dir / "traces" / name if args.save_traces else None
            row = rollout(name, seed, args.frame_skip, args.steps, trace_dir, args.save_obs)
            rows.append(row)
            print(f"[{name}] seed={seed} score={row.score} ticks={row.ticks} "
                  f"cause={row.death_cause or '-'}")
        append_rows(out_dir / "episodes.csv", rows)
        scores = [r.score for r in rows]
        print(f"[{name}] mean score {np.mean(scores):.1f}, best {max(scores)}")


if __name__ == "__main__":
    main()
