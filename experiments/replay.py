"""
Replay tool for DinoEnv — quick command cheat sheet

# Typical usage (run from REPO ROOT)

# Replay a RULES-policy episode by seed (uses actions at experiments/runs/traces/rules/<seed>_actions.npy)
python -m experiments.replay --policy rules --seed 105

# Replay by pointing directly to a specific actions file
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --frame-skip 4

# Slow the display to ~decision rate (~15 fps) for readability
python -m experiments.replay --policy rules --seed 105 --slow

# Controls during replay
SPACE = pause/resume
N     = single step (when paused)
R     = restart episode
ESC   = quit

# Notes
- Deterministic: given the same seed, frame_skip, and action sequence, replay matches the recorded run.
- If you pass --trace, the script does not read meta; supply --frame-skip if different from 4.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import List, Optional

import numpy as np
import pygame

from dinorun.env.dino_env import DinoEnv
from dinorun.env.observations import obstacles_ahead

DEFAULT_OUT_DIR = "experiments/runs"
ACTION_NAMES = {0: "NOOP", 1: "JUMP", 2: "DUCK"}


def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta

def _draw_overlay(env: DinoEnv, step_idx: int, action: Optional[int]):
    """Info panel plus hitbox outlines on top of the env's own frame."""
    surf = pygame.display.get_surface()
    if surf is None or env.world is None:
        return
    world = env.world
    font = pygame.font.SysFont("jetbrainsmono", 16)

    # Hitboxes: dino in blue, the obstacles the observation sees in red
    hb = world.dino.hitbox()
    pygame.draw.rect(surf, (90, 180, 255), pygame.Rect(int(hb.x), int(hb.y), int(hb.width), int(hb.height)), 1)
    for o in obstacles_ahead(world.dino, world.obstacles):
        ob = o.hitbox()
        pygame.draw.rect(surf, (255, 86, 110), pygame.Rect(int(ob.x), int(ob.y), int(ob.width), int(ob.height)), 1)

    obs = env._get_obs()
    lines: List[str] = [
        f"Step={step_idx}  Action={ACTION_NAMES.get(action, '-')}",
        f"Score={int(world.score)}  Speed={world.game_speed:.1f}  Cause={world.death_cause or '—'}",
        f"y={obs[0]:.2f}  vy={obs[1]:+.2f}  duck={int(obs[2])}",
        f"#1 dx={obs[4]:.2f} top={obs[5]:.2f} bot={obs[6]:.2f} bird={int(obs[7])}",
        f"#2 dx={obs[8]:.2f} top={obs[9]:.2f} bot={obs[10]:.2f} bird={int(obs[11])}",
    ]

    panel = pygame.Surface((380, 20 * (len(lines) + 1)), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, (12, 12))
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (20, 18 + i * 20))

    pygame.display.flip()

def replay_episode(seed: int, actions: np.ndarray, frame_skip: int, slow: bool = False):
    """
    Replays an episode deterministically using DinoEnv with on-screen overlay.
    Controls:
      SPACE: pause/resume   N: single-step when paused
      R: restart episode    ESC: quit
    """
    env = DinoEnv(render_mode="human", frame_skip=frame_skip, time_limit_seconds=None)
    env.reset(seed=seed)

    paused = False
    single_step = False
    step_idx = 0
    action: Optional[int] = None
    clock = pygame.time.Clock()

    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_n and paused:
                        single_step = True
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused and not single_step:
                env.render()
                _draw_overlay(env, step_idx, action=None)
                clock.tick(60)
                continue
            single_step = False

            action = int(actions[step_idx])
            _obs, _r, term, trunc, _info = env.step(action)
            _draw_overlay(env, step_idx, action)
            step_idx += 1

            clock.tick(15 if slow else 60)

            if term or trunc:
                # Final frame is already drawn; wait a moment
                pygame.time.delay(600)
                break
    finally:
        env.close()

def main(argv=None):
    ap = argparse.ArgumentParser(description="Replay a recorded DinoEnv episode with overlay.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="random",
                    help="Trace subfolder name, e.g. random / rules / rl")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy action file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR,
                    help="Base directory where experiments/runs live")
    ap.add_argument("--frame-skip", type=int, default=-1,
                    help="Override frame_skip. If <0, use meta or default=4")
    ap.add_argument("--slow", action="store_true", help="Slow display (~15 fps) for readability")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)

    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        # Infer the seed from "<seed>_actions.npy" when not given
        if args.seed is None:
            stem = trace_path.stem.split("_")[0]
            if not stem.lstrip("-").isdigit():
                raise SystemExit(f"Cannot infer seed from {trace_path.name}; pass --seed")
            args.seed = int(stem)
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)

    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    fs = args.frame_skip
    if fs < 0:
        fs = 4
        if not args.trace:
            meta = _read_meta(out_dir, args.policy, args.seed)
            if meta.get("frame_skip", "").isdigit():
                fs = int(meta["frame_skip"])

    print(f"Replaying seed={args.seed}  policy={args.policy}  steps={len(actions)}  frame_skip={fs}")
    print("Controls: SPACE pause/resume | N step (when paused) | R restart | ESC quit")

    replay_episode(seed=args.seed, actions=actions, frame_skip=fs, slow=args.slow)

if __name__ == "__main__":
    main()
