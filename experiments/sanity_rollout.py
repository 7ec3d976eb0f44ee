# /experiments/sanity_rollout.py
"""
Sanity rollouts for RunnerEnv.

Plays a random and/or a rule-based policy over fixed seeds on one stage and
records, per episode, how the run went in game terms: hits taken, hearts
picked up, jumps asked for, lowest health, how far into the course it got
and how it ended. One CSV row per episode, then a per-policy recap.

Usage (from repo root):
  python -m experiments.sanity_rollout
  python -m experiments.sanity_rollout --policies rules --stage stage_2_beach --seeds 111,222,333
  python -m experiments.sanity_rollout --policies random --decisions 300 --out /tmp/sanity.csv --keep-actions
"""

from __future__ import annotations
import argparse
import csv
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np

from stickrun.env.runner_env import RunnerEnv
from stickrun.game.stages import STAGES, DEFAULT_STAGE_ID, get_stage

Policy = Callable[[np.ndarray], int]


@dataclass
class EpisodeSummary:
    stage_id: str
    policy: str
    seed: int
    decisions: int
    jumps_requested: int
    hits: int
    hearts: int
    min_health: int
    final_health: int
    score: int
    course_progress: float     # distance / course length, may pass 1.0
    ending: str                # died | cleared | time_limit | step_cap


# ------------------------ Policies ------------------------

def random_policy(seed: int) -> Policy:
    rng = np.random.default_rng(10_000 + seed)
    return lambda _obs: int(rng.integers(0, 2))


def rules_policy(trigger_dx: float = 0.12) -> Policy:
    """
    Jump off the ground when the nearest hazard is dangerous and close.
    In the air, spend a full bar only when a second hazard trails right behind.
    """
    def act(obs: np.ndarray) -> int:
        grounded, energy = obs[2], obs[3]
        dx1, heal1, dx2 = obs[5], obs[6], obs[7]
        if grounded == 1.0:
            return int(heal1 == 0.0 and dx1 <= trigger_dx)
        return int(energy >= 1.0 and dx1 <= 0.0 and dx2 <= trigger_dx)
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_policy,
    "rules": lambda _seed: rules_policy(),
}


# ------------------------ Rollout ------------------------

def play(env: RunnerEnv, policy: Policy, seed: int, max_decisions: int,
         policy_name: str, actions: List[int]) -> EpisodeSummary:
    obs, info = env.reset(seed=seed)
    health = min_health = int(info["health"])
    hits = hearts = jumps = 0
    ending = "step_cap"

    for _ in range(max_decisions):
        a = policy(obs)
        actions.append(a)
        jumps += a
        obs, _r, terminated, truncated, info = env.step(a)

        now = int(info["health"])
        hits += int(info["hit"] and now < health)
        hearts += int(now > health)
        health = now
        min_health = min(min_health, now)

        if terminated:
            ending = "died" if health <= 0 else "cleared"
            break
        if truncated:
            ending = "time_limit"
            break

    course = get_stage(env.stage_id).course_length
    return EpisodeSummary(
        stage_id=env.stage_id, policy=policy_name, seed=seed,
        decisions=len(actions), jumps_requested=jumps, hits=hits, hearts=hearts,
        min_health=min_health, final_health=health, score=int(info["score"]),
        course_progress=round(float(info["distance"]) / course, 4),
        ending=ending,
    )


def recap(rows: List[EpisodeSummary]):
    by_policy: Dict[str, List[EpisodeSummary]] = {}
    for row in rows:
        by_policy.setdefault(row.policy, []).append(row)
    for name, eps in by_policy.items():
        scores = np.array([e.score for e in eps])
        progress = np.array([e.course_progress for e in eps])
        cleared = sum(e.ending == "cleared" for e in eps)
        print(f"[{name}] episodes={len(eps)}  score mean={scores.mean():.1f} max={scores.max()}  "
              f"progress mean={progress.mean():.2%}  cleared={cleared}/{len(eps)}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="random,rules",
                    help=f"Comma-separated subset of {sorted(POLICIES)}")
    ap.add_argument("--stage", type=str, default=DEFAULT_STAGE_ID,
                    choices=[s.id for s in STAGES])
    ap.add_argument("--seeds", type=str, default="101-120",
                    help="Comma-separated seeds, or an inclusive range like 101-120")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--decisions", type=int, default=10_000,
                    help="Cap on agent decisions per episode (the env time limit may end it first)")
    ap.add_argument("--out", type=str, default="experiments/runs/episodes.csv")
    ap.add_argument("--keep-actions", action="store_true",
                    help="Store each episode's actions as <out dir>/actions/<policy>_<seed>.npy")
    args = ap.parse_args()

    if "-" in args.seeds:
        lo, hi = (int(x) for x in args.seeds.split("-", 1))
        seeds = list(range(lo, hi + 1))
    else:
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    names = [p.strip() for p in args.policies.split(",") if p.strip()]
    unknown = set(names) - set(POLICIES)
    if unknown:
        ap.error(f"unknown policies: {sorted(unknown)}")

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    env = RunnerEnv(stage_id=args.stage, frame_skip=args.frame_skip)
    rows: List[EpisodeSummary] = []
    try:
        for name in names:
            for seed in seeds:
                actions: List[int] = []
                row = play(env, POLICIES[name](seed), seed, args.decisions, name, actions)
                rows.append(row)
                if args.keep_actions:
                    action_dir = out.parent / "actions"
                    action_dir.mkdir(exist_ok=True)
                    np.save(action_dir / f"{name}_{seed}.npy", np.asarray(actions, dtype=np.int8))
                print(f"{name:>7} seed={seed}  {row.ending:<10} score={row.score:<4} "
                      f"hits={row.hits} hearts={row.hearts} progress={row.course_progress:.1%}")
    finally:
        env.close()

    with out.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=[fld.name for fld in fields(EpisodeSummary)])
        w.writeheader()
        w.writerows(asdict(r) for r in rows)

    recap(rows)
    print(f"✓ {len(rows)} episodes written to {out}")


if __name__ == "__main__":
    main()
