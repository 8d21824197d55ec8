# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from turtlenav import TurtleNavEnv
from turtlenav.agents.heuristic import GreedyPolicy
from turtlenav.settings import Settings
from turtlenav.training.stats_collector import EpisodeStatsCollector


def run_episode(env: TurtleNavEnv, policy: GreedyPolicy | None, seed: int, rng: np.random.Generator) -> dict:
    obs, _ = env.reset(seed=seed)

    while True:
        if policy is None:
            action = int(rng.integers(0, env.ACTION_DIM))
        else:
            action = int(policy.act(obs))
        obs, _reward, terminated, truncated, info = env.step(action)
        if terminated or truncated:
            break

    return {
        "seed": seed,
        "steps": info["step_count"],
        "outcome": info["outcome"],
        "reward": round(info["cumulative_reward"], 4),
    }


def main() -> None:
    settings = Settings()
    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=5)
    parser.add_argument("--seed", type=int, default=settings.SEED or 0)
    parser.add_argument("--max-steps", type=int, default=settings.MAX_STEPS)
    parser.add_argument("--policy", type=str, default="greedy", choices=["greedy", "random"])
    parser.add_argument("--out", type=str, default=None, help="Write episode records as JSON to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log episode begin/end")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = replace(settings.to_env_config(), max_steps=args.max_steps, seed=args.seed, auto_reset=False)
    stats = EpisodeStatsCollector()
    env = TurtleNavEnv(cfg, observers=[stats])
    policy = GreedyPolicy() if args.policy == "greedy" else None
    rng = np.random.default_rng(args.seed)

    for ep in range(args.episodes):
        result = run_episode(env, policy, seed=args.seed + ep, rng=rng)
        print(f"episode {ep}: {result}")

    print("summary:", stats.summary())

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps([r.to_dict() for r in stats.records], indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
