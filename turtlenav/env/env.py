from __future__ import annotations

from typing import Any

import numpy as np
from gymnasium import spaces as gym_spaces

from ..actions import ACTION_DIM
from ..agents.heuristic import GreedyPolicy
from ..config import EnvConfig
from ..sim.state import Outcome
from ..sim.world import ArenaWorld
from .episode import Episode, EpisodeObserver
from .feedback import FeedbackController
from .observations import OBS_DIM


class TurtleNavEnv:
    """
    Single-agent goal-reaching env with a gymnasium-like API:

      obs, info = env.reset(seed)
      obs, reward, terminated, truncated, info = env.step(action)

    action: integer in {0: no-op, 1: forward, 2: turn left, 3: turn right}.
    Unknown codes are treated as no-op.

    Observation (float32[5]): [goal_x, goal_z, agent_x, agent_z, heading],
    positions divided by 5 and heading mapped from [0, 360) to [-1, 1).

    terminated is True when the goal was reached; truncated is True when
    max_steps ran out. Each step runs the episode step first and then one
    tick of the reference arena, whose wall and goal contacts are fed back
    into the episode (wall first, then goal).
    """

    OBS_DIM = OBS_DIM
    ACTION_DIM = ACTION_DIM

    def __init__(self, config: EnvConfig | None = None, observers: list[EpisodeObserver] | None = None):
        self.config = config or EnvConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.world = ArenaWorld(self.config.arena)
        self.feedback = FeedbackController()
        self.episode = Episode(
            self.config.max_steps,
            rng=self.rng,
            motion=self.config.motion,
            arena=self.config.arena,
            observers=[self.feedback, *(observers or [])],
        )
        self._heuristic = GreedyPolicy()

        self.observation_space = gym_spaces.Box(low=-np.inf, high=np.inf, shape=(OBS_DIM,), dtype=np.float32)
        self.action_space = gym_spaces.Discrete(ACTION_DIM)

    @property
    def max_steps(self) -> int:
        return self.config.max_steps

    @property
    def step_count(self) -> int:
        return self.episode.context.step_count

    @property
    def last_outcome(self) -> str:
        return self.episode.context.last_outcome.value

    def reset(self, seed: int | None = None) -> tuple[np.ndarray, dict[str, Any]]:
        if seed is not None:
            self.rng = np.random.default_rng(seed)
            self.episode.rng = self.rng
        self.world.reset()
        obs = self.episode.begin()
        return obs, self._info([])

    def step(self, action: Any) -> tuple[np.ndarray, float, bool, bool, dict[str, Any]]:
        ep = self.episode
        dt = self.config.dt

        if not ep.running:
            ep.step(action, dt)  # logged and ignored
            info = self._info([])
            info["ignored"] = True
            # Idle: nothing has been spawned yet.
            obs = ep.observe() if ep.agent is not None else np.zeros(OBS_DIM, dtype=np.float32)
            return obs, 0.0, self._terminated(), self._truncated(), info

        events: list[dict[str, Any]] = []
        reward = ep.step(action, dt)

        assert ep.agent is not None and ep.goal is not None
        contacts = self.world.resolve(ep.agent, ep.goal, dt)
        ep.move_agent(contacts.agent)
        if ep.running and contacts.obstacle is not None:
            reward += ep.obstacle_contact(contacts.obstacle, contacts.tick_duration)
            events.append({"type": "obstacle", "phase": contacts.obstacle.value})
        if ep.running and contacts.goal:
            reward += ep.goal_contact()
            events.append({"type": "goal"})

        self.feedback.tick(dt)

        obs = ep.observe()
        terminated = self._terminated()
        truncated = self._truncated()
        info = self._info(events)

        if (terminated or truncated) and self.config.auto_reset:
            info["final_info"] = dict(info)
            info["final_observation"] = obs
            obs, _ = self.reset()

        return obs, float(reward), terminated, truncated, info

    def heuristic_action(self) -> int:
        """Greedy baseline action for the current observation."""
        return int(self._heuristic.act(self.episode.observe()))

    def close(self) -> None:
        pass

    def _terminated(self) -> bool:
        return self.episode.context.terminated and self.episode.outcome is Outcome.SUCCESS

    def _truncated(self) -> bool:
        return self.episode.context.terminated and self.episode.outcome is Outcome.FAILURE

    def _info(self, events: list[dict[str, Any]]) -> dict[str, Any]:
        ctx = self.episode.context
        return {
            "episode_id": ctx.episode_id,
            "step_count": ctx.step_count,
            "cumulative_reward": ctx.cumulative_reward,
            "outcome": ctx.outcome.value,
            "components": self.episode.tick_components.to_dict(),
            "events": events,
        }
