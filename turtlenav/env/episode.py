"""Episode lifecycle.

IDLE -> RUNNING -> TERMINATED(SUCCESS | FAILURE) -> RUNNING (next episode)

The transition functions are pure: they take the current frozen values and
return a Transition holding the new ones. `Episode` is the stateful driver
that an external stepping loop talks to; it holds the current values, logs
protocol violations and notifies observers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np

from ..config import ArenaConfig, MotionConfig
from ..gen.spawn import reset_spawn
from ..sim.motion import apply_action
from ..sim.state import AgentState, ContactPhase, EpisodeContext, EpisodePhase, GoalState, Outcome
from .observations import encode_observation
from .rewards import RewardComponents, RewardComputer

logger = logging.getLogger("turtlenav.env")


class EpisodeConfigError(RuntimeError):
    """The episode cannot start because the world is not set up."""


@dataclass(frozen=True)
class Transition:
    context: EpisodeContext
    agent: AgentState | None
    reward: float = 0.0
    components: RewardComponents = field(default_factory=RewardComponents)
    accepted: bool = True


def _rejected(ctx: EpisodeContext, agent: AgentState | None) -> Transition:
    return Transition(context=ctx, agent=agent, accepted=False)


def _credit(ctx: EpisodeContext, comp: RewardComponents) -> tuple[EpisodeContext, float]:
    r = comp.total()
    return replace(ctx, cumulative_reward=ctx.cumulative_reward + r), r


def begin_episode(ctx: EpisodeContext, agent: AgentState | None, goal: GoalState | None) -> Transition:
    if agent is None or goal is None:
        missing = "agent" if agent is None else "goal"
        raise EpisodeConfigError(f"cannot begin episode {ctx.episode_id + 1}: {missing} is not initialized")

    # A fresh context only has an outcome if an earlier episode finished.
    last = ctx.outcome if ctx.phase is EpisodePhase.TERMINATED else ctx.last_outcome
    new_ctx = EpisodeContext(
        max_steps=ctx.max_steps,
        episode_id=ctx.episode_id + 1,
        phase=EpisodePhase.RUNNING,
        last_outcome=last,
    )
    return Transition(context=new_ctx, agent=agent)


def step_episode(
    ctx: EpisodeContext,
    agent: AgentState,
    action: Any,
    dt: float,
    *,
    motion: MotionConfig | None = None,
    rewards: RewardComputer | None = None,
) -> Transition:
    """Apply one action and the per-step time penalty; time out at max_steps."""
    if not ctx.running:
        return _rejected(ctx, agent)
    rewards = rewards or RewardComputer()

    new_agent = apply_action(action, agent, dt, motion)
    comp = rewards.step(ctx.max_steps)
    new_ctx, r = _credit(ctx, comp)
    new_ctx = replace(new_ctx, step_count=ctx.step_count + 1)
    if new_ctx.step_count >= new_ctx.max_steps:
        new_ctx = replace(new_ctx, phase=EpisodePhase.TERMINATED, outcome=Outcome.FAILURE)
    return Transition(context=new_ctx, agent=new_agent, reward=r, components=comp)


def goal_contact(ctx: EpisodeContext, *, rewards: RewardComputer | None = None) -> Transition:
    if not ctx.running:
        return _rejected(ctx, None)
    rewards = rewards or RewardComputer()

    comp = rewards.goal_reached()
    new_ctx, r = _credit(ctx, comp)
    new_ctx = replace(new_ctx, phase=EpisodePhase.TERMINATED, outcome=Outcome.SUCCESS)
    return Transition(context=new_ctx, agent=None, reward=r, components=comp)


def obstacle_contact(
    ctx: EpisodeContext,
    phase: ContactPhase,
    tick_duration: float = 0.0,
    *,
    rewards: RewardComputer | None = None,
) -> Transition:
    """Score a wall contact. Never ends the episode."""
    if not ctx.running:
        return _rejected(ctx, None)
    rewards = rewards or RewardComputer()

    comp = rewards.obstacle_contact(phase, tick_duration)
    new_ctx, r = _credit(ctx, comp)
    new_ctx = replace(new_ctx, in_obstacle_contact=phase is not ContactPhase.EXIT)
    return Transition(context=new_ctx, agent=None, reward=r, components=comp)


def abandon_episode(ctx: EpisodeContext) -> Transition:
    """End a running episode early as a failure. No reward is applied."""
    if not ctx.running:
        return _rejected(ctx, None)
    return Transition(context=replace(ctx, phase=EpisodePhase.TERMINATED, outcome=Outcome.FAILURE), agent=None)


class EpisodeObserver:
    """Receives episode signals. Override what you need.

    Observers must treat the values they receive as read-only.
    """

    def episode_began(self, ctx: EpisodeContext, agent: AgentState, goal: GoalState) -> None:
        pass

    def episode_ended(self, ctx: EpisodeContext) -> None:
        pass

    def obstacle_contact(self, ctx: EpisodeContext, phase: ContactPhase) -> None:
        pass


class Episode:
    """Stateful episode driver for a single agent.

    Usage:
        episode = Episode(max_steps=500, rng=np.random.default_rng(0))
        obs = episode.begin()
        while episode.running:
            episode.step(policy(obs), dt)
            ... feed goal_contact() / obstacle_contact() from physics ...
            obs = episode.observe()
        episode.restart()
    """

    def __init__(
        self,
        max_steps: int,
        *,
        rng: np.random.Generator | None = None,
        motion: MotionConfig | None = None,
        arena: ArenaConfig | None = None,
        rewards: RewardComputer | None = None,
        observers: list[EpisodeObserver] | None = None,
    ):
        if max_steps <= 0:
            raise ValueError(f"max_steps must be > 0, got {max_steps}")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.motion = motion or MotionConfig()
        self.arena = arena or ArenaConfig()
        self.rewards = rewards or RewardComputer()
        self.observers: list[EpisodeObserver] = list(observers or [])

        self.context = EpisodeContext(max_steps=int(max_steps))
        self.agent: AgentState | None = None
        self.goal: GoalState | None = None
        self.tick_components = RewardComponents()
        self._ended_this_tick = False

    @property
    def running(self) -> bool:
        return self.context.running

    @property
    def outcome(self) -> Outcome:
        return self.context.outcome

    def add_observer(self, observer: EpisodeObserver) -> None:
        self.observers.append(observer)

    def begin(self, agent: AgentState | None = None, goal: GoalState | None = None) -> np.ndarray:
        """Start a new episode. Spawns agent and goal unless both are given.

        A still-running episode is ended first as a failure, so observers see
        its ``episode_ended`` and the new episode's ``last_outcome`` is FAILURE.
        """
        if agent is None and goal is None:
            agent, goal = reset_spawn(self.rng, self.arena.origin, self.arena)

        ending: Transition | None = None
        if self.context.running:
            logger.warning(
                f"begin() called while episode {self.context.episode_id} is running; ending it as a failure"
            )
            ending = abandon_episode(self.context)
        t = begin_episode(ending.context if ending else self.context, agent, goal)
        assert agent is not None and goal is not None
        if ending is not None:
            self._commit(ending)
        self.context = t.context
        self.agent = agent
        self.goal = goal
        self.tick_components = RewardComponents()
        self._ended_this_tick = False
        logger.debug(
            f"episode {self.context.episode_id} began: goal=({goal.x:.3f}, {goal.z:.3f}) "
            f"last_outcome={self.context.last_outcome.value}"
        )
        for obs in self.observers:
            obs.episode_began(self.context, agent, goal)
        return self.observe()

    def restart(self) -> np.ndarray:
        return self.begin()

    def observe(self) -> np.ndarray:
        if self.agent is None or self.goal is None:
            raise EpisodeConfigError("no episode has been started; call begin() first")
        return encode_observation(self.agent, self.goal)

    def step(self, action: Any, dt: float) -> float:
        """Apply one action. Returns the reward contributed by this call."""
        if dt <= 0.0:
            raise ValueError(f"dt must be > 0, got {dt}")
        self._ended_this_tick = False
        if not self._accepting("step"):
            return 0.0
        assert self.agent is not None
        # Contact events that follow in the same tick add to this breakdown.
        self.tick_components = RewardComponents()
        t = step_episode(self.context, self.agent, action, dt, motion=self.motion, rewards=self.rewards)
        self.agent = t.agent
        return self._commit(t)

    def goal_contact(self) -> float:
        if not self._accepting("goal_contact"):
            return 0.0
        return self._commit(goal_contact(self.context, rewards=self.rewards))

    def obstacle_contact(self, phase: ContactPhase, tick_duration: float = 0.0) -> float:
        if not self._accepting("obstacle_contact"):
            return 0.0
        t = obstacle_contact(self.context, phase, tick_duration, rewards=self.rewards)
        for obs in self.observers:
            obs.obstacle_contact(t.context, phase)
        return self._commit(t)

    def move_agent(self, agent: AgentState) -> None:
        """Physics correction of the agent pose (e.g. pushed back by a wall).

        Also allowed on the tick that ended the episode, so the final pose
        respects the walls.
        """
        if not self._ended_this_tick and not self._accepting("move_agent"):
            return
        self.agent = agent

    def _accepting(self, call: str) -> bool:
        if self.context.running:
            return True
        logger.warning(
            f"{call}() ignored: episode {self.context.episode_id} is {self.context.phase.value}, not running"
        )
        return False

    def _commit(self, t: Transition) -> float:
        was_running = self.context.running
        self.context = t.context
        self.tick_components = self.tick_components + t.components
        if was_running and self.context.terminated:
            self._ended_this_tick = True
            logger.debug(
                f"episode {self.context.episode_id} ended: outcome={self.context.outcome.value} "
                f"steps={self.context.step_count} reward={self.context.cumulative_reward:.4f}"
            )
            for obs in self.observers:
                obs.episode_ended(self.context)
        return t.reward
