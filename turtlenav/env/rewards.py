"""Reward shaping for the turtle navigation task.

Design:
- RewardWeights: the shaping constants, one field per source
- RewardComponents: per-source breakdown of a single step or event
- RewardComputer: stateless scoring of steps and contact events

Sources never interact and are summed without clamping.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..sim.state import ContactPhase


@dataclass(frozen=True)
class RewardWeights:
    """Shaping constants.

    The time penalty is a per-episode budget divided by max_steps, so a full
    unsuccessful episode always costs exactly `time_budget` whatever its
    length. The wall-stay penalty is a rate multiplied by the physics tick,
    so it scales with the tick length rather than wall-clock seconds.
    """

    time_budget: float = -0.2  # Summed over a full episode
    goal: float = 1.0  # Reaching the goal, ends the episode
    collision_enter: float = -0.05  # First tick touching a wall
    collision_stay_rate: float = -0.01  # Times tick_duration, every tick still touching


@dataclass
class RewardComponents:
    """Breakdown of reward into sources for debugging/analysis."""

    time: float = 0.0
    goal: float = 0.0
    collision_enter: float = 0.0
    collision_stay: float = 0.0

    def total(self) -> float:
        return self.time + self.goal + self.collision_enter + self.collision_stay

    def to_dict(self) -> dict[str, float]:
        return {
            "time": self.time,
            "goal": self.goal,
            "collision_enter": self.collision_enter,
            "collision_stay": self.collision_stay,
        }

    def __add__(self, other: RewardComponents) -> RewardComponents:
        return RewardComponents(
            time=self.time + other.time,
            goal=self.goal + other.goal,
            collision_enter=self.collision_enter + other.collision_enter,
            collision_stay=self.collision_stay + other.collision_stay,
        )


class RewardComputer:
    """Stateless reward computation. Subclass or swap weights for curricula."""

    def __init__(self, weights: RewardWeights | None = None):
        self.weights = weights or RewardWeights()

    def step(self, max_steps: int) -> RewardComponents:
        if max_steps <= 0:
            raise ValueError(f"max_steps must be > 0, got {max_steps}")
        return RewardComponents(time=self.weights.time_budget / max_steps)

    def goal_reached(self) -> RewardComponents:
        return RewardComponents(goal=self.weights.goal)

    def obstacle_contact(self, phase: ContactPhase, tick_duration: float) -> RewardComponents:
        if phase is ContactPhase.ENTER:
            return RewardComponents(collision_enter=self.weights.collision_enter)
        if phase is ContactPhase.STAY:
            return RewardComponents(collision_stay=self.weights.collision_stay_rate * tick_duration)
        return RewardComponents()
