"""Kinematic stand-in for the physics engine.

The episode core only consumes contact events; this arena produces them for a
flat square floor bounded by four walls and a single trigger-style goal.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import numpy as np

from ..config import ArenaConfig
from .state import AgentState, ContactPhase, GoalState


@dataclass
class Contacts:
    """Contacts produced by one physics tick."""

    agent: AgentState  # pose after wall clamping
    goal: bool = False
    obstacle: ContactPhase | None = None
    tick_duration: float = 0.0


@dataclass
class ArenaWorld:
    config: ArenaConfig = field(default_factory=ArenaConfig)
    touching_wall: bool = False

    @property
    def limit(self) -> float:
        return self.config.half_extent - self.config.agent_radius

    def reset(self) -> None:
        self.touching_wall = False

    def clamp(self, agent: AgentState) -> tuple[AgentState, bool]:
        """Push the agent back inside the walls. Returns (pose, touching)."""
        lim = self.limit
        x = float(np.clip(agent.x, -lim, lim))
        z = float(np.clip(agent.z, -lim, lim))
        touching = abs(x) >= lim - 1e-9 or abs(z) >= lim - 1e-9
        if x != agent.x or z != agent.z:
            agent = replace(agent, x=x, z=z)
        return agent, touching

    def resolve(self, agent: AgentState, goal: GoalState, dt: float) -> Contacts:
        agent, touching = self.clamp(agent)

        phase: ContactPhase | None = None
        if touching and not self.touching_wall:
            phase = ContactPhase.ENTER
        elif touching:
            phase = ContactPhase.STAY
        elif self.touching_wall:
            phase = ContactPhase.EXIT
        self.touching_wall = touching

        reached = goal.planar_distance(agent) <= self.config.goal_radius
        return Contacts(agent=agent, goal=reached, obstacle=phase, tick_duration=float(dt))
