from __future__ import annotations

import numpy as np

from ..config import ArenaConfig
from ..sim.motion import forward_vector
from ..sim.state import AgentState, GoalState


def sample_goal(
    rng: np.random.Generator,
    origin: tuple[float, float],
    *,
    min_distance: float = 1.0,
    max_distance: float = 2.5,
) -> tuple[GoalState, float, float]:
    """Place a goal at a uniform angle and distance from `origin`.

    Returns (goal, angle_deg, distance) so callers can inspect the draw.
    """
    angle = float(rng.uniform(0.0, 360.0))
    distance = float(rng.uniform(min_distance, max_distance))
    dx, dz = forward_vector(angle)
    ox, oz = origin
    return GoalState(x=ox + dx * distance, z=oz + dz * distance), angle, distance


def reset_spawn(
    rng: np.random.Generator,
    origin: tuple[float, float] | None = None,
    arena: ArenaConfig | None = None,
) -> tuple[AgentState, GoalState]:
    """Agent back to the origin facing heading 0, goal somewhere in the spawn band."""
    arena = arena or ArenaConfig()
    ox, oz = origin if origin is not None else arena.origin
    agent = AgentState(x=float(ox), z=float(oz), heading=0.0)
    goal, _, _ = sample_goal(
        rng,
        (agent.x, agent.z),
        min_distance=arena.min_distance,
        max_distance=arena.max_distance,
    )
    return agent, goal
