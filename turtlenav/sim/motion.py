from __future__ import annotations

import math
from dataclasses import replace
from typing import Any

from ..actions import Action, parse_action
from ..config import MotionConfig
from .state import AgentState


def wrap_heading(degrees: float) -> float:
    """Wrap an angle into [0, 360)."""
    h = float(degrees) % 360.0
    # Tiny negative inputs round up to exactly 360.0 under float modulo.
    if h >= 360.0:
        h = 0.0
    return h


def forward_vector(heading: float) -> tuple[float, float]:
    """Unit (x, z) direction for a heading. 0 deg faces +z, positive turns clockwise."""
    rad = math.radians(heading)
    return math.sin(rad), math.cos(rad)


def apply_action(action: Any, agent: AgentState, dt: float, motion: MotionConfig | None = None) -> AgentState:
    """Return the agent pose after one tick of `action`.

    Unknown codes leave the pose untouched.
    """
    motion = motion or MotionConfig()
    act = parse_action(action)

    if act is Action.FORWARD:
        dx, dz = forward_vector(agent.heading)
        step = motion.move_speed * dt
        return replace(agent, x=agent.x + dx * step, z=agent.z + dz * step)
    if act is Action.TURN_LEFT:
        return replace(agent, heading=wrap_heading(agent.heading - motion.rotation_speed * dt))
    if act is Action.TURN_RIGHT:
        return replace(agent, heading=wrap_heading(agent.heading + motion.rotation_speed * dt))
    return agent
