"""Observation encoding.

The layout is the contract with the policy network; changing its length or
order breaks every trained checkpoint.

    [0] goal_x  / 5
    [1] goal_z  / 5
    [2] agent_x / 5
    [3] agent_z / 5
    [4] heading / 360 * 2 - 1   in [-1, 1)
"""

from __future__ import annotations

import numpy as np

from ..config import OBS_POSITION_SCALE
from ..sim.motion import wrap_heading
from ..sim.state import AgentState, GoalState

OBS_DIM = 5

OBS_FIELDS = ("goal_x", "goal_z", "agent_x", "agent_z", "heading")

_HEADING_MAX = np.nextafter(np.float32(1.0), np.float32(0.0))


def encode_heading(heading: float) -> float:
    return (wrap_heading(heading) / 360.0) * 2.0 - 1.0


def encode_observation(agent: AgentState, goal: GoalState) -> np.ndarray:
    obs = np.array(
        [
            goal.x / OBS_POSITION_SCALE,
            goal.z / OBS_POSITION_SCALE,
            agent.x / OBS_POSITION_SCALE,
            agent.z / OBS_POSITION_SCALE,
            encode_heading(agent.heading),
        ],
        dtype=np.float32,
    )
    # Headings just under 360 round up to 1.0 in float32.
    obs[4] = min(obs[4], _HEADING_MAX)
    return obs
