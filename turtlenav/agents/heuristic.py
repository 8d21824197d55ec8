from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

from ..actions import Action, manual_action
from ..config import OBS_POSITION_SCALE


def _wrap_180(angle: float) -> float:
    return (angle + 180.0) % 360.0 - 180.0


class ManualController:
    """Keyboard stand-in for testing: pressed key names -> action code.

    Recognised keys are "up", "left" and "right"; anything else is ignored.
    """

    def act(self, pressed: Iterable[str]) -> Action:
        keys = {k.lower() for k in pressed}
        return manual_action(up="up" in keys, left="left" in keys, right="right" in keys)


class GreedyPolicy:
    """
    Baseline controller that reads only the observation vector.

    Behavior:
    - Turn toward the goal until roughly facing it.
    - Drive forward once within `heading_tolerance` degrees.
    """

    def __init__(self, heading_tolerance: float = 5.0):
        self.heading_tolerance = float(heading_tolerance)

    def act(self, obs: np.ndarray) -> Action:
        goal_x, goal_z, agent_x, agent_z, heading_enc = (float(v) for v in obs[:5])
        dx = (goal_x - agent_x) * OBS_POSITION_SCALE
        dz = (goal_z - agent_z) * OBS_POSITION_SCALE
        if dx == 0.0 and dz == 0.0:
            return Action.NOOP

        heading = (heading_enc + 1.0) * 0.5 * 360.0
        desired = math.degrees(math.atan2(dx, dz))
        diff = _wrap_180(desired - heading)

        if abs(diff) <= self.heading_tolerance:
            return Action.FORWARD
        return Action.TURN_LEFT if diff < 0.0 else Action.TURN_RIGHT
