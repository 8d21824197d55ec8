from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..config import AGENT_ELEVATION, GOAL_ELEVATION


class Outcome(Enum):
    NONE = "none"
    SUCCESS = "success"
    FAILURE = "failure"


class EpisodePhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class ContactPhase(Enum):
    ENTER = "enter"
    STAY = "stay"
    EXIT = "exit"


@dataclass(frozen=True)
class AgentState:
    x: float
    z: float
    heading: float = 0.0  # degrees, [0, 360)

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, AGENT_ELEVATION, self.z], dtype=np.float32)


@dataclass(frozen=True)
class GoalState:
    x: float
    z: float

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, GOAL_ELEVATION, self.z], dtype=np.float32)

    def planar_distance(self, agent: AgentState) -> float:
        return float(np.hypot(self.x - agent.x, self.z - agent.z))


@dataclass(frozen=True)
class EpisodeContext:
    """Per-episode counters.

    `last_outcome` only conditions cosmetic feedback at the start of the next
    episode; it never feeds into reward math.
    """

    max_steps: int
    episode_id: int = 0
    step_count: int = 0
    cumulative_reward: float = 0.0
    phase: EpisodePhase = EpisodePhase.IDLE
    outcome: Outcome = Outcome.NONE
    last_outcome: Outcome = Outcome.NONE
    in_obstacle_contact: bool = False

    @property
    def running(self) -> bool:
        return self.phase is EpisodePhase.RUNNING

    @property
    def terminated(self) -> bool:
        return self.phase is EpisodePhase.TERMINATED
