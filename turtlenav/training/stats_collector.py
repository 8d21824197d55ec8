"""Episode statistics collection.

The episode driver keeps no counters of its own; this observer accumulates
them from episode signals and produces an EpisodeRecord per finished episode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..env.episode import EpisodeObserver
from ..sim.state import AgentState, ContactPhase, EpisodeContext, GoalState, Outcome


@dataclass
class EpisodeRecord:
    """Summary of one finished episode."""

    episode_id: int
    outcome: str  # "success" | "failure"
    steps: int
    cumulative_reward: float
    wall_contacts: int = 0
    goal_distance: float = 0.0  # Spawn distance between agent and goal

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for JSON storage."""
        return {
            "episode_id": self.episode_id,
            "outcome": self.outcome,
            "steps": self.steps,
            "cumulative_reward": self.cumulative_reward,
            "wall_contacts": self.wall_contacts,
            "goal_distance": self.goal_distance,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> EpisodeRecord:
        """Deserialize from dict."""
        return cls(
            episode_id=d["episode_id"],
            outcome=d["outcome"],
            steps=d["steps"],
            cumulative_reward=d["cumulative_reward"],
            wall_contacts=d.get("wall_contacts", 0),
            goal_distance=d.get("goal_distance", 0.0),
        )


class EpisodeStatsCollector(EpisodeObserver):
    """Counts episodes, successes and failures.

    Keep it lightweight, it runs on every episode boundary of a training loop.
    """

    def __init__(self) -> None:
        self.records: list[EpisodeRecord] = []
        self.episodes_started = 0
        self._wall_contacts = 0
        self._goal_distance = 0.0

    @property
    def episodes_finished(self) -> int:
        return len(self.records)

    @property
    def successes(self) -> int:
        return sum(1 for r in self.records if r.outcome == Outcome.SUCCESS.value)

    @property
    def failures(self) -> int:
        return sum(1 for r in self.records if r.outcome == Outcome.FAILURE.value)

    def episode_began(self, ctx: EpisodeContext, agent: AgentState, goal: GoalState) -> None:
        self.episodes_started += 1
        self._wall_contacts = 0
        self._goal_distance = goal.planar_distance(agent)

    def obstacle_contact(self, ctx: EpisodeContext, phase: ContactPhase) -> None:
        if phase is ContactPhase.ENTER:
            self._wall_contacts += 1

    def episode_ended(self, ctx: EpisodeContext) -> None:
        self.records.append(
            EpisodeRecord(
                episode_id=ctx.episode_id,
                outcome=ctx.outcome.value,
                steps=ctx.step_count,
                cumulative_reward=ctx.cumulative_reward,
                wall_contacts=self._wall_contacts,
                goal_distance=self._goal_distance,
            )
        )

    def summary(self) -> dict[str, float]:
        n = self.episodes_finished
        if n == 0:
            return {
                "episodes": 0.0,
                "success_rate": 0.0,
                "mean_reward": 0.0,
                "mean_steps": 0.0,
                "wall_contacts": 0.0,
            }
        return {
            "episodes": float(n),
            "success_rate": self.successes / n,
            "mean_reward": sum(r.cumulative_reward for r in self.records) / n,
            "mean_steps": sum(r.steps for r in self.records) / n,
            "wall_contacts": float(sum(r.wall_contacts for r in self.records)),
        }
