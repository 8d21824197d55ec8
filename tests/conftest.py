import numpy as np
import pytest

from turtlenav.config import EnvConfig
from turtlenav.env.env import TurtleNavEnv
from turtlenav.env.episode import Episode
from turtlenav.sim.state import AgentState, GoalState


@pytest.fixture
def make_episode():
    def _make(max_steps: int = 50, seed: int = 0, **kwargs) -> Episode:
        return Episode(max_steps, rng=np.random.default_rng(seed), **kwargs)

    return _make


@pytest.fixture
def running_episode(make_episode):
    """Episode with the agent at the origin and the goal 2 units straight ahead."""
    episode = make_episode(max_steps=50)
    episode.begin(AgentState(x=0.0, z=0.0, heading=0.0), GoalState(x=0.0, z=2.0))
    return episode


@pytest.fixture
def make_env():
    def _make(**kwargs) -> TurtleNavEnv:
        kwargs.setdefault("seed", 0)
        return TurtleNavEnv(EnvConfig(**kwargs))

    return _make
