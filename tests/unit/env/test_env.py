"""TurtleNavEnv facade: spaces, step contract and event emission."""

import logging

import numpy as np
import pytest

from turtlenav.config import ArenaConfig
from turtlenav.sim.state import AgentState, GoalState


@pytest.fixture
def env(make_env):
    env = make_env(max_steps=100)
    env.reset(seed=0)
    yield env


def _place(env, agent: AgentState, goal: GoalState) -> None:
    """Start a fresh episode with fixed poses."""
    env.world.reset()
    env.episode.begin(agent, goal)


def test_spaces(env):
    assert env.observation_space.shape == (5,)
    assert env.action_space.n == 4
    obs, _ = env.reset(seed=1)
    assert env.observation_space.contains(obs)


def test_reset_returns_info(env):
    obs, info = env.reset(seed=3)
    assert obs.shape == (env.OBS_DIM,)
    assert info["step_count"] == 0
    assert info["cumulative_reward"] == 0.0
    assert info["events"] == []


def test_step_returns_gymnasium_tuple(env):
    obs, reward, terminated, truncated, info = env.step(0)
    assert obs.dtype == np.float32
    assert reward == pytest.approx(-0.2 / 100)
    assert terminated is False
    assert truncated is False
    assert info["step_count"] == 1
    assert "events" in info
    assert info["components"]["time"] == pytest.approx(-0.002)


def test_unknown_action_is_noop(env):
    before = env.episode.agent
    env.step(17)
    assert env.episode.agent == before


def test_step_before_reset_is_ignored(make_env, caplog):
    env = make_env()
    with caplog.at_level(logging.WARNING, logger="turtlenav.env"):
        obs, reward, terminated, truncated, info = env.step(1)
    np.testing.assert_array_equal(obs, np.zeros(env.OBS_DIM, dtype=np.float32))
    assert obs.dtype == np.float32
    assert reward == 0.0
    assert terminated is False
    assert truncated is False
    assert info["ignored"] is True
    assert info["step_count"] == 0
    assert "ignored" in caplog.text
    assert env.episode.agent is None

    # The env is still usable afterwards
    env.reset(seed=0)
    assert env.episode.running


def test_timeout_truncates(make_env):
    env = make_env(max_steps=5)
    env.reset(seed=0)
    for _ in range(4):
        _, _, terminated, truncated, _ = env.step(0)
        assert not (terminated or truncated)
    _, _, terminated, truncated, info = env.step(0)
    assert truncated and not terminated
    assert info["outcome"] == "failure"
    assert info["cumulative_reward"] == pytest.approx(-0.2)


def test_goal_contact_terminates(env):
    _place(env, AgentState(x=0.0, z=0.0), GoalState(x=0.0, z=0.5))
    _, reward, terminated, truncated, info = env.step(0)
    assert terminated and not truncated
    assert reward == pytest.approx(1.0 - 0.2 / 100)
    assert {"type": "goal"} in info["events"]
    assert info["outcome"] == "success"


def test_stepping_after_termination_is_ignored(env, caplog):
    _place(env, AgentState(x=0.0, z=0.0), GoalState(x=0.0, z=0.5))
    env.step(0)
    total = env.episode.context.cumulative_reward
    with caplog.at_level(logging.WARNING, logger="turtlenav.env"):
        obs, reward, terminated, truncated, info = env.step(1)
    assert reward == 0.0
    assert terminated
    assert info["ignored"] is True
    assert env.episode.context.cumulative_reward == total
    assert "ignored" in caplog.text


def test_wall_contact_emits_events_and_penalizes(make_env):
    env = make_env(max_steps=100, dt=0.1, arena=ArenaConfig(half_extent=5.0, agent_radius=0.25))
    env.reset(seed=0)
    _place(env, AgentState(x=0.0, z=4.7, heading=0.0), GoalState(x=-3.0, z=-3.0))

    _, r1, *_, info1 = env.step(1)
    assert info1["events"] == [{"type": "obstacle", "phase": "enter"}]
    assert r1 == pytest.approx(-0.002 - 0.05)
    assert env.episode.agent.z == pytest.approx(4.75)

    _, r2, *_, info2 = env.step(1)
    assert info2["events"] == [{"type": "obstacle", "phase": "stay"}]
    assert r2 == pytest.approx(-0.002 - 0.01 * 0.1)

    # Turn in place to face away from the wall, then drive off it
    while abs(((env.episode.agent.heading - 180.0) + 180.0) % 360.0 - 180.0) > 10.0:
        env.step(2)
    _, _, terminated, truncated, info3 = env.step(1)
    assert info3["events"] == [{"type": "obstacle", "phase": "exit"}]
    assert not (terminated or truncated)


def test_auto_reset_starts_next_episode(make_env):
    env = make_env(max_steps=3, auto_reset=True)
    env.reset(seed=0)
    for _ in range(2):
        env.step(0)
    obs, _, _, truncated, info = env.step(0)
    assert truncated
    assert "final_observation" in info
    assert info["final_info"]["outcome"] == "failure"
    assert info["final_info"]["step_count"] == 3
    assert "final_observation" not in info["final_info"]
    assert "final_info" not in info["final_info"]
    assert env.episode.running
    assert env.episode.context.episode_id == 2
    assert env.last_outcome == "failure"
    np.testing.assert_array_equal(obs, env.episode.observe())


def test_feedback_runs_alongside(env):
    assert env.feedback.flash is not None
    assert env.feedback.flash.episode_id == env.episode.context.episode_id
    env.step(0)
    assert env.feedback.flash.elapsed == pytest.approx(env.config.dt)


def test_heuristic_action_in_range(env):
    assert env.heuristic_action() in range(env.ACTION_DIM)
