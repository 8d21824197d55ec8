"""Cosmetic feedback: flash selection, fading and cancellation."""

import pytest

from turtlenav.env.feedback import BLUE, GREEN, GROUND, RED, FeedbackController, FlashEffect, lerp_color
from turtlenav.sim.state import AgentState, ContactPhase, EpisodeContext, EpisodePhase, GoalState, Outcome

AGENT = AgentState(x=0.0, z=0.0)
GOAL = GoalState(x=0.0, z=2.0)


def _ctx(episode_id: int, last: Outcome) -> EpisodeContext:
    return EpisodeContext(max_steps=10, episode_id=episode_id, phase=EpisodePhase.RUNNING, last_outcome=last)


def test_success_flashes_green_failure_red():
    fb = FeedbackController()
    fb.episode_began(_ctx(2, Outcome.SUCCESS), AGENT, GOAL)
    assert fb.ground_color == GREEN
    fb.episode_began(_ctx(3, Outcome.FAILURE), AGENT, GOAL)
    assert fb.ground_color == RED


def test_first_episode_flashes_red():
    fb = FeedbackController()
    fb.episode_began(_ctx(1, Outcome.NONE), AGENT, GOAL)
    assert fb.ground_color == RED


def test_flash_fades_back_to_ground():
    fb = FeedbackController(flash_seconds=1.0)
    fb.episode_began(_ctx(2, Outcome.SUCCESS), AGENT, GOAL)
    fb.tick(0.5)
    assert fb.ground_color == pytest.approx(lerp_color(GREEN, GROUND, 0.5))
    fb.tick(0.6)
    assert fb.ground_color == pytest.approx(GROUND)
    assert fb.flash.done


def test_new_episode_cancels_inflight_flash():
    fb = FeedbackController(flash_seconds=3.0)
    fb.episode_began(_ctx(2, Outcome.SUCCESS), AGENT, GOAL)
    first = fb.flash
    fb.tick(0.1)
    fb.episode_began(_ctx(3, Outcome.FAILURE), AGENT, GOAL)
    assert first.cancelled
    assert fb.flash is not first
    assert fb.flash.episode_id == 3
    # The cancelled flash no longer advances
    elapsed = first.elapsed
    fb.tick(0.1)
    assert first.elapsed == elapsed


def test_agent_tint_follows_wall_contact():
    fb = FeedbackController()
    ctx = _ctx(1, Outcome.NONE)
    fb.obstacle_contact(ctx, ContactPhase.ENTER)
    assert fb.agent_color == RED
    fb.obstacle_contact(ctx, ContactPhase.STAY)
    assert fb.agent_color == RED
    fb.obstacle_contact(ctx, ContactPhase.EXIT)
    assert fb.agent_color == BLUE


def test_episode_start_resets_agent_tint():
    fb = FeedbackController()
    fb.obstacle_contact(_ctx(1, Outcome.NONE), ContactPhase.ENTER)
    fb.episode_began(_ctx(2, Outcome.FAILURE), AGENT, GOAL)
    assert fb.agent_color == BLUE


def test_zero_duration_flash_is_base():
    flash = FlashEffect(episode_id=1, color=RED, base=GROUND, duration=0.0)
    assert flash.current() == GROUND
    assert flash.done
