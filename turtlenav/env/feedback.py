"""Cosmetic episode feedback.

Flashes the ground green after a successful episode and red otherwise, then
fades back to the ground's base color. Tints the agent red while it touches a
wall. Nothing here feeds back into agent, goal or episode state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..sim.state import AgentState, ContactPhase, EpisodeContext, GoalState, Outcome
from .episode import EpisodeObserver

logger = logging.getLogger("turtlenav.feedback")

Color = tuple[float, float, float]

GREEN: Color = (0.0, 1.0, 0.0)
RED: Color = (1.0, 0.0, 0.0)
BLUE: Color = (0.0, 0.0, 1.0)
GROUND: Color = (0.5, 0.5, 0.5)

FLASH_SECONDS = 3.0


def lerp_color(a: Color, b: Color, t: float) -> Color:
    t = min(max(t, 0.0), 1.0)
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


@dataclass
class FlashEffect:
    """A timed fade from `color` to `base`, advanced by the caller's tick."""

    episode_id: int
    color: Color
    base: Color
    duration: float = FLASH_SECONDS
    elapsed: float = 0.0
    cancelled: bool = False

    @property
    def done(self) -> bool:
        return self.cancelled or self.elapsed >= self.duration

    def cancel(self) -> None:
        self.cancelled = True

    def current(self) -> Color:
        if self.duration <= 0.0:
            return self.base
        return lerp_color(self.color, self.base, self.elapsed / self.duration)

    def tick(self, dt: float) -> Color:
        if not self.done:
            self.elapsed += dt
        return self.current()


class FeedbackController(EpisodeObserver):
    """Tracks ground and agent colors from episode signals."""

    def __init__(self, ground_color: Color = GROUND, flash_seconds: float = FLASH_SECONDS):
        self.base_ground = ground_color
        self.flash_seconds = float(flash_seconds)
        self.ground_color: Color = ground_color
        self.agent_color: Color = BLUE
        self.flash: FlashEffect | None = None

    def episode_began(self, ctx: EpisodeContext, agent: AgentState, goal: GoalState) -> None:
        if self.flash is not None and not self.flash.done:
            logger.debug(f"cancelling flash from episode {self.flash.episode_id}")
            self.flash.cancel()
        color = GREEN if ctx.last_outcome is Outcome.SUCCESS else RED
        self.flash = FlashEffect(
            episode_id=ctx.episode_id,
            color=color,
            base=self.base_ground,
            duration=self.flash_seconds,
        )
        self.ground_color = color
        self.agent_color = BLUE

    def obstacle_contact(self, ctx: EpisodeContext, phase: ContactPhase) -> None:
        if phase is ContactPhase.ENTER:
            self.agent_color = RED
        elif phase is ContactPhase.EXIT:
            self.agent_color = BLUE

    def tick(self, dt: float) -> None:
        if self.flash is None or self.flash.cancelled:
            return
        self.ground_color = self.flash.tick(dt)
