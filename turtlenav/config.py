from __future__ import annotations

from dataclasses import dataclass, field

# Fixed heights of the two bodies above the arena floor.
AGENT_ELEVATION = 0.15
GOAL_ELEVATION = 0.3

# Observations divide positions by this extent (a +-5 unit arena maps to ~[-1, 1]).
OBS_POSITION_SCALE = 5.0


@dataclass(frozen=True)
class MotionConfig:
    move_speed: float = 1.5  # units / s
    rotation_speed: float = 180.0  # degrees / s


@dataclass(frozen=True)
class ArenaConfig:
    half_extent: float = 5.0  # walls sit at +-half_extent on x and z
    agent_radius: float = 0.25
    goal_radius: float = 0.5  # planar distance that counts as touching the goal
    min_distance: float = 1.0
    max_distance: float = 2.5
    origin: tuple[float, float] = (0.0, 0.0)

    def __post_init__(self) -> None:
        if self.min_distance < 0.0 or self.max_distance < 0.0:
            raise ValueError(
                f"goal spawn distances must be non-negative, got [{self.min_distance}, {self.max_distance}]"
            )
        if self.min_distance > self.max_distance:
            raise ValueError(f"min_distance ({self.min_distance}) must be <= max_distance ({self.max_distance})")
        if self.agent_radius >= self.half_extent:
            raise ValueError(f"agent_radius ({self.agent_radius}) must be smaller than half_extent ({self.half_extent})")


@dataclass(frozen=True)
class EnvConfig:
    motion: MotionConfig = field(default_factory=MotionConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    max_steps: int = 1000
    dt: float = 0.02  # one physics tick per decision step
    seed: int | None = None
    # Begin the next episode inside step() once the current one terminates.
    auto_reset: bool = False

    def __post_init__(self) -> None:
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be > 0, got {self.max_steps}")
        if self.dt <= 0.0:
            raise ValueError(f"dt must be > 0, got {self.dt}")
